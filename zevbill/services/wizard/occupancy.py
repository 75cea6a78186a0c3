"""Apartment occupancy mapping for the selected buildings."""

import re
from collections.abc import Iterable
from dataclasses import dataclass
from typing import NamedTuple

from zevbill.models.enums import APARTMENT_METER
from zevbill.schemas.meter import MeterResponse
from zevbill.schemas.user import TenantResponse
from zevbill.services.wizard.groups import expand
from zevbill.services.wizard.reference import ReferenceData

_NON_DIGITS = re.compile(r"[^0-9]")


class SelectionKey(NamedTuple):
    """Identifies one apartment across all buildings."""

    building_id: int
    apartment_unit: str


@dataclass(frozen=True)
class ApartmentRecord:
    """An apartment unit of a physical building and whoever lives there."""

    building_id: int
    apartment_unit: str
    occupant: TenantResponse | None
    meter_ref: int
    has_meter: bool = True

    @property
    def key(self) -> SelectionKey:
        return SelectionKey(self.building_id, self.apartment_unit)

    @property
    def has_active_occupant(self) -> bool:
        return self.occupant is not None and self.occupant.is_active


OccupancyMap = dict[int, list[ApartmentRecord]]


def unit_number(apartment_unit: str) -> int:
    """Numeric part of an apartment label, used for ordering ("A 12" -> 12)."""
    digits = _NON_DIGITS.sub("", apartment_unit)
    return int(digits) if digits else 0


def _is_apartment_meter(meter: MeterResponse, building_id: int) -> bool:
    return (
        meter.building_id == building_id
        and bool(meter.apartment_unit)
        and meter.meter_type == APARTMENT_METER
        and meter.is_active
    )


def resolve_occupant(
    reference: ReferenceData,
    meter: MeterResponse,
    building_id: int,
) -> TenantResponse | None:
    """Find the tenant of a metered apartment.

    A direct meter assignment wins; otherwise the first tenant registered
    for the same building and apartment label.
    """
    if meter.user_id is not None:
        tenant = reference.tenants_by_id.get(meter.user_id)
        if tenant is not None:
            return tenant
    return next(
        (
            t
            for t in reference.tenants
            if t.building_id == building_id and t.apartment_unit == meter.apartment_unit
        ),
        None,
    )


def apartments_for_building(reference: ReferenceData, building_id: int) -> list[ApartmentRecord]:
    """Ordered apartments of one physical building."""
    seen: set[str] = set()
    apartments: list[ApartmentRecord] = []
    for meter in reference.meters:
        if not _is_apartment_meter(meter, building_id):
            continue
        unit = meter.apartment_unit or ""
        if unit in seen:
            continue
        seen.add(unit)
        apartments.append(
            ApartmentRecord(
                building_id=building_id,
                apartment_unit=unit,
                occupant=resolve_occupant(reference, meter, building_id),
                meter_ref=meter.id,
            )
        )
    apartments.sort(key=lambda a: unit_number(a.apartment_unit))
    return apartments


def build_occupancy(reference: ReferenceData, building_ids: Iterable[int]) -> OccupancyMap:
    """Map every physical building behind the selection to its apartments.

    Complexes are expanded to their members, so keys are always physical
    building ids. Unknown building ids are ignored.
    """
    occupancy: OccupancyMap = {}
    for building_id in building_ids:
        building = reference.get_building(building_id)
        if building is None:
            continue
        for physical_id in expand(building):
            if physical_id not in occupancy:
                occupancy[physical_id] = apartments_for_building(reference, physical_id)
    return occupancy


def index_apartments(occupancy: OccupancyMap) -> dict[SelectionKey, ApartmentRecord]:
    """Flatten an occupancy map into a lookup by selection key."""
    return {apt.key: apt for apartments in occupancy.values() for apt in apartments}
