"""Reference data snapshot consumed by the wizard engine."""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Protocol

from zevbill.schemas.building import BuildingResponse
from zevbill.schemas.custom_item import CustomLineItemResponse
from zevbill.schemas.meter import MeterResponse
from zevbill.schemas.shared_meter import SharedMeterConfigResponse
from zevbill.schemas.user import AdministratorResponse, TenantResponse

logger = logging.getLogger(__name__)


class ReferenceSource(Protocol):
    """Where the wizard reads buildings, tenants, meters and billing items from."""

    async def fetch_buildings(self) -> list[BuildingResponse]: ...

    async def fetch_tenants(self) -> list[TenantResponse]: ...

    async def fetch_meters(self) -> list[MeterResponse]: ...

    async def fetch_shared_meters(self) -> list[SharedMeterConfigResponse]: ...

    async def fetch_custom_items(self) -> list[CustomLineItemResponse]: ...

    async def fetch_administrators(self) -> list[AdministratorResponse]: ...


@dataclass(frozen=True)
class ReferenceData:
    """Immutable view of every reference collection, indexed by id."""

    buildings: tuple[BuildingResponse, ...] = ()
    tenants: tuple[TenantResponse, ...] = ()
    meters: tuple[MeterResponse, ...] = ()
    shared_meters: tuple[SharedMeterConfigResponse, ...] = ()
    custom_items: tuple[CustomLineItemResponse, ...] = ()

    buildings_by_id: dict[int, BuildingResponse] = field(init=False, repr=False, compare=False)
    tenants_by_id: dict[int, TenantResponse] = field(init=False, repr=False, compare=False)
    shared_meters_by_id: dict[int, SharedMeterConfigResponse] = field(
        init=False, repr=False, compare=False
    )
    custom_items_by_id: dict[int, CustomLineItemResponse] = field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "buildings_by_id", {b.id: b for b in self.buildings})
        object.__setattr__(self, "tenants_by_id", {t.id: t for t in self.tenants})
        object.__setattr__(self, "shared_meters_by_id", {m.id: m for m in self.shared_meters})
        object.__setattr__(self, "custom_items_by_id", {i.id: i for i in self.custom_items})

    def get_building(self, building_id: int) -> BuildingResponse | None:
        return self.buildings_by_id.get(building_id)


async def load_reference_data(source: ReferenceSource) -> ReferenceData:
    """Fetch all reference collections concurrently and join them.

    Inactive custom items are dropped here; they can never be billed.
    """
    buildings, tenants, meters, shared_meters, custom_items = await asyncio.gather(
        source.fetch_buildings(),
        source.fetch_tenants(),
        source.fetch_meters(),
        source.fetch_shared_meters(),
        source.fetch_custom_items(),
    )
    data = ReferenceData(
        buildings=tuple(buildings),
        tenants=tuple(tenants),
        meters=tuple(meters),
        shared_meters=tuple(shared_meters),
        custom_items=tuple(item for item in custom_items if item.is_active),
    )
    logger.info(
        "Loaded reference data: %d buildings, %d tenants, %d meters, "
        "%d shared meters, %d custom items",
        len(data.buildings),
        len(data.tenants),
        len(data.meters),
        len(data.shared_meters),
        len(data.custom_items),
    )
    return data
