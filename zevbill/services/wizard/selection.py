"""Mutable selection of buildings, apartments and billing items."""

import logging
from collections.abc import Iterable
from enum import Enum

from zevbill.schemas.billing import ApartmentSelection
from zevbill.schemas.building import BuildingResponse
from zevbill.schemas.custom_item import CustomLineItemResponse
from zevbill.schemas.shared_meter import SharedMeterConfigResponse
from zevbill.services.wizard.errors import BuildingMixError, UnknownReferenceError
from zevbill.services.wizard.groups import expand, would_conflict
from zevbill.services.wizard.occupancy import (
    OccupancyMap,
    SelectionKey,
    build_occupancy,
    index_apartments,
)
from zevbill.services.wizard.reference import ReferenceData

logger = logging.getLogger(__name__)


class SelectionMode(str, Enum):
    """Billing mode implied by the kind of buildings selected."""

    STANDALONE = "standalone"  # ZEV: single buildings
    COMPLEX = "complex"  # vZEV: complexes of several buildings


class SelectionState:
    """Current wizard selection over one reference data snapshot.

    Only ids live here. Everything derived from them (mode, occupancy,
    tenant ids) is recomputed from the snapshot on every call.
    """

    def __init__(self, reference: ReferenceData) -> None:
        self.reference = reference
        self.selected_building_ids: set[int] = set()
        self.selected_apartments: set[SelectionKey] = set()
        self.selected_shared_meter_ids: set[int] = set()
        self.selected_custom_item_ids: set[int] = set()
        self.step = 1

    def clear(self) -> None:
        """Drop every selection and return to the first step."""
        self.selected_building_ids.clear()
        self.selected_apartments.clear()
        self.selected_shared_meter_ids.clear()
        self.selected_custom_item_ids.clear()
        self.step = 1

    # Derived state

    def selected_buildings(self) -> list[BuildingResponse]:
        return [
            self.reference.buildings_by_id[building_id]
            for building_id in sorted(self.selected_building_ids)
        ]

    @property
    def mode(self) -> SelectionMode:
        if any(b.is_group for b in self.selected_buildings()):
            return SelectionMode.COMPLEX
        return SelectionMode.STANDALONE

    @property
    def is_vzev(self) -> bool:
        return self.mode == SelectionMode.COMPLEX

    def physical_building_ids(self) -> set[int]:
        """Physical buildings covered by the selection, complexes expanded."""
        return {pid for b in self.selected_buildings() for pid in expand(b)}

    def occupancy(self) -> OccupancyMap:
        return build_occupancy(self.reference, sorted(self.selected_building_ids))

    def derive_user_ids(self) -> list[int]:
        """Unique ids of the active occupants of the selected apartments.

        This, not the number of apartments, is the list of tenants billed.
        """
        apartments = index_apartments(self.occupancy())
        user_ids: list[int] = []
        for key in sorted(self.selected_apartments):
            apartment = apartments.get(key)
            if apartment is None or not apartment.has_active_occupant:
                continue
            if apartment.occupant.id not in user_ids:
                user_ids.append(apartment.occupant.id)
        return user_ids

    def active_tenant_count(self) -> int:
        """Number of selected apartments that have an active occupant."""
        apartments = index_apartments(self.occupancy())
        return sum(
            1
            for key in self.selected_apartments
            if key in apartments and apartments[key].has_active_occupant
        )

    def apartment_selections(self) -> list[ApartmentSelection]:
        """Selected apartments that exist in the occupancy map.

        user_id is only set when the occupant is active.
        """
        apartments = index_apartments(self.occupancy())
        selections: list[ApartmentSelection] = []
        for key in sorted(self.selected_apartments):
            apartment = apartments.get(key)
            if apartment is None:
                continue
            selections.append(
                ApartmentSelection(
                    building_id=key.building_id,
                    apartment_unit=key.apartment_unit,
                    user_id=apartment.occupant.id if apartment.has_active_occupant else None,
                )
            )
        return selections

    def available_shared_meters(self) -> list[SharedMeterConfigResponse]:
        """Shared meter configs belonging to a selected building."""
        return [
            m for m in self.reference.shared_meters if m.building_id in self.selected_building_ids
        ]

    def available_custom_items(self) -> list[CustomLineItemResponse]:
        """Custom line items belonging to a selected building."""
        return [
            i for i in self.reference.custom_items if i.building_id in self.selected_building_ids
        ]

    # Buildings

    def toggle_building(self, building_id: int) -> bool:
        """Select or deselect a building; returns whether it is now selected.

        Raises BuildingMixError, without touching the selection, when adding
        the building would mix complexes and standalone buildings.
        """
        building = self.reference.get_building(building_id)
        if building is None:
            raise UnknownReferenceError("Building", building_id)

        if building_id in self.selected_building_ids:
            self._remove_building(building)
            return False

        if would_conflict(self.selected_buildings(), building):
            logger.warning(
                "Refused to mix building %s into %s selection", building_id, self.mode.value
            )
            raise BuildingMixError(building_id)
        self.selected_building_ids.add(building_id)
        return True

    def _remove_building(self, building: BuildingResponse) -> None:
        self.selected_building_ids.discard(building.id)

        # A physical building may still be covered by another selected complex.
        still_covered = self.physical_building_ids()
        released = ({building.id} | set(expand(building))) - still_covered
        self.selected_apartments = {
            key for key in self.selected_apartments if key.building_id not in released
        }

        self.selected_shared_meter_ids = {
            meter_id
            for meter_id in self.selected_shared_meter_ids
            if self.reference.shared_meters_by_id[meter_id].building_id
            in self.selected_building_ids
        }
        self.selected_custom_item_ids = {
            item_id
            for item_id in self.selected_custom_item_ids
            if self.reference.custom_items_by_id[item_id].building_id
            in self.selected_building_ids
        }

    # Apartments

    def toggle_apartment(self, building_id: int, apartment_unit: str) -> bool:
        """Select or deselect one apartment; returns whether it is now selected."""
        key = SelectionKey(building_id, apartment_unit)
        if key in self.selected_apartments:
            self.selected_apartments.discard(key)
            return False
        self.selected_apartments.add(key)
        return True

    def select_all_active(self) -> int:
        """Add every apartment with an active occupant; returns how many were added.

        Existing selections are kept, including ones without an active
        occupant.
        """
        before = len(self.selected_apartments)
        for apartments in self.occupancy().values():
            self.selected_apartments.update(
                apt.key for apt in apartments if apt.has_active_occupant
            )
        return len(self.selected_apartments) - before

    # Shared meters and custom items

    def toggle_shared_meter(self, meter_id: int) -> bool:
        if meter_id not in self.reference.shared_meters_by_id:
            raise UnknownReferenceError("Shared meter", meter_id)
        return _toggle(self.selected_shared_meter_ids, meter_id)

    def toggle_custom_item(self, item_id: int) -> bool:
        if item_id not in self.reference.custom_items_by_id:
            raise UnknownReferenceError("Custom item", item_id)
        return _toggle(self.selected_custom_item_ids, item_id)

    def select_all_shared_meters(self) -> None:
        self.selected_shared_meter_ids = {m.id for m in self.available_shared_meters()}

    def clear_shared_meters(self) -> None:
        self.selected_shared_meter_ids.clear()

    def select_all_custom_items(self) -> None:
        self.selected_custom_item_ids = {i.id for i in self.available_custom_items()}

    def clear_custom_items(self) -> None:
        self.selected_custom_item_ids.clear()

    def restore(
        self,
        building_ids: Iterable[int],
        apartments: Iterable[SelectionKey],
        shared_meter_ids: Iterable[int],
        custom_item_ids: Iterable[int],
    ) -> None:
        """Rebuild a selection saved earlier.

        Buildings go through the normal toggle rules. Shared meters and
        custom items that no longer exist are dropped.
        """
        self.clear()
        for building_id in building_ids:
            if building_id not in self.selected_building_ids:
                self.toggle_building(building_id)
        self.selected_apartments.update(apartments)
        for meter_id in shared_meter_ids:
            if meter_id in self.reference.shared_meters_by_id:
                self.selected_shared_meter_ids.add(meter_id)
            else:
                logger.warning("Dropping shared meter %s no longer available", meter_id)
        for item_id in custom_item_ids:
            if item_id in self.reference.custom_items_by_id:
                self.selected_custom_item_ids.add(item_id)
            else:
                logger.warning("Dropping custom item %s no longer available", item_id)


def _toggle(ids: set[int], value: int) -> bool:
    if value in ids:
        ids.discard(value)
        return False
    ids.add(value)
    return True
