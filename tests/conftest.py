"""Shared fixtures: a small reference dataset with one standalone building and one complex.

Buildings
    1  Sonnenhof, standalone: Apt 1 (tenant 10, via roster), Apt 2 (tenant 11,
       inactive), Apt 10 (vacant)
    2  Solarpark, complex of 3 and 4
    3  Solarpark A: unit 1.01 (tenant 12)
    4  Solarpark B: unit 2 (tenant 13)
    5  Lindenweg, standalone, only an inactive meter
"""

import asyncio
from decimal import Decimal

import pytest

from zevbill.models.enums import (
    APARTMENT_METER,
    ItemCategory,
    ItemFrequency,
    SplitType,
)
from zevbill.schemas.building import BuildingResponse
from zevbill.schemas.custom_item import CustomLineItemResponse
from zevbill.schemas.meter import MeterResponse
from zevbill.schemas.shared_meter import SharedMeterConfigResponse
from zevbill.schemas.user import AdministratorResponse, TenantResponse
from zevbill.services.wizard.reference import ReferenceData

BUILDINGS = [
    BuildingResponse(id=1, name="Sonnenhof"),
    BuildingResponse(id=2, name="Solarpark", is_group=True, group_buildings=[3, 4]),
    BuildingResponse(id=3, name="Solarpark A"),
    BuildingResponse(id=4, name="Solarpark B"),
    BuildingResponse(id=5, name="Lindenweg"),
]

TENANTS = [
    TenantResponse(
        id=10, first_name="Anna", last_name="Meier", building_id=1, apartment_unit="Apt 1"
    ),
    TenantResponse(
        id=11,
        first_name="Beat",
        last_name="Keller",
        is_active=False,
        building_id=1,
        apartment_unit="Apt 2",
    ),
    TenantResponse(
        id=12, first_name="Carla", last_name="Frei", building_id=3, apartment_unit="1.01"
    ),
    TenantResponse(
        id=13, first_name="Dario", last_name="Huber", building_id=4, apartment_unit="2"
    ),
]

METERS = [
    MeterResponse(
        id=100,
        name="Apt 2",
        meter_type=APARTMENT_METER,
        building_id=1,
        apartment_unit="Apt 2",
        user_id=11,
    ),
    MeterResponse(
        id=101, name="Apt 1", meter_type=APARTMENT_METER, building_id=1, apartment_unit="Apt 1"
    ),
    MeterResponse(
        id=102, name="Apt 10", meter_type=APARTMENT_METER, building_id=1, apartment_unit="Apt 10"
    ),
    MeterResponse(
        id=103,
        name="A 1.01",
        meter_type=APARTMENT_METER,
        building_id=3,
        apartment_unit="1.01",
        user_id=12,
    ),
    MeterResponse(
        id=104,
        name="B 2",
        meter_type=APARTMENT_METER,
        building_id=4,
        apartment_unit="2",
        user_id=13,
    ),
    MeterResponse(id=105, name="Grid", meter_type="total_meter", building_id=1),
    # Second apartment meter for a unit already listed
    MeterResponse(
        id=106, name="Apt 1 heat", meter_type=APARTMENT_METER, building_id=1, apartment_unit="Apt 1"
    ),
    MeterResponse(
        id=107,
        name="Old",
        meter_type=APARTMENT_METER,
        building_id=5,
        apartment_unit="1",
        is_active=False,
    ),
]

SHARED_METERS = [
    SharedMeterConfigResponse(
        id=200,
        meter_id=105,
        building_id=1,
        meter_name="Stairwell",
        split_type=SplitType.EQUAL,
        unit_price=Decimal("0.25"),
    ),
    SharedMeterConfigResponse(
        id=201,
        building_id=3,
        meter_name="Heat pump",
        split_type=SplitType.CUSTOM,
        unit_price=Decimal("0.30"),
        custom_splits={12: Decimal("100")},
    ),
    SharedMeterConfigResponse(
        id=202,
        building_id=1,
        meter_name="Garage",
        split_type=SplitType.CUSTOM,
        unit_price=Decimal("0.20"),
        custom_splits={10: Decimal("60"), 11: Decimal("39.99")},
    ),
]

CUSTOM_ITEMS = [
    CustomLineItemResponse(
        id=300,
        building_id=1,
        description="Meter installation",
        amount=Decimal("150.00"),
        category=ItemCategory.SERVICE,
        frequency=ItemFrequency.ONCE,
    ),
    CustomLineItemResponse(
        id=301,
        building_id=2,
        description="Meter rent",
        amount=Decimal("5.00"),
        category=ItemCategory.METER_RENT,
        frequency=ItemFrequency.MONTHLY,
    ),
    CustomLineItemResponse(
        id=302,
        building_id=1,
        description="Old fee",
        amount=Decimal("10.00"),
        category=ItemCategory.OTHER,
        frequency=ItemFrequency.YEARLY,
        is_active=False,
    ),
]

ADMINISTRATORS = [
    AdministratorResponse(
        id=40,
        first_name="Inactive",
        last_name="Admin",
        is_active=False,
        managed_buildings=[1, 2],
    ),
    AdministratorResponse(id=41, first_name="Broken", last_name="Admin", managed_buildings="[1,"),
    AdministratorResponse(
        id=50,
        first_name="Eva",
        last_name="Graf",
        managed_buildings="[2]",
        address_street="Hauptstrasse 1",
        address_city="Bern",
        address_zip="3000",
        address_country="Schweiz",
        bank_name="Berner Bank",
        bank_iban="CH93 0076 2011 6238 5295 7",
        bank_account_holder="Solarpark Verwaltung",
    ),
    AdministratorResponse(id=51, first_name="Felix", last_name="Roth", managed_buildings=[1]),
]


def make_reference(**overrides) -> ReferenceData:
    """Reference data of the standard dataset with selected collections replaced."""
    collections = {
        "buildings": BUILDINGS,
        "tenants": TENANTS,
        "meters": METERS,
        "shared_meters": SHARED_METERS,
        "custom_items": [i for i in CUSTOM_ITEMS if i.is_active],
    }
    collections.update(overrides)
    return ReferenceData(**{name: tuple(items) for name, items in collections.items()})


class FakeSource:
    """In-memory ReferenceSource; optionally slow or failing."""

    def __init__(
        self,
        delay: float = 0,
        admin_delay: float = 0,
        admin_error: Exception | None = None,
        administrators: list[AdministratorResponse] | None = None,
    ) -> None:
        self.delay = delay
        self.admin_delay = admin_delay
        self.admin_error = admin_error
        self.administrators = ADMINISTRATORS if administrators is None else administrators
        self.calls: list[str] = []

    async def _wait(self, name: str, delay: float) -> None:
        self.calls.append(name)
        if delay:
            await asyncio.sleep(delay)

    async def fetch_buildings(self) -> list[BuildingResponse]:
        await self._wait("buildings", self.delay)
        return list(BUILDINGS)

    async def fetch_tenants(self) -> list[TenantResponse]:
        await self._wait("tenants", self.delay)
        return list(TENANTS)

    async def fetch_meters(self) -> list[MeterResponse]:
        await self._wait("meters", self.delay)
        return list(METERS)

    async def fetch_shared_meters(self) -> list[SharedMeterConfigResponse]:
        await self._wait("shared_meters", self.delay)
        return list(SHARED_METERS)

    async def fetch_custom_items(self) -> list[CustomLineItemResponse]:
        await self._wait("custom_items", self.delay)
        return list(CUSTOM_ITEMS)

    async def fetch_administrators(self) -> list[AdministratorResponse]:
        await self._wait("administrators", self.admin_delay)
        if self.admin_error is not None:
            raise self.admin_error
        return list(self.administrators)


@pytest.fixture
def reference() -> ReferenceData:
    """The standard reference dataset."""
    return make_reference()


@pytest.fixture(name="make_reference")
def make_reference_fixture():
    """Builder for variations of the standard dataset."""
    return make_reference


@pytest.fixture
def fake_source():
    """Factory for in-memory reference sources."""
    return FakeSource


@pytest.fixture
def source() -> FakeSource:
    return FakeSource()
