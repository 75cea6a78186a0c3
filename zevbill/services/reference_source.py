"""Reference data read from the local database."""

from sqlalchemy.orm import Session

from zevbill.models.enums import UserType
from zevbill.schemas.building import BuildingResponse
from zevbill.schemas.custom_item import CustomLineItemResponse
from zevbill.schemas.meter import MeterResponse
from zevbill.schemas.shared_meter import SharedMeterConfigResponse
from zevbill.schemas.user import AdministratorResponse, TenantResponse
from zevbill.services.building import get_buildings
from zevbill.services.custom_item import get_custom_items
from zevbill.services.meter import get_meters
from zevbill.services.shared_meter import get_shared_meters, shared_meter_to_response
from zevbill.services.user import get_users


class DatabaseReferenceSource:
    """ReferenceSource backed by a SQLAlchemy session.

    Group and managed-building lists are handed over as the stored JSON
    text; the wizard decodes them.
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    async def fetch_buildings(self) -> list[BuildingResponse]:
        return [BuildingResponse.model_validate(b) for b in get_buildings(self.db)]

    async def fetch_tenants(self) -> list[TenantResponse]:
        return [
            TenantResponse.model_validate(u)
            for u in get_users(self.db, user_type=UserType.REGULAR)
        ]

    async def fetch_administrators(self) -> list[AdministratorResponse]:
        return [
            AdministratorResponse.model_validate(u)
            for u in get_users(self.db, user_type=UserType.ADMINISTRATION)
        ]

    async def fetch_meters(self) -> list[MeterResponse]:
        return [MeterResponse.model_validate(m) for m in get_meters(self.db)]

    async def fetch_shared_meters(self) -> list[SharedMeterConfigResponse]:
        return [shared_meter_to_response(c) for c in get_shared_meters(self.db)]

    async def fetch_custom_items(self) -> list[CustomLineItemResponse]:
        return [CustomLineItemResponse.model_validate(i) for i in get_custom_items(self.db)]
