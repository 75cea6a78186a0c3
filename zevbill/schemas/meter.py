"""Meter Pydantic schemas for request/response validation."""

from pydantic import BaseModel

from zevbill.models.enums import APARTMENT_METER


class MeterCreate(BaseModel):
    """Schema for creating a meter."""

    name: str
    meter_type: str = APARTMENT_METER
    building_id: int
    apartment_unit: str | None = None
    user_id: int | None = None
    is_active: bool = True


class MeterResponse(BaseModel):
    """Schema for meter response."""

    id: int
    name: str
    meter_type: str
    building_id: int
    apartment_unit: str | None = None
    user_id: int | None = None
    is_active: bool = True

    model_config = {"from_attributes": True}
