"""Shared meter Pydantic schemas for request/response validation."""

from decimal import Decimal

from pydantic import BaseModel, field_validator

from zevbill.models.enums import SplitType


class SharedMeterConfigCreate(BaseModel):
    """Schema for creating a shared meter split configuration.

    custom_splits maps tenant user id to a percentage and is only kept for
    the custom split type.
    """

    meter_id: int
    building_id: int
    meter_name: str
    split_type: SplitType
    unit_price: Decimal
    custom_splits: dict[int, Decimal] | None = None

    @field_validator("unit_price")
    @classmethod
    def validate_unit_price(cls, v: Decimal) -> Decimal:
        """Unit price must be positive."""
        if v <= 0:
            raise ValueError("Unit price must be positive")
        return v


class SharedMeterConfigResponse(BaseModel):
    """Schema for shared meter configuration response."""

    id: int
    meter_id: int | None = None
    building_id: int
    meter_name: str
    split_type: SplitType
    unit_price: Decimal
    custom_splits: dict[int, Decimal] = {}
