"""Custom line item Pydantic schemas for request/response validation."""

from decimal import Decimal

from pydantic import BaseModel, field_validator

from zevbill.models.enums import ItemCategory, ItemFrequency

MAX_DESCRIPTION_LENGTH = 200
MAX_AMOUNT = Decimal("999999")


class CustomLineItemCreate(BaseModel):
    """Schema for creating a custom line item."""

    building_id: int
    description: str
    amount: Decimal
    category: ItemCategory = ItemCategory.OTHER
    frequency: ItemFrequency = ItemFrequency.MONTHLY
    is_active: bool = True

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str) -> str:
        """Description must be present and short enough for an invoice line."""
        if not v.strip():
            raise ValueError("Description must not be empty")
        if len(v) > MAX_DESCRIPTION_LENGTH:
            raise ValueError(f"Description must be at most {MAX_DESCRIPTION_LENGTH} characters")
        return v

    @field_validator("amount")
    @classmethod
    def validate_amount(cls, v: Decimal) -> Decimal:
        """Amount must be positive and below the invoice ceiling."""
        if v <= 0:
            raise ValueError("Amount must be positive")
        if v > MAX_AMOUNT:
            raise ValueError(f"Amount must not exceed {MAX_AMOUNT}")
        return v


class CustomLineItemResponse(BaseModel):
    """Schema for custom line item response."""

    id: int
    building_id: int
    description: str
    amount: Decimal
    category: ItemCategory
    frequency: ItemFrequency
    is_active: bool = True

    model_config = {"from_attributes": True}
