"""Billing payload schemas sent to the external bill-generation API."""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field

from zevbill.core.config import settings
from zevbill.models.enums import BillingFrequency, ItemCategory
from zevbill.schemas.shared_meter import SharedMeterConfigResponse


class ApartmentSelection(BaseModel):
    """One selected apartment, with its occupant when the occupant is active."""

    building_id: int
    apartment_unit: str
    user_id: int | None = None


class CustomLineItemPayload(BaseModel):
    """A custom line item as attached to a billing run."""

    item_id: int
    description: str
    amount: Decimal
    category: ItemCategory
    is_one_time: bool = False


class BillingDetails(BaseModel):
    """Form fields of the wizard that are not selections.

    Holds the billing period for one-off runs, the schedule for auto-billing
    and the sender/bank block printed on every invoice.
    """

    start_date: date | None = None
    end_date: date | None = None

    name: str = ""
    frequency: BillingFrequency | None = BillingFrequency.MONTHLY
    generation_day: int | None = 1
    first_execution_date: date | None = None
    is_active: bool = True

    sender_name: str = ""
    sender_address: str = ""
    sender_city: str = ""
    sender_zip: str = ""
    sender_country: str = Field(default_factory=lambda: settings.DEFAULT_SENDER_COUNTRY)
    bank_name: str = ""
    bank_iban: str = ""
    bank_account_holder: str = ""


class BillingPayloadBase(BaseModel):
    """Fields shared by one-off and recurring billing payloads."""

    building_ids: list[int]
    user_ids: list[int]
    apartments: list[ApartmentSelection]
    include_shared_meters: bool = False
    shared_meter_configs: list[SharedMeterConfigResponse] = []
    custom_line_items: list[CustomLineItemPayload] = []
    is_vzev: bool = False
    sender_name: str
    sender_address: str = ""
    sender_city: str = ""
    sender_zip: str = ""
    sender_country: str = ""
    bank_name: str = ""
    bank_iban: str
    bank_account_holder: str = ""


class BillingRequest(BillingPayloadBase):
    """Request for a one-off bill generation over a date range."""

    start_date: date
    end_date: date


class AutoBillingConfig(BillingPayloadBase):
    """Recurring billing schedule.

    id is set when an existing configuration is being edited.
    """

    id: int | None = None
    name: str
    frequency: BillingFrequency
    generation_day: int = Field(ge=1, le=28)
    first_execution_date: date | None = None
    is_active: bool = True
