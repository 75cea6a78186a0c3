"""Wizard session Pydantic schemas for request/response validation."""

from datetime import date
from uuid import UUID

from pydantic import BaseModel

from zevbill.models.enums import BillingFrequency
from zevbill.schemas.billing import ApartmentSelection, AutoBillingConfig, BillingDetails
from zevbill.services.wizard.gates import StepCheck, WizardFlow
from zevbill.services.wizard.selection import SelectionMode
from zevbill.services.wizard.session import ReviewSummary, WizardSession


class SessionCreate(BaseModel):
    """Schema for opening a wizard session.

    existing_config re-opens a saved auto-billing configuration for editing.
    """

    flow: WizardFlow = WizardFlow.BILL
    existing_config: AutoBillingConfig | None = None


class ApartmentToggle(BaseModel):
    """Schema for toggling one apartment."""

    building_id: int
    apartment_unit: str


class DetailsUpdate(BaseModel):
    """Partial update of the wizard form; only fields sent are applied."""

    start_date: date | None = None
    end_date: date | None = None
    name: str | None = None
    frequency: BillingFrequency | None = None
    generation_day: int | None = None
    first_execution_date: date | None = None
    is_active: bool | None = None
    sender_name: str | None = None
    sender_address: str | None = None
    sender_city: str | None = None
    sender_zip: str | None = None
    sender_country: str | None = None
    bank_name: str | None = None
    bank_iban: str | None = None
    bank_account_holder: str | None = None


class ToggleResult(BaseModel):
    """Outcome of a toggle."""

    selected: bool


class SelectAllResult(BaseModel):
    """Outcome of selecting every active apartment."""

    added: int


class SessionStateResponse(BaseModel):
    """Snapshot of a wizard session."""

    id: UUID
    flow: WizardFlow
    step: int
    total_steps: int
    mode: SelectionMode
    is_vzev: bool
    building_ids: list[int]
    apartments: list[ApartmentSelection]
    user_ids: list[int]
    shared_meter_ids: list[int]
    custom_item_ids: list[int]
    details: BillingDetails
    check: StepCheck
    summary: ReviewSummary
    config_id: int | None = None


class SubmitResponse(BaseModel):
    """Upstream response to a submission, passed through."""

    flow: WizardFlow
    result: list | dict | None = None


def session_to_response(session: WizardSession) -> SessionStateResponse:
    """Convert a wizard session to a response schema."""
    selection = session.selection
    return SessionStateResponse(
        id=session.id,
        flow=session.flow,
        step=selection.step,
        total_steps=session.gate.total_steps,
        mode=selection.mode,
        is_vzev=selection.is_vzev,
        building_ids=sorted(selection.selected_building_ids),
        apartments=selection.apartment_selections(),
        user_ids=selection.derive_user_ids(),
        shared_meter_ids=sorted(selection.selected_shared_meter_ids),
        custom_item_ids=sorted(selection.selected_custom_item_ids),
        details=session.details,
        check=session.check(),
        summary=session.summary(),
        config_id=session.config_id,
    )


class ApartmentOption(BaseModel):
    """An apartment offered for selection."""

    building_id: int
    apartment_unit: str
    user_id: int | None = None
    occupant_name: str | None = None
    has_active_occupant: bool
    selected: bool


def apartment_options(session: WizardSession) -> list[ApartmentOption]:
    """Apartments of every physical building behind the selection, in unit order."""
    selection = session.selection
    options = []
    for apartments in selection.occupancy().values():
        for apartment in apartments:
            occupant = apartment.occupant
            name = f"{occupant.first_name} {occupant.last_name}" if occupant else None
            options.append(
                ApartmentOption(
                    building_id=apartment.building_id,
                    apartment_unit=apartment.apartment_unit,
                    user_id=occupant.id if occupant else None,
                    occupant_name=name,
                    has_active_occupant=apartment.has_active_occupant,
                    selected=apartment.key in selection.selected_apartments,
                )
            )
    return options
