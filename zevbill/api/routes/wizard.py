"""Bill configuration wizard API routes.

A session is opened with POST /wizard/sessions and then driven step by step.
Selection conflicts, refused navigation and upstream failures are mapped to
HTTP errors in zevbill.api.errors.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import ValidationError

from zevbill.api.deps import (
    get_billing_client,
    get_reference_source,
    get_session_store,
    get_wizard_session,
)
from zevbill.schemas.custom_item import CustomLineItemResponse
from zevbill.schemas.shared_meter import SharedMeterConfigResponse
from zevbill.schemas.wizard import (
    ApartmentOption,
    ApartmentToggle,
    DetailsUpdate,
    SelectAllResult,
    SessionCreate,
    SessionStateResponse,
    SubmitResponse,
    ToggleResult,
    apartment_options,
    session_to_response,
)
from zevbill.services.billing_client import BillingApiClient
from zevbill.services.wizard.reference import ReferenceSource
from zevbill.services.wizard.session import SessionStore, WizardSession

router = APIRouter(prefix="/wizard/sessions", tags=["wizard"])


@router.post("/", response_model=SessionStateResponse, status_code=status.HTTP_201_CREATED)
async def open_session(
    data: SessionCreate,
    store: SessionStore = Depends(get_session_store),
    source: ReferenceSource = Depends(get_reference_source),
) -> SessionStateResponse:
    """Open a wizard session and load the reference data it selects from."""
    session = store.add(WizardSession(data.flow))
    try:
        await session.open(source)
        if data.existing_config is not None:
            session.restore(data.existing_config)
    except Exception:
        store.remove(session.id)
        raise
    return session_to_response(session)


@router.get("/{session_id}", response_model=SessionStateResponse)
async def get_session(
    session: WizardSession = Depends(get_wizard_session),
) -> SessionStateResponse:
    return session_to_response(session)


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def close_session(
    session: WizardSession = Depends(get_wizard_session),
    store: SessionStore = Depends(get_session_store),
) -> None:
    """Cancel the wizard; the session cannot be used afterwards."""
    store.remove(session.id)


# Selection


@router.post("/{session_id}/buildings/{building_id}/toggle", response_model=ToggleResult)
async def toggle_building(
    building_id: int,
    session: WizardSession = Depends(get_wizard_session),
) -> ToggleResult:
    """Select or deselect a building or complex.

    Mixing complexes with standalone buildings is refused with 409.
    """
    return ToggleResult(selected=session.selection.toggle_building(building_id))


@router.get("/{session_id}/apartments", response_model=list[ApartmentOption])
async def list_apartments(
    session: WizardSession = Depends(get_wizard_session),
) -> list[ApartmentOption]:
    return apartment_options(session)


@router.post("/{session_id}/apartments/toggle", response_model=ToggleResult)
async def toggle_apartment(
    data: ApartmentToggle,
    session: WizardSession = Depends(get_wizard_session),
) -> ToggleResult:
    selected = session.selection.toggle_apartment(data.building_id, data.apartment_unit)
    return ToggleResult(selected=selected)


@router.post("/{session_id}/apartments/select-all-active", response_model=SelectAllResult)
async def select_all_active(
    session: WizardSession = Depends(get_wizard_session),
) -> SelectAllResult:
    """Select every apartment with an active occupant."""
    return SelectAllResult(added=session.selection.select_all_active())


@router.get("/{session_id}/shared-meters", response_model=list[SharedMeterConfigResponse])
async def list_shared_meters(
    session: WizardSession = Depends(get_wizard_session),
) -> list[SharedMeterConfigResponse]:
    """Shared meters of the selected buildings."""
    return session.selection.available_shared_meters()


@router.post("/{session_id}/shared-meters/{meter_id}/toggle", response_model=ToggleResult)
async def toggle_shared_meter(
    meter_id: int,
    session: WizardSession = Depends(get_wizard_session),
) -> ToggleResult:
    return ToggleResult(selected=session.selection.toggle_shared_meter(meter_id))


@router.post("/{session_id}/shared-meters/select-all", response_model=SessionStateResponse)
async def select_all_shared_meters(
    session: WizardSession = Depends(get_wizard_session),
) -> SessionStateResponse:
    session.selection.select_all_shared_meters()
    return session_to_response(session)


@router.post("/{session_id}/shared-meters/clear", response_model=SessionStateResponse)
async def clear_shared_meters(
    session: WizardSession = Depends(get_wizard_session),
) -> SessionStateResponse:
    session.selection.clear_shared_meters()
    return session_to_response(session)


@router.get("/{session_id}/custom-items", response_model=list[CustomLineItemResponse])
async def list_custom_items(
    session: WizardSession = Depends(get_wizard_session),
) -> list[CustomLineItemResponse]:
    """Active custom line items of the selected buildings."""
    return session.selection.available_custom_items()


@router.post("/{session_id}/custom-items/{item_id}/toggle", response_model=ToggleResult)
async def toggle_custom_item(
    item_id: int,
    session: WizardSession = Depends(get_wizard_session),
) -> ToggleResult:
    return ToggleResult(selected=session.selection.toggle_custom_item(item_id))


@router.post("/{session_id}/custom-items/select-all", response_model=SessionStateResponse)
async def select_all_custom_items(
    session: WizardSession = Depends(get_wizard_session),
) -> SessionStateResponse:
    session.selection.select_all_custom_items()
    return session_to_response(session)


@router.post("/{session_id}/custom-items/clear", response_model=SessionStateResponse)
async def clear_custom_items(
    session: WizardSession = Depends(get_wizard_session),
) -> SessionStateResponse:
    session.selection.clear_custom_items()
    return session_to_response(session)


# Form and navigation


@router.patch("/{session_id}/details", response_model=SessionStateResponse)
async def update_details(
    data: DetailsUpdate,
    session: WizardSession = Depends(get_wizard_session),
) -> SessionStateResponse:
    """Apply the form fields that were sent."""
    try:
        session.update_details(**data.model_dump(exclude_unset=True))
    except ValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=exc.errors(include_url=False, include_context=False),
        ) from exc
    return session_to_response(session)


async def _after_move(session: WizardSession, source: ReferenceSource) -> SessionStateResponse:
    if session.on_sender_step:
        await session.prefill_sender(source)
    return session_to_response(session)


@router.post("/{session_id}/next", response_model=SessionStateResponse)
async def next_step(
    session: WizardSession = Depends(get_wizard_session),
    source: ReferenceSource = Depends(get_reference_source),
) -> SessionStateResponse:
    """Advance one step; 422 with the failing check if the current step is incomplete."""
    session.next()
    return await _after_move(session, source)


@router.post("/{session_id}/back", response_model=SessionStateResponse)
async def previous_step(
    session: WizardSession = Depends(get_wizard_session),
) -> SessionStateResponse:
    session.back()
    return session_to_response(session)


@router.post("/{session_id}/steps/{step}", response_model=SessionStateResponse)
async def go_to_step(
    step: int,
    session: WizardSession = Depends(get_wizard_session),
    source: ReferenceSource = Depends(get_reference_source),
) -> SessionStateResponse:
    """Jump to a step; forward jumps need every earlier step complete."""
    session.go_to(step)
    return await _after_move(session, source)


@router.post("/{session_id}/submit", response_model=SubmitResponse)
async def submit(
    session: WizardSession = Depends(get_wizard_session),
    client: BillingApiClient = Depends(get_billing_client),
) -> SubmitResponse:
    """Generate bills or save the auto-billing schedule.

    The session is reset on success and left untouched on failure.
    """
    result = await session.submit(client)
    return SubmitResponse(flow=session.flow, result=result)
