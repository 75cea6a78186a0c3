"""Build the payloads sent to the bill-generation API from a wizard selection."""

from zevbill.models.enums import ItemFrequency
from zevbill.schemas.billing import (
    AutoBillingConfig,
    BillingDetails,
    BillingRequest,
    CustomLineItemPayload,
)
from zevbill.schemas.shared_meter import SharedMeterConfigResponse
from zevbill.services.wizard.errors import InconsistentSelectionError
from zevbill.services.wizard.selection import SelectionState

SENDER_FIELDS = (
    "sender_name",
    "sender_address",
    "sender_city",
    "sender_zip",
    "sender_country",
    "bank_name",
    "bank_iban",
    "bank_account_holder",
)


def resolve_shared_meters(selection: SelectionState) -> list[SharedMeterConfigResponse]:
    """Full records of the selected shared meters."""
    configs = []
    for meter_id in sorted(selection.selected_shared_meter_ids):
        config = selection.reference.shared_meters_by_id.get(meter_id)
        if config is None:
            raise InconsistentSelectionError(f"Selected shared meter {meter_id} is not loaded")
        configs.append(config)
    return configs


def resolve_custom_items(selection: SelectionState) -> list[CustomLineItemPayload]:
    """Invoice lines for the selected custom items."""
    items = []
    for item_id in sorted(selection.selected_custom_item_ids):
        item = selection.reference.custom_items_by_id.get(item_id)
        if item is None:
            raise InconsistentSelectionError(f"Selected custom item {item_id} is not loaded")
        items.append(
            CustomLineItemPayload(
                item_id=item.id,
                description=item.description,
                amount=item.amount,
                category=item.category,
                is_one_time=item.frequency == ItemFrequency.ONCE,
            )
        )
    return items


def _common_fields(selection: SelectionState, details: BillingDetails) -> dict:
    shared_meters = resolve_shared_meters(selection)
    fields = {
        "building_ids": sorted(selection.selected_building_ids),
        "user_ids": selection.derive_user_ids(),
        "apartments": selection.apartment_selections(),
        "include_shared_meters": bool(shared_meters),
        "shared_meter_configs": shared_meters,
        "custom_line_items": resolve_custom_items(selection),
        "is_vzev": selection.is_vzev,
    }
    fields.update({name: getattr(details, name) for name in SENDER_FIELDS})
    return fields


def assemble_billing_request(
    selection: SelectionState,
    details: BillingDetails,
) -> BillingRequest:
    """Payload for a one-off bill generation."""
    return BillingRequest(
        **_common_fields(selection, details),
        start_date=details.start_date,
        end_date=details.end_date,
    )


def assemble_auto_billing_config(
    selection: SelectionState,
    details: BillingDetails,
    config_id: int | None = None,
) -> AutoBillingConfig:
    """Payload for creating or updating a recurring billing schedule."""
    return AutoBillingConfig(
        **_common_fields(selection, details),
        id=config_id,
        name=details.name.strip(),
        frequency=details.frequency,
        generation_day=details.generation_day,
        first_execution_date=details.first_execution_date,
        is_active=details.is_active,
    )
