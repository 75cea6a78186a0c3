"""Validation of custom percentage splits on shared meters."""

from decimal import Decimal

from zevbill.models.enums import SplitType
from zevbill.schemas.shared_meter import SharedMeterConfigResponse
from zevbill.services.wizard.reference import ReferenceData

FULL_SHARE = Decimal("100")
SPLIT_TOLERANCE = Decimal("0.01")


def split_total(custom_splits: dict[int, Decimal]) -> Decimal:
    return sum(custom_splits.values(), Decimal("0"))


def is_split_valid(
    split_type: SplitType,
    custom_splits: dict[int, Decimal] | None,
    eligible_tenants: int,
) -> bool:
    """Check that custom percentages add up to 100.

    A deviation of 0.01 or more is rejected. Only custom splits are checked,
    and only when the building has tenants to split between.
    """
    if split_type != SplitType.CUSTOM or eligible_tenants <= 0:
        return True
    return abs(split_total(custom_splits or {}) - FULL_SHARE) < SPLIT_TOLERANCE


def eligible_tenant_count(reference: ReferenceData, building_id: int) -> int:
    """Active tenants registered in a building."""
    return sum(1 for t in reference.tenants if t.building_id == building_id and t.is_active)


def validate_shared_meter(
    config: SharedMeterConfigResponse,
    reference: ReferenceData,
) -> bool:
    """Validate a shared meter config against the tenants currently in its building."""
    return is_split_valid(
        config.split_type,
        config.custom_splits,
        eligible_tenant_count(reference, config.building_id),
    )
