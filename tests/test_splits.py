"""Tests for custom split validation."""

from decimal import Decimal

import pytest

from zevbill.models.enums import SplitType
from zevbill.services.wizard.splits import (
    eligible_tenant_count,
    is_split_valid,
    split_total,
    validate_shared_meter,
)


def test_sum_of_99_99_is_rejected() -> None:
    splits = {1: Decimal("60"), 2: Decimal("39.99")}
    assert split_total(splits) == Decimal("99.99")
    assert not is_split_valid(SplitType.CUSTOM, splits, eligible_tenants=2)


@pytest.mark.parametrize("total", ["100", "100.00", "99.995", "100.009"])
def test_sums_within_tolerance(total) -> None:
    splits = {1: Decimal("50"), 2: Decimal(total) - Decimal("50")}
    assert is_split_valid(SplitType.CUSTOM, splits, eligible_tenants=2)


@pytest.mark.parametrize("total", ["99.5", "100.6", "0", "100.01"])
def test_sums_outside_tolerance(total) -> None:
    splits = {1: Decimal(total)}
    assert not is_split_valid(SplitType.CUSTOM, splits, eligible_tenants=1)


def test_missing_splits_count_as_zero() -> None:
    assert not is_split_valid(SplitType.CUSTOM, None, eligible_tenants=1)


@pytest.mark.parametrize("split_type", [SplitType.EQUAL, SplitType.BY_AREA, SplitType.BY_UNITS])
def test_other_split_types_always_valid(split_type) -> None:
    assert is_split_valid(split_type, {1: Decimal("5")}, eligible_tenants=3)


def test_building_without_tenants_not_checked() -> None:
    assert is_split_valid(SplitType.CUSTOM, {1: Decimal("5")}, eligible_tenants=0)


def test_eligible_tenants_are_active_residents(reference) -> None:
    assert eligible_tenant_count(reference, 1) == 1
    assert eligible_tenant_count(reference, 3) == 1
    assert eligible_tenant_count(reference, 2) == 0


def test_validate_loaded_configs(reference) -> None:
    assert validate_shared_meter(reference.shared_meters_by_id[200], reference)
    assert validate_shared_meter(reference.shared_meters_by_id[201], reference)
    assert not validate_shared_meter(reference.shared_meters_by_id[202], reference)
