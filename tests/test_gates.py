"""Tests for the step validation gates."""

from datetime import date

import pytest

from zevbill.schemas.billing import BillingDetails
from zevbill.services.wizard.errors import StepNavigationError
from zevbill.services.wizard.gates import StepGate, WizardFlow
from zevbill.services.wizard.selection import SelectionState

PERIOD = {"start_date": date(2024, 1, 1), "end_date": date(2024, 3, 31)}
SENDER = {"sender_name": "Solarpark Verwaltung", "bank_iban": "CH93 0076 2011 6238 5295 7"}


@pytest.fixture
def selection(reference) -> SelectionState:
    return SelectionState(reference)


@pytest.fixture
def bill_gate() -> StepGate:
    return StepGate(WizardFlow.BILL)


def _with_tenant(selection: SelectionState) -> SelectionState:
    selection.toggle_building(1)
    selection.toggle_apartment(1, "Apt 1")
    return selection


class TestStepOne:
    def test_buildings_without_tenants_cannot_proceed(self, selection, bill_gate) -> None:
        for building_id in (1, 3, 5):
            selection.toggle_building(building_id)

        assert not bill_gate.can_proceed(selection, BillingDetails())
        check = bill_gate.check(1, selection, BillingDetails())
        assert check.reasons == ["no_active_tenants"]

    def test_empty_selection(self, selection, bill_gate) -> None:
        check = bill_gate.check(1, selection, BillingDetails())
        assert not check.passed
        assert check.reasons == ["no_buildings", "no_active_tenants"]

    def test_inactive_tenant_does_not_count(self, selection, bill_gate) -> None:
        selection.toggle_building(1)
        selection.toggle_apartment(1, "Apt 2")
        assert not bill_gate.can_proceed(selection, BillingDetails())

    def test_active_tenant_passes(self, selection, bill_gate) -> None:
        _with_tenant(selection)
        assert bill_gate.can_proceed(selection, BillingDetails())

    @pytest.mark.parametrize("target", [2, 3, 4, 5])
    def test_later_steps_unreachable_while_step_one_fails(
        self, selection, bill_gate, target
    ) -> None:
        details = BillingDetails(**PERIOD, **SENDER)
        with pytest.raises(StepNavigationError) as exc_info:
            bill_gate.go_to(target, selection, details)
        assert exc_info.value.check.step == 1
        assert selection.step == 1


class TestNavigation:
    def test_bill_flow_walkthrough(self, selection, bill_gate) -> None:
        _with_tenant(selection)
        details = BillingDetails()

        assert bill_gate.next(selection, details) == 2
        with pytest.raises(StepNavigationError) as exc_info:
            bill_gate.next(selection, details)
        assert exc_info.value.check.reasons == ["missing_start_date", "missing_end_date"]

        details = BillingDetails(**PERIOD)
        assert bill_gate.next(selection, details) == 3

        selection.toggle_shared_meter(202)
        with pytest.raises(StepNavigationError) as exc_info:
            bill_gate.next(selection, details)
        assert exc_info.value.check.reasons == ["invalid_custom_split:202"]
        selection.toggle_shared_meter(202)

        assert bill_gate.next(selection, details) == 4
        assert bill_gate.next(selection, details) == 5
        with pytest.raises(StepNavigationError) as exc_info:
            bill_gate.next(selection, details)
        assert exc_info.value.check.reasons == ["last_step"]

        with pytest.raises(StepNavigationError) as exc_info:
            bill_gate.ensure_submittable(selection, details)
        assert exc_info.value.check.reasons == ["missing_sender_name", "missing_bank_iban"]

        bill_gate.ensure_submittable(selection, BillingDetails(**PERIOD, **SENDER))

    def test_back_stops_at_first_step(self, selection, bill_gate) -> None:
        assert bill_gate.back(selection) == 1

    def test_backward_jump_always_allowed(self, selection, bill_gate) -> None:
        _with_tenant(selection)
        details = BillingDetails(**PERIOD)
        bill_gate.go_to(4, selection, details)

        selection.toggle_apartment(1, "Apt 1")
        assert bill_gate.go_to(2, selection, details) == 2

    def test_unknown_step(self, selection, bill_gate) -> None:
        with pytest.raises(StepNavigationError) as exc_info:
            bill_gate.go_to(6, selection, BillingDetails())
        assert exc_info.value.check.reasons == ["unknown_step"]
        assert bill_gate.check(0, selection, BillingDetails()).reasons == ["unknown_step"]

    def test_submission_rechecks_step_one(self, selection, bill_gate) -> None:
        _with_tenant(selection)
        details = BillingDetails(**PERIOD, **SENDER)
        bill_gate.go_to(5, selection, details)

        selection.toggle_apartment(1, "Apt 1")

        with pytest.raises(StepNavigationError) as exc_info:
            bill_gate.ensure_submittable(selection, details)
        assert exc_info.value.check.step == 1

    def test_submission_only_from_review_step(self, selection, bill_gate) -> None:
        _with_tenant(selection)
        with pytest.raises(StepNavigationError) as exc_info:
            bill_gate.ensure_submittable(selection, BillingDetails(**PERIOD, **SENDER))
        assert exc_info.value.check.reasons == ["not_on_review_step"]


class TestAutoBillingFlow:
    def test_seven_steps(self) -> None:
        assert StepGate(WizardFlow.AUTO).total_steps == 7
        assert StepGate(WizardFlow.BILL).total_steps == 5

    @pytest.mark.parametrize(
        "fields, reasons",
        [
            ({"name": "  "}, ["missing_name"]),
            ({"name": "Monthly", "frequency": None}, ["missing_frequency"]),
            ({"name": "Monthly", "generation_day": 29}, ["invalid_generation_day"]),
            ({"name": "Monthly", "generation_day": 0}, ["invalid_generation_day"]),
            ({"name": "Monthly", "generation_day": None}, ["invalid_generation_day"]),
        ],
    )
    def test_schedule_gate(self, selection, fields, reasons) -> None:
        gate = StepGate(WizardFlow.AUTO)
        check = gate.check(2, _with_tenant(selection), BillingDetails(**fields))
        assert check.reasons == reasons

    def test_schedule_gate_passes(self, selection) -> None:
        gate = StepGate(WizardFlow.AUTO)
        details = BillingDetails(name="Monthly", generation_day=28)
        assert gate.check(2, _with_tenant(selection), details).passed

    def test_sender_and_bank_steps_are_open(self, selection) -> None:
        gate = StepGate(WizardFlow.AUTO)
        details = BillingDetails(name="Monthly")
        assert gate.go_to(6, _with_tenant(selection), details) == 6
        assert not gate.check(7, selection, details).passed
