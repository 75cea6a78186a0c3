"""Per-step validation gates of the bill configuration wizards.

Each flow is a tuple of gate functions, one per step, indexed from step 1.
A gate returns the reason codes that keep the wizard on its step; an empty
list lets the user advance. Later steps are only reachable when every
earlier gate passes, and submission re-checks all of them.
"""

from collections.abc import Callable
from enum import Enum

from pydantic import BaseModel

from zevbill.schemas.billing import BillingDetails
from zevbill.services.wizard.errors import StepNavigationError
from zevbill.services.wizard.selection import SelectionState
from zevbill.services.wizard.splits import validate_shared_meter

MIN_GENERATION_DAY = 1
MAX_GENERATION_DAY = 28

# Step on which sender details are first shown, in both flows.
SENDER_STEP = 5


class WizardFlow(str, Enum):
    """One-off bill generation or a recurring auto-billing schedule."""

    BILL = "bill"
    AUTO = "auto"


class StepCheck(BaseModel):
    """Outcome of a gate check."""

    step: int
    passed: bool
    reasons: list[str] = []


Gate = Callable[[SelectionState, BillingDetails], list[str]]


def tenants_gate(selection: SelectionState, details: BillingDetails) -> list[str]:
    reasons = []
    if not selection.selected_building_ids:
        reasons.append("no_buildings")
    if not selection.derive_user_ids():
        reasons.append("no_active_tenants")
    return reasons


def period_gate(selection: SelectionState, details: BillingDetails) -> list[str]:
    reasons = []
    if details.start_date is None:
        reasons.append("missing_start_date")
    if details.end_date is None:
        reasons.append("missing_end_date")
    return reasons


def schedule_gate(selection: SelectionState, details: BillingDetails) -> list[str]:
    reasons = []
    if not details.name.strip():
        reasons.append("missing_name")
    if details.frequency is None:
        reasons.append("missing_frequency")
    day = details.generation_day
    if day is None or not MIN_GENERATION_DAY <= day <= MAX_GENERATION_DAY:
        reasons.append("invalid_generation_day")
    return reasons


def shared_meters_gate(selection: SelectionState, details: BillingDetails) -> list[str]:
    """Selecting shared meters is optional, but selected custom splits must add up."""
    reference = selection.reference
    return [
        f"invalid_custom_split:{meter_id}"
        for meter_id in sorted(selection.selected_shared_meter_ids)
        if not validate_shared_meter(reference.shared_meters_by_id[meter_id], reference)
    ]


def open_gate(selection: SelectionState, details: BillingDetails) -> list[str]:
    return []


def sender_gate(selection: SelectionState, details: BillingDetails) -> list[str]:
    reasons = []
    if not details.sender_name.strip():
        reasons.append("missing_sender_name")
    if not details.bank_iban.strip():
        reasons.append("missing_bank_iban")
    return reasons


GATES: dict[WizardFlow, tuple[Gate, ...]] = {
    WizardFlow.BILL: (
        tenants_gate,
        period_gate,
        shared_meters_gate,
        open_gate,  # custom items
        sender_gate,  # review
    ),
    WizardFlow.AUTO: (
        tenants_gate,
        schedule_gate,
        shared_meters_gate,
        open_gate,  # custom items
        open_gate,  # sender
        open_gate,  # banking
        sender_gate,  # review
    ),
}


class StepGate:
    """Step state machine for one flow, driving SelectionState.step."""

    def __init__(self, flow: WizardFlow) -> None:
        self.flow = flow
        self.gates = GATES[flow]

    @property
    def total_steps(self) -> int:
        return len(self.gates)

    def check(self, step: int, selection: SelectionState, details: BillingDetails) -> StepCheck:
        if not 1 <= step <= self.total_steps:
            return StepCheck(step=step, passed=False, reasons=["unknown_step"])
        reasons = self.gates[step - 1](selection, details)
        return StepCheck(step=step, passed=not reasons, reasons=reasons)

    def first_failure(
        self,
        selection: SelectionState,
        details: BillingDetails,
        through_step: int,
    ) -> StepCheck | None:
        """First failing gate among steps 1..through_step, if any."""
        for step in range(1, through_step + 1):
            check = self.check(step, selection, details)
            if not check.passed:
                return check
        return None

    def can_proceed(self, selection: SelectionState, details: BillingDetails) -> bool:
        return self.check(selection.step, selection, details).passed

    def next(self, selection: SelectionState, details: BillingDetails) -> int:
        """Advance one step; raises StepNavigationError if the current gate fails."""
        if selection.step >= self.total_steps:
            raise StepNavigationError(
                StepCheck(step=selection.step, passed=False, reasons=["last_step"])
            )
        return self.go_to(selection.step + 1, selection, details)

    def back(self, selection: SelectionState) -> int:
        selection.step = max(1, selection.step - 1)
        return selection.step

    def go_to(self, target: int, selection: SelectionState, details: BillingDetails) -> int:
        """Move to target; forward moves need every gate before target to pass."""
        if not 1 <= target <= self.total_steps:
            raise StepNavigationError(
                StepCheck(step=target, passed=False, reasons=["unknown_step"])
            )
        if target > selection.step:
            failure = self.first_failure(selection, details, target - 1)
            if failure is not None:
                raise StepNavigationError(failure)
        selection.step = target
        return target

    def ensure_submittable(self, selection: SelectionState, details: BillingDetails) -> None:
        """Raise StepNavigationError unless on the last step with every gate passing."""
        if selection.step != self.total_steps:
            raise StepNavigationError(
                StepCheck(step=selection.step, passed=False, reasons=["not_on_review_step"])
            )
        failure = self.first_failure(selection, details, self.total_steps)
        if failure is not None:
            raise StepNavigationError(failure)
