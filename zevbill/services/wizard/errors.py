"""Errors raised by the billing wizard engine."""


class WizardError(Exception):
    """Base class for wizard errors."""


class BuildingMixError(WizardError):
    """Raised when a toggle would mix complexes and standalone buildings."""

    def __init__(self, building_id: int) -> None:
        super().__init__(f"Cannot mix complexes and standalone buildings (building {building_id})")
        self.building_id = building_id


class UnknownReferenceError(WizardError):
    """Raised when an id is not part of the loaded reference data."""

    def __init__(self, kind: str, ref_id: int) -> None:
        super().__init__(f"{kind} {ref_id} not found")
        self.kind = kind
        self.ref_id = ref_id


class ReferenceDataNotLoadedError(WizardError):
    """Raised when the selection is used before reference data has loaded."""


class SessionClosedError(WizardError):
    """Raised when a closed wizard session is used."""


class StepNavigationError(WizardError):
    """Raised when navigation or submission is refused by a step gate."""

    def __init__(self, check) -> None:
        super().__init__(f"Step {check.step} incomplete: {', '.join(check.reasons)}")
        self.check = check


class InconsistentSelectionError(WizardError):
    """A selected id is missing from the reference data it was selected from.

    Selections are only ever populated from loaded reference data, so this
    signals a bug in the engine rather than bad user input.
    """


class SubmissionError(WizardError):
    """Raised when the bill-generation API rejects or fails a request."""
