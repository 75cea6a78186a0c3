"""Bill configuration wizard sessions."""

import asyncio
import logging
from collections import OrderedDict
from datetime import date
from typing import Any, Protocol
from uuid import UUID, uuid4

from pydantic import BaseModel

from zevbill.core.config import settings
from zevbill.models.enums import BillingFrequency
from zevbill.schemas.billing import AutoBillingConfig, BillingDetails, BillingRequest
from zevbill.schemas.user import AdministratorResponse
from zevbill.services.wizard.administrators import resolve_administrator
from zevbill.services.wizard.assembler import (
    SENDER_FIELDS,
    assemble_auto_billing_config,
    assemble_billing_request,
)
from zevbill.services.wizard.errors import (
    ReferenceDataNotLoadedError,
    SessionClosedError,
    SubmissionError,
    WizardError,
)
from zevbill.services.wizard.gates import (
    MAX_GENERATION_DAY,
    MIN_GENERATION_DAY,
    SENDER_STEP,
    StepCheck,
    StepGate,
    WizardFlow,
)
from zevbill.services.wizard.occupancy import SelectionKey
from zevbill.services.wizard.reference import ReferenceSource, load_reference_data
from zevbill.services.wizard.schedule import initial_next_run
from zevbill.services.wizard.selection import SelectionMode, SelectionState

logger = logging.getLogger(__name__)


class BillingSubmitter(Protocol):
    """The external API that turns assembled payloads into invoices or schedules."""

    async def generate_bills(self, request: BillingRequest) -> Any: ...

    async def save_auto_billing_config(self, config: AutoBillingConfig) -> Any: ...


class ReviewSummary(BaseModel):
    """Counts shown on the review step."""

    mode: SelectionMode
    is_vzev: bool
    building_count: int
    apartment_count: int
    tenant_count: int
    shared_meter_count: int
    custom_item_count: int
    next_run: date | None = None


class WizardSession:
    """One run of the bill configuration wizard.

    The session is unusable until open() has joined the reference data, and
    for good after close(). All selection changes go through the session's
    single SelectionState.
    """

    def __init__(self, flow: WizardFlow) -> None:
        self.id: UUID = uuid4()
        self.flow = flow
        self.gate = StepGate(flow)
        self.details = BillingDetails()
        self.config_id: int | None = None
        self._selection: SelectionState | None = None
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def loaded(self) -> bool:
        return self._selection is not None

    @property
    def selection(self) -> SelectionState:
        self._ensure_usable()
        return self._selection

    def _ensure_usable(self) -> None:
        if self._closed:
            raise SessionClosedError(f"Wizard session {self.id} is closed")
        if self._selection is None:
            raise ReferenceDataNotLoadedError(f"Wizard session {self.id} has not loaded yet")

    @property
    def step(self) -> int:
        return self.selection.step

    async def open(self, source: ReferenceSource) -> None:
        """Load reference data; results arriving after close() are discarded."""
        if self._closed:
            raise SessionClosedError(f"Wizard session {self.id} is closed")
        reference = await load_reference_data(source)
        if self._closed:
            logger.info("Discarding reference data for closed wizard session %s", self.id)
            return
        self._selection = SelectionState(reference)
        logger.info("Opened %s wizard session %s", self.flow.value, self.id)

    def close(self) -> None:
        self._closed = True
        self._selection = None
        logger.info("Closed wizard session %s", self.id)

    def reset(self) -> None:
        """Back to an empty selection on step 1."""
        self.selection.clear()
        self.details = BillingDetails()
        self.config_id = None

    # Form fields

    def update_details(self, **changes: Any) -> BillingDetails:
        """Apply form edits; raises pydantic.ValidationError on bad values."""
        self._ensure_usable()
        self.details = BillingDetails.model_validate({**self.details.model_dump(), **changes})
        return self.details

    async def prefill_sender(
        self,
        source: ReferenceSource,
        timeout: float | None = None,
    ) -> AdministratorResponse | None:
        """Fill blank sender and bank fields from the managing administrator.

        Best effort: lookup failures and timeouts are logged and leave the
        form as it was.
        """
        selection = self.selection
        building_ids = sorted(selection.selected_building_ids)
        if not building_ids:
            return None
        try:
            administrators = await asyncio.wait_for(
                source.fetch_administrators(),
                timeout if timeout is not None else settings.ADMIN_LOOKUP_TIMEOUT,
            )
        except TimeoutError:
            logger.warning("Administrator lookup timed out for session %s", self.id)
            return None
        except Exception:
            logger.warning("Administrator lookup failed for session %s", self.id, exc_info=True)
            return None
        if self._closed:
            return None

        admin = resolve_administrator(building_ids, administrators, selection.reference)
        if admin is not None:
            self._apply_sender(admin)
        return admin

    def _apply_sender(self, admin: AdministratorResponse) -> None:
        found = {
            "sender_name": f"{admin.first_name} {admin.last_name}".strip(),
            "sender_address": admin.address_street or "",
            "sender_city": admin.address_city or "",
            "sender_zip": admin.address_zip or "",
            "sender_country": admin.address_country or "",
            "bank_name": admin.bank_name or "",
            "bank_iban": admin.bank_iban or "",
            "bank_account_holder": admin.bank_account_holder or "",
        }
        current = self.details.model_dump(include=set(SENDER_FIELDS))
        updates = {}
        for name, value in found.items():
            if not value:
                continue
            blank = not current[name].strip()
            if name == "sender_country":
                blank = blank or current[name] == settings.DEFAULT_SENDER_COUNTRY
            if blank:
                updates[name] = value
        if updates:
            self.details = self.details.model_copy(update=updates)

    # Navigation

    def check(self, step: int | None = None) -> StepCheck:
        selection = self.selection
        return self.gate.check(step or selection.step, selection, self.details)

    def can_proceed(self) -> bool:
        return self.gate.can_proceed(self.selection, self.details)

    def next(self) -> int:
        return self.gate.next(self.selection, self.details)

    def back(self) -> int:
        return self.gate.back(self.selection)

    def go_to(self, step: int) -> int:
        return self.gate.go_to(step, self.selection, self.details)

    @property
    def on_sender_step(self) -> bool:
        return self.step == SENDER_STEP

    # Review and submission

    def summary(self) -> ReviewSummary:
        selection = self.selection
        return ReviewSummary(
            mode=selection.mode,
            is_vzev=selection.is_vzev,
            building_count=len(selection.selected_building_ids),
            apartment_count=len(selection.selected_apartments),
            tenant_count=len(selection.derive_user_ids()),
            shared_meter_count=len(selection.selected_shared_meter_ids),
            custom_item_count=len(selection.selected_custom_item_ids),
            next_run=self._next_run(),
        )

    def _next_run(self) -> date | None:
        details = self.details
        if self.flow != WizardFlow.AUTO or details.frequency is None:
            return None
        day = details.generation_day
        if day is None or not MIN_GENERATION_DAY <= day <= MAX_GENERATION_DAY:
            return None
        return initial_next_run(
            BillingFrequency(details.frequency),
            day,
            details.first_execution_date,
            date.today(),
        )

    def assemble(self) -> BillingRequest | AutoBillingConfig:
        """Payload for the current state; raises StepNavigationError if not submittable."""
        selection = self.selection
        self.gate.ensure_submittable(selection, self.details)
        if self.flow == WizardFlow.BILL:
            return assemble_billing_request(selection, self.details)
        return assemble_auto_billing_config(selection, self.details, self.config_id)

    async def submit(self, client: BillingSubmitter) -> Any:
        """Send the assembled payload; the session is reset only on success."""
        payload = self.assemble()
        try:
            if isinstance(payload, BillingRequest):
                result = await client.generate_bills(payload)
            else:
                result = await client.save_auto_billing_config(payload)
        except SubmissionError:
            logger.exception("Submission failed for wizard session %s", self.id)
            raise
        logger.info(
            "Submitted %s wizard session %s for %d tenants",
            self.flow.value,
            self.id,
            len(payload.user_ids),
        )
        if not self._closed:
            self.reset()
        return result

    def restore(self, config: AutoBillingConfig) -> None:
        """Load a saved auto-billing configuration for editing."""
        if self.flow != WizardFlow.AUTO:
            raise WizardError("Only auto-billing sessions can edit saved configurations")
        self.selection.restore(
            config.building_ids,
            [SelectionKey(a.building_id, a.apartment_unit) for a in config.apartments],
            [m.id for m in config.shared_meter_configs],
            [i.item_id for i in config.custom_line_items],
        )
        self.details = BillingDetails(
            name=config.name,
            frequency=config.frequency,
            generation_day=config.generation_day,
            first_execution_date=config.first_execution_date,
            is_active=config.is_active,
            **{name: getattr(config, name) for name in SENDER_FIELDS},
        )
        self.config_id = config.id


class SessionStore:
    """Open wizard sessions by id, oldest evicted first beyond the limit."""

    def __init__(self, limit: int | None = None) -> None:
        self.limit = limit if limit is not None else settings.SESSION_LIMIT
        self._sessions: OrderedDict[UUID, WizardSession] = OrderedDict()

    def __len__(self) -> int:
        return len(self._sessions)

    def add(self, session: WizardSession) -> WizardSession:
        self._sessions[session.id] = session
        while len(self._sessions) > self.limit:
            _, evicted = self._sessions.popitem(last=False)
            evicted.close()
        return session

    def get(self, session_id: UUID) -> WizardSession | None:
        session = self._sessions.get(session_id)
        if session is None or session.closed:
            return None
        return session

    def remove(self, session_id: UUID) -> None:
        session = self._sessions.pop(session_id, None)
        if session is not None:
            session.close()
