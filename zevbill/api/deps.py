"""Shared API dependencies."""

from collections.abc import AsyncIterator
from uuid import UUID

from fastapi import Depends, HTTPException, status
from sqlalchemy.orm import Session

from zevbill.core.config import settings
from zevbill.core.database import get_db
from zevbill.services.billing_client import BillingApiClient
from zevbill.services.reference_source import DatabaseReferenceSource
from zevbill.services.wizard.reference import ReferenceSource
from zevbill.services.wizard.session import SessionStore, WizardSession

session_store = SessionStore()


def get_session_store() -> SessionStore:
    """Process-wide store of open wizard sessions."""
    return session_store


async def get_reference_source(
    db: Session = Depends(get_db),
) -> AsyncIterator[ReferenceSource]:
    """Reference data from the local store or from the billing API."""
    if settings.REFERENCE_SOURCE == "http":
        client = BillingApiClient()
        try:
            yield client
        finally:
            await client.aclose()
    else:
        yield DatabaseReferenceSource(db)


async def get_billing_client() -> AsyncIterator[BillingApiClient]:
    """Client for the external bill-generation API."""
    client = BillingApiClient()
    try:
        yield client
    finally:
        await client.aclose()


def get_wizard_session(
    session_id: UUID,
    store: SessionStore = Depends(get_session_store),
) -> WizardSession:
    """Look up an open wizard session or fail with 404."""
    session = store.get(session_id)
    if session is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Wizard session not found",
        )
    return session
