"""Mapping of wizard errors to HTTP responses."""

import logging

import httpx
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from zevbill.services.wizard.errors import (
    BuildingMixError,
    InconsistentSelectionError,
    ReferenceDataNotLoadedError,
    SessionClosedError,
    StepNavigationError,
    SubmissionError,
    UnknownReferenceError,
    WizardError,
)

logger = logging.getLogger(__name__)

STATUS_BY_ERROR: dict[type[WizardError], int] = {
    BuildingMixError: status.HTTP_409_CONFLICT,
    UnknownReferenceError: status.HTTP_404_NOT_FOUND,
    ReferenceDataNotLoadedError: status.HTTP_409_CONFLICT,
    SessionClosedError: status.HTTP_404_NOT_FOUND,
    SubmissionError: status.HTTP_502_BAD_GATEWAY,
    InconsistentSelectionError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


async def wizard_error_handler(request: Request, exc: WizardError) -> JSONResponse:
    if isinstance(exc, StepNavigationError):
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"detail": exc.check.model_dump()},
        )
    code = next(
        (code for error, code in STATUS_BY_ERROR.items() if isinstance(exc, error)),
        status.HTTP_400_BAD_REQUEST,
    )
    if code >= 500:
        logger.error("Wizard failure on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=code, content={"detail": str(exc)})


async def reference_error_handler(request: Request, exc: httpx.HTTPError) -> JSONResponse:
    logger.warning("Reference data unavailable: %s", exc)
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={"detail": "Reference data unavailable"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(WizardError, wizard_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(httpx.HTTPError, reference_error_handler)  # type: ignore[arg-type]
