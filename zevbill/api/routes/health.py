"""Health check route."""

from fastapi import APIRouter

from zevbill.core.config import settings

router = APIRouter()


@router.get("/health")
def health() -> dict[str, str]:
    """Liveness probe."""
    return {"status": "healthy", "version": settings.VERSION}
