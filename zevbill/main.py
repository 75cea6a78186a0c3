"""FastAPI application entry point."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from zevbill.api.errors import register_exception_handlers
from zevbill.api.routes import buildings, custom_items, health, meters, shared_meters, users, wizard
from zevbill.core.config import settings
from zevbill.core.database import Base, engine
from zevbill.core.logging import configure_logging

# Import models for Base.metadata.create_all - order matters for foreign keys
from zevbill.models import (
    building,  # noqa: F401
    user,  # noqa: F401
    meter,  # noqa: F401
    shared_meter,  # noqa: F401
    custom_item,  # noqa: F401
)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan manager."""
    configure_logging()
    Base.metadata.create_all(bind=engine)
    yield


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description="Bill configuration wizard for ZEV and vZEV solar communities",
    lifespan=lifespan,
)

register_exception_handlers(app)

app.include_router(health.router, prefix="/api", tags=["health"])
app.include_router(buildings.router, prefix="/api")
app.include_router(users.router, prefix="/api")
app.include_router(meters.router, prefix="/api")
app.include_router(shared_meters.router, prefix="/api")
app.include_router(custom_items.router, prefix="/api")
app.include_router(wizard.router, prefix="/api")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "zevbill.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
