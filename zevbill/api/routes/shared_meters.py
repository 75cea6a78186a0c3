"""Shared meter configuration API routes."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from zevbill.core.database import get_db
from zevbill.schemas.shared_meter import SharedMeterConfigCreate, SharedMeterConfigResponse
from zevbill.services import shared_meter as shared_meter_service

router = APIRouter(prefix="/shared-meters", tags=["shared-meters"])


@router.post(
    "/",
    response_model=SharedMeterConfigResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_shared_meter(
    data: SharedMeterConfigCreate,
    db: Session = Depends(get_db),
) -> SharedMeterConfigResponse:
    """Configure how a shared meter's cost is split between tenants.

    Custom splits map tenant ids to percentages and must total 100.
    """
    config = shared_meter_service.create_shared_meter(db, data)
    return shared_meter_service.shared_meter_to_response(config)


@router.get("/", response_model=list[SharedMeterConfigResponse])
def list_shared_meters(
    building_id: int | None = None,
    db: Session = Depends(get_db),
) -> list[SharedMeterConfigResponse]:
    configs = shared_meter_service.get_shared_meters(db, building_id)
    return [shared_meter_service.shared_meter_to_response(c) for c in configs]
