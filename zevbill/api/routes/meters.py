"""Meter API routes."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from zevbill.core.database import get_db
from zevbill.schemas.meter import MeterCreate, MeterResponse
from zevbill.services import meter as meter_service

router = APIRouter(prefix="/meters", tags=["meters"])


@router.post("/", response_model=MeterResponse, status_code=status.HTTP_201_CREATED)
def create_meter(
    meter_data: MeterCreate,
    db: Session = Depends(get_db),
) -> MeterResponse:
    """Create a meter in a physical building."""
    meter = meter_service.create_meter(db, meter_data)
    return MeterResponse.model_validate(meter)


@router.get("/", response_model=list[MeterResponse])
def list_meters(
    building_id: int | None = None,
    db: Session = Depends(get_db),
) -> list[MeterResponse]:
    meters = meter_service.get_meters(db, building_id)
    return [MeterResponse.model_validate(m) for m in meters]
