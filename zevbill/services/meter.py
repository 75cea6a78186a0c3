"""Meter service for business logic."""

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from zevbill.models.meter import Meter
from zevbill.schemas.meter import MeterCreate
from zevbill.services.building import get_building


def create_meter(db: Session, meter_data: MeterCreate) -> Meter:
    """Create a meter in an existing building."""
    building = get_building(db, meter_data.building_id)
    if building.is_group:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Meters belong to physical buildings, not complexes",
        )

    db_meter = Meter(**meter_data.model_dump())
    db.add(db_meter)
    db.commit()
    db.refresh(db_meter)
    return db_meter


def get_meters(db: Session, building_id: int | None = None) -> list[Meter]:
    """Get all meters, optionally for one building."""
    query = db.query(Meter)
    if building_id is not None:
        query = query.filter(Meter.building_id == building_id)
    return query.order_by(Meter.id).all()
