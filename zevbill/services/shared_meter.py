"""Shared meter configuration service for business logic."""

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from zevbill.models.enums import SplitType
from zevbill.models.meter import Meter
from zevbill.models.shared_meter import SharedMeterConfig
from zevbill.schemas.shared_meter import SharedMeterConfigCreate, SharedMeterConfigResponse
from zevbill.services.building import get_building
from zevbill.services.user import count_active_tenants
from zevbill.services.wizard.splits import is_split_valid


def create_shared_meter(db: Session, data: SharedMeterConfigCreate) -> SharedMeterConfig:
    """Create a shared meter config; custom splits must add up to 100%."""
    get_building(db, data.building_id)
    meter = db.query(Meter).filter(Meter.id == data.meter_id).first()
    if not meter:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Meter not found",
        )

    if not is_split_valid(
        data.split_type,
        data.custom_splits,
        count_active_tenants(db, data.building_id),
    ):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Custom split percentages must total 100",
        )

    config = SharedMeterConfig(
        meter_id=data.meter_id,
        building_id=data.building_id,
        meter_name=data.meter_name,
        split_type=data.split_type,
        unit_price=data.unit_price,
    )
    config.set_custom_splits(data.custom_splits if data.split_type == SplitType.CUSTOM else None)
    db.add(config)
    db.commit()
    db.refresh(config)
    return config


def get_shared_meters(db: Session, building_id: int | None = None) -> list[SharedMeterConfig]:
    """Get all shared meter configs, optionally for one building."""
    query = db.query(SharedMeterConfig)
    if building_id is not None:
        query = query.filter(SharedMeterConfig.building_id == building_id)
    return query.order_by(SharedMeterConfig.id).all()


def shared_meter_to_response(config: SharedMeterConfig) -> SharedMeterConfigResponse:
    """Convert a SharedMeterConfig model to a response schema."""
    return SharedMeterConfigResponse(
        id=config.id,
        meter_id=config.meter_id,
        building_id=config.building_id,
        meter_name=config.meter_name,
        split_type=config.split_type,
        unit_price=config.unit_price,
        custom_splits=config.get_custom_splits(),
    )
