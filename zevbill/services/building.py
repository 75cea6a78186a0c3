"""Building service for business logic."""

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from zevbill.models.building import Building
from zevbill.schemas.building import BuildingCreate


def create_building(db: Session, building_data: BuildingCreate) -> Building:
    """Create a building, or a complex of existing standalone buildings."""
    if building_data.is_group:
        members = (
            db.query(Building).filter(Building.id.in_(building_data.group_buildings or [])).all()
        )
        if len(members) != len(set(building_data.group_buildings or [])):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Complex members must be existing buildings",
            )
        if any(member.is_group for member in members):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="A complex cannot contain another complex",
            )

    db_building = Building(
        name=building_data.name,
        address_street=building_data.address_street,
        address_city=building_data.address_city,
        address_zip=building_data.address_zip,
        is_group=building_data.is_group,
    )
    db_building.set_group_buildings(building_data.group_buildings)
    db.add(db_building)
    db.commit()
    db.refresh(db_building)
    return db_building


def get_building(db: Session, building_id: int) -> Building:
    """Get a building by ID."""
    db_building = db.query(Building).filter(Building.id == building_id).first()
    if not db_building:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Building not found",
        )
    return db_building


def get_buildings(db: Session) -> list[Building]:
    """Get all buildings."""
    return db.query(Building).order_by(Building.id).all()
