"""Custom line item service for business logic."""

from sqlalchemy.orm import Session

from zevbill.models.custom_item import CustomLineItem
from zevbill.schemas.custom_item import CustomLineItemCreate
from zevbill.services.building import get_building


def create_custom_item(db: Session, data: CustomLineItemCreate) -> CustomLineItem:
    """Create a custom line item for a building."""
    get_building(db, data.building_id)
    item = CustomLineItem(**data.model_dump())
    db.add(item)
    db.commit()
    db.refresh(item)
    return item


def get_custom_items(
    db: Session,
    building_id: int | None = None,
    active_only: bool = False,
) -> list[CustomLineItem]:
    """Get custom line items, optionally for one building or only active ones."""
    query = db.query(CustomLineItem)
    if building_id is not None:
        query = query.filter(CustomLineItem.building_id == building_id)
    if active_only:
        query = query.filter(CustomLineItem.is_active.is_(True))
    return query.order_by(CustomLineItem.id).all()
