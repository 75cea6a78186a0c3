"""User service for business logic."""

from sqlalchemy.orm import Session

from zevbill.models.enums import UserType
from zevbill.models.user import User
from zevbill.schemas.user import UserCreate
from zevbill.services.building import get_building


def create_user(db: Session, user_data: UserCreate) -> User:
    """Create a tenant or an administrator."""
    if user_data.building_id is not None:
        get_building(db, user_data.building_id)

    db_user = User(**user_data.model_dump(exclude={"managed_buildings"}))
    db_user.set_managed_buildings(user_data.managed_buildings)
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    return db_user


def get_users(
    db: Session,
    user_type: UserType | None = None,
    include_inactive: bool = True,
) -> list[User]:
    """Get users, optionally filtered by type and active state."""
    query = db.query(User)
    if user_type is not None:
        query = query.filter(User.user_type == user_type)
    if not include_inactive:
        query = query.filter(User.is_active.is_(True))
    return query.order_by(User.id).all()


def count_active_tenants(db: Session, building_id: int) -> int:
    """Number of active regular users living in a building."""
    return (
        db.query(User)
        .filter(
            User.user_type == UserType.REGULAR,
            User.building_id == building_id,
            User.is_active.is_(True),
        )
        .count()
    )
