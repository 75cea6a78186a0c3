"""User API routes."""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from zevbill.core.database import get_db
from zevbill.models.enums import UserType
from zevbill.schemas.user import AdministratorResponse, UserCreate, UserResponse
from zevbill.services import user as user_service

router = APIRouter(prefix="/users", tags=["users"])


@router.post("/", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(
    user_data: UserCreate,
    db: Session = Depends(get_db),
) -> UserResponse:
    """Create a tenant or an administrator."""
    user = user_service.create_user(db, user_data)
    return UserResponse.model_validate(user)


@router.get("/", response_model=list[UserResponse])
def list_users(
    user_type: UserType | None = None,
    include_inactive: bool = Query(True, description="Also return inactive users"),
    db: Session = Depends(get_db),
) -> list[UserResponse]:
    users = user_service.get_users(db, user_type, include_inactive)
    return [UserResponse.model_validate(u) for u in users]


@router.get("/administrators", response_model=list[AdministratorResponse])
def list_administrators(db: Session = Depends(get_db)) -> list[AdministratorResponse]:
    """Administration users with their sender and bank details."""
    users = user_service.get_users(db, UserType.ADMINISTRATION)
    return [AdministratorResponse.model_validate(u) for u in users]
