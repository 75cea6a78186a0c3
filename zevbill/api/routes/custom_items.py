"""Custom line item API routes."""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from zevbill.core.database import get_db
from zevbill.schemas.custom_item import CustomLineItemCreate, CustomLineItemResponse
from zevbill.services import custom_item as custom_item_service

router = APIRouter(prefix="/custom-line-items", tags=["custom-line-items"])


@router.post("/", response_model=CustomLineItemResponse, status_code=status.HTTP_201_CREATED)
def create_custom_item(
    data: CustomLineItemCreate,
    db: Session = Depends(get_db),
) -> CustomLineItemResponse:
    item = custom_item_service.create_custom_item(db, data)
    return CustomLineItemResponse.model_validate(item)


@router.get("/", response_model=list[CustomLineItemResponse])
def list_custom_items(
    building_id: int | None = None,
    active_only: bool = Query(False, description="Only return active items"),
    db: Session = Depends(get_db),
) -> list[CustomLineItemResponse]:
    items = custom_item_service.get_custom_items(db, building_id, active_only)
    return [CustomLineItemResponse.model_validate(i) for i in items]
