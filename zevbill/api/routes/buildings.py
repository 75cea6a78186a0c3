"""Building API routes."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from zevbill.core.database import get_db
from zevbill.schemas.building import BuildingCreate, BuildingResponse
from zevbill.services import building as building_service

router = APIRouter(prefix="/buildings", tags=["buildings"])


@router.post("/", response_model=BuildingResponse, status_code=status.HTTP_201_CREATED)
def create_building(
    building_data: BuildingCreate,
    db: Session = Depends(get_db),
) -> BuildingResponse:
    """Create a building, or a complex grouping existing buildings."""
    building = building_service.create_building(db, building_data)
    return BuildingResponse.model_validate(building)


@router.get("/", response_model=list[BuildingResponse])
def list_buildings(db: Session = Depends(get_db)) -> list[BuildingResponse]:
    buildings = building_service.get_buildings(db)
    return [BuildingResponse.model_validate(b) for b in buildings]


@router.get("/{building_id}", response_model=BuildingResponse)
def get_building(building_id: int, db: Session = Depends(get_db)) -> BuildingResponse:
    return BuildingResponse.model_validate(building_service.get_building(db, building_id))
