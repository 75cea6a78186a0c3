"""Building Pydantic schemas for request/response validation."""

from pydantic import BaseModel, model_validator


class BuildingCreate(BaseModel):
    """Schema for creating a building or a complex."""

    name: str
    address_street: str | None = None
    address_city: str | None = None
    address_zip: str | None = None
    is_group: bool = False
    group_buildings: list[int] | None = None

    @model_validator(mode="after")
    def check_group_members(self) -> "BuildingCreate":
        """Only complexes carry members, and a complex needs at least one."""
        if self.is_group and not self.group_buildings:
            raise ValueError("A complex must list its member buildings")
        if not self.is_group and self.group_buildings:
            raise ValueError("Only a complex may list member buildings")
        return self


class BuildingResponse(BaseModel):
    """Schema for building response.

    group_buildings is passed through as stored: either a list of ids or the
    JSON text it was persisted as.
    """

    id: int
    name: str
    is_group: bool = False
    group_buildings: list[int] | str | None = None

    model_config = {"from_attributes": True}
