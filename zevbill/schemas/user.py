"""User Pydantic schemas for request/response validation."""

from pydantic import BaseModel, EmailStr, model_validator

from zevbill.models.enums import UserType


class UserCreate(BaseModel):
    """Schema for creating a tenant or an administrator."""

    user_type: UserType = UserType.REGULAR
    first_name: str
    last_name: str
    email: EmailStr | None = None
    is_active: bool = True
    building_id: int | None = None
    apartment_unit: str | None = None
    managed_buildings: list[int] | None = None
    address_street: str | None = None
    address_city: str | None = None
    address_zip: str | None = None
    address_country: str | None = None
    bank_name: str | None = None
    bank_iban: str | None = None
    bank_account_holder: str | None = None

    @model_validator(mode="after")
    def check_role_fields(self) -> "UserCreate":
        """Managed buildings only make sense for administrators."""
        if self.managed_buildings and self.user_type != UserType.ADMINISTRATION:
            raise ValueError("Only administration users manage buildings")
        return self


class TenantResponse(BaseModel):
    """A regular user as seen by the billing wizard."""

    id: int
    first_name: str
    last_name: str
    is_active: bool = True
    building_id: int | None = None
    apartment_unit: str | None = None

    model_config = {"from_attributes": True}


class AdministratorResponse(BaseModel):
    """An administration user with invoice sender and bank details."""

    id: int
    first_name: str = ""
    last_name: str = ""
    is_active: bool = True
    managed_buildings: list[int] | str | None = None
    address_street: str | None = None
    address_city: str | None = None
    address_zip: str | None = None
    address_country: str | None = None
    bank_name: str | None = None
    bank_iban: str | None = None
    bank_account_holder: str | None = None

    model_config = {"from_attributes": True}


class UserResponse(BaseModel):
    """Schema for user response."""

    id: int
    user_type: UserType
    first_name: str
    last_name: str
    email: str | None = None
    is_active: bool
    building_id: int | None = None
    apartment_unit: str | None = None

    model_config = {"from_attributes": True}
