"""User database model."""

import json
from datetime import UTC, datetime

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from zevbill.core.database import Base
from zevbill.models.enums import UserType


class User(Base):
    """Tenant or administrator account.

    Tenants live in one apartment of one building. Administrators carry the
    sender address and bank details printed on invoices, and the list of
    buildings they manage (JSON text).
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    user_type: Mapped[UserType] = mapped_column(String(20), index=True, default=UserType.REGULAR)
    first_name: Mapped[str] = mapped_column(String(100))
    last_name: Mapped[str] = mapped_column(String(100))
    email: Mapped[str | None] = mapped_column(String(100), nullable=True)
    is_active: Mapped[bool] = mapped_column(default=True)
    created_at: Mapped[datetime] = mapped_column(default=lambda: datetime.now(UTC))

    # Tenancy
    building_id: Mapped[int | None] = mapped_column(ForeignKey("buildings.id"), nullable=True)
    apartment_unit: Mapped[str | None] = mapped_column(String(50), nullable=True)

    # Administration
    managed_buildings: Mapped[str | None] = mapped_column(Text, nullable=True)
    address_street: Mapped[str | None] = mapped_column(String(255), nullable=True)
    address_city: Mapped[str | None] = mapped_column(String(100), nullable=True)
    address_zip: Mapped[str | None] = mapped_column(String(20), nullable=True)
    address_country: Mapped[str | None] = mapped_column(String(100), nullable=True)
    bank_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    bank_iban: Mapped[str | None] = mapped_column(String(40), nullable=True)
    bank_account_holder: Mapped[str | None] = mapped_column(String(100), nullable=True)

    def set_managed_buildings(self, building_ids: list[int] | None) -> None:
        """Serialize the managed building list for storage."""
        self.managed_buildings = json.dumps(building_ids) if building_ids is not None else None
