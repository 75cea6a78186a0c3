"""Meter database model."""

from datetime import UTC, datetime

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from zevbill.core.database import Base
from zevbill.models.enums import APARTMENT_METER


class Meter(Base):
    """Meter installed in a building, optionally assigned to an apartment."""

    __tablename__ = "meters"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(100))
    meter_type: Mapped[str] = mapped_column(String(40), index=True)
    building_id: Mapped[int] = mapped_column(ForeignKey("buildings.id"), index=True)
    apartment_unit: Mapped[str | None] = mapped_column(String(50), nullable=True)
    user_id: Mapped[int | None] = mapped_column(ForeignKey("users.id"), nullable=True)
    created_at: Mapped[datetime] = mapped_column(default=lambda: datetime.now(UTC))
    is_active: Mapped[bool] = mapped_column(default=True)

    def get_is_apartment_meter(self) -> bool:
        """Check if this meter measures a single apartment."""
        return self.meter_type == APARTMENT_METER
