"""CustomLineItem database model."""

from datetime import UTC, datetime
from decimal import Decimal

from sqlalchemy import ForeignKey, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from zevbill.core.database import Base
from zevbill.models.enums import ItemCategory, ItemFrequency


class CustomLineItem(Base):
    """Extra charge (meter rent, maintenance, ...) billed per building."""

    __tablename__ = "custom_line_items"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    building_id: Mapped[int] = mapped_column(ForeignKey("buildings.id"), index=True)
    description: Mapped[str] = mapped_column(String(200))
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2))
    category: Mapped[ItemCategory] = mapped_column(String(20))
    frequency: Mapped[ItemFrequency] = mapped_column(String(20))
    created_at: Mapped[datetime] = mapped_column(default=lambda: datetime.now(UTC))
    is_active: Mapped[bool] = mapped_column(default=True)
