"""Building database model."""

import json
from datetime import UTC, datetime

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from zevbill.core.database import Base


class Building(Base):
    """A physical building, or a complex grouping several of them.

    Complex membership is stored as JSON text, e.g. "[3, 4]". Rows written by
    older clients may hold anything there, so readers must not trust it.
    """

    __tablename__ = "buildings"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(100), index=True)
    address_street: Mapped[str | None] = mapped_column(String(255), nullable=True)
    address_city: Mapped[str | None] = mapped_column(String(100), nullable=True)
    address_zip: Mapped[str | None] = mapped_column(String(20), nullable=True)
    is_group: Mapped[bool] = mapped_column(default=False)
    group_buildings: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(default=lambda: datetime.now(UTC))

    def set_group_buildings(self, building_ids: list[int] | None) -> None:
        """Serialize complex membership for storage."""
        self.group_buildings = json.dumps(building_ids) if building_ids is not None else None
