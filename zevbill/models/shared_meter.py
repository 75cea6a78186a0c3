"""SharedMeterConfig database model."""

import json
from datetime import UTC, datetime
from decimal import Decimal

from sqlalchemy import ForeignKey, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from zevbill.core.database import Base
from zevbill.models.enums import SplitType


class SharedMeterConfig(Base):
    """Cost split rule for a meter whose consumption is shared by tenants.

    For the custom split type, percentages per tenant are stored as JSON
    mapping user id to percentage, e.g. {"12": "60", "13": "40"}.
    """

    __tablename__ = "shared_meter_configs"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    meter_id: Mapped[int] = mapped_column(ForeignKey("meters.id"), index=True)
    building_id: Mapped[int] = mapped_column(ForeignKey("buildings.id"), index=True)
    meter_name: Mapped[str] = mapped_column(String(100))
    split_type: Mapped[SplitType] = mapped_column(String(20))
    unit_price: Mapped[Decimal] = mapped_column(Numeric(12, 4))
    custom_splits_json: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(default=lambda: datetime.now(UTC))

    def get_custom_splits(self) -> dict[int, Decimal]:
        """Parse the stored JSON splits into a dict of Decimal percentages."""
        if not self.custom_splits_json:
            return {}
        raw = json.loads(self.custom_splits_json)
        return {int(k): Decimal(str(v)) for k, v in raw.items()}

    def set_custom_splits(self, splits: dict[int, Decimal] | None) -> None:
        """Serialize a splits dict to JSON for storage."""
        if not splits:
            self.custom_splits_json = None
            return
        self.custom_splits_json = json.dumps({str(k): str(v) for k, v in splits.items()})
