"""Enum definitions shared by models, schemas and the wizard."""

from enum import Enum


class UserType(str, Enum):
    """Regular users are tenants; administration users manage buildings."""

    REGULAR = "regular"
    ADMINISTRATION = "administration"


class SplitType(str, Enum):
    """Allocation rule for a shared meter's cost."""

    EQUAL = "equal"
    BY_AREA = "by_area"
    BY_UNITS = "by_units"
    CUSTOM = "custom"


class BillingFrequency(str, Enum):
    """Recurrence of an auto-billing configuration."""

    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    HALF_YEARLY = "half_yearly"
    YEARLY = "yearly"


class ItemCategory(str, Enum):
    """Category of a custom line item."""

    METER_RENT = "meter_rent"
    MAINTENANCE = "maintenance"
    SERVICE = "service"
    OTHER = "other"


class ItemFrequency(str, Enum):
    """How often a custom line item is charged."""

    ONCE = "once"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"


APARTMENT_METER = "apartment_meter"
