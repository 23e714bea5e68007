# 📄 File: app/shared/utils/helpers.py

# 🧭 Purpose (Layman Explanation):
# Small helpful tools used all over the app: getting the current time in one consistent
# time zone, rounding money to whole cents, and making fresh unique IDs.

# 🧪 Purpose (Technical Summary):
# Time helpers (timezone-aware UTC now, naive-to-UTC normalization for SQLite round trips),
# Decimal money helpers with half-up cent rounding, ID generation and pagination math.

# 🔗 Dependencies:
# - decimal: exact money arithmetic
# - datetime: timestamps
# - uuid: unique identifiers

# 🔄 Connected Modules / Calls From:
# Used by: order pricing and settlement, repository mappers, query handlers

import math
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Union
from uuid import uuid4

CENT = Decimal("0.01")

Number = Union[int, float, str, Decimal]


def generate_id() -> str:
    """Generate a new UUID4 string identifier."""
    return str(uuid4())


def utcnow() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def ensure_utc(value: Optional[datetime]) -> Optional[datetime]:
    """
    Normalize a datetime to timezone-aware UTC.

    SQLite hands back naive datetimes even for ``DateTime(timezone=True)``
    columns; values are always written as UTC so a naive value is UTC.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_decimal(value: Number) -> Decimal:
    """Convert a number to Decimal without binary float artifacts."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def round_money(value: Number) -> Decimal:
    """Round an amount to cents, half-up."""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def to_minor_units(value: Number) -> int:
    """Convert an amount to integer minor units (paise/cents) for the payment gateway."""
    return int((round_money(value) * 100).to_integral_value(rounding=ROUND_HALF_UP))


def total_pages(total: int, limit: int) -> int:
    """Number of pages needed to show ``total`` rows ``limit`` at a time."""
    if limit <= 0:
        return 0
    return math.ceil(total / limit)
