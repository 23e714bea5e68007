# 📄 File: app/shared/utils/validators.py
# 🧭 Purpose (Layman Explanation):
# Checks that locations and phone numbers sent to the app make sense before we store them,
# like making sure a map position really is a longitude and a latitude.
# 🧪 Purpose (Technical Summary):
# Reusable validation functions for geo coordinates ([longitude, latitude] pairs) and phone
# numbers, raising ValueError so pydantic reports them as per-field validation errors.
# 🔗 Dependencies:
# re, numbers
# 🔄 Connected Modules / Calls From:
# app.shared.core.geo (GeoPoint), user and restaurant schemas

import re
from numbers import Real
from typing import Any, List

PHONE_PATTERN = re.compile(r'^\+?[0-9][0-9\-\s]{6,18}[0-9]$')


def validate_coordinates(value: Any) -> List[float]:
    """
    Validate a GeoJSON position.

    Args:
        value: Candidate ``[longitude, latitude]`` pair

    Returns:
        List[float]: The pair as floats

    Raises:
        ValueError: If the value is not exactly two numbers within range
    """
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise ValueError("Coordinates must be exactly [longitude, latitude]")

    for item in value:
        if isinstance(item, bool) or not isinstance(item, Real):
            raise ValueError("Coordinates must be numeric")

    longitude, latitude = float(value[0]), float(value[1])
    if not -180 <= longitude <= 180:
        raise ValueError("Longitude must be between -180 and 180")
    if not -90 <= latitude <= 90:
        raise ValueError("Latitude must be between -90 and 90")

    return [longitude, latitude]


def validate_phone(value: str) -> str:
    """Validate and normalize a phone number."""
    phone = value.strip()
    if not PHONE_PATTERN.match(phone):
        raise ValueError("Invalid phone number")
    return phone
