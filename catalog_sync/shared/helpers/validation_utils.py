"""
Validation utility functions
"""

import math
import re
from typing import Any, Dict, Iterable

from catalog_sync.core.logging import get_logger

logger = get_logger(__name__)

DOMAIN_PATTERN = re.compile(
    r"^([a-z0-9]([a-z0-9-]*[a-z0-9])?\.)+[a-z]{2,}$", re.IGNORECASE
)


def is_valid_domain(value: Any) -> bool:
    """Check that value is a bare hostname with at least two labels"""
    if not isinstance(value, str) or not value:
        return False
    return bool(DOMAIN_PATTERN.match(value))


def validate_required_fields(
    obj: Dict[str, Any], required_keys: Iterable[str], name: str = "object"
) -> bool:
    """Check that every required key is present and not None. Never raises."""
    if not isinstance(obj, dict):
        logger.warning(f"{name} is not a mapping", type=type(obj).__name__)
        return False

    missing = [key for key in required_keys if obj.get(key) is None]
    if missing:
        logger.warning(f"Missing required fields in {name}", fields=", ".join(missing))
        return False
    return True


def is_valid_price(value: Any) -> bool:
    """True for a finite, non-negative number or numeric string"""
    if value is None or isinstance(value, bool):
        return False

    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return False
    else:
        return False

    return math.isfinite(number) and number >= 0


def is_valid_inventory(value: Any) -> bool:
    """True for a non-negative integer, integral float or integer string"""
    if value is None or isinstance(value, bool):
        return False

    if isinstance(value, int):
        return value >= 0
    if isinstance(value, float):
        return math.isfinite(value) and value.is_integer() and value >= 0
    if isinstance(value, str):
        text = value.strip()
        return text.isascii() and text.isdecimal()
    return False
