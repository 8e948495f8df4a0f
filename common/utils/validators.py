import math
import re
from decimal import Decimal
from typing import Any

from ..errors import InvalidInput


MAX_QUANTITY = 999
MAX_ITEM_ID = 2 ** 63 - 1

_ASCII_DIGITS = re.compile(r"[0-9]+")


def is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def is_number(value: Any) -> bool:
    if isinstance(value, float) and not math.isfinite(value):
        return False
    if isinstance(value, Decimal) and not value.is_finite():
        return False
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


def ensure_quantity(value: Any, field: str = "quantity") -> int:
    if value is None:
        raise InvalidInput(f"{field.capitalize()} is required")
    if not is_integer(value):
        raise InvalidInput(f"Invalid {field}: must be an integer")
    if value < 1:
        raise InvalidInput(f"Invalid {field}: must be at least 1")
    if value > MAX_QUANTITY:
        raise InvalidInput(f"Invalid {field}: maximum is {MAX_QUANTITY}")
    return value


def ensure_product_id(value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidInput("Invalid productId: must be a non-empty string")
    return value.strip()


def ensure_item_id(value: Any) -> int:
    """Accept a positive integer or its decimal string form (path parameters)."""
    if isinstance(value, str) and _ASCII_DIGITS.fullmatch(value.strip()):
        value = int(value.strip())
    if not is_integer(value) or not 1 <= value <= MAX_ITEM_ID:
        raise InvalidInput("Invalid cart item ID. Must be a positive number.")
    return value
