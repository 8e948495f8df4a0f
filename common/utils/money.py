from decimal import Decimal, ROUND_HALF_UP
from typing import Any


CENT = Decimal("0.01")


def D(x: Any) -> Decimal:
    return x if isinstance(x, Decimal) else Decimal(str(x or "0"))


def round_money(x: Any) -> Decimal:
    """Round half up to cents: 30.015 -> 30.02."""
    return D(x).quantize(CENT, rounding=ROUND_HALF_UP)
