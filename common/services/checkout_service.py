import re
import secrets
import time
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, List, Optional
from ..errors import InvalidInput
from ..utils.money import D, round_money
from ..utils.validators import is_number
from .logging import log_event


EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 100
MAX_ORDER_TOTAL = Decimal("1000000")
_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def _base36(number: int) -> str:
    if number == 0:
        return "0"
    digits = []
    while number:
        number, rem = divmod(number, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


def generate_order_id(now_ms: Optional[int] = None) -> str:
    ms = int(time.time() * 1000) if now_ms is None else now_ms
    return f"ORD-{_base36(ms)}-{secrets.token_hex(4)}".upper()


class CheckoutService:
    """Turns a client cart snapshot plus customer details into a receipt.

    The snapshot is trusted as submitted and the cart itself is left
    untouched; clearing it is up to the caller.
    """

    def checkout(self, *, cart_items: Any, name: Any, email: Any) -> Dict:
        self._validate(cart_items, name, email)

        lines: List[Dict] = []
        total = Decimal("0")
        for item in cart_items:
            subtotal = round_money(D(item["price"]) * D(item["quantity"]))
            total += subtotal
            lines.append(
                {
                    "productId": item["productId"],
                    "name": item["name"],
                    "price": item["price"],
                    "quantity": item["quantity"],
                    "subtotal": float(subtotal),
                }
            )
        total = round_money(total)
        if total <= 0:
            raise InvalidInput("Invalid cart total. Please check your items.")
        if total > MAX_ORDER_TOTAL:
            raise InvalidInput("Order total exceeds maximum allowed amount.")

        order_id = generate_order_id()
        receipt = {
            "orderId": order_id,
            "total": float(total),
            "timestamp": datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "items": lines,
            "customer": {"name": name.strip(), "email": email.lower()},
        }
        log_event("info", "checkout.completed", order_id=order_id, total=float(total), items=len(lines))
        return receipt

    @staticmethod
    def _validate(cart_items: Any, name: Any, email: Any) -> None:
        if not isinstance(cart_items, list):
            raise InvalidInput("Cart items must be an array")
        if not cart_items:
            raise InvalidInput("Cart is empty. Please add items before checkout.")
        for idx, item in enumerate(cart_items, start=1):
            if (
                not isinstance(item, dict)
                or not isinstance(item.get("productId"), str)
                or not item["productId"].strip()
                or not isinstance(item.get("name"), str)
                or not item["name"].strip()
                or not is_number(item.get("price"))
                or not is_number(item.get("quantity"))
            ):
                raise InvalidInput(f"Invalid cart item at position {idx}")

        if not isinstance(name, str) or not name.strip():
            raise InvalidInput("Name is required and must be a string")
        trimmed = name.strip()
        if len(trimmed) < NAME_MIN_LENGTH:
            raise InvalidInput(f"Name must be at least {NAME_MIN_LENGTH} characters")
        if len(trimmed) > NAME_MAX_LENGTH:
            raise InvalidInput(f"Name must be at most {NAME_MAX_LENGTH} characters")

        if not isinstance(email, str) or not email:
            raise InvalidInput("Email is required and must be a string")
        if not EMAIL_RE.fullmatch(email):
            raise InvalidInput("Please enter a valid email address")
