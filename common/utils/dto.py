from typing import Any, Dict

from .money import D


def to_cart_line_dto(row: Any) -> Dict:
    price = D(getattr(row, "price", 0))
    quantity = int(getattr(row, "quantity", 0) or 0)
    created_at = getattr(row, "created_at", None)
    return {
        "id": getattr(row, "id", None),
        "userId": getattr(row, "user_id", None),
        "productId": getattr(row, "product_id", None),
        "name": getattr(row, "name", None),
        "price": float(price),
        "quantity": quantity,
        "image": getattr(row, "image", None),
        "createdAt": created_at.isoformat() if created_at else None,
        "subtotal": float(price * quantity),
    }
