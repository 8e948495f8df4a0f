from decimal import Decimal
from typing import Dict, List, Optional
from sqlalchemy.exc import IntegrityError
from ..db.session import get_session
from ..errors import DuplicateLine, InvalidInput, NotFound
from ..models.cart_item import CartItem
from ..utils.dto import to_cart_line_dto
from ..utils.money import D, round_money
from ..utils.validators import is_integer, is_number


class CartRepository:
    """Cart line persistence. Every line is returned as a DTO with its subtotal."""

    def __init__(self, session_factory=get_session):
        self._session_factory = session_factory

    def list_by_user(self, user_id: str) -> List[Dict]:
        with self._session_factory() as session:
            rows = (
                session.query(CartItem)
                .filter(CartItem.user_id == user_id)
                .order_by(CartItem.created_at.desc(), CartItem.id.desc())
                .all()
            )
            return [to_cart_line_dto(r) for r in rows]

    def find_by_id(self, item_id: int) -> Optional[Dict]:
        with self._session_factory() as session:
            row = session.get(CartItem, item_id)
            return to_cart_line_dto(row) if row else None

    def find_by_user_and_product(self, user_id: str, product_id: str) -> Optional[Dict]:
        with self._session_factory() as session:
            row = (
                session.query(CartItem)
                .filter(CartItem.user_id == user_id, CartItem.product_id == product_id)
                .first()
            )
            return to_cart_line_dto(row) if row else None

    def create(
        self,
        *,
        user_id: str,
        product_id: str,
        name: str,
        price,
        quantity: int,
        image: Optional[str] = None,
    ) -> Dict:
        if not user_id or not product_id or not name or not is_number(price) or quantity is None:
            raise InvalidInput("Missing required fields: productId, name, price, and quantity are required")
        if not is_integer(quantity) or quantity < 1:
            raise InvalidInput("Quantity must be at least 1")
        try:
            with self._session_factory() as session:
                row = CartItem(
                    user_id=user_id,
                    product_id=product_id,
                    name=name,
                    price=round_money(price),
                    quantity=quantity,
                    image=image or None,
                )
                session.add(row)
                session.flush()
                return to_cart_line_dto(row)
        except IntegrityError as exc:
            raise DuplicateLine() from exc

    def update_quantity(self, item_id: int, quantity: int) -> Dict:
        if not is_integer(quantity) or quantity < 1:
            raise InvalidInput("Quantity must be at least 1")
        with self._session_factory() as session:
            row = session.get(CartItem, item_id)
            if not row:
                raise NotFound("Cart item not found")
            row.quantity = quantity
            session.flush()
            return to_cart_line_dto(row)

    def delete(self, item_id: int) -> None:
        with self._session_factory() as session:
            row = session.get(CartItem, item_id)
            if not row:
                raise NotFound("Cart item not found")
            session.delete(row)
            session.flush()
        return None

    def delete_all_by_user(self, user_id: str) -> int:
        with self._session_factory() as session:
            count = (
                session.query(CartItem)
                .filter(CartItem.user_id == user_id)
                .delete(synchronize_session=False)
            )
            return int(count or 0)

    def total_by_user(self, user_id: str) -> float:
        with self._session_factory() as session:
            rows = session.query(CartItem.price, CartItem.quantity).filter(CartItem.user_id == user_id).all()
            total = sum((D(price) * qty for price, qty in rows), Decimal("0"))
            return float(total)
