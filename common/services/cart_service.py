from typing import Dict, Tuple
from ..errors import CartConflict, DuplicateLine, LimitExceeded
from ..utils.validators import MAX_QUANTITY, ensure_item_id, ensure_product_id, ensure_quantity
from .logging import log_event


class CartService:
    """Cart operations layered on the cart repository.

    Adding a product that is already in the cart merges into the existing
    line; every quantity is checked against [1, MAX_QUANTITY] before the
    repository is touched.
    """

    def __init__(self, repository, catalog):
        self._repo = repository
        self._catalog = catalog

    def get_cart(self, *, user_id: str) -> Dict:
        items = self._repo.list_by_user(user_id)
        total = self._repo.total_by_user(user_id)
        return {"items": items, "total": total}

    def add_item(self, *, user_id: str, product_id: str, quantity: int) -> Tuple[Dict, bool]:
        """Add to cart. Returns (line, created)."""
        pid = ensure_product_id(product_id)
        qnty = ensure_quantity(quantity)

        existing = self._repo.find_by_user_and_product(user_id, pid)
        if existing:
            new_q = existing["quantity"] + qnty
            if new_q > MAX_QUANTITY:
                log_event("warning", "cart.limit_exceeded", user_id=user_id, product_id=pid, requested=new_q)
                raise LimitExceeded()
            line = self._repo.update_quantity(existing["id"], new_q)
            log_event("info", "cart.merged", user_id=user_id, item_id=line["id"], quantity=new_q)
            return line, False

        product = self._catalog.resolve(pid)
        try:
            line = self._repo.create(
                user_id=user_id,
                product_id=pid,
                name=product["name"],
                price=product["price"],
                quantity=qnty,
                image=product.get("image"),
            )
        except DuplicateLine as exc:
            # another request created the line after our lookup
            log_event("warning", "cart.create_conflict", user_id=user_id, product_id=pid)
            raise CartConflict() from exc
        log_event("info", "cart.created", user_id=user_id, item_id=line["id"], product_id=line["productId"])
        return line, True

    def update_item(self, *, item_id, quantity) -> Dict:
        iid = ensure_item_id(item_id)
        qnty = ensure_quantity(quantity)
        line = self._repo.update_quantity(iid, qnty)
        log_event("info", "cart.updated", item_id=iid, quantity=qnty)
        return line

    def remove_item(self, *, item_id) -> None:
        iid = ensure_item_id(item_id)
        self._repo.delete(iid)
        log_event("info", "cart.removed", item_id=iid)
        return None

    def clear_cart(self, *, user_id: str) -> int:
        removed = self._repo.delete_all_by_user(user_id)
        log_event("info", "cart.cleared", user_id=user_id, removed=removed)
        return removed
