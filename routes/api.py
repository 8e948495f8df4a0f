"""JSON API for the storefront: products, cart and checkout."""

from __future__ import annotations

import logging
from typing import Any, Dict

from flask import Blueprint, current_app, jsonify, request
from werkzeug.exceptions import HTTPException

from common.errors import Internal, StorefrontError
from common.services.logging import log_event


api_bp = Blueprint("storefront_api", __name__, url_prefix="/api")

logger = logging.getLogger(__name__)


def _components() -> Dict[str, Any]:
    return current_app.extensions["storefront_components"]


def _user_id() -> str:
    return current_app.config["STOREFRONT_CONFIG"].default_user_id


def _json_body() -> Dict[str, Any]:
    payload = request.get_json(silent=True)
    return payload if isinstance(payload, dict) else {}


@api_bp.errorhandler(StorefrontError)
def handle_storefront_error(exc: StorefrontError):
    log_event(
        "warning" if exc.status_code < 500 else "error",
        "api.request_failed",
        path=request.path,
        method=request.method,
        status=exc.status_code,
        error=exc.message,
    )
    return jsonify(exc.to_dict()), exc.status_code


@api_bp.errorhandler(Exception)
def handle_unexpected_error(exc: Exception):
    if isinstance(exc, HTTPException):
        return jsonify({"error": exc.description or exc.name}), exc.code
    logger.exception("Unhandled error on %s %s", request.method, request.path)
    log_event("error", "api.internal_error", path=request.path, method=request.method, error=type(exc).__name__)
    err = Internal()
    return jsonify(err.to_dict()), err.status_code


@api_bp.get("/health")
def health():
    return jsonify({"status": "ok", "message": "Storefront API is running"})


@api_bp.get("/products")
def list_products():
    catalog = _components()["catalog"]
    result = catalog.list_products(page=request.args.get("page"), limit=request.args.get("limit"))
    return jsonify(result)


@api_bp.get("/cart")
def get_cart():
    cart = _components()["cart_service"].get_cart(user_id=_user_id())
    return jsonify(cart)


@api_bp.post("/cart")
def add_or_update_cart_item():
    payload = _json_body()
    cart_service = _components()["cart_service"]
    item_id = payload.get("id")
    quantity = payload.get("quantity")

    if item_id:
        line = cart_service.update_item(item_id=item_id, quantity=quantity)
        return jsonify({"cartItem": line})

    line, created = cart_service.add_item(
        user_id=_user_id(),
        product_id=payload.get("productId"),
        quantity=quantity,
    )
    return jsonify({"cartItem": line}), 201 if created else 200


@api_bp.delete("/cart/<item_id>")
def remove_cart_item(item_id: str):
    _components()["cart_service"].remove_item(item_id=item_id)
    return jsonify({"message": "Cart item removed successfully"})


@api_bp.delete("/cart")
def clear_cart():
    removed = _components()["cart_service"].clear_cart(user_id=_user_id())
    return jsonify({"message": "Cart cleared", "removed": removed})


@api_bp.post("/checkout")
def checkout():
    payload = _json_body()
    customer = payload.get("customer") if isinstance(payload.get("customer"), dict) else {}
    receipt = _components()["checkout_service"].checkout(
        cart_items=payload.get("cartItems"),
        name=payload.get("name", customer.get("name")),
        email=payload.get("email", customer.get("email")),
    )
    return jsonify(receipt)
