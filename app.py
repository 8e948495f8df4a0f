"""Storefront demo Flask application: catalog, cart and checkout API."""

from __future__ import annotations

from typing import Optional

from flask import Flask, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from common.db.session import get_session, init_db
from common.services.cart_repository import CartRepository
from common.services.cart_service import CartService
from common.services.catalog_service import CatalogService
from common.services.checkout_service import CheckoutService
from common.services.logging import configure_logging, log_event
from config import StorefrontConfig
from routes import api
from services import ProductRepository


def create_app(config: Optional[StorefrontConfig] = None, *, http=None) -> Flask:
    config = config or StorefrontConfig.load()
    configure_logging(config.log_level)
    init_db(config.database_url)

    app = Flask(__name__)
    app.config["SECRET_KEY"] = config.secret_key
    app.config["STOREFRONT_CONFIG"] = config
    CORS(app, resources={r"/api/*": {"origins": "*"}})

    product_repo = ProductRepository(config.product_data_file)
    catalog = CatalogService(
        product_repo,
        base_url=config.catalog_api_url,
        timeout=config.catalog_timeout,
        http=http,
    )
    cart_repo = CartRepository(get_session)
    components = {
        "product_repo": product_repo,
        "catalog": catalog,
        "cart_repo": cart_repo,
        "cart_service": CartService(cart_repo, catalog),
        "checkout_service": CheckoutService(),
    }
    app.extensions["storefront_components"] = components

    app.register_blueprint(api.api_bp)

    @app.errorhandler(HTTPException)
    def http_error(exc: HTTPException):
        if request.path.startswith("/api"):
            return jsonify({"error": exc.description or exc.name}), exc.code
        return exc

    log_event(
        "info",
        "app.started",
        database=config.database_url.split("://")[0],
        catalog_remote=bool(config.catalog_api_url),
    )
    return app


def main() -> None:
    config = StorefrontConfig.load()
    app = create_app(config)
    app.run(host=config.host, port=config.port, debug=False)


if __name__ == "__main__":
    main()
