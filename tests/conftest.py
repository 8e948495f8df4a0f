from pathlib import Path

import pytest
import requests

from app import create_app
from common.db.session import get_session, init_db
from common.services.cart_repository import CartRepository
from common.services.cart_service import CartService
from common.services.catalog_service import CatalogService
from common.services.checkout_service import CheckoutService
from config import StorefrontConfig
from services import ProductRepository


PROJECT_ROOT = Path(__file__).resolve().parents[1]
TEST_USER = "test-user"


class FakeResponse:
    def __init__(self, status_code=200, payload=None):
        self.status_code = status_code
        self._payload = payload

    def json(self):
        if self._payload is None:
            raise ValueError("empty body")
        return self._payload


class FakeHttp:
    """Stands in for requests.Session; answers by the trailing product id."""

    def __init__(self):
        self.products = {}
        self.error = None
        self.status_code = None
        self.calls = []

    def get(self, url, timeout=None):
        self.calls.append((url, timeout))
        if self.error is not None:
            raise self.error
        if self.status_code is not None:
            return FakeResponse(self.status_code)
        product_id = url.rsplit("/", 1)[-1]
        if product_id in self.products:
            return FakeResponse(200, self.products[product_id])
        return FakeResponse(200, None)


@pytest.fixture
def fake_http():
    return FakeHttp()


@pytest.fixture
def unreachable_http(fake_http):
    fake_http.error = requests.ConnectionError("network down")
    return fake_http


@pytest.fixture
def db():
    init_db("sqlite:///:memory:")
    return get_session


@pytest.fixture
def product_repo():
    return ProductRepository(PROJECT_ROOT / "data" / "products.json")


@pytest.fixture
def catalog(product_repo):
    return CatalogService(product_repo)


@pytest.fixture
def cart_repo(db):
    return CartRepository(db)


@pytest.fixture
def cart_service(cart_repo, catalog):
    return CartService(cart_repo, catalog)


@pytest.fixture
def checkout_service():
    return CheckoutService()


@pytest.fixture
def test_config():
    return StorefrontConfig(
        secret_key="test",
        project_root=PROJECT_ROOT,
        database_url="sqlite:///:memory:",
        catalog_api_url="",
        catalog_timeout=1.0,
        default_user_id=TEST_USER,
        log_level="ERROR",
    )


@pytest.fixture
def app(test_config):
    flask_app = create_app(test_config)
    flask_app.config["TESTING"] = True
    return flask_app


@pytest.fixture
def client(app):
    return app.test_client()


def make_line(cart_repo, product_id="1", quantity=1, price=10.0, user_id=TEST_USER):
    return cart_repo.create(
        user_id=user_id,
        product_id=product_id,
        name=f"Product {product_id}",
        price=price,
        quantity=quantity,
        image=None,
    )


@pytest.fixture
def line_factory(cart_repo):
    def _make(**kwargs):
        return make_line(cart_repo, **kwargs)

    return _make
