from dataclasses import dataclass
from typing import Any, Dict, Optional
import requests

from ..errors import NotFound, UpstreamUnavailable
from ..utils.pagination import normalize_paging, paginate
from ..utils.validators import is_number
from .logging import log_event


REMOTE = "remote"
FALLBACK = "fallback"
ABSENT = "absent"


@dataclass(frozen=True)
class LookupResult:
    """Outcome of a catalog lookup, tagged with the source that answered."""

    source: str
    product: Optional[Dict[str, Any]] = None
    remote_error: Optional[str] = None

    @property
    def found(self) -> bool:
        return self.source != ABSENT


class CatalogService:
    """Product resolution and listing.

    Responsibilities:
    - Resolve a product id against the remote catalog, falling back to the
      static product table when the remote source fails
    - Serve the paginated product listing from the static table
    """

    def __init__(self, product_repo, *, base_url: Optional[str] = None, timeout: float = 3.0, http=None):
        self._products = product_repo
        self._base_url = (base_url or "").rstrip("/")
        self._timeout = timeout
        self._http = http or requests.Session()

    @property
    def remote_enabled(self) -> bool:
        return bool(self._base_url)

    def list_products(self, *, page: Any = None, limit: Any = None) -> Dict:
        """Return dict: { products: [...], pagination: {...} }"""
        p, ps = normalize_paging(page, limit)
        rows = [prod.to_dict() for prod in self._products.list_products()]
        products, meta = paginate(rows, p, ps)
        log_event(
            "info",
            "catalog.listed",
            page=p,
            limit=ps,
            total=meta["totalProducts"],
            returned=len(products),
        )
        return {"products": products, "pagination": meta}

    def lookup(self, product_id: str) -> LookupResult:
        remote_error = None
        if self.remote_enabled:
            product, remote_error = self._fetch_remote(product_id)
            if product is not None:
                return LookupResult(REMOTE, product)
        local = self._products.get_product(product_id)
        if local is not None:
            log_event("info", "catalog.fallback", product_id=product_id, remote_error=remote_error)
            return LookupResult(
                FALLBACK,
                {"id": local.id, "name": local.name, "price": local.price, "image": local.image},
                remote_error,
            )
        return LookupResult(ABSENT, None, remote_error)

    def resolve(self, product_id: str) -> Dict:
        """Return {id, name, price, image} or raise NotFound."""
        result = self.lookup(product_id)
        if result.found:
            return result.product
        log_event("warning", "catalog.not_found", product_id=product_id, remote_error=result.remote_error)
        if result.remote_error and result.remote_error != "not_found":
            raise UpstreamUnavailable()
        raise NotFound("Product not found. Please try another item.")

    def _fetch_remote(self, product_id: str):
        url = f"{self._base_url}/products/{product_id}"
        try:
            resp = self._http.get(url, timeout=self._timeout)
        except requests.RequestException as exc:
            log_event("warning", "catalog.remote_failed", product_id=product_id, error=type(exc).__name__)
            return None, "unreachable"
        if resp.status_code == 404:
            return None, "not_found"
        if not 200 <= resp.status_code < 300:
            log_event("warning", "catalog.remote_failed", product_id=product_id, status=resp.status_code)
            return None, f"http_{resp.status_code}"
        try:
            data = resp.json()
        except ValueError:
            # empty body is how the upstream answers unknown ids
            return None, "not_found"
        if not isinstance(data, dict) or data.get("id") is None:
            return None, "not_found"
        name = data.get("title") or data.get("name")
        price = data.get("price")
        if not isinstance(name, str) or not name.strip() or not is_number(price) or price < 0:
            log_event("warning", "catalog.remote_invalid", product_id=product_id)
            return None, "invalid_payload"
        return (
            {
                "id": str(data["id"]),
                "name": name,
                "price": price,
                "image": data.get("image"),
            },
            None,
        )
