"""Static product table used for the storefront listing and as the catalog fallback."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional


@dataclass
class Product:
    """A single catalog entry."""

    id: str
    name: str
    price: float
    image: str
    description: str = ""
    category: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "price": self.price,
            "description": self.description,
            "image": self.image,
            "category": self.category,
        }


class ProductRepository:
    """Read-only, file-backed product table.

    The file is read once on first access; the table is a fixed demo dataset.
    """

    def __init__(self, data_file: Path) -> None:
        self._data_file = data_file
        self._products: Optional[List[Product]] = None

    def list_products(self) -> List[Product]:
        """Return every product in file order."""

        if self._products is None:
            self._products = [Product(**item) for item in self._load()]
        return list(self._products)

    def get_product(self, product_id: str) -> Optional[Product]:
        """Look a product up by identifier."""

        for item in self.list_products():
            if item.id == product_id:
                return item
        return None

    def _load(self) -> List[Dict[str, Any]]:
        if not self._data_file.exists():
            return []
        text = self._data_file.read_text(encoding="utf-8")
        if not text.strip():
            return []
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Product table is not valid JSON: {self._data_file}") from exc
        if not isinstance(payload, list):
            raise ValueError("Product table must be a JSON array.")
        normalized: List[Dict[str, Any]] = []
        for item in payload:
            if not isinstance(item, dict) or item.get("id") in (None, ""):
                continue
            normalized.append(
                {
                    "id": str(item["id"]),
                    "name": str(item.get("name", "Unnamed product")),
                    "price": float(item.get("price", 0) or 0),
                    "image": str(item.get("image", "")),
                    "description": str(item.get("description", "")),
                    "category": str(item.get("category", "")),
                }
            )
        return normalized
