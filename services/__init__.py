"""Storefront data sources living outside the database."""

from .product_repository import Product, ProductRepository

__all__ = [
    "Product",
    "ProductRepository",
]
