"""Services module for business logic."""
from __future__ import annotations

from .form_validator import validate_product_form
from .image_storage import ImageStore
from .product_controller import ProductController
from .product_repository import ProductRepository

__all__ = [
    "ImageStore",
    "ProductController",
    "ProductRepository",
    "validate_product_form",
]
