"""Shared FastAPI dependencies."""
from __future__ import annotations

from fastapi import Depends
from sqlalchemy.orm import Session

from app.core.config import get_settings
from app.core.db import get_session
from app.services.image_storage import ImageStore
from app.services.product_controller import ProductController
from app.services.product_repository import ProductRepository


def get_image_store() -> ImageStore:
    """Dependency to get the ImageStore rooted at the configured directory."""
    return ImageStore(get_settings().image_upload_dir)


def get_product_repository(session: Session = Depends(get_session)) -> ProductRepository:
    """Dependency to get ProductRepository instance."""
    return ProductRepository(session)


def get_product_controller(
    repository: ProductRepository = Depends(get_product_repository),
    image_store: ImageStore = Depends(get_image_store),
) -> ProductController:
    """Dependency to get a ProductController wired to the current request's session."""
    settings = get_settings()
    return ProductController(
        repository,
        image_store,
        list_url=settings.products_url,
        images_url_prefix=settings.images_url_prefix,
        max_image_bytes=settings.max_image_bytes,
    )
