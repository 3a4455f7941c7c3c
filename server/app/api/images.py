"""Serve stored product images by filename."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import FileResponse

from app.api.deps import get_image_store
from app.core.config import get_settings
from app.services.image_storage import ImageStore

logger = logging.getLogger(__name__)
settings = get_settings()

router = APIRouter(prefix=settings.images_url_prefix.rstrip("/"), tags=["images"])


@router.get("/{filename}", summary="Stored product image")
def get_image(filename: str, image_store: ImageStore = Depends(get_image_store)) -> FileResponse:
    """Return the image file written by ImageStore under ``filename``."""
    if filename in (".", "..") or not image_store.exists(filename):
        logger.debug(f"Image {filename!r} not found in {image_store.upload_dir}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Image not found")
    return FileResponse(image_store.path_for(filename))
