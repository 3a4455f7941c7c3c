"""Product catalog pages: list, create, edit and delete."""
from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.concurrency import run_in_threadpool
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, RedirectResponse, Response
from pydantic import BaseModel, Field
from starlette.datastructures import UploadFile

from app.api.deps import get_product_controller
from app.api.flash import clear_flashes, read_flashes, set_flash
from app.core.config import get_settings
from app.schemas.outcome import Outcome, Redirect
from app.schemas.product import FieldError, ImageUpload, ProductFormData
from app.services.form_validator import IMAGE_FIELD
from app.services.product_controller import ProductController

logger = logging.getLogger(__name__)
settings = get_settings()

router = APIRouter(prefix="/products", tags=["products"])

FORM_FIELDS = tuple(ProductFormData.model_fields)


class PageResponse(BaseModel):
    """A rendered page: view name, its model, validation errors and pending flashes."""

    view: str = Field(description="Name of the view to render")
    model: dict[str, Any] = Field(default_factory=dict, description="Data backing the view")
    errors: list[FieldError] = Field(default_factory=list, description="Form validation errors")
    flash: dict[str, str | None] = Field(default_factory=dict, description="One-time notifications")


async def read_limited(upload: UploadFile, max_bytes: int) -> bytes:
    """Read at most ``max_bytes + 1`` bytes of ``upload``.

    One byte past the limit is enough for validation to reject the image,
    so an oversized upload is never held in memory in full.
    """
    if upload.size is not None and upload.size > max_bytes:
        logger.info(f"Image upload {upload.filename!r} is {upload.size} bytes, over the {max_bytes} byte limit")
    return await upload.read(max_bytes + 1)


async def read_product_form(request: Request) -> tuple[ProductFormData, ImageUpload | None]:
    """Read the multipart product form and the optional image from ``request``.

    A file input left empty by the browser arrives as an upload with no
    content; it is passed on as an empty ImageUpload so the controller can
    tell it apart from a real image.
    """
    form = await request.form()
    values = {name: form.get(name) for name in FORM_FIELDS}
    form_data = ProductFormData(**{name: value for name, value in values.items() if isinstance(value, str)})

    image: ImageUpload | None = None
    upload = form.get(IMAGE_FIELD)
    if isinstance(upload, UploadFile):
        try:
            content = await read_limited(upload, settings.max_image_bytes)
        finally:
            await upload.close()
        image = ImageUpload(filename=upload.filename or None, content=content)
        logger.debug(f"Received image upload {upload.filename!r} ({len(content)} bytes)")

    return form_data, image


def to_response(request: Request, outcome: Outcome) -> Response:
    """Turn a controller outcome into an HTTP response."""
    if isinstance(outcome, Redirect):
        response = RedirectResponse(url=outcome.location, status_code=status.HTTP_303_SEE_OTHER)
        if outcome.flash is not None:
            set_flash(response, outcome.flash, settings.flash_cookie_max_age)
        return response

    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY if outcome.has_errors else status.HTTP_200_OK
    page = PageResponse(
        view=outcome.view,
        model=outcome.model,
        errors=outcome.errors,
        flash=read_flashes(request),
    )
    response = JSONResponse(status_code=status_code, content=jsonable_encoder(page))
    clear_flashes(request, response)
    return response


@router.get("", summary="List products")
@router.get("/", include_in_schema=False)
def list_products(
    request: Request,
    controller: ProductController = Depends(get_product_controller),
) -> Response:
    """
    List every product.

    Flash notifications left by a previous redirect are returned once and
    then cleared.
    """
    return to_response(request, controller.list_products())


@router.get("/create", summary="Empty product creation form")
def show_create_form(
    request: Request,
    controller: ProductController = Depends(get_product_controller),
) -> Response:
    return to_response(request, controller.show_create_form())


@router.post("/create", summary="Create a product")
async def create_product(
    request: Request,
    controller: ProductController = Depends(get_product_controller),
) -> Response:
    """
    Create a product from a multipart form.

    Form fields: name, brand, category, price, description, imageFile.

    Returns:
        303 redirect to the list on success, 422 with the form and errors otherwise
    """
    form_data, image = await read_product_form(request)
    outcome = await run_in_threadpool(controller.create_product, form_data, image)
    return to_response(request, outcome)


@router.get("/edit", summary="Product edit form")
def show_edit_form(
    request: Request,
    product_id: int = Query(alias="id", description="Database identifier"),
    controller: ProductController = Depends(get_product_controller),
) -> Response:
    """Edit form for a product; unknown ids redirect to the list."""
    return to_response(request, controller.show_edit_form(product_id))


@router.post("/edit", summary="Update a product")
async def update_product(
    request: Request,
    product_id: int = Query(alias="id", description="Database identifier"),
    controller: ProductController = Depends(get_product_controller),
) -> Response:
    """
    Update a product from a multipart form.

    The image is only replaced when a non-empty imageFile is submitted.

    Returns:
        303 redirect to the list, or 422 with the form and errors
    """
    form_data, image = await read_product_form(request)
    outcome = await run_in_threadpool(controller.update_product, product_id, form_data, image)
    return to_response(request, outcome)


@router.get("/delete", summary="Delete a product")
def delete_product(
    request: Request,
    product_id: int = Query(alias="id", description="Database identifier"),
    controller: ProductController = Depends(get_product_controller),
) -> Response:
    """Delete a product and its image, then redirect to the list."""
    return to_response(request, controller.delete_product(product_id))
