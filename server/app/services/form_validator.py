"""Validation of submitted product forms."""
from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from app.schemas.product import (
    FieldError,
    FormValidationResult,
    ImageUpload,
    ProductFormData,
    ProductInput,
)

IMAGE_FIELD = "imageFile"
REQUIRED_FIELDS = ("name", "price")

_MESSAGES = {
    "decimal_parsing": "The price must be a number",
    "decimal_type": "The price must be a number",
    "greater_than_equal": "The price cannot be negative",
    "decimal_max_places": "The price can have at most 2 decimal places",
    "decimal_whole_digits": "The price is too large",
    "decimal_max_digits": "The price is too large",
}


def _message_for(error: dict[str, Any], field: str) -> str:
    if error["type"] == "missing":
        return f"The {field} is required"
    if field == "price" and error["type"] in _MESSAGES:
        return _MESSAGES[error["type"]]
    return error["msg"]


def validate_product_form(
    form: ProductFormData,
    image: ImageUpload | None,
    *,
    image_required: bool,
    max_image_bytes: int,
) -> FormValidationResult:
    """
    Validate a submitted product form.

    Blank required fields are reported as missing rather than passed on, so
    the user sees "The name is required" instead of a length error.

    Args:
        form: Raw submitted values
        image: Uploaded image, if the request carried one
        image_required: Whether an empty or absent image is an error
        max_image_bytes: Largest accepted image size

    Returns:
        FormValidationResult holding either a ProductInput or field errors
    """
    errors: list[FieldError] = []
    values: dict[str, Any] = {}

    for name, raw in form.model_dump().items():
        value = raw.strip()
        if not value and name in REQUIRED_FIELDS:
            continue
        values[name] = value

    product_input: ProductInput | None = None
    try:
        product_input = ProductInput(**values)
    except ValidationError as e:
        seen: set[str] = set()
        for error in e.errors():
            field = str(error["loc"][0]) if error["loc"] else "__root__"
            if field in seen:
                continue
            seen.add(field)
            errors.append(FieldError(field=field, message=_message_for(error, field)))

    has_image = image is not None and not image.is_empty
    if image_required and not has_image:
        errors.append(FieldError(field=IMAGE_FIELD, message="The image file is required"))
    elif has_image and image.size > max_image_bytes:
        max_mb = max_image_bytes / (1024 * 1024)
        errors.append(
            FieldError(
                field=IMAGE_FIELD,
                message=f"The image file exceeds the maximum size of {max_mb:g} MB",
            )
        )

    if errors:
        return FormValidationResult(is_valid=False, errors=errors)

    if has_image:
        product_input = product_input.model_copy(update={"image": image})
    return FormValidationResult(is_valid=True, product_input=product_input)
