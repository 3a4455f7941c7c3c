"""Public schema exports."""

from .outcome import Flash, Outcome, Redirect, Render
from .product import (
    FieldError,
    FormValidationResult,
    ImageUpload,
    ProductFormData,
    ProductInput,
    ProductResponse,
)

__all__ = [
    "FieldError",
    "Flash",
    "FormValidationResult",
    "ImageUpload",
    "Outcome",
    "ProductFormData",
    "ProductInput",
    "ProductResponse",
    "Redirect",
    "Render",
]
