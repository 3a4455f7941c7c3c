"""Pydantic schemas for product resources."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.models.product import Product


NonEmptyStr = Annotated[str, Field(min_length=1, max_length=255)]
ShortStr = Annotated[str, Field(max_length=255)]


@dataclass(frozen=True)
class ImageUpload:
    """Raw bytes and client-side filename of an uploaded image."""

    filename: str | None
    content: bytes = b""

    @property
    def is_empty(self) -> bool:
        return not self.content

    @property
    def size(self) -> int:
        return len(self.content)


class ProductFormData(BaseModel):
    """Form values exactly as submitted, or as pre-filled for the edit page.

    Nothing here is validated; an empty instance backs the creation form.
    """

    name: str = Field(default="", description="Display name for the product")
    brand: str = Field(default="", description="Manufacturer or brand")
    category: str = Field(default="", description="Catalog category")
    price: str = Field(default="", description="Unit price as typed by the user")
    description: str = Field(default="", description="Optional marketing copy")


class ProductInput(BaseModel):
    """Validated form values used to create or update a product."""

    model_config = ConfigDict(frozen=True)

    name: NonEmptyStr = Field(description="Display name for the product")
    brand: ShortStr = Field(default="", description="Manufacturer or brand")
    category: ShortStr = Field(default="", description="Catalog category")
    price: Decimal = Field(ge=0, max_digits=12, decimal_places=2, description="Unit price")
    description: str = Field(default="", max_length=5000, description="Optional marketing copy")
    image: ImageUpload | None = Field(default=None, description="Newly uploaded image, if any")

    @field_validator("name", "brand", "category", "description", mode="before")
    @classmethod
    def strip_whitespace(cls, value: str) -> str:
        if isinstance(value, str):
            value = value.strip()
        return value

    @property
    def has_image(self) -> bool:
        return self.image is not None and not self.image.is_empty


class ProductResponse(BaseModel):
    """Product as exposed to pages and API clients."""

    id: int = Field(description="Database identifier")
    name: str
    brand: str
    category: str
    price: Decimal
    description: str
    created_at: datetime = Field(description="Timestamp when the product was created")
    image_file_name: str | None = Field(default=None, description="Stored image filename")
    image_url: str | None = Field(default=None, description="Public URL of the stored image")

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def from_product(cls, product: Product, images_url_prefix: str) -> "ProductResponse":
        response = cls.model_validate(product)
        if response.image_file_name:
            prefix = images_url_prefix.rstrip("/")
            response.image_url = f"{prefix}/{response.image_file_name}"
        return response


@dataclass(frozen=True)
class FieldError:
    """A single validation message bound to a form field."""

    field: str
    message: str


@dataclass
class FormValidationResult:
    """Result of form validation: either a ProductInput or field errors."""

    is_valid: bool
    errors: list[FieldError] = field(default_factory=list)
    product_input: ProductInput | None = None
