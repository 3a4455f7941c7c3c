"""Tests for product form validation."""
from __future__ import annotations

from decimal import Decimal

from app.schemas.product import ImageUpload, ProductFormData
from app.services.form_validator import IMAGE_FIELD, validate_product_form

MAX_BYTES = 1024


def _validate(form: ProductFormData, image: ImageUpload | None = None, *, image_required: bool = True):
    return validate_product_form(form, image, image_required=image_required, max_image_bytes=MAX_BYTES)


def _messages(result) -> dict[str, str]:
    return {error.field: error.message for error in result.errors}


def test_valid_form_with_image(widget_form: ProductFormData, png_image: ImageUpload) -> None:
    result = _validate(widget_form, png_image)

    assert result.is_valid
    assert result.errors == []
    product_input = result.product_input
    assert product_input.name == "Widget"
    assert product_input.price == Decimal("9.99")
    assert product_input.image == png_image
    assert product_input.has_image


def test_optional_fields_default_to_empty() -> None:
    form = ProductFormData(name="Widget", price="0")

    result = _validate(form, image_required=False)

    assert result.is_valid
    assert result.product_input.brand == ""
    assert result.product_input.description == ""
    assert result.product_input.price == Decimal("0")
    assert result.product_input.image is None


def test_whitespace_is_stripped() -> None:
    form = ProductFormData(name="  Widget ", brand=" Northwind ", price=" 5.00 ")

    result = _validate(form, image_required=False)

    assert result.is_valid
    assert result.product_input.name == "Widget"
    assert result.product_input.brand == "Northwind"


def test_missing_name_and_price() -> None:
    result = _validate(ProductFormData(name="   "), image_required=False)

    assert not result.is_valid
    assert result.product_input is None
    assert _messages(result) == {
        "name": "The name is required",
        "price": "The price is required",
    }


def test_price_must_be_a_number() -> None:
    result = _validate(ProductFormData(name="Widget", price="cheap"), image_required=False)

    assert _messages(result) == {"price": "The price must be a number"}


def test_price_cannot_be_negative() -> None:
    result = _validate(ProductFormData(name="Widget", price="-0.01"), image_required=False)

    assert _messages(result) == {"price": "The price cannot be negative"}


def test_price_has_at_most_two_decimals() -> None:
    result = _validate(ProductFormData(name="Widget", price="1.999"), image_required=False)

    assert _messages(result) == {"price": "The price can have at most 2 decimal places"}


def test_name_too_long() -> None:
    result = _validate(ProductFormData(name="x" * 256, price="1"), image_required=False)

    assert list(_messages(result)) == ["name"]


def test_image_required_when_absent(widget_form: ProductFormData) -> None:
    result = _validate(widget_form, None)

    assert not result.is_valid
    assert _messages(result) == {IMAGE_FIELD: "The image file is required"}


def test_image_required_when_empty(widget_form: ProductFormData) -> None:
    result = _validate(widget_form, ImageUpload(filename="empty.png", content=b""))

    assert _messages(result) == {IMAGE_FIELD: "The image file is required"}


def test_empty_image_ignored_when_optional(widget_form: ProductFormData) -> None:
    result = _validate(widget_form, ImageUpload(filename="", content=b""), image_required=False)

    assert result.is_valid
    assert result.product_input.image is None
    assert not result.product_input.has_image


def test_image_too_large(widget_form: ProductFormData) -> None:
    big = ImageUpload(filename="big.png", content=b"x" * (MAX_BYTES + 1))

    result = _validate(widget_form, big, image_required=False)

    assert not result.is_valid
    assert list(_messages(result)) == [IMAGE_FIELD]
    assert "maximum size" in _messages(result)[IMAGE_FIELD]


def test_field_and_image_errors_are_collected_together() -> None:
    result = _validate(ProductFormData(price="1"), None)

    assert set(_messages(result)) == {"name", IMAGE_FIELD}
