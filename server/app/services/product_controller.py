"""Request handling for the product catalog pages."""
from __future__ import annotations

import logging
from datetime import datetime, timezone

from app.models.product import Product
from app.schemas.outcome import Flash, Outcome, Redirect, Render
from app.schemas.product import (
    FieldError,
    ImageUpload,
    ProductFormData,
    ProductInput,
    ProductResponse,
)
from app.services.form_validator import IMAGE_FIELD, validate_product_form
from app.services.image_storage import ImageStore
from app.services.product_repository import ProductRepository

logger = logging.getLogger(__name__)

INDEX_VIEW = "products/index"
CREATE_VIEW = "products/create"
EDIT_VIEW = "products/edit"


class ProductController:
    """Lists, creates, edits and deletes products and keeps their images in sync.

    Every operation answers with an Outcome. Only validation failures render
    a form again; everything else ends in a redirect to the product list.
    """

    def __init__(
        self,
        repository: ProductRepository,
        image_store: ImageStore,
        *,
        list_url: str = "/products",
        images_url_prefix: str = "/images",
        max_image_bytes: int = 10 * 1024 * 1024,
    ) -> None:
        self._repository = repository
        self._image_store = image_store
        self._list_url = list_url
        self._images_url_prefix = images_url_prefix
        self._max_image_bytes = max_image_bytes

    def list_products(self) -> Render:
        products = self._repository.find_all()
        return Render(view=INDEX_VIEW, model={"products": [self._to_response(p) for p in products]})

    def show_create_form(self) -> Render:
        return Render(view=CREATE_VIEW, model={"product_form": ProductFormData()})

    def create_product(self, form: ProductFormData, image: ImageUpload | None) -> Outcome:
        """
        Create a product from a submitted form.

        The image is mandatory. It is written before the record, so a failed
        upload leaves the store untouched.

        Args:
            form: Submitted form values
            image: Uploaded image

        Returns:
            Redirect to the list on success, otherwise the creation form with errors
        """
        result = validate_product_form(
            form, image, image_required=True, max_image_bytes=self._max_image_bytes
        )
        if not result.is_valid:
            return self._create_form(form, result.errors)

        product_input = result.product_input
        image_file_name = self._image_store.save(product_input.image.content, product_input.image.filename)
        if image_file_name is None:
            return self._create_form(form, [FieldError(field=IMAGE_FIELD, message="Error uploading image file")])

        product = Product(
            name=product_input.name,
            brand=product_input.brand,
            category=product_input.category,
            price=product_input.price,
            description=product_input.description,
            created_at=datetime.now(timezone.utc),
            image_file_name=image_file_name,
        )
        self._repository.save(product)
        logger.info(f"Product created: id={product.id}, image={image_file_name}")

        return Redirect(location=self._list_url, flash=Flash.message("Product created successfully!"))

    def show_edit_form(self, product_id: int) -> Outcome:
        """Edit page for an existing product; unknown ids go back to the list."""
        product = self._repository.find_by_id(product_id)
        if product is None:
            logger.info(f"Edit requested for unknown product id={product_id}")
            return Redirect(location=self._list_url)

        product_form = ProductFormData(
            name=product.name,
            brand=product.brand,
            category=product.category,
            price=str(product.price),
            description=product.description,
        )
        return Render(
            view=EDIT_VIEW,
            model={"product": self._to_response(product), "product_form": product_form},
        )

    def update_product(self, product_id: int, form: ProductFormData, image: ImageUpload | None) -> Outcome:
        """
        Update a product from a submitted form.

        Unknown ids redirect silently. A new image replaces the old file; if
        saving it fails the product keeps its previous image name. Unexpected
        errors are reported as an error flash and never propagate.

        Args:
            product_id: Database identifier
            form: Submitted form values
            image: Replacement image, optional

        Returns:
            Redirect to the list, or the edit form with validation errors
        """
        try:
            product = self._repository.find_by_id(product_id)
            if product is None:
                logger.info(f"Update requested for unknown product id={product_id}")
                return Redirect(location=self._list_url)

            result = validate_product_form(
                form, image, image_required=False, max_image_bytes=self._max_image_bytes
            )
            if not result.is_valid:
                return Render(
                    view=EDIT_VIEW,
                    model={"product": self._to_response(product), "product_form": form},
                    errors=result.errors,
                )

            product_input = result.product_input
            if product_input.has_image:
                self._replace_image(product, product_input)

            product.name = product_input.name
            product.brand = product_input.brand
            product.category = product_input.category
            product.price = product_input.price
            product.description = product_input.description

            self._repository.save(product)
            logger.info(f"Product updated: id={product.id}")
        except Exception as e:
            logger.exception(f"Unexpected error updating product {product_id}: {e}")
            return Redirect(location=self._list_url, flash=Flash.error("Error updating product"))

        return Redirect(location=self._list_url, flash=Flash.message("Product updated successfully!"))

    def delete_product(self, product_id: int) -> Redirect:
        """
        Delete a product and its image file.

        The image is removed first on a best-effort basis. Unknown ids
        redirect silently; unexpected errors become an error flash.

        Args:
            product_id: Database identifier

        Returns:
            Redirect to the product list
        """
        try:
            product = self._repository.find_by_id(product_id)
            if product is None:
                logger.info(f"Delete requested for unknown product id={product_id}")
                return Redirect(location=self._list_url)

            if product.image_file_name is not None:
                self._delete_image(product.image_file_name)

            self._repository.delete(product)
            logger.info(f"Product deleted: id={product_id}")
        except Exception as e:
            logger.exception(f"Unexpected error deleting product {product_id}: {e}")
            return Redirect(location=self._list_url, flash=Flash.error("Error deleting product"))

        return Redirect(location=self._list_url, flash=Flash.message("Product deleted successfully!"))

    def _replace_image(self, product: Product, product_input: ProductInput) -> None:
        old_image = product.image_file_name
        if old_image is not None:
            self._delete_image(old_image)

        image_file_name = self._image_store.save(product_input.image.content, product_input.image.filename)
        if image_file_name is not None:
            product.image_file_name = image_file_name
        else:
            logger.warning(f"Keeping previous image for product {product.id}: new image could not be saved")

    def _delete_image(self, image_file_name: str) -> None:
        if not self._image_store.delete(image_file_name):
            logger.warning(f"Image {image_file_name} could not be deleted, continuing")

    def _create_form(self, form: ProductFormData, errors: list[FieldError]) -> Render:
        return Render(view=CREATE_VIEW, model={"product_form": form}, errors=errors)

    def _to_response(self, product: Product) -> ProductResponse:
        return ProductResponse.from_product(product, self._images_url_prefix)
