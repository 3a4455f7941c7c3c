"""Product repository for database access."""
from __future__ import annotations

from typing import Sequence

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.models.product import Product


class ProductRepository:
    """Handles database operations for Product entities."""

    def __init__(self, session: Session) -> None:
        """Initialize repository with a SQLAlchemy session.

        Args:
            session: Active database session for executing queries
        """
        self._session = session

    def find_all(self) -> Sequence[Product]:
        """Fetch every product, newest first.

        Returns:
            Sequence of Product instances
        """
        stmt = select(Product).order_by(Product.created_at.desc(), Product.id.desc())
        return self._session.scalars(stmt).all()

    def find_by_id(self, product_id: int) -> Product | None:
        """Fetch a product by its database ID.

        Args:
            product_id: Database identifier

        Returns:
            Product instance if found, None otherwise
        """
        return self._session.get(Product, product_id)

    def save(self, product: Product) -> Product:
        """Insert a new product or flush changes to an existing one.

        Args:
            product: Transient or persistent Product instance

        Returns:
            The saved Product, with its id assigned

        Raises:
            SQLAlchemyError: If the database operation fails
        """
        try:
            self._session.add(product)
            self._session.commit()
        except SQLAlchemyError:
            self._session.rollback()
            raise
        self._session.refresh(product)
        return product

    def delete(self, product: Product) -> None:
        """Delete a product.

        Args:
            product: Persistent Product instance

        Raises:
            SQLAlchemyError: If the database operation fails
        """
        try:
            self._session.delete(product)
            self._session.commit()
        except SQLAlchemyError:
            self._session.rollback()
            raise

    def count(self) -> int:
        """Return total number of products in the database.

        Not used by the controller; tests assert on it after create and delete.
        """
        return self._session.query(Product).count()
