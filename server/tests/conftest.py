"""Pytest configuration and shared fixtures."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Callable, Generator

# Settings are read on first import of the app; keep tests off any real database
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.api.deps import get_image_store
from app.core.db import get_session
from app.main import app
from app.models.base import Base
from app.schemas.product import ImageUpload, ProductFormData
from app.services.image_storage import ImageStore
from app.services.product_controller import ProductController
from app.services.product_repository import ProductRepository

# SQLite in memory by default; point at PostgreSQL to match production
TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite+pysqlite:///:memory:")

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


@pytest.fixture
def db_engine():
    """Create a fresh schema for every test."""
    if TEST_DATABASE_URL.startswith("sqlite"):
        engine = create_engine(
            TEST_DATABASE_URL,
            future=True,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    else:
        engine = create_engine(TEST_DATABASE_URL, future=True, pool_pre_ping=True)

    Base.metadata.create_all(engine)

    yield engine

    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def db_session(db_engine) -> Generator[Session, None, None]:
    """Provide a database session bound to the test engine."""
    SessionLocal = sessionmaker(bind=db_engine, autoflush=False, autocommit=False, expire_on_commit=False)
    session = SessionLocal()

    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def image_store(tmp_path: Path) -> ImageStore:
    """ImageStore writing under pytest's tmp_path; the directory starts missing."""
    return ImageStore(tmp_path / "public" / "images")


@pytest.fixture
def repository(db_session: Session) -> ProductRepository:
    return ProductRepository(db_session)


@pytest.fixture
def controller(repository: ProductRepository, image_store: ImageStore) -> ProductController:
    return ProductController(repository, image_store, list_url="/products", max_image_bytes=1024 * 1024)


@pytest.fixture
def png_image() -> ImageUpload:
    return ImageUpload(filename="photo.png", content=PNG_BYTES)


@pytest.fixture
def widget_form() -> ProductFormData:
    return ProductFormData(
        name="Widget",
        brand="Northwind",
        category="Tools",
        price="9.99",
        description="A very useful widget",
    )


@pytest.fixture
def create_product(
    controller: ProductController,
    repository: ProductRepository,
    widget_form: ProductFormData,
    png_image: ImageUpload,
) -> Callable[..., object]:
    """Create a product with an image through the controller and return it."""

    def _create(**overrides: str):
        form = widget_form.model_copy(update=overrides)
        controller.create_product(form, png_image)
        return repository.find_all()[0]

    return _create


@pytest.fixture
def stored_files(image_store: ImageStore) -> Callable[[], list[str]]:
    """Return a callable listing the files currently in the image store."""

    def _list() -> list[str]:
        if not image_store.upload_dir.exists():
            return []
        return sorted(p.name for p in image_store.upload_dir.iterdir())

    return _list


@pytest.fixture
def client(db_session: Session, image_store: ImageStore):
    """Create a FastAPI test client with overridden database session and image store."""

    def override_get_session():
        yield db_session

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_image_store] = lambda: image_store

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
