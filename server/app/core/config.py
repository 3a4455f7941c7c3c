"""Application configuration loaded from environment variables."""
from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Central place for strongly typed application settings."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = Field(default="Product Catalog")
    environment: Literal["development", "staging", "production"] = Field(default="development")
    api_prefix: str = Field(default="")
    log_level: str = Field(default="INFO")

    database_url: str = Field(default="sqlite:///./catalog.db", validation_alias="DATABASE_URL")

    image_upload_dir: str = Field(default="public/images/")
    images_url_prefix: str = Field(default="/images")
    max_image_size_mb: int = Field(default=10, ge=1)

    flash_cookie_max_age: int = Field(default=60, ge=1)

    @model_validator(mode="after")
    def convert_database_url(self) -> "Settings":
        """Convert postgresql+psycopg:// (psycopg3) to postgresql:// (psycopg2)."""
        if self.database_url.startswith("postgresql+psycopg://"):
            self.database_url = self.database_url.replace("postgresql+psycopg://", "postgresql://")
        return self

    @property
    def max_image_bytes(self) -> int:
        return self.max_image_size_mb * 1024 * 1024

    @property
    def products_url(self) -> str:
        """Location of the product list page, used as the redirect target."""
        return f"{self.api_prefix}/products"


@lru_cache
def get_settings() -> Settings:
    """Return cached Settings instance so downstream code can import directly."""

    return Settings()
