"""Entrypoint for the FastAPI application."""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api import health, images, products
from app.core.config import get_settings

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="[%(asctime)s] %(levelname)s - %(name)s - %(message)s",
)

app = FastAPI(
    title=settings.app_name,
    version="0.1.0",
    description="Product catalog with image uploads stored on the local filesystem",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
    allow_credentials=True,
)

# Register API routers
app.include_router(health.router)  # Health checks at root level
app.include_router(products.router, prefix=settings.api_prefix)
app.include_router(images.router)  # Uploaded product images, served by filename
