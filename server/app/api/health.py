"""Health check endpoints for monitoring service and dependency status."""
import os
from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.orm import Session

from app.api.deps import get_image_store
from app.core.db import get_session
from app.services.image_storage import ImageStore

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check() -> dict[str, str]:
    """Basic health check endpoint.
    
    Returns:
        Simple status response for load balancers
    """
    return {"status": "ok"}


@router.get("/health/detailed")
async def detailed_health_check(
    session: Session = Depends(get_session),
    image_store: ImageStore = Depends(get_image_store),
) -> dict[str, Any]:
    """Detailed health check for all service dependencies.
    
    Checks:
    - Database connectivity
    - Image storage directory exists (or can be created) and is writable
    
    Returns:
        Detailed health status for each component
    """
    health_status = {
        "status": "healthy",
        "components": {},
    }
    
    # Check Database
    try:
        session.execute(text("SELECT 1"))
        health_status["components"]["database"] = {
            "status": "healthy",
            "message": "Database connection successful",
        }
    except Exception as e:
        health_status["status"] = "unhealthy"
        health_status["components"]["database"] = {
            "status": "unhealthy",
            "message": f"Database connection failed: {str(e)}",
        }
    
    # Check image storage
    upload_dir = image_store.upload_dir
    try:
        upload_dir.mkdir(parents=True, exist_ok=True)
        if not os.access(upload_dir, os.W_OK):
            raise PermissionError(f"{upload_dir} is not writable")
        health_status["components"]["image_storage"] = {
            "status": "healthy",
            "message": f"Image directory {upload_dir} is writable",
        }
    except OSError as e:
        health_status["status"] = "unhealthy"
        health_status["components"]["image_storage"] = {
            "status": "unhealthy",
            "message": f"Image storage check failed: {str(e)}",
        }
    
    return health_status
