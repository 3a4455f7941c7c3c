#!/usr/bin/env python3
"""Prepare the catalog database and image directory, then upgrade the schema."""
import logging
import sys
import time
from pathlib import Path

from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, text
from sqlalchemy.exc import OperationalError

SERVER_DIR = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(SERVER_DIR))

from app.core.config import get_settings

logger = logging.getLogger(__name__)
logging.basicConfig(level=logging.INFO, format="[%(asctime)s] %(levelname)s - %(message)s")


def database_ready(database_url: str, attempts: int = 30, delay: float = 2.0) -> bool:
    """Poll ``database_url`` with ``SELECT 1`` until it answers or attempts run out."""
    engine = create_engine(database_url, pool_pre_ping=True)
    try:
        for attempt in range(1, attempts + 1):
            try:
                with engine.connect() as conn:
                    conn.execute(text("SELECT 1"))
                return True
            except OperationalError as e:
                logger.warning(f"Database not ready ({attempt}/{attempts}): {e}")
                if attempt < attempts:
                    time.sleep(delay)
        return False
    finally:
        engine.dispose()


def main() -> int:
    settings = get_settings()

    if not database_ready(settings.database_url):
        logger.error("Database is not available. Exiting.")
        return 1

    image_dir = Path(settings.image_upload_dir)
    image_dir.mkdir(parents=True, exist_ok=True)
    logger.info(f"Image directory ready: {image_dir}")

    alembic_cfg = Config(str(SERVER_DIR / "alembic.ini"))
    alembic_cfg.set_main_option("script_location", str(SERVER_DIR / "alembic"))
    command.upgrade(alembic_cfg, "head")
    logger.info("Products schema is at the latest revision")
    return 0


if __name__ == "__main__":
    sys.exit(main())
