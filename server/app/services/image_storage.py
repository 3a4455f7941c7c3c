"""Local filesystem storage for product images."""
from __future__ import annotations

import logging
import re
from pathlib import Path, PurePath
from uuid import uuid4

logger = logging.getLogger(__name__)

_UNSAFE_EXTENSION_CHARS = re.compile(r"[^A-Za-z0-9_-]")


def image_extension(original_name: str | None) -> str:
    """Return the extension of ``original_name`` including the leading dot.

    Only the final path component is considered, so client-supplied
    directories never leak into the stored name. Characters other than
    letters, digits, underscore and hyphen are dropped from the extension.
    Names without a dot have no extension.
    """
    if not original_name:
        return ""
    base_name = PurePath(original_name.replace("\\", "/")).name
    dot = base_name.rfind(".")
    if dot == -1:
        return ""
    extension = _UNSAFE_EXTENSION_CHARS.sub("", base_name[dot + 1 :])
    return f".{extension}" if extension else ""


def generate_image_filename(original_name: str | None) -> str:
    """Generate a unique filename that keeps the original extension."""
    return f"{uuid4()}{image_extension(original_name)}"


class ImageStore:
    """Saves and deletes image files in a single flat directory.

    Neither operation raises on I/O errors. ``save`` returns ``None`` and
    ``delete`` returns ``False`` so callers can decide how to report it.
    """

    def __init__(self, upload_dir: str | Path) -> None:
        """Initialize store rooted at ``upload_dir``.

        Args:
            upload_dir: Directory holding the image files; created on first save
        """
        self._upload_dir = Path(upload_dir)

    @property
    def upload_dir(self) -> Path:
        return self._upload_dir

    def path_for(self, filename: str) -> Path:
        return self._upload_dir / filename

    def exists(self, filename: str) -> bool:
        return self.path_for(filename).is_file()

    def save(self, content: bytes, original_name: str | None) -> str | None:
        """Write ``content`` under a newly generated unique filename.

        Args:
            content: Raw image bytes
            original_name: Client-side filename, used only for its extension

        Returns:
            The generated filename, or None if the file could not be written
        """
        image_file_name = generate_image_filename(original_name)

        try:
            self._upload_dir.mkdir(parents=True, exist_ok=True)
            self.path_for(image_file_name).write_bytes(content)
        except (OSError, ValueError) as e:
            logger.error(f"Error saving image {image_file_name} to {self._upload_dir}: {e}")
            return None

        logger.info(f"Saved image {image_file_name} ({len(content)} bytes)")
        return image_file_name

    def delete(self, filename: str) -> bool:
        """Remove ``filename`` from the store.

        A file that does not exist counts as deleted.

        Returns:
            True if the file is gone, False if removing it failed
        """
        try:
            self.path_for(filename).unlink(missing_ok=True)
        except (OSError, ValueError) as e:
            logger.warning(f"Error deleting image {filename}: {e}")
            return False

        logger.info(f"Deleted image {filename}")
        return True
