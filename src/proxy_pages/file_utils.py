"""Common file and path utilities."""

import logging
from pathlib import Path

from PIL import Image

log = logging.getLogger(__name__)


def save_image_safe(image: Image.Image, dest_path: Path, description: str = "image") -> bool:
    """Save an image as PNG with error handling and logging.

    Args:
        image: Image to write
        dest_path: Destination file path
        description: Human-readable description for logging

    Returns:
        True if the save succeeded, False otherwise

    """
    try:
        # Ensure destination directory exists
        dest_path.parent.mkdir(parents=True, exist_ok=True)

        image.save(dest_path, "PNG")
        return True

    except (OSError, ValueError) as e:
        log.error("Failed to save %s to %s: %s", description, dest_path, e)
        return False
