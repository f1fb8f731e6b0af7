"""Profile avatar persistence for the chat page.

The avatar is kept as a data-URI string in NiceGUI's per-user storage
under a fixed key. It is purely presentational; the transcript never
reads it.
"""

import base64
import logging
from collections.abc import MutableMapping

logger = logging.getLogger(__name__)

PROFILE_IMAGE_KEY = "chatProfileImage"
ALLOWED_IMAGE_TYPES = frozenset({"image/png", "image/jpeg", "image/gif", "image/webp"})
MAX_IMAGE_SIZE = 2 * 1024 * 1024  # 2MB


class ProfileImageError(Exception):
    """Raised when an uploaded avatar cannot be used."""

    pass


def to_data_uri(content: bytes, mime_type: str) -> str:
    """Encode image bytes as a data URI.

    Raises:
        ProfileImageError: If the file is empty, too large, or not an image.
    """
    if mime_type not in ALLOWED_IMAGE_TYPES:
        raise ProfileImageError(f"Unsupported image type: {mime_type or 'unknown'}")
    if not content:
        raise ProfileImageError("Empty file provided")
    if len(content) > MAX_IMAGE_SIZE:
        size_mb = len(content) / (1024 * 1024)
        raise ProfileImageError(f"Image size ({size_mb:.1f}MB) exceeds maximum allowed (2MB)")

    encoded = base64.b64encode(content).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"


def load_profile_image(storage: MutableMapping[str, object]) -> str | None:
    value = storage.get(PROFILE_IMAGE_KEY)
    if isinstance(value, str) and value.startswith("data:image/"):
        return value
    return None


def save_profile_image(storage: MutableMapping[str, object], data_uri: str | None) -> None:
    """Persist the avatar, or remove it when ``data_uri`` is None."""
    if data_uri:
        storage[PROFILE_IMAGE_KEY] = data_uri
        logger.info("Saved profile image")
    elif PROFILE_IMAGE_KEY in storage:
        del storage[PROFILE_IMAGE_KEY]
        logger.info("Removed profile image")
