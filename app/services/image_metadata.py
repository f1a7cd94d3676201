"""Read basic metadata (byte size, pixel dimensions) from image bytes."""
from __future__ import annotations

import io
import logging

from PIL import Image, UnidentifiedImageError

from app.models import ImageMetadata

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = frozenset({".jpg", ".jpeg", ".png", ".gif", ".webp", ".bmp", ".tif", ".tiff"})


def describe_image(name: str, data: bytes, *, url: str | None = None) -> ImageMetadata:
    """Return :class:`ImageMetadata` for *data*.

    Only the image header is parsed; pixel data is never decoded. Raises
    ``ValueError`` if Pillow does not recognise the bytes as an image.
    """

    try:
        with Image.open(io.BytesIO(data)) as img:
            width, height = img.size
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as exc:
        raise ValueError(f"{name!r} is not a readable image") from exc

    logger.debug("Probed %s: %dx%d, %d bytes", name, width, height, len(data))
    return ImageMetadata(name=name, size=len(data), width=width, height=height, url=url)
