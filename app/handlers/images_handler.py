"""Upload endpoint that reports name, size and dimensions of image files."""
from __future__ import annotations

import logging

from fastapi import APIRouter, File, UploadFile

from app.models import ImageMetadata
from app.services.image_metadata import describe_image

router = APIRouter()
logger = logging.getLogger(__name__)

_VALID_IMAGE_PREFIX = "image/"


@router.post("/images/metadata")
async def image_metadata(files: list[UploadFile] = File(...)) -> dict[str, list[ImageMetadata]]:
    images: list[ImageMetadata] = []
    for upload in files:
        name = upload.filename or "unnamed"
        if not (upload.content_type or "").startswith(_VALID_IMAGE_PREFIX):
            logger.info("Skipping non-image upload %s (%s)", name, upload.content_type)
            continue
        data = await upload.read()
        try:
            images.append(describe_image(name, data))
        except ValueError as exc:
            logger.warning("Skipping unreadable image: %s", exc)
    return {"images": images}
