from __future__ import annotations

from pydantic import BaseModel, Field


class ImageMetadata(BaseModel):
    """Metadata for one uploaded image; becomes one spreadsheet row."""

    name: str
    size: int = Field(..., ge=0)  # bytes
    width: int = Field(..., ge=0)
    height: int = Field(..., ge=0)
    url: str | None = None
