from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .image_data import ImageMetadata


class ExportRequest(BaseModel):
    """Body of ``POST /export-to-sheets``."""

    model_config = ConfigDict(populate_by_name=True)

    images: list[ImageMetadata]
    spreadsheet_id: str | None = Field(default=None, alias="spreadsheetId")

    @field_validator("spreadsheet_id")
    @classmethod
    def _blank_id_means_create(cls, value: str | None) -> str | None:
        return value or None


class CreatedSpreadsheet(BaseModel):
    spreadsheet_id: str
    url: str


class ExportResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    spreadsheet_id: str = Field(..., alias="spreadsheetId")
    url: str
    image_count: int = Field(..., alias="imageCount")


class ErrorResponse(BaseModel):
    error: str
