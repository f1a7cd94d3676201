from __future__ import annotations

from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from a .env file if present (local dev only)
load_dotenv()


class Settings(BaseSettings):
    """Application configuration loaded from environment variables or .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Google service account
    google_service_account_key: Optional[str] = Field(
        default=None,
        validation_alias="GOOGLE_SERVICE_ACCOUNT_KEY",
        description="Full service-account JSON key (client_email, private_key).",
    )

    # Sheets API
    sheets_api_base_url: str = Field("https://sheets.googleapis.com/v4", validation_alias="SHEETS_API_BASE_URL")
    sheet_title: str = Field("Images", validation_alias="SHEET_TITLE")
    spreadsheet_title_prefix: str = Field("Image Export - ", validation_alias="SPREADSHEET_TITLE_PREFIX")

    # HTTP surface
    cors_allow_origins: list[str] = Field(default_factory=lambda: ["*"], validation_alias="CORS_ALLOW_ORIGINS")

    # Logging
    log_level: str = Field("INFO", validation_alias="LOG_LEVEL")


@lru_cache()
def get_settings() -> Settings:
    """Return a cached Settings instance so it is only parsed once."""

    return Settings()
