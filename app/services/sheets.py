"""Google Sheets v4 REST wrapper.

Only the two calls the export needs are implemented: creating a spreadsheet
with the image rows already in place, and overwriting the rows of an
existing spreadsheet through a value-range update.
"""
from __future__ import annotations

import logging
import math
from datetime import date, datetime, timezone
from typing import Any, Sequence
from urllib.parse import quote

import httpx

from app.errors import SpreadsheetCreateError, SpreadsheetUpdateError, TransportError
from app.models import AccessToken, CreatedSpreadsheet, ImageMetadata

logger = logging.getLogger(__name__)

HEADER_ROW = ["Filename", "Width (px)", "Height (px)", "Size (bytes)", "Size (KB)", "URL"]
SHEET_URL_TEMPLATE = "https://docs.google.com/spreadsheets/d/{spreadsheet_id}"


# ------------------------------------------------------------------
# Row projection
# ------------------------------------------------------------------

def size_kb(size: int) -> float:
    """Size in KB rounded half-up to two decimals (1000 bytes -> 0.98)."""

    return math.floor(size / 1024 * 100 + 0.5) / 100


def image_row(image: ImageMetadata) -> list[Any]:
    return [image.name, image.width, image.height, image.size, size_kb(image.size), image.url or ""]


def build_value_rows(images: Sequence[ImageMetadata]) -> list[list[Any]]:
    return [list(HEADER_ROW), *(image_row(img) for img in images)]


def sheet_url(spreadsheet_id: str) -> str:
    return SHEET_URL_TEMPLATE.format(spreadsheet_id=spreadsheet_id)


def _cell(value: Any, *, bold: bool = False) -> dict[str, Any]:
    kind = "stringValue" if isinstance(value, str) else "numberValue"
    cell: dict[str, Any] = {"userEnteredValue": {kind: value}}
    if bold:
        cell["userEnteredFormat"] = {"textFormat": {"bold": True}}
    return cell


def build_create_payload(
    images: Sequence[ImageMetadata],
    *,
    title: str,
    sheet_title: str = "Images",
) -> dict[str, Any]:
    """Spreadsheet resource with one frozen, bold header row and one row per image."""

    header = {"values": [_cell(name, bold=True) for name in HEADER_ROW]}
    rows = [{"values": [_cell(value) for value in image_row(img)]} for img in images]
    return {
        "properties": {"title": title},
        "sheets": [
            {
                "properties": {
                    "title": sheet_title,
                    "gridProperties": {"frozenRowCount": 1},
                },
                "data": [
                    {
                        "startRow": 0,
                        "startColumn": 0,
                        "rowData": [header, *rows],
                    }
                ],
            }
        ],
    }


def update_range(image_count: int, *, sheet_title: str = "Images") -> str:
    return f"{sheet_title}!A1:F{image_count + 1}"


# ------------------------------------------------------------------
# Client
# ------------------------------------------------------------------


class SheetsClient:
    """Minimal async client for the Sheets v4 REST API."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        token: AccessToken,
        *,
        base_url: str = "https://sheets.googleapis.com/v4",
        sheet_title: str = "Images",
        title_prefix: str = "Image Export - ",
    ) -> None:
        self._client = client
        self._base_url = base_url.rstrip("/")
        self._headers = {"Authorization": f"Bearer {token.value}"}
        self._sheet_title = sheet_title
        self._title_prefix = title_prefix

    async def create_spreadsheet(
        self,
        images: Sequence[ImageMetadata],
        *,
        today: date | None = None,
    ) -> CreatedSpreadsheet:
        today = today or datetime.now(timezone.utc).date()
        payload = build_create_payload(
            images,
            title=f"{self._title_prefix}{today.isoformat()}",
            sheet_title=self._sheet_title,
        )
        url = f"{self._base_url}/spreadsheets"
        resp = await self._send("POST", url, "create_spreadsheet", json=payload)
        if not resp.is_success:
            raise SpreadsheetCreateError(resp.text)

        try:
            data = resp.json()
        except ValueError as exc:
            raise SpreadsheetCreateError(f"Non-JSON create response: {resp.text}") from exc
        spreadsheet_id = data.get("spreadsheetId") if isinstance(data, dict) else None
        if not spreadsheet_id:
            raise SpreadsheetCreateError(f"Create response missing spreadsheetId: {resp.text}")
        return CreatedSpreadsheet(
            spreadsheet_id=spreadsheet_id,
            url=data.get("spreadsheetUrl") or sheet_url(spreadsheet_id),
        )

    async def update_values(self, spreadsheet_id: str, images: Sequence[ImageMetadata]) -> None:
        """Overwrite the header and image rows of an existing spreadsheet."""

        cell_range = update_range(len(images), sheet_title=self._sheet_title)
        url = f"{self._base_url}/spreadsheets/{quote(spreadsheet_id, safe='')}/values/{quote(cell_range, safe='!:')}"
        resp = await self._send(
            "PUT",
            url,
            "update_spreadsheet",
            params={"valueInputOption": "RAW"},
            json={"values": build_value_rows(images)},
        )
        if not resp.is_success:
            raise SpreadsheetUpdateError(resp.text)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _send(self, method: str, url: str, operation: str, **kwargs: Any) -> httpx.Response:
        logger.debug("%s %s", method, url)
        try:
            return await self._client.request(method, url, headers=self._headers, **kwargs)
        except httpx.RequestError as exc:
            raise TransportError(f"Sheets API unreachable: {exc!r}", operation=operation) from exc
