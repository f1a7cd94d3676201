"""Export pipeline: credential -> assertion -> access token -> spreadsheet.

Each step runs to completion before the next one starts. Nothing is shared
between invocations; every export loads the credential and authenticates
again.
"""
from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError as PydanticValidationError

from app.config import Settings
from app.errors import ValidationError
from app.models import ExportRequest, ExportResult
from app.services.credentials import load_service_account
from app.services.jwt_assertion import build_assertion
from app.services.sheets import SheetsClient, sheet_url
from app.services.token_exchange import TokenExchanger

logger = logging.getLogger(__name__)


def parse_export_request(payload: Any) -> ExportRequest:
    """Validate a decoded JSON body into an :class:`ExportRequest`.

    The image list is checked before anything else so an empty export never
    reaches credential loading.
    """

    if not isinstance(payload, dict):
        raise ValidationError("Invalid request body")
    images = payload.get("images")
    if not images or not isinstance(images, list):
        raise ValidationError("No images provided")

    spreadsheet_id = payload.get("spreadsheetId")
    if spreadsheet_id is not None and not isinstance(spreadsheet_id, str):
        raise ValidationError("spreadsheetId must be a string")

    try:
        return ExportRequest(images=images, spreadsheetId=spreadsheet_id)
    except PydanticValidationError as exc:
        first = exc.errors()[0]
        loc = ".".join(str(part) for part in first["loc"])
        raise ValidationError(f"Invalid image metadata at {loc}: {first['msg']}") from exc


async def export_images(
    request: ExportRequest,
    *,
    settings: Settings,
    client: httpx.AsyncClient,
    now: int | None = None,
) -> ExportResult:
    """Run one export and return the success envelope.

    Raises a subclass of :class:`app.errors.ExportError` on the first failing
    stage; no later stage runs after a failure.
    """

    if not request.images:
        raise ValidationError("No images provided")

    credential = load_service_account(settings.google_service_account_key)

    logger.info("Getting OAuth token...")
    assertion = build_assertion(credential, now=now)
    token = await TokenExchanger(client, token_uri=credential.token_uri).exchange(assertion)

    sheets = SheetsClient(
        client,
        token,
        base_url=settings.sheets_api_base_url,
        sheet_title=settings.sheet_title,
        title_prefix=settings.spreadsheet_title_prefix,
    )
    if not request.spreadsheet_id:
        logger.info("Creating new spreadsheet...")
        created = await sheets.create_spreadsheet(request.images)
        spreadsheet_id, url = created.spreadsheet_id, created.url
    else:
        logger.info("Updating existing spreadsheet %s...", request.spreadsheet_id)
        await sheets.update_values(request.spreadsheet_id, request.images)
        spreadsheet_id, url = request.spreadsheet_id, sheet_url(request.spreadsheet_id)

    logger.info("Export completed: %d image(s) -> %s", len(request.images), spreadsheet_id)
    return ExportResult(spreadsheetId=spreadsheet_id, url=url, imageCount=len(request.images))
