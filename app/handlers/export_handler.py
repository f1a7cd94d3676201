"""Export endpoint: writes image metadata rows to Google Sheets."""
from __future__ import annotations

import json
import logging

import httpx
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from app.config import Settings, get_settings
from app.deps import get_http_client
from app.errors import ExportError
from app.models import ErrorResponse, ExportResult
from app.services.exporter import export_images, parse_export_request

router = APIRouter()
logger = logging.getLogger(__name__)


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(ErrorResponse(error=message).model_dump(), status_code=status_code)


@router.post(
    "/export-to-sheets",
    response_model=ExportResult,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def export_to_sheets(
    request: Request,
    settings: Settings = Depends(get_settings),
    client: httpx.AsyncClient = Depends(get_http_client),
):
    logger.info("Export to Sheets called")
    try:
        payload = json.loads(await request.body())
    except (json.JSONDecodeError, UnicodeDecodeError):
        logger.warning("Export rejected: request body is not valid JSON")
        return _error("Invalid request body", 400)

    try:
        export_request = parse_export_request(payload)
        result = await export_images(export_request, settings=settings, client=client)
    except ExportError as exc:
        if exc.status_code < 500:
            logger.warning("Export rejected during %s: %s", exc.operation, exc.detail)
        else:
            logger.error("Export failed during %s: %s", exc.operation, exc.detail)
        return _error(exc.public_message, exc.status_code)
    except Exception:
        logger.exception("Unexpected error in export-to-sheets")
        return _error("Unexpected error during export", 500)

    return JSONResponse(result.model_dump(by_alias=True))
