#!/usr/bin/env python
"""Export metadata of local image files to Google Sheets.

Usage: python -m scripts.export_images PATH [PATH ...] [--spreadsheet-id ID]
"""
from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

import httpx

from app.config import get_settings
from app.errors import ExportError
from app.models import ExportRequest, ExportResult, ImageMetadata
from app.services.exporter import export_images
from app.services.image_metadata import IMAGE_EXTENSIONS, describe_image

logger = logging.getLogger(__name__)


def collect_image_paths(paths: list[Path]) -> list[Path]:
    found: list[Path] = []
    for path in paths:
        if path.is_dir():
            found.extend(
                sorted(p for p in path.iterdir() if p.is_file() and p.suffix.lower() in IMAGE_EXTENSIONS)
            )
        else:
            found.append(path)
    return found


def probe_images(paths: list[Path]) -> list[ImageMetadata]:
    images: list[ImageMetadata] = []
    for path in paths:
        try:
            images.append(describe_image(path.name, path.read_bytes()))
        except (OSError, ValueError) as exc:
            logger.warning("Skipping %s: %s", path, exc)
    return images


async def run(images: list[ImageMetadata], spreadsheet_id: str | None) -> ExportResult:
    request = ExportRequest(images=images, spreadsheetId=spreadsheet_id)
    async with httpx.AsyncClient() as client:
        return await export_images(request, settings=get_settings(), client=client)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Export image metadata to Google Sheets")
    parser.add_argument("paths", nargs="+", type=Path, help="Image files or directories")
    parser.add_argument("--spreadsheet-id", default=None, help="Update this spreadsheet instead of creating one")
    args = parser.parse_args(argv)

    logging.basicConfig(level=get_settings().log_level.upper())

    images = probe_images(collect_image_paths(args.paths))
    if not images:
        print("No images provided", file=sys.stderr)
        return 1

    try:
        result = asyncio.run(run(images, args.spreadsheet_id))
    except ExportError as exc:
        logger.error("Export failed during %s: %s", exc.operation, exc.detail)
        print(exc.public_message, file=sys.stderr)
        return 1

    print(result.model_dump_json(by_alias=True, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
