"""Shared FastAPI dependencies."""
from __future__ import annotations

from typing import AsyncIterator

import httpx


async def get_http_client() -> AsyncIterator[httpx.AsyncClient]:
    """Yield an outbound HTTP client scoped to a single request.

    No timeout is configured beyond httpx's default, and no retries.
    """

    async with httpx.AsyncClient() as client:
        yield client
