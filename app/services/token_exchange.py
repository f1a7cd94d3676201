"""Exchange a signed JWT assertion for a Google access token."""
from __future__ import annotations

import logging

import httpx

from app.errors import AuthenticationError, TransportError
from app.models import AccessToken

logger = logging.getLogger(__name__)

JWT_BEARER_GRANT = "urn:ietf:params:oauth:grant-type:jwt-bearer"


class TokenExchanger:  # pylint: disable=too-few-public-methods
    """Posts the JWT-bearer grant to the OAuth2 token endpoint."""

    def __init__(self, client: httpx.AsyncClient, *, token_uri: str) -> None:
        self._client = client
        self._token_uri = token_uri

    async def exchange(self, assertion: str) -> AccessToken:
        logger.debug("POST %s (jwt-bearer grant)", self._token_uri)
        try:
            resp = await self._client.post(
                self._token_uri,
                data={"grant_type": JWT_BEARER_GRANT, "assertion": assertion},
            )
        except httpx.RequestError as exc:
            raise TransportError(
                f"Token endpoint unreachable: {exc!r}", operation="exchange_token"
            ) from exc

        if not resp.is_success:
            # Google's error payload is passed through untouched for diagnosis.
            raise AuthenticationError(resp.text)

        try:
            data = resp.json()
        except ValueError:
            data = None
        value = data.get("access_token") if isinstance(data, dict) else None
        if not value or not isinstance(value, str):
            raise AuthenticationError(resp.text)
        return AccessToken(value=value)
