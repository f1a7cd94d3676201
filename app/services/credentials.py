"""Service-account credential loading."""
from __future__ import annotations

import json
import logging

from pydantic import ValidationError as PydanticValidationError

from app.errors import ConfigurationError, CredentialParseError
from app.models import ServiceAccountCredential

logger = logging.getLogger(__name__)


def load_service_account(raw_key: str | None) -> ServiceAccountCredential:
    """Parse the service-account JSON held in configuration.

    Only ``client_email``, ``private_key`` and the optional ``token_uri`` are
    used; any other fields Google puts in the key file are ignored.
    """

    if raw_key is None or not raw_key.strip():
        raise ConfigurationError("GOOGLE_SERVICE_ACCOUNT_KEY not found")

    try:
        data = json.loads(raw_key)
    except json.JSONDecodeError as exc:
        raise CredentialParseError(f"Failed to parse service account key: {exc.msg}") from exc

    if not isinstance(data, dict):
        raise CredentialParseError("Service account key must be a JSON object")

    client_email = data.get("client_email")
    private_key = data.get("private_key")
    if not client_email or not private_key:
        raise CredentialParseError("Service account key is missing client_email or private_key")

    fields = {"client_email": client_email, "private_key_pem": private_key}
    if data.get("token_uri"):
        fields["token_uri"] = data["token_uri"]
    try:
        credential = ServiceAccountCredential(**fields)
    except PydanticValidationError as exc:
        raise CredentialParseError(f"Invalid service account key fields: {exc.error_count()} error(s)") from exc

    logger.debug("Loaded service account credential for %s", credential.client_email)
    return credential
