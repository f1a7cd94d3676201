"""OAuth2 JWT-bearer assertion builder.

Builds the RS256-signed assertion Google expects from a service account:

    base64url(header) . base64url(claims) . base64url(signature)

No network access happens here; the token exchange lives in
:mod:`app.services.token_exchange`.
"""
from __future__ import annotations

import base64
import binascii
import json
import re
import time
from typing import Any

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from app.errors import KeyImportError, SigningError
from app.models import JwtClaimSet, ServiceAccountCredential

_HEADER = {"alg": "RS256", "typ": "JWT"}
_PEM_BOUNDARY = re.compile(r"-----(BEGIN|END)[A-Z ]*-----")


def b64url_encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def _encode_segment(obj: dict[str, Any]) -> str:
    return b64url_encode(json.dumps(obj, separators=(",", ":")).encode("utf-8"))


def load_signing_key(private_key_pem: str) -> rsa.RSAPrivateKey:
    """Import a PKCS8 PEM private key as an RSA signing key."""

    body = "".join(_PEM_BOUNDARY.sub("", private_key_pem).split())
    if not body:
        raise KeyImportError("Private key is empty")
    try:
        der = base64.b64decode(body, validate=True)
        key = serialization.load_der_private_key(der, password=None)
    except (binascii.Error, ValueError, TypeError, UnsupportedAlgorithm) as exc:
        raise KeyImportError(f"Could not import private key: {exc}") from exc
    if not isinstance(key, rsa.RSAPrivateKey):
        raise KeyImportError(f"Private key is not an RSA key ({type(key).__name__})")
    return key


def sign_rs256(key: rsa.RSAPrivateKey, signing_input: bytes) -> bytes:
    try:
        return key.sign(signing_input, padding.PKCS1v15(), hashes.SHA256())
    except (ValueError, TypeError) as exc:
        raise SigningError(f"RS256 signing failed: {exc}") from exc


def build_claim_set(credential: ServiceAccountCredential, *, now: int | None = None) -> JwtClaimSet:
    issued_at = int(time.time()) if now is None else now
    return JwtClaimSet.for_credential(credential, now=issued_at)


def build_assertion(credential: ServiceAccountCredential, *, now: int | None = None) -> str:
    """Return the signed assertion for *credential*, issued at *now* (epoch seconds)."""

    claims = build_claim_set(credential, now=now)
    signing_input = f"{_encode_segment(_HEADER)}.{_encode_segment(claims.model_dump(by_alias=True))}"

    key = load_signing_key(credential.private_key_pem)
    signature = sign_rs256(key, signing_input.encode("ascii"))
    return f"{signing_input}.{b64url_encode(signature)}"
