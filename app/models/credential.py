from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field

GOOGLE_TOKEN_URI = "https://oauth2.googleapis.com/token"
SHEETS_SCOPE = "https://www.googleapis.com/auth/spreadsheets"
JWT_LIFETIME_SECONDS = 3600  # Google rejects assertions valid for longer than one hour


class ServiceAccountCredential(BaseModel):
    model_config = ConfigDict(frozen=True)

    client_email: str
    private_key_pem: str = Field(repr=False)
    token_uri: str = GOOGLE_TOKEN_URI


class JwtClaimSet(BaseModel):
    """OAuth2 JWT-bearer claims, serialized with the registered claim names."""

    model_config = ConfigDict(frozen=True)

    issuer: str = Field(..., serialization_alias="iss")
    scope: str
    audience: str = Field(..., serialization_alias="aud")
    issued_at: int = Field(..., serialization_alias="iat")
    expires_at: int = Field(..., serialization_alias="exp")

    @classmethod
    def for_credential(cls, credential: ServiceAccountCredential, *, now: int) -> "JwtClaimSet":
        return cls(
            issuer=credential.client_email,
            scope=SHEETS_SCOPE,
            audience=credential.token_uri,
            issued_at=now,
            expires_at=now + JWT_LIFETIME_SECONDS,
        )


class AccessToken(BaseModel):
    value: str = Field(repr=False)
    obtained_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
