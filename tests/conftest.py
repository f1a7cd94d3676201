"""
Pytest configuration and fixtures for tests.
Provides a throwaway service-account key and a fake Google backend so no
test ever reaches the real token endpoint or Sheets API.
"""
import json
from typing import Any

import httpx
import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from fastapi.testclient import TestClient

from app.config import Settings, get_settings
from app.deps import get_http_client
from app.main import app

TOKEN_URI = "https://oauth2.googleapis.com/token"
CLIENT_EMAIL = "exporter@demo-project.iam.gserviceaccount.com"


class FakeGoogle:
    """httpx.MockTransport handler standing in for the token endpoint and Sheets API."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.token_reply: tuple[int, Any] = (
            200,
            {"access_token": "ya29.test-token", "expires_in": 3599, "token_type": "Bearer"},
        )
        self.create_reply: tuple[int, Any] = (
            200,
            {
                "spreadsheetId": "sheet-123",
                "spreadsheetUrl": "https://docs.google.com/spreadsheets/d/sheet-123/edit",
            },
        )
        self.update_reply: tuple[int, Any] = (200, {"updatedRows": 2})
        self.fail_host: str | None = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail_host == request.url.host:
            raise httpx.ConnectError("connection refused", request=request)
        if request.url.host == "oauth2.googleapis.com":
            status, body = self.token_reply
        elif request.method == "POST":
            status, body = self.create_reply
        else:
            status, body = self.update_reply
        if isinstance(body, str):
            return httpx.Response(status, text=body)
        return httpx.Response(status, json=body)

    def sheets_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.host == "sheets.googleapis.com"]

    def token_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.host == "oauth2.googleapis.com"]


@pytest.fixture(scope="session")
def rsa_key() -> rsa.RSAPrivateKey:
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def private_key_pem(rsa_key) -> str:
    return rsa_key.private_bytes(
        serialization.Encoding.PEM,
        serialization.PrivateFormat.PKCS8,
        serialization.NoEncryption(),
    ).decode("ascii")


@pytest.fixture
def service_account_json(private_key_pem) -> str:
    return json.dumps(
        {
            "type": "service_account",
            "project_id": "demo-project",
            "private_key_id": "abc123",
            "private_key": private_key_pem,
            "client_email": CLIENT_EMAIL,
            "token_uri": TOKEN_URI,
        }
    )


@pytest.fixture
def settings(service_account_json) -> Settings:
    return Settings(google_service_account_key=service_account_json)


@pytest.fixture
def fake_google() -> FakeGoogle:
    return FakeGoogle()


@pytest.fixture
def client(settings, fake_google):
    """TestClient wired to the fake Google backend and test settings."""

    async def _http_client():
        async with httpx.AsyncClient(transport=httpx.MockTransport(fake_google)) as http_client:
            yield http_client

    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_http_client] = _http_client
    try:
        with TestClient(app) as test_client:
            yield test_client
    finally:
        app.dependency_overrides.clear()
