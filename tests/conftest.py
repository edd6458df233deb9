"""Pytest configuration and fixtures shared across all test modules.

This file is automatically loaded by pytest before running any tests.
It sets TESTING so no .env file is loaded, and provides a fake remote API
(FastAPI app mounted through httpx.ASGITransport) plus a fake login
handshake that talks to it.
"""

import os

# CRITICAL: Set this before any imports that might load settings
os.environ["TESTING"] = "true"
os.environ.setdefault("APP_ENV", "testing")


import httpx
import pytest
from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse

from fut_client.adapters.session.base import LoginHandshake
from fut_client.core.config import ClientSettings
from fut_client.schemas.session import Credentials, SessionDefaults

REMOTE_HOST = "http://fut.test"
SESSION_ID = "sid-123"


class FakeHandshake(LoginHandshake):
    """Two-step login against the fake API: two-factor code, then auth."""

    def __init__(self) -> None:
        self.calls = 0
        self.seen_cookies: list[dict[str, str]] = []

    async def login(self, credentials: Credentials, client: httpx.AsyncClient) -> SessionDefaults:
        self.calls += 1
        self.seen_cookies.append(dict(client.cookies))

        code = await credentials.solve_two_factor({"channel": "email"})
        response = await client.post(
            f"{REMOTE_HOST}/auth",
            json={"identity": credentials.identity, "code": code},
        )
        response.raise_for_status()

        return SessionDefaults(
            base_url=f"{REMOTE_HOST}/ut/game",
            headers={"X-UT-SID": response.json()["sid"]},
        )


def build_fake_api() -> FastAPI:
    """Fake remote API recording every game call it receives."""
    app = FastAPI()
    app.state.calls = []

    @app.post("/auth")
    async def auth(request: Request, response: Response):
        payload = await request.json()
        if payload.get("code") != "123456":
            return JSONResponse({"reason": "bad code"}, status_code=401)
        response.set_cookie("remember", "device-token")
        return {"sid": SESSION_ID}

    @app.api_route("/ut/game/{path:path}", methods=["GET", "POST", "PUT", "DELETE"])
    async def game(path: str, request: Request):
        app.state.calls.append(
            {
                "path": path,
                "method": request.method,
                "override": request.headers.get("X-HTTP-Method-Override"),
                "sid": request.headers.get("X-UT-SID"),
                "cookie": request.cookies.get("remember"),
            }
        )
        if path == "missing":
            return JSONResponse({"reason": "not found"}, status_code=404)
        if path == "captcha":
            return {"code": "458", "reason": "Captcha Triggered"}
        if path == "empty":
            return {}
        return {"credits": 1200}

    return app


@pytest.fixture
def fake_api() -> FastAPI:
    return build_fake_api()


@pytest.fixture
def transport(fake_api: FastAPI) -> httpx.ASGITransport:
    return httpx.ASGITransport(app=fake_api)


@pytest.fixture
def handshake() -> FakeHandshake:
    return FakeHandshake()


@pytest.fixture
def client_settings() -> ClientSettings:
    return ClientSettings(
        identity="player@example.com",
        secret="s3cret",
        platform="ps",
        requests_per_minute=600,
    )
