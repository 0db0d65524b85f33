"""Shared fixtures: a stubbed Discord API and a FastAPI app mounting the router."""

import httpx
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from discord_auth import DiscordOAuthConfig, create_discord_router

TOKEN_PAYLOAD = {
    "access_token": "access-123",
    "token_type": "Bearer",
    "expires_in": 604800,
    "refresh_token": "refresh-456",
    "scope": "identify email",
}

USER_PAYLOAD = {"id": "1", "username": "a", "global_name": None}


class FakeDiscord:
    """Records outbound requests; POST is the token endpoint, GET the current-user endpoint."""

    def __init__(self):
        self.requests = []
        self.token_status, self.token_body = 200, TOKEN_PAYLOAD
        self.user_status, self.user_body = 200, USER_PAYLOAD

    @staticmethod
    def _respond(status, body):
        if isinstance(body, (dict, list)):
            return httpx.Response(status, json=body)
        return httpx.Response(status, text=body)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.method == "POST":
            return self._respond(self.token_status, self.token_body)
        return self._respond(self.user_status, self.user_body)

    def client_factory(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))

    @property
    def token_requests(self):
        return [r for r in self.requests if r.method == "POST"]

    @property
    def user_requests(self):
        return [r for r in self.requests if r.method == "GET"]


@pytest.fixture
def fake_discord():
    return FakeDiscord()


@pytest.fixture
def make_config():
    def _make(**overrides):
        values = {
            "client_id": "client-1",
            "client_secret": "secret-1",
            "redirect_uri": "http://localhost:8080/auth/discord/callback",
        }
        values.update(overrides)
        return DiscordOAuthConfig(**values)

    return _make


@pytest.fixture
def make_client(fake_discord, make_config):
    """Return a TestClient for an app built from config overrides."""

    def _make(config=None, logger=None, **overrides):
        config = config or make_config(**overrides)
        app = FastAPI()
        app.include_router(
            create_discord_router(config, client_factory=fake_discord.client_factory, logger=logger)
        )
        return TestClient(app)

    return _make
