"""
Discord OAuth2 provider.

Builds the consent URL with Authlib's URL helpers and talks to the Discord API
over httpx: one form-encoded POST to exchange the code, one GET for the current
user. Non-success responses are logged with their body and raised as
DiscordAPIError; nothing is retried.
"""

import logging
from typing import Callable, Optional

import httpx
from authlib.common.urls import add_params_to_uri

from discord_auth.config import DiscordOAuthConfig
from discord_auth.models import RawUserProfile, TokenResponse
from discord_auth.protocol import OAuthProvider

DISCORD_API_BASE = "https://discord.com/api"
AUTHORIZE_URL = f"{DISCORD_API_BASE}/oauth2/authorize"
TOKEN_URL = f"{DISCORD_API_BASE}/oauth2/token"
CURRENT_USER_URL = f"{DISCORD_API_BASE}/users/@me"

ClientFactory = Callable[[], httpx.AsyncClient]


class DiscordAPIError(Exception):
    """Discord answered a token exchange or user fetch with a non-success status."""

    def __init__(self, stage: str, status_code: int, body: str):
        super().__init__(f"Discord {stage} failed with status {status_code}")
        self.stage = stage
        self.status_code = status_code
        self.body = body


class DiscordOAuthProvider(OAuthProvider):
    """OAuth provider for Discord's authorization-code flow."""

    name: str = "discord"

    def __init__(
        self,
        config: DiscordOAuthConfig,
        client_factory: Optional[ClientFactory] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """Store config; client_factory must return a fresh httpx.AsyncClient per call."""
        self.name = "discord"
        self.config = config
        self.logger = logger or logging.getLogger(__name__)
        self._client_factory = client_factory or self._default_client

    def _default_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.config.http_timeout)

    def authorize_url(self) -> str:
        """Consent URL; prompt=consent makes Discord always show the consent screen."""
        params = [
            ("client_id", self.config.client_id),
            ("response_type", "code"),
            ("redirect_uri", self.config.redirect_uri),
            ("scope", " ".join(self.config.scopes)),
            ("prompt", "consent"),
        ]
        return add_params_to_uri(AUTHORIZE_URL, params)

    async def exchange_code(self, code: str) -> TokenResponse:
        """POST /oauth2/token with the code; returns the parsed token response."""
        body = {
            "client_id": self.config.client_id,
            "client_secret": self.config.client_secret,
            "grant_type": "authorization_code",
            "code": code,
            "redirect_uri": self.config.redirect_uri,
        }
        headers = {"Content-Type": "application/x-www-form-urlencoded"}

        async with self._client_factory() as client:
            r = await client.post(TOKEN_URL, data=body, headers=headers)
            if not r.is_success:
                self.logger.error("Discord token exchange failed: %s", r.text)
                raise DiscordAPIError("token exchange", r.status_code, r.text)
            data = r.json()

        return TokenResponse.model_validate(data)

    async def fetch_user(self, tokens: TokenResponse) -> RawUserProfile:
        """GET /users/@me using the token type and access token exactly as issued."""
        headers = {"Authorization": f"{tokens.token_type} {tokens.access_token}"}

        async with self._client_factory() as client:
            r = await client.get(CURRENT_USER_URL, headers=headers)
            if not r.is_success:
                self.logger.error("Discord user fetch failed: %s", r.text)
                raise DiscordAPIError("user fetch", r.status_code, r.text)
            data = r.json()

        return RawUserProfile.model_validate(data)
