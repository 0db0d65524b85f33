"""
Configuration module for the Discord OAuth router.

DiscordOAuthConfig is built once by the embedding application and read for the
lifetime of the process. Route prefix normalization lives here so the router
and host applications derive the same two paths from any supplied prefix.
"""

import os
import re
from dataclasses import dataclass, field
from typing import Optional, Tuple

from discord_auth.protocol import ResponseShaper, UserAuthenticatedHook

DEFAULT_ROUTE_PREFIX = "/auth/discord"
DEFAULT_SCOPES = ("identify",)
DEFAULT_HTTP_TIMEOUT = 20.0


def normalize_route_prefix(route_prefix: Optional[str]) -> str:
    """
    Strip trailing slashes and fall back to DEFAULT_ROUTE_PREFIX when nothing is left.

    A leading slash is added when missing, since the host router rejects paths
    that do not start with "/".
    """
    prefix = (route_prefix or "").rstrip("/")
    if not prefix:
        return DEFAULT_ROUTE_PREFIX
    if not prefix.startswith("/"):
        prefix = f"/{prefix}"
    return prefix


def _split_scopes(raw: Optional[str]) -> Tuple[str, ...]:
    if not raw:
        return DEFAULT_SCOPES
    scopes = tuple(s for s in re.split(r"[\s,]+", raw) if s)
    return scopes or DEFAULT_SCOPES


@dataclass(frozen=True)
class DiscordOAuthConfig:
    """Immutable setup for the Discord integration."""

    client_id: Optional[str]
    client_secret: Optional[str]
    redirect_uri: Optional[str]
    route_prefix: Optional[str] = DEFAULT_ROUTE_PREFIX
    scopes: Tuple[str, ...] = DEFAULT_SCOPES
    on_user_authenticated: Optional[UserAuthenticatedHook] = field(default=None, compare=False)
    response: Optional[ResponseShaper] = field(default=None, compare=False)
    http_timeout: float = DEFAULT_HTTP_TIMEOUT

    def __post_init__(self):
        # Accept any iterable of scopes (lists from callers, tuples from env)
        object.__setattr__(self, "scopes", tuple(self.scopes))

    @property
    def prefix(self) -> str:
        return normalize_route_prefix(self.route_prefix)

    @property
    def authorize_path(self) -> str:
        return self.prefix

    @property
    def callback_path(self) -> str:
        return f"{self.prefix}/callback"

    @property
    def can_authorize(self) -> bool:
        """True when the consent URL can be built (client id and redirect URI set)."""
        return bool(self.client_id and self.redirect_uri)

    @property
    def is_configured(self) -> bool:
        """True when the full code exchange can run."""
        return bool(self.client_id and self.client_secret and self.redirect_uri)

    @classmethod
    def from_env(
        cls,
        on_user_authenticated: Optional[UserAuthenticatedHook] = None,
        response: Optional[ResponseShaper] = None,
    ) -> "DiscordOAuthConfig":
        """
        Build a config from DISCORD_* environment variables.

        DISCORD_CLIENT_ID, DISCORD_CLIENT_SECRET and DISCORD_REDIRECT_URI are read
        as-is (missing values surface as a configuration error at request time).
        DISCORD_ROUTE_PREFIX and DISCORD_SCOPES (space or comma separated) are optional.
        """
        return cls(
            client_id=os.getenv("DISCORD_CLIENT_ID"),
            client_secret=os.getenv("DISCORD_CLIENT_SECRET"),
            redirect_uri=os.getenv("DISCORD_REDIRECT_URI"),
            route_prefix=os.getenv("DISCORD_ROUTE_PREFIX", DEFAULT_ROUTE_PREFIX),
            scopes=_split_scopes(os.getenv("DISCORD_SCOPES")),
            on_user_authenticated=on_user_authenticated,
            response=response,
            http_timeout=float(os.getenv("DISCORD_HTTP_TIMEOUT", str(DEFAULT_HTTP_TIMEOUT))),
        )
