"""
Discord OAuth2 module for FastAPI applications.

Exposes the config (DiscordOAuthConfig, normalize_route_prefix), the payload
models and user normalizer, the Discord provider, and the FastAPI router
factory (create_discord_router).
"""

from .config import DiscordOAuthConfig, normalize_route_prefix
from .discord import DiscordAPIError, DiscordOAuthProvider
from .models import CallbackResult, NormalizedUser, RawUserProfile, TokenResponse, normalize_user
from .router import create_discord_router

__all__ = [
    "DiscordOAuthConfig",
    "normalize_route_prefix",
    "DiscordAPIError",
    "DiscordOAuthProvider",
    "CallbackResult",
    "NormalizedUser",
    "RawUserProfile",
    "TokenResponse",
    "normalize_user",
    "create_discord_router",
]
