"""
FastAPI Discord OAuth router: authorize redirect and callback.

Builds an APIRouter with two routes under the configured prefix. The callback
runs exchange -> fetch -> normalize -> hook -> respond and stops at the first
failure; every failure is answered with a JSON {"error": ...} body.
"""

import inspect
import logging
from typing import Any, Optional

from fastapi import APIRouter
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, PlainTextResponse, RedirectResponse
from starlette.concurrency import run_in_threadpool

from discord_auth.config import DiscordOAuthConfig
from discord_auth.discord import ClientFactory, DiscordAPIError, DiscordOAuthProvider
from discord_auth.models import CallbackResult, normalize_user
from discord_auth.protocol import OAuthProvider

NOT_CONFIGURED = "Discord OAuth is not configured"
MISSING_CODE = 'Missing "code" query parameter'
INTERNAL_ERROR = "Internal server error during OAuth flow"

# DiscordAPIError.stage -> message returned with the 502
UPSTREAM_ERRORS = {
    "token exchange": "Failed to exchange Discord OAuth token",
    "user fetch": "Failed to fetch Discord user",
}


class HookError(Exception):
    """A caller-supplied hook raised; answered like any internal failure."""

    def __init__(self, hook: str):
        super().__init__(f"{hook} hook failed")
        self.hook = hook


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


async def _maybe_await(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


def _is_async_callable(fn: Any) -> bool:
    return inspect.iscoroutinefunction(fn) or inspect.iscoroutinefunction(getattr(fn, "__call__", None))


async def _run_hook(hook_name: str, hook, *args) -> Any:
    """Await async hooks; sync ones run in the threadpool."""
    try:
        if _is_async_callable(hook):
            return await hook(*args)
        return await _maybe_await(await run_in_threadpool(hook, *args))
    except Exception as e:
        raise HookError(hook_name) from e


def create_discord_router(
    config: DiscordOAuthConfig,
    provider: Optional[OAuthProvider] = None,
    client_factory: Optional[ClientFactory] = None,
    logger: Optional[logging.Logger] = None,
) -> APIRouter:
    """Create an APIRouter with GET <prefix> and GET <prefix>/callback."""
    logger = logger or logging.getLogger(__name__)
    provider = provider or DiscordOAuthProvider(config, client_factory=client_factory, logger=logger)
    router = APIRouter()

    @router.get(config.authorize_path, name="discord_authorize")
    async def discord_authorize():
        """Redirect the user to Discord's consent screen."""
        if not config.can_authorize:
            return PlainTextResponse(NOT_CONFIGURED, status_code=500)
        return RedirectResponse(url=provider.authorize_url(), status_code=302)

    @router.get(config.callback_path, name="discord_callback")
    async def discord_callback(code: Optional[str] = None, error: Optional[str] = None):
        """Handle the redirect back from Discord and return the user as JSON."""
        if error:
            return _error(error, 400)
        if not code:
            return _error(MISSING_CODE, 400)
        if not config.is_configured:
            return _error(NOT_CONFIGURED, 500)

        try:
            tokens = await provider.exchange_code(code)
            raw_user = await provider.fetch_user(tokens)
            user = normalize_user(raw_user)

            if config.on_user_authenticated:
                await _run_hook("on_user_authenticated", config.on_user_authenticated, user, tokens)

            if config.response:
                result = CallbackResult(user=user, raw_user=raw_user, tokens=tokens)
                body = await _run_hook("response", config.response, result)
                return JSONResponse(jsonable_encoder(body), status_code=200)

            return JSONResponse(
                {
                    "user": user.dump(),
                    "access_token": tokens.access_token,
                    "token_type": tokens.token_type,
                    "expires_in": tokens.expires_in,
                },
                status_code=200,
            )
        except DiscordAPIError as e:
            return _error(UPSTREAM_ERRORS.get(e.stage, INTERNAL_ERROR), 502)
        except HookError as e:
            logger.exception("Discord OAuth %s hook failed", e.hook)
            return _error(INTERNAL_ERROR, 500)
        except Exception:
            logger.exception("Discord OAuth error")
            return _error(INTERNAL_ERROR, 500)

    return router
