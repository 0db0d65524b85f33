"""
FastAPI app: Discord OAuth2 login.

Decisions:
- .env is loaded before building the config so DISCORD_* variables are
  available when the auth router is created.
- The user is only logged here; a real app would upsert it in its database
  from on_user_authenticated.
- No session is created: the callback answers with the user and token as JSON.
"""

import logging

from dotenv import load_dotenv
from fastapi import FastAPI

from discord_auth import DiscordOAuthConfig, NormalizedUser, TokenResponse, create_discord_router

load_dotenv()

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("discord_auth.example")


async def on_user_authenticated(user: NormalizedUser, tokens: TokenResponse) -> None:
    """Record the login; replace with persistence in a real deployment."""
    logger.info("Discord user %s (%s) authenticated, scope=%r", user.username, user.id, tokens.scope)


config = DiscordOAuthConfig.from_env(on_user_authenticated=on_user_authenticated)

app = FastAPI()
app.include_router(create_discord_router(config))


@app.get("/")
async def home():
    return {"login": config.authorize_path, "callback": config.callback_path}
