"""Tests for DiscordOAuthConfig and route prefix normalization."""

import pytest

from discord_auth.config import DEFAULT_ROUTE_PREFIX, DiscordOAuthConfig, normalize_route_prefix


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("", "/auth/discord"),
        (None, "/auth/discord"),
        ("/", "/auth/discord"),
        ("/x", "/x"),
        ("/x/", "/x"),
        ("/x//", "/x"),
        ("//", "/auth/discord"),
        ("/auth/discord", "/auth/discord"),
        ("/auth/discord/", "/auth/discord"),
        ("x", "/x"),
    ],
)
def test_normalize_route_prefix(raw, expected):
    assert normalize_route_prefix(raw) == expected


@pytest.mark.parametrize("raw", ["", "/", "//", "/x", "/x/", "/x//", "/auth/discord", "x/"])
def test_normalize_route_prefix_is_idempotent(raw):
    once = normalize_route_prefix(raw)
    assert normalize_route_prefix(once) == once


@pytest.mark.parametrize("raw", ["", "/x", "/x/", "/auth/discord"])
def test_paths_are_stable(raw):
    config = DiscordOAuthConfig("id", "secret", "http://cb", route_prefix=raw)
    again = DiscordOAuthConfig("id", "secret", "http://cb", route_prefix=config.prefix)
    assert config.authorize_path == again.authorize_path
    assert config.callback_path == again.callback_path == f"{config.authorize_path}/callback"


def test_defaults():
    config = DiscordOAuthConfig("id", "secret", "http://cb")
    assert config.prefix == DEFAULT_ROUTE_PREFIX
    assert config.scopes == ("identify",)
    assert config.on_user_authenticated is None
    assert config.response is None


def test_scopes_list_is_frozen_to_tuple():
    config = DiscordOAuthConfig("id", "secret", "http://cb", scopes=["identify", "email"])
    assert config.scopes == ("identify", "email")


@pytest.mark.parametrize(
    "client_id, client_secret, redirect_uri, can_authorize, configured",
    [
        ("id", "secret", "http://cb", True, True),
        ("id", None, "http://cb", True, False),
        ("", "secret", "http://cb", False, False),
        ("id", "secret", None, False, False),
    ],
)
def test_configuration_checks(client_id, client_secret, redirect_uri, can_authorize, configured):
    config = DiscordOAuthConfig(client_id, client_secret, redirect_uri)
    assert config.can_authorize is can_authorize
    assert config.is_configured is configured


def test_from_env(monkeypatch):
    monkeypatch.setenv("DISCORD_CLIENT_ID", "env-id")
    monkeypatch.setenv("DISCORD_CLIENT_SECRET", "env-secret")
    monkeypatch.setenv("DISCORD_REDIRECT_URI", "http://localhost/cb")
    monkeypatch.setenv("DISCORD_ROUTE_PREFIX", "/login/discord/")
    monkeypatch.setenv("DISCORD_SCOPES", "identify, email guilds")

    config = DiscordOAuthConfig.from_env()

    assert config.client_id == "env-id"
    assert config.client_secret == "env-secret"
    assert config.redirect_uri == "http://localhost/cb"
    assert config.authorize_path == "/login/discord"
    assert config.scopes == ("identify", "email", "guilds")


def test_from_env_missing_values(monkeypatch):
    for name in (
        "DISCORD_CLIENT_ID",
        "DISCORD_CLIENT_SECRET",
        "DISCORD_REDIRECT_URI",
        "DISCORD_ROUTE_PREFIX",
        "DISCORD_SCOPES",
        "DISCORD_HTTP_TIMEOUT",
    ):
        monkeypatch.delenv(name, raising=False)

    config = DiscordOAuthConfig.from_env()

    assert config.client_id is None
    assert not config.is_configured
    assert config.prefix == "/auth/discord"
    assert config.scopes == ("identify",)
    assert config.http_timeout == 20.0
