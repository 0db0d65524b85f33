"""
Protocols for the OAuth provider and the caller-supplied hooks.

The router depends only on these shapes: an OAuthProvider that can build the
consent URL, exchange a code and fetch the user, plus two optional callables
the embedding application passes in through DiscordOAuthConfig.
"""

from typing import TYPE_CHECKING, Any, Awaitable, Protocol, Union, runtime_checkable

if TYPE_CHECKING:
    from discord_auth.models import CallbackResult, NormalizedUser, RawUserProfile, TokenResponse


@runtime_checkable
class OAuthProvider(Protocol):
    """Protocol for an OAuth2 authorization-code provider (e.g. Discord)."""

    name: str

    def authorize_url(self) -> str:
        """Return the provider consent URL the browser is redirected to."""
        ...

    async def exchange_code(self, code: str) -> "TokenResponse":
        """Trade an authorization code for an access token."""
        ...

    async def fetch_user(self, tokens: "TokenResponse") -> "RawUserProfile":
        """Fetch the profile of the user the token belongs to."""
        ...


class UserAuthenticatedHook(Protocol):
    """Called once per successful callback, e.g. to upsert the user in a database."""

    def __call__(
        self, user: "NormalizedUser", tokens: "TokenResponse"
    ) -> Union[None, Awaitable[None]]: ...


class ResponseShaper(Protocol):
    """Builds the 200 JSON body from the callback result, replacing the default body."""

    def __call__(self, result: "CallbackResult") -> Union[Any, Awaitable[Any]]: ...
