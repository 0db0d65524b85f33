"""
Discord payload models and the user normalizer.

TokenResponse and RawUserProfile mirror what Discord returns (unknown fields are
kept). NormalizedUser is the shape handed to hooks and returned to the browser;
normalize_user maps one to the other without any external state.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, model_serializer

# Copied onto the normalized user only when Discord sent them (null included).
PASSTHROUGH_FIELDS = ("discriminator", "verified", "locale")


class TokenResponse(BaseModel):
    """Result of the authorization-code exchange."""

    model_config = ConfigDict(extra="allow")

    access_token: str
    token_type: str
    # Seconds, kept exactly as Discord sent it
    expires_in: Any
    refresh_token: Optional[str] = None
    scope: str = ""


class RawUserProfile(BaseModel):
    """Literal GET /users/@me payload."""

    model_config = ConfigDict(extra="allow")

    id: str
    username: str
    global_name: Optional[str] = None
    avatar: Optional[str] = None
    discriminator: Optional[str] = None
    email: Optional[str] = None
    verified: Optional[bool] = None
    locale: Optional[str] = None


class NormalizedUser(BaseModel):
    """
    Canonical user shape.

    globalName, avatar and email are always set (possibly to None). discriminator,
    verified and locale are only set when present upstream, so dump() omits them
    otherwise.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str
    username: str
    global_name: Optional[str] = Field(default=None, alias="globalName")
    avatar: Optional[str] = None
    discriminator: Optional[str] = None
    email: Optional[str] = None
    verified: Optional[bool] = None
    locale: Optional[str] = None

    @model_serializer(mode="wrap")
    def omit_unset_passthrough(self, handler) -> Dict[str, Any]:
        data = handler(self)
        for name in PASSTHROUGH_FIELDS:
            if name not in self.model_fields_set:
                data.pop(name, None)
        return data

    def dump(self) -> Dict[str, Any]:
        """JSON-ready dict with camelCase keys; unset optional fields are left out."""
        return self.model_dump(by_alias=True, exclude_unset=True)


@dataclass(frozen=True)
class CallbackResult:
    """Everything the callback gathered; passed to a custom response shaper."""

    user: NormalizedUser
    raw_user: RawUserProfile
    tokens: TokenResponse


def normalize_user(raw: RawUserProfile) -> NormalizedUser:
    """Map a raw Discord profile to a NormalizedUser."""
    data: Dict[str, Any] = {
        "id": raw.id,
        "username": raw.username,
        "global_name": raw.global_name,
        "avatar": raw.avatar,
        "email": raw.email,
    }
    for name in PASSTHROUGH_FIELDS:
        if name in raw.model_fields_set:
            data[name] = getattr(raw, name)
    return NormalizedUser(**data)
