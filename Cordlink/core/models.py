from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .token import TokenKind


class IdentifyProperties(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    os: str = Field(default="", alias="$os")
    browser: str = Field(default="", alias="$browser")
    device: str = Field(default="", alias="$device")
    referer: str = Field(default="", alias="$referer")
    referring_domain: str = Field(default="", alias="$referring_domain")


class IdentifyPayload(BaseModel):
    """Handshake data sent once the gateway connection is open.

    Field names and defaults are relied on by the connection layer; ``to_wire``
    returns the exact dictionary it serializes.
    """

    model_config = ConfigDict(validate_assignment=True)

    token: str = ""
    properties: IdentifyProperties = Field(default_factory=IdentifyProperties)
    compress: bool = False
    large_threshold: int = Field(default=0, ge=0)
    shard: Optional[list[int]] = None
    guild_subscriptions: bool = False
    intents: int = Field(default=0, ge=0)

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


@dataclass(frozen=True)
class LoginChallenge:
    ticket: str
    required: bool = True
    sms: bool = False

    @property
    def usable(self) -> bool:
        return self.required and bool(self.ticket)

    def __repr__(self) -> str:
        return f"<LoginChallenge required={self.required} sms={self.sms} has_ticket={bool(self.ticket)}>"


@dataclass(frozen=True)
class LoginResult:
    token: Optional[str] = None
    challenge: Optional[LoginChallenge] = None


@dataclass(frozen=True)
class TokenAuth:
    """Session authenticated with a pre-issued token."""

    kind: TokenKind = TokenKind.USER


@dataclass(frozen=True)
class PasswordAuth:
    """Session authenticated by username/password login."""

    second_factor: bool = False


AuthOutcome = Union[TokenAuth, PasswordAuth]


@dataclass
class Session:
    token: str = ""
    auth: Optional[AuthOutcome] = None
    user_agent: str = ""
    state_enabled: bool = False
    compress: bool = False
    should_reconnect_on_error: bool = False
    shard_id: int = 0
    shard_count: int = 0
    max_rest_retries: int = 0
    http_client: Any = None
    ratelimiter: Any = None
    state: Any = None
    identify: IdentifyPayload = field(default_factory=IdentifyPayload)
    # Connection bookkeeping read by the gateway layer.
    sequence: int = 0
    last_heartbeat_ack: Optional[datetime] = None

    @property
    def second_factor(self) -> bool:
        return isinstance(self.auth, PasswordAuth) and self.auth.second_factor

    @property
    def is_bot(self) -> bool:
        return isinstance(self.auth, TokenAuth) and self.auth.kind is TokenKind.BOT

    def set_token(self, token: str) -> None:
        self.token = token
        self.identify.token = token

    def __repr__(self) -> str:
        return (
            f"<Session auth={self.auth!r} shard={self.shard_id}/{self.shard_count} "
            f"has_token={bool(self.token)}>"
        )
