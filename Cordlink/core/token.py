from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from .exceptions import InvalidTokenError

BOT_MARKER = "bot"
BOT_PREFIX = "Bot "


class TokenKind(str, Enum):
    BOT = "bot"
    USER = "user"


@dataclass(frozen=True)
class ParsedToken:
    token: str
    kind: TokenKind

    @property
    def is_bot(self) -> bool:
        return self.kind is TokenKind.BOT

    def __repr__(self) -> str:
        return f"<ParsedToken kind={self.kind.value}>"


def normalize_token(raw: Any) -> ParsedToken:
    """Canonicalize a raw credential string and classify it.

    Surrounding whitespace (copy/paste artifacts) is dropped. A leading ``bot``
    marker is matched case-insensitively and rewritten to ``"Bot " + body``.
    A marker with no body is rejected instead of being passed on as the bare
    ``"Bot "`` prefix.
    """

    text = str(raw if raw is not None else "").strip()
    if not text:
        raise InvalidTokenError("empty_token")

    if text[: len(BOT_MARKER)].lower() != BOT_MARKER:
        return ParsedToken(token=text, kind=TokenKind.USER)

    body = text[len(BOT_MARKER) :].strip()
    if not body:
        raise InvalidTokenError("missing_token_body")
    return ParsedToken(token=BOT_PREFIX + body, kind=TokenKind.BOT)
