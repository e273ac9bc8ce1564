from __future__ import annotations

from enum import IntFlag
from typing import Iterable, Union


class Intents(IntFlag):
    """Gateway intent bits.

    ``GUILD_MEMBERS`` and ``GUILD_PRESENCES`` are privileged and must be enabled
    for the application before the gateway accepts them.
    """

    GUILDS = 1 << 0
    GUILD_MEMBERS = 1 << 1
    GUILD_BANS = 1 << 2
    GUILD_EMOJIS = 1 << 3
    GUILD_INTEGRATIONS = 1 << 4
    GUILD_WEBHOOKS = 1 << 5
    GUILD_INVITES = 1 << 6
    GUILD_VOICE_STATES = 1 << 7
    GUILD_PRESENCES = 1 << 8
    GUILD_MESSAGES = 1 << 9
    GUILD_MESSAGE_REACTIONS = 1 << 10
    GUILD_MESSAGE_TYPING = 1 << 11
    DIRECT_MESSAGES = 1 << 12
    DIRECT_MESSAGE_REACTIONS = 1 << 13
    DIRECT_MESSAGE_TYPING = 1 << 14

    PRIVILEGED = GUILD_MEMBERS | GUILD_PRESENCES
    ALL_WITHOUT_PRIVILEGED = (
        GUILDS
        | GUILD_BANS
        | GUILD_EMOJIS
        | GUILD_INTEGRATIONS
        | GUILD_WEBHOOKS
        | GUILD_INVITES
        | GUILD_VOICE_STATES
        | GUILD_MESSAGES
        | GUILD_MESSAGE_REACTIONS
        | GUILD_MESSAGE_TYPING
        | DIRECT_MESSAGES
        | DIRECT_MESSAGE_REACTIONS
        | DIRECT_MESSAGE_TYPING
    )
    ALL = ALL_WITHOUT_PRIVILEGED | PRIVILEGED
    NONE = 0


IntentLike = Union[Intents, int, str]


def make_intent(*intents: Union[IntentLike, Iterable[IntentLike]]) -> int:
    """Combine intents into the integer bitmask sent in the identify payload.

    Accepts flags, raw ints, member names ("guild_messages") or iterables of those.
    """

    mask = 0
    for item in intents:
        if isinstance(item, (list, tuple, set, frozenset)):
            mask |= make_intent(*item)
            continue
        if isinstance(item, str):
            name = item.strip().upper()
            try:
                mask |= int(Intents[name])
            except KeyError:
                raise ValueError(f"Unknown intent: {item!r}") from None
            continue
        mask |= int(item)
    return mask


def is_privileged(mask: int) -> bool:
    return bool(int(mask) & int(Intents.PRIVILEGED))
