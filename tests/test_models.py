"""Tests for intents, identify payload and session records."""

from __future__ import annotations

import pytest

from Cordlink.core.defaults import build_defaults
from Cordlink.core.intents import Intents, is_privileged, make_intent
from Cordlink.core.models import LoginChallenge, PasswordAuth, Session, TokenAuth
from Cordlink.core.token import TokenKind


def test_intent_sets() -> None:
    assert int(Intents.ALL) == (1 << 15) - 1
    assert int(Intents.ALL_WITHOUT_PRIVILEGED) & int(Intents.PRIVILEGED) == 0
    assert is_privileged(Intents.ALL)
    assert not is_privileged(Intents.ALL_WITHOUT_PRIVILEGED)


def test_make_intent_accepts_mixed_inputs() -> None:
    mask = make_intent(Intents.GUILDS, "guild_messages", [1 << 12])

    assert mask == int(Intents.GUILDS | Intents.GUILD_MESSAGES | Intents.DIRECT_MESSAGES)
    assert make_intent() == 0
    with pytest.raises(ValueError):
        make_intent("not_an_intent")


def test_identify_wire_format(http_client) -> None:
    session = build_defaults("agent/1.0", http_factory=lambda: http_client)
    session.set_token("Bot abc")

    wire = session.identify.to_wire()

    assert wire["token"] == "Bot abc"
    assert wire["compress"] is True
    assert wire["large_threshold"] == 250
    assert wire["guild_subscriptions"] is True
    assert wire["intents"] == int(Intents.ALL)
    assert wire["properties"]["$browser"] == "Firefox"
    assert "$os" in wire["properties"]
    assert "shard" not in wire


def test_identify_shard_is_serialized_when_set(http_client) -> None:
    session = build_defaults("agent/1.0", http_factory=lambda: http_client)
    session.identify.shard = [session.shard_id, session.shard_count]

    assert session.identify.to_wire()["shard"] == [0, 1]


def test_second_factor_flag_follows_auth_variant() -> None:
    session = Session()
    assert session.second_factor is False

    session.auth = TokenAuth(kind=TokenKind.BOT)
    assert session.second_factor is False
    assert session.is_bot is True

    session.auth = PasswordAuth(second_factor=True)
    assert session.second_factor is True
    assert session.is_bot is False


def test_login_challenge_usable() -> None:
    assert LoginChallenge(ticket="t").usable is True
    assert LoginChallenge(ticket="").usable is False
    assert LoginChallenge(ticket="t", required=False).usable is False


def test_session_repr_hides_token() -> None:
    session = Session()
    session.set_token("secret-token")

    assert "secret-token" not in repr(session)
