"""Tests for session allocation and default policy."""

from __future__ import annotations

from Cordlink.core.defaults import (
    DEFAULT_LARGE_THRESHOLD,
    allocate_session,
    apply_defaults,
    apply_token_policy,
    build_defaults,
    host_os,
)
from Cordlink.core.intents import Intents
from Cordlink.core.ratelimit import RateLimiter
from Cordlink.core.state import State
from Cordlink.core.token import normalize_token


def test_allocate_session_is_zero_valued() -> None:
    session = allocate_session()

    assert session.token == ""
    assert session.auth is None
    assert session.http_client is None
    assert session.ratelimiter is None
    assert session.state is None
    assert session.state_enabled is False
    assert session.shard_count == 0
    assert session.max_rest_retries == 0
    assert session.identify.intents == 0
    assert session.identify.large_threshold == 0


def test_apply_defaults_populates_policy(http_client) -> None:
    session = apply_defaults(allocate_session(), "agent/1.0", http_factory=lambda: http_client)

    assert session.user_agent == "agent/1.0"
    assert session.state_enabled is True
    assert session.compress is True
    assert session.should_reconnect_on_error is True
    assert (session.shard_id, session.shard_count) == (0, 1)
    assert session.max_rest_retries == 3
    assert session.http_client is http_client
    assert isinstance(session.ratelimiter, RateLimiter)
    assert isinstance(session.state, State)
    assert session.last_heartbeat_ack is not None
    assert session.last_heartbeat_ack.tzinfo is not None

    identify = session.identify
    assert identify.compress is True
    assert identify.large_threshold == DEFAULT_LARGE_THRESHOLD == 250
    assert identify.guild_subscriptions is True
    assert identify.properties.os == host_os()
    assert identify.properties.browser == "Firefox"
    assert identify.intents == int(Intents.ALL)


def test_each_build_gets_fresh_collaborators(http_client) -> None:
    first = build_defaults("agent/1.0", http_factory=lambda: http_client)
    second = build_defaults("agent/1.0", http_factory=lambda: http_client)

    assert first.ratelimiter is not second.ratelimiter
    assert first.state is not second.state
    assert first.identify is not second.identify


def test_token_policy_narrows_intents_for_bots(http_client) -> None:
    session = build_defaults("agent/1.0", http_factory=lambda: http_client)

    apply_token_policy(session, normalize_token("Bot abc"))

    assert session.identify.intents == int(Intents.ALL_WITHOUT_PRIVILEGED)


def test_token_policy_keeps_full_intents_for_users(http_client) -> None:
    session = build_defaults("agent/1.0", http_factory=lambda: http_client)

    apply_token_policy(session, normalize_token("user-token"))

    assert session.identify.intents == int(Intents.ALL)
