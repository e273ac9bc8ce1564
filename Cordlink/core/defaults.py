from __future__ import annotations

import platform
from datetime import datetime, timezone
from typing import Optional

from .http_utils import HttpFactory, build_http_factory
from .intents import Intents
from .models import IdentifyPayload, Session
from .ratelimit import RateLimiter
from .state import State
from .token import ParsedToken

DEFAULT_SHARD_ID = 0
DEFAULT_SHARD_COUNT = 1
DEFAULT_MAX_REST_RETRIES = 3
DEFAULT_LARGE_THRESHOLD = 250
DEFAULT_BROWSER = "Firefox"


def host_os() -> str:
    return platform.system().lower() or "unknown"


def allocate_session() -> Session:
    """Return a zero-value session: no client, limiter, cache or policy applied."""

    return Session(identify=IdentifyPayload())


def apply_defaults(session: Session, user_agent: str, *, http_factory: Optional[HttpFactory] = None) -> Session:
    factory = http_factory or build_http_factory()

    session.user_agent = str(user_agent or "").strip()
    session.state_enabled = True
    session.compress = True
    session.should_reconnect_on_error = True
    session.shard_id = DEFAULT_SHARD_ID
    session.shard_count = DEFAULT_SHARD_COUNT
    session.max_rest_retries = DEFAULT_MAX_REST_RETRIES
    session.http_client = factory()
    session.ratelimiter = RateLimiter()
    session.state = State()
    session.sequence = 0
    session.last_heartbeat_ack = datetime.now(timezone.utc)

    # Callers may tweak these before the gateway connection is opened.
    identify = session.identify
    identify.compress = True
    identify.large_threshold = DEFAULT_LARGE_THRESHOLD
    identify.guild_subscriptions = True
    identify.properties.os = host_os()
    identify.properties.browser = DEFAULT_BROWSER
    identify.intents = int(Intents.ALL)
    return session


def build_defaults(user_agent: str, *, http_factory: Optional[HttpFactory] = None) -> Session:
    return apply_defaults(allocate_session(), user_agent, http_factory=http_factory)


def apply_token_policy(session: Session, parsed: ParsedToken) -> Session:
    """Bot tokens cannot request privileged intents by default; narrow the mask."""

    if parsed.is_bot:
        session.identify.intents = int(Intents.ALL_WITHOUT_PRIVILEGED)
    return session
