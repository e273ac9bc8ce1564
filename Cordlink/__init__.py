import logging

from .client import Client
from .__version__ import __version__
from .core.bootstrap import SessionBootstrapper, new_with_password, new_with_password_and_mfa, new_with_token
from .core.config import CordlinkConfig
from .core.exceptions import (
    AuthenticationFailed,
    ConfigError,
    CordlinkError,
    ErrAuthenticationFailed,
    ErrSecondFactorRequired,
    SecondFactorRequired,
)
from .core.intents import Intents, make_intent
from .core.logging_config import configure_logging
from .core.models import IdentifyPayload, Session
from .core.token import TokenKind, normalize_token

logging.getLogger("Cordlink").addHandler(logging.NullHandler())

__all__ = [
    "Client",
    "CordlinkConfig",
    "SessionBootstrapper",
    "Session",
    "IdentifyPayload",
    "Intents",
    "TokenKind",
    "make_intent",
    "normalize_token",
    "new_with_token",
    "new_with_password",
    "new_with_password_and_mfa",
    "CordlinkError",
    "ConfigError",
    "AuthenticationFailed",
    "SecondFactorRequired",
    "ErrAuthenticationFailed",
    "ErrSecondFactorRequired",
    "configure_logging",
]
