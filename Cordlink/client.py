from __future__ import annotations

from typing import Any, Optional, Union

from .const import load_credentials
from .core.bootstrap import SessionBootstrapper
from .core.config import CordlinkConfig
from .core.exceptions import ConfigError
from .core.http_utils import HttpFactory
from .core.models import Session


class Client:
    """Holds a bootstrapped session ready to be handed to a gateway connection."""

    def __init__(self, session: Session, *, config: Optional[CordlinkConfig] = None) -> None:
        self._session = session
        self._config = config or CordlinkConfig()

    @property
    def session(self) -> Session:
        return self._session

    @property
    def config(self) -> CordlinkConfig:
        return self._config

    @property
    def is_bot(self) -> bool:
        return self._session.is_bot

    def identify_payload(self) -> dict[str, Any]:
        return self._session.identify.to_wire()

    @classmethod
    def from_token(
        cls,
        user_agent: str,
        token: str,
        *,
        config: Optional[Union[CordlinkConfig, dict[str, Any]]] = None,
        http_factory: Optional[HttpFactory] = None,
    ) -> "Client":
        bootstrapper = SessionBootstrapper(config, http_factory=http_factory)
        return cls(bootstrapper.new_with_token(user_agent, token), config=bootstrapper.config)

    @classmethod
    def from_password(
        cls,
        user_agent: str,
        username: str,
        password: str,
        *,
        code: Optional[str] = None,
        config: Optional[Union[CordlinkConfig, dict[str, Any]]] = None,
        http_factory: Optional[HttpFactory] = None,
    ) -> "Client":
        bootstrapper = SessionBootstrapper(config, http_factory=http_factory)
        if code is None:
            session = bootstrapper.new_with_password(user_agent, username, password)
        else:
            session = bootstrapper.new_with_password_and_mfa(user_agent, username, password, code)
        return cls(session, config=bootstrapper.config)

    @classmethod
    def from_env(
        cls,
        *,
        env_path: Optional[str] = None,
        config: Optional[Union[CordlinkConfig, dict[str, Any]]] = None,
        http_factory: Optional[HttpFactory] = None,
    ) -> "Client":
        """Bootstrap from CORDLINK_* variables; a token wins over username/password."""

        creds = load_credentials(env_path)
        if creds.token:
            return cls.from_token(creds.user_agent, creds.token, config=config, http_factory=http_factory)
        if creds.username and creds.password:
            return cls.from_password(
                creds.user_agent,
                creds.username,
                creds.password,
                code=creds.mfa_code,
                config=config,
                http_factory=http_factory,
            )
        raise ConfigError("missing_credentials: set CORDLINK_TOKEN or CORDLINK_USERNAME/CORDLINK_PASSWORD")
