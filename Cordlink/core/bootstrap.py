from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from .config import CordlinkConfig, parse_config_input
from .defaults import apply_token_policy, build_defaults
from .exceptions import AuthenticationFailed, SecondFactorRequired, UnexpectedSecondFactorCode
from .http_utils import HttpFactory, build_http_factory
from .login import CredentialExchanger, SecondFactorResolver
from .models import LoginResult, PasswordAuth, Session, TokenAuth
from .rest import RestClient
from .token import normalize_token

TOKEN_FETCH_FAILED = "unable to fetch authentication token"

logger = logging.getLogger(__name__)


class SessionBootstrapper:
    """Builds ready-to-connect sessions from a token or from login credentials.

    Every entry point either returns a fully initialised ``Session`` or raises;
    nothing is retried.
    """

    def __init__(
        self,
        config: Any = None,
        *,
        http_factory: Optional[HttpFactory] = None,
        rest_factory: Optional[Callable[[Session], RestClient]] = None,
    ) -> None:
        self.config: CordlinkConfig = parse_config_input(config)
        self.rest_factory = rest_factory
        self.http_factory = http_factory or build_http_factory(
            prefer_curl_cffi=self.config.http.prefer_curl_cffi,
            impersonate=self.config.http.impersonate,
            proxy=self.config.http.proxy,
        )

    def _new_session(self, user_agent: str) -> Session:
        return build_defaults(user_agent, http_factory=self.http_factory)

    def _rest(self, session: Session) -> RestClient:
        if self.rest_factory is not None:
            return self.rest_factory(session)
        return RestClient(session, api_base=self.config.http.api_base)

    def new_with_token(self, user_agent: str, raw_token: str) -> Session:
        parsed = normalize_token(raw_token)
        session = self._new_session(user_agent)
        session.set_token(parsed.token)
        session.auth = TokenAuth(kind=parsed.kind)
        apply_token_policy(session, parsed)
        logger.info("Session bootstrap complete mode=token kind=%s", parsed.kind.value)
        return session

    def _login(self, session: Session, username: str, password: str) -> LoginResult:
        try:
            return CredentialExchanger(self._rest(session)).login(username, password)
        except AuthenticationFailed as exc:
            raise AuthenticationFailed(
                TOKEN_FETCH_FAILED,
                code="token_fetch_failed",
                status_code=exc.status_code,
            ) from exc

    def new_with_password(self, user_agent: str, username: str, password: str) -> Session:
        session = self._new_session(user_agent)
        result = self._login(session, username, password)
        if result.token:
            session.set_token(result.token)
            session.auth = PasswordAuth(second_factor=False)
            logger.info("Session bootstrap complete mode=password second_factor=False")
            return session
        if result.challenge is not None and result.challenge.required:
            raise SecondFactorRequired("second_factor_code_not_supplied")
        raise AuthenticationFailed(TOKEN_FETCH_FAILED, code="token_fetch_failed")

    def new_with_password_and_mfa(self, user_agent: str, username: str, password: str, code: str) -> Session:
        code = str(code or "").strip()
        session = self._new_session(user_agent)
        result = self._login(session, username, password)

        if result.token:
            if code:
                if self.config.auth.strict_second_factor:
                    raise UnexpectedSecondFactorCode("login_did_not_request_second_factor")
                logger.warning("Second-factor code supplied but login did not request one; ignoring it")
            session.set_token(result.token)
            session.auth = PasswordAuth(second_factor=False)
            logger.info("Session bootstrap complete mode=password second_factor=False")
            return session

        challenge = result.challenge
        if challenge is None or not challenge.required:
            raise AuthenticationFailed(TOKEN_FETCH_FAILED, code="token_fetch_failed")
        if not code:
            raise SecondFactorRequired("second_factor_code_not_supplied")
        if not challenge.usable:
            raise SecondFactorRequired("missing_challenge_ticket")

        token = SecondFactorResolver(self._rest(session)).resolve(challenge.ticket, code)
        session.set_token(token)
        session.auth = PasswordAuth(second_factor=True)
        logger.info("Session bootstrap complete mode=password second_factor=True")
        return session


_default_bootstrapper: Optional[SessionBootstrapper] = None


def _bootstrapper() -> SessionBootstrapper:
    global _default_bootstrapper
    if _default_bootstrapper is None:
        _default_bootstrapper = SessionBootstrapper()
    return _default_bootstrapper


def new_with_token(user_agent: str, raw_token: str) -> Session:
    return _bootstrapper().new_with_token(user_agent, raw_token)


def new_with_password(user_agent: str, username: str, password: str) -> Session:
    return _bootstrapper().new_with_password(user_agent, username, password)


def new_with_password_and_mfa(user_agent: str, username: str, password: str, code: str) -> Session:
    return _bootstrapper().new_with_password_and_mfa(user_agent, username, password, code)
