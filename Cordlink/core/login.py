from __future__ import annotations

import logging
from typing import Any, Optional

from .exceptions import AuthenticationFailed, RestError, SecondFactorRequired
from .models import LoginChallenge, LoginResult
from .rest import ENDPOINT_LOGIN, ENDPOINT_TOTP, RestClient

logger = logging.getLogger(__name__)


def _as_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text if text else None


class CredentialExchanger:
    """Username/password login. One attempt per call, never retried."""

    def __init__(self, rest: RestClient) -> None:
        self.rest = rest

    def login(self, username: str, password: str) -> LoginResult:
        try:
            data = self.rest.post(
                ENDPOINT_LOGIN,
                {"email": username, "password": password},
                bucket=ENDPOINT_LOGIN,
                max_retries=0,
            )
        except RestError as exc:
            raise AuthenticationFailed(exc.reason, code="login_failed", status_code=exc.status_code) from exc

        if not isinstance(data, dict):
            raise AuthenticationFailed("unexpected_login_response", code="login_failed")

        token = _as_str(data.get("token"))
        if token:
            return LoginResult(token=token)

        if data.get("mfa"):
            logger.info("Login requires second factor sms_available=%s", bool(data.get("sms")))
            challenge = LoginChallenge(
                ticket=_as_str(data.get("ticket")) or "",
                required=True,
                sms=bool(data.get("sms")),
            )
            return LoginResult(challenge=challenge)

        return LoginResult()


class SecondFactorResolver:
    """Trades a login challenge ticket plus a TOTP code for a token."""

    def __init__(self, rest: RestClient) -> None:
        self.rest = rest

    def resolve(self, ticket: Optional[str], code: str) -> str:
        if not _as_str(ticket):
            raise SecondFactorRequired("missing_challenge_ticket")

        try:
            data = self.rest.post(
                ENDPOINT_TOTP,
                {"code": code, "ticket": ticket},
                bucket=ENDPOINT_TOTP,
                max_retries=0,
            )
        except RestError as exc:
            raise AuthenticationFailed(exc.reason, code="second_factor_failed", status_code=exc.status_code) from exc

        token = _as_str(data.get("token")) if isinstance(data, dict) else None
        if not token:
            raise AuthenticationFailed("second_factor_returned_no_token", code="second_factor_failed")
        return token
