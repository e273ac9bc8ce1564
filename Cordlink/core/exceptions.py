from __future__ import annotations

from typing import Optional, Union


class CordlinkError(Exception):
    """Base exception for Cordlink internals."""


class ClassifiedError(CordlinkError):
    """Error carrying stable classification metadata."""

    default_code = "cordlink_error"
    default_status_code = 500
    default_category = "runtime"

    def __init__(
        self,
        reason: Optional[str] = None,
        *,
        code: Optional[str] = None,
        status_code: Optional[int] = None,
        category: Optional[str] = None,
    ) -> None:
        self.code = str(code or self.default_code).strip() or self.default_code
        self.reason = str(reason or self.code).strip() or self.code
        self.status_code = int(status_code if status_code is not None else self.default_status_code)
        self.category = str(category or self.default_category).strip() or self.default_category
        super().__init__(f"{self.code}:{self.reason}")

    @property
    def metadata(self) -> dict[str, Union[str, int]]:
        return {
            "code": self.code,
            "reason": self.reason,
            "status_code": self.status_code,
            "category": self.category,
        }


class ConfigError(ClassifiedError, ValueError):
    """Configuration or caller input is invalid."""

    default_code = "config_error"
    default_status_code = 400
    default_category = "config"


class InvalidTokenError(ConfigError):
    """Raw token is empty or carries no body after the type marker."""

    default_code = "invalid_token"


class SecondFactorRequired(ClassifiedError):
    """The account requires a second factor and none (or an unusable one) was supplied."""

    default_code = "second_factor_required"
    default_status_code = 401
    default_category = "auth"


class UnexpectedSecondFactorCode(ConfigError):
    """A second-factor code was supplied but the login did not ask for one (strict mode)."""

    default_code = "unexpected_second_factor_code"


class AuthenticationFailed(ClassifiedError):
    """Login or second-factor exchange failed; the cause is chained via ``__cause__``."""

    default_code = "authentication_failed"
    default_status_code = 401
    default_category = "auth"


class RestError(ClassifiedError):
    """Transport-level failure talking to the REST API."""

    default_code = "rest_error"
    default_status_code = 599
    default_category = "transient"

    def __init__(
        self,
        reason: Optional[str] = None,
        *,
        endpoint: Optional[str] = None,
        body: Optional[str] = None,
        **kwargs,
    ) -> None:
        self.endpoint = endpoint
        self.body = body
        super().__init__(reason, **kwargs)


ErrSecondFactorRequired = SecondFactorRequired
ErrAuthenticationFailed = AuthenticationFailed
