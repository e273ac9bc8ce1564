from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from .http_utils import DEFAULT_IMPERSONATE, normalize_http_proxies

DEFAULT_API_BASE = "https://discord.com/api/v8/"


class HttpConfig(BaseModel):
    api_base: str = DEFAULT_API_BASE
    # curl_cffi "impersonate" value for REST sessions.
    impersonate: str = DEFAULT_IMPERSONATE
    # URL string or {"host", "port", "scheme", "username", "password"} dict.
    proxy: Optional[dict[str, Any] | str] = None
    prefer_curl_cffi: bool = True

    @field_validator("api_base", mode="before")
    @classmethod
    def _normalize_api_base(cls, value: Any) -> Any:
        if value is None:
            return DEFAULT_API_BASE
        text = str(value).strip()
        if not text:
            return DEFAULT_API_BASE
        return text if text.endswith("/") else text + "/"

    @field_validator("impersonate", mode="before")
    @classmethod
    def _normalize_impersonate(cls, value: Any) -> Any:
        if value is None:
            return DEFAULT_IMPERSONATE
        text = str(value).strip()
        return text if text else DEFAULT_IMPERSONATE

    @field_validator("proxy", mode="before")
    @classmethod
    def _normalize_proxy(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = value.strip() or None
        if value is not None and normalize_http_proxies(value) is None:
            raise ValueError("proxy must be a URL or a dict with host and port")
        return value


class AuthConfig(BaseModel):
    # Raise instead of warning when a second-factor code is supplied but login did not ask for one.
    strict_second_factor: bool = False


class CordlinkConfig(BaseModel):
    http: HttpConfig = Field(default_factory=HttpConfig)
    auth: AuthConfig = Field(default_factory=AuthConfig)

    @classmethod
    def from_sources(
        cls,
        *,
        api_base: Optional[str] = None,
        proxy: Any = None,
        impersonate: Optional[str] = None,
        prefer_curl_cffi: Optional[bool] = None,
        strict_second_factor: Optional[bool] = None,
        overrides: Any = None,
    ) -> "CordlinkConfig":
        """Build a config from a few common knobs plus optional nested ``overrides``.

            cfg = CordlinkConfig.from_sources(
                proxy="127.0.0.1:8080",
                overrides={"auth": {"strict_second_factor": True}},
            )
        """

        def _deep_merge(base: dict[str, Any], patch: dict[str, Any]) -> dict[str, Any]:
            out = dict(base or {})
            for key, value in (patch or {}).items():
                if isinstance(value, dict) and isinstance(out.get(key), dict):
                    out[key] = _deep_merge(out[key], value)
                else:
                    out[key] = value
            return out

        patch: dict[str, Any] = {"http": {}, "auth": {}}
        if api_base is not None:
            patch["http"]["api_base"] = api_base
        if proxy is not None:
            patch["http"]["proxy"] = proxy
        if impersonate is not None:
            patch["http"]["impersonate"] = impersonate
        if prefer_curl_cffi is not None:
            patch["http"]["prefer_curl_cffi"] = bool(prefer_curl_cffi)
        if strict_second_factor is not None:
            patch["auth"]["strict_second_factor"] = bool(strict_second_factor)

        merged = _deep_merge(cls().model_dump(), patch)

        if overrides is not None:
            if isinstance(overrides, cls):
                overrides_data = overrides.model_dump()
            elif isinstance(overrides, dict):
                overrides_data = dict(overrides)
            else:
                raise TypeError("overrides must be a dict, CordlinkConfig, or None")
            merged = _deep_merge(merged, overrides_data)

        return cls.model_validate(merged)


def parse_config_input(config_input: Any) -> CordlinkConfig:
    if config_input is None:
        return CordlinkConfig()
    if isinstance(config_input, CordlinkConfig):
        return config_input.model_copy(deep=True)
    if isinstance(config_input, dict):
        return CordlinkConfig.model_validate(config_input)
    raise TypeError("config must be CordlinkConfig, dict, or None")
