from __future__ import annotations

import logging
from typing import Any, Callable, Optional
from urllib.parse import quote

DEFAULT_HTTP_TIMEOUT_S = 20
DEFAULT_IMPERSONATE = "firefox133"

logger = logging.getLogger(__name__)

HttpFactory = Callable[[], Any]


def _as_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text if text else None


def normalize_http_proxies(proxy: Any) -> Optional[dict[str, str]]:
    """Map a proxy setting to the proxies dict both HTTP backends accept.

    ``proxy`` is either a URL (``"host:port"`` gets an ``http://`` scheme) or a
    dict with ``host`` and ``port`` plus optional ``scheme``, ``username`` and
    ``password``. Returns None for an empty or unusable value.
    """

    if isinstance(proxy, str):
        raw = _as_str(proxy)
        if not raw:
            return None
        url = raw if "://" in raw else f"http://{raw}"
        return {"http": url, "https": url}

    if not isinstance(proxy, dict):
        return None

    host = _as_str(proxy.get("host"))
    port = _as_str(proxy.get("port"))
    if not host or not port:
        return None

    scheme = _as_str(proxy.get("scheme")) or "http"
    username = _as_str(proxy.get("username"))
    password = _as_str(proxy.get("password"))
    netloc = f"{host}:{port}"
    if username and password:
        netloc = f"{quote(username, safe='')}:{quote(password, safe='')}@{netloc}"

    url = f"{scheme}://{netloc}"
    return {"http": url, "https": url}


def is_curl_cffi_session(session: Any) -> bool:
    if session is None:
        return False
    cls = getattr(session, "__class__", None)
    module = str(getattr(cls, "__module__", "") or "")
    return "curl_cffi" in module


def build_http_factory(
    *,
    prefer_curl_cffi: bool = True,
    impersonate: str = DEFAULT_IMPERSONATE,
    proxy: Any = None,
) -> HttpFactory:
    """Return a zero-arg factory producing a sync HTTP session bounded by a 20s timeout."""

    proxies = normalize_http_proxies(proxy)

    if prefer_curl_cffi:
        from curl_cffi.requests import Session as CurlSession

        def _curl_factory():
            kwargs: dict[str, Any] = {"impersonate": impersonate, "timeout": DEFAULT_HTTP_TIMEOUT_S}
            if proxies:
                kwargs["proxies"] = proxies
            return CurlSession(**kwargs)

        return _curl_factory

    import requests

    def _requests_factory():
        session = requests.Session()
        if proxies:
            session.proxies.update(proxies)
            # Explicit proxies should not mix with env proxy vars.
            session.trust_env = False
        return session

    logger.debug("HTTP factory resolved backend=requests")
    return _requests_factory
