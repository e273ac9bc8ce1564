from __future__ import annotations

import logging
from typing import Any, Optional
from urllib.parse import urljoin

from .config import DEFAULT_API_BASE
from .exceptions import RestError
from .http_utils import DEFAULT_HTTP_TIMEOUT_S, is_curl_cffi_session
from .models import Session

JSON_DECODE_STATUS = 598
NETWORK_ERROR_STATUS = 599
RETRYABLE_STATUSES = {429, 502}

ENDPOINT_LOGIN = "auth/login"
ENDPOINT_TOTP = "auth/mfa/totp"

logger = logging.getLogger(__name__)


class RestClient:
    """Synchronous JSON transport bound to one session.

    Uses the session's HTTP client, rate limiter, user agent and token.
    """

    def __init__(self, session: Session, *, api_base: str = DEFAULT_API_BASE) -> None:
        self.session = session
        self.api_base = api_base

    def url_for(self, endpoint: str) -> str:
        return urljoin(self.api_base, endpoint.lstrip("/"))

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.session.token:
            headers["Authorization"] = self.session.token
        # curl_cffi picks a UA consistent with impersonation unless one is given.
        if self.session.user_agent or not is_curl_cffi_session(self.session.http_client):
            headers["User-Agent"] = self.session.user_agent or "Cordlink"
        return headers

    def request(
        self,
        method: str,
        endpoint: str,
        payload: Any = None,
        *,
        bucket: Optional[str] = None,
        max_retries: Optional[int] = None,
    ) -> Any:
        """Send a request and return the decoded JSON body (None for 204).

        Retries 429/502 responses up to ``max_retries`` times (session default
        when None). Raises ``RestError`` for anything else that is not 2xx.
        """

        retries_left = self.session.max_rest_retries if max_retries is None else max(0, int(max_retries))
        bucket_key = bucket or endpoint
        url = self.url_for(endpoint)

        while True:
            status, headers, text, response = self._send(method, url, payload, bucket_key)
            if status in RETRYABLE_STATUSES and retries_left > 0:
                retries_left -= 1
                logger.info("REST retry endpoint=%s status=%s retries_left=%s", endpoint, status, retries_left)
                continue
            break

        if status == 204:
            return None
        if not 200 <= status < 300:
            raise RestError(
                f"HTTP {status}",
                code="http_error",
                status_code=status,
                endpoint=endpoint,
                body=text[:200],
            )
        try:
            return response.json()
        except ValueError as exc:
            logger.info("REST request endpoint=%s status=%s", endpoint, JSON_DECODE_STATUS)
            raise RestError(
                "invalid_json",
                code="json_decode_error",
                status_code=JSON_DECODE_STATUS,
                endpoint=endpoint,
                body=text[:200],
            ) from exc

    def post(self, endpoint: str, payload: Any = None, **kwargs) -> Any:
        return self.request("POST", endpoint, payload, **kwargs)

    def _send(self, method: str, url: str, payload: Any, bucket_key: str):
        limiter = self.session.ratelimiter
        bucket = limiter.acquire(bucket_key) if limiter is not None else None
        response_headers: dict[str, Any] = {}
        try:
            try:
                response = self.session.http_client.request(
                    method,
                    url,
                    json=payload,
                    headers=self._headers(),
                    timeout=DEFAULT_HTTP_TIMEOUT_S,
                )
            except Exception as exc:
                logger.debug(
                    "REST request endpoint=%s status=%s detail=%s",
                    url,
                    NETWORK_ERROR_STATUS,
                    exc.__class__.__name__,
                )
                raise RestError(
                    str(exc) or exc.__class__.__name__,
                    code="network_error",
                    status_code=NETWORK_ERROR_STATUS,
                    endpoint=url,
                ) from exc

            status = int(getattr(response, "status_code", 0) or 0)
            response_headers = dict(getattr(response, "headers", {}) or {})
            text = str(getattr(response, "text", "") or "")
            logger.info("REST request method=%s endpoint=%s status=%s", method, url, status)
            return status, response_headers, text, response
        finally:
            if bucket is not None:
                limiter.release(bucket, response_headers)
