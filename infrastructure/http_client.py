# ============================================================================
# HTTP CLIENT
# ============================================================================
# STATUS: Infrastructure - Sync HTTP with bounded retry
# PURPOSE: Shared httpx wrapper for DevOps API and badge service calls
# CREATED: 15 OCT 2026
# ============================================================================
"""
HTTP Client

Sync httpx client used by every outbound call in the pipeline runner.

Retry policy (fixed interval, no backoff):
    - transport errors (connect, read, timeout)   -> retry
    - 429 and 5xx responses                       -> retry
    - other 4xx responses                         -> fail immediately
    - 3xx responses (redirects are not followed)  -> fail immediately
    - 3 attempts, 1s apart by default (RetryDefaults)

After the last attempt an HttpRequestError is raised carrying the
underlying cause and, when there was a response, its status code.
Callers decide whether that is fatal (submit) or tolerated (poll cycle).
"""

import logging
import time
from pathlib import Path
from typing import Any, Callable, Dict, Optional

import httpx

from __version__ import USER_AGENT
from core.config.defaults import RetryDefaults
from core.errors import HttpRequestError

logger = logging.getLogger(__name__)

# Status codes worth another attempt
RETRYABLE_STATUS_CODES = frozenset({408, 429, 500, 502, 503, 504})


class HttpClient:
    """Sync HTTP client with fixed-interval retry."""

    def __init__(
        self,
        headers: Optional[Dict[str, str]] = None,
        retry: Optional[RetryDefaults] = None,
        sleep: Callable[[float], None] = time.sleep,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self._retry = retry or RetryDefaults()
        self._headers = {"User-Agent": USER_AGENT, **(headers or {})}
        self._timeout = httpx.Timeout(self._retry.timeout_seconds)
        self._sleep = sleep
        self._transport = transport

    @property
    def retry_count(self) -> int:
        return self._retry.count

    def request(
        self,
        method: str,
        url: str,
        json_body: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> httpx.Response:
        """
        Make a request, retrying transient failures.

        Returns:
            The first 2xx response

        Raises:
            HttpRequestError: Redirect, non-retryable 4xx, or retries exhausted
        """
        last_error: Optional[BaseException] = None
        last_status: Optional[int] = None
        attempts = max(self._retry.count, 1)

        for attempt in range(1, attempts + 1):
            try:
                with httpx.Client(
                    headers=self._headers, timeout=self._timeout, transport=self._transport
                ) as client:
                    resp = client.request(method, url, json=json_body, params=params)

                if 200 <= resp.status_code < 300:
                    return resp

                last_status = resp.status_code
                if resp.status_code not in RETRYABLE_STATUS_CODES:
                    raise HttpRequestError(
                        f"{method} {url} returned {resp.status_code}: {resp.text[:500]}",
                        status_code=resp.status_code,
                    )
                last_error = httpx.HTTPStatusError(
                    f"HTTP {resp.status_code}", request=resp.request, response=resp
                )

            except httpx.TransportError as e:
                last_error = e
                last_status = None

            logger.warning(
                f"{method} {url} failed on attempt {attempt}/{attempts}: "
                f"{type(last_error).__name__}: {last_error}"
            )
            if attempt < attempts:
                self._sleep(self._retry.delay_seconds)

        raise HttpRequestError(
            f"{method} {url} failed after {attempts} attempts",
            status_code=last_status,
            cause=last_error,
        )

    def get_json(self, url: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """GET and decode a JSON object body."""
        resp = self.request("GET", url, params=params)
        return _json_or_error(resp, "GET", url)

    def post_json(
        self,
        url: str,
        body: Dict[str, Any],
        params: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """POST a JSON body and decode the JSON object response."""
        resp = self.request("POST", url, json_body=body, params=params)
        return _json_or_error(resp, "POST", url)

    def download(self, url: str, destination: Path) -> int:
        """
        Download a URL to a file.

        Returns:
            Number of bytes written
        """
        resp = self.request("GET", url)
        destination = Path(destination)
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_bytes(resp.content)
        return len(resp.content)


def _json_or_error(resp: httpx.Response, method: str, url: str) -> Dict[str, Any]:
    """Decode a JSON object body or raise HttpRequestError."""
    try:
        body = resp.json()
    except ValueError as e:
        raise HttpRequestError(
            f"{method} {url} returned a non-JSON body", status_code=resp.status_code, cause=e
        )
    if not isinstance(body, dict):
        raise HttpRequestError(
            f"{method} {url} returned {type(body).__name__}, expected a JSON object",
            status_code=resp.status_code,
        )
    return body


__all__ = ["HttpClient", "RETRYABLE_STATUS_CODES"]
