"""HTTP client for the Fedora REST API.

Owns the (lazily created) httpx transport handle, basic authentication,
TLS client certificates and retries on transient gateway errors.
"""

from __future__ import annotations

import ssl
import time
from dataclasses import dataclass, field
from typing import Any

import httpx

from fedoractl.core.config import VALID_CLIENT_OPTIONS, Profile
from fedoractl.core.exceptions import (
    AuthenticationError,
    NetworkError,
    PermissionDeniedError,
    ResourceNotFoundError,
    RetryExhaustedError,
    ServerUnreachableError,
)
from fedoractl.core.logging import get_logger
from fedoractl.core.validation import validate_server_url, validate_timeout

logger = get_logger(__name__)

# =============================================================================
# Constants
# =============================================================================

DEFAULT_TIMEOUT = 30
DEFAULT_MAX_RETRIES = 3
RETRY_BACKOFF_BASE = 2
RETRYABLE_STATUS_CODES = {502, 503, 504}


# =============================================================================
# FedoraClient
# =============================================================================


@dataclass
class FedoraClient:
    """HTTP client for a Fedora repository with retry support.

    Paths passed to the request methods are relative to ``base_url`` and may
    already carry a query string.
    """

    base_url: str
    user: str | None = None
    password: str | None = None
    timeout: int | float = DEFAULT_TIMEOUT
    open_timeout: int | float | None = None
    ssl_client_cert: str | None = None
    ssl_client_key: str | None = None
    verify_ssl: bool = True
    max_retries: int = DEFAULT_MAX_RETRIES
    _client: httpx.Client | None = field(init=False, default=None, repr=False)

    def __post_init__(self) -> None:
        """Validate settings once, before any handle exists."""
        self.base_url = validate_server_url(self.base_url)
        validate_timeout(self.timeout)
        validate_timeout(self.open_timeout, "open_timeout")
        if self.open_timeout is None:
            self.open_timeout = self.timeout

    @classmethod
    def from_options(cls, url: str, **options: Any) -> FedoraClient:
        """Create a client from a loose option mapping.

        Only ``user``, ``password``, ``timeout``, ``open_timeout``,
        ``ssl_client_cert``, ``ssl_client_key`` (plus ``verify_ssl`` and
        ``max_retries``) are honoured; other keys are dropped.
        """
        accepted = set(VALID_CLIENT_OPTIONS) | {"verify_ssl", "max_retries"}
        dropped = sorted(key for key in options if key not in accepted)
        if dropped:
            logger.debug("Ignoring non-client options: %s", ", ".join(dropped))
        return cls(url, **{k: v for k, v in options.items() if k in accepted})

    @classmethod
    def from_profile(cls, profile: Profile) -> FedoraClient:
        """Create a client from a configuration profile."""
        return cls.from_options(
            profile.url,
            verify_ssl=profile.verify_ssl,
            **profile.client_options(),
        )

    # =========================================================================
    # Client Management
    # =========================================================================

    def _ssl_context(self) -> ssl.SSLContext | bool:
        if not self.ssl_client_cert:
            return self.verify_ssl
        context = ssl.create_default_context()
        if not self.verify_ssl:
            context.check_hostname = False
            context.verify_mode = ssl.CERT_NONE
        context.load_cert_chain(self.ssl_client_cert, self.ssl_client_key)
        return context

    def _get_client(self) -> httpx.Client:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.Client(
                base_url=self.base_url + "/",
                timeout=httpx.Timeout(self.timeout, connect=self.open_timeout),
                verify=self._ssl_context(),
                auth=self._get_auth(),
                follow_redirects=True,
            )
        return self._client

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self) -> FedoraClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    # =========================================================================
    # HTTP Methods
    # =========================================================================

    def _get_auth(self) -> tuple[str, str] | None:
        """Get basic auth tuple if credentials are configured."""
        if self.user and self.password:
            return (self.user, self.password)
        return None

    def _request(
        self,
        method: str,
        path: str,
        *,
        content: Any | None = None,
        files: Any | None = None,
        headers: dict[str, str] | None = None,
        timeout: int | float | None = None,
    ) -> httpx.Response:
        """Execute HTTP request with retry logic.

        Args:
            method: HTTP method.
            path: API path, relative to the base URL, with its query string.
            content: Raw request body.
            files: Multipart files to upload.
            headers: Additional headers.
            timeout: Read timeout override.

        Returns:
            HTTP response.

        Raises:
            AuthenticationError: On 401.
            PermissionDeniedError: On 403.
            ResourceNotFoundError: On 404.
            httpx.HTTPStatusError: On any other 4xx/5xx.
            RetryExhaustedError: If all retries fail.
        """
        client = self._get_client()
        request_timeout = timeout or self.timeout
        last_error: Exception | None = None

        for attempt in range(self.max_retries + 1):
            try:
                resp = client.request(
                    method,
                    path,
                    content=content,
                    files=files,
                    headers=headers,
                    timeout=httpx.Timeout(request_timeout, connect=self.open_timeout),
                )

                if resp.status_code == 401:
                    raise AuthenticationError(self.base_url, "Unauthorized", response=resp)
                if resp.status_code == 403:
                    raise PermissionDeniedError(path, method.lower(), response=resp)
                if resp.status_code == 404:
                    raise ResourceNotFoundError("resource", path)

                # Retry on gateway errors
                if resp.status_code in RETRYABLE_STATUS_CODES:
                    last_error = NetworkError(self.base_url, f"HTTP {resp.status_code}")
                    if attempt < self.max_retries:
                        logger.debug(
                            "%s %s returned %s, retrying", method, path, resp.status_code
                        )
                        time.sleep(RETRY_BACKOFF_BASE ** (attempt + 1))
                        continue

                # Success or non-retryable error
                resp.raise_for_status()
                return resp

            except httpx.ConnectError:
                last_error = ServerUnreachableError(self.base_url)
            except httpx.TimeoutException:
                last_error = NetworkError(self.base_url, f"Timeout after {request_timeout}s")

            if attempt < self.max_retries:
                time.sleep(RETRY_BACKOFF_BASE ** (attempt + 1))

        raise RetryExhaustedError(f"{method} {path}", self.max_retries + 1, last_error)

    def get(
        self,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        timeout: int | float | None = None,
    ) -> httpx.Response:
        """GET request."""
        return self._request("GET", path, headers=headers, timeout=timeout)

    def post(
        self,
        path: str,
        *,
        content: Any | None = None,
        files: Any | None = None,
        headers: dict[str, str] | None = None,
        timeout: int | float | None = None,
    ) -> httpx.Response:
        """POST request."""
        return self._request(
            "POST",
            path,
            content=content,
            files=files,
            headers=headers,
            timeout=timeout,
        )

    def put(
        self,
        path: str,
        *,
        content: Any | None = None,
        headers: dict[str, str] | None = None,
        timeout: int | float | None = None,
    ) -> httpx.Response:
        """PUT request."""
        return self._request(
            "PUT",
            path,
            content=content,
            headers=headers,
            timeout=timeout,
        )

    def delete(
        self,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        timeout: int | float | None = None,
    ) -> httpx.Response:
        """DELETE request."""
        return self._request("DELETE", path, headers=headers, timeout=timeout)

    # =========================================================================
    # Convenience Methods
    # =========================================================================

    def ping(self) -> dict[str, Any]:
        """Check server connectivity.

        Returns:
            Dict with url, status and latency in milliseconds.
        """
        start = time.time()
        self.get("describe?xml=true")
        latency = int((time.time() - start) * 1000)

        return {
            "url": self.base_url,
            "status": "ok",
            "latency_ms": latency,
        }
