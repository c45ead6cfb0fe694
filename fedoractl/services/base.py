"""Base service with request dispatch and error mapping for all Fedora services."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Optional

import httpx

from fedoractl.core.exceptions import (
    ChecksumMismatchError,
    FedoraCtlError,
    InvalidArgumentError,
    RequestFailedError,
    ResourceNotFoundError,
)
from fedoractl.core.logging import get_logger

if TYPE_CHECKING:
    from fedoractl.core.client import FedoraClient

logger = get_logger(__name__)


class BaseService:
    """Base service class with common functionality."""

    def __init__(self, client: "FedoraClient") -> None:
        """Initialize service with a Fedora client.

        Args:
            client: FedoraClient instance
        """
        self.client = client

    def _call(
        self,
        operation: str,
        method: str,
        path: str,
        *,
        not_found: bool = False,
        **kwargs: Any,
    ) -> httpx.Response:
        """Issue exactly one request and map failures to domain errors.

        Args:
            operation: Human-readable operation name used in errors and logs
            method: Client method name (get, post, put, delete)
            path: Endpoint path including query string
            not_found: Re-raise ResourceNotFoundError instead of wrapping it
            **kwargs: Passed through to the client method

        Returns:
            The successful response

        Raises:
            ResourceNotFoundError: If not_found is set and the resource is missing
            RequestFailedError: For any other failure
        """
        try:
            return getattr(self.client, method)(path, **kwargs)
        except ResourceNotFoundError as e:
            if not_found:
                raise
            logger.error("%s: %s", operation, e)
            raise RequestFailedError(operation, e) from e
        except httpx.HTTPStatusError as e:
            self._log_response(operation, e.response)
            if e.response.status_code == 500 and ChecksumMismatchError.error_label in e.response.text:
                raise ChecksumMismatchError(operation, e, e.response) from e
            raise RequestFailedError(operation, e, e.response) from e
        except FedoraCtlError as e:
            response: Optional[httpx.Response] = getattr(e, "response", None)
            if response is not None:
                self._log_response(operation, response)
            else:
                logger.error("%s: %s", operation, e)
            raise RequestFailedError(operation, e, response) from e

    def _log_response(self, operation: str, response: httpx.Response) -> None:
        logger.error("%s failed with HTTP %s: %s", operation, response.status_code, response.text)

    @staticmethod
    def _with_defaults(
        params: Optional[Mapping[str, Any]],
        **defaults: Any,
    ) -> dict[str, Any]:
        """Merge pass-through query params over defaults (caller wins)."""
        return {**defaults, **(params or {})}

    @staticmethod
    def _require(argument: str, value: Optional[str]) -> str:
        """Fail before any request when an identifier is missing."""
        if not value:
            raise InvalidArgumentError(argument)
        return value
