"""Exception hierarchy for fedoractl.

Provides typed exceptions for different failure modes with clear error messages.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    import httpx


class FedoraCtlError(Exception):
    """Base exception for all fedoractl errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({detail_str})"
        return self.message


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(FedoraCtlError):
    """Error in configuration (missing, invalid, or malformed)."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any = None,
    ):
        details = {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = repr(value)
        super().__init__(message, details)
        self.field = field
        self.value = value


class ProfileNotFoundError(ConfigurationError):
    """Requested profile does not exist."""

    def __init__(self, profile: str):
        super().__init__(f"Profile not found: {profile}", field="profile", value=profile)
        self.profile = profile


# =============================================================================
# Validation Errors
# =============================================================================


class ValidationError(FedoraCtlError):
    """Input validation failed."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any = None,
    ):
        details = {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = repr(value)
        super().__init__(message, details)
        self.field = field
        self.value = value


class InvalidArgumentError(ValidationError):
    """Required identifier missing or mutually exclusive arguments combined.

    Always raised before any request is sent.
    """

    def __init__(self, argument: str, reason: str = "is required"):
        super().__init__(f"Invalid argument '{argument}': {reason}", field=argument)
        self.argument = argument
        self.reason = reason


class InvalidURLError(ValidationError):
    """Invalid URL format."""

    def __init__(self, url: str, reason: str = ""):
        msg = f"Invalid URL: {url}"
        if reason:
            msg = f"{msg} - {reason}"
        super().__init__(msg, field="url", value=url)
        self.url = url
        self.reason = reason


class InvalidIdentifierError(ValidationError):
    """Invalid repository identifier (pid, dsid)."""

    def __init__(self, identifier_type: str, value: str, reason: str = ""):
        msg = f"Invalid {identifier_type}: {value}"
        if reason:
            msg = f"{msg} - {reason}"
        super().__init__(msg, field=identifier_type, value=value)
        self.identifier_type = identifier_type
        self.reason = reason


# =============================================================================
# Connection Errors
# =============================================================================


class ConnectionError(FedoraCtlError):
    """Base class for connection-related errors."""

    def __init__(self, message: str, url: str | None = None):
        details = {"url": url} if url else {}
        super().__init__(message, details)
        self.url = url


class NetworkError(ConnectionError):
    """Network-level error (DNS, TCP, TLS)."""

    def __init__(self, url: str, cause: str | None = None):
        msg = f"Network error connecting to {url}"
        if cause:
            msg = f"{msg}: {cause}"
        super().__init__(msg, url)
        self.cause = cause


class ServerUnreachableError(ConnectionError):
    """Server is not reachable."""

    def __init__(self, url: str):
        super().__init__(f"Server unreachable: {url}", url)


class RetryExhaustedError(ConnectionError):
    """All retry attempts failed."""

    def __init__(self, operation: str, attempts: int, last_error: Exception | None = None):
        msg = f"Operation '{operation}' failed after {attempts} attempts"
        if last_error:
            msg = f"{msg}: {last_error}"
        super().__init__(msg)
        self.operation = operation
        self.attempts = attempts
        self.last_error = last_error


# =============================================================================
# Authentication Errors
# =============================================================================


class AuthenticationError(FedoraCtlError):
    """Authentication failed."""

    def __init__(
        self,
        url: str | None = None,
        reason: str = "",
        response: httpx.Response | None = None,
    ):
        msg = "Authentication failed"
        if url:
            msg = f"{msg} for {url}"
        if reason:
            msg = f"{msg}: {reason}"
        details = {"url": url} if url else {}
        super().__init__(msg, details)
        self.url = url
        self.reason = reason
        self.response = response


class PermissionDeniedError(AuthenticationError):
    """User lacks permission for the requested operation."""

    def __init__(
        self,
        resource: str,
        operation: str = "access",
        response: httpx.Response | None = None,
    ):
        super().__init__(reason=f"Permission denied to {operation} {resource}", response=response)
        self.resource = resource
        self.operation = operation


# =============================================================================
# Resource Errors
# =============================================================================


class ResourceError(FedoraCtlError):
    """Error related to repository resources."""

    def __init__(
        self,
        message: str,
        resource_type: str | None = None,
        resource_id: str | None = None,
    ):
        details = {}
        if resource_type:
            details["resource_type"] = resource_type
        if resource_id:
            details["resource_id"] = resource_id
        super().__init__(message, details)
        self.resource_type = resource_type
        self.resource_id = resource_id


class ResourceNotFoundError(ResourceError):
    """Requested resource does not exist.

    Expected and recoverable for fetch operations; callers handle it
    explicitly (for example a datastream that has not been created yet).
    """

    def __init__(self, resource_type: str, resource_id: str):
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            resource_type,
            resource_id,
        )


# =============================================================================
# Operation Errors
# =============================================================================


class OperationError(FedoraCtlError):
    """Error during an operation."""

    def __init__(
        self,
        operation: str,
        message: str,
        details: dict[str, Any] | None = None,
    ):
        full_details = {"operation": operation}
        if details:
            full_details.update(details)
        super().__init__(message, full_details)
        self.operation = operation


class RequestFailedError(OperationError):
    """A REST call failed for any reason other than an expected not-found.

    The raw response (when there was one) is kept for diagnostics; no
    structured detail is extracted from it.
    """

    def __init__(
        self,
        operation: str,
        underlying: Exception | None = None,
        response: httpx.Response | None = None,
    ):
        details: dict[str, Any] = {}
        if response is not None:
            details["status_code"] = response.status_code
        message = f"Error in {operation}"
        if underlying is not None:
            message = f"{message}: {underlying}"
        super().__init__(operation, message, details)
        self.underlying = underlying
        self.response = response

    @property
    def raw_response(self) -> str | None:
        """Body of the failed response, if any."""
        if self.response is None:
            return None
        return self.response.text


class ChecksumMismatchError(RequestFailedError):
    """Server rejected uploaded content because the checksum did not match."""

    error_label = "Checksum Mismatch"

    @property
    def detail(self) -> str:
        """Checksum mismatch message extracted from the server response."""
        body = self.raw_response or ""
        start = body.find(self.error_label)
        if start < 0:
            return self.error_label
        return body[start:].splitlines()[0]


# =============================================================================
# Parse Errors
# =============================================================================


class ParseError(FedoraCtlError):
    """Malformed XML returned by the repository."""

    def __init__(self, document: str, reason: str = ""):
        msg = f"Failed to parse {document}"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg, {"document": document})
        self.document = document
        self.reason = reason
