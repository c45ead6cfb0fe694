"""Input validation helpers for fedoractl."""

from __future__ import annotations

import re
from urllib.parse import urlparse

from fedoractl.core.exceptions import (
    InvalidArgumentError,
    InvalidIdentifierError,
    InvalidURLError,
)

# Fedora 3 pid syntax: namespace ":" local-part
PID_PATTERN = re.compile(r"^([A-Za-z0-9]|-|\.)+:(([A-Za-z0-9])|-|\.|~|_|(%[0-9A-F]{2}))+$")
DSID_MAX_LENGTH = 64


def validate_server_url(url: str) -> str:
    """Validate and normalize a repository base URL.

    Args:
        url: Base URL, e.g. ``http://localhost:8080/fedora``.

    Returns:
        URL without surrounding whitespace and trailing slashes.

    Raises:
        InvalidURLError: If the URL is empty or not http(s).
    """
    if not url or not url.strip():
        raise InvalidURLError(url or "", "URL cannot be empty")

    url = url.strip().rstrip("/")
    parsed = urlparse(url)

    if parsed.scheme not in ("http", "https"):
        raise InvalidURLError(url, "scheme must be http or https")
    if not parsed.netloc:
        raise InvalidURLError(url, "missing host")

    return url


def validate_pid(pid: str | None) -> str:
    """Validate a Fedora object pid.

    A leading ``info:fedora/`` prefix is accepted.

    Raises:
        InvalidArgumentError: If pid is missing.
        InvalidIdentifierError: If pid is malformed.
    """
    if not pid:
        raise InvalidArgumentError("pid")
    bare = pid
    while bare.startswith("info:fedora/"):
        bare = bare[len("info:fedora/") :]
    if not PID_PATTERN.match(bare):
        raise InvalidIdentifierError("pid", pid, "expected namespace:identifier")
    return pid


def validate_dsid(dsid: str | None) -> str:
    """Validate a datastream id."""
    if not dsid:
        raise InvalidArgumentError("dsid")
    if len(dsid) > DSID_MAX_LENGTH:
        raise InvalidIdentifierError("dsid", dsid, f"longer than {DSID_MAX_LENGTH} characters")
    if any(c.isspace() for c in dsid) or "/" in dsid or ":" in dsid:
        raise InvalidIdentifierError("dsid", dsid, "contains whitespace, '/' or ':'")
    return dsid


def validate_timeout(value: int | float | None, field: str = "timeout") -> int | float | None:
    """Validate a timeout in seconds (None means use the default)."""
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        raise InvalidArgumentError(field, f"must be a positive number, got {value!r}")
    return value
