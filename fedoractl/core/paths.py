"""REST endpoint path and query-string builders.

Every function here is pure: identifiers go in, a relative path (resolved
against the client's base URL) comes out. Each path segment is escaped on its
own so that ``/``, ``?``, ``#`` and friends inside an identifier can never
change the shape of the URL.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import Any
from urllib.parse import quote, quote_plus

from dateutil.tz import tzutc

from fedoractl.core.exceptions import InvalidArgumentError

# =============================================================================
# Constants
# =============================================================================

OBJECT_URI_PREFIX = "info:fedora/"
OBJECTS = "objects"

# Characters left literal inside a path segment ("test:1" stays readable)
SEGMENT_SAFE = ":"


# =============================================================================
# Encoding Helpers
# =============================================================================


def strip_pid_prefix(pid: str) -> str:
    """Remove any leading ``info:fedora/`` URI prefix from a pid."""
    while pid.startswith(OBJECT_URI_PREFIX):
        pid = pid[len(OBJECT_URI_PREFIX) :]
    return pid


def escape_segment(value: Any) -> str:
    """Percent-encode a single path segment."""
    return quote(str(value), safe=SEGMENT_SAFE)


def datetime_to_fedoratime(value: datetime) -> str:
    """Format a datetime the way Fedora expects (UTC, millisecond precision).

    Naive datetimes are assumed to already be UTC.
    """
    if value.tzinfo is not None:
        value = value.astimezone(tzutc())
    return value.strftime("%Y-%m-%dT%H:%M:%S") + ".%03dZ" % (value.microsecond // 1000)


def format_query_value(value: Any) -> str:
    """Serialize a query parameter value."""
    # Fedora only understands lower-case booleans
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, datetime):
        return datetime_to_fedoratime(value)
    return str(value)


# =============================================================================
# Builders
# =============================================================================


def append_query(path: str, params: Mapping[str, Any] | None = None) -> str:
    """Append ``?key=value&...`` to a path.

    Args:
        path: Endpoint path.
        params: Query parameters; ``None`` values are skipped.

    Returns:
        The path unchanged when there is nothing to append.
    """
    if not params:
        return path
    pairs = [
        f"{quote_plus(str(key))}={quote_plus(format_query_value(value))}"
        for key, value in params.items()
        if value is not None
    ]
    if not pairs:
        return path
    return f"{path}?{'&'.join(pairs)}"


def object_path(pid: str | None = None, params: Mapping[str, Any] | None = None) -> str:
    """Build ``objects[/{pid}]``.

    Without a pid this is the collection endpoint used by search.
    """
    path = OBJECTS
    if pid:
        path = f"{path}/{escape_segment(strip_pid_prefix(pid))}"
    return append_query(path, params)


def datastream_path(
    pid: str | None,
    dsid: str | None = None,
    params: Mapping[str, Any] | None = None,
) -> str:
    """Build ``objects/{pid}/datastreams[/{dsid}]``.

    Raises:
        InvalidArgumentError: If pid is missing.
    """
    if not pid:
        raise InvalidArgumentError("pid")
    path = f"{object_path(pid)}/datastreams"
    if dsid:
        path = f"{path}/{escape_segment(dsid)}"
    return append_query(path, params)


def dissemination_path(
    pid: str | None,
    sdef: str | None = None,
    method: str | None = None,
    params: Mapping[str, Any] | None = None,
) -> str:
    """Build ``objects/{pid}/methods[/{sdef}][/{method}]``.

    Raises:
        InvalidArgumentError: If pid is missing.
    """
    if not pid:
        raise InvalidArgumentError("pid")
    path = f"{object_path(pid)}/methods"
    if sdef:
        path = f"{path}/{escape_segment(sdef)}"
    if method:
        path = f"{path}/{escape_segment(method)}"
    return append_query(path, params)
