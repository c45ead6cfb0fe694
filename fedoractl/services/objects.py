"""Object service for Fedora object operations."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import IO, Any, Optional, Union

from fedoractl.core.exceptions import ResourceNotFoundError
from fedoractl.core.logging import LogContext, get_logger
from fedoractl.core.paths import append_query, object_path
from fedoractl.core.profiles import parse_object_history, parse_object_profile

from .base import BaseService

logger = get_logger(__name__)

NEW_PID = "new"


class ObjectService(BaseService):
    """Service for Fedora object operations."""

    def get(self, pid: str, params: Optional[Mapping[str, Any]] = None) -> str:
        """Get an object profile document.

        Args:
            pid: Object pid
            params: Extra query parameters (``asOfDateTime``...)

        Returns:
            Raw XML

        Raises:
            ResourceNotFoundError: If the object does not exist
        """
        pid = self._require("pid", pid)
        path = object_path(pid, self._with_defaults(params, format="xml"))
        return self._call(f"get object {pid}", "get", path, not_found=True).text

    def ingest(
        self,
        content: Union[str, bytes, IO[bytes], None] = None,
        pid: Optional[str] = None,
        params: Optional[Mapping[str, Any]] = None,
    ) -> str:
        """Create a new object.

        Args:
            content: FOXML document; omit to create an empty object
            pid: Pid to create; the server assigns one when omitted
            params: Extra query parameters (``label``, ``logMessage``, ``namespace``...)

        Returns:
            The pid of the new object
        """
        target = pid or NEW_PID
        if hasattr(content, "read"):
            content = content.read()
        path = object_path(target, params)
        with LogContext("ingest", logger, pid=target):
            resp = self._call(
                f"ingest object {target}",
                "post",
                path,
                content=content,
                headers={"Content-Type": "text/xml"},
            )
        return resp.text.strip()

    def modify(self, pid: str, params: Optional[Mapping[str, Any]] = None) -> str:
        """Update object properties (``label``, ``ownerId``, ``state``, ``logMessage``).

        Returns:
            Server timestamp of the modification
        """
        pid = self._require("pid", pid)
        with LogContext("modify object", logger, pid=pid):
            resp = self._call(f"modify object {pid}", "put", object_path(pid, params))
        return resp.text

    def purge(self, pid: str, params: Optional[Mapping[str, Any]] = None) -> str:
        """Permanently remove an object.

        Raises:
            ResourceNotFoundError: If the object does not exist
        """
        pid = self._require("pid", pid)
        with LogContext("purge object", logger, pid=pid):
            resp = self._call(
                f"purge object {pid}", "delete", object_path(pid, params), not_found=True
            )
        return resp.text

    def versions(self, pid: str, params: Optional[Mapping[str, Any]] = None) -> str:
        """Get the object history document."""
        pid = self._require("pid", pid)
        path = append_query(f"{object_path(pid)}/versions", self._with_defaults(params, format="xml"))
        return self._call(f"get versions for object {pid}", "get", path).text

    def xml(self, pid: str, params: Optional[Mapping[str, Any]] = None) -> str:
        """Get the complete FOXML of an object."""
        pid = self._require("pid", pid)
        path = append_query(f"{object_path(pid)}/objectXML", self._with_defaults(params, format="xml"))
        return self._call(f"get objectXML for object {pid}", "get", path).text

    def export(
        self,
        pid: str,
        context: Optional[str] = None,
        format: Optional[str] = None,
        encoding: Optional[str] = None,
    ) -> str:
        """Export an object.

        Args:
            pid: Object pid
            context: One of ``public``, ``migrate``, ``archive`` (server default: public)
            format: Export format URI (server default: FOXML 1.1)
            encoding: Character encoding (server default: UTF-8)
        """
        pid = self._require("pid", pid)
        params = {"context": context, "format": format, "encoding": encoding}
        path = append_query(f"{object_path(pid)}/export", params)
        return self._call(f"export object {pid}", "get", path).text

    def profile(self, pid: str, as_of: Optional[Union[datetime, str]] = None) -> dict[str, Any]:
        """Get the parsed object profile.

        Args:
            pid: Object pid
            as_of: Profile as of this date-time

        Returns:
            Profile record; empty when the object does not exist
        """
        try:
            xml = self.get(pid, {"asOfDateTime": as_of})
        except ResourceNotFoundError:
            return {}
        return parse_object_profile(xml)

    def history(self, pid: str) -> list[str]:
        """Get the change dates of an object."""
        return parse_object_history(self.versions(pid))
