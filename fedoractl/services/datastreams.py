"""Datastream service for Fedora datastream operations."""

from __future__ import annotations

import mimetypes
import os
from collections.abc import Mapping
from datetime import datetime
from typing import IO, TYPE_CHECKING, Any, Optional, Union

from fedoractl.core.exceptions import ResourceNotFoundError
from fedoractl.core.logging import LogContext, get_logger
from fedoractl.core.paths import append_query, datastream_path
from fedoractl.core.profiles import parse_datastream_history, parse_datastream_profile

from .base import BaseService

if TYPE_CHECKING:
    from fedoractl.core.client import FedoraClient

logger = get_logger(__name__)

DEFAULT_CONTENT_TYPE = "text/plain"

Content = Union[str, bytes, IO[bytes]]


def resolve_content_type(
    content: Optional[Content],
    content_type: Optional[str] = None,
    params: Optional[Mapping[str, Any]] = None,
) -> str:
    """Pick the Content-Type for an upload.

    Order: explicit ``content_type``, the ``mimeType`` param, a guess from
    the file name of a file-like ``content``, then ``text/plain``.
    """
    if content_type:
        return content_type
    if params and params.get("mimeType"):
        return str(params["mimeType"])
    name = getattr(content, "name", None)
    if isinstance(name, str):
        guessed, _ = mimetypes.guess_type(name)
        if guessed:
            return guessed
    return DEFAULT_CONTENT_TYPE


class DatastreamService(BaseService):
    """Service for Fedora datastream operations."""

    def __init__(self, client: "FedoraClient", validate_checksum: bool = False) -> None:
        """Initialize service.

        Args:
            client: FedoraClient instance
            validate_checksum: Always ask the server to validate checksums
                when fetching profiles
        """
        super().__init__(client)
        self.validate_checksum = validate_checksum

    def get(
        self,
        pid: str,
        dsid: Optional[str] = None,
        params: Optional[Mapping[str, Any]] = None,
    ) -> str:
        """Get a datastream profile, or the datastream listing without a dsid.

        Raises:
            ResourceNotFoundError: If the object or datastream does not exist
        """
        path = datastream_path(pid, dsid, self._with_defaults(params, format="xml"))
        return self._call(
            f"get datastream '{dsid}' for object {pid}", "get", path, not_found=True
        ).text

    def list(self, pid: str, params: Optional[Mapping[str, Any]] = None) -> str:
        """List the datastreams of an object."""
        return self.get(pid, None, params)

    def add(
        self,
        pid: str,
        dsid: str,
        content: Optional[Content] = None,
        content_type: Optional[str] = None,
        params: Optional[Mapping[str, Any]] = None,
    ) -> str:
        """Add a datastream.

        Args:
            pid: Object pid
            dsid: Datastream id
            content: Datastream content; omit when ``dsLocation`` is given
            content_type: Upload content type (see ``resolve_content_type``)
            params: Query parameters (``controlGroup``, ``dsLabel``, ``mimeType``,
                ``checksumType``, ``checksum``, ``dsLocation``...)

        Returns:
            Response body (the new datastream profile)
        """
        dsid = self._require("dsid", dsid)
        path = datastream_path(pid, dsid, params)
        files = None
        if content is not None:
            filename = os.path.basename(getattr(content, "name", "") or dsid)
            files = {"file": (filename, content, resolve_content_type(content, content_type, params))}
        with LogContext("add datastream", logger, pid=pid, dsid=dsid) as log:
            if params and params.get("checksum") and not params.get("checksumType"):
                # only modify falls back to the existing checksum type
                log.warning("checksum will be ignored without a checksumType")
            self._warn_missing_checksum(log, content, params)
            resp = self._call(
                f"add datastream {dsid} for object {pid}", "post", path, files=files
            )
        return resp.text

    def modify(
        self,
        pid: str,
        dsid: str,
        content: Optional[Content] = None,
        content_type: Optional[str] = None,
        params: Optional[Mapping[str, Any]] = None,
    ) -> str:
        """Modify a datastream, replacing its content when given.

        Content is sent as the raw request body.
        """
        dsid = self._require("dsid", dsid)
        path = datastream_path(pid, dsid, params)
        headers = None
        with LogContext("modify datastream", logger, pid=pid, dsid=dsid) as log:
            self._warn_missing_checksum(log, content, params)
            if content is not None:
                headers = {"Content-Type": resolve_content_type(content, content_type, params)}
                if hasattr(content, "read"):
                    content = content.read()
            resp = self._call(
                f"modify datastream {dsid} for {pid}",
                "put",
                path,
                content=content,
                headers=headers,
            )
        return resp.text

    def set_options(self, pid: str, dsid: str, params: Optional[Mapping[str, Any]] = None) -> str:
        """Change datastream properties (``dsState``, ``versionable``...) without new content."""
        dsid = self._require("dsid", dsid)
        path = datastream_path(pid, dsid, params)
        return self._call(
            f"set datastream options on {dsid} for object {pid}", "put", path
        ).text

    def purge(self, pid: str, dsid: str, params: Optional[Mapping[str, Any]] = None) -> str:
        """Purge a datastream or a date range of its versions (``startDT``, ``endDT``).

        Returns:
            Response body listing the purged version timestamps
        """
        dsid = self._require("dsid", dsid)
        path = datastream_path(pid, dsid, params)
        with LogContext("purge datastream", logger, pid=pid, dsid=dsid):
            resp = self._call(f"purge datastream {dsid} for {pid}", "delete", path)
        return resp.text

    def versions(
        self,
        pid: str,
        dsid: Optional[str],
        params: Optional[Mapping[str, Any]] = None,
    ) -> str:
        """Get the datastream history document.

        Raises:
            InvalidArgumentError: If dsid is missing
        """
        dsid = self._require("dsid", dsid)
        path = append_query(
            f"{datastream_path(pid, dsid)}/versions", self._with_defaults(params, format="xml")
        )
        return self._call(
            f"get versions for datastream {dsid} for object {pid}", "get", path
        ).text

    def content(
        self,
        pid: str,
        dsid: Optional[str],
        params: Optional[Mapping[str, Any]] = None,
    ) -> bytes:
        """Get the datastream content.

        Raises:
            InvalidArgumentError: If dsid is missing
            ResourceNotFoundError: If the datastream does not exist
        """
        dsid = self._require("dsid", dsid)
        path = append_query(f"{datastream_path(pid, dsid)}/content", params)
        return self._call(
            f"get content of datastream {dsid} for object {pid}", "get", path, not_found=True
        ).content

    def profile(
        self,
        pid: str,
        dsid: str,
        validate_checksum: bool = False,
        as_of: Optional[Union[datetime, str]] = None,
    ) -> dict[str, Any]:
        """Get the parsed datastream profile.

        Returns:
            Profile record; empty when the datastream does not exist yet
        """
        params: dict[str, Any] = {"asOfDateTime": as_of}
        if validate_checksum or self.validate_checksum:
            params["validateChecksum"] = True
        try:
            xml = self.get(pid, self._require("dsid", dsid), params)
        except ResourceNotFoundError:
            xml = ""
        return parse_datastream_profile(xml)

    def history(self, pid: str, dsid: str) -> dict[str, dict[str, Any]]:
        """Get every version of a datastream keyed by creation date."""
        return parse_datastream_history(self.versions(pid, dsid))

    @staticmethod
    def _warn_missing_checksum(
        log: LogContext,
        content: Optional[Content],
        params: Optional[Mapping[str, Any]],
    ) -> None:
        if hasattr(content, "read") and not (params and params.get("checksum")):
            log.warning("uploading file without a checksum")
