"""Repository service: describe, identifier minting and search."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional

from fedoractl.core.exceptions import InvalidArgumentError, RequestFailedError
from fedoractl.core.logging import get_logger
from fedoractl.core.paths import append_query, object_path
from fedoractl.core.profiles import parse_repository_profile

from .base import BaseService

logger = get_logger(__name__)


class RepositoryService(BaseService):
    """Service for repository-level operations."""

    def describe(self, params: Optional[Mapping[str, Any]] = None) -> str:
        """Get the repository description document.

        Args:
            params: Extra query parameters (``xml=true`` by default)

        Returns:
            Raw XML
        """
        path = append_query("describe", self._with_defaults(params, xml="true"))
        return self._call("describe repository", "get", path).text

    def profile(self) -> Optional[dict[str, Any]]:
        """Get the parsed repository profile.

        Profile metadata is best-effort: an unreachable server or a
        document that cannot be parsed yields None.
        """
        try:
            xml = self.describe()
        except RequestFailedError as e:
            logger.warning("Repository profile unavailable: %s", e)
            return None
        return parse_repository_profile(xml)

    def next_pid(
        self,
        namespace: Optional[str] = None,
        num_pids: Optional[int] = None,
        params: Optional[Mapping[str, Any]] = None,
    ) -> str:
        """Reserve the next pid(s) in a namespace.

        Args:
            namespace: Pid namespace (server default when omitted)
            num_pids: Number of pids to reserve
            params: Extra query parameters

        Returns:
            Raw XML listing the reserved pids
        """
        query = self._with_defaults(params, format="xml", namespace=namespace, numPIDs=num_pids)
        path = append_query(f"{object_path()}/nextPID", query)
        return self._call("get next pid", "post", path).text

    def find_objects(
        self,
        query: Optional[str] = None,
        terms: Optional[str] = None,
        params: Optional[Mapping[str, Any]] = None,
    ) -> str:
        """Search objects by field query or by phrase terms.

        Args:
            query: Field query, e.g. ``pid~demo:*``
            terms: Phrase searched across all fields
            params: Extra query parameters (``maxResults``, ``pid``, ``sessionToken``...)

        Returns:
            Raw XML search results

        Raises:
            InvalidArgumentError: If both query and terms are given
        """
        search = self._with_defaults(params, resultFormat="xml", query=query, terms=terms)
        if search.get("query") is not None and search.get("terms") is not None:
            raise InvalidArgumentError("terms", "cannot be combined with query")
        return self._call("find objects", "get", object_path(params=search)).text
