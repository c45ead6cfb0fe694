"""Relationship service for RELS-EXT relationship operations."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional

from fedoractl.core.paths import append_query, object_path

from .base import BaseService


class RelationshipService(BaseService):
    """Service for object relationship operations.

    The object is addressed by ``pid`` or, failing that, by ``subject``
    (a pid or ``info:fedora/`` URI). A given subject is also sent to the
    server as a query parameter.
    """

    def get(
        self,
        pid: Optional[str] = None,
        subject: Optional[str] = None,
        predicate: Optional[str] = None,
        params: Optional[Mapping[str, Any]] = None,
    ) -> str:
        """Get relationships, optionally filtered by predicate.

        Returns:
            Raw RDF/XML
        """
        pid = self._require("pid", pid or subject)
        query = self._with_defaults(params, format="xml", subject=subject, predicate=predicate)
        path = append_query(f"{object_path(pid)}/relationships", query)
        return self._call(f"get relationships for {pid}", "get", path).text

    def add(
        self,
        pid: Optional[str] = None,
        subject: Optional[str] = None,
        predicate: Optional[str] = None,
        object: Optional[str] = None,
        is_literal: Optional[bool] = None,
        datatype: Optional[str] = None,
        params: Optional[Mapping[str, Any]] = None,
    ) -> str:
        """Add a relationship.

        Args:
            pid: Object pid
            subject: Subject URI (defaults to the object itself on the server)
            predicate: Predicate URI
            object: Object URI or literal value
            is_literal: Whether object is a literal
            datatype: Literal datatype URI
            params: Extra query parameters
        """
        pid = self._require("pid", pid or subject)
        query = self._relationship_query(subject, predicate, object, is_literal, datatype, params)
        path = append_query(f"{object_path(pid)}/relationships/new", query)
        return self._call(f"add relationship for {pid}", "post", path).text

    def purge(
        self,
        pid: Optional[str] = None,
        subject: Optional[str] = None,
        predicate: Optional[str] = None,
        object: Optional[str] = None,
        is_literal: Optional[bool] = None,
        datatype: Optional[str] = None,
        params: Optional[Mapping[str, Any]] = None,
    ) -> str:
        """Remove a relationship.

        Returns:
            ``true`` or ``false`` depending on whether a relationship was removed
        """
        pid = self._require("pid", pid or subject)
        query = self._relationship_query(subject, predicate, object, is_literal, datatype, params)
        path = append_query(f"{object_path(pid)}/relationships", query)
        return self._call(f"purge relationships for {pid}", "delete", path).text

    def _relationship_query(
        self,
        subject: Optional[str],
        predicate: Optional[str],
        object: Optional[str],
        is_literal: Optional[bool],
        datatype: Optional[str],
        params: Optional[Mapping[str, Any]],
    ) -> dict[str, Any]:
        return self._with_defaults(
            params,
            subject=subject,
            predicate=predicate,
            object=object,
            isLiteral=is_literal,
            datatype=datatype,
        )
