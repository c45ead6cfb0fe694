"""Dissemination service for service-method views of objects."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional

from fedoractl.core.paths import dissemination_path

from .base import BaseService


class DisseminationService(BaseService):
    """Service for object disseminations."""

    def get(
        self,
        pid: str,
        sdef: Optional[str] = None,
        method: Optional[str] = None,
        params: Optional[Mapping[str, Any]] = None,
    ) -> bytes:
        """Run a dissemination, or list methods when sdef/method are omitted.

        Args:
            pid: Object pid
            sdef: Service definition pid
            method: Method name
            params: Method parameters, passed through as the query string

        Returns:
            Response body; an XML method listing unless both sdef and
            method are given

        Raises:
            ResourceNotFoundError: If the object, sdef or method does not exist
        """
        query = dict(params or {})
        if not (pid and sdef and method):
            query.setdefault("format", "xml")
        path = dissemination_path(pid, sdef, method, query)
        return self._call(
            f"get dissemination for {pid}", "get", path, not_found=True
        ).content

    def methods(self, pid: str, sdef: Optional[str] = None) -> str:
        """List the dissemination methods of an object as XML."""
        return self.get(pid, sdef).decode("utf-8")
