"""Service layer for Fedora operations.

Provides service classes that encapsulate Fedora REST API operations.
"""

from __future__ import annotations

from .base import BaseService
from .datastreams import DatastreamService
from .disseminations import DisseminationService
from .objects import ObjectService
from .relationships import RelationshipService
from .repository import RepositoryService

__all__ = [
    "BaseService",
    "RepositoryService",
    "ObjectService",
    "DatastreamService",
    "RelationshipService",
    "DisseminationService",
]
