"""Data models for fedoractl.

Provides Pydantic views over parsed Fedora profile records.
"""

from __future__ import annotations

from .base import BaseModel
from .profiles import DatastreamProfile, ObjectProfile, RepositoryProfile

__all__ = [
    "BaseModel",
    "RepositoryProfile",
    "ObjectProfile",
    "DatastreamProfile",
]
