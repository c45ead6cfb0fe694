"""Typed views over repository, object and datastream profile records."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import Field, field_validator

from .base import BaseModel


def _as_list(value: object) -> object:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return value


class RepositoryProfile(BaseModel):
    """Repository description from ``describe``."""

    name: str | None = Field(None, alias="repositoryName")
    base_url: str | None = Field(None, alias="repositoryBaseURL")
    version: str | None = Field(None, alias="repositoryVersion")
    pid_settings: dict[str, Any] | None = Field(None, alias="repositoryPID")
    admin_emails: list[str] = Field(default_factory=list, alias="adminEmail")
    object_models: list[str] = Field(default_factory=list, alias="objModels")

    @field_validator("admin_emails", "object_models", mode="before")
    @classmethod
    def normalize_lists(cls, value: object) -> object:
        """Accept a single value where a list is expected."""
        return _as_list(value)

    @classmethod
    def table_columns(cls) -> list[str]:
        """Return columns for table output."""
        return ["name", "version", "base_url"]


class ObjectProfile(BaseModel):
    """Object profile."""

    pid: str | None = None
    label: str | None = Field(None, alias="objLabel")
    owner_id: str | None = Field(None, alias="objOwnerId")
    state: str | None = Field(None, alias="objState")
    models: list[str] = Field(default_factory=list, alias="objModels")
    created: datetime | None = Field(None, alias="objCreateDate")
    last_modified: datetime | None = Field(None, alias="objLastModDate")

    @field_validator("models", mode="before")
    @classmethod
    def normalize_models(cls, value: object) -> object:
        return _as_list(value)

    @property
    def is_active(self) -> bool:
        """Whether the object is in the Active state."""
        return self.state == "A"

    @classmethod
    def table_columns(cls) -> list[str]:
        """Return columns for table output."""
        return ["pid", "label", "state", "owner_id", "last_modified"]


class DatastreamProfile(BaseModel):
    """Datastream profile (one version)."""

    pid: str | None = None
    dsid: str | None = Field(None, alias="dsID")
    label: str | None = Field(None, alias="dsLabel")
    version_id: str | None = Field(None, alias="dsVersionID")
    created: datetime | None = Field(None, alias="dsCreateDate")
    state: str | None = Field(None, alias="dsState")
    mime_type: str | None = Field(None, alias="dsMIME")
    format_uri: str | None = Field(None, alias="dsFormatURI")
    control_group: str | None = Field(None, alias="dsControlGroup")
    size: int | None = Field(None, alias="dsSize")
    versionable: bool | None = Field(None, alias="dsVersionable")
    location: str | None = Field(None, alias="dsLocation")
    checksum_type: str | None = Field(None, alias="dsChecksumType")
    checksum: str | None = Field(None, alias="dsChecksum")
    checksum_valid: bool | None = Field(None, alias="dsChecksumValid")

    @property
    def is_managed(self) -> bool:
        """Whether the content is stored by the repository (control group M)."""
        return self.control_group == "M"

    @classmethod
    def table_columns(cls) -> list[str]:
        """Return columns for table output."""
        return ["dsid", "label", "control_group", "state", "mime_type", "size", "created"]
