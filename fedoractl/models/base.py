"""Base model with common configuration for Fedora profile views."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel as PydanticBaseModel
from pydantic import ConfigDict


class BaseModel(PydanticBaseModel):
    """Base model with common configuration."""

    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
        str_strip_whitespace=True,
    )

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "BaseModel":
        """Build a model from a parsed profile record."""
        return cls.model_validate(record)

    def to_dict(self) -> dict[str, Any]:
        """Convert model to dictionary."""
        return self.model_dump(exclude_none=True)

    def to_row(self, columns: list[str] | None = None) -> dict[str, str]:
        """Convert model to row dict for table output."""
        data = self.to_dict()
        cols = columns or self.table_columns()
        return {col: "" if data.get(col) is None else str(data[col]) for col in cols}

    @classmethod
    def table_columns(cls) -> list[str]:
        """Return columns for table output."""
        return list(cls.model_fields)
