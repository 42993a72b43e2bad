"""Base API schemas following the project conventions."""

from __future__ import annotations

from abc import abstractmethod
from typing import Any

from pydantic import BaseModel, ConfigDict, Field as PydField


class BaseSchema(BaseModel):
    """Base model for barista read models, immutable once decoded."""

    model_config = ConfigDict(frozen=True)


class Record(BaseSchema):
    """
    An identifiable entity of a barista resource collection.

    Subclasses expose their identifier through `id`. Used as the bound of the
    record type accepted by `get_records`.
    """

    @property
    @abstractmethod
    def id(self) -> Any:
        """Identifier of the record."""


class Version(BaseSchema):
    """Version information of the remote barista API."""

    model_config = ConfigDict(extra="ignore")

    version: str = PydField(..., description="Version of the remote API.")


__all__ = [
    "BaseSchema",
    "Record",
    "Version",
]
