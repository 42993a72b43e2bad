from __future__ import annotations

from pydantic import ConfigDict, Field as PydField

from barista_client.schemas.api.base import Record


class Currency(Record):
    """Currency read model."""

    model_config = ConfigDict(extra="ignore")

    code: str = PydField(..., description="Code of the currency.")
    name: str = PydField(..., description="Display name of the currency.")
    decimals: int = PydField(..., description="Number of decimal places of the currency.")

    @property
    def id(self) -> str:
        return self.code


__all__ = [
    "Currency",
]
