"""Base model for ledger records.

Every persisted record inherits from :class:`OilTradeModel` which
provides:

* ``alias_generator=to_camel`` so camelCase wire keys map
  automatically to snake_case fields.
* A ``model_validator(mode="before")`` that drops ``None`` values so
  an explicit JSON ``null`` is indistinguishable from an absent key.
* ``use_attribute_docstrings`` so field docstrings become schema
  descriptions.
* ``to_json`` / ``from_json`` helpers producing the byte form stored in
  the ledger.  Absent (``None``) fields are never serialized.
"""

from __future__ import annotations

from typing import Any, Self

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel


class OilTradeModel(BaseModel):
    """Base for ledger records and wire payloads."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
        use_attribute_docstrings=True,
    )

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, values: Any) -> Any:
        """Treat ``null`` as absent so the field default is used."""
        if not isinstance(values, dict):
            return values
        return {key: value for key, value in values.items() if value is not None}

    def to_json(self) -> bytes:
        """Serialize with wire names, omitting absent fields."""
        return self.model_dump_json(by_alias=True, exclude_none=True).encode("utf-8")

    def to_wire(self) -> dict[str, Any]:
        """Dump to a plain dict with wire names, omitting absent fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    @classmethod
    def from_json(cls, data: bytes | str) -> Self:
        return cls.model_validate_json(data)
