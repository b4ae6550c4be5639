"""Asset record model."""

from __future__ import annotations

from pydantic import Field, StrictFloat, StrictStr, field_validator

from oiltrade.models._base import OilTradeModel


class Geolocation(OilTradeModel):
    """Latitude/longitude pair.

    Merged as a single field: an update carrying ``location`` replaces
    both coordinates.
    """

    latitude: StrictFloat | None = None
    longitude: StrictFloat | None = None


class AssetEvent(OilTradeModel):
    """The IoT event that produced an update."""

    name: StrictStr | None = None
    """Name of the IoT event received."""
    date: StrictStr | None = None
    """Date of reception."""


class AssetRecord(OilTradeModel):
    """Persisted state of a tracked asset.

    Every attribute except ``asset_id`` is optional; ``None`` means the
    attribute is absent, which is distinct from any present value
    (``0.0`` and ``""`` are present).
    """

    asset_id: StrictStr = Field(..., alias="assetID")
    """Primary key. Trimmed of surrounding whitespace, never blank."""
    location: Geolocation | None = None
    """Current asset location."""
    max_temperature: StrictFloat | None = None
    """Highest temperature reported for the asset."""
    max_humidity: StrictFloat | None = None
    """Highest humidity reported for the asset."""
    carrier: StrictStr | None = None
    """Transport entity currently in possession of the asset."""
    event: AssetEvent | None = None
    """IoT event that produced the latest update."""

    @field_validator("asset_id")
    @classmethod
    def _normalize_asset_id(cls, value: str) -> str:
        asset_id = value.strip()
        if not asset_id:
            raise ValueError("assetID must be non-empty")
        return asset_id
