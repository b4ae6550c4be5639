"""Alert kinds and the external alert status record."""

from __future__ import annotations

from enum import StrEnum

from pydantic import Field

from oiltrade.models._base import OilTradeModel


class AlertKind(StrEnum):
    """Monitored condition categories.

    Definition order is the internal index of each kind: append new
    members at the end, never reorder.  External payloads carry the
    names, never the index.
    """

    OVERTEMP = "OVERTEMP"
    OVERHUM = "OVERHUM"


class AlertStatus(OilTradeModel):
    """Alert status as exchanged with callers and stored in the ledger.

    Each list holds alert-kind names; order carries no meaning.  Names
    are validated only when converted to internal form, see
    :func:`oiltrade.alerts.state.to_internal`.
    """

    active: list[str] = Field(default_factory=list)
    raised: list[str] = Field(default_factory=list)
    cleared: list[str] = Field(default_factory=list)


class ComplianceState(OilTradeModel):
    """Last evaluated alert status and verdict for one asset."""

    alerts: AlertStatus = Field(default_factory=AlertStatus)
    compliant: bool = True
