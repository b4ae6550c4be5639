"""Data models for ledger records and wire payloads."""

from oiltrade.models._base import OilTradeModel
from oiltrade.models.alerts import AlertKind, AlertStatus, ComplianceState
from oiltrade.models.asset import AssetEvent, AssetRecord, Geolocation
from oiltrade.models.contract import ContractState, TradeState

__all__ = [
    "AlertKind",
    "AlertStatus",
    "AssetEvent",
    "AssetRecord",
    "ComplianceState",
    "ContractState",
    "Geolocation",
    "OilTradeModel",
    "TradeState",
]
