"""Sample payloads and JSON schemas returned by the query functions."""

from __future__ import annotations

import json
from typing import Any

from oiltrade.config import ContractConfig
from oiltrade.models.alerts import AlertKind, AlertStatus, ComplianceState
from oiltrade.models.asset import AssetEvent, AssetRecord, Geolocation
from oiltrade.models.contract import ContractState, TradeState

_SCHEMA_MODELS = (AssetRecord, AlertStatus, ComplianceState, ContractState, TradeState)


def build_samples(config: ContractConfig) -> dict[str, Any]:
    """One example of every payload the contract accepts or returns."""
    record = AssetRecord(
        asset_id="ASSET-0001",
        location=Geolocation(latitude=51.9244, longitude=4.4777),
        max_temperature=42.5,
        max_humidity=55.0,
        carrier="Rotterdam Tank Lines",
        event=AssetEvent(name="telemetry", date="2017-03-31T19:25:26+02:00"),
    )
    breach = AlertStatus(active=[str(AlertKind.OVERTEMP)], raised=[str(AlertKind.OVERTEMP)])
    return {
        "contractState": ContractState(version=config.version).to_wire(),
        "tradeState": TradeState(trade_id=config.trade_id).to_wire(),
        "event": record.to_wire(),
        "compliance": ComplianceState(alerts=breach, compliant=False).to_wire(),
        "testValidation": {"assetID": record.asset_id, config.validation_field: True},
    }


def build_schemas() -> dict[str, Any]:
    return {model.__name__: model.model_json_schema(by_alias=True) for model in _SCHEMA_MODELS}


def render(document: dict[str, Any]) -> bytes:
    return json.dumps(document, indent=4, sort_keys=True).encode("utf-8")
