"""oiltrade - Compliance tracking for shipped assets on a key-value ledger."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("oiltrade")
except PackageNotFoundError:
    __version__ = "0+local"
from oiltrade.alerts import AlertEvaluation, AlertState, ThresholdRule, TypeMismatch, ValidationRule, evaluate
from oiltrade.config import ContractConfig
from oiltrade.contract import AssetContract
from oiltrade.exceptions import (
    AssetNotFoundError,
    ContractInitError,
    InvalidInputError,
    MissingPrimaryKeyError,
    OilTradeError,
    StoreUnavailableError,
    UnknownAlertKindError,
    UnknownFunctionError,
    ValidationFailedError,
)
from oiltrade.models import (
    AlertKind,
    AlertStatus,
    AssetEvent,
    AssetRecord,
    ComplianceState,
    ContractState,
    Geolocation,
    TradeState,
)
from oiltrade.state.ledger import InMemoryLedger, Ledger
from oiltrade.state.merge import merge_asset_record

__all__ = [
    "__version__",
    "AlertEvaluation",
    "AlertKind",
    "AlertState",
    "AlertStatus",
    "AssetContract",
    "AssetEvent",
    "AssetNotFoundError",
    "AssetRecord",
    "ComplianceState",
    "ContractConfig",
    "ContractInitError",
    "ContractState",
    "Geolocation",
    "InMemoryLedger",
    "InvalidInputError",
    "Ledger",
    "MissingPrimaryKeyError",
    "OilTradeError",
    "StoreUnavailableError",
    "ThresholdRule",
    "TradeState",
    "TypeMismatch",
    "UnknownAlertKindError",
    "UnknownFunctionError",
    "ValidationFailedError",
    "ValidationRule",
    "evaluate",
    "merge_asset_record",
]
