"""Asset tracking contract: CRUD shell around merge and alert evaluation."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Any, TypeVar

from pydantic import ValidationError

from oiltrade import _samples
from oiltrade._constants import CONTRACT_STATE_KEY, DEFAULT_STATUS, TRADE_STATE_KEY
from oiltrade.alerts.evaluate import AlertEvaluation, evaluate
from oiltrade.alerts.rules import ThresholdRule, ValidationRule, default_rules
from oiltrade.config import ContractConfig
from oiltrade.exceptions import (
    AssetNotFoundError,
    ContractInitError,
    InvalidInputError,
    StoreUnavailableError,
    UnknownFunctionError,
)
from oiltrade.ingestion.normalize import ASSET_ID_FIELD, build_record, decode_payload, freeze_payload, normalize_asset_id
from oiltrade.models._base import OilTradeModel
from oiltrade.models.alerts import AlertStatus, ComplianceState
from oiltrade.models.asset import AssetRecord
from oiltrade.models.contract import ContractState, TradeState
from oiltrade.state.ledger import Ledger, decode_model, delete_key, get_bytes, get_model, put_bytes
from oiltrade.state.merge import merge_asset_record

_logger = logging.getLogger(__name__)

TModel = TypeVar("TModel", bound=OilTradeModel)


class AssetContract:
    """Tracks assets and their compliance on top of a key-value ledger.

    The contract keeps no state of its own between calls: every operation
    reads what it needs from the ledger and writes its result back.

    Usage::

        contract = AssetContract(InMemoryLedger())
        contract.invoke("updateAsset", ['{"assetID": "A1", "maxTemperature": 75}'])
        contract.query("readAssetCompliance", ['{"assetID": "A1"}'])
    """

    def __init__(self, ledger: Ledger, config: ContractConfig | None = None) -> None:
        self._ledger = ledger
        self._config = config or ContractConfig()
        self._rules: tuple[ThresholdRule, ...] = default_rules(self._config)
        self._validation = ValidationRule(self._config.validation_field)
        self._invoke_functions: dict[str, Callable[[Sequence[str]], bytes | None]] = {
            "createAsset": self._invoke_create_or_update,
            "updateAsset": self._invoke_create_or_update,
            "deleteAsset": self._invoke_delete,
        }
        self._query_functions: dict[str, Callable[[Sequence[str]], bytes]] = {
            "readAsset": self._query_asset,
            "readAssetCompliance": self._query_compliance,
            "readTradeState": self._query_trade_state,
            "readContractState": self._query_contract_state,
            "readContractObjectModel": lambda _args: self.read_contract_object_model(),
            "readAssetSamples": lambda _args: self.read_asset_samples(),
            "readAssetSchemas": lambda _args: self.read_asset_schemas(),
        }

    @property
    def config(self) -> ContractConfig:
        return self._config

    # ------------------------------------------------------------------
    # Deploy
    # ------------------------------------------------------------------

    def init(self, args: Sequence[str]) -> None:
        """Record contract and trade state.

        Expects two JSON strings: ``{"version": ...}`` matching the
        configured version and ``{"tradeID": ...}`` matching the
        configured trade id.
        """
        if len(args) != 2:
            raise InvalidInputError(
                "init expects 2 arguments, a JSON string with tagged version string and the id of the trade"
            )
        contract_state = self._decode_init_arg(ContractState, args[0], "Version")
        if contract_state.version != self._config.version:
            raise ContractInitError(
                f"Contract version {self._config.version} must match version argument: {contract_state.version}"
            )
        trade_state = self._decode_init_arg(TradeState, args[1], "Trade id")
        if trade_state.trade_id != self._config.trade_id:
            raise ContractInitError(f"Trade id {self._config.trade_id} must match trade id: {trade_state.trade_id}")

        contract_state = contract_state.model_copy(update={"status": DEFAULT_STATUS})
        put_bytes(self._ledger, CONTRACT_STATE_KEY, contract_state.to_json())
        put_bytes(self._ledger, TRADE_STATE_KEY, trade_state.to_json())
        _logger.info("Contract %s initialised for trade %s", contract_state.version, trade_state.trade_id)

    @staticmethod
    def _decode_init_arg(model: type[TModel], raw: str, label: str) -> TModel:
        try:
            return model.from_json(raw)
        except ValidationError as err:
            raise InvalidInputError(f"{label} argument unmarshal failed: {err}") from err

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def invoke(self, function: str, args: Sequence[str]) -> bytes | None:
        """Run a state-changing function by name."""
        handler = self._invoke_functions.get(function)
        if handler is None:
            raise UnknownFunctionError(function)
        return handler(args)

    def query(self, function: str, args: Sequence[str]) -> bytes:
        """Run a read-only function by name."""
        handler = self._query_functions.get(function)
        if handler is None:
            raise UnknownFunctionError(function)
        return handler(args)

    def _invoke_create_or_update(self, args: Sequence[str]) -> bytes:
        payload = decode_payload(args)
        return self.create_or_update(normalize_asset_id(payload.get(ASSET_ID_FIELD)), payload)

    def _invoke_delete(self, args: Sequence[str]) -> None:
        payload = decode_payload(args)
        self.delete_asset(normalize_asset_id(payload.get(ASSET_ID_FIELD)))

    def _query_asset(self, args: Sequence[str]) -> bytes:
        payload = decode_payload(args)
        return self.read_asset(normalize_asset_id(payload.get(ASSET_ID_FIELD)))

    def _query_compliance(self, args: Sequence[str]) -> bytes:
        payload = decode_payload(args)
        return self.read_compliance(normalize_asset_id(payload.get(ASSET_ID_FIELD)))

    def _query_trade_state(self, args: Sequence[str]) -> bytes:
        return self._read_singleton(TRADE_STATE_KEY, TradeState, args)

    def _query_contract_state(self, args: Sequence[str]) -> bytes:
        return self._read_singleton(CONTRACT_STATE_KEY, ContractState, args)

    def _read_singleton(self, key: str, model: type[ContractState] | type[TradeState], args: Sequence[str]) -> bytes:
        if len(args) != 0:
            raise InvalidInputError("Too many arguments. Expecting none.")
        state = get_model(self._ledger, key, model)
        if state is None:
            raise AssetNotFoundError(f"{model.__name__} has not been initialised")
        return state.to_json()

    # ------------------------------------------------------------------
    # Assets
    # ------------------------------------------------------------------

    def create_or_update(self, asset_id: str, fields: Mapping[str, Any]) -> bytes:
        """Merge a sparse update into the stored asset and re-evaluate its alerts.

        Returns the stored record bytes.  Nothing is written when the
        payload is invalid, the ledger read fails or validation fails.

        Raises
        ------
        MissingPrimaryKeyError
            *asset_id* is blank, or the payload carries a different assetID.
        InvalidInputError
            A field holds a value of the wrong type.
        ValidationFailedError
            The validation flag is set.
        StoreUnavailableError
            The ledger failed or holds malformed data.
        """
        asset_id = normalize_asset_id(asset_id)
        snapshot = freeze_payload(fields)
        incoming = build_record(asset_id, snapshot)

        stored_bytes = get_bytes(self._ledger, asset_id)
        stored = decode_model(asset_id, stored_bytes, AssetRecord)
        compliance_key = self._config.compliance_key(asset_id)
        prior = get_model(self._ledger, compliance_key, ComplianceState)

        evaluation = self.evaluate_alerts(prior.alerts if prior is not None else None, snapshot)
        record = merge_asset_record(stored, incoming)
        compliance = ComplianceState(alerts=evaluation.status, compliant=evaluation.compliant)

        record_bytes = record.to_json()
        put_bytes(self._ledger, asset_id, record_bytes)
        try:
            put_bytes(self._ledger, compliance_key, compliance.to_json())
        except StoreUnavailableError:
            self._restore_record(asset_id, stored_bytes)
            raise
        _logger.debug(
            "%s asset %s (compliant=%s)",
            "Created" if stored is None else "Updated",
            asset_id,
            evaluation.compliant,
        )
        return record_bytes

    def _restore_record(self, asset_id: str, stored_bytes: bytes | None) -> None:
        """Undo the record write of a failed update; a create is undone by deleting."""
        try:
            if stored_bytes is None:
                delete_key(self._ledger, asset_id)
            else:
                put_bytes(self._ledger, asset_id, stored_bytes)
        except StoreUnavailableError:
            _logger.error("Unable to roll back asset %s after a failed compliance write", asset_id, exc_info=True)

    def evaluate_alerts(self, current_status: AlertStatus | None, telemetry: Mapping[str, Any]) -> AlertEvaluation:
        """Run one alert cycle over *telemetry* without touching the ledger."""
        return evaluate(
            telemetry,
            current_status,
            rules=self._rules,
            validation=self._validation,
        )

    def read_asset(self, asset_id: str) -> bytes:
        asset_id = normalize_asset_id(asset_id)
        record = get_model(self._ledger, asset_id, AssetRecord)
        if record is None:
            raise AssetNotFoundError(f"Asset {asset_id!r} does not exist")
        return record.to_json()

    def read_compliance(self, asset_id: str) -> bytes:
        """Compliance state of an existing asset; compliant when never evaluated."""
        asset_id = normalize_asset_id(asset_id)
        if get_bytes(self._ledger, asset_id) is None:
            raise AssetNotFoundError(f"Asset {asset_id!r} does not exist")
        compliance = get_model(self._ledger, self._config.compliance_key(asset_id), ComplianceState)
        return (compliance or ComplianceState()).to_json()

    def delete_asset(self, asset_id: str) -> None:
        """Remove the asset and its compliance state, whatever its alerts.

        The compliance state goes first: a record is never left without
        the alerts it was evaluated with, and a re-created asset never
        inherits stale alerts.
        """
        asset_id = normalize_asset_id(asset_id)
        delete_key(self._ledger, self._config.compliance_key(asset_id))
        delete_key(self._ledger, asset_id)
        _logger.debug("Deleted asset %s", asset_id)

    # ------------------------------------------------------------------
    # Fixed documents
    # ------------------------------------------------------------------

    def read_contract_object_model(self) -> bytes:
        return ContractState(version=self._config.version, status=DEFAULT_STATUS).to_json()

    def read_asset_samples(self) -> bytes:
        return _samples.render(_samples.build_samples(self._config))

    def read_asset_schemas(self) -> bytes:
        return _samples.render(_samples.build_schemas())
