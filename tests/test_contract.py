"""End-to-end tests for the asset contract over an in-memory ledger."""

from __future__ import annotations

import json

import pytest

from oiltrade.config import ContractConfig
from oiltrade.contract import AssetContract
from oiltrade.exceptions import (
    AssetNotFoundError,
    ContractInitError,
    InvalidInputError,
    MissingPrimaryKeyError,
    StoreUnavailableError,
    UnknownFunctionError,
    ValidationFailedError,
)
from oiltrade.models.alerts import AlertStatus
from oiltrade.state.ledger import InMemoryLedger


class _FlakyLedger(InMemoryLedger):
    def __init__(self) -> None:
        super().__init__()
        self.fail_puts = False
        self.fail_compliance = False

    def _compliance_down(self, key: str) -> bool:
        return self.fail_compliance and key.startswith("\x00")

    def put(self, key: str, value: bytes) -> None:
        if self.fail_puts or self._compliance_down(key):
            raise ConnectionError("ledger offline")
        super().put(key, value)

    def delete(self, key: str) -> None:
        if self._compliance_down(key):
            raise ConnectionError("ledger offline")
        super().delete(key)


@pytest.fixture
def ledger() -> InMemoryLedger:
    return InMemoryLedger()


@pytest.fixture
def contract(ledger: InMemoryLedger) -> AssetContract:
    return AssetContract(ledger)


def _arg(**payload: object) -> list[str]:
    return [json.dumps(payload)]


def _compliance(contract: AssetContract, asset_id: str) -> dict:
    return json.loads(contract.query("readAssetCompliance", _arg(assetID=asset_id)))


class TestCreateOrUpdate:
    def test_create_then_read_returns_supplied_fields(self, contract: AssetContract) -> None:
        payload = {"assetID": "A1", "carrier": "ACME", "location": {"latitude": 1.5, "longitude": 2.5}}

        contract.invoke("createAsset", [json.dumps(payload)])

        assert json.loads(contract.query("readAsset", _arg(assetID="A1"))) == payload

    def test_returns_stored_bytes(self, contract: AssetContract, ledger: InMemoryLedger) -> None:
        stored = contract.create_or_update("A1", {"maxHumidity": 20})

        assert stored == ledger.get("A1")

    def test_partial_update_preserves_unset_fields(self, contract: AssetContract) -> None:
        contract.create_or_update("A1", {"carrier": "ACME", "maxTemperature": 20})
        contract.create_or_update("A1", {"maxHumidity": 30})

        record = json.loads(contract.read_asset("A1"))
        assert record == {"assetID": "A1", "carrier": "ACME", "maxTemperature": 20.0, "maxHumidity": 30.0}

    def test_same_update_twice_equals_once(self, contract: AssetContract) -> None:
        contract.create_or_update("A1", {"carrier": "ACME"})
        once = contract.create_or_update("A1", {"maxHumidity": 30})
        twice = contract.create_or_update("A1", {"maxHumidity": 30})

        assert once == twice

    def test_asset_id_is_trimmed(self, contract: AssetContract) -> None:
        contract.invoke("updateAsset", _arg(assetID="  A1  ", carrier="ACME"))

        assert json.loads(contract.read_asset("A1"))["assetID"] == "A1"

    @pytest.mark.parametrize("payload", [{}, {"assetID": ""}, {"assetID": "   "}, {"assetID": None}])
    def test_missing_primary_key_touches_nothing(self, payload: dict, ledger: InMemoryLedger) -> None:
        contract = AssetContract(ledger)

        with pytest.raises(MissingPrimaryKeyError):
            contract.invoke("createAsset", [json.dumps(payload)])

        assert ledger.keys() == []

    def test_wrong_field_type_is_rejected(self, contract: AssetContract, ledger: InMemoryLedger) -> None:
        with pytest.raises(InvalidInputError):
            contract.create_or_update("A1", {"maxTemperature": "warm"})

        assert ledger.keys() == []

    def test_nul_in_asset_id_is_rejected(self, contract: AssetContract, ledger: InMemoryLedger) -> None:
        with pytest.raises(MissingPrimaryKeyError):
            contract.invoke("createAsset", _arg(assetID="A\x00compliance", carrier="ACME"))

        assert ledger.keys() == []

    def test_payload_is_not_mutated(self, contract: AssetContract) -> None:
        payload = {"assetID": "A1", "location": {"latitude": 1.0}}

        contract.create_or_update("A1", payload)

        assert payload == {"assetID": "A1", "location": {"latitude": 1.0}}


class TestCompliance:
    def test_breach_then_recovery(self, contract: AssetContract) -> None:
        contract.create_or_update("A1", {"maxTemperature": 75})
        assert _compliance(contract, "A1") == {
            "alerts": {"active": ["OVERTEMP"], "raised": ["OVERTEMP"], "cleared": []},
            "compliant": False,
        }

        contract.create_or_update("A1", {"maxTemperature": 50})
        assert _compliance(contract, "A1") == {
            "alerts": {"active": [], "raised": [], "cleared": ["OVERTEMP"]},
            "compliant": True,
        }

    def test_update_without_metric_clears_alert(self, contract: AssetContract) -> None:
        contract.create_or_update("A1", {"maxHumidity": 95})
        contract.create_or_update("A1", {"carrier": "ACME"})

        # The stored humidity is kept, but alerts follow the update payload.
        assert json.loads(contract.read_asset("A1"))["maxHumidity"] == 95.0
        assert _compliance(contract, "A1")["alerts"]["cleared"] == ["OVERHUM"]

    def test_validation_failure_writes_nothing(self, contract: AssetContract) -> None:
        contract.create_or_update("A1", {"maxTemperature": 75, "carrier": "ACME"})
        before_record = contract.read_asset("A1")
        before_compliance = contract.read_compliance("A1")

        with pytest.raises(ValidationFailedError) as exc_info:
            contract.invoke("updateAsset", _arg(assetID="A1", carrier="Other", testValidation=True))

        assert exc_info.value.non_compliant is True
        assert exc_info.value.prior_status.active == ["OVERTEMP"]
        assert contract.read_asset("A1") == before_record
        assert contract.read_compliance("A1") == before_compliance

    def test_new_asset_without_evaluation_reads_compliant(
        self, contract: AssetContract, ledger: InMemoryLedger
    ) -> None:
        ledger.put("A1", b'{"assetID": "A1"}')

        assert _compliance(contract, "A1") == {
            "alerts": {"active": [], "raised": [], "cleared": []},
            "compliant": True,
        }

    def test_evaluate_alerts_does_not_touch_ledger(self, contract: AssetContract, ledger: InMemoryLedger) -> None:
        result = contract.evaluate_alerts(AlertStatus(active=["OVERHUM"]), {"maxHumidity": 90})

        assert result.status == AlertStatus(active=["OVERHUM"])
        assert result.non_compliant is True
        assert ledger.keys() == []

    def test_compliance_does_not_overwrite_lookalike_asset(self, contract: AssetContract) -> None:
        lookalike = contract.create_or_update("A1/compliance", {"carrier": "ACME"})

        contract.create_or_update("A1", {"maxTemperature": 75})

        assert contract.read_asset("A1/compliance") == lookalike
        assert _compliance(contract, "A1/compliance")["compliant"] is True
        assert _compliance(contract, "A1")["alerts"]["active"] == ["OVERTEMP"]

    def test_configured_thresholds(self, ledger: InMemoryLedger) -> None:
        contract = AssetContract(ledger, ContractConfig(temperature_threshold=20.0))

        contract.create_or_update("A1", {"maxTemperature": 25})

        assert _compliance(contract, "A1")["compliant"] is False


class TestDelete:
    def test_delete_is_unconditional(self, contract: AssetContract, ledger: InMemoryLedger) -> None:
        contract.create_or_update("A1", {"maxTemperature": 99})

        contract.invoke("deleteAsset", _arg(assetID="A1"))

        assert ledger.keys() == []
        with pytest.raises(AssetNotFoundError):
            contract.read_asset("A1")

    def test_delete_requires_asset_id(self, contract: AssetContract) -> None:
        with pytest.raises(MissingPrimaryKeyError):
            contract.delete_asset(" ")


class TestStoreFailures:
    def test_malformed_stored_record(self, contract: AssetContract, ledger: InMemoryLedger) -> None:
        ledger.put("A1", b"garbage")

        with pytest.raises(StoreUnavailableError):
            contract.create_or_update("A1", {"carrier": "ACME"})

        assert ledger.get("A1") == b"garbage"

    def test_put_failure_propagates(self) -> None:
        ledger = _FlakyLedger()
        contract = AssetContract(ledger)
        ledger.fail_puts = True

        with pytest.raises(StoreUnavailableError):
            contract.create_or_update("A1", {"carrier": "ACME"})

        assert ledger.keys() == []

    def test_failed_compliance_write_undoes_create(self) -> None:
        ledger = _FlakyLedger()
        contract = AssetContract(ledger)
        ledger.fail_compliance = True

        with pytest.raises(StoreUnavailableError):
            contract.create_or_update("A1", {"maxTemperature": 75})

        assert ledger.keys() == []

    def test_failed_compliance_write_restores_record(self) -> None:
        ledger = _FlakyLedger()
        contract = AssetContract(ledger)
        contract.create_or_update("A1", {"carrier": "ACME", "maxTemperature": 75})
        before_record = ledger.get("A1")
        before_compliance = contract.read_compliance("A1")
        ledger.fail_compliance = True

        with pytest.raises(StoreUnavailableError):
            contract.create_or_update("A1", {"carrier": "Other", "maxTemperature": 20})

        assert ledger.get("A1") == before_record
        assert contract.read_compliance("A1") == before_compliance

    def test_failed_compliance_delete_keeps_asset(self) -> None:
        ledger = _FlakyLedger()
        contract = AssetContract(ledger)
        contract.create_or_update("A1", {"maxTemperature": 75})
        before = ledger.keys()
        ledger.fail_compliance = True

        with pytest.raises(StoreUnavailableError):
            contract.delete_asset("A1")

        assert ledger.keys() == before
        assert _compliance(contract, "A1")["compliant"] is False


class TestInitAndQueries:
    def test_init_records_contract_and_trade_state(self, contract: AssetContract) -> None:
        contract.init(['{"version": "1.0", "status": true}', '{"tradeID": "0476219"}'])

        assert json.loads(contract.query("readContractState", [])) == {"version": "1.0", "status": False}
        assert json.loads(contract.query("readTradeState", [])) == {"tradeID": "0476219"}

    @pytest.mark.parametrize(
        "args",
        [
            ['{"version": "2.0"}', '{"tradeID": "0476219"}'],
            ['{"version": "1.0"}', '{"tradeID": "1"}'],
        ],
    )
    def test_init_mismatch(self, contract: AssetContract, args: list[str]) -> None:
        with pytest.raises(ContractInitError):
            contract.init(args)

    @pytest.mark.parametrize("args", [[], ['{"version": "1.0"}'], ["nope", '{"tradeID": "0476219"}']])
    def test_init_bad_arguments(self, contract: AssetContract, args: list[str]) -> None:
        with pytest.raises(InvalidInputError):
            contract.init(args)

    def test_state_queries_take_no_arguments(self, contract: AssetContract) -> None:
        with pytest.raises(InvalidInputError):
            contract.query("readTradeState", ["x"])

    def test_state_query_before_init(self, contract: AssetContract) -> None:
        with pytest.raises(AssetNotFoundError):
            contract.query("readContractState", [])

    def test_contract_object_model(self, contract: AssetContract) -> None:
        assert json.loads(contract.query("readContractObjectModel", [])) == {"version": "1.0", "status": False}

    def test_samples_and_schemas(self, contract: AssetContract) -> None:
        samples = json.loads(contract.query("readAssetSamples", []))
        schemas = json.loads(contract.query("readAssetSchemas", []))

        assert samples["event"]["assetID"] == "ASSET-0001"
        assert samples["compliance"]["compliant"] is False
        assert "assetID" in schemas["AssetRecord"]["properties"]
        assert set(schemas) >= {"AssetRecord", "AlertStatus", "ComplianceState"}

    def test_unknown_functions(self, contract: AssetContract) -> None:
        with pytest.raises(UnknownFunctionError):
            contract.invoke("readAsset", _arg(assetID="A1"))
        with pytest.raises(UnknownFunctionError) as exc_info:
            contract.query("createAsset", _arg(assetID="A1"))

        assert exc_info.value.function == "createAsset"

    def test_read_missing_asset(self, contract: AssetContract) -> None:
        with pytest.raises(AssetNotFoundError):
            contract.query("readAsset", _arg(assetID="ghost"))
        with pytest.raises(AssetNotFoundError):
            contract.read_compliance("ghost")
