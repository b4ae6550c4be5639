"""Internal constants shared across the library."""

# Ledger keys for contract-wide records.
CONTRACT_STATE_KEY = "ContractStateKey"
TRADE_STATE_KEY = "TradeStateKey"

CONTRACT_VERSION = "1.0"
DEFAULT_STATUS = False
TRADE_ID = "0476219"

# ------------------------------------------------------------------
# Threshold rules (inclusive: values at or below are compliant)
# ------------------------------------------------------------------

TEMPERATURE_METRIC = "maxTemperature"
HUMIDITY_METRIC = "maxHumidity"
TEMPERATURE_THRESHOLD = 60.0
HUMIDITY_THRESHOLD = 80.0

VALIDATION_FIELD = "testValidation"

# Composite keys: "\x00" + namespace + "\x00" + id + "\x00".
# Asset ids never contain the separator.
COMPOSITE_KEY_SEPARATOR = "\x00"
COMPLIANCE_NAMESPACE = "compliance"
