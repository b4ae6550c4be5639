"""Contract configuration for oiltrade."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from oiltrade._constants import (
    COMPLIANCE_NAMESPACE,
    COMPOSITE_KEY_SEPARATOR,
    CONTRACT_VERSION,
    HUMIDITY_THRESHOLD,
    TEMPERATURE_THRESHOLD,
    TRADE_ID,
    VALIDATION_FIELD,
)


@dataclasses.dataclass(frozen=True)
class ContractConfig:
    """Contract configuration.

    Parameters
    ----------
    version : str
        Contract version that ``init`` must be called with.
    trade_id : str
        Trade identifier that ``init`` must be called with.
    temperature_threshold : float
        Inclusive upper bound for ``maxTemperature``.  Readings above it
        raise ``OVERTEMP``.
    humidity_threshold : float
        Inclusive upper bound for ``maxHumidity``.  Readings above it
        raise ``OVERHUM``.
    validation_field : str
        Name of the boolean flag that forces a validation failure.
    compliance_namespace : str
        Namespace of the composite ledger key holding an asset's
        compliance state.
    """

    version: str = CONTRACT_VERSION
    trade_id: str = TRADE_ID
    temperature_threshold: float = TEMPERATURE_THRESHOLD
    humidity_threshold: float = HUMIDITY_THRESHOLD
    validation_field: str = VALIDATION_FIELD
    compliance_namespace: str = COMPLIANCE_NAMESPACE

    @classmethod
    def from_env(cls, **overrides: Any) -> ContractConfig:
        """Create configuration from environment variables.

        Reads optional ``OILTRADE_*`` variables. Explicit keyword
        arguments override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        ContractConfig
            Populated configuration.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "OILTRADE_VERSION": "version",
            "OILTRADE_TRADE_ID": "trade_id",
            "OILTRADE_VALIDATION_FIELD": "validation_field",
            "OILTRADE_COMPLIANCE_NAMESPACE": "compliance_namespace",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        # thresholds are numeric, handle separately
        temp_env = env.get("OILTRADE_TEMPERATURE_THRESHOLD")
        if temp_env is not None and "temperature_threshold" not in overrides:
            config_kwargs["temperature_threshold"] = float(temp_env)

        humidity_env = env.get("OILTRADE_HUMIDITY_THRESHOLD")
        if humidity_env is not None and "humidity_threshold" not in overrides:
            config_kwargs["humidity_threshold"] = float(humidity_env)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)

    def compliance_key(self, asset_id: str) -> str:
        """Ledger key holding the compliance state of *asset_id*."""
        sep = COMPOSITE_KEY_SEPARATOR
        return f"{sep}{self.compliance_namespace}{sep}{asset_id}{sep}"
