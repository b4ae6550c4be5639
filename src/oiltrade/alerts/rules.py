"""Threshold and validation rules.

Each rule reads one field from the (frozen) update payload and either
mutates an :class:`~oiltrade.alerts.state.AlertState` or aborts the pass.
A value of the wrong type never fails the pass: the rule leaves the alert
state untouched and reports a :class:`TypeMismatch` instead.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from oiltrade._constants import HUMIDITY_METRIC, TEMPERATURE_METRIC
from oiltrade.alerts.state import AlertState
from oiltrade.config import ContractConfig
from oiltrade.exceptions import ValidationFailedError
from oiltrade.ingestion.normalize import is_number
from oiltrade.models.alerts import AlertKind, AlertStatus

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TypeMismatch:
    """Non-fatal report of a payload field holding the wrong type."""

    field: str
    expected: str
    value: Any


@dataclass(frozen=True)
class ThresholdRule:
    """Raise *kind* while *metric* exceeds *threshold*, clear it otherwise.

    An absent metric clears the alert: no telemetry means nothing to report.
    """

    metric: str
    kind: AlertKind
    threshold: float

    def apply(self, state: AlertState, payload: Mapping[str, Any]) -> TypeMismatch | None:
        value = payload.get(self.metric)
        if value is None:
            state.clear_alert(self.kind)
            return None
        if not is_number(value):
            _logger.warning(
                "Ignoring %s=%r for %s: expected a number",
                self.metric,
                value,
                self.kind,
            )
            return TypeMismatch(field=self.metric, expected="number", value=value)
        if value > self.threshold:
            state.raise_alert(self.kind)
        else:
            state.clear_alert(self.kind)
        return None


@dataclass(frozen=True)
class ValidationRule:
    """Fail the whole pass when the boolean *field* is present and true."""

    field: str

    def apply(self, payload: Mapping[str, Any], prior_status: AlertStatus) -> TypeMismatch | None:
        value = payload.get(self.field)
        if value is None or value is False:
            return None
        if value is True:
            raise ValidationFailedError(
                f"Validation flag {self.field!r} is set",
                prior_status=prior_status,
            )
        _logger.warning("Ignoring %s=%r: expected a boolean", self.field, value)
        return TypeMismatch(field=self.field, expected="boolean", value=value)


def default_rules(config: ContractConfig) -> tuple[ThresholdRule, ...]:
    """Threshold rules in evaluation order."""
    return (
        ThresholdRule(TEMPERATURE_METRIC, AlertKind.OVERTEMP, config.temperature_threshold),
        ThresholdRule(HUMIDITY_METRIC, AlertKind.OVERHUM, config.humidity_threshold),
    )
