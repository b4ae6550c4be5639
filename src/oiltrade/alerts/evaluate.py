"""Alert evaluation pipeline and compliance verdict."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from oiltrade.alerts.rules import ThresholdRule, TypeMismatch, ValidationRule, default_rules
from oiltrade.alerts.state import AlertState, to_external, to_internal
from oiltrade.config import ContractConfig
from oiltrade.models.alerts import AlertStatus

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AlertEvaluation:
    """Outcome of one evaluation cycle."""

    status: AlertStatus
    non_compliant: bool
    mismatches: tuple[TypeMismatch, ...] = ()

    @property
    def compliant(self) -> bool:
        return not self.non_compliant


def is_compliant(state: AlertState) -> bool:
    """An asset is compliant iff no alert kind is active."""
    return state.no_alerts_active()


def evaluate(
    payload: Mapping[str, Any],
    prior_status: AlertStatus | None = None,
    *,
    rules: Sequence[ThresholdRule] | None = None,
    validation: ValidationRule | None = None,
    config: ContractConfig | None = None,
) -> AlertEvaluation:
    """Run one evaluation cycle over *payload*.

    Parameters
    ----------
    payload
        Sparse update fields, keyed by wire name.  Should be a frozen
        snapshot when the same payload is also merged into a record.
    prior_status
        Alert status from the previous cycle; ``None`` for a new asset.
    rules, validation
        Override the rules built from *config*.

    Raises
    ------
    ValidationFailedError
        The validation flag is set.  The error carries *prior_status*
        unchanged; no transition of the aborted cycle survives.
    UnknownAlertKindError
        *prior_status* names an unknown alert kind.
    """
    config = config or ContractConfig()
    if rules is None:
        rules = default_rules(config)
    if validation is None:
        validation = ValidationRule(config.validation_field)
    if prior_status is None:
        prior_status = AlertStatus()

    state = to_internal(prior_status)
    state.begin_cycle()

    mismatches: list[TypeMismatch] = []
    mismatch = validation.apply(payload, prior_status)
    if mismatch is not None:
        mismatches.append(mismatch)

    for rule in rules:
        mismatch = rule.apply(state, payload)
        if mismatch is not None:
            mismatches.append(mismatch)

    status = to_external(state)
    compliant = is_compliant(state)
    _logger.debug("Evaluated alerts: active=%s compliant=%s", status.active, compliant)
    return AlertEvaluation(status=status, non_compliant=not compliant, mismatches=tuple(mismatches))
