"""Alert lifecycle, threshold rules and compliance evaluation."""

from oiltrade.alerts.evaluate import AlertEvaluation, evaluate, is_compliant
from oiltrade.alerts.rules import ThresholdRule, TypeMismatch, ValidationRule, default_rules
from oiltrade.alerts.state import AlertState, to_external, to_internal

__all__ = [
    "AlertEvaluation",
    "AlertState",
    "ThresholdRule",
    "TypeMismatch",
    "ValidationRule",
    "default_rules",
    "evaluate",
    "is_compliant",
    "to_external",
    "to_internal",
]
