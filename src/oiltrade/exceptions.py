"""Custom exception hierarchy for oiltrade."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from oiltrade.models.alerts import AlertStatus


class OilTradeError(Exception):
    """Base exception for all oiltrade errors."""


class InvalidInputError(OilTradeError):
    """Malformed call arguments (wrong count, undecodable JSON, bad field type)."""


class UnknownFunctionError(InvalidInputError):
    """Dispatch received a function name it does not handle."""

    def __init__(self, function: str) -> None:
        self.function = function
        super().__init__(f"Received unknown invocation: {function}")


class ContractInitError(InvalidInputError):
    """Contract version or trade id supplied at init does not match configuration."""


class MissingPrimaryKeyError(OilTradeError):
    """Input lacks a usable, non-blank asset identifier.

    Raised before any ledger access takes place.
    """


class UnknownAlertKindError(OilTradeError):
    """An alert-status payload names a kind outside :class:`AlertKind`."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown alert kind: {name!r}")


class ValidationFailedError(OilTradeError):
    """The validation rule fired; the evaluation pass was aborted.

    ``prior_status`` is the alert status as it was before the pass started.
    No transition computed during the failed pass is kept.  Callers must
    treat the asset as non-compliant (``non_compliant`` is always ``True``).
    """

    non_compliant = True

    def __init__(self, message: str, *, prior_status: AlertStatus) -> None:
        self.prior_status = prior_status
        super().__init__(message)


class StoreUnavailableError(OilTradeError):
    """Ledger get/put/delete failed or returned malformed data."""

    def __init__(self, message: str, *, key: str = "") -> None:
        self.key = key
        super().__init__(message)


class AssetNotFoundError(OilTradeError):
    """The requested asset (or contract record) is not in the ledger."""
