"""Alert lifecycle state machine.

:class:`AlertState` keeps three boolean vectors indexed by the ordinal of
:class:`~oiltrade.models.alerts.AlertKind`:

* ``active``  - the kind is in breach; persists across cycles.
* ``raised``  - the kind went into breach during the current cycle.
* ``cleared`` - the kind left breach during the current cycle.

The two transient vectors are only meaningful for the cycle that set them;
:meth:`AlertState.begin_cycle` must run before any rule of a new cycle.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from oiltrade.exceptions import UnknownAlertKindError
from oiltrade.models.alerts import AlertKind, AlertStatus

_logger = logging.getLogger(__name__)

# Ordinal of each kind; AlertKind members are append-only.
_KINDS: tuple[AlertKind, ...] = tuple(AlertKind)
_INDEX: dict[AlertKind, int] = {kind: index for index, kind in enumerate(_KINDS)}


def _flags() -> list[bool]:
    return [False] * len(_KINDS)


@dataclass
class AlertState:
    """Internal alert flags for one asset."""

    active: list[bool] = field(default_factory=_flags)
    raised: list[bool] = field(default_factory=_flags)
    cleared: list[bool] = field(default_factory=_flags)

    def begin_cycle(self) -> None:
        """Drop stale transient markers before a new evaluation cycle.

        A kind that is still active loses its ``raised`` marker; a kind
        that is inactive loses its ``cleared`` marker.  The other marker
        of each kind is left for :meth:`raise_alert` / :meth:`clear_alert`.
        """
        for index in range(len(_KINDS)):
            if self.active[index]:
                self.raised[index] = False
            else:
                self.cleared[index] = False

    def raise_alert(self, kind: AlertKind) -> None:
        index = _INDEX[kind]
        if self.active[index]:
            # Still in breach: not a new raise event.
            self.raised[index] = False
        else:
            self.active[index] = True
            self.raised[index] = True
            _logger.debug("Alert %s raised", kind)
        self.cleared[index] = False

    def clear_alert(self, kind: AlertKind) -> None:
        index = _INDEX[kind]
        if self.active[index]:
            self.active[index] = False
            self.raised[index] = False
            self.cleared[index] = True
            _logger.debug("Alert %s cleared", kind)
        else:
            self.raised[index] = False
            self.cleared[index] = False

    def is_active(self, kind: AlertKind) -> bool:
        return self.active[_INDEX[kind]]

    def no_alerts_active(self) -> bool:
        return not any(self.active)

    def all_clear(self) -> bool:
        return not (any(self.active) or any(self.raised) or any(self.cleared))


def _kind_from_name(name: str) -> AlertKind:
    try:
        return AlertKind(name)
    except ValueError:
        raise UnknownAlertKindError(name) from None


def to_internal(status: AlertStatus) -> AlertState:
    """Convert an external alert status into flags.

    Raises
    ------
    UnknownAlertKindError
        If any list names a kind outside :class:`AlertKind`.
    """
    state = AlertState()
    for flags, names in (
        (state.active, status.active),
        (state.raised, status.raised),
        (state.cleared, status.cleared),
    ):
        for name in names:
            flags[_INDEX[_kind_from_name(name)]] = True
    return state


def to_external(state: AlertState) -> AlertStatus:
    """Convert flags into an external alert status, in enumeration order."""
    return AlertStatus(
        active=[str(kind) for kind, flag in zip(_KINDS, state.active) if flag],
        raised=[str(kind) for kind, flag in zip(_KINDS, state.raised) if flag],
        cleared=[str(kind) for kind, flag in zip(_KINDS, state.cleared) if flag],
    )
