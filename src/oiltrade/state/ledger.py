"""Key-value ledger capability.

The contract only needs get/put/delete by key; the surrounding store owns
durability, ordering and transactions.  :class:`InMemoryLedger` is a
dict-backed implementation for local use and tests.
"""

from __future__ import annotations

import logging
from typing import Protocol, TypeVar

from pydantic import ValidationError

from oiltrade.exceptions import StoreUnavailableError
from oiltrade.models._base import OilTradeModel

_logger = logging.getLogger(__name__)

TModel = TypeVar("TModel", bound=OilTradeModel)


class Ledger(Protocol):
    def get(self, key: str) -> bytes | None: ...

    def put(self, key: str, value: bytes) -> None: ...

    def delete(self, key: str) -> None: ...


class InMemoryLedger:
    """Ledger backed by a plain dict."""

    def __init__(self) -> None:
        self._entries: dict[str, bytes] = {}

    def get(self, key: str) -> bytes | None:
        return self._entries.get(key)

    def put(self, key: str, value: bytes) -> None:
        self._entries[key] = bytes(value)

    def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    def keys(self) -> list[str]:
        return sorted(self._entries)


def get_bytes(ledger: Ledger, key: str) -> bytes | None:
    """Read *key*, mapping ledger failures to :class:`StoreUnavailableError`.

    An empty value is reported as absent.
    """
    try:
        value = ledger.get(key)
    except Exception as err:
        raise StoreUnavailableError(f"Unable to get state from ledger: {err}", key=key) from err
    _logger.debug("GET %s -> %s", key, "miss" if not value else f"{len(value)}b")
    return value or None


def get_model(ledger: Ledger, key: str, model: type[TModel]) -> TModel | None:
    """Read and decode *key*; malformed data raises :class:`StoreUnavailableError`."""
    return decode_model(key, get_bytes(ledger, key), model)


def decode_model(key: str, value: bytes | None, model: type[TModel]) -> TModel | None:
    """Decode bytes previously read from *key*."""
    if value is None:
        return None
    try:
        return model.from_json(value)
    except ValidationError as err:
        raise StoreUnavailableError(
            f"Unable to unmarshal {model.__name__} obtained from ledger",
            key=key,
        ) from err


def put_bytes(ledger: Ledger, key: str, value: bytes) -> None:
    try:
        ledger.put(key, value)
    except Exception as err:
        raise StoreUnavailableError(f"PUT ledger state failed: {err}", key=key) from err
    _logger.debug("PUT %s (%db)", key, len(value))


def delete_key(ledger: Ledger, key: str) -> None:
    try:
        ledger.delete(key)
    except Exception as err:
        raise StoreUnavailableError(f"DELSTATE failed: {err}", key=key) from err
    _logger.debug("DEL %s", key)
