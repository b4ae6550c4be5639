"""Normalization helpers for incoming update payloads.

Centralizes argument decoding, primary-key checks and the read-only
snapshot shared by record merge and alert evaluation.
"""

from __future__ import annotations

import copy
import json
from collections.abc import Mapping, Sequence
from types import MappingProxyType
from typing import Any

from pydantic import ValidationError

from oiltrade._constants import COMPOSITE_KEY_SEPARATOR
from oiltrade.exceptions import InvalidInputError, MissingPrimaryKeyError
from oiltrade.models.asset import AssetRecord

ASSET_ID_FIELD = "assetID"


def is_number(value: Any) -> bool:
    """Return True for ints and floats; ``bool`` is not a number here."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _freeze(value: Any) -> Any:
    if isinstance(value, Mapping):
        return MappingProxyType({key: _freeze(item) for key, item in value.items()})
    if isinstance(value, list):
        return tuple(_freeze(item) for item in value)
    return value


def freeze_payload(payload: Mapping[str, Any]) -> Mapping[str, Any]:
    """Return a deep, read-only copy of *payload*.

    Nested mappings become read-only views and lists become tuples, so
    neither the caller nor any consumer can change the snapshot.
    """
    return _freeze(copy.deepcopy(thaw(payload)))


def thaw(value: Any) -> Any:
    """Inverse of :func:`freeze_payload`, for handing data to pydantic."""
    if isinstance(value, Mapping):
        return {key: thaw(item) for key, item in value.items()}
    if isinstance(value, tuple):
        return [thaw(item) for item in value]
    return value


def normalize_asset_id(value: Any) -> str:
    """Trim *value* and ensure it is a usable asset identifier."""
    if value is None:
        raise MissingPrimaryKeyError("Asset id is mandatory in the input JSON data")
    if not isinstance(value, str):
        raise MissingPrimaryKeyError(f"Asset id must be a string, got {type(value).__name__}")
    asset_id = value.strip()
    if not asset_id:
        raise MissingPrimaryKeyError("AssetID not passed")
    if COMPOSITE_KEY_SEPARATOR in asset_id:
        raise MissingPrimaryKeyError("Asset id must not contain NUL characters")
    return asset_id


def decode_payload(args: Sequence[str]) -> dict[str, Any]:
    """Decode the single JSON-object argument of an asset function."""
    if len(args) != 1:
        raise InvalidInputError("Incorrect number of arguments. Expecting a JSON string with mandatory assetID")
    try:
        payload = json.loads(args[0])
    except (TypeError, ValueError) as err:
        raise InvalidInputError("Unable to unmarshal input JSON data") from err
    if not isinstance(payload, dict):
        raise InvalidInputError("Input JSON data must be an object")
    return payload


def build_record(asset_id: str, payload: Mapping[str, Any]) -> AssetRecord:
    """Type-check *payload* into a record keyed by *asset_id*.

    A payload ``assetID`` must match *asset_id* after trimming.
    """
    data = thaw(payload)
    if data.get(ASSET_ID_FIELD) is not None and normalize_asset_id(data[ASSET_ID_FIELD]) != asset_id:
        raise MissingPrimaryKeyError(f"Payload assetID does not match asset {asset_id!r}")
    data[ASSET_ID_FIELD] = asset_id
    try:
        return AssetRecord.model_validate(data)
    except ValidationError as err:
        raise InvalidInputError(f"Invalid asset fields: {err}") from err
