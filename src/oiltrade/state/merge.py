"""Field-granular merge of sparse asset updates.

This module intentionally contains *no* payload parsing.  The ingestion
boundary hands over typed records in which ``None`` means "absent".
"""

from __future__ import annotations

from typing import Any

from oiltrade.models.asset import AssetRecord

# Attributes an update may overwrite.  Composite attributes (location,
# event) are single fields: an update replaces them whole.  asset_id is
# the primary key and is never merged.
MERGE_FIELDS: tuple[str, ...] = (
    "location",
    "max_temperature",
    "max_humidity",
    "carrier",
    "event",
)


def merge_asset_record(stored: AssetRecord | None, incoming: AssetRecord) -> AssetRecord:
    """Apply *incoming* onto *stored*.

    Without a stored record the incoming one is the result (a create).
    Otherwise every attribute present in *incoming* overwrites the stored
    value and absent attributes keep it.
    """
    if stored is None:
        return incoming

    update: dict[str, Any] = {}
    for name in MERGE_FIELDS:
        value = getattr(incoming, name)
        if value is not None:
            update[name] = value
    if not update:
        return stored
    return stored.model_copy(update=update)
