"""Ingestion layer.

This package turns raw call arguments into normalized, read-only update
payloads and typed records.
"""

__all__: list[str] = []
