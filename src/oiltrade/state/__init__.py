"""State layer.

This package is the single source of truth for how sparse asset updates
are merged into persisted records, and for the ledger capability those
records are read from and written to.
"""
