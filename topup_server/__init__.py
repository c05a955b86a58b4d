"""Top-up wallet server: gateway reconciliation and balance ledger."""

__version__ = "1.0.0"
