"""Feature modules: users, ledger, transactions, notifications, reconciliation, checkout."""
