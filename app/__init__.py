"""HTTP entry point for the Ledger Facade."""
