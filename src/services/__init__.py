"""Services package."""

from src.services.ledger import (
    ActualHttpLedgerService,
    LedgerConnectionError,
    LedgerError,
    LedgerResponseError,
    LedgerServiceInterface,
)

__all__ = [
    # Ledger services
    "ActualHttpLedgerService",
    "LedgerConnectionError",
    "LedgerError",
    "LedgerResponseError",
    "LedgerServiceInterface",
]
