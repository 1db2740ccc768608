"""
Ledger Services Package

Provides the abstract ledger interface and the actual-http-api implementation.
"""

from src.services.ledger.interface import (
    LedgerConnectionError,
    LedgerError,
    LedgerResponseError,
    LedgerServiceInterface,
)
from src.services.ledger.actual_http import ActualHttpLedgerService

__all__ = [
    # Interface
    "LedgerServiceInterface",
    # Exceptions
    "LedgerConnectionError",
    "LedgerError",
    "LedgerResponseError",
    # actual-http-api implementation
    "ActualHttpLedgerService",
]
