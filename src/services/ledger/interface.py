"""
Abstract Ledger Interface

DESIGN DECISION: The upstream ledger is reached through an abstract
interface. This allows us to:
1. Swap the actual-http-api client for another transport later
2. Use an in-memory ledger for testing
3. Keep validation and reconciliation unaware of HTTP

Implementations return RAW decoded JSON. They do not validate shapes;
that is the schema layer's job, so a contract break upstream is reported
as invalid data rather than hidden inside the client.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from src.models.transaction import NewTransaction


class LedgerServiceInterface(ABC):
    """
    Abstract interface for the upstream ledger.

    One instance serves one budget (single sync target).
    """

    @abstractmethod
    async def connect(self) -> None:
        """
        Check the ledger is reachable and the budget can be opened.

        Raises:
            LedgerConnectionError: If the ledger cannot be reached
            LedgerResponseError: If the ledger refuses the budget
        """
        pass

    @abstractmethod
    async def get_accounts(self) -> Any:
        """
        Fetch all accounts of the budget.

        Returns:
            Raw account list as decoded from the response
        """
        pass

    @abstractmethod
    async def get_budget_month(self, month: str) -> Any:
        """
        Fetch the budget state of one month.

        Args:
            month: Month in YYYY-MM form

        Returns:
            Raw budget month as decoded from the response
        """
        pass

    @abstractmethod
    async def add_transaction(
        self,
        account_id: str,
        transaction: NewTransaction,
    ) -> None:
        """
        Add a single transaction to an account.

        Raises:
            LedgerError: If the ledger rejects the transaction
        """
        pass

    async def close(self) -> None:
        """Release any connection resources."""
        return None


class LedgerError(Exception):
    """Base exception for ledger calls."""
    pass


class LedgerConnectionError(LedgerError):
    """Could not reach the ledger (network failure or timeout)."""
    pass


class LedgerResponseError(LedgerError):
    """The ledger answered, but with an error or an unreadable body."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)
