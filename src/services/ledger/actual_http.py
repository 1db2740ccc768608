"""
Actual Budget Ledger over actual-http-api

DESIGN DECISION: The ledger is Actual Budget, reached through an
actual-http-api server rather than an embedded client. This means:
1. No local budget cache to manage in this process
2. Plain JSON over HTTP, easy to fake in tests
3. Authentication and end-to-end decryption stay on the server

Every response is wrapped as {"data": ...}; only the unwrapped payload
is handed back. Request-path calls are NOT retried: a failure is
reported once and the client decides what to do.
"""

from typing import Any, Optional
from urllib.parse import quote

import httpx

from src.config import ActualSettings, get_settings
from src.models.transaction import NewTransaction
from src.services.ledger.interface import (
    LedgerConnectionError,
    LedgerResponseError,
    LedgerServiceInterface,
)


class ActualHttpLedgerService(LedgerServiceInterface):
    """
    Ledger implementation backed by actual-http-api.

    Endpoints used:
    - GET  /v1/budgets/{sync_id}/months
    - GET  /v1/budgets/{sync_id}/accounts
    - GET  /v1/budgets/{sync_id}/months/{month}
    - POST /v1/budgets/{sync_id}/accounts/{account_id}/transactions
    """

    def __init__(
        self,
        settings: Optional[ActualSettings] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize the ledger client.

        Args:
            settings: Upstream configuration. Loaded from the environment if None.
            client: HTTP client to use. Created lazily if None.
        """
        self._settings = settings or get_settings().actual
        self._client = client
        self._owns_client = client is None

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._settings.request_timeout_seconds,
            )
        return self._client

    def _headers(self) -> dict[str, str]:
        return {
            "accept": "application/json",
            "x-api-key": self._settings.password,
            "budget-encryption-password": self._settings.budget_encryption_key,
        }

    def _budget_url(self, *parts: str) -> str:
        """Build an absolute URL below this budget."""
        segments = [quote(self._settings.sync_id, safe="")]
        segments.extend(quote(part, safe="") for part in parts)
        return f"{self._settings.server_url}/v1/budgets/" + "/".join(segments)

    async def _request(
        self,
        method: str,
        url: str,
        json: Optional[dict] = None,
    ) -> Any:
        """Send one request and return the unwrapped `data` payload."""
        client = self._get_client()
        try:
            response = await client.request(
                method,
                url,
                headers=self._headers(),
                json=json,
            )
        except httpx.HTTPError as e:
            raise LedgerConnectionError(f"{method} {url} failed: {e}") from e

        if response.is_error:
            raise LedgerResponseError(
                f"{method} {url} returned {response.status_code}: {response.text[:200]}",
                status_code=response.status_code,
            )

        try:
            body = response.json()
        except ValueError as e:
            raise LedgerResponseError(
                f"{method} {url} returned a non-JSON body",
                status_code=response.status_code,
            ) from e

        if not isinstance(body, dict) or "data" not in body:
            raise LedgerResponseError(
                f"{method} {url} returned no data envelope",
                status_code=response.status_code,
            )
        return body["data"]

    async def connect(self) -> None:
        # Listing months forces the server to download and open the budget.
        await self._request("GET", self._budget_url("months"))

    async def get_accounts(self) -> Any:
        return await self._request("GET", self._budget_url("accounts"))

    async def get_budget_month(self, month: str) -> Any:
        return await self._request("GET", self._budget_url("months", month))

    async def add_transaction(
        self,
        account_id: str,
        transaction: NewTransaction,
    ) -> None:
        await self._request(
            "POST",
            self._budget_url("accounts", account_id, "transactions"),
            json={
                "learnCategories": False,
                "runTransfers": False,
                "transaction": transaction.model_dump(),
            },
        )

    async def close(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
