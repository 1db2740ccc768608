"""
Main Orchestrator for Ledger Facade

This module ties together all the components and defines the
end-to-end flows for:
1. Accounts (fetch → validate → respond)
2. Category budget (fetch month → validate → find by name → convert)
3. Categories (fetch month → validate → flatten → convert)
4. Transaction creation (validate body → convert → submit)

DESIGN DECISION: The orchestrator enforces the boundaries:
- Nothing from the ledger is used before it passes validation
- Nothing is sent to the ledger before the client body passes validation
- Every outcome is audited

Each call is self-contained: no state survives from one request to the next.
"""

import re
from datetime import date
from typing import Any, Awaitable, Callable, Optional, TypeVar
from uuid import UUID

from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from src.audit import AuditLogger, create_correlation_id
from src.config import Settings, get_settings
from src.errors import BadRequestError, CollaboratorError
from src.models.account import AccountsResponse
from src.models.budget import BudgetMonth, CategoryBudget
from src.models.category import CategoriesResponse
from src.models.transaction import NewTransaction, TransactionResponse
from src.reconciliation import (
    CategoryNotFoundError,
    IncomeCategoryError,
    amount_to_integer,
    category_budget,
    find_expense_category,
    project_categories,
)
from src.services.ledger import (
    ActualHttpLedgerService,
    LedgerConnectionError,
    LedgerError,
    LedgerServiceInterface,
)
from src.validation import (
    RequestValidationError,
    ShapeValidationError,
    parse_accounts,
    parse_budget_month,
    parse_transaction_request,
)

T = TypeVar("T")

_MONTH_PATTERN = re.compile(r"^[0-9]{4}-(0[1-9]|1[0-2])$")


def current_month(today: Optional[date] = None) -> str:
    """Return the calendar month of `today` (default: now) as YYYY-MM."""
    today = today or date.today()
    return f"{today.year:04d}-{today.month:02d}"


class LedgerFacade:
    """
    Orchestrates every request the HTTP layer serves.

    Flow for each read:
    1. Fetch raw data from the ledger (failure → CollaboratorError)
    2. Validate the shape (failure → ShapeValidationError)
    3. Reconcile into the response payload
    """

    def __init__(
        self,
        ledger: LedgerServiceInterface,
        audit_logger: Optional[AuditLogger] = None,
        today: Callable[[], date] = date.today,
    ):
        self._ledger = ledger
        self._audit_logger = audit_logger or AuditLogger()
        self._today = today

    def resolve_month(self, month: Optional[str]) -> str:
        """Use the requested month, or the current one if none was given."""
        if month is None:
            return current_month(self._today())
        if not _MONTH_PATTERN.match(month):
            raise BadRequestError("month query parameter must be in YYYY-MM format")
        return month

    async def _call_ledger(
        self,
        operation: str,
        failure_message: str,
        call: Awaitable[T],
        correlation_id: UUID,
    ) -> T:
        """Await a ledger call, turning ledger failures into CollaboratorError."""
        try:
            return await call
        except LedgerError as e:
            self._audit_logger.log_external_service_error(
                operation=operation,
                error_message=str(e),
                correlation_id=correlation_id,
            )
            raise CollaboratorError(failure_message) from e

    async def _fetch_budget_month(
        self,
        month: str,
        failure_message: str,
        correlation_id: UUID,
    ) -> BudgetMonth:
        raw = await self._call_ledger(
            "get_budget_month",
            failure_message,
            self._ledger.get_budget_month(month),
            correlation_id,
        )
        try:
            budget_month = parse_budget_month(raw)
        except ShapeValidationError as e:
            self._audit_logger.log_shape_validation_failed(
                source=e.source,
                issues=e.issues,
                raw_data=raw,
                correlation_id=correlation_id,
            )
            raise

        self._audit_logger.log_budget_month_fetched(
            month=budget_month.month,
            category_count=budget_month.category_count,
            correlation_id=correlation_id,
        )
        return budget_month

    async def get_accounts(
        self,
        correlation_id: Optional[UUID] = None,
    ) -> AccountsResponse:
        correlation_id = correlation_id or create_correlation_id()

        raw = await self._call_ledger(
            "get_accounts",
            "Failed to fetch accounts",
            self._ledger.get_accounts(),
            correlation_id,
        )
        try:
            accounts = parse_accounts(raw)
        except ShapeValidationError as e:
            self._audit_logger.log_shape_validation_failed(
                source=e.source,
                issues=e.issues,
                raw_data=raw,
                correlation_id=correlation_id,
            )
            raise

        self._audit_logger.log_accounts_fetched(len(accounts), correlation_id)
        return AccountsResponse(accounts=accounts)

    async def get_category_budget(
        self,
        category_name: Optional[str],
        month: Optional[str] = None,
        correlation_id: Optional[UUID] = None,
    ) -> CategoryBudget:
        """
        Resolve what is left of one expense category's budget.

        Raises:
            BadRequestError: If the category name or month is missing/malformed
            CategoryNotFoundError: If no category matches
            IncomeCategoryError: If the first match is an income category
        """
        correlation_id = correlation_id or create_correlation_id()

        if not category_name:
            raise BadRequestError(
                "category query parameter is required and must be a string"
            )
        month = self.resolve_month(month)

        budget_month = await self._fetch_budget_month(
            month, "Internal server error", correlation_id
        )

        try:
            category = find_expense_category(budget_month, category_name)
        except CategoryNotFoundError as e:
            self._audit_logger.log_category_not_found(
                category_name=category_name,
                matched_income=isinstance(e, IncomeCategoryError),
                correlation_id=correlation_id,
            )
            raise

        self._audit_logger.log_category_budget_resolved(
            category_id=category.id,
            category_name=category.name,
            correlation_id=correlation_id,
        )
        return category_budget(category)

    async def list_categories(
        self,
        month: Optional[str] = None,
        correlation_id: Optional[UUID] = None,
    ) -> CategoriesResponse:
        correlation_id = correlation_id or create_correlation_id()
        month = self.resolve_month(month)

        budget_month = await self._fetch_budget_month(
            month, "Failed to fetch categories", correlation_id
        )
        return CategoriesResponse(categories=project_categories(budget_month))

    async def create_transaction(
        self,
        body: Any,
        correlation_id: Optional[UUID] = None,
    ) -> TransactionResponse:
        """
        Validate a client transaction and submit it as cleared.

        The ledger is never called for an invalid body.
        """
        correlation_id = correlation_id or create_correlation_id()

        try:
            request = parse_transaction_request(body)
        except RequestValidationError as e:
            self._audit_logger.log_request_validation_failed(
                issues=e.issues,
                request_body=body,
                correlation_id=correlation_id,
            )
            raise

        transaction = NewTransaction(
            account=request.account_id,
            date=request.date,
            notes=request.description,
            amount=amount_to_integer(request.amount),
            category=request.category_id,
        )

        await self._call_ledger(
            "add_transaction",
            "Failed to create transaction",
            self._ledger.add_transaction(request.account_id, transaction),
            correlation_id,
        )

        self._audit_logger.log_transaction_created(
            account_id=transaction.account,
            amount=transaction.amount,
            correlation_id=correlation_id,
        )
        return TransactionResponse(
            success=True,
            message="Transaction created successfully",
        )


async def connect_ledger(
    ledger: LedgerServiceInterface,
    attempts: int = 3,
    audit_logger: Optional[AuditLogger] = None,
    sync_id: str = "",
    wait: Optional[Any] = None,
) -> None:
    """
    Open the budget at startup, retrying while the ledger is unreachable.

    Only connection failures are retried; a refusal (bad password, unknown
    budget) is raised at once.
    """
    audit_logger = audit_logger or AuditLogger()

    async for attempt in AsyncRetrying(
        stop=stop_after_attempt(attempts),
        wait=wait if wait is not None else wait_exponential(multiplier=1, min=2, max=10),
        retry=retry_if_exception_type(LedgerConnectionError),
        reraise=True,
    ):
        with attempt:
            await ledger.connect()

    audit_logger.log_ledger_connected(sync_id)


def create_app_components(
    settings: Optional[Settings] = None,
    ledger: Optional[LedgerServiceInterface] = None,
) -> tuple[LedgerFacade, LedgerServiceInterface]:
    """
    Factory function to create all application components.

    Args:
        settings: Loaded settings. Uses get_settings() if None.
        ledger: Ledger to use. Builds the actual-http-api client if None.

    Returns:
        (facade, ledger)
    """
    if ledger is None:
        settings = settings or get_settings()
        ledger = ActualHttpLedgerService(settings.actual)

    audit_logger = AuditLogger()
    facade = LedgerFacade(ledger=ledger, audit_logger=audit_logger)

    return facade, ledger
