"""
Schema Validation

DESIGN DECISION: Everything entering the facade goes through one of the
parse functions below before any code looks at it.

UPSTREAM DATA (accounts, budget months):
- A failure means the ledger broke its contract.
- Raised as ShapeValidationError, surfaced as a server error.

CLIENT DATA (transaction bodies):
- A failure means the client sent something wrong.
- Raised as RequestValidationError with every field issue, so the client
  can correct all of them at once.

IMPORTANT: Validation NEVER silently fixes issues.
Wrong types are rejected, not coerced.
"""

from typing import Any

from pydantic import TypeAdapter, ValidationError

from src.errors import FacadeError
from src.models.account import Account
from src.models.budget import BudgetMonth
from src.models.common import FieldIssue
from src.models.transaction import CreateTransactionRequest


_ACCOUNT_LIST = TypeAdapter(list[Account])


class ShapeValidationError(FacadeError):
    """Upstream data does not match the expected structure."""

    status_code = 500

    def __init__(self, source: str, issues: list[FieldIssue]):
        self.source = source
        super().__init__(f"Invalid {source} data received from API", issues)


class RequestValidationError(FacadeError):
    """Client-submitted data fails schema constraints."""

    status_code = 400

    def __init__(self, issues: list[FieldIssue]):
        super().__init__("Validation failed", issues)


def issues_from_error(error: ValidationError) -> list[FieldIssue]:
    """
    Flatten a pydantic ValidationError into field issues.

    Locations are joined with dots, e.g. "categoryGroups.0.categories.2.expense.spent".
    """
    return [
        FieldIssue(
            field=".".join(str(part) for part in err["loc"]) or "__root__",
            issue_type=err["type"],
            message=err["msg"],
        )
        for err in error.errors(include_url=False)
    ]


def parse_accounts(raw: Any) -> list[Account]:
    """Validate the upstream account list."""
    try:
        return _ACCOUNT_LIST.validate_python(raw)
    except ValidationError as e:
        raise ShapeValidationError("account", issues_from_error(e)) from e


def parse_budget_month(raw: Any) -> BudgetMonth:
    """Validate an upstream budget month, nested groups and categories included."""
    try:
        return BudgetMonth.model_validate(raw)
    except ValidationError as e:
        raise ShapeValidationError("budget", issues_from_error(e)) from e


def parse_transaction_request(raw: Any) -> CreateTransactionRequest:
    """Validate a client transaction body, reporting every bad field."""
    try:
        return CreateTransactionRequest.model_validate(raw)
    except ValidationError as e:
        raise RequestValidationError(issues_from_error(e)) from e
