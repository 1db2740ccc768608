"""Schema validation package."""

from src.validation.validator import (
    RequestValidationError,
    ShapeValidationError,
    issues_from_error,
    parse_accounts,
    parse_budget_month,
    parse_transaction_request,
)

__all__ = [
    "RequestValidationError",
    "ShapeValidationError",
    "issues_from_error",
    "parse_accounts",
    "parse_budget_month",
    "parse_transaction_request",
]
