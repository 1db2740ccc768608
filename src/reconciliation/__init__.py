"""Reconciliation package: pure lookups and projections over validated data."""

from src.reconciliation.amounts import (
    DECIMAL_PLACES,
    amount_to_integer,
    integer_to_amount,
)
from src.reconciliation.categories import (
    CategoryNotFoundError,
    IncomeCategoryError,
    category_budget,
    find_category_by_name,
    find_expense_category,
    project_categories,
    project_category,
)

__all__ = [
    # Amounts
    "DECIMAL_PLACES",
    "amount_to_integer",
    "integer_to_amount",
    # Categories
    "CategoryNotFoundError",
    "IncomeCategoryError",
    "category_budget",
    "find_category_by_name",
    "find_expense_category",
    "project_categories",
    "project_category",
]
