"""
Category Reconciliation

Pure functions over a validated BudgetMonth:
- find a category by name across all groups
- resolve the remaining budget of an expense category
- flatten every category into the client-facing list

All of them walk groups in upstream order, then categories in group order.
"""

from typing import Optional, assert_never

from src.errors import FacadeError
from src.models.budget import BudgetMonth, CategoryBudget
from src.models.category import (
    Category,
    CategoryInfo,
    ExpenseCategory,
    ExpenseCategoryInfo,
    IncomeCategory,
    IncomeCategoryInfo,
)
from src.reconciliation.amounts import integer_to_amount


class CategoryNotFoundError(FacadeError):
    """No category with the requested name exists in the budget month."""

    status_code = 404

    def __init__(self, category_name: str, message: Optional[str] = None):
        self.category_name = category_name
        super().__init__(message or f"Budget data for category {category_name} not found")


class IncomeCategoryError(CategoryNotFoundError):
    """
    The name matched, but the first match is an income category.

    Income categories have no budgeted/spent/balance, so for budget lookups
    this is still a not-found.
    """

    def __init__(self, category_name: str, category_id: str):
        self.category_id = category_id
        super().__init__(
            category_name,
            f"Budget data for category {category_name} not found: "
            "it is an income category",
        )


def find_category_by_name(
    budget_month: BudgetMonth,
    name: str,
) -> Optional[Category]:
    """
    Return the first category whose name equals `name` once both are lowercased.

    Duplicate names in different groups resolve to the one in the earliest group.
    """
    wanted = name.lower()
    for group in budget_month.category_groups:
        for category in group.categories:
            if category.name.lower() == wanted:
                return category
    return None


def find_expense_category(budget_month: BudgetMonth, name: str) -> ExpenseCategory:
    """Look up a category for budget purposes; income matches do not count."""
    category = find_category_by_name(budget_month, name)
    if category is None:
        raise CategoryNotFoundError(name)
    if isinstance(category, IncomeCategory):
        raise IncomeCategoryError(name, category.id)
    return category


def category_budget(category: ExpenseCategory) -> CategoryBudget:
    return CategoryBudget(
        category_id=category.id,
        category_name=category.name,
        budgeted=integer_to_amount(category.budgeted),
        spent=integer_to_amount(category.spent),
        balance=integer_to_amount(category.balance),
    )


def project_category(category: Category) -> CategoryInfo:
    match category:
        case ExpenseCategory():
            return ExpenseCategoryInfo(
                id=category.id,
                name=category.name,
                balance=integer_to_amount(category.balance),
            )
        case IncomeCategory():
            return IncomeCategoryInfo(
                id=category.id,
                name=category.name,
                received=integer_to_amount(category.received),
            )
        case _:
            assert_never(category)


def project_categories(budget_month: BudgetMonth) -> list[CategoryInfo]:
    """
    Flatten all groups into one list of category infos.

    Order is kept and nothing is de-duplicated, so the result has exactly
    one entry per category in the month.
    """
    return [
        project_category(category)
        for group in budget_month.category_groups
        for category in group.categories
    ]
