"""
Budget Month Models

A BudgetMonth is the whole budgeting state of one calendar month as the
upstream computes it. It is fetched fresh for every request and validated
in one piece: a single malformed category anywhere fails the month.
"""

from typing import Union

from pydantic import BaseModel, Field, StrictFloat, StrictInt, StrictStr

from src.models.category import CategoryGroup
from src.models.common import CAMEL_CASE_CONFIG, CAMEL_CASE_RESPONSE_CONFIG, Amount


# Upstream month totals are plain JSON numbers.
Total = Union[StrictInt, StrictFloat]


class BudgetMonth(BaseModel):
    """Aggregate totals plus the ordered category groups of one month."""
    model_config = CAMEL_CASE_CONFIG

    month: StrictStr = Field(
        ...,
        pattern=r"^[0-9]{4}-[0-9]{2}$",
        description="Month in YYYY-MM form"
    )
    income_available: Total
    last_month_overspent: Total
    for_next_month: Total
    total_budgeted: Total
    to_budget: Total
    from_last_month: Total
    total_income: Total
    total_spent: Total
    total_balance: Total
    category_groups: list[CategoryGroup]

    @property
    def category_count(self) -> int:
        """Number of categories across all groups."""
        return sum(len(group.categories) for group in self.category_groups)


class CategoryBudget(BaseModel):
    """What is left of one expense category's budget this month."""
    model_config = CAMEL_CASE_RESPONSE_CONFIG

    category_id: str
    category_name: str
    budgeted: Amount
    spent: Amount
    balance: Amount
