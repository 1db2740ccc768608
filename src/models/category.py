"""
Category Models

Actual Budget returns every category with an `is_income` flag, and the flag
decides which figures the category carries:

- Expense categories carry budgeted / spent / balance.
- Income categories carry received.

DESIGN DECISION: The two shapes are separate classes joined in a tagged
union. An ExpenseCategory simply has no `received` attribute and an
IncomeCategory has no `budgeted`, so the fields can never be mixed.
Extra keys sent by the upstream are ignored.
"""

from typing import Annotated, Any, Literal, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Discriminator,
    StrictBool,
    StrictInt,
    StrictStr,
    Tag,
)

from src.models.common import Amount


def _category_kind(value: Any) -> Optional[str]:
    """
    Pick the union member from the raw `is_income` flag.

    Only real booleans select a member. Anything else (missing key, 0/1,
    "true") yields no tag and fails validation.
    """
    if isinstance(value, dict):
        flag = value.get("is_income")
    else:
        flag = getattr(value, "is_income", None)

    if flag is True:
        return "income"
    if flag is False:
        return "expense"
    return None


class ExpenseCategory(BaseModel):
    """Category money is budgeted into and spent from (amounts in minor units)."""
    model_config = ConfigDict(frozen=True)

    id: StrictStr
    name: StrictStr
    is_income: Literal[False]
    hidden: StrictBool
    budgeted: StrictInt
    spent: StrictInt
    balance: StrictInt


class IncomeCategory(BaseModel):
    """Category money is received into (amount in minor units)."""
    model_config = ConfigDict(frozen=True)

    id: StrictStr
    name: StrictStr
    is_income: Literal[True]
    hidden: StrictBool
    received: StrictInt


Category = Annotated[
    Union[
        Annotated[ExpenseCategory, Tag("expense")],
        Annotated[IncomeCategory, Tag("income")],
    ],
    Discriminator(
        _category_kind,
        custom_error_type="invalid_category_kind",
        custom_error_message="is_income must be true or false",
    ),
]


class CategoryGroup(BaseModel):
    """A named, ordered collection of categories; upstream order is kept."""
    model_config = ConfigDict(frozen=True)

    id: StrictStr
    name: StrictStr
    categories: list[Category]


# =============================================================================
# CLIENT-FACING PROJECTIONS
# =============================================================================

class ExpenseCategoryInfo(BaseModel):
    id: str
    name: str
    balance: Amount


class IncomeCategoryInfo(BaseModel):
    id: str
    name: str
    received: Amount


CategoryInfo = Union[ExpenseCategoryInfo, IncomeCategoryInfo]


class CategoriesResponse(BaseModel):
    categories: list[CategoryInfo]
