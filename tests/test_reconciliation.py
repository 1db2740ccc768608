"""Tests for amount conversion and category reconciliation."""

from decimal import Decimal

import pytest

from src.models.budget import BudgetMonth
from src.models.category import ExpenseCategoryInfo, IncomeCategoryInfo
from src.reconciliation import (
    CategoryNotFoundError,
    IncomeCategoryError,
    amount_to_integer,
    category_budget,
    find_category_by_name,
    find_expense_category,
    integer_to_amount,
    project_categories,
)
from tests.helpers.ledger import SAMPLE_GROUPS, budget_month, expense, group, income


@pytest.fixture
def month() -> BudgetMonth:
    return BudgetMonth.model_validate(budget_month(SAMPLE_GROUPS))


class TestIntegerToAmount:
    """Tests for minor units to decimal conversion."""

    @pytest.mark.parametrize("minor, expected", [
        (100000, Decimal("1000.00")),
        (0, Decimal("0")),
        (1, Decimal("0.01")),
        (-12345, Decimal("-123.45")),
        (27655, Decimal("276.55")),
    ])
    def test_scales_by_one_hundred(self, minor, expected):
        """Test integers are divided by 100 exactly."""
        assert integer_to_amount(minor) == expected

    def test_result_has_two_decimal_places(self):
        """Test the result keeps cent precision."""
        assert str(integer_to_amount(100000)) == "1000.00"

    @pytest.mark.parametrize("value", [1.5, "100", True, None])
    def test_rejects_non_integers(self, value):
        """Test only real integers are converted."""
        with pytest.raises(TypeError):
            integer_to_amount(value)


class TestAmountToInteger:
    """Tests for decimal to minor units conversion."""

    @pytest.mark.parametrize("amount, expected", [
        (12.34, 1234),
        (-12.34, -1234),
        (0.29, 29),
        (1.1, 110),
        (20, 2000),
        (Decimal("1000.00"), 100000),
    ])
    def test_whole_cents(self, amount, expected):
        """Test amounts with at most two decimals convert exactly."""
        assert amount_to_integer(amount) == expected

    @pytest.mark.parametrize("amount, expected", [
        (0.005, 1),
        (-0.005, -1),
        (1.234, 123),
        (1.235, 124),
        (-1.235, -124),
    ])
    def test_rounds_half_away_from_zero(self, amount, expected):
        """Test sub-cent amounts round half away from zero."""
        assert amount_to_integer(amount) == expected

    @pytest.mark.parametrize("minor", [0, 1, -1, 99, 100000, -987654321])
    def test_whole_cent_amounts_round_trip(self, minor):
        """Test integer -> amount -> integer is the identity."""
        assert amount_to_integer(integer_to_amount(minor)) == minor

    @pytest.mark.parametrize("amount", [float("nan"), float("inf"), Decimal("-Infinity")])
    def test_rejects_non_finite(self, amount):
        """Test NaN and infinities cannot be converted."""
        with pytest.raises(ValueError):
            amount_to_integer(amount)

    @pytest.mark.parametrize("amount", [True, "12.34", None])
    def test_rejects_non_numbers(self, amount):
        """Test booleans and strings are not amounts."""
        with pytest.raises(TypeError):
            amount_to_integer(amount)


class TestLargeAmounts:
    """Tests for amounts beyond the default 28-digit decimal precision."""

    def test_integer_to_amount_keeps_every_digit(self):
        assert str(integer_to_amount(10**28 + 1)) == "100000000000000000000000000.01"

    @pytest.mark.parametrize("minor", [10**28 + 1, -(10**40) - 7, 2**200])
    def test_round_trip(self, minor):
        """Test integer -> amount -> integer is the identity for huge values."""
        assert amount_to_integer(integer_to_amount(minor)) == minor

    def test_large_float(self):
        assert amount_to_integer(1e27) == 10**29

    def test_large_decimal_rounds_half_away_from_zero(self):
        value = Decimal("123456789012345678901234567890.125")
        assert amount_to_integer(value) == 12345678901234567890123456789013
        assert amount_to_integer(-value) == -12345678901234567890123456789013


class TestFindCategoryByName:
    """Tests for name lookup across groups."""

    def test_exact_match(self, month):
        """Test a category is found by its exact name."""
        assert find_category_by_name(month, "Rent").id == "c1"

    def test_case_insensitive(self, month):
        """Test case is ignored when comparing names."""
        assert find_category_by_name(month, "rENT").id == "c1"

    def test_first_group_wins_on_duplicates(self, month):
        """Test 'Groceries' in g1 shadows 'groceries' in g3."""
        assert find_category_by_name(month, "GROCERIES").id == "c2"

    def test_hidden_categories_are_found(self, month):
        """Test hidden categories still match."""
        assert find_category_by_name(month, "games").id == "c5"

    def test_income_category_is_returned(self, month):
        """Test the plain lookup does not filter by kind."""
        assert find_category_by_name(month, "Salary").id == "c3"

    def test_no_match(self, month):
        """Test an unknown name yields None."""
        assert find_category_by_name(month, "Holidays") is None

    def test_no_partial_match(self, month):
        """Test names must match entirely."""
        assert find_category_by_name(month, "Rent ") is None
        assert find_category_by_name(month, "Ren") is None

    def test_empty_month(self):
        """Test a month with no groups finds nothing."""
        empty = BudgetMonth.model_validate(budget_month([]))
        assert find_category_by_name(empty, "Rent") is None

    def test_plain_lowercasing(self):
        """Test names are compared lowercased, without Unicode case folding."""
        street = BudgetMonth.model_validate(budget_month([
            group("g1", "Home", [expense("s1", "Straße")]),
        ]))
        assert find_category_by_name(street, "STRAßE").id == "s1"
        assert find_category_by_name(street, "STRASSE") is None


class TestFindExpenseCategory:
    """Tests for the budget lookup rules."""

    def test_returns_expense_category(self, month):
        """Test an expense match is returned."""
        assert find_expense_category(month, "Rent").name == "Rent"

    def test_missing_name_raises_not_found(self, month):
        """Test an unknown name is a plain not-found."""
        with pytest.raises(CategoryNotFoundError) as exc:
            find_expense_category(month, "Holidays")
        assert not isinstance(exc.value, IncomeCategoryError)
        assert exc.value.status_code == 404
        assert exc.value.message == "Budget data for category Holidays not found"

    def test_income_match_raises_income_error(self, month):
        """Test an income match is a not-found with its own message."""
        with pytest.raises(IncomeCategoryError) as exc:
            find_expense_category(month, "salary")
        assert exc.value.status_code == 404
        assert exc.value.category_id == "c3"
        assert "income category" in exc.value.message

    def test_income_first_shadows_later_expense(self):
        """Test the first match decides, even if a later one is an expense."""
        shadowed = BudgetMonth.model_validate(budget_month([
            group("g1", "Income", [income("i1", "Bonus", 100)]),
            group("g2", "Spend", [expense("e1", "Bonus", 100, -50, 50)]),
        ]))
        with pytest.raises(IncomeCategoryError):
            find_expense_category(shadowed, "Bonus")


class TestCategoryBudget:
    """Tests for the remaining-budget projection."""

    def test_rent_fully_spent(self, month):
        """Test Rent with its budget spent resolves to zero balance."""
        result = category_budget(find_expense_category(month, "Rent"))
        assert result.category_id == "c1"
        assert result.category_name == "Rent"
        assert result.budgeted == Decimal("1000.00")
        assert result.spent == Decimal("-1000.00")
        assert result.balance == Decimal("0")

    def test_uses_stored_name(self, month):
        """Test the response carries the ledger's spelling, not the query's."""
        result = category_budget(find_expense_category(month, "groceries"))
        assert result.category_name == "Groceries"
        assert result.balance == Decimal("276.55")

    def test_overspent_balance_is_negative(self, month):
        """Test negative balances pass through."""
        result = category_budget(find_expense_category(month, "Games"))
        assert result.balance == Decimal("-27.00")


class TestProjectCategories:
    """Tests for flattening categories into the client list."""

    def test_one_entry_per_category_in_order(self, month):
        """Test every category appears once, in group then category order."""
        infos = project_categories(month)
        assert [info.id for info in infos] == ["c1", "c2", "c3", "c4", "c5"]

    def test_expense_entries_carry_balance_only(self, month):
        """Test expense entries have id, name and balance."""
        info = project_categories(month)[1]
        assert isinstance(info, ExpenseCategoryInfo)
        assert info.model_dump(mode="json") == {
            "id": "c2",
            "name": "Groceries",
            "balance": 276.55,
        }

    def test_income_entries_carry_received_only(self, month):
        """Test income entries have id, name and received."""
        info = project_categories(month)[2]
        assert isinstance(info, IncomeCategoryInfo)
        assert info.model_dump(mode="json") == {
            "id": "c3",
            "name": "Salary",
            "received": 5000.0,
        }

    def test_duplicate_names_are_kept(self, month):
        """Test nothing is de-duplicated."""
        names = [info.name.lower() for info in project_categories(month)]
        assert names.count("groceries") == 2

    def test_empty_groups(self):
        """Test groups without categories contribute nothing."""
        sparse = BudgetMonth.model_validate(budget_month([
            group("g1", "Empty", []),
            group("g2", "One", [expense("c1", "Rent")]),
        ]))
        assert [info.id for info in project_categories(sparse)] == ["c1"]
