"""Shared fixtures for Ledger Facade tests."""

from datetime import date

import pytest

from src.orchestrator import LedgerFacade
from src.services.ledger import LedgerConnectionError
from tests.helpers.ledger import SAMPLE_GROUPS, InMemoryLedger, budget_month


@pytest.fixture
def sample_month_raw() -> dict:
    return budget_month(SAMPLE_GROUPS)


@pytest.fixture
def ledger(sample_month_raw) -> InMemoryLedger:
    return InMemoryLedger(months={"2024-05": sample_month_raw})


@pytest.fixture
def facade(ledger) -> LedgerFacade:
    return LedgerFacade(ledger=ledger, today=lambda: date(2024, 5, 17))


@pytest.fixture
def connection_error() -> LedgerConnectionError:
    return LedgerConnectionError("GET http://actual.test failed: connection refused")
