"""Tests for the actual-http-api ledger client, using httpx.MockTransport."""

import asyncio
import json

import httpx
import pytest

from src.config import ActualSettings
from src.models.transaction import NewTransaction
from src.services.ledger import (
    ActualHttpLedgerService,
    LedgerConnectionError,
    LedgerResponseError,
)


@pytest.fixture
def settings() -> ActualSettings:
    return ActualSettings(
        server_url="http://actual.test/",
        password="api-key",
        sync_id="budget-1",
        budget_encryption_key="secret",
    )


class Recorder:
    """MockTransport handler that records requests and replays one response."""

    def __init__(self, response: httpx.Response):
        self.response = response
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.response


def make_service(settings, handler) -> ActualHttpLedgerService:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return ActualHttpLedgerService(settings, client=client)


class TestRequests:
    """Tests for the URLs and headers sent upstream."""

    def test_get_accounts_unwraps_data(self, settings):
        recorder = Recorder(httpx.Response(200, json={"data": [{"id": "a1"}]}))
        service = make_service(settings, recorder)

        assert asyncio.run(service.get_accounts()) == [{"id": "a1"}]

        [request] = recorder.requests
        assert request.method == "GET"
        assert str(request.url) == "http://actual.test/v1/budgets/budget-1/accounts"
        assert request.headers["x-api-key"] == "api-key"
        assert request.headers["budget-encryption-password"] == "secret"

    def test_get_budget_month(self, settings):
        recorder = Recorder(httpx.Response(200, json={"data": {"month": "2024-05"}}))
        service = make_service(settings, recorder)

        assert asyncio.run(service.get_budget_month("2024-05")) == {"month": "2024-05"}
        assert recorder.requests[0].url.path == "/v1/budgets/budget-1/months/2024-05"

    def test_connect_lists_months(self, settings):
        recorder = Recorder(httpx.Response(200, json={"data": ["2024-05"]}))
        service = make_service(settings, recorder)

        asyncio.run(service.connect())
        assert recorder.requests[0].url.path.endswith("/months")

    def test_add_transaction_body(self, settings):
        recorder = Recorder(httpx.Response(200, json={"data": "ok"}))
        service = make_service(settings, recorder)
        transaction = NewTransaction(
            account="acc-1",
            date="2024-05-17",
            notes="Coffee",
            amount=-350,
            category="c2",
        )

        asyncio.run(service.add_transaction("acc-1", transaction))

        [request] = recorder.requests
        assert request.method == "POST"
        assert request.url.path == "/v1/budgets/budget-1/accounts/acc-1/transactions"
        assert json.loads(request.content) == {
            "learnCategories": False,
            "runTransfers": False,
            "transaction": {
                "account": "acc-1",
                "date": "2024-05-17",
                "notes": "Coffee",
                "amount": -350,
                "category": "c2",
                "cleared": True,
            },
        }


class TestFailures:
    """Tests for how upstream failures are reported."""

    def test_error_status(self, settings):
        service = make_service(settings, Recorder(httpx.Response(500, text="boom")))
        with pytest.raises(LedgerResponseError) as exc:
            asyncio.run(service.get_accounts())
        assert exc.value.status_code == 500

    def test_non_json_body(self, settings):
        service = make_service(settings, Recorder(httpx.Response(200, text="<html>")))
        with pytest.raises(LedgerResponseError):
            asyncio.run(service.get_accounts())

    def test_missing_envelope(self, settings):
        service = make_service(settings, Recorder(httpx.Response(200, json=[{"id": "a1"}])))
        with pytest.raises(LedgerResponseError):
            asyncio.run(service.get_accounts())

    def test_network_failure(self, settings):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        service = make_service(settings, refuse)
        with pytest.raises(LedgerConnectionError):
            asyncio.run(service.connect())

    def test_data_is_not_validated_here(self, settings):
        """Test the client hands back whatever the upstream sent."""
        recorder = Recorder(httpx.Response(200, json={"data": {"unexpected": True}}))
        service = make_service(settings, recorder)
        assert asyncio.run(service.get_budget_month("2024-05")) == {"unexpected": True}


class TestClientLifecycle:

    def test_injected_client_is_not_closed(self, settings):
        client = httpx.AsyncClient(transport=httpx.MockTransport(Recorder(httpx.Response(200))))
        service = ActualHttpLedgerService(settings, client=client)
        asyncio.run(service.close())
        assert not client.is_closed

    def test_owned_client_is_closed(self, settings):
        service = ActualHttpLedgerService(settings)
        client = service._get_client()
        asyncio.run(service.close())
        assert client.is_closed
