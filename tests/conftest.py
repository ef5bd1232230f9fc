import json

import httpx
import pytest

from transaction_relay.config import RelaySettings
from transaction_relay.relay import TransactionRelay
from transaction_relay.ynab_client import YnabClient


class RecordingReporter:
    def __init__(self):
        self.reports = []

    def report(self, error, context=None):
        self.reports.append((error, dict(context or {})))


class FakeYnab:
    """Records outbound requests and answers with a canned response."""

    def __init__(self, status_code=200, body="ok", exc=None, headers=None):
        self.status_code = status_code
        self.body = body
        self.exc = exc
        self.headers = headers or {}
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc
        return httpx.Response(self.status_code, headers=self.headers, content=self.body.encode("utf-8"))

    @property
    def last_payload(self):
        return json.loads(self.requests[-1].content)


@pytest.fixture
def settings():
    return RelaySettings(
        monzo_account_id="acc_123",
        ynab_account_id="ynab_acc",
        ynab_api_key="secret-key",
        ynab_base_url="https://api.youneedabudget.com/v1/budgets/%s/transactions",
        ynab_budget_id="budget_1",
    )


@pytest.fixture
def reporter():
    return RecordingReporter()


@pytest.fixture
def fake_ynab():
    return FakeYnab()


@pytest.fixture
def relay(settings, reporter, fake_ynab):
    client = YnabClient.from_settings(settings, transport=httpx.MockTransport(fake_ynab))
    return TransactionRelay(settings, reporter, client)


def webhook_body(**data):
    payload = {
        "account_id": "acc_123",
        "amount": 150,
        "created": "2020-01-01T00:00:00Z",
        "description": "Coffee Shop",
        "id": "tx_1",
    }
    payload.update(data)
    return json.dumps({"type": "transaction.created", "data": payload})


@pytest.fixture
def make_body():
    return webhook_body
