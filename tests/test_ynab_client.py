import httpx
import pytest

from transaction_relay.errors import DownstreamTransportError
from transaction_relay.ynab_client import YnabClient, YnabResponse, format_budget_url


@pytest.mark.parametrize("template", [
    "https://api.youneedabudget.com/v1/budgets/%s/transactions",
    "https://api.youneedabudget.com/v1/budgets/{}/transactions",
    "https://api.youneedabudget.com/v1/budgets/{budget_id}/transactions",
])
def test_format_budget_url(template):
    assert format_budget_url(template, "b1") == "https://api.youneedabudget.com/v1/budgets/b1/transactions"


def test_post_transaction_returns_status_and_body():
    def handler(request):
        assert request.content == b'{"transaction": {}}'
        return httpx.Response(201, text='{"data": {}}')

    client = YnabClient("https://ynab.test/budgets/%s/transactions", "b1", "key",
                        transport=httpx.MockTransport(handler))
    response = client.post_transaction(b'{"transaction": {}}')

    assert response == YnabResponse(201, "Created", '{"data": {}}')
    assert response.status_line == "201 Created"


def test_timeout_is_configured():
    client = YnabClient("https://ynab.test/%s", "b1", "key", timeout=5.0)
    assert client._client.timeout == httpx.Timeout(5.0)
    client.close()


def test_timeout_raises_transport_error():
    def handler(request):
        raise httpx.ConnectTimeout("slow", request=request)

    client = YnabClient("https://ynab.test/%s", "b1", "key", transport=httpx.MockTransport(handler))
    with pytest.raises(DownstreamTransportError):
        client.post_transaction(b"{}")


def test_undecodable_body_raises_transport_error():
    def handler(request):
        return httpx.Response(200, headers={"Content-Encoding": "gzip"}, content=b"not gzip")

    client = YnabClient("https://ynab.test/%s", "b1", "key", transport=httpx.MockTransport(handler))
    with pytest.raises(DownstreamTransportError):
        client.post_transaction(b"{}")
