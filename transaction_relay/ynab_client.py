# transaction_relay/ynab_client.py
import logging
from dataclasses import dataclass

import httpx

from .errors import DownstreamTransportError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class YnabResponse:
    status_code: int
    reason_phrase: str
    body: str

    @property
    def status_line(self) -> str:
        return f"{self.status_code} {self.reason_phrase}".strip()


def format_budget_url(template: str, budget_id: str) -> str:
    if "%s" in template:
        return template % budget_id
    return template.format(budget_id, budget_id=budget_id)


class YnabClient:
    """
    Posts transaction envelopes to the YNAB API. One attempt per call,
    transport, decoding and timeout failures become DownstreamTransportError.
    """

    def __init__(self, base_url_template: str, budget_id: str, api_key: str,
                 timeout: float = 5.0, transport: httpx.BaseTransport = None):
        self.url = format_budget_url(base_url_template, budget_id)
        self._client = httpx.Client(
            timeout=timeout,
            transport=transport,
            headers={
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
            },
        )

    @classmethod
    def from_settings(cls, settings, transport: httpx.BaseTransport = None) -> "YnabClient":
        return cls(
            settings.ynab_base_url,
            settings.ynab_budget_id,
            settings.ynab_api_key,
            timeout=settings.ynab_timeout_seconds,
            transport=transport,
        )

    def post_transaction(self, payload: bytes) -> YnabResponse:
        logger.info("ynab_post", extra={"url": self.url})
        try:
            response = self._client.post(self.url, content=payload)
            body = response.text
        except httpx.TimeoutException as e:
            raise DownstreamTransportError(f"YNAB request timed out: {e}") from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise DownstreamTransportError(f"YNAB request failed: {e}") from e
        return YnabResponse(response.status_code, response.reason_phrase, body)

    def close(self) -> None:
        self._client.close()
