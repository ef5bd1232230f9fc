# transaction_relay/relay.py
import logging
from dataclasses import dataclass
from typing import Optional

from pydantic import ValidationError
from pydantic_core import PydanticSerializationError

from .config import RelaySettings
from .errors import AccountMismatchError, InvalidPayloadError, PayloadSerializationError, RelayError
from .mapping import build_ynab_envelope
from .reporting import ErrorReporter
from .schemas import MonzoWebhook
from .ynab_client import YnabClient

logger = logging.getLogger(__name__)


@dataclass
class RelayResponse:
    status_code: int
    body: str = ""
    error: Optional[Exception] = None


class TransactionRelay:
    def __init__(self, settings: RelaySettings, reporter: ErrorReporter, client: YnabClient):
        self.settings = settings
        self.reporter = reporter
        self.client = client

    def handle(self, body) -> RelayResponse:
        """
        Relay one Monzo webhook body to YNAB.
        Never raises: every failure is reported and returned as a 500.
        """
        if isinstance(body, bytes):
            body = body.decode("utf-8", errors="replace")
        try:
            return self._relay(body)
        except RelayError as e:
            logger.warning("relay_failed", extra={"error_type": type(e).__name__, "error": str(e)})
            self.reporter.report(e, {"request": body})
            return RelayResponse(status_code=e.status_code, body=e.response_body, error=e)

    def _relay(self, body: str) -> RelayResponse:
        logger.info("request_body", extra={"body": body})
        try:
            webhook = MonzoWebhook.model_validate_json(body)
        except ValidationError as e:
            raise InvalidPayloadError(f"Could not decode Monzo webhook: {e}") from e

        data = webhook.data
        logger.info("monzo_transaction", extra={"event_type": webhook.type, "transaction_id": data.id})

        if data.account_id != self.settings.monzo_account_id:
            raise AccountMismatchError(data.account_id)
        logger.info("account_matched", extra={"account_id": data.account_id})

        envelope = build_ynab_envelope(data, self.settings.ynab_account_id)
        logger.info("ynab_transaction", extra={"transaction": envelope.transaction.model_dump()})

        try:
            payload = envelope.model_dump_json().encode("utf-8")
        except (PydanticSerializationError, ValueError, TypeError) as e:
            raise PayloadSerializationError(f"Could not encode YNAB transaction: {e}") from e

        response = self.client.post_transaction(payload)
        post = f"POST status: {response.status_line} - {response.body}"
        logger.info(post)
        return RelayResponse(status_code=200, body=post)
