# transaction_relay/errors.py
class ConfigurationError(RuntimeError):
    """Raised at startup when required environment variables are missing."""

    def __init__(self, missing):
        self.missing = list(missing)
        super().__init__(f"Could not load environmental vars: {', '.join(self.missing)}")


class RelayError(Exception):
    """
    Base for per-request failures.
    Each subclass knows the HTTP status and body the caller gets back.
    """
    status_code = 500
    response_body = ""


class InvalidPayloadError(RelayError):
    pass


class AccountMismatchError(RelayError):
    response_body = "Invalid Monzo account ID"

    def __init__(self, account_id: str):
        self.account_id = account_id
        super().__init__(self.response_body)


class MissingPayeeError(RelayError):
    response_body = "No payee data found"

    def __init__(self):
        super().__init__(self.response_body)


class PayloadSerializationError(RelayError):
    pass


class DownstreamTransportError(RelayError):
    pass
