# transaction_relay/config.py
import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

from .errors import ConfigurationError
from .ynab_client import format_budget_url

# env var name -> RelaySettings attribute, for the values the relay cannot run without
REQUIRED_VARS = {
    "MONZO_ACCOUNT_ID": "monzo_account_id",
    "YNAB_ACCOUNT_ID": "ynab_account_id",
    "YNAB_API_KEY": "ynab_api_key",
    "YNAB_BASE_URL": "ynab_base_url",
    "YNAB_BUDGET_ID": "ynab_budget_id",
}

DEFAULT_TIMEOUT_SECONDS = 5.0


@dataclass(frozen=True)
class RelaySettings:
    """
    Configuration read once at startup and handed to the relay.
    ynab_base_url holds one placeholder for the budget id (%s, {} or {budget_id}).
    """
    monzo_account_id: str = ""
    ynab_account_id: str = ""
    ynab_api_key: str = ""
    ynab_base_url: str = ""
    ynab_budget_id: str = ""
    ynab_timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    sentry_dsn: str = ""
    sentry_environment: str = "production"
    log_level: str = "INFO"
    service_name: str = "transaction-relay"

    def missing_variables(self) -> list[str]:
        return [env for env, attr in REQUIRED_VARS.items() if not getattr(self, attr)]

    def invalid_variables(self) -> list[str]:
        invalid = []
        if self.ynab_base_url:
            try:
                format_budget_url(self.ynab_base_url, self.ynab_budget_id)
            except (ValueError, TypeError, KeyError, IndexError):
                invalid.append("YNAB_BASE_URL")
        if not self.ynab_timeout_seconds > 0:
            invalid.append("YNAB_TIMEOUT_SECONDS")
        return invalid

    def require_valid(self) -> "RelaySettings":
        problems = self.missing_variables() + self.invalid_variables()
        if problems:
            raise ConfigurationError(problems)
        return self


def _parse_timeout(raw: str) -> float:
    # unparseable values are rejected later by require_valid
    try:
        return float(raw)
    except ValueError:
        return 0.0


def load_settings(environ=None) -> RelaySettings:
    if environ is None:
        load_dotenv()
        environ = os.environ
    return RelaySettings(
        monzo_account_id=environ.get("MONZO_ACCOUNT_ID", "").strip(),
        ynab_account_id=environ.get("YNAB_ACCOUNT_ID", "").strip(),
        ynab_api_key=environ.get("YNAB_API_KEY", "").strip(),
        ynab_base_url=environ.get("YNAB_BASE_URL", "").strip(),
        ynab_budget_id=environ.get("YNAB_BUDGET_ID", "").strip(),
        ynab_timeout_seconds=_parse_timeout(environ.get("YNAB_TIMEOUT_SECONDS", str(DEFAULT_TIMEOUT_SECONDS))),
        sentry_dsn=environ.get("SENTRY_DSN", "").strip(),
        sentry_environment=environ.get("SENTRY_ENVIRONMENT", "production"),
        log_level=environ.get("LOG_LEVEL", "INFO"),
        service_name=environ.get("SERVICE_NAME", "transaction-relay"),
    )


@lru_cache(maxsize=1)
def get_settings() -> RelaySettings:
    return load_settings()
