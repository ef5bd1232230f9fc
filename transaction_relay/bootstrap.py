# transaction_relay/bootstrap.py
import logging

from .config import REQUIRED_VARS, RelaySettings, get_settings
from .errors import ConfigurationError
from .logging_config import configure_logging
from .relay import TransactionRelay
from .reporting import create_reporter
from .ynab_client import YnabClient

logger = logging.getLogger(__name__)


def validate_or_exit(settings: RelaySettings, reporter) -> RelaySettings:
    """
    Fail fast on missing configuration: report, log and stop the process.
    """
    missing = settings.missing_variables()
    logger.info("environment_vars", extra={"present": [name for name in REQUIRED_VARS if name not in missing]})
    try:
        return settings.require_valid()
    except ConfigurationError as e:
        reporter.report(e)
        logger.critical("configuration_invalid", extra={"missing": e.missing})
        raise SystemExit(1) from e


def build_relay(settings: RelaySettings = None, reporter=None, transport=None) -> TransactionRelay:
    settings = settings or get_settings()
    configure_logging(settings.log_level, settings.service_name)
    reporter = reporter or create_reporter(settings)
    settings = validate_or_exit(settings, reporter)
    client = YnabClient.from_settings(settings, transport=transport)
    return TransactionRelay(settings, reporter, client)
