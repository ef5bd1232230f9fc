# transaction_relay/mapping.py
from .errors import MissingPayeeError
from .schemas import MonzoTransactionData, YnabTransaction, YnabTransactionEnvelope

# Monzo minor units -> YNAB milliunits
AMOUNT_MULTIPLIER = 10

CLEARED = "cleared"


def resolve_payee(data: MonzoTransactionData) -> str:
    """
    First non-empty of merchant name, counterparty name, description.
    Raises MissingPayeeError when all three are empty.
    """
    for candidate in (data.merchant_name, data.counterparty_name, data.description):
        if candidate:
            return candidate
    raise MissingPayeeError()


def scale_amount(amount):
    return amount * AMOUNT_MULTIPLIER


def build_ynab_envelope(data: MonzoTransactionData, ynab_account_id: str) -> YnabTransactionEnvelope:
    transaction = YnabTransaction(
        account_id=ynab_account_id,
        date=data.created,
        amount=scale_amount(data.amount),
        payee_name=resolve_payee(data),
        cleared=CLEARED,
        import_id=data.id,
    )
    return YnabTransactionEnvelope(transaction=transaction)
