# transaction_relay/schemas.py
import math

from pydantic import BaseModel, BeforeValidator, Field, field_serializer, field_validator
from typing import Annotated, Optional, Union


def _null_as_empty(value):
    # JSON null leaves the zero value in place, like an absent field
    return "" if value is None else value


def _null_as_zero(value):
    return 0 if value is None else value


NullableStr = Annotated[str, BeforeValidator(_null_as_empty)]
NullableAmount = Annotated[Union[int, float], BeforeValidator(_null_as_zero)]


class NamedParty(BaseModel):
    name: NullableStr = ""


class MonzoTransactionData(BaseModel):
    account_id: NullableStr = ""
    amount: NullableAmount = 0
    created: NullableStr = ""
    description: NullableStr = ""
    counterparty: Optional[NamedParty] = None
    id: NullableStr = ""
    merchant: Optional[NamedParty] = None

    @field_validator("merchant", mode="before")
    @classmethod
    def drop_unexpanded_merchant(cls, value):
        # unexpanded merchants arrive as a bare id string, which has no name
        if isinstance(value, str):
            return None
        return value

    @property
    def merchant_name(self) -> str:
        return self.merchant.name if self.merchant else ""

    @property
    def counterparty_name(self) -> str:
        return self.counterparty.name if self.counterparty else ""


class MonzoWebhook(BaseModel):
    type: NullableStr = ""
    data: MonzoTransactionData = Field(default_factory=MonzoTransactionData)


class YnabTransaction(BaseModel):
    account_id: str
    date: str
    amount: Union[int, float]
    payee_name: str
    cleared: str = "cleared"
    import_id: str

    @field_serializer("amount", when_used="json")
    def finite_amount(self, amount):
        if isinstance(amount, float) and not math.isfinite(amount):
            raise ValueError(f"amount {amount} cannot be encoded as JSON")
        return amount


class YnabTransactionEnvelope(BaseModel):
    transaction: YnabTransaction
