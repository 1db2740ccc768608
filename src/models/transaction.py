"""
Transaction Models

CreateTransactionRequest is the only client-submitted payload. It is
validated completely before anything is sent upstream, and every failing
field is reported at once so the client can fix them in one go.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, StrictStr

from src.models.common import CAMEL_CASE_CONFIG

# Largest amount whose minor units the ledger still stores exactly (2**53 - 1 cents).
MAX_TRANSACTION_AMOUNT = 90_071_992_547_409.91


class CreateTransactionRequest(BaseModel):
    """A new cleared transaction, amount in major units (e.g. 12.34)."""
    model_config = CAMEL_CASE_CONFIG

    account_id: StrictStr = Field(
        ...,
        min_length=1,
        description="Account the transaction is booked on"
    )
    # Shape only: "2024-13-40" passes, calendar validity is the upstream's call.
    date: StrictStr = Field(
        ...,
        pattern=r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$",
        description="Transaction date in YYYY-MM-DD form"
    )
    description: StrictStr = Field(
        ...,
        min_length=1,
        description="Free text stored as the transaction notes"
    )
    amount: float = Field(
        ...,
        strict=True,
        allow_inf_nan=False,
        ge=-MAX_TRANSACTION_AMOUNT,
        le=MAX_TRANSACTION_AMOUNT,
        description="Signed amount in major currency units"
    )
    category_id: StrictStr = Field(
        ...,
        min_length=1,
        description="Category the transaction is assigned to"
    )


class NewTransaction(BaseModel):
    """Outbound transaction in the upstream's shape (amount in minor units)."""
    model_config = ConfigDict(frozen=True)

    account: str
    date: str
    notes: str
    amount: int
    category: str
    cleared: Literal[True] = True


class TransactionResponse(BaseModel):
    success: bool
    message: str
