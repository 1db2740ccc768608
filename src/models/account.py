"""Account models as returned by the upstream ledger."""

from pydantic import BaseModel, ConfigDict, StrictBool, StrictInt, StrictStr


class Account(BaseModel):
    """
    Snapshot of one ledger account.

    The balance stays in minor units; accounts are passed through to the
    client unchanged.
    """
    model_config = ConfigDict(frozen=True)

    id: StrictStr
    name: StrictStr
    type: StrictStr
    balance: StrictInt
    offbudget: StrictBool
    closed: StrictBool


class AccountsResponse(BaseModel):
    accounts: list[Account]
