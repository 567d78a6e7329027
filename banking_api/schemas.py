
from decimal import Decimal
from typing import Any, List, Optional
from datetime import datetime
from pydantic import AliasChoices, BaseModel, Field

from banking_api.models import TransactionKind

# Account Schemas
class AccountCreate(BaseModel):
    """
    Schema for creating a new account.
    Amounts are passed through untouched; the ledger validates them.
    """
    name: str
    initial_balance: Any = Field(default=0, validation_alias=AliasChoices("initialBalance", "initial_balance"))

# Transaction Schemas
class TransactionResponse(BaseModel):
    """
    A single entry in an account's transaction log.
    """
    timestamp: datetime
    amount: Decimal
    kind: TransactionKind
    counterparty_id: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("counterparty_id", "counterpartyId"),
        serialization_alias="counterpartyId"
    )

    class Config:
        from_attributes = True

class AccountResponse(BaseModel):
    """
    Account detail including current balance and transaction log.
    """
    id: str
    name: str
    balance: Decimal
    transactions: List[TransactionResponse] = []

    class Config:
        from_attributes = True

# Operation Schemas
class DepositRequest(BaseModel):
    account_id: str = Field(..., validation_alias=AliasChoices("accountId", "account_id"))
    amount: Any = Field(..., validation_alias=AliasChoices("depositAmount", "amount"))

class WithdrawRequest(BaseModel):
    account_id: str = Field(..., validation_alias=AliasChoices("accountId", "account_id"))
    amount: Any = Field(..., validation_alias=AliasChoices("withdrawalAmount", "amount"))

class TransferRequest(BaseModel):
    from_account_id: str = Field(..., validation_alias=AliasChoices("fromAccountId", "from_account_id"))
    to_account_id: str = Field(..., validation_alias=AliasChoices("toAccountId", "to_account_id"))
    amount: Any = Field(..., validation_alias=AliasChoices("transferAmount", "amount"))

class MessageResponse(BaseModel):
    message: str
