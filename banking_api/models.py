
import enum
import threading
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import NamedTuple, Optional, Tuple

class TransactionKind(str, enum.Enum):
    DEPOSIT = "deposit"
    WITHDRAW = "withdraw"
    TRANSFER_OUT = "transfer-out"
    TRANSFER_IN = "transfer-in"

    @property
    def is_credit(self) -> bool:
        return self in (TransactionKind.DEPOSIT, TransactionKind.TRANSFER_IN)

@dataclass(frozen=True)
class Transaction:
    """
    An immutable record of one balance-affecting event.
    Amounts are always positive; the direction is carried by `kind`.
    """
    timestamp: datetime
    amount: Decimal
    kind: TransactionKind
    counterparty_id: Optional[str] = None

    @property
    def signed_amount(self) -> Decimal:
        return self.amount if self.kind.is_credit else -self.amount

@dataclass(frozen=True)
class AccountSnapshot:
    """
    Read-only view of an account handed out by the ledger.
    """
    id: str
    name: str
    balance: Decimal
    transactions: Tuple[Transaction, ...] = ()

class AccountState(NamedTuple):
    balance: Decimal
    transactions: Tuple[Transaction, ...]

@dataclass
class Account:
    """
    Mutable account record owned by the ledger.
    The balance and the transaction log are only ever replaced together,
    while `lock` is held: `stage` computes the next state, `apply` swaps it in.
    """
    id: str
    name: str
    balance: Decimal
    transactions: Tuple[Transaction, ...] = ()
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def snapshot(self) -> AccountSnapshot:
        return AccountSnapshot(
            id=self.id,
            name=self.name,
            balance=self.balance,
            transactions=self.transactions
        )

    def stage(self, balance: Decimal, *entries: Transaction) -> AccountState:
        """
        Builds the account's next state without touching the record.
        """
        return AccountState(balance=balance, transactions=self.transactions + entries)

    def apply(self, state: AccountState) -> None:
        # Caller holds self.lock.
        self.balance, self.transactions = state
