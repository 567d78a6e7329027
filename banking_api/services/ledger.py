import logging
import threading
import uuid
from contextlib import ExitStack
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Dict, Tuple

from banking_api.exceptions import AccountNotFoundError, InsufficientFundsError, InvalidArgumentError
from banking_api.models import Account, AccountSnapshot, Transaction, TransactionKind

# Setup Logger
logger = logging.getLogger(__name__)

# Amounts and balances fit Numeric(precision=20, scale=4), so every sum stays
# exact in the default 28-digit decimal context.
AMOUNT_SCALE = 4
MAX_AMOUNT = Decimal("9999999999999999.9999")
_QUANTUM = Decimal(1).scaleb(-AMOUNT_SCALE)

def to_amount(value, field_name: str = "Amount") -> Decimal:
    """
    Coerces a caller-supplied amount to a finite Decimal.
    Floats go through str() so 0.1 stays 0.1. Values beyond MAX_AMOUNT or with
    more than AMOUNT_SCALE decimal places are rejected.
    """
    if isinstance(value, bool) or value is None:
        raise InvalidArgumentError(f"{field_name} must be a number")
    if isinstance(value, float):
        value = str(value)
    try:
        amount = Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        raise InvalidArgumentError(f"{field_name} must be a number")
    if not amount.is_finite():
        raise InvalidArgumentError(f"{field_name} must be a finite number")
    if abs(amount) > MAX_AMOUNT:
        raise InvalidArgumentError(f"{field_name} is out of range")
    if amount != amount.quantize(_QUANTUM):
        raise InvalidArgumentError(f"{field_name} must have at most {AMOUNT_SCALE} decimal places")
    return amount

def _credited(balance: Decimal, amount: Decimal) -> Decimal:
    new_balance = balance + amount
    if new_balance > MAX_AMOUNT:
        raise InvalidArgumentError("Resulting balance is out of range")
    return new_balance

class Ledger:
    """
    In-memory ledger owning every account, its balance and its transaction log.

    Each account has its own lock; an operation holds the lock of every account
    it touches for the whole validate-then-commit sequence. Transfers take both
    locks in ascending id order so opposing transfers cannot deadlock.
    """

    def __init__(self):
        self._accounts: Dict[str, Account] = {}
        self._registry_lock = threading.Lock()

    def _new_id(self) -> str:
        return str(uuid.uuid4())

    def _now(self) -> datetime:
        return datetime.now(timezone.utc)

    def _lookup(self, account_id: str) -> Account:
        with self._registry_lock:
            account = self._accounts.get(account_id)
        if account is None:
            logger.warning(f"Account lookup failed: {account_id}")
            raise AccountNotFoundError(account_id)
        return account

    def _positive_amount(self, amount, message: str) -> Decimal:
        value = to_amount(amount)
        if value <= 0:
            raise InvalidArgumentError(message)
        return value

    def create_account(self, name: str, initial_balance=0) -> AccountSnapshot:
        """
        Creates a new account with an empty transaction log.
        The initial balance is not recorded as a transaction.
        """
        if not isinstance(name, str) or not name.strip():
            raise InvalidArgumentError("Account name is required")
        balance = to_amount(initial_balance, "Initial balance")
        if balance < 0:
            raise InvalidArgumentError("Initial balance cannot be negative")

        with self._registry_lock:
            account_id = self._new_id()
            while account_id in self._accounts:
                account_id = self._new_id()
            account = Account(id=account_id, name=name, balance=balance)
            self._accounts[account_id] = account

        logger.info(f"Created account: {name} (ID: {account_id})")
        return account.snapshot()

    def get_account(self, account_id: str) -> AccountSnapshot:
        """
        Returns a consistent snapshot of an account.
        Raises AccountNotFoundError if the account does not exist.
        """
        account = self._lookup(account_id)
        with account.lock:
            snapshot = account.snapshot()
        logger.debug(f"Retrieved account {account_id}: balance {snapshot.balance}")
        return snapshot

    def deposit(self, account_id: str, amount) -> None:
        account = self._lookup(account_id)
        value = self._positive_amount(amount, "Deposit Amount must be positive")

        with account.lock:
            entry = Transaction(timestamp=self._now(), amount=value, kind=TransactionKind.DEPOSIT)
            state = account.stage(_credited(account.balance, value), entry)
            account.apply(state)
            balance = state.balance

        logger.info(f"Deposit successful: {value} to {account_id} (balance: {balance})")

    def withdraw(self, account_id: str, amount) -> None:
        account = self._lookup(account_id)
        value = self._positive_amount(amount, "Withdrawal Amount must be positive")

        with account.lock:
            if account.balance < value:
                logger.warning(f"Withdrawal rejected: {value} from {account_id} exceeds balance {account.balance}")
                raise InsufficientFundsError()
            entry = Transaction(timestamp=self._now(), amount=value, kind=TransactionKind.WITHDRAW)
            state = account.stage(account.balance - value, entry)
            account.apply(state)
            balance = state.balance

        logger.info(f"Withdrawal successful: {value} from {account_id} (balance: {balance})")

    def transfer(self, from_account_id: str, to_account_id: str, amount) -> None:
        """
        Moves funds between two distinct accounts as a single atomic unit.
        Both accounts are resolved before anything is locked or changed.
        """
        source = self._lookup(from_account_id)
        destination = self._lookup(to_account_id)
        value = self._positive_amount(amount, "Transfer Amount must be positive")
        if source.id == destination.id:
            raise InvalidArgumentError("Cannot transfer to the same account")

        with ExitStack() as stack:
            for account in sorted((source, destination), key=lambda a: a.id):
                stack.enter_context(account.lock)

            if source.balance < value:
                logger.warning(
                    f"Transfer rejected: {value} from {source.id} exceeds balance {source.balance}"
                )
                raise InsufficientFundsError()

            timestamp = self._now()
            debit = Transaction(
                timestamp=timestamp,
                amount=value,
                kind=TransactionKind.TRANSFER_OUT,
                counterparty_id=destination.id
            )
            credit = Transaction(
                timestamp=timestamp,
                amount=value,
                kind=TransactionKind.TRANSFER_IN,
                counterparty_id=source.id
            )
            # Both sides are staged before either account changes.
            source_state = source.stage(source.balance - value, debit)
            destination_state = destination.stage(_credited(destination.balance, value), credit)
            source.apply(source_state)
            destination.apply(destination_state)

        logger.info(f"Transfer successful: {value} from {source.id} to {destination.id}")

    def list_transactions(self, account_id: str) -> Tuple[Transaction, ...]:
        """
        Returns the account's transaction log in chronological order.
        The tuple is a snapshot and does not change with later operations.
        """
        account = self._lookup(account_id)
        with account.lock:
            entries = account.transactions
        logger.debug(f"Retrieved {len(entries)} transactions for {account_id}")
        return entries
