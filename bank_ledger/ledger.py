"""
Account Ledger Engine

Owns the set of accounts and applies deposits, withdrawals and transfers.
Balances are integer minor units and never go negative. Every operation
either applies completely or leaves the ledger untouched: all checks run
before the first mutation.

Thread safety: a registry lock guards the account map and each account has
its own lock. Operations touching several accounts take their locks in a
fixed canonical order, so two transfers between the same pair of accounts
in opposite directions cannot deadlock.
"""

from contextlib import contextmanager, ExitStack
from datetime import datetime, timezone
from typing import Dict, Iterator, List, Optional, Tuple
import threading

from .accounts import Account, AccountId, AccountState
from .config import LedgerConfig, get_config
from .currency import Currency, format_minor_units
from .errors import (
    LedgerError, AccountNotFound, DuplicateAccount, InvalidAmount,
    InsufficientFunds, SameAccount, AmountOverflow, InvalidHolder,
    InvalidAccountId, AccountClosed, ClosureNotAllowed, NonZeroBalance
)
from .logging_config import get_logger, log_action


def _lock_order_key(account_id: AccountId) -> Tuple[int, int, str]:
    """Total order over mixed int/str ids used for lock acquisition"""
    # ints sort numerically before all strs
    if isinstance(account_id, int):
        return (0, account_id, "")
    return (1, 0, account_id)


class Ledger:
    """
    In-memory ledger of bank accounts.

    Callers construct and own an instance; there is no module-level ledger.
    """

    def __init__(self, config: Optional[LedgerConfig] = None, currency: Optional[Currency] = None):
        self.config = config or get_config()
        self.currency = currency or self.config.currency
        self.max_balance = self.config.max_balance
        self._accounts: Dict[AccountId, Account] = {}
        self._locks: Dict[AccountId, threading.Lock] = {}
        self._registry_lock = threading.RLock()
        self._next_id = self.config.sequential_id_start
        self.logger = get_logger("bank_ledger.ledger")

    # ------------------------------------------------------------------
    # Account management
    # ------------------------------------------------------------------
    def create_account(self, account_id: Optional[AccountId], holder_name: str) -> Account:
        """
        Create a new account with a zero balance

        Args:
            account_id: Caller-supplied id, or None to generate the next sequential id
            holder_name: Account holder name (non-empty)

        Returns:
            Snapshot of the created Account

        Raises:
            DuplicateAccount: If the id is already taken
            InvalidHolder: If the holder name is empty
            InvalidAccountId: If the id is malformed or not allowed by the id policy
        """
        if not isinstance(holder_name, str) or not holder_name.strip():
            raise self._rejected("create_account", InvalidHolder(holder_name))

        policy = self.config.id_policy
        if account_id is None and policy == "caller":
            raise self._rejected("create_account", InvalidAccountId(account_id, "An account id is required"))
        if account_id is not None:
            if policy == "sequential":
                raise self._rejected(
                    "create_account",
                    InvalidAccountId(account_id, "Account ids are generated by the ledger")
                )
            self._validate_account_id(account_id)

        with self._registry_lock:
            if account_id is None:
                account_id = self._generate_id()
            elif account_id in self._accounts:
                raise self._rejected("create_account", DuplicateAccount(account_id))

            now = datetime.now(timezone.utc)
            account = Account(
                id=account_id,
                holder=holder_name.strip(),
                balance=0,
                currency=self.currency,
                created_at=now,
                updated_at=now,
            )
            self._accounts[account_id] = account
            self._locks[account_id] = threading.Lock()
            snapshot = account.snapshot()

        log_action(
            self.logger, "info", f"Account {account_id} created",
            action="create_account", resource=f"account:{account_id}",
            extra={"holder": snapshot.holder, "currency": self.currency.code}
        )
        return snapshot

    def open_account(self, holder_name: str) -> Account:
        """Create an account with a ledger-generated id"""
        return self.create_account(None, holder_name)

    def close_account(self, account_id: AccountId) -> Account:
        """Close an account with a zero balance; its id is never reused"""
        if not self.config.allow_account_closure:
            raise self._rejected("close_account", ClosureNotAllowed(account_id))

        account, lock = self._lookup(account_id, "close_account")
        with lock:
            if account.is_closed:
                raise self._rejected("close_account", AccountClosed(account_id))
            if account.balance != 0:
                raise self._rejected("close_account", NonZeroBalance(account_id, account.balance))
            account.state = AccountState.CLOSED
            account.updated_at = datetime.now(timezone.utc)
            snapshot = account.snapshot()

        log_action(
            self.logger, "info", f"Account {account_id} closed",
            action="close_account", resource=f"account:{account_id}"
        )
        return snapshot

    # ------------------------------------------------------------------
    # Balance operations
    # ------------------------------------------------------------------
    def deposit(self, account_id: AccountId, amount: int) -> int:
        """
        Credit an account

        Returns:
            New balance in minor units
        """
        self._validate_amount(amount, "deposit")
        account, lock = self._lookup(account_id, "deposit")
        with lock:
            self._ensure_active(account, "deposit")
            self._ensure_capacity(account, amount, "deposit")
            account.balance += amount
            account.updated_at = datetime.now(timezone.utc)
            new_balance = account.balance

        log_action(
            self.logger, "info", f"Deposited {amount} into account {account_id}",
            action="deposit", resource=f"account:{account_id}",
            extra={"amount": amount, "balance": new_balance}
        )
        return new_balance

    def withdraw(self, account_id: AccountId, amount: int) -> int:
        """
        Debit an account; the balance never goes negative

        Returns:
            New balance in minor units
        """
        self._validate_amount(amount, "withdraw")
        account, lock = self._lookup(account_id, "withdraw")
        with lock:
            self._ensure_active(account, "withdraw")
            self._ensure_funds(account, amount, "withdraw")
            account.balance -= amount
            account.updated_at = datetime.now(timezone.utc)
            new_balance = account.balance

        log_action(
            self.logger, "info", f"Withdrew {amount} from account {account_id}",
            action="withdraw", resource=f"account:{account_id}",
            extra={"amount": amount, "balance": new_balance}
        )
        return new_balance

    def transfer(self, from_id: AccountId, to_id: AccountId, amount: int) -> Tuple[int, int]:
        """
        Move funds between two accounts atomically

        Both legs are validated while holding both account locks, then
        applied together. No other operation can observe one leg without
        the other.

        Returns:
            (source balance, destination balance) after the transfer
        """
        self._validate_amount(amount, "transfer")
        source, _ = self._lookup(from_id, "transfer")
        target, _ = self._lookup(to_id, "transfer")
        if from_id == to_id:
            raise self._rejected("transfer", SameAccount(from_id))

        with self._locked(from_id, to_id):
            self._ensure_active(source, "transfer")
            self._ensure_active(target, "transfer")
            self._ensure_funds(source, amount, "transfer")
            self._ensure_capacity(target, amount, "transfer")

            now = datetime.now(timezone.utc)
            source.balance -= amount
            target.balance += amount
            source.updated_at = now
            target.updated_at = now
            balances = (source.balance, target.balance)

        log_action(
            self.logger, "info", f"Transferred {amount} from account {from_id} to account {to_id}",
            action="transfer", resource=f"account:{from_id}",
            extra={"amount": amount, "to": to_id, "from_balance": balances[0], "to_balance": balances[1]}
        )
        return balances

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def get_account(self, account_id: AccountId) -> Account:
        """Snapshot of one account"""
        account, lock = self._lookup(account_id)
        with lock:
            return account.snapshot()

    def get_balance(self, account_id: AccountId) -> int:
        account, lock = self._lookup(account_id)
        with lock:
            return account.balance

    def has_account(self, account_id: AccountId) -> bool:
        with self._registry_lock:
            return account_id in self._accounts

    def accounts(self) -> List[Account]:
        """Consistent snapshot of every account, in creation order"""
        with self._registry_lock:
            ids = list(self._accounts)
        with self._locked(*ids):
            return [self._accounts[account_id].snapshot() for account_id in ids]

    def total_balance(self) -> int:
        """Sum of all balances in minor units"""
        return sum(account.balance for account in self.accounts())

    def summary(self) -> str:
        """One line per account"""
        return "\n".join(account.summary() for account in self.accounts())

    def __len__(self) -> int:
        with self._registry_lock:
            return len(self._accounts)

    def __contains__(self, account_id) -> bool:
        return self.has_account(account_id)

    def __str__(self) -> str:
        return f"Bank total balance: {format_minor_units(self.total_balance(), self.currency)}"

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _rejected(self, action: str, error: LedgerError) -> LedgerError:
        """Log a rejected operation and hand the error back for raising"""
        log_action(
            self.logger, "warning", f"{action} rejected: {error.message}",
            action=action, extra=error.to_dict()
        )
        return error

    def _lookup(self, account_id: AccountId, action: str = "lookup") -> Tuple[Account, threading.Lock]:
        with self._registry_lock:
            try:
                return self._accounts[account_id], self._locks[account_id]
            except (KeyError, TypeError):
                raise self._rejected(action, AccountNotFound(account_id)) from None

    @contextmanager
    def _locked(self, *account_ids: AccountId) -> Iterator[None]:
        """Hold the locks of the given accounts, acquired in canonical order"""
        with self._registry_lock:
            locks = [
                self._locks[account_id]
                for account_id in sorted(set(account_ids), key=_lock_order_key)
            ]
        with ExitStack() as stack:
            for lock in locks:
                stack.enter_context(lock)
            yield

    def _generate_id(self) -> int:
        # Caller-supplied ints may already occupy the next slot
        while self._next_id in self._accounts:
            self._next_id += 1
        account_id = self._next_id
        self._next_id += 1
        return account_id

    def _validate_account_id(self, account_id: AccountId) -> None:
        if isinstance(account_id, bool) or not isinstance(account_id, (int, str)):
            raise self._rejected(
                "create_account", InvalidAccountId(account_id, "Account id must be an int or str")
            )
        if isinstance(account_id, str) and not account_id.strip():
            raise self._rejected(
                "create_account", InvalidAccountId(account_id, "Account id must be non-empty")
            )

    def _validate_amount(self, amount: int, action: str) -> None:
        if isinstance(amount, bool) or not isinstance(amount, int):
            raise self._rejected(
                action, InvalidAmount(amount, "Amount must be an integer count of minor units")
            )
        if amount <= 0:
            raise self._rejected(action, InvalidAmount(amount, "Amount must be positive"))

    def _ensure_active(self, account: Account, action: str) -> None:
        if account.is_closed:
            raise self._rejected(action, AccountClosed(account.id))

    def _ensure_funds(self, account: Account, amount: int, action: str) -> None:
        if amount > account.balance:
            raise self._rejected(action, InsufficientFunds(account.id, amount, account.balance))

    def _ensure_capacity(self, account: Account, amount: int, action: str) -> None:
        if account.balance + amount > self.max_balance:
            raise self._rejected(action, AmountOverflow(account.id, amount, self.max_balance))
