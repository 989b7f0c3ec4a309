"""
Ledger Error Taxonomy

Domain-specific, recoverable errors raised by ledger operations. Each error
carries a stable ``code`` so callers (and ``Outcome``) can tell the kinds
apart without matching on message text.
"""

from typing import Any, Optional


class LedgerError(Exception):
    """Base class for all recoverable ledger errors"""

    code = "ledger_error"

    def __init__(self, message: str, account_id: Any = None, amount: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.account_id = account_id
        self.amount = amount

    def to_dict(self) -> dict:
        """Structured form used in log records"""
        result = {"code": self.code, "message": self.message}
        if self.account_id is not None:
            result["account_id"] = self.account_id
        if self.amount is not None:
            result["amount"] = self.amount
        return result


class AccountNotFound(LedgerError):
    """Raised when an account id is missing from the ledger"""

    code = "account_not_found"

    def __init__(self, account_id: Any):
        super().__init__(f"Account {account_id!r} not found", account_id=account_id)


class DuplicateAccount(LedgerError):
    """Raised when creating an account whose id is already taken"""

    code = "duplicate_account"

    def __init__(self, account_id: Any):
        super().__init__(f"Account {account_id!r} already exists", account_id=account_id)


class InvalidAmount(LedgerError):
    """Raised when an amount is zero, negative or not an integer count of minor units"""

    code = "invalid_amount"

    def __init__(self, amount: Any, reason: str = "Amount must be a positive integer of minor units"):
        super().__init__(f"{reason}: {amount!r}")
        # Keep the raw value for reporting even when it is not an int
        self.amount = amount


class InsufficientFunds(LedgerError):
    """Raised when a withdrawal or transfer would drop the balance below zero"""

    code = "insufficient_funds"

    def __init__(self, account_id: Any, amount: int, balance: int):
        super().__init__(
            f"Insufficient funds in account {account_id!r}: balance {balance}, requested {amount}",
            account_id=account_id,
            amount=amount,
        )
        self.balance = balance


class SameAccount(LedgerError):
    """Raised when a transfer names the same account on both sides"""

    code = "same_account"

    def __init__(self, account_id: Any):
        super().__init__(f"Cannot transfer from account {account_id!r} to itself", account_id=account_id)


class AmountOverflow(LedgerError):
    """Raised when a credit would push a balance past the configured maximum"""

    code = "amount_overflow"

    def __init__(self, account_id: Any, amount: int, max_balance: int):
        super().__init__(
            f"Crediting {amount} to account {account_id!r} would exceed maximum balance {max_balance}",
            account_id=account_id,
            amount=amount,
        )
        self.max_balance = max_balance


class InvalidHolder(LedgerError):
    """Raised when the account holder name is empty"""

    code = "invalid_holder"

    def __init__(self, holder_name: Any):
        super().__init__(f"Holder name must be non-empty text: {holder_name!r}")


class InvalidAccountId(LedgerError):
    """Raised when an account id is missing, malformed or not allowed by the id policy"""

    code = "invalid_account_id"

    def __init__(self, account_id: Any, reason: str):
        super().__init__(f"{reason}: {account_id!r}", account_id=account_id)


class AccountClosed(LedgerError):
    """Raised when an operation targets a closed account"""

    code = "account_closed"

    def __init__(self, account_id: Any):
        super().__init__(f"Account {account_id!r} is closed", account_id=account_id)


class ClosureNotAllowed(LedgerError):
    """Raised when account closure is disabled by configuration"""

    code = "closure_not_allowed"

    def __init__(self, account_id: Any):
        super().__init__(f"Closing accounts is disabled; cannot close {account_id!r}", account_id=account_id)


class NonZeroBalance(LedgerError):
    """Raised when closing an account that still holds funds"""

    code = "non_zero_balance"

    def __init__(self, account_id: Any, balance: int):
        super().__init__(
            f"Cannot close account {account_id!r} with non-zero balance {balance}",
            account_id=account_id,
            amount=balance,
        )
        self.balance = balance
