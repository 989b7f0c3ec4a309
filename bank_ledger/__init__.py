"""
Bank Ledger

A small in-memory bank account ledger: create accounts, deposit, withdraw
and transfer. Balances are exact integer minor units and never go negative;
transfers are atomic.
"""

from .accounts import Account, AccountState
from .currency import Currency, Money, format_minor_units, parse_amount
from .errors import (
    LedgerError, AccountNotFound, DuplicateAccount, InvalidAmount,
    InsufficientFunds, SameAccount, AmountOverflow, InvalidHolder,
    InvalidAccountId, AccountClosed, ClosureNotAllowed, NonZeroBalance
)
from .ledger import Ledger
from .outcome import Outcome, attempt

__version__ = "1.0.0"

__all__ = [
    "Account", "AccountState", "Currency", "Money", "format_minor_units",
    "parse_amount", "LedgerError", "AccountNotFound", "DuplicateAccount",
    "InvalidAmount", "InsufficientFunds", "SameAccount", "AmountOverflow",
    "InvalidHolder", "InvalidAccountId", "AccountClosed", "ClosureNotAllowed",
    "NonZeroBalance", "Ledger", "Outcome", "attempt",
]
