"""
Account Module

The account record held by the ledger: holder, integer balance in minor
units, currency and lifecycle state.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Union

from .currency import Currency, Money, format_minor_units


AccountId = Union[int, str]


class AccountState(Enum):
    """Account lifecycle states"""
    ACTIVE = "active"      # Normal operation
    CLOSED = "closed"      # Permanently closed, id never reused


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Account:
    """
    Bank account owned by a Ledger.

    Instances handed out by the ledger are snapshots; mutating them does not
    change the ledger.
    """
    id: AccountId
    holder: str
    balance: int = 0
    currency: Currency = Currency.USD
    state: AccountState = AccountState.ACTIVE
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    @property
    def is_active(self) -> bool:
        return self.state == AccountState.ACTIVE

    @property
    def is_closed(self) -> bool:
        return self.state == AccountState.CLOSED

    @property
    def money(self) -> Money:
        """Balance as a Money value"""
        return Money(self.balance, self.currency)

    def snapshot(self) -> 'Account':
        """Detached copy safe to return to callers"""
        return replace(self)

    def summary(self) -> str:
        return (
            f"Account {self.id} ({self.holder}) has a balance of "
            f"{format_minor_units(self.balance, self.currency)}"
        )

    def __str__(self) -> str:
        return self.summary()

    def to_dict(self) -> dict:
        """Convert to a plain dictionary"""
        return {
            "id": self.id,
            "holder": self.holder,
            "balance": self.balance,
            "currency": self.currency.code,
            "state": self.state.value,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }
