"""
Currency and Money Module

Handles ISO 4217 currency codes and their minor-unit precision. Balances are
held as exact integer counts of minor units (cents, pence, yen); Decimal is
only used at the edges when converting to and from major units.
NEVER uses float for monetary values.
"""

from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from dataclasses import dataclass
from enum import Enum
from typing import Union
import re


class Currency(Enum):
    """ISO 4217 Currency Codes with precision info"""
    USD = ("USD", 2)  # US Dollar, 2 decimal places
    EUR = ("EUR", 2)  # Euro, 2 decimal places
    GBP = ("GBP", 2)  # British Pound, 2 decimal places
    JPY = ("JPY", 0)  # Japanese Yen, 0 decimal places
    CAD = ("CAD", 2)  # Canadian Dollar, 2 decimal places
    CHF = ("CHF", 2)  # Swiss Franc, 2 decimal places

    def __init__(self, code: str, precision: int):
        self.code = code
        self.precision = precision

    @property
    def minor_per_major(self) -> int:
        """Number of minor units in one major unit (100 for USD, 1 for JPY)"""
        return 10 ** self.precision

    @classmethod
    def from_code(cls, code: str) -> 'Currency':
        """Look up a currency by its ISO code, case-insensitively"""
        try:
            return cls[code.strip().upper()]
        except KeyError:
            raise ValueError(f"Unsupported currency code '{code}'") from None


@dataclass(frozen=True)
class Money:
    """
    Immutable money value expressed in integer minor units.
    Arithmetic and comparison are only defined within one currency.
    """
    minor_units: int
    currency: Currency

    def __post_init__(self):
        if isinstance(self.minor_units, bool) or not isinstance(self.minor_units, int):
            raise TypeError(f"Money minor_units must be int, got {type(self.minor_units).__name__}")

    @classmethod
    def from_major(cls, value: Union[Decimal, str, int], currency: Currency) -> 'Money':
        """Build Money from a major-unit amount, rounding half up to the currency precision"""
        if isinstance(value, float):
            raise TypeError("Use Decimal or str for monetary values, not float")
        try:
            amount = value if isinstance(value, Decimal) else Decimal(str(value))
            units = (amount * currency.minor_per_major).quantize(Decimal('1'), rounding=ROUND_HALF_UP)
            minor_units = int(units)
        except (InvalidOperation, ValueError, OverflowError):
            raise ValueError(f"Cannot convert '{value}' to a monetary amount") from None
        return cls(minor_units, currency)

    def _check_currency(self, other: 'Money', verb: str) -> None:
        if self.currency != other.currency:
            raise ValueError(f"Cannot {verb} {self.currency.code} and {other.currency.code}")

    def __add__(self, other: 'Money') -> 'Money':
        self._check_currency(other, "add")
        return Money(self.minor_units + other.minor_units, self.currency)

    def __sub__(self, other: 'Money') -> 'Money':
        self._check_currency(other, "subtract")
        return Money(self.minor_units - other.minor_units, self.currency)

    def __neg__(self) -> 'Money':
        return Money(-self.minor_units, self.currency)

    def __abs__(self) -> 'Money':
        return Money(abs(self.minor_units), self.currency)

    def __lt__(self, other: 'Money') -> bool:
        self._check_currency(other, "compare")
        return self.minor_units < other.minor_units

    def __le__(self, other: 'Money') -> bool:
        self._check_currency(other, "compare")
        return self.minor_units <= other.minor_units

    def __gt__(self, other: 'Money') -> bool:
        self._check_currency(other, "compare")
        return self.minor_units > other.minor_units

    def __ge__(self, other: 'Money') -> bool:
        self._check_currency(other, "compare")
        return self.minor_units >= other.minor_units

    @property
    def major(self) -> Decimal:
        """Amount in major units as an exact Decimal"""
        return Decimal(self.minor_units).scaleb(-self.currency.precision)

    def is_zero(self) -> bool:
        """Check if amount is exactly zero"""
        return self.minor_units == 0

    def is_positive(self) -> bool:
        """Check if amount is positive"""
        return self.minor_units > 0

    def is_negative(self) -> bool:
        """Check if amount is negative"""
        return self.minor_units < 0

    def to_string(self) -> str:
        """Format for display"""
        return f"{self.currency.code} {self.major:,.{self.currency.precision}f}"


def format_minor_units(units: int, currency: Currency = Currency.USD, symbol: str = "$") -> str:
    """
    Format a minor-unit amount as a major-unit string, e.g. 5000 -> "$50.00"

    Args:
        units: Amount in minor units
        currency: Currency defining precision
        symbol: Prefix printed before the number

    Returns:
        Display string
    """
    major = Decimal(units).scaleb(-currency.precision)
    return f"{symbol}{major:.{currency.precision}f}"


def parse_amount(value: str, currency: Currency = Currency.USD) -> int:
    """
    Convert human-entered text into minor units, handling common formats.
    A leading sign is kept, so "-5" gives -500; callers decide whether a
    negative amount is acceptable.

    Args:
        value: String such as "$1,234.50", "12,5" or "300"
        currency: Currency defining precision

    Returns:
        Amount in minor units

    Raises:
        ValueError: If the text is not a number or exceeds Decimal precision
    """
    if not value or not isinstance(value, str):
        raise ValueError("Value must be a non-empty string")

    # Remove currency symbols and whitespace
    clean_value = re.sub(r'[^\d.,\-+]', '', value.strip())

    if ',' in clean_value and '.' in clean_value:
        # Both comma and dot - assume comma is thousands separator
        clean_value = clean_value.replace(',', '')
    elif ',' in clean_value and clean_value.count(',') == 1:
        # Single comma - decimal separator unless it groups thousands
        parts = clean_value.split(',')
        if len(parts[1]) == 3:
            clean_value = clean_value.replace(',', '')
        else:
            clean_value = clean_value.replace(',', '.')
    elif ',' in clean_value:
        clean_value = clean_value.replace(',', '')

    if not clean_value:
        raise ValueError(f"Cannot convert '{value}' to an amount")

    return Money.from_major(clean_value, currency).minor_units
