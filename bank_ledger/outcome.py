"""
Tagged operation results.

``attempt`` runs a ledger operation and captures any ``LedgerError`` into an
``Outcome`` so callers can branch on ``outcome.kind`` instead of using
try/except. Errors that are not ledger errors still propagate.
"""

from dataclasses import dataclass
from typing import Any, Callable, Optional

from .errors import LedgerError


@dataclass(frozen=True)
class Outcome:
    """Either a successful value or one named ledger error"""
    ok: bool
    value: Any = None
    error: Optional[LedgerError] = None

    @classmethod
    def success(cls, value: Any) -> 'Outcome':
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: LedgerError) -> 'Outcome':
        return cls(ok=False, error=error)

    @property
    def kind(self) -> Optional[str]:
        """Error code of a failed outcome, None on success"""
        return self.error.code if self.error is not None else None

    def unwrap(self) -> Any:
        """Return the value, or re-raise the captured error"""
        if self.error is not None:
            raise self.error
        return self.value


def attempt(operation: Callable[..., Any], *args, **kwargs) -> Outcome:
    """Call a ledger operation and wrap its result or ledger error"""
    try:
        return Outcome.success(operation(*args, **kwargs))
    except LedgerError as e:
        return Outcome.failure(e)
