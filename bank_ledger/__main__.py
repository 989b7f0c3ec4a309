"""
Demonstration entry point: ``python -m bank_ledger``

Opens two accounts, moves some money around and prints the ledger.
"""

import sys
from typing import Optional

from .config import LedgerConfig, get_config
from .errors import LedgerError
from .ledger import Ledger
from .logging_config import setup_logging, log_action


def run_demo(ledger: Ledger) -> None:
    """Apply the demonstration operations to ``ledger``"""
    ledger.create_account(1, "Giorgi")
    ledger.create_account(2, "QioJI")

    ledger.deposit(1, 50000)
    ledger.withdraw(1, 25000)
    ledger.deposit(2, 30000)

    ledger.transfer(1, 2, 10000)


def main(config: Optional[LedgerConfig] = None) -> int:
    config = config or get_config()
    logger = setup_logging(config.log_level, fmt=config.log_format)

    ledger = Ledger(config=config)
    try:
        run_demo(ledger)
    except LedgerError as e:
        log_action(logger, "error", f"Demo failed: {e.message}", action="demo", extra=e.to_dict())
        return 1

    print(ledger.summary())
    print(ledger)
    return 0


if __name__ == "__main__":
    sys.exit(main())
