#!/usr/bin/env python3
"""
Bank Ledger Demo Entry Point

Runs the demonstration ledger and prints the account summary.
"""

import sys
from pathlib import Path

# Add the project root to Python path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from bank_ledger.__main__ import main


if __name__ == "__main__":
    sys.exit(main())
