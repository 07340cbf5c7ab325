"""
Module execution entry point.

Allows running with: python -m ledgerq_cli
"""

import sys
from ledgerq_cli.main import main

if __name__ == "__main__":
    sys.exit(main())
