"""
ledgerq CLI

Command-line interface for building and verifying signed ledger queries.

Usage:
    python -m ledgerq_cli keygen --out key.json
    python -m ledgerq_cli build GetAccountAssets --key key.json --account bob@domain
    python -m ledgerq_cli verify query.json
"""

__version__ = "0.1.0"
