"""
CLI command modules.
"""

from ledgerq_cli.commands import build, keygen, verify

__all__ = ["build", "keygen", "verify"]
