"""
CLI Keygen Command

Generate an Ed25519 keypair file for signing queries.

Usage:
    ledgerq keygen --out key.json [--force]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from pathlib import Path

from core.crypto.keys import Keypair, derive_account_id


logger = logging.getLogger(__name__)


EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


def keygen_cmd(args: Namespace) -> int:
    """Execute the keygen command."""
    out = Path(args.out)
    if out.exists() and not args.force:
        print(f"Error: Key file already exists: {out}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    keypair = Keypair.generate()
    keypair.save(out)

    if args.json:
        print(json.dumps({
            "key_file": str(out),
            "public_key": keypair.public_key_hex,
            "account_id": derive_account_id(keypair.public_key),
        }, indent=2))
    else:
        print(f"key_file: {out}")
        print(f"public_key: {keypair.public_key_hex}")
    return EXIT_SUCCESS
