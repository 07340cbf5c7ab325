"""
CLI Build Command

Build and sign a single query, then print or save it as JSON.

Usage:
    ledgerq build GetAccountAssets --key key.json --account bob@domain
    ledgerq build GetTransactions --key key.json --account bob@domain --tx-hash ab12 --tx-hash cd34
    ledgerq build GetRolePermissions --account bob@domain --role admin --counter 5 --out q.json
"""

from __future__ import annotations

import logging
import sys
from argparse import Namespace
from pathlib import Path
from typing import Any

import pydantic

from core.config import RuntimeConfig
from core.crypto.keys import Keypair
from core.schemas.errors import LedgerQueryException
from core.schemas.queries import parse_payload
from query_client.builder import QueryBuilder


logger = logging.getLogger(__name__)


EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


def payload_data_from_args(args: Namespace) -> dict[str, Any]:
    """Collect the payload fields supplied on the command line."""
    data: dict[str, Any] = {
        "query_type": args.query_type,
        "account_id": args.account,
    }
    if args.asset is not None:
        data["asset_id"] = args.asset
    if args.role is not None:
        data["role_id"] = args.role
    if args.tx_hash:
        data["tx_hashes"] = list(args.tx_hash)
    return data


def build_cmd(args: Namespace) -> int:
    """Execute the build command."""
    config: RuntimeConfig = args.cli_config

    key_file = args.key or config.signing.key_file
    if not key_file:
        print("Error: no key file given (use --key or LEDGERQ_KEY_FILE)", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    try:
        payload = parse_payload(payload_data_from_args(args))
    except pydantic.ValidationError as e:
        print(f"Error: invalid arguments for {args.query_type}:", file=sys.stderr)
        for err in e.errors():
            loc = ".".join(str(p) for p in err["loc"])
            print(f"  {loc}: {err['msg']}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    try:
        keypair = Keypair.load(key_file)
        overrides: dict[str, Any] = {}
        if args.counter is not None:
            overrides["counter"] = args.counter
        if args.created_time is not None:
            overrides["created_time"] = args.created_time
        if args.creator is not None:
            overrides["creator_account_id"] = args.creator
        builder = QueryBuilder.from_config(keypair, config, **overrides)
        signed = builder.select(payload).finalize()
    except LedgerQueryException as e:
        print(f"Error [{e.code}]: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    logger.info(f"Built {signed.query_type} query {signed.hash_hex()}")
    output = signed.to_json(indent=2)

    if args.out:
        out = Path(args.out)
        out.write_text(output)
        print(f"Wrote signed query to {out}")
        print(f"query_hash: {signed.hash_hex()}")
    else:
        print(output)
    return EXIT_SUCCESS
