"""
CLI Verify Command

Verify a signed query file offline:
- Parse the signed query
- Rebuild the canonical signing bytes
- Check the signature (and optionally the signer's key)

Usage:
    ledgerq verify query.json [--pubkey HEX] [--json]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

import pydantic

from core.schemas.signed_query import SignedQuery
from query_client.verifier import verify_signed_query


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


@dataclass
class VerifySummary:
    """Summary of query verification for CLI output."""
    path: str = ""
    ok: bool = False
    query_type: str = ""
    creator_account_id: str = ""
    query_counter: int = 0
    created_time: int = 0
    query_hash: str = ""
    checks: list[dict[str, Any]] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        if not d["errors"]:
            del d["errors"]
        return d


def print_summary_human(summary: VerifySummary) -> None:
    """Print summary in human-readable format."""
    print(f"query: {summary.path}")
    print(f"query_type: {summary.query_type}")
    print(f"creator: {summary.creator_account_id}")
    print(f"counter: {summary.query_counter}")
    print(f"created_time: {summary.created_time}")
    print(f"query_hash: {summary.query_hash}")
    print(f"valid: {str(summary.ok).lower()}")

    if summary.errors:
        print(f"\nerrors ({len(summary.errors)}):")
        for err in summary.errors:
            print(f"  ✗ {err}")


def verify_cmd(args: Namespace) -> int:
    """Execute the verify command."""
    path = Path(args.query_path)
    if not path.exists():
        print(f"Error: File not found: {path}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    try:
        signed = SignedQuery.from_json(path.read_text())
    except pydantic.ValidationError as e:
        print(f"Error: {path} is not a signed query: {e.error_count()} validation error(s)", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    expected = None
    if args.pubkey:
        try:
            expected = bytes.fromhex(args.pubkey)
        except ValueError:
            print(f"Error: --pubkey is not valid hex: {args.pubkey}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

    logger.info(f"Verifying signed query: {path}")
    result = verify_signed_query(signed, expected_public_key=expected)

    summary = VerifySummary(
        path=str(path),
        ok=result.ok,
        query_type=signed.query_type,
        creator_account_id=signed.creator_account_id,
        query_counter=signed.query_counter,
        created_time=signed.created_time,
        query_hash=signed.hash_hex(),
        checks=[
            {"check_id": c.check_id, "ok": c.ok, "message": c.message}
            for c in result.checks
        ],
        errors=result.get_error_messages(),
    )
    if result.error is not None:
        summary.errors.append(result.error.message)

    if args.json:
        print(json.dumps(summary.to_dict(), indent=2))
    else:
        print_summary_human(summary)

    return EXIT_SUCCESS if result.ok else EXIT_VERIFICATION_FAILED
