"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m ledgerq_cli keygen --out key.json [--force] [--json]
    python -m ledgerq_cli build <QueryType> --key key.json --account ID [--asset ID] [--role ID]
                                [--tx-hash H ...] [--counter N] [--created-time MS]
                                [--creator ID] [--out PATH]
    python -m ledgerq_cli verify <query.json> [--pubkey HEX] [--json]
    python -m ledgerq_cli config --init|--show

Environment Variables:
    LEDGERQ_DEFAULT_COUNTER     Counter used when --counter is omitted (default: 1)
    LEDGERQ_STRICT_SELECTION    Reject a second payload selection (default: false)
    LEDGERQ_KEY_FILE            Signing key file used when --key is omitted
    LEDGERQ_LOG_LEVEL           Log level (default: INFO)
    LEDGERQ_LOG_FILE            Optional log file
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from core.schemas.queries import QUERY_TYPES
from ledgerq_cli import __version__
from ledgerq_cli.commands import build, keygen, verify
from ledgerq_cli.config import get_default_config_template, load_config


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="ledgerq",
        description="Build, sign and verify read-only ledger queries.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to configuration file (default: ./ledgerq.yaml or ~/.config/ledgerq/config.yaml)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- keygen command ---
    keygen_parser = subparsers.add_parser(
        "keygen",
        help="Generate an Ed25519 signing keypair",
    )
    keygen_parser.add_argument(
        "--out", "-o",
        type=str,
        required=True,
        help="Output path for the key file",
    )
    keygen_parser.add_argument(
        "--force",
        action="store_true",
        default=False,
        help="Overwrite an existing key file",
    )
    keygen_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON",
    )
    keygen_parser.set_defaults(func=keygen.keygen_cmd)

    # --- build command ---
    build_parser = subparsers.add_parser(
        "build",
        help="Build and sign a query",
        description="Select one query payload, stamp it and sign it with the given key.",
    )
    build_parser.add_argument(
        "query_type",
        type=str,
        choices=sorted(QUERY_TYPES),
        help="Query to build",
    )
    build_parser.add_argument("--key", "-k", type=str, default=None, help="Signing key file")
    build_parser.add_argument("--account", type=str, required=True, help="Account the query is about")
    build_parser.add_argument("--asset", type=str, default=None, help="Asset id (asset queries)")
    build_parser.add_argument("--role", type=str, default=None, help="Role id (GetRolePermissions)")
    build_parser.add_argument(
        "--tx-hash",
        action="append",
        default=[],
        help="Transaction hash (GetTransactions, repeatable, order kept)",
    )
    build_parser.add_argument("--counter", type=int, default=None, help="Query counter")
    build_parser.add_argument(
        "--created-time",
        type=int,
        default=None,
        help="Creation time in ms since epoch (default: now)",
    )
    build_parser.add_argument(
        "--creator",
        type=str,
        default=None,
        help="Creator account id (default: derived from the public key)",
    )
    build_parser.add_argument("--out", "-o", type=str, default=None, help="Write JSON here instead of stdout")
    build_parser.add_argument("--debug", action="store_true", default=False, help="Show tracebacks")
    build_parser.set_defaults(func=build.build_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Verify a signed query file offline",
    )
    verify_parser.add_argument(
        "query_path",
        type=str,
        help="Path to a signed query JSON file",
    )
    verify_parser.add_argument(
        "--pubkey",
        type=str,
        default=None,
        help="Require the query to be signed by this public key (hex)",
    )
    verify_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON report",
    )
    verify_parser.set_defaults(func=verify.verify_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Manage CLI configuration",
        description="Initialize or display configuration.",
    )
    config_parser.add_argument(
        "--init",
        action="store_true",
        default=False,
        help="Create a template configuration file",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show current configuration",
    )
    config_parser.add_argument(
        "--path",
        type=str,
        default="ledgerq.yaml",
        help="Path for config file (default: ledgerq.yaml)",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path)
        if config_path.exists():
            print(f"Error: Config file already exists: {config_path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

        config_path.write_text(get_default_config_template())
        print(f"Created configuration file: {config_path}")
        print("You can also use environment variables (LEDGERQ_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        print(json.dumps(args.cli_config.to_dict(), indent=2))
        return EXIT_SUCCESS

    print("Usage: ledgerq config [--init|--show]")
    print("  --init  Create a template configuration file")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=verification failed)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    log_level = args.log_level or config.log_level
    setup_logging(level=log_level, log_file=config.log_file)

    # Attach config to args for commands to use
    args.cli_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if getattr(args, "debug", False):
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
