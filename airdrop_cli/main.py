"""
Airdrop CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m airdrop_cli build entitlements.csv [--out merkle.json] [--json]
    python -m airdrop_cli proof merkle.json <account> [--json]
    python -m airdrop_cli digest <account> <amount> [--chain-id N] [--verifying-contract ADDR]
    python -m airdrop_cli verify claim.json [--root HEX] [--chain-id N] [--verifying-contract ADDR]
    python -m airdrop_cli config --init

Environment Variables:
    AIRDROP_CHAIN_ID            Chain id of the signing domain
    AIRDROP_VERIFYING_CONTRACT  Distributor instance address
    AIRDROP_DOMAIN_NAME         Signing domain name (default: MerkleAirdrop)
    AIRDROP_DOMAIN_VERSION      Signing domain version (default: 1)
    AIRDROP_MERKLE_ROOT         Committed root used by verify
    AIRDROP_LOG_LEVEL           Log level (default: INFO)
    AIRDROP_LOG_FILE            Optional log file
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from airdrop_cli.commands import build, digest, verify
from airdrop_cli.config import get_default_config_template, load_config


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


def _add_domain_arguments(parser: argparse.ArgumentParser) -> None:
    """Signing-domain overrides shared by digest and verify."""
    parser.add_argument(
        "--chain-id",
        type=int,
        default=None,
        help="Chain id (default: from config)",
    )
    parser.add_argument(
        "--verifying-contract",
        type=str,
        default=None,
        help="Distributor instance address (default: from config)",
    )
    parser.add_argument(
        "--domain-name",
        type=str,
        default=None,
        help="Signing domain name (default: from config)",
    )
    parser.add_argument(
        "--domain-version",
        type=str,
        default=None,
        help="Signing domain version (default: from config)",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="airdrop",
        description="Merkle Airdrop CLI - Build distributions, produce digests, and check claims.",
    )
    parser.add_argument(
        "--version", action="version", version="%(prog)s 0.1.0"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to configuration file (default: ./airdrop.json or ~/.config/airdrop/config.json)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- build command ---
    build_parser = subparsers.add_parser(
        "build",
        help="Build a distribution file from an entitlement CSV",
        description="Compute the Merkle root and every account's proof from address,amount rows.",
    )
    build_parser.add_argument(
        "csv",
        type=str,
        help="CSV file with an address,amount header",
    )
    build_parser.add_argument(
        "--out", "-o",
        type=str,
        default="merkle.json",
        help="Output distribution file (default: merkle.json)",
    )
    build_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON summary",
    )
    build_parser.set_defaults(func=build.build_cmd)

    # --- proof command ---
    proof_parser = subparsers.add_parser(
        "proof",
        help="Look up one account's proof in a distribution file",
    )
    proof_parser.add_argument("tree", type=str, help="Distribution file written by build")
    proof_parser.add_argument("account", type=str, help="Account address")
    proof_parser.add_argument("--json", action="store_true", help="JSON output")
    proof_parser.set_defaults(func=build.proof_cmd)

    # --- digest command ---
    digest_parser = subparsers.add_parser(
        "digest",
        help="Print the digest an account signs to claim",
        description="Compute the typed-data digest of (account, amount) under the signing domain.",
    )
    digest_parser.add_argument("account", type=str, help="Claiming account")
    digest_parser.add_argument("amount", type=int, help="Entitled amount")
    _add_domain_arguments(digest_parser)
    digest_parser.add_argument("--json", action="store_true", help="JSON output")
    digest_parser.set_defaults(func=digest.digest_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Check a claim file offline",
        description="Check a claim's signature and Merkle proof without submitting it.",
    )
    verify_parser.add_argument(
        "claim_path",
        type=str,
        help="JSON file with account, amount, proof, signature",
    )
    verify_parser.add_argument(
        "--root",
        type=str,
        default=None,
        help="Committed Merkle root (default: from config)",
    )
    _add_domain_arguments(verify_parser)
    verify_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON report",
    )
    verify_parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Print tracebacks on errors",
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
        default="airdrop.json",
        help="Path for config file (default: airdrop.json)",
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
        print("\nEdit this file to configure your settings.")
        print("You can also use environment variables (AIRDROP_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        print(json.dumps(args.cli_config.to_dict(), indent=2))
        return EXIT_SUCCESS

    # Default: show help
    print("Usage: airdrop config [--init|--show]")
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

    # Load configuration
    try:
        config = load_config(args.config)
    except (OSError, ValueError) as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    # Setup logging
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
