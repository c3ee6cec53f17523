"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m mcm_cli root <proposal.json> [<proposal.json> ...] [--workers N] [--json]
    python -m mcm_cli hash --root 0x... --valid-until TS [--json]
    python -m mcm_cli hierarchy "<levels>" [--json]
    python -m mcm_cli verify <proposal.json> [--root 0x...] [--json]
    python -m mcm_cli config --init

Environment Variables:
    MCM_LOG_LEVEL           Log level (default: INFO)
    MCM_LOG_FILE            Also write logs to this file
    MCM_OUTPUT_FORMAT       Default output format: human or json
    MCM_MAX_WORKERS         Thread pool size for batch compilation
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Sequence

from mcm_cli import __version__
from mcm_cli.commands import digest, hierarchy, root, verify
from mcm_cli.commands.common import EXIT_RUNTIME_ERROR, EXIT_SUCCESS
from mcm_cli.config import get_default_config_template, load_config


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
        force=True,
    )


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="mcm",
        description="MCM CLI - Compile multisig hierarchies and proposal Merkle roots.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to configuration file (default: ./mcm.json or ~/.config/mcm/config.json)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- root command ---
    root_parser = subparsers.add_parser(
        "root",
        help="Compute the Merkle root and proofs of proposal files",
        description="Compile proposals into their root, proofs and hash to sign.",
    )
    root_parser.add_argument(
        "proposals",
        nargs="+",
        help="Proposal JSON file(s)",
    )
    root_parser.add_argument(
        "--workers",
        type=_positive_int,
        default=None,
        help="Thread pool size when compiling several proposals (default: from config)",
    )
    root_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON",
    )
    root_parser.set_defaults(func=root.root_cmd)

    # --- hash command ---
    hash_parser = subparsers.add_parser(
        "hash",
        help="Compute the hash signers sign for a root",
        description="keccak256(root || validUntil) for an already computed root.",
    )
    hash_parser.add_argument(
        "--root",
        type=str,
        required=True,
        help="Merkle root as 0x-prefixed 32-byte hex",
    )
    hash_parser.add_argument(
        "--valid-until",
        type=int,
        required=True,
        help="Unix timestamp until which the signatures are valid",
    )
    hash_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON",
    )
    hash_parser.set_defaults(func=digest.hash_cmd)

    # --- hierarchy command ---
    hierarchy_parser = subparsers.add_parser(
        "hierarchy",
        help="Parse a multisig hierarchy string",
        description="Compile the nested m:/s: hierarchy syntax into on-chain group arrays.",
    )
    hierarchy_parser.add_argument(
        "levels",
        type=str,
        help='Hierarchy, e.g. "m:root:1o2(s:0x...,m:child:2o3(s:0x...,s:0x...,s:0x...))"',
    )
    hierarchy_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON",
    )
    hierarchy_parser.set_defaults(func=hierarchy.hierarchy_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Verify a proposal's proofs offline",
        description="Recompute the tree and check every proof, optionally against a known root.",
    )
    verify_parser.add_argument(
        "proposal",
        type=str,
        help="Proposal JSON file",
    )
    verify_parser.add_argument(
        "--root",
        type=str,
        default=None,
        help="Expected Merkle root as 0x-prefixed 32-byte hex",
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
        default="mcm.json",
        help="Path for config file (default: mcm.json)",
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
        print("You can also use environment variables (MCM_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        print(json.dumps(args.cli_config.to_dict(), indent=2))
        return EXIT_SUCCESS

    # Default: show help
    print("Usage: mcm config [--init|--show]")
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


if __name__ == "__main__":
    sys.exit(main())
