"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m merkle_cli commit --item A --item B [--json]
    python -m merkle_cli prove --index 1 --item A --item B [--out proof.json]
    python -m merkle_cli verify proof.json --item B [--json]
    python -m merkle_cli demo [--index N] [--json]
    python -m merkle_cli config --init | --show

Environment Variables:
    MERKLE_LOG_LEVEL        Log level (default: INFO)
    MERKLE_LOG_FILE         Also write logs to this file
    MERKLE_OUTPUT_FORMAT    human or json
    MERKLE_ITEM_ENCODING    Codec for text items (default: utf-8)
    MERKLE_DEMO_INDEX       Index proven by the demo command
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from dataclasses import asdict
from pathlib import Path
from typing import Sequence

from core.schemas.errors import CommitmentException
from merkle_cli import __version__
from merkle_cli.commands import commit, demo, prove, verify
from merkle_cli.commands.items import add_item_arguments
from merkle_cli.config import load_config, get_default_config_template


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
        force=True,
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="merkle",
        description="Merkle tree commitments - commit to items, generate and verify inclusion proofs.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to configuration file (default: ./merkle.json or ~/.config/merkle/config.json)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- commit command ---
    commit_parser = subparsers.add_parser(
        "commit",
        help="Compute the root digest of an item list",
        description="Build a Merkle tree over the items and print its root digest.",
    )
    add_item_arguments(commit_parser)
    commit_parser.add_argument(
        "--show-leaves",
        action="store_true",
        default=False,
        help="Also print every leaf digest",
    )
    commit_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON summary",
    )
    commit_parser.set_defaults(func=commit.commit_cmd)

    # --- prove command ---
    prove_parser = subparsers.add_parser(
        "prove",
        help="Generate an inclusion proof for one item",
        description="Build a Merkle tree over the items and emit the proof for --index as JSON.",
    )
    add_item_arguments(prove_parser)
    prove_parser.add_argument(
        "--index", "-n",
        type=int,
        required=True,
        help="0-based index of the item to prove",
    )
    prove_parser.add_argument(
        "--out", "-o",
        type=str,
        default=None,
        help="Write the proof JSON to this file instead of stdout",
    )
    prove_parser.set_defaults(func=prove.prove_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Verify an inclusion proof against an item",
        description="Recompute the root from the item and the proof and compare it to the proof's root.",
    )
    verify_parser.add_argument(
        "proof_path",
        type=str,
        help="Path to a proof JSON file",
    )
    item_group = verify_parser.add_mutually_exclusive_group(required=True)
    item_group.add_argument("--item", "-i", type=str, help="Text item to verify")
    item_group.add_argument("--file", "-f", type=str, help="File whose contents is the item")
    verify_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON report",
    )
    verify_parser.set_defaults(func=verify.verify_cmd)

    # --- demo command ---
    demo_parser = subparsers.add_parser(
        "demo",
        help="Run the commit/prove/verify walkthrough",
        description="Commit to the demo items, prove one, verify it and a modified copy.",
    )
    demo_parser.add_argument(
        "--index", "-n",
        type=int,
        default=None,
        help="Index to prove (default: from config)",
    )
    demo_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON report",
    )
    demo_parser.set_defaults(func=demo.demo_cmd)

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
        default="merkle.json",
        help="Path for config file (default: merkle.json)",
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

        config_path.write_text(get_default_config_template(), encoding="utf-8")
        print(f"Created configuration file: {config_path}")
        print("You can also use environment variables (MERKLE_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        print(json.dumps(asdict(args.cli_config), indent=2, ensure_ascii=False))
        return EXIT_SUCCESS

    print("Usage: merkle config [--init|--show]")
    print("  --init  Create a template configuration file")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def report_error(error: CommitmentException, as_json: bool) -> None:
    """Print a toolkit error to stderr."""
    if as_json:
        print(error.to_error_model().model_dump_json(indent=2), file=sys.stderr)
    else:
        print(f"Error: {error.message}", file=sys.stderr)


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
    except (CommitmentException, OSError, ValueError) as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    log_level = args.log_level or config.log_level
    setup_logging(level=log_level, log_file=config.log_file)

    # Attach config to args for commands to use
    args.cli_config = config
    as_json = getattr(args, "json", False) or config.default_output_format == "json"

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except CommitmentException as e:
        report_error(e, as_json)
        return EXIT_RUNTIME_ERROR
    except (OSError, ValueError, LookupError) as e:
        if log_level.upper() == "DEBUG":
            traceback.print_exc()
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
