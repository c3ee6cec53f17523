"""
Helpers shared by the CLI commands.
"""

from __future__ import annotations

import sys
from argparse import Namespace

from mcm.schemas.errors import McmException, ProposalValidationException


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def wants_json(args: Namespace) -> bool:
    """True if --json was passed or the config defaults to JSON output."""
    if getattr(args, "json", False):
        return True
    config = getattr(args, "cli_config", None)
    return config is not None and config.default_output_format == "json"


def print_error(prefix: str, error: Exception) -> None:
    """Print an error to stderr, listing every issue of a validation failure."""
    if isinstance(error, McmException):
        print(f"Error: {prefix}: [{error.code}] {error.message}", file=sys.stderr)
    else:
        print(f"Error: {prefix}: {error}", file=sys.stderr)

    if isinstance(error, ProposalValidationException):
        for issue in error.issues:
            location = issue.field_path or "<file>"
            print(f"  ✗ {location}: {issue.message}", file=sys.stderr)
