"""
CLI Verify Command

Verify a proposal's proofs offline:
- Recompute every leaf and the Merkle tree
- Check each proof reconstructs the root
- Optionally compare against a root committed elsewhere

Usage:
    mcm verify proposal.json [--root 0x...] [--json]
"""

from __future__ import annotations

import logging
import sys
from argparse import Namespace
from dataclasses import asdict, dataclass, field
from typing import Any

from mcm.crypto.hashing import hash_from_hex, to_hex
from mcm.proposal import load_proposal, verify_proposal_root
from mcm.schemas.canonical import dumps_canonical
from mcm.schemas.errors import ErrorCodes, McmException, MerkleVerificationException
from mcm_cli.commands.common import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    EXIT_VERIFICATION_FAILED,
    print_error,
    wants_json,
)


logger = logging.getLogger(__name__)


@dataclass
class VerifySummary:
    """Summary of proposal verification for CLI output."""
    proposal_path: str = ""
    root: str = ""
    expected_root: str | None = None
    num_leaves: int = 0
    proofs_ok: bool = False
    root_matches: bool | None = None
    errors: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        if self.expected_root is None:
            del d["expected_root"]
        if self.root_matches is None:
            del d["root_matches"]
        if not d["errors"]:
            del d["errors"]
        return d

    @property
    def all_ok(self) -> bool:
        """Check if all verifications passed."""
        if not self.proofs_ok:
            return False
        if self.root_matches is not None and not self.root_matches:
            return False
        return True


def print_summary_human(summary: VerifySummary) -> None:
    """Print summary in human-readable format."""
    print(f"proposal: {summary.proposal_path}")
    print(f"root: {summary.root}")
    if summary.expected_root is not None:
        print(f"expected_root: {summary.expected_root}")
    print(f"leaves: {summary.num_leaves}")
    print(f"proofs_ok: {str(summary.proofs_ok).lower()}")
    if summary.root_matches is not None:
        print(f"root_matches: {str(summary.root_matches).lower()}")

    if summary.errors:
        print(f"\nerrors ({len(summary.errors)}):")
        for err in summary.errors:
            print(f"  ✗ {err}")


def verify_cmd(args: Namespace) -> int:
    """
    Execute the verify command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    expected_root: bytes | None = None
    if args.root:
        try:
            expected_root = hash_from_hex(args.root)
        except ValueError as e:
            print(f"Error: invalid --root: {e}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

    try:
        proposal = load_proposal(args.proposal)
    except McmException as e:
        print_error(f"loading {args.proposal}", e)
        return EXIT_RUNTIME_ERROR

    summary = VerifySummary(
        proposal_path=args.proposal,
        expected_root=to_hex(expected_root) if expected_root is not None else None,
        num_leaves=len(proposal.operations) + 1,
    )

    try:
        result = verify_proposal_root(proposal, expected_root=expected_root)
        summary.root = to_hex(result.root)
        summary.proofs_ok = True
        if expected_root is not None:
            summary.root_matches = True
    except MerkleVerificationException as e:
        summary.errors.append(f"[{e.code}] {e.message}")
        if e.code == ErrorCodes.ROOT_MISMATCH:
            # Proofs were all valid; only the committed root differs
            summary.root = e.details["actual"]
            summary.proofs_ok = True
            summary.root_matches = False

    if wants_json(args):
        print(dumps_canonical(summary, indent=2))
    else:
        print_summary_human(summary)

    if summary.all_ok:
        logger.info("Verification passed")
        return EXIT_SUCCESS

    logger.warning("Verification failed")
    return EXIT_VERIFICATION_FAILED
