"""
CLI Root Command

Compile one or more proposal files into their Merkle roots, proofs and
the digest signers sign.

Usage:
    mcm root proposal.json [more.json ...] [--workers N] [--json]
"""

from __future__ import annotations

import logging
from argparse import Namespace
from dataclasses import asdict, dataclass, field
from typing import Any

from mcm.crypto.hashing import to_hex
from mcm.proposal import (
    ProposalRoot,
    compute_hash_to_sign,
    compute_proposal_roots,
    load_proposal,
)
from mcm.schemas.canonical import dumps_canonical
from mcm.schemas.errors import McmException
from mcm.schemas.proposal import Proposal
from mcm_cli.commands.common import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    print_error,
    wants_json,
)


logger = logging.getLogger(__name__)


@dataclass
class OperationProofSummary:
    """One operation's nonce and proof."""
    index: int
    nonce: int
    program_address: str
    program: str | None = None
    proof: list[str] = field(default_factory=list)


@dataclass
class RootSummary:
    """Summary of a compiled proposal for CLI output."""
    proposal_path: str = ""
    multisig_id: str = ""
    valid_until: int = 0
    root: str = ""
    hash_to_sign: str = ""
    metadata_proof: list[str] = field(default_factory=list)
    operations: list[OperationProofSummary] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def build_summary(path: str, proposal: Proposal, result: ProposalRoot) -> RootSummary:
    """Combine a proposal and its compiled root into a RootSummary."""
    return RootSummary(
        proposal_path=path,
        multisig_id=proposal.multisig_id,
        valid_until=proposal.valid_until,
        root=to_hex(result.root),
        hash_to_sign=to_hex(compute_hash_to_sign(result.root, proposal.valid_until)),
        metadata_proof=[to_hex(p) for p in result.metadata_proof],
        operations=[
            OperationProofSummary(
                index=i,
                nonce=proposal.nonce_of(i),
                program_address=op.target,
                program=op.program,
                proof=[to_hex(p) for p in proof],
            )
            for i, (op, proof) in enumerate(zip(proposal.operations, result.operation_proofs))
        ],
    )


def print_summary_human(summary: RootSummary) -> None:
    """Print summary in human-readable format."""
    print(f"proposal: {summary.proposal_path}")
    print(f"multisig_id: {summary.multisig_id}")
    print(f"valid_until: {summary.valid_until}")
    print(f"root: {summary.root}")
    print(f"hash_to_sign: {summary.hash_to_sign}")

    print(f"\nmetadata_proof ({len(summary.metadata_proof)}):")
    for sibling in summary.metadata_proof:
        print(f"  {sibling}")

    print(f"\noperations ({len(summary.operations)}):")
    for op in summary.operations:
        label = op.program or op.program_address
        print(f"  [{op.index}] nonce {op.nonce} {label}")
        for sibling in op.proof:
            print(f"      {sibling}")


def root_cmd(args: Namespace) -> int:
    """
    Execute the root command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    paths: list[str] = args.proposals

    proposals: list[Proposal] = []
    for path in paths:
        try:
            proposals.append(load_proposal(path))
        except McmException as e:
            print_error(f"loading {path}", e)
            return EXIT_RUNTIME_ERROR

    max_workers = args.workers
    if max_workers is None and getattr(args, "cli_config", None) is not None:
        max_workers = args.cli_config.max_workers

    logger.info(f"Compiling {len(proposals)} proposal(s)")
    results = compute_proposal_roots(proposals, max_workers=max_workers)

    summaries = [
        build_summary(path, proposal, result)
        for path, proposal, result in zip(paths, proposals, results)
    ]

    if wants_json(args):
        payload: Any = summaries[0] if len(summaries) == 1 else summaries
        print(dumps_canonical(payload, indent=2))
    else:
        for i, summary in enumerate(summaries):
            if i:
                print()
            print_summary_human(summary)

    return EXIT_SUCCESS
