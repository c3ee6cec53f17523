"""
Proposal File IO
File: io.py

Purpose: Load and save proposal JSON files. Loading reports every schema
violation at once so a proposal author can fix them in a single pass.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from mcm.schemas.canonical import dumps_canonical
from mcm.schemas.errors import ProposalValidationException, ValidationIssue
from mcm.schemas.proposal import Proposal


logger = logging.getLogger(__name__)


def _issue_from_error(error: dict[str, Any]) -> ValidationIssue:
    field_path = ".".join(str(part) for part in error.get("loc", ()))
    actual = error.get("input")
    return ValidationIssue(
        message=error.get("msg", "Invalid value"),
        field_path=field_path or None,
        actual=None if isinstance(actual, (dict, list)) or actual is None else str(actual),
        details={"type": error.get("type", "")},
    )


def parse_proposal(data: Any) -> Proposal:
    """
    Validate already-decoded JSON into a Proposal.

    Raises:
        ProposalValidationException: With one issue per violation
    """
    try:
        return Proposal.model_validate(data)
    except ValidationError as e:
        issues = [_issue_from_error(err) for err in e.errors()]
        raise ProposalValidationException(
            f"Proposal failed validation with {len(issues)} issue(s)",
            issues=issues,
        ) from e


def load_proposal(path: str | Path) -> Proposal:
    """
    Read and validate a proposal JSON file.

    Raises:
        ProposalValidationException: If the file cannot be read, is not
            JSON, or does not match the proposal schema
    """
    path = Path(path)
    logger.debug(f"Loading proposal from {path}")

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ProposalValidationException(
            f"Cannot read proposal file {path}: {e}",
            issues=[ValidationIssue(message=str(e), field_path=None)],
            details={"path": str(path)},
        ) from e
    except UnicodeDecodeError as e:
        raise ProposalValidationException(
            f"Proposal file {path} is not valid UTF-8: {e}",
            issues=[ValidationIssue(message=e.reason, details={"position": e.start})],
            details={"path": str(path)},
        ) from e
    except json.JSONDecodeError as e:
        raise ProposalValidationException(
            f"Proposal file {path} is not valid JSON: {e}",
            issues=[ValidationIssue(message=e.msg, details={"line": e.lineno, "column": e.colno})],
            details={"path": str(path)},
        ) from e

    proposal = parse_proposal(data)
    logger.info(
        f"Loaded proposal {proposal.multisig_id[:10]}... "
        f"with {len(proposal.operations)} operation(s)"
    )
    return proposal


def save_proposal(proposal: Proposal, path: str | Path) -> Path:
    """Write a proposal as indented, key-sorted JSON using its field aliases."""
    path = Path(path)
    content = dumps_canonical(
        proposal.model_dump(mode="json", by_alias=True, exclude_none=True),
        indent=2,
    )
    path.write_text(content + "\n", encoding="utf-8")
    logger.debug(f"Saved proposal to {path}")
    return path


__all__ = [
    "parse_proposal",
    "load_proposal",
    "save_proposal",
]
