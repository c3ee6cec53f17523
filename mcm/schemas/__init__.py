"""
Schemas
File: __init__.py

Purpose: Export the public API for the schemas module.
This is the main entry point for other modules to import schema definitions.
"""

# Canonical serialization API
from .canonical import (
    CANONICAL_JSON_SEPARATORS,
    canonicalize_value,
    dumps_canonical,
)

# Error models and exceptions
from .errors import (
    CanonicalizationException,
    CapacityExceededException,
    ErrorCodes,
    HierarchySyntaxException,
    McmError,
    McmException,
    MerkleStructureException,
    MerkleVerificationException,
    ProposalValidationException,
    ValidationIssue,
)

# Hierarchy schemas
from .hierarchy import (
    MAX_NUM_GROUPS,
    Group,
    ParsedHierarchy,
    Quorum,
    Signer,
)

# Proposal schemas
from .proposal import (
    VALID_UNTIL_MAX,
    AccountMeta,
    AccountRole,
    Operation,
    Proposal,
    RootMetadata,
    is_signer_role,
    is_writable_role,
)

__all__ = [
    # Canonical
    "CANONICAL_JSON_SEPARATORS",
    "canonicalize_value",
    "dumps_canonical",
    # Errors
    "CanonicalizationException",
    "CapacityExceededException",
    "ErrorCodes",
    "HierarchySyntaxException",
    "McmError",
    "McmException",
    "MerkleStructureException",
    "MerkleVerificationException",
    "ProposalValidationException",
    "ValidationIssue",
    # Hierarchy
    "MAX_NUM_GROUPS",
    "Group",
    "ParsedHierarchy",
    "Quorum",
    "Signer",
    # Proposal
    "VALID_UNTIL_MAX",
    "AccountMeta",
    "AccountRole",
    "Operation",
    "Proposal",
    "RootMetadata",
    "is_signer_role",
    "is_writable_role",
]
