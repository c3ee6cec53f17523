"""
Schemas
File: errors.py

Purpose: Standard error taxonomy for the MCM compiler.
Defines both Pydantic models for structured error communication
and Python exceptions for control flow.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes used across the compiler."""

    # Hierarchy DSL Errors
    HIERARCHY_SYNTAX_ERROR = "HIERARCHY_SYNTAX_ERROR"
    CAPACITY_EXCEEDED = "CAPACITY_EXCEEDED"

    # Proposal Schema Errors
    SCHEMA_VALIDATION_ERROR = "SCHEMA_VALIDATION_ERROR"
    CANONICALIZATION_ERROR = "CANONICALIZATION_ERROR"

    # Merkle & Commitment Errors
    MERKLE_STRUCTURE_ERROR = "MERKLE_STRUCTURE_ERROR"
    MERKLE_PROOF_INVALID = "MERKLE_PROOF_INVALID"
    ROOT_MISMATCH = "ROOT_MISMATCH"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class McmError(BaseModel):
    """
    Base error model for structured error communication.

    Used by callers that want to report failures without raising,
    e.g. the CLI's JSON output.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.SCHEMA_VALIDATION_ERROR],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )
    retryable: bool = Field(
        default=False,
        description="Whether the operation can be retried",
    )

    def to_exception(self) -> "McmException":
        """Convert this error model to a raised exception."""
        return McmException(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )


class ValidationIssue(McmError):
    """One schema violation found while loading a proposal."""

    code: str = Field(default=ErrorCodes.SCHEMA_VALIDATION_ERROR)
    field_path: str | None = Field(
        default=None,
        description="Dotted path to the field that failed validation",
    )
    actual: str | None = Field(
        default=None,
        description="Actual value received",
    )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class McmException(Exception):
    """
    Base exception for all MCM compiler errors.

    Carries structured error information and can be converted to an
    McmError model. Compiler failures are deterministic functions of the
    input, so nothing here is retryable by default.
    """

    def __init__(
        self,
        message: str,
        code: str = "MCM_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> McmError:
        """Convert this exception to an McmError model."""
        return McmError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class HierarchySyntaxException(McmException):
    """Raised at the first malformed token of a hierarchy DSL string."""

    def __init__(
        self,
        message: str,
        token: str | None = None,
        details: dict[str, Any] | None = None,
        code: str = ErrorCodes.HIERARCHY_SYNTAX_ERROR,
    ) -> None:
        full_details = details or {}
        if token is not None:
            full_details["token"] = token
        super().__init__(
            message=message,
            code=code,
            details=full_details,
            retryable=False,
        )


class CapacityExceededException(HierarchySyntaxException):
    """Raised when a hierarchy declares more groups than fit on-chain."""

    def __init__(
        self,
        message: str,
        limit: int,
        token: str | None = None,
    ) -> None:
        super().__init__(
            message=message,
            token=token,
            details={"limit": limit},
            code=ErrorCodes.CAPACITY_EXCEEDED,
        )
        self.limit = limit


class ProposalValidationException(McmException):
    """
    Raised when a proposal fails schema validation at load time.

    All violations found are carried in ``issues``, not just the first.
    """

    def __init__(
        self,
        message: str,
        issues: list[ValidationIssue] | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.issues = list(issues or [])
        full_details = details or {}
        full_details["issues"] = [issue.model_dump() for issue in self.issues]
        super().__init__(
            message=message,
            code=ErrorCodes.SCHEMA_VALIDATION_ERROR,
            details=full_details,
            retryable=False,
        )


class CanonicalizationException(McmException):
    """Exception raised when canonical serialization fails."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.CANONICALIZATION_ERROR,
            details=details,
            retryable=False,
        )


class MerkleStructureException(McmException):
    """Raised when a Merkle tree is requested over zero leaves."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.MERKLE_STRUCTURE_ERROR,
            details=details,
            retryable=False,
        )


class MerkleVerificationException(McmException):
    """Exception raised when Merkle proof verification fails."""

    def __init__(
        self,
        message: str,
        leaf_index: int | None = None,
        details: dict[str, Any] | None = None,
        code: str = ErrorCodes.MERKLE_PROOF_INVALID,
    ) -> None:
        full_details = details or {}
        if leaf_index is not None:
            full_details["leaf_index"] = leaf_index
        super().__init__(
            message=message,
            code=code,
            details=full_details,
            retryable=False,
        )
