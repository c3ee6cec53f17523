"""
Schemas
File: canonical.py

Purpose: Deterministic JSON for proposal files and compiler reports, so
identical inputs always produce identical bytes on disk and on stdout.

Value mapping:
- bytes            -> 0x-prefixed lowercase hex (roots, leaves, proof elements)
- Enum             -> its value (AccountRole -> 0..3)
- BaseModel        -> by-alias JSON dump, None fields dropped
- objects with to_dict() (report dataclasses) -> that dict
- dict / list / tuple -> recursed; None-valued keys dropped

Floats are rejected: no field in the proposal or hierarchy formats is
fractional, and a float usually means a timestamp or counter was mangled.
"""

import json
from enum import Enum
from typing import Any

from pydantic import BaseModel

from .errors import CanonicalizationException

# Canonical JSON separators - no whitespace
CANONICAL_JSON_SEPARATORS: tuple[str, str] = (",", ":")


def canonicalize_value(value: Any, path: str = "") -> Any:
    """
    Recursively convert a value into plain JSON types.

    Raises:
        CanonicalizationException: On floats or unsupported types, with the
            dotted path of the offending value in ``details["path"]``
    """
    if value is None or isinstance(value, (bool, str)):
        return value

    if isinstance(value, Enum):
        return canonicalize_value(value.value, path)

    if isinstance(value, int):
        return value

    if isinstance(value, bytes):
        return "0x" + value.hex()

    if isinstance(value, BaseModel):
        return canonicalize_value(
            value.model_dump(mode="json", by_alias=True, exclude_none=True), path
        )

    if hasattr(value, "to_dict"):
        return canonicalize_value(value.to_dict(), path)

    if isinstance(value, dict):
        return {
            str(k): canonicalize_value(v, f"{path}.{k}" if path else str(k))
            for k, v in value.items()
            if v is not None
        }

    if isinstance(value, (list, tuple)):
        return [canonicalize_value(item, f"{path}[{i}]") for i, item in enumerate(value)]

    kind = "float" if isinstance(value, float) else type(value).__name__
    raise CanonicalizationException(
        message=f"Cannot canonicalize {kind} value at {path or '<root>'}",
        details={"path": path, "type": type(value).__name__},
    )


def dumps_canonical(obj: Any, indent: int | None = None) -> str:
    """
    Serialize to key-sorted JSON.

    With indent=None the output carries no whitespace; an indent is used
    for files and terminal output meant for people.

    Example:
        >>> dumps_canonical({"root": b"\\x01", "proofs": []})
        '{"proofs":[],"root":"0x01"}'
    """
    return json.dumps(
        canonicalize_value(obj),
        sort_keys=True,
        separators=CANONICAL_JSON_SEPARATORS if indent is None else None,
        indent=indent,
        ensure_ascii=False,
    )
