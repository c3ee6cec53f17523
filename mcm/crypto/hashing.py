"""
Hashing Utilities
Keccak-256 hashing and hex helpers for Merkle commitments.

This module provides:
- Keccak-256 hashing for raw bytes (the EVM/MCM hash, not NIST SHA3-256)
- Hex encoding/decoding with 0x prefix
- Concatenation hashing

Determinism Notes:
- Always hash raw bytes exactly as given
- All operations are pure
"""
from __future__ import annotations

import re

from web3 import Web3


HASH_SIZE = 32

HEX_HASH_PATTERN = re.compile(r"0x[0-9a-fA-F]{64}")

HEX_DIGITS_PATTERN = re.compile(r"[0-9a-fA-F]*")


def keccak256(data: bytes) -> bytes:
    """
    Compute the Keccak-256 hash of raw bytes.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte Keccak-256 digest

    Example:
        >>> keccak256(b"").hex()
        'c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470'
    """
    return bytes(Web3.keccak(data))


def hash_concat(*parts: bytes) -> bytes:
    """Hash the concatenation of byte sequences in order."""
    return keccak256(b"".join(parts))


def to_hex(data: bytes) -> str:
    """
    Convert bytes to hexadecimal string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert hexadecimal string (with 0x prefix) to bytes.

    Raises:
        ValueError: If string doesn't start with 0x, has odd length,
                   or contains invalid hex characters
    """
    if not hex_string.startswith("0x"):
        raise ValueError(
            f"Hex string must start with '0x' prefix, got: {hex_string[:10]}..."
        )

    hex_content = hex_string[2:]

    if len(hex_content) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length after 0x prefix, "
            f"got length {len(hex_content)}"
        )

    if not HEX_DIGITS_PATTERN.fullmatch(hex_content):
        raise ValueError(f"Invalid hex characters in string: {hex_string[:10]}...")

    return bytes.fromhex(hex_content)


def is_hash(value: str) -> bool:
    """Check if a string is a 0x-prefixed 32-byte hex value."""
    return bool(HEX_HASH_PATTERN.fullmatch(value))


def hash_from_hex(hex_string: str) -> bytes:
    """Decode a 0x-prefixed 32-byte hash, rejecting any other length."""
    if not is_hash(hex_string):
        raise ValueError(
            f"Expected a 32-byte hex string with 0x prefix (64 hex chars), got: {hex_string}"
        )
    return bytes.fromhex(hex_string[2:])


__all__ = [
    "HASH_SIZE",
    "HEX_HASH_PATTERN",
    "keccak256",
    "hash_concat",
    "to_hex",
    "from_hex",
    "is_hash",
    "hash_from_hex",
]
