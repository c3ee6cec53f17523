"""
Fixed-Width Field Encoding

Encoders for the 32-byte words that make up MCM leaf preimages, plus
address codecs for the two address families the compiler deals with:

- Solana addresses (base58, 32 bytes) for multisig, targets and accounts
- EVM addresses (hex, 20 bytes) for hierarchy signers

Word layout rules:
- Integers: 8-byte little-endian, zero-extended on the left to 32 bytes
  (i.e. [24 zero bytes][8 LE bytes])
- Booleans: one byte 0x00/0x01, zero-extended on the left to 32 bytes
- Addresses: native fixed-width bytes, zero-extended on the left to 32 bytes
"""
from __future__ import annotations

import re

import base58
from web3 import Web3


WORD_SIZE = 32
U64_MAX = 2**64 - 1
SOLANA_ADDRESS_SIZE = 32
EVM_ADDRESS_SIZE = 20

_HEX_BODY = re.compile(r"[0-9a-fA-F]+")


def pad32(data: bytes) -> bytes:
    """Zero-extend bytes on the high-order (left) side to 32 bytes."""
    if len(data) > WORD_SIZE:
        raise ValueError(f"Cannot pad {len(data)} bytes into a {WORD_SIZE}-byte word")
    return data.rjust(WORD_SIZE, b"\x00")


def encode_u64(value: int) -> bytes:
    """
    Encode an unsigned 64-bit integer as a 32-byte word.

    The integer is written little-endian into 8 bytes, then left-padded
    with zeros, so the significant bytes sit at the end of the word.

    Raises:
        ValueError: If value is negative or does not fit in 64 bits
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"Expected an integer, got {type(value).__name__}")
    if value < 0 or value > U64_MAX:
        raise ValueError(f"Value {value} out of range for u64")
    return pad32(value.to_bytes(8, "little"))


def encode_bool(value: bool) -> bytes:
    """Encode a boolean as a single byte zero-extended to 32 bytes."""
    return pad32(b"\x01" if value else b"\x00")


def decode_solana_address(address: str) -> bytes:
    """
    Decode a base58 Solana address to its 32-byte representation.

    Raises:
        ValueError: If the string is not base58 or does not decode to 32 bytes
    """
    if not address:
        raise ValueError("Solana address cannot be empty")
    try:
        raw = base58.b58decode(address)
    except ValueError as e:
        raise ValueError(f"Invalid base58 in Solana address {address!r}: {e}") from e
    if len(raw) != SOLANA_ADDRESS_SIZE:
        raise ValueError(
            f"Solana address {address!r} decodes to {len(raw)} bytes, "
            f"expected {SOLANA_ADDRESS_SIZE}"
        )
    return raw


def encode_solana_address(raw: bytes) -> str:
    """Encode 32 raw bytes as a base58 Solana address."""
    if len(raw) != SOLANA_ADDRESS_SIZE:
        raise ValueError(f"Expected {SOLANA_ADDRESS_SIZE} bytes, got {len(raw)}")
    return base58.b58encode(raw).decode()


def is_solana_address(address: str) -> bool:
    """Check whether a string is a valid base58 Solana address."""
    try:
        decode_solana_address(address)
    except ValueError:
        return False
    return True


def address_word(address: str) -> bytes:
    """Encode a Solana address as a 32-byte word."""
    return pad32(decode_solana_address(address))


def normalize_evm_address(token: str) -> str:
    """
    Validate an EVM signer address token and return its checksummed form.

    Accepted forms:
    - Full 40-hex-digit address. Mixed-case input must carry a valid
      EIP-55 checksum; all-lower and all-upper input is accepted as is.
    - Compact address with 1 to 39 hex digits, zero-extended on the left
      to 20 bytes.

    Raises:
        ValueError: If the token is not a syntactically valid address
    """
    if not token.startswith("0x"):
        raise ValueError(f"Address must start with '0x': {token}")

    body = token[2:]
    if not body or len(body) > EVM_ADDRESS_SIZE * 2 or not _HEX_BODY.fullmatch(body):
        raise ValueError(f"Invalid address: {token}")

    if len(body) == EVM_ADDRESS_SIZE * 2:
        mixed_case = body != body.lower() and body != body.upper()
        if mixed_case and not Web3.is_checksum_address(token):
            raise ValueError(f"Invalid address checksum: {token}")
        return Web3.to_checksum_address(token)

    return Web3.to_checksum_address("0x" + body.lower().rjust(EVM_ADDRESS_SIZE * 2, "0"))


def evm_address_bytes(address: str) -> bytes:
    """Return the 20 raw bytes of a normalized EVM address."""
    return bytes.fromhex(normalize_evm_address(address)[2:])


__all__ = [
    "WORD_SIZE",
    "U64_MAX",
    "SOLANA_ADDRESS_SIZE",
    "EVM_ADDRESS_SIZE",
    "pad32",
    "encode_u64",
    "encode_bool",
    "decode_solana_address",
    "encode_solana_address",
    "is_solana_address",
    "address_word",
    "normalize_evm_address",
    "evm_address_bytes",
]
