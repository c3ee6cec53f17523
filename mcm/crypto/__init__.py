"""
Cryptographic primitives for the MCM compiler.

Keccak-256 hashing, hex helpers and the fixed-width word encoders used
to build leaf preimages.
"""
from .hashing import (
    HASH_SIZE,
    keccak256,
    hash_concat,
    to_hex,
    from_hex,
    is_hash,
    hash_from_hex,
)
from .encoding import (
    WORD_SIZE,
    U64_MAX,
    pad32,
    encode_u64,
    encode_bool,
    decode_solana_address,
    encode_solana_address,
    is_solana_address,
    address_word,
    normalize_evm_address,
    evm_address_bytes,
)

__all__ = [
    "HASH_SIZE",
    "keccak256",
    "hash_concat",
    "to_hex",
    "from_hex",
    "is_hash",
    "hash_from_hex",
    "WORD_SIZE",
    "U64_MAX",
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
