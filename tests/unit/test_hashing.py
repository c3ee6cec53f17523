"""
Hashing and Encoding Unit Tests
Tests for mcm/crypto/hashing.py and mcm/crypto/encoding.py
"""
import pytest

from mcm.crypto.encoding import (
    U64_MAX,
    address_word,
    decode_solana_address,
    encode_bool,
    encode_solana_address,
    encode_u64,
    evm_address_bytes,
    is_solana_address,
    normalize_evm_address,
    pad32,
)
from mcm.crypto.hashing import (
    from_hex,
    hash_concat,
    hash_from_hex,
    is_hash,
    keccak256,
    to_hex,
)


class TestKeccak:
    """Keccak-256, not NIST SHA3-256."""

    def test_empty_input_vector(self):
        assert keccak256(b"").hex() == (
            "c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470"
        )

    def test_abc_vector(self):
        assert keccak256(b"abc").hex() == (
            "4e03657aea45a94fc7d47ba826c8d667c0d1e6e33a64a036ec44f58fa12d6c45"
        )

    def test_returns_bytes(self):
        digest = keccak256(b"data")
        assert isinstance(digest, bytes)
        assert len(digest) == 32

    def test_hash_concat_matches_joined(self):
        assert hash_concat(b"ab", b"cd") == keccak256(b"abcd")


class TestHex:
    """Tests for hex helpers."""

    def test_to_hex_prefix(self):
        assert to_hex(b"\xde\xad") == "0xdead"

    def test_from_hex_requires_prefix(self):
        with pytest.raises(ValueError, match="0x"):
            from_hex("dead")

    def test_from_hex_rejects_odd_length(self):
        with pytest.raises(ValueError, match="even length"):
            from_hex("0xabc")

    def test_from_hex_rejects_bad_chars(self):
        with pytest.raises(ValueError):
            from_hex("0xzz")

    def test_from_hex_empty_payload(self):
        assert from_hex("0x") == b""

    def test_from_hex_rejects_embedded_whitespace(self):
        with pytest.raises(ValueError, match="Invalid hex"):
            from_hex("0xde ad")

    def test_is_hash(self):
        assert is_hash("0x" + "00" * 32)
        assert not is_hash("0x" + "00" * 31)
        assert not is_hash("00" * 32)

    def test_is_hash_rejects_trailing_newline(self):
        assert not is_hash("0x" + "aa" * 32 + "\n")
        with pytest.raises(ValueError, match="32-byte"):
            hash_from_hex("0x" + "aa" * 32 + "\n")

    def test_hash_from_hex_rejects_wrong_length(self):
        with pytest.raises(ValueError, match="32-byte"):
            hash_from_hex("0x1234")


class TestWordEncoding:
    """Tests for fixed-width word encoders."""

    def test_u64_is_little_endian_left_padded(self):
        word = encode_u64(1)
        assert len(word) == 32
        assert word[:24] == b"\x00" * 24
        assert word[24:] == b"\x01" + b"\x00" * 7

    def test_u64_multi_byte(self):
        word = encode_u64(0x0102)
        assert word[24:] == bytes([0x02, 0x01, 0, 0, 0, 0, 0, 0])

    def test_u64_max(self):
        assert encode_u64(U64_MAX)[24:] == b"\xff" * 8

    @pytest.mark.parametrize("value", [-1, U64_MAX + 1])
    def test_u64_out_of_range(self, value):
        with pytest.raises(ValueError, match="out of range"):
            encode_u64(value)

    def test_u64_rejects_bool(self):
        with pytest.raises(ValueError):
            encode_u64(True)

    def test_bool_encoding(self):
        assert encode_bool(True) == b"\x00" * 31 + b"\x01"
        assert encode_bool(False) == b"\x00" * 32

    def test_pad32_too_long(self):
        with pytest.raises(ValueError):
            pad32(b"\x00" * 33)


class TestSolanaAddress:
    """Tests for base58 Solana addresses."""

    def test_system_program_is_zero(self):
        assert decode_solana_address("11111111111111111111111111111111") == b"\x00" * 32

    def test_round_trip_known_id(self):
        token_program = "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA"
        raw = decode_solana_address(token_program)
        assert len(raw) == 32
        assert encode_solana_address(raw) == token_program

    def test_address_word_is_native_bytes(self):
        address = "SysvarRent111111111111111111111111111111111"
        assert address_word(address) == decode_solana_address(address)

    @pytest.mark.parametrize("value", ["", "0OIl", "1111", "not-base58!"])
    def test_invalid_addresses(self, value):
        assert not is_solana_address(value)
        with pytest.raises(ValueError):
            decode_solana_address(value)


class TestEvmAddress:
    """Tests for hierarchy signer addresses."""

    def test_lowercase_full_address_checksummed(self):
        address = "0x" + "ab" * 20
        normalized = normalize_evm_address(address)
        assert normalized.lower() == address
        assert len(normalized) == 42

    def test_compact_address_zero_extended(self):
        normalized = normalize_evm_address("0xAAAA000000000000000000000000000000000A")
        assert evm_address_bytes(normalized) == bytes.fromhex("00aaaa" + "00" * 16 + "0a")

    def test_bad_checksum_rejected(self):
        valid = normalize_evm_address("0x" + "ab" * 20)
        # Flip the case of the first letter to break EIP-55
        body = valid[2:]
        idx = next(i for i, c in enumerate(body) if c.isalpha())
        flipped = body[:idx] + body[idx].swapcase() + body[idx + 1:]
        with pytest.raises(ValueError, match="checksum"):
            normalize_evm_address("0x" + flipped)

    def test_valid_checksum_accepted(self):
        checksummed = normalize_evm_address("0x" + "ab" * 20)
        assert checksummed != checksummed.lower()
        assert normalize_evm_address(checksummed) == checksummed

    def test_alternating_case_rejected(self):
        with pytest.raises(ValueError, match="checksum"):
            normalize_evm_address("0x" + "aB" * 20)

    def test_uppercase_full_address_accepted(self):
        address = "0x" + "AB" * 20
        assert normalize_evm_address(address).lower() == address.lower()

    @pytest.mark.parametrize("token", ["0xZZZZ", "AAAA", "0x", "0x" + "1" * 41])
    def test_malformed(self, token):
        with pytest.raises(ValueError):
            normalize_evm_address(token)
