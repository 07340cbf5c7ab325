"""
Hashing Unit Tests
Tests for core/crypto/hashing.py

Tests:
- sha256 / sha3_256 known values
- hash_canonical stability for dict key ordering differences
- to_hex/from_hex
"""
import hashlib

import pytest

from core.crypto.hashing import (
    sha256,
    sha3_256,
    hash_canonical,
    to_hex,
    from_hex,
)
from core.schemas import canonical_bytes


class TestDigests:
    """Tests for sha256() and sha3_256()."""

    def test_sha256_known_value(self):
        assert sha256(b"hello") == hashlib.sha256(b"hello").digest()

    def test_sha3_256_known_value(self):
        # SHA3-256("") from FIPS 202 test vectors
        assert sha3_256(b"").hex() == (
            "a7ffc6f8bf1ed76651c14756a061d662f580ff4de43b49fa82d80a4b80f8434a"
        )

    def test_sha3_differs_from_sha256(self):
        assert sha3_256(b"hello") != sha256(b"hello")


class TestHashCanonical:
    """Tests for hash_canonical()."""

    def test_matches_sha3_of_canonical_bytes(self):
        obj = {"query_counter": 1, "creator_account_id": "a"}

        assert hash_canonical(obj) == sha3_256(canonical_bytes(obj))

    def test_stable_for_key_order(self):
        dict1 = {"zebra": 1, "apple": 2, "mango": 3}
        dict2 = {"apple": 2, "mango": 3, "zebra": 1}

        assert hash_canonical(dict1) == hash_canonical(dict2)

    def test_list_order_matters(self):
        assert hash_canonical({"tx_hashes": ["a", "b"]}) != hash_canonical({"tx_hashes": ["b", "a"]})


class TestHex:
    """Tests for to_hex() / from_hex()."""

    def test_to_hex(self):
        assert to_hex(bytes.fromhex("deadbeef")) == "0xdeadbeef"

    def test_from_hex(self):
        assert from_hex("0xdeadbeef") == bytes.fromhex("deadbeef")

    def test_from_hex_requires_prefix(self):
        with pytest.raises(ValueError, match="0x"):
            from_hex("deadbeef")

    def test_from_hex_odd_length(self):
        with pytest.raises(ValueError, match="even length"):
            from_hex("0xabc")

    def test_from_hex_invalid_chars(self):
        with pytest.raises(ValueError, match="Invalid hex"):
            from_hex("0xzz")
