"""
Keypair and Signature Unit Tests
Tests for core/crypto/keys.py and core/crypto/signatures.py
"""
import json

import pytest
from nacl.signing import SigningKey

from core.crypto import (
    Ed25519Signer,
    Keypair,
    derive_account_id,
    sign,
    verify,
)
from core.schemas import CryptoError, ErrorCodes

from fixtures import DEFAULT_SEED


class TestKeypair:
    """Tests for the Keypair value."""

    def test_from_seed_matches_nacl(self):
        keypair = Keypair.from_seed(DEFAULT_SEED)

        assert keypair.public_key == bytes(SigningKey(DEFAULT_SEED).verify_key)
        assert keypair.private_key == DEFAULT_SEED

    def test_from_seed_wrong_length(self):
        with pytest.raises(CryptoError) as exc_info:
            Keypair.from_seed(b"\x00" * 31)

        assert exc_info.value.code == ErrorCodes.INVALID_KEY

    def test_generate_produces_usable_pair(self):
        keypair = Keypair.generate()

        assert len(keypair.public_key) == 32
        assert len(keypair.private_key) == 32
        assert verify(b"msg", sign(b"msg", keypair), keypair.public_key)

    def test_repr_hides_private_key(self, keypair):
        text = repr(keypair)

        assert keypair.private_key.hex() not in text
        assert "private_key" not in text

    def test_frozen(self, keypair):
        with pytest.raises(Exception):
            keypair.public_key = b"x"

    def test_from_hex_invalid(self):
        with pytest.raises(CryptoError):
            Keypair.from_hex("zz", "00")

    def test_save_and_load(self, keypair, tmp_path):
        path = keypair.save(tmp_path / "key.json")

        data = json.loads(path.read_text())
        assert data == {
            "scheme": "ed25519",
            "public_key": keypair.public_key.hex(),
            "private_key": keypair.private_key.hex(),
        }
        assert Keypair.load(path) == keypair

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            Keypair.load(tmp_path / "missing.json")

    def test_load_malformed_file(self, tmp_path):
        path = tmp_path / "key.json"
        path.write_text('{"public_key": "00"}')

        with pytest.raises(CryptoError):
            Keypair.load(path)

    def test_load_unsupported_scheme(self, keypair, tmp_path):
        path = tmp_path / "key.json"
        data = keypair.to_dict()
        data["scheme"] = "secp256k1"
        path.write_text(json.dumps(data))

        with pytest.raises(CryptoError, match="unsupported key scheme"):
            Keypair.load(path)

    def test_derive_account_id(self, keypair):
        assert derive_account_id(keypair.public_key) == keypair.public_key.hex()


class TestEd25519Signer:
    """Tests for Ed25519Signer."""

    def test_sign_is_deterministic(self, keypair):
        signer = Ed25519Signer()

        assert signer.sign(b"payload", keypair) == signer.sign(b"payload", keypair)

    def test_sign_verify(self, keypair):
        signer = Ed25519Signer()
        signature = signer.sign(b"payload", keypair)

        assert len(signature) == 64
        assert signer.verify(b"payload", signature, keypair.public_key)

    def test_verify_rejects_other_message(self, keypair):
        signature = sign(b"payload", keypair)

        assert not verify(b"payload!", signature, keypair.public_key)

    def test_verify_rejects_other_key(self, keypair, other_keypair):
        signature = sign(b"payload", keypair)

        assert not verify(b"payload", signature, other_keypair.public_key)

    def test_verify_rejects_bad_public_key_length(self, keypair):
        signature = sign(b"payload", keypair)

        assert not verify(b"payload", signature, b"\x00" * 5)

    def test_verify_rejects_bad_signature_length(self, keypair):
        assert not verify(b"payload", b"\x00" * 10, keypair.public_key)

    def test_mismatched_pair(self, keypair, other_keypair):
        bad = Keypair(public_key=other_keypair.public_key, private_key=keypair.private_key)

        with pytest.raises(CryptoError, match="does not match"):
            sign(b"payload", bad)

    def test_wrong_private_key_length(self, keypair):
        bad = Keypair(public_key=keypair.public_key, private_key=b"\x00" * 64)

        with pytest.raises(CryptoError) as exc_info:
            sign(b"payload", bad)

        assert exc_info.value.code == ErrorCodes.INVALID_KEY

    def test_unsupported_scheme(self, keypair):
        bad = Keypair(public_key=keypair.public_key, private_key=keypair.private_key, scheme="rsa")

        with pytest.raises(CryptoError, match="unsupported key scheme"):
            sign(b"payload", bad)

    def test_non_bytes_private_key(self, keypair):
        bad = Keypair(public_key=keypair.public_key, private_key="a" * 32)

        with pytest.raises(CryptoError) as exc_info:
            sign(b"payload", bad)

        assert exc_info.value.code == ErrorCodes.SIGNING_FAILED
