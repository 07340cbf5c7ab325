"""
Keypair value and helpers.

Key generation and storage belong to the caller's key-management layer;
the helpers here exist for tests and the CLI. A Keypair is immutable and
is referenced, never copied, by the query builder.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

from nacl.signing import SigningKey

from core.schemas.errors import CryptoError, ErrorCodes


logger = logging.getLogger(__name__)

# Ed25519 sizes in bytes
PUBLIC_KEY_LENGTH = 32
PRIVATE_KEY_LENGTH = 32


@dataclass(frozen=True)
class Keypair:
    """
    Ed25519 public/private key pair.

    ``private_key`` is the 32-byte seed. It is excluded from repr so it
    does not leak into logs or tracebacks.
    """
    public_key: bytes
    private_key: bytes = field(repr=False)
    scheme: str = "ed25519"

    @property
    def public_key_hex(self) -> str:
        return self.public_key.hex()

    @classmethod
    def generate(cls) -> "Keypair":
        """Generate a fresh random keypair."""
        signing_key = SigningKey.generate()
        return cls(
            public_key=bytes(signing_key.verify_key),
            private_key=bytes(signing_key),
        )

    @classmethod
    def from_seed(cls, seed: bytes) -> "Keypair":
        """
        Derive a keypair from a 32-byte seed.

        Raises:
            CryptoError: If the seed has the wrong length.
        """
        if len(seed) != PRIVATE_KEY_LENGTH:
            raise CryptoError(
                message=f"private key must be {PRIVATE_KEY_LENGTH} bytes, got {len(seed)}",
                code=ErrorCodes.INVALID_KEY,
                details={"length": len(seed)},
            )
        signing_key = SigningKey(seed)
        return cls(public_key=bytes(signing_key.verify_key), private_key=seed)

    @classmethod
    def from_hex(cls, public_key_hex: str, private_key_hex: str) -> "Keypair":
        """
        Build a keypair from hex strings without checking they match.

        A mismatched pair is reported by the signer at signing time.
        """
        try:
            return cls(
                public_key=bytes.fromhex(public_key_hex),
                private_key=bytes.fromhex(private_key_hex),
            )
        except ValueError as e:
            raise CryptoError(
                message=f"invalid hex key material: {e}",
                code=ErrorCodes.INVALID_KEY,
            ) from e

    def to_dict(self) -> dict[str, str]:
        return {
            "scheme": self.scheme,
            "public_key": self.public_key.hex(),
            "private_key": self.private_key.hex(),
        }

    def save(self, path: str | Path) -> Path:
        """Write the keypair to a JSON key file."""
        path = Path(path)
        path.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info(f"Wrote keypair {self.public_key_hex[:16]}... to {path}")
        return path

    @classmethod
    def load(cls, path: str | Path) -> "Keypair":
        """
        Load a keypair from a JSON key file written by ``save``.

        Raises:
            FileNotFoundError: If the key file is missing.
            CryptoError: If the file does not hold usable key material.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Key file not found: {path}")

        try:
            data = json.loads(path.read_text())
            public_key_hex = data["public_key"]
            private_key_hex = data["private_key"]
        except (ValueError, KeyError, TypeError) as e:
            raise CryptoError(
                message=f"malformed key file {path}: {e}",
                code=ErrorCodes.INVALID_KEY,
                details={"path": str(path)},
            ) from e

        keypair = cls.from_hex(public_key_hex, private_key_hex)
        scheme = data.get("scheme", keypair.scheme)
        if scheme != keypair.scheme:
            raise CryptoError(
                message=f"unsupported key scheme: {scheme}",
                code=ErrorCodes.INVALID_KEY,
                details={"scheme": scheme},
            )
        return keypair


def derive_account_id(public_key: bytes) -> str:
    """Creator identity derived from a public key: its lowercase hex."""
    return public_key.hex()
