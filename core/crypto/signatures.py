"""
Signing primitives.

The query builder depends only on the ``Signer`` protocol; the Ed25519
implementation here is backed by PyNaCl. Ed25519 signatures are
deterministic, so signing the same bytes with the same key always yields
the same signature.
"""

from __future__ import annotations

import logging
from typing import Protocol

from nacl.exceptions import BadSignatureError
from nacl.exceptions import CryptoError as NaClCryptoError
from nacl.signing import SigningKey, VerifyKey

from core.crypto.keys import PRIVATE_KEY_LENGTH, PUBLIC_KEY_LENGTH, Keypair
from core.schemas.errors import CryptoError, ErrorCodes


logger = logging.getLogger(__name__)


class Signer(Protocol):
    """Produces and checks signatures over raw bytes."""

    scheme: str

    def sign(self, payload: bytes, keypair: Keypair) -> bytes:
        """Sign payload with the keypair's private key."""
        ...

    def verify(self, payload: bytes, signature: bytes, public_key: bytes) -> bool:
        """Check a signature against a public key."""
        ...


class Ed25519Signer:
    """Ed25519 signer backed by PyNaCl."""

    scheme = "ed25519"

    def sign(self, payload: bytes, keypair: Keypair) -> bytes:
        """
        Sign payload with the keypair's private key.

        The private key must regenerate the keypair's public key; a
        mismatched pair would produce signatures nobody can verify.

        Raises:
            CryptoError: If the key is malformed, mismatched, or signing fails.
        """
        if keypair.scheme != self.scheme:
            raise CryptoError(
                message=f"unsupported key scheme: {keypair.scheme}",
                code=ErrorCodes.INVALID_KEY,
                details={"scheme": keypair.scheme},
            )
        if len(keypair.private_key) != PRIVATE_KEY_LENGTH:
            raise CryptoError(
                message=f"private key must be {PRIVATE_KEY_LENGTH} bytes, got {len(keypair.private_key)}",
                code=ErrorCodes.INVALID_KEY,
                details={"length": len(keypair.private_key)},
            )

        try:
            signing_key = SigningKey(keypair.private_key)
            if bytes(signing_key.verify_key) != keypair.public_key:
                raise CryptoError(
                    message="private key does not match public key",
                    code=ErrorCodes.INVALID_KEY,
                    details={"public_key": keypair.public_key.hex()},
                )
            return signing_key.sign(payload).signature
        except CryptoError:
            raise
        except (ValueError, TypeError, NaClCryptoError) as e:
            raise CryptoError(
                message=f"signing failed: {e}",
                code=ErrorCodes.SIGNING_FAILED,
                details={"error": type(e).__name__},
            ) from e

    def verify(self, payload: bytes, signature: bytes, public_key: bytes) -> bool:
        """Return True if signature is valid for payload under public_key."""
        if len(public_key) != PUBLIC_KEY_LENGTH:
            return False
        try:
            VerifyKey(public_key).verify(payload, signature)
            return True
        except BadSignatureError:
            return False
        except (ValueError, TypeError, NaClCryptoError) as e:
            logger.debug(f"Signature check rejected input: {e}")
            return False


_default_signer = Ed25519Signer()


def sign(payload: bytes, keypair: Keypair) -> bytes:
    """Sign payload with the default Ed25519 signer."""
    return _default_signer.sign(payload, keypair)


def verify(payload: bytes, signature: bytes, public_key: bytes) -> bool:
    """Verify a signature with the default Ed25519 signer."""
    return _default_signer.verify(payload, signature, public_key)
