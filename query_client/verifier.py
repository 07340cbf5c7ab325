"""
Signed Query Verification

Offline re-check of a SignedQuery: rebuilds the canonical signing bytes
and verifies the attached signature, the same way the query service
would before executing the query.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from core.crypto.keys import PUBLIC_KEY_LENGTH
from core.crypto.signatures import Ed25519Signer, Signer
from core.schemas.canonical import canonical_bytes
from core.schemas.errors import LedgerQueryException
from core.schemas.signed_query import SignedQuery
from core.schemas.verification import CheckResult, VerificationResult


logger = logging.getLogger(__name__)


def verify_signed_query(
    signed: SignedQuery,
    expected_public_key: Optional[bytes] = None,
    *,
    signer: Optional[Signer] = None,
    serializer: Callable[[Any], bytes] = canonical_bytes,
) -> VerificationResult:
    """
    Verify the signature of a signed query.

    Args:
        signed: The query to check.
        expected_public_key: If given, the query must be signed by this key.
        signer: Signature primitive (default Ed25519Signer).
        serializer: Must match the serializer used when signing.

    Returns:
        VerificationResult with checks:
        - public_key_format
        - public_key_expected (only when expected_public_key is given)
        - signature_valid
    """
    signer = signer or Ed25519Signer()
    public_key = signed.signature.public_key
    result = VerificationResult(ok=True)

    if len(public_key) == PUBLIC_KEY_LENGTH:
        result.add_check(CheckResult.passed("public_key_format", "Public key has expected length"))
    else:
        result.add_check(CheckResult.failed(
            "public_key_format",
            f"Public key must be {PUBLIC_KEY_LENGTH} bytes, got {len(public_key)}",
            details={"length": len(public_key)},
        ))

    if expected_public_key is not None:
        if public_key == expected_public_key:
            result.add_check(CheckResult.passed("public_key_expected", "Signed by expected key"))
        else:
            result.add_check(CheckResult.failed(
                "public_key_expected",
                "Query was signed by an unexpected key",
                details={
                    "expected": expected_public_key.hex(),
                    "actual": public_key.hex(),
                },
            ))

    try:
        message = signed.signing_bytes(serializer)
    except LedgerQueryException as e:
        logger.warning(f"Could not serialize query for verification: {e.message}")
        result.ok = False
        result.error = e.to_error_model()
        return result

    if signer.verify(message, signed.signature.signature, public_key):
        result.add_check(CheckResult.passed(
            "signature_valid",
            "Signature verifies over the canonical query",
            details={"query_hash": signed.hash_hex(serializer)},
        ))
    else:
        result.add_check(CheckResult.failed(
            "signature_valid",
            "Signature does not verify over the canonical query",
        ))

    if not result.ok:
        failed = [check.check_id for check in result.get_failed_checks()]
        logger.info(f"Signed {signed.query_type} failed verification: {failed}")
    return result
