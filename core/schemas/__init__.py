"""
Schemas & Canonicalization

Purpose: Export the public API for the schemas module.
This is the main entry point for other modules to import schema definitions.
"""

# Canonical serialization API
from .canonical import (
    CANONICAL_JSON_SEPARATORS,
    UINT64_MAX,
    canonical_bytes,
    canonicalize_value,
    dumps_canonical,
)

# Error models and exceptions
from .errors import (
    CanonicalizationException,
    CryptoError,
    ErrorCodes,
    LedgerQueryException,
    PayloadAlreadySelectedError,
    QueryError,
    ValidationError,
)

# Query payloads
from .queries import (
    QUERY_TYPES,
    GetAccount,
    GetAccountAssets,
    GetAccountAssetTransactions,
    GetAccountDetail,
    GetAccountTransactions,
    GetAssetInfo,
    GetRolePermissions,
    GetRoles,
    GetSignatories,
    GetTransactions,
    QueryPayload,
    parse_payload,
)

# Signed query
from .signed_query import (
    SignatureEntry,
    SignedQuery,
    build_signing_body,
)

# Verification results
from .verification import (
    CheckResult,
    CheckSeverity,
    VerificationResult,
)

__all__ = [
    # Canonical
    "CANONICAL_JSON_SEPARATORS",
    "UINT64_MAX",
    "canonical_bytes",
    "canonicalize_value",
    "dumps_canonical",
    # Errors
    "CanonicalizationException",
    "CryptoError",
    "ErrorCodes",
    "LedgerQueryException",
    "PayloadAlreadySelectedError",
    "QueryError",
    "ValidationError",
    # Queries
    "QUERY_TYPES",
    "GetAccount",
    "GetAccountAssets",
    "GetAccountAssetTransactions",
    "GetAccountDetail",
    "GetAccountTransactions",
    "GetAssetInfo",
    "GetRolePermissions",
    "GetRoles",
    "GetSignatories",
    "GetTransactions",
    "QueryPayload",
    "parse_payload",
    # Signed query
    "SignatureEntry",
    "SignedQuery",
    "build_signing_body",
    # Verification
    "CheckResult",
    "CheckSeverity",
    "VerificationResult",
]
