"""
Signed query construction for a remote ledger query service.

Exports the builder and the offline verifier.
"""

from .builder import QueryBuilder, QueryDraft
from .verifier import verify_signed_query

__all__ = [
    "QueryBuilder",
    "QueryDraft",
    "verify_signed_query",
]
