"""
Query Builder

Assembles one read-only query, stamps it with replay-prevention metadata
and signs it.

Usage:
    signed = (
        QueryBuilder(keypair, counter=5, created_time=1000)
        .get_account_assets("bob@domain")
        .finalize()
    )

The builder mutates its own draft in place and returns itself from every
payload-selecting method. Counter and created time are fixed at
construction. The builder is not thread-safe; use one per thread.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any, Callable, Optional, Sequence

from core.clock import Clock, RealClock
from core.crypto.keys import Keypair, derive_account_id
from core.crypto.signatures import Ed25519Signer, Signer
from core.schemas.canonical import UINT64_MAX, canonical_bytes
from core.schemas.errors import (
    CryptoError,
    ErrorCodes,
    PayloadAlreadySelectedError,
    ValidationError,
)
from core.schemas.queries import (
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
)
from core.schemas.signed_query import SignatureEntry, SignedQuery, build_signing_body

if TYPE_CHECKING:
    from core.config import RuntimeConfig


logger = logging.getLogger(__name__)


@dataclass
class QueryDraft:
    """In-progress query request owned by a QueryBuilder."""
    creator_account_id: str
    query_counter: int
    created_time: int
    payload: Optional[QueryPayload] = None

    def signing_body(self) -> dict[str, Any]:
        if self.payload is None:
            raise ValidationError(
                message="no payload selected",
                code=ErrorCodes.PAYLOAD_MISSING,
                field_path="payload",
            )
        return build_signing_body(
            creator_account_id=self.creator_account_id,
            created_time=self.created_time,
            query_counter=self.query_counter,
            payload=self.payload,
        )


class QueryBuilder:
    """
    Builds and signs a single query.

    Args:
        keypair: Signing keypair. Held by reference for the builder's lifetime.
        counter: Positive replay/ordering counter (default 1).
        created_time: Creation time in ms since epoch; taken from ``clock``
            when omitted.
        clock: Time source for the default created time (default RealClock).
        creator_account_id: Explicit creator identity; derived from the
            public key when omitted.
        signer: Signing primitive (default Ed25519Signer).
        serializer: Canonical serializer producing the signed bytes
            (default canonical JSON).
        strict_selection: Raise on a second payload selection instead of
            overwriting the first.

    Raises:
        ValidationError: If counter or created_time is out of range.
    """

    def __init__(
        self,
        keypair: Keypair,
        counter: int = 1,
        created_time: Optional[int] = None,
        *,
        clock: Optional[Clock] = None,
        creator_account_id: Optional[str] = None,
        signer: Optional[Signer] = None,
        serializer: Optional[Callable[[Any], bytes]] = None,
        strict_selection: bool = False,
    ) -> None:
        if created_time is None:
            created_time = (clock or RealClock()).now_ms()

        _check_uint64(counter, "query_counter", ErrorCodes.INVALID_COUNTER, minimum=1)
        _check_uint64(created_time, "created_time", ErrorCodes.INVALID_CREATED_TIME, minimum=0)

        if creator_account_id is None:
            creator_account_id = derive_account_id(keypair.public_key)

        self._keypair = keypair
        self._signer: Signer = signer or Ed25519Signer()
        self._serializer = serializer or canonical_bytes
        self._strict_selection = strict_selection
        self._draft = QueryDraft(
            creator_account_id=creator_account_id,
            query_counter=counter,
            created_time=created_time,
        )

    @classmethod
    def from_config(
        cls,
        keypair: Keypair,
        config: "RuntimeConfig",
        **overrides: Any,
    ) -> "QueryBuilder":
        """Create a builder using the query defaults from a RuntimeConfig."""
        overrides.setdefault("counter", config.query.default_counter)
        overrides.setdefault("strict_selection", config.query.strict_selection)
        return cls(keypair, **overrides)

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def keypair(self) -> Keypair:
        return self._keypair

    @property
    def creator_account_id(self) -> str:
        return self._draft.creator_account_id

    @property
    def counter(self) -> int:
        return self._draft.query_counter

    @property
    def created_time(self) -> int:
        return self._draft.created_time

    @property
    def payload(self) -> Optional[QueryPayload]:
        return self._draft.payload

    @property
    def draft(self) -> QueryDraft:
        """A snapshot of the current draft."""
        return replace(self._draft)

    # ------------------------------------------------------------------
    # Payload selection
    # ------------------------------------------------------------------

    def select(self, payload: QueryPayload) -> "QueryBuilder":
        """
        Set the draft payload.

        A previously selected payload is overwritten (last write wins)
        unless the builder is strict.

        Raises:
            PayloadAlreadySelectedError: Strict builder with a payload already set.
        """
        current = self._draft.payload
        if current is not None:
            if self._strict_selection:
                raise PayloadAlreadySelectedError(
                    current=current.query_type,
                    requested=payload.query_type,
                )
            logger.warning(
                f"Overwriting selected payload {current.query_type} with {payload.query_type}"
            )
        self._draft.payload = payload
        return self

    def reset_payload(self) -> "QueryBuilder":
        """Clear the selected payload."""
        self._draft.payload = None
        return self

    def get_account(self, account_id: str) -> "QueryBuilder":
        return self.select(GetAccount(account_id=account_id))

    def get_account_assets(self, account_id: str) -> "QueryBuilder":
        return self.select(GetAccountAssets(account_id=account_id))

    def get_account_detail(self, account_id: str) -> "QueryBuilder":
        return self.select(GetAccountDetail(account_id=account_id))

    def get_account_transactions(self, account_id: str) -> "QueryBuilder":
        return self.select(GetAccountTransactions(account_id=account_id))

    def get_account_asset_transactions(self, account_id: str, asset_id: str) -> "QueryBuilder":
        return self.select(
            GetAccountAssetTransactions(account_id=account_id, asset_id=asset_id)
        )

    def get_transactions(self, account_id: str, tx_hashes: Sequence[str]) -> "QueryBuilder":
        """
        Select GetTransactions; hash order is preserved and may be empty.

        A bare string is rejected rather than split into one hash per
        character; pass ``[tx_hash]`` for a single hash.

        Raises:
            ValidationError: If tx_hashes is a string.
        """
        if isinstance(tx_hashes, str):
            raise ValidationError(
                message="tx_hashes must be a sequence of hashes, not a single string",
                field_path="tx_hashes",
            )
        return self.select(
            GetTransactions(account_id=account_id, tx_hashes=tuple(tx_hashes))
        )

    def get_signatories(self, account_id: str) -> "QueryBuilder":
        return self.select(GetSignatories(account_id=account_id))

    def get_asset_info(self, account_id: str, asset_id: str) -> "QueryBuilder":
        return self.select(GetAssetInfo(account_id=account_id, asset_id=asset_id))

    def get_roles(self, account_id: str) -> "QueryBuilder":
        return self.select(GetRoles(account_id=account_id))

    def get_role_permissions(self, account_id: str, role_id: str) -> "QueryBuilder":
        return self.select(GetRolePermissions(account_id=account_id, role_id=role_id))

    # ------------------------------------------------------------------
    # Finalize
    # ------------------------------------------------------------------

    def finalize(self) -> SignedQuery:
        """
        Serialize, sign and snapshot the draft.

        The draft is left untouched, so the builder can be finalized
        again; each call returns a new SignedQuery.

        Raises:
            ValidationError: If no payload has been selected.
            CryptoError: If the signer rejects the key or fails.
            CanonicalizationException: If the draft cannot be serialized.
        """
        body = self._draft.signing_body()
        message = self._serializer(body)

        try:
            signature = self._signer.sign(message, self._keypair)
        except CryptoError as e:
            logger.warning(f"Signing failed for {self._draft.payload.query_type}: {e.message}")
            raise

        signed = SignedQuery(
            creator_account_id=self._draft.creator_account_id,
            created_time=self._draft.created_time,
            query_counter=self._draft.query_counter,
            payload=self._draft.payload,
            signature=SignatureEntry(
                public_key=self._keypair.public_key,
                signature=signature,
            ),
        )
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                f"Signed {signed.query_type} counter={signed.query_counter} "
                f"hash={signed.hash_hex(self._serializer)}"
            )
        return signed


def _check_uint64(value: Any, field_path: str, code: str, minimum: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(
            message=f"{field_path} must be an integer, got {type(value).__name__}",
            code=code,
            field_path=field_path,
        )
    if value < minimum or value > UINT64_MAX:
        raise ValidationError(
            message=f"{field_path} must be between {minimum} and {UINT64_MAX}, got {value}",
            code=code,
            field_path=field_path,
            details={"value": value},
        )
