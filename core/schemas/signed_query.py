"""
Schemas & Canonicalization
File: signed_query.py

Purpose: The immutable signed query handed to transport.

A SignedQuery is only produced by QueryBuilder.finalize(). The signature
covers the canonical serialization of ``signing_body()``: every field
except the signature itself.
"""

from typing import Any, Callable

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from .canonical import UINT64_MAX, canonical_bytes
from .queries import QueryPayload


Serializer = Callable[[Any], bytes]


def _bytes_from_hex(value: Any) -> Any:
    if isinstance(value, str):
        return bytes.fromhex(value)
    return value


class SignatureEntry(BaseModel):
    """Public key and signature bytes attached to a signed query."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    public_key: bytes = Field(
        ...,
        description="Signer's public key",
    )
    signature: bytes = Field(
        ...,
        description="Signature over the canonical signing body",
    )

    @field_validator("public_key", "signature", mode="before")
    @classmethod
    def _decode_hex(cls, value: Any) -> Any:
        return _bytes_from_hex(value)

    @field_serializer("public_key", "signature", when_used="json")
    def _encode_hex(self, value: bytes) -> str:
        return value.hex()


def build_signing_body(
    creator_account_id: str,
    created_time: int,
    query_counter: int,
    payload: BaseModel,
) -> dict[str, Any]:
    """The exact set of fields a query signature covers."""
    return {
        "creator_account_id": creator_account_id,
        "created_time": created_time,
        "query_counter": query_counter,
        "payload": payload,
    }


class SignedQuery(BaseModel):
    """
    A finalized, signed, read-only query.

    Instances are frozen; two finalize calls always produce two
    independent instances.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    creator_account_id: str = Field(
        ...,
        description="Identity of the query creator",
    )
    created_time: int = Field(
        ...,
        description="Creation time in milliseconds since epoch",
        ge=0,
        le=UINT64_MAX,
    )
    query_counter: int = Field(
        ...,
        description="Caller-assigned counter for replay/ordering disambiguation",
        ge=1,
        le=UINT64_MAX,
    )
    payload: QueryPayload = Field(
        ...,
        description="The selected query",
    )
    signature: SignatureEntry = Field(
        ...,
        description="Signature over signing_body()",
    )

    @property
    def query_type(self) -> str:
        return self.payload.query_type

    def signing_body(self) -> dict[str, Any]:
        """Fields covered by the signature."""
        return build_signing_body(
            creator_account_id=self.creator_account_id,
            created_time=self.created_time,
            query_counter=self.query_counter,
            payload=self.payload,
        )

    def signing_bytes(self, serializer: Serializer = canonical_bytes) -> bytes:
        """Serialized signing body, i.e. the exact bytes that were signed."""
        return serializer(self.signing_body())

    def hash(self, serializer: Serializer = canonical_bytes) -> bytes:
        """SHA3-256 of the signing bytes; identifies the query."""
        from core.crypto.hashing import sha3_256

        return sha3_256(self.signing_bytes(serializer))

    def hash_hex(self, serializer: Serializer = canonical_bytes) -> str:
        return self.hash(serializer).hex()

    def equals_excluding_created_time(self, other: "SignedQuery") -> bool:
        """Compare creator, counter and payload, ignoring creation time and signature."""
        return (
            self.creator_account_id == other.creator_account_id
            and self.query_counter == other.query_counter
            and self.payload == other.payload
        )

    def to_json(self, indent: int | None = None) -> str:
        """JSON transport form; bytes fields are hex encoded."""
        return self.model_dump_json(indent=indent)

    @classmethod
    def from_json(cls, data: str | bytes) -> "SignedQuery":
        return cls.model_validate_json(data)
