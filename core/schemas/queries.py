"""
Schemas & Canonicalization
File: queries.py

Purpose: The closed set of read-only query payloads a client can send.

Every payload carries a ``query_type`` literal that acts as the tag of
the discriminated union ``QueryPayload``. Identifiers are opaque strings;
their syntax is validated by the query service, not here.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class _QueryPayloadBase(BaseModel):
    """Common configuration for all payload variants."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    account_id: str = Field(
        ...,
        description="Account the query is about",
    )


class GetAccount(_QueryPayloadBase):
    """Fetch an account."""

    query_type: Literal["GetAccount"] = "GetAccount"


class GetAccountAssets(_QueryPayloadBase):
    """Fetch all asset balances of an account."""

    query_type: Literal["GetAccountAssets"] = "GetAccountAssets"


class GetAccountDetail(_QueryPayloadBase):
    """Fetch the key/value detail attached to an account."""

    query_type: Literal["GetAccountDetail"] = "GetAccountDetail"


class GetAccountTransactions(_QueryPayloadBase):
    """Fetch transactions created by an account."""

    query_type: Literal["GetAccountTransactions"] = "GetAccountTransactions"


class GetAccountAssetTransactions(_QueryPayloadBase):
    """Fetch an account's transactions that touch one asset."""

    query_type: Literal["GetAccountAssetTransactions"] = "GetAccountAssetTransactions"
    asset_id: str = Field(
        ...,
        description="Asset to filter transactions by",
    )


class GetTransactions(_QueryPayloadBase):
    """
    Fetch transactions by hash.

    ``tx_hashes`` keeps the caller's order and may be empty. It is stored
    as a tuple so the payload stays immutable once selected.
    """

    query_type: Literal["GetTransactions"] = "GetTransactions"
    tx_hashes: tuple[str, ...] = Field(
        default=(),
        description="Transaction hashes, in request order",
    )


class GetSignatories(_QueryPayloadBase):
    """Fetch the public keys allowed to sign for an account."""

    query_type: Literal["GetSignatories"] = "GetSignatories"


class GetAssetInfo(_QueryPayloadBase):
    """Fetch asset metadata."""

    query_type: Literal["GetAssetInfo"] = "GetAssetInfo"
    asset_id: str = Field(
        ...,
        description="Asset to describe",
    )


class GetRoles(_QueryPayloadBase):
    """List the roles defined on the ledger."""

    query_type: Literal["GetRoles"] = "GetRoles"


class GetRolePermissions(_QueryPayloadBase):
    """List the permissions granted by a role."""

    query_type: Literal["GetRolePermissions"] = "GetRolePermissions"
    role_id: str = Field(
        ...,
        description="Role to describe",
    )


QueryPayload = Annotated[
    Union[
        GetAccount,
        GetAccountAssets,
        GetAccountDetail,
        GetAccountTransactions,
        GetAccountAssetTransactions,
        GetTransactions,
        GetSignatories,
        GetAssetInfo,
        GetRoles,
        GetRolePermissions,
    ],
    Field(discriminator="query_type"),
]

# Tag -> variant class
QUERY_TYPES: dict[str, type[_QueryPayloadBase]] = {
    cls.model_fields["query_type"].default: cls
    for cls in (
        GetAccount,
        GetAccountAssets,
        GetAccountDetail,
        GetAccountTransactions,
        GetAccountAssetTransactions,
        GetTransactions,
        GetSignatories,
        GetAssetInfo,
        GetRoles,
        GetRolePermissions,
    )
}

_payload_adapter: TypeAdapter = TypeAdapter(QueryPayload)


def parse_payload(data: dict) -> _QueryPayloadBase:
    """Build the payload variant named by ``data["query_type"]``."""
    return _payload_adapter.validate_python(data)
