"""
Common test fixtures - factory functions for keypairs and queries.
"""

from typing import Any

from core.clock import FrozenClock
from core.crypto.keys import Keypair
from core.schemas.signed_query import SignedQuery
from query_client.builder import QueryBuilder


# Fixed seeds so signatures are reproducible across runs
DEFAULT_SEED = bytes(range(32))
OTHER_SEED = bytes(range(32, 64))

DEFAULT_COUNTER = 5
DEFAULT_CREATED_TIME = 1000


def make_keypair(seed: bytes = DEFAULT_SEED) -> Keypair:
    """Create a deterministic keypair."""
    return Keypair.from_seed(seed)


def make_builder(
    keypair: Keypair | None = None,
    counter: int = DEFAULT_COUNTER,
    created_time: int | None = DEFAULT_CREATED_TIME,
    **kwargs: Any,
) -> QueryBuilder:
    """Create a QueryBuilder with fixed metadata."""
    return QueryBuilder(
        keypair or make_keypair(),
        counter=counter,
        created_time=created_time,
        **kwargs,
    )


def make_signed_query(
    account_id: str = "bob@domain",
    keypair: Keypair | None = None,
    **kwargs: Any,
) -> SignedQuery:
    """Create a signed GetAccountAssets query."""
    return make_builder(keypair, **kwargs).get_account_assets(account_id).finalize()


def make_frozen_clock(ms: int = 1_767_225_600_000) -> FrozenClock:
    return FrozenClock(ms)
