"""
Core cryptographic utilities.

Hashing, keypairs and signing used to produce signed queries.
"""
from .hashing import (
    sha256,
    sha3_256,
    hash_canonical,
    to_hex,
    from_hex,
)
from .keys import (
    PRIVATE_KEY_LENGTH,
    PUBLIC_KEY_LENGTH,
    Keypair,
    derive_account_id,
)
from .signatures import (
    Ed25519Signer,
    Signer,
    sign,
    verify,
)

__all__ = [
    "sha256",
    "sha3_256",
    "hash_canonical",
    "to_hex",
    "from_hex",
    "PRIVATE_KEY_LENGTH",
    "PUBLIC_KEY_LENGTH",
    "Keypair",
    "derive_account_id",
    "Ed25519Signer",
    "Signer",
    "sign",
    "verify",
]
