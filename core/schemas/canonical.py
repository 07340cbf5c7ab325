"""
Schemas & Canonicalization
File: canonical.py

Purpose: Deterministic serialization of query drafts. The bytes produced
here are exactly what gets signed on the client and reconstructed by the
query service for verification.

CRITICAL: All outputs from this module MUST be deterministic across runs.
"""

import json
import math
from enum import Enum
from typing import Any

from pydantic import BaseModel

from .errors import CanonicalizationException

# Canonical JSON separators - no whitespace
CANONICAL_JSON_SEPARATORS: tuple[str, str] = (",", ":")

# Largest value a uint64 wire field can carry
UINT64_MAX: int = 2**64 - 1


def _validate_float(value: float, path: str = "") -> None:
    """
    Validate that a float is finite (not NaN or Infinity).

    Raises:
        CanonicalizationException: If the float is NaN or Infinity.
    """
    if not math.isfinite(value):
        raise CanonicalizationException(
            message=f"Non-finite float value encountered: {value}",
            details={"path": path, "value": str(value)},
        )


def _validate_str(value: str, path: str = "") -> None:
    """
    Validate that a string can be encoded as UTF-8 (no lone surrogates).

    Raises:
        CanonicalizationException: If the string is not encodable.
    """
    try:
        value.encode("utf-8")
    except UnicodeEncodeError as e:
        raise CanonicalizationException(
            message=f"String is not valid UTF-8: {e.reason} at position {e.start}",
            details={"path": path, "value": repr(value)},
        ) from e


def canonicalize_value(value: Any, path: str = "") -> Any:
    """
    Recursively canonicalize a value for deterministic JSON serialization.

    Args:
        value: Any Python value to canonicalize.
        path: Current path for error reporting.

    Returns:
        A JSON-serializable canonical representation.

    Raises:
        CanonicalizationException: If the value cannot be canonicalized
            (e.g., NaN floats or unsupported types).
    """
    if value is None:
        return None

    if isinstance(value, bool):
        # Must check bool before int since bool is subclass of int
        return value

    if isinstance(value, int):
        return value

    if isinstance(value, float):
        _validate_float(value, path)
        return value

    if isinstance(value, str):
        _validate_str(value, path)
        return value

    if isinstance(value, Enum):
        return value.value

    if isinstance(value, BaseModel):
        dumped = value.model_dump(
            mode="json",
            by_alias=True,
            exclude_none=True,
        )
        return canonicalize_value(dumped, path)

    if isinstance(value, dict):
        # Keys are sorted during JSON serialization
        result = {}
        for k, v in value.items():
            if v is None:
                continue
            key_path = f"{path}.{k}" if path else str(k)
            if isinstance(k, str):
                _validate_str(k, key_path)
            result[k] = canonicalize_value(v, key_path)
        return result

    if isinstance(value, (list, tuple)):
        # Order is significant (e.g. tx_hashes) and is preserved
        return [
            canonicalize_value(item, f"{path}[{i}]")
            for i, item in enumerate(value)
        ]

    if isinstance(value, (bytes, bytearray)):
        return bytes(value).hex()

    raise CanonicalizationException(
        message=f"Cannot canonicalize value of type {type(value).__name__}",
        details={"path": path, "type": type(value).__name__},
    )


def dumps_canonical(obj: Any) -> str:
    """
    Serialize an object to canonical JSON string.

    Args:
        obj: A Pydantic model, dict, or other serializable object.

    Returns:
        A canonical JSON string with:
            - Sorted keys
            - No extra whitespace
            - None fields excluded
            - Bytes as lowercase hex
            - Enums as their values
            - No NaN/Infinity floats

    Raises:
        CanonicalizationException: If serialization fails.

    Example:
        >>> dumps_canonical({"query_counter": 5, "created_time": 1000})
        '{"created_time":1000,"query_counter":5}'
    """
    try:
        canonicalized = canonicalize_value(obj)
        return json.dumps(
            canonicalized,
            sort_keys=True,
            separators=CANONICAL_JSON_SEPARATORS,
            ensure_ascii=False,
        )
    except CanonicalizationException:
        raise
    except Exception as e:
        raise CanonicalizationException(
            message=f"Failed to serialize to canonical JSON: {e}",
            details={"type": type(obj).__name__, "error": str(e)},
        ) from e


def canonical_bytes(obj: Any) -> bytes:
    """
    Default serializer for signing: canonical JSON encoded as UTF-8.

    Any callable with the same shape (object -> bytes) can replace it,
    e.g. a protobuf encoder matching the service's wire schema.

    Raises:
        CanonicalizationException: If serialization or UTF-8 encoding fails.
    """
    text = dumps_canonical(obj)
    try:
        return text.encode("utf-8")
    except UnicodeEncodeError as e:
        raise CanonicalizationException(
            message=f"Canonical JSON is not valid UTF-8: {e.reason} at position {e.start}",
            details={"type": type(obj).__name__, "position": e.start},
        ) from e
