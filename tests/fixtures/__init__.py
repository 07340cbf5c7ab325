"""
Test fixtures package for query client tests.

This package provides factory functions for creating test objects.
- common.py: keypair, builder and signed query factories

Usage:
    from fixtures import make_builder, make_signed_query

    def test_something():
        signed = make_builder().get_roles("bob@domain").finalize()
"""

from .common import (
    DEFAULT_COUNTER,
    DEFAULT_CREATED_TIME,
    DEFAULT_SEED,
    OTHER_SEED,
    make_builder,
    make_frozen_clock,
    make_keypair,
    make_signed_query,
)

__all__ = [
    "DEFAULT_COUNTER",
    "DEFAULT_CREATED_TIME",
    "DEFAULT_SEED",
    "OTHER_SEED",
    "make_builder",
    "make_frozen_clock",
    "make_keypair",
    "make_signed_query",
]
