"""
Core math primitives, the BigInteger value type, and wire contracts.

This module contains the foundational building blocks; it performs no I/O
apart from loading the bundled JSON schemas.
"""
