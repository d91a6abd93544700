"""
Process-wide configuration for urlpack.

Settings are read once from the environment at import time.
"""

import os

_SUPPORTED_BACKENDS: list[str] = ["auto", "native", "stream"]

URLPACK_BACKEND = os.environ.get("URLPACK_BACKEND", "auto").lower()
"""Compression backend preference ('auto', 'native' or 'stream'). Defaults to 'auto'."""

if URLPACK_BACKEND not in _SUPPORTED_BACKENDS:
    raise ValueError(
        f"Invalid URLPACK_BACKEND environment variable: '{URLPACK_BACKEND}'. "
        f"Supported values: {_SUPPORTED_BACKENDS}"
    )

_raw_max_size = os.environ.get("URLPACK_MAX_SIZE", "2083")

if not _raw_max_size.isdigit() or int(_raw_max_size) <= 0:
    raise ValueError(
        f"Invalid URLPACK_MAX_SIZE environment variable: '{_raw_max_size}'. "
        "Expected a positive integer."
    )

URLPACK_MAX_SIZE = int(_raw_max_size)
"""Default maximum encoded payload length in characters. Defaults to 2083."""
