"""
Constants for the urlpack payload codec.

Reference wire format::

    radix85( gzip( content_tag ":" payload_bytes ) ) [filler * 0..3]
"""

from __future__ import annotations

# ===========================================================================
# Alphabet
# ===========================================================================
#
# Every symbol is legal in a URL query parameter. Only the first 32 symbols
# ever carry data (each symbol holds 5 bits); the last symbol is reserved
# as the filler that signals the input length modulo 4.

ALPHABET: str = (
    "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz!$()*,-./:;<=>?@^_`{|}~"
)
"""Canonical 85-character alphabet, ordered by symbol value.

Leaves out '&', '#', '%' and '+', which split, truncate or re-decode query
strings, so a payload containing them is rejected as invalid.
"""

BITS_PER_SYMBOL: int = 5
"""Number of data bits carried by one symbol."""

BITS_PER_BYTE: int = 8
"""Number of bits in one input byte."""

SYMBOL_MASK: int = (1 << BITS_PER_SYMBOL) - 1
"""Mask selecting the low 5 bits of the accumulator."""

BYTE_MASK: int = (1 << BITS_PER_BYTE) - 1
"""Mask selecting the low 8 bits of the accumulator."""

MIN_ALPHABET_SIZE: int = (1 << BITS_PER_SYMBOL) + 1
"""Smallest usable alphabet: 32 data symbols plus a distinct filler."""

FILLER_MODULUS: int = 4
"""The filler count encodes the input byte count modulo this value."""

# ===========================================================================
# Framing
# ===========================================================================

DELIMITER: bytes = b":"
"""Separates the content tag from the payload inside a frame."""

DEFAULT_TEXT_MIME_TYPE: str = "text/html"
"""Content tag used for string input when none is supplied."""

DEFAULT_BINARY_MIME_TYPE: str = "application/octet-stream"
"""Content tag used for binary input when none is supplied."""

TEXT_MIME_PREFIX: str = "text/"
"""Content tags with this prefix decode to text in 'auto' mode."""

TEXT_MIME_TYPES: frozenset[str] = frozenset({"application/json"})
"""Additional content tags that decode to text in 'auto' mode."""

# ===========================================================================
# Compression
# ===========================================================================

COMPRESSION_LEVEL: int = 9
"""gzip effort level; always the maximum."""

GZIP_WBITS: int = 16 + 15
"""zlib window bits selecting a gzip container with a 32 KiB window."""

STREAM_CHUNK_SIZE: int = 16 * 1024
"""Bytes fed to the streaming backend between event loop yields."""

# ===========================================================================
# Size budget
# ===========================================================================

DEFAULT_MAX_SIZE: int = 2083
"""Conservative whole-URL length budget, in characters."""
