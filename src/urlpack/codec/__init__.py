"""
URL-safe compressed payload codec.

Usage::

    from urlpack.codec import compress, decompress

    result = await compress("<h1>Hello</h1>")
    original = await decompress(result.payload)

The wire format is::

    radix85( gzip( content_tag ":" payload_bytes ) )
"""

from __future__ import annotations

from .backend import (
    CompressionBackend,
    NativeGzipBackend,
    StreamGzipBackend,
    default_backend,
    resolve_backend,
)
from .facade import compress, decompress, is_text_mime_type, normalize_whitespace
from .framing import frame, unframe
from .models import CompressOptions, CompressResult, DecompressOptions, DecompressResult
from .radix import Radix85Codec

__all__ = [
    # Core API
    "compress",
    "decompress",
    # Models
    "CompressOptions",
    "CompressResult",
    "DecompressOptions",
    "DecompressResult",
    # Building blocks
    "frame",
    "unframe",
    "Radix85Codec",
    # Backends
    "CompressionBackend",
    "NativeGzipBackend",
    "StreamGzipBackend",
    "default_backend",
    "resolve_backend",
    # Utilities
    "is_text_mime_type",
    "normalize_whitespace",
]
