"""
URL-safe compressed payloads.

Turn a document into a short string that fits in a URL query parameter and
get it back losslessly::

    from urlpack import build_share_url, compress, decompress, extract_payload

    result = await compress("<h1>Hello</h1>")
    url = build_share_url("https://example.com/", result.payload)

    restored = await decompress(extract_payload(url))
    assert restored.data == "<h1>Hello</h1>"
"""

from __future__ import annotations

from .cache import PayloadCache
from .codec import (
    CompressOptions,
    CompressResult,
    DecompressOptions,
    DecompressResult,
    compress,
    decompress,
)
from .exceptions import (
    BackendUnavailableError,
    CorruptPayloadError,
    InvalidInputTypeError,
    InvalidSymbolError,
    MissingDelimiterError,
    PayloadTooLargeError,
    UrlPackError,
)
from .share import build_share_url, extract_payload

__all__ = [
    # Core API
    "compress",
    "decompress",
    "CompressOptions",
    "CompressResult",
    "DecompressOptions",
    "DecompressResult",
    # Caller-side helpers
    "PayloadCache",
    "build_share_url",
    "extract_payload",
    # Exceptions
    "UrlPackError",
    "BackendUnavailableError",
    "CorruptPayloadError",
    "InvalidInputTypeError",
    "InvalidSymbolError",
    "MissingDelimiterError",
    "PayloadTooLargeError",
]
