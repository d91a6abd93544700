"""
Pluggable gzip compression backends.

Two interchangeable strategies produce and consume standard gzip streams:

  NATIVE: One-shot ``gzip.compress`` / ``gzip.decompress`` executed in a
          worker thread so the event loop stays responsive.

  STREAM: Incremental ``zlib`` compress/decompress objects fed in fixed-size
          chunks, yielding to the event loop between chunks.

Both use compression level 9 and a zero header timestamp. Their headers may
differ by a byte (the OS field), but either backend inflates the other's
output since both speak plain gzip.

Capability is checked by module discovery BEFORE any work starts, so a
missing backend is reported as ``BackendUnavailableError`` rather than as an
import failure halfway through a call.
"""

from __future__ import annotations

import asyncio
import importlib.util
import logging
from functools import lru_cache
from typing import Protocol

from .. import config
from ..exceptions import BackendUnavailableError, CorruptPayloadError
from .constants import COMPRESSION_LEVEL, GZIP_WBITS, STREAM_CHUNK_SIZE

logger = logging.getLogger(__name__)


class CompressionBackend(Protocol):
    """
    Protocol for gzip compression strategies.

    Uses structural subtyping - any class with matching members satisfies it.
    """

    name: str
    """Short identifier used in logs and configuration."""

    async def deflate(self, data: bytes) -> bytes:
        """
        Compress bytes into a gzip stream.

        Args:
            data: Uncompressed bytes.

        Returns:
            gzip-compressed bytes.
        """
        ...

    async def inflate(self, data: bytes) -> bytes:
        """
        Decompress a gzip stream.

        Args:
            data: gzip-compressed bytes.

        Returns:
            Uncompressed bytes.

        Raises:
            CorruptPayloadError: If the data is not a valid gzip stream.
        """
        ...


class NativeGzipBackend:
    """gzip via the standard one-shot module API."""

    name = "native"

    async def deflate(self, data: bytes) -> bytes:
        import gzip

        return await asyncio.to_thread(gzip.compress, data, compresslevel=COMPRESSION_LEVEL, mtime=0)

    async def inflate(self, data: bytes) -> bytes:
        import gzip
        import zlib

        try:
            return await asyncio.to_thread(gzip.decompress, data)
        except (OSError, EOFError, zlib.error) as e:
            raise CorruptPayloadError(str(e) or type(e).__name__) from e


class StreamGzipBackend:
    """gzip via incremental zlib objects."""

    name = "stream"

    def __init__(self, chunk_size: int = STREAM_CHUNK_SIZE) -> None:
        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        self.chunk_size = chunk_size

    async def deflate(self, data: bytes) -> bytes:
        import zlib

        compressor = zlib.compressobj(COMPRESSION_LEVEL, zlib.DEFLATED, GZIP_WBITS)
        out = bytearray()
        view = memoryview(data)
        for start in range(0, len(view), self.chunk_size):
            out += compressor.compress(view[start : start + self.chunk_size])
            await asyncio.sleep(0)
        out += compressor.flush()
        return bytes(out)

    async def inflate(self, data: bytes) -> bytes:
        import zlib

        out = bytearray()
        pending = bytes(data)

        try:
            # A gzip stream may hold several concatenated members.
            while True:
                decompressor = zlib.decompressobj(GZIP_WBITS)
                offset = 0
                while offset < len(pending) and not decompressor.eof:
                    out += decompressor.decompress(pending[offset : offset + self.chunk_size])
                    offset += self.chunk_size
                    await asyncio.sleep(0)
                out += decompressor.flush()

                if not decompressor.eof:
                    raise CorruptPayloadError(
                        "Compressed file ended before the end-of-stream marker was reached"
                    )

                # Bytes past the member end: the tail of the last chunk plus unread chunks.
                # NUL padding between or after members is skipped, as gzip.decompress does.
                pending = (decompressor.unused_data + pending[offset:]).lstrip(b"\x00")
                if not pending:
                    return bytes(out)
        except zlib.error as e:
            raise CorruptPayloadError(str(e)) from e


_BACKENDS: dict[str, tuple[type, tuple[str, ...]]] = {
    "native": (NativeGzipBackend, ("zlib", "gzip")),
    "stream": (StreamGzipBackend, ("zlib",)),
}
"""Backend name -> (implementation, modules it requires)."""


def _has_modules(names: tuple[str, ...]) -> bool:
    """Check that every module can be located without importing it."""
    return all(importlib.util.find_spec(name) is not None for name in names)


def resolve_backend(preference: str = "auto") -> CompressionBackend:
    """
    Pick a compression backend according to a preference.

    Args:
        preference: "native", "stream", or "auto" (native first, then stream).

    Returns:
        A ready-to-use backend instance.

    Raises:
        BackendUnavailableError: If no requested capability is present.
        ValueError: If the preference is not recognized.
    """
    if preference == "auto":
        candidates = ["native", "stream"]
    elif preference in _BACKENDS:
        candidates = [preference]
    else:
        raise ValueError(f"Unknown backend preference: {preference!r}")

    for name in candidates:
        implementation, modules = _BACKENDS[name]
        if _has_modules(modules):
            logger.debug("Resolved compression backend %s (preference=%s)", name, preference)
            return implementation()

    raise BackendUnavailableError(preference)


@lru_cache(maxsize=1)
def default_backend() -> CompressionBackend:
    """Backend selected by ``URLPACK_BACKEND``, resolved once per process."""
    return resolve_backend(config.URLPACK_BACKEND)
