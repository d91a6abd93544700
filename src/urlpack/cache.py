"""
Caller-side memoization of compress results.

Editors re-encode the whole document on every keystroke, usually with input
they have already seen (undo, redo, retyping). The cache maps raw input and
options to the previous result so those calls skip compression.

The codec itself never consults this cache; callers own it explicitly.
"""

from __future__ import annotations

import logging
from collections import OrderedDict

from .codec import CompressionBackend, CompressOptions, CompressResult, compress

logger = logging.getLogger(__name__)

CacheKey = tuple[str | bytes, CompressOptions]


class PayloadCache:
    """
    Bounded least-recently-used cache of compress results.

    Failed compressions are never stored, so an oversized input is retried
    in full (and fails again) on the next call.
    """

    def __init__(self, maxsize: int = 128) -> None:
        if maxsize <= 0:
            raise ValueError(f"maxsize must be positive, got {maxsize}")
        self.maxsize = maxsize
        self.hits = 0
        self.misses = 0
        self._entries: OrderedDict[CacheKey, CompressResult] = OrderedDict()

    def __len__(self) -> int:
        return len(self._entries)

    def clear(self) -> None:
        """Drop all entries and reset the counters."""
        self._entries.clear()
        self.hits = 0
        self.misses = 0

    async def get_or_compress(
        self,
        data: str | bytes | bytearray | memoryview,
        options: CompressOptions | None = None,
        *,
        backend: CompressionBackend | None = None,
    ) -> CompressResult:
        """
        Return the cached result for this input, compressing on a miss.

        Args:
            data: Input passed through to ``compress``.
            options: Options passed through to ``compress``.
            backend: Backend passed through to ``compress`` on a miss.

        Returns:
            The compress result.
        """
        options = options or CompressOptions()
        key: CacheKey = (data if isinstance(data, str) else bytes(data), options)

        cached = self._entries.get(key)
        if cached is not None:
            self.hits += 1
            self._entries.move_to_end(key)
            return cached

        self.misses += 1
        result = await compress(data, options, backend=backend)

        self._entries[key] = result
        if len(self._entries) > self.maxsize:
            self._entries.popitem(last=False)
            logger.debug("Evicted least recently used payload (maxsize=%d)", self.maxsize)

        return result
