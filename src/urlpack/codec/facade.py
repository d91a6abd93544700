"""
Public compress/decompress operations.

The facade sequences the codec stages::

    compress:    input -> [normalize] -> frame -> deflate -> radix85 -> size check
    decompress:  payload -> radix85 -> inflate -> unframe -> [decode text]

Both operations are coroutines. They keep no state between calls, so any
number may run concurrently. The only suspension points are inside the
compression backend.
"""

from __future__ import annotations

import logging
import re

from ..exceptions import InvalidInputTypeError, PayloadTooLargeError
from . import radix
from .backend import CompressionBackend, default_backend
from .constants import TEXT_MIME_PREFIX, TEXT_MIME_TYPES
from .framing import frame, unframe
from .models import CompressOptions, CompressResult, DecompressOptions, DecompressResult

logger = logging.getLogger(__name__)

_WHITESPACE_RUN = re.compile(r"\s+")


def normalize_whitespace(text: str) -> str:
    """Collapse every whitespace run to one space and trim both ends."""
    return _WHITESPACE_RUN.sub(" ", text).strip()


def is_text_mime_type(mime_type: str) -> bool:
    """Whether 'auto' output typing should return text for this content tag."""
    return mime_type.startswith(TEXT_MIME_PREFIX) or mime_type in TEXT_MIME_TYPES


def _payload_bytes(data: str | bytes | bytearray | memoryview, options: CompressOptions) -> bytes:
    """Validate the input against its declared type and return its bytes."""
    if options.input_type == "string":
        if not isinstance(data, str):
            raise InvalidInputTypeError("string", type(data).__name__)
        if options.normalize_whitespace:
            data = normalize_whitespace(data)
        return data.encode("utf-8")

    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise InvalidInputTypeError("binary", type(data).__name__)
    return bytes(data)


async def compress(
    data: str | bytes | bytearray | memoryview,
    options: CompressOptions | None = None,
    *,
    backend: CompressionBackend | None = None,
) -> CompressResult:
    """
    Compress a payload into a URL-safe string.

    Args:
        data: Text (``input_type="string"``) or bytes (``input_type="binary"``).
        options: Compression options. Defaults apply when omitted.
        backend: Compression backend. Defaults to the process-wide backend.

    Returns:
        The encoded payload and its length.

    Raises:
        InvalidInputTypeError: If ``data`` does not match ``options.input_type``.
        PayloadTooLargeError: If the encoded payload exceeds ``options.max_size``.
        BackendUnavailableError: If no compression backend exists.
    """
    options = options or CompressOptions()
    backend = backend or default_backend()

    # Step 1: Validate and frame.
    framed = frame(options.content_tag, _payload_bytes(data, options))

    # Step 2: Compress and encode.
    compressed = await backend.deflate(framed)
    payload = radix.encode(compressed)

    logger.debug(
        "Compressed %d framed bytes to %d gzip bytes, %d chars (backend=%s)",
        len(framed),
        len(compressed),
        len(payload),
        backend.name,
    )

    # Step 3: Enforce the size budget.
    size = len(payload)
    if size > options.max_size:
        raise PayloadTooLargeError(size, options.max_size)

    return CompressResult(payload=payload, size=size)


async def decompress(
    payload: str,
    options: DecompressOptions | None = None,
    *,
    backend: CompressionBackend | None = None,
) -> DecompressResult:
    """
    Recover the original payload and content tag from an encoded string.

    Args:
        payload: String produced by :func:`compress`.
        options: Decompression options. Defaults apply when omitted.
        backend: Compression backend. Defaults to the process-wide backend.

    Returns:
        The payload (text or bytes) and its content tag.

    Raises:
        InvalidSymbolError: If the payload contains a character outside the alphabet.
        CorruptPayloadError: If the decoded bytes are not a valid gzip stream.
        MissingDelimiterError: If the inflated frame holds no content tag.
        BackendUnavailableError: If no compression backend exists.
    """
    options = options or DecompressOptions()
    backend = backend or default_backend()

    compressed = radix.decode(payload)
    framed = await backend.inflate(compressed)
    mime_type, body = unframe(framed)

    logger.debug(
        "Decompressed %d chars to %d framed bytes (mime_type=%s)",
        len(payload),
        len(framed),
        mime_type,
    )

    output_type = options.output_type
    if output_type == "string" or (output_type == "auto" and is_text_mime_type(mime_type)):
        # Invalid UTF-8 is replaced rather than rejected.
        return DecompressResult(data=body.decode("utf-8", errors="replace"), mime_type=mime_type)
    return DecompressResult(data=body, mime_type=mime_type)
