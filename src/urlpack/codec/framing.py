"""
Content-tag framing for codec payloads.

A frame glues a content tag to the payload bytes so that both travel through
compression as one unit::

    [content_tag (UTF-8)][0x3A][payload bytes]

The tag never contains a colon, so splitting at the FIRST colon always
recovers the pair. Colons inside the payload need no escaping.

Splitting happens on bytes. Decoding the whole frame as text first would
mangle binary payloads that are not valid UTF-8.
"""

from __future__ import annotations

from ..exceptions import MissingDelimiterError
from .constants import DELIMITER


def frame(tag: str, payload: bytes) -> bytes:
    """
    Prefix payload bytes with a content tag and a colon.

    Args:
        tag: Content tag such as ``text/html``. Must not contain a colon.
        payload: Raw payload bytes, copied verbatim.

    Returns:
        The frame ``tag || b":" || payload``.

    Raises:
        ValueError: If the tag contains a colon.
    """
    encoded_tag = tag.encode("utf-8")
    if DELIMITER in encoded_tag:
        raise ValueError(f"Content tag must not contain ':': {tag!r}")
    return encoded_tag + DELIMITER + bytes(payload)


def unframe(data: bytes) -> tuple[str, bytes]:
    """
    Split a frame into its content tag and payload.

    Args:
        data: Frame bytes as produced by :func:`frame`.

    Returns:
        Tuple of (content tag, payload bytes).

    Raises:
        MissingDelimiterError: If the frame holds no colon byte.
    """
    index = data.find(DELIMITER)
    if index == -1:
        raise MissingDelimiterError()

    # Everything after the first colon belongs to the payload, colons included.
    return data[:index].decode("utf-8"), bytes(data[index + 1 :])
