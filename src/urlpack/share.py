"""
Share links carrying an encoded payload.

The payload is the application's only state. It travels in the ``u`` query
parameter of the page URL; ``edit=1`` asks the page to open in the editor
instead of rendering the content.
"""

from __future__ import annotations

from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

PAYLOAD_PARAM = "u"
"""Query parameter holding the encoded payload."""

EDIT_PARAM = "edit"
"""Query parameter flagging editor mode."""


def build_share_url(base_url: str, payload: str, *, edit: bool = False) -> str:
    """
    Put a payload into the query string of a URL.

    Existing query parameters are kept, except ``u`` (replaced) and ``edit``
    (set when requested, removed otherwise).

    Args:
        base_url: Page URL to share.
        payload: Encoded payload.
        edit: Whether the link opens the editor.

    Returns:
        The share URL.
    """
    parts = urlsplit(base_url)
    query = [
        (key, value)
        for key, value in parse_qsl(parts.query, keep_blank_values=True)
        if key not in (PAYLOAD_PARAM, EDIT_PARAM)
    ]
    query.append((PAYLOAD_PARAM, payload))
    if edit:
        query.append((EDIT_PARAM, "1"))
    return urlunsplit(parts._replace(query=urlencode(query)))


def extract_payload(value: str) -> str:
    """
    Pull an encoded payload out of a share URL, or accept a bare payload.

    Args:
        value: A share URL or the payload itself.

    Returns:
        The encoded payload.
    """
    value = value.strip()
    parts = urlsplit(value)
    if parts.scheme and parts.query:
        for key, param in parse_qsl(parts.query, keep_blank_values=True):
            if key == PAYLOAD_PARAM:
                return param
    return value
