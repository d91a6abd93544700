"""Tests for share links."""

from __future__ import annotations

from urllib.parse import parse_qs, urlsplit

import pytest

from urlpack import compress, decompress
from urlpack.share import build_share_url, extract_payload


class TestBuildShareUrl:
    """Tests for putting payloads into URLs."""

    def test_adds_payload_param(self) -> None:
        """The payload lands in the 'u' parameter."""
        assert build_share_url("https://example.com/", "0A1B~~") == "https://example.com/?u=0A1B~~"

    def test_edit_flag(self) -> None:
        """Editor links carry edit=1."""
        url = build_share_url("https://example.com/page", "0A", edit=True)
        assert parse_qs(urlsplit(url).query) == {"u": ["0A"], "edit": ["1"]}

    def test_replaces_existing_payload(self) -> None:
        """An old payload and edit flag are replaced; other parameters stay."""
        url = build_share_url("https://example.com/?lang=en&u=OLD&edit=1", "NEW")
        assert parse_qs(urlsplit(url).query) == {"lang": ["en"], "u": ["NEW"]}

    def test_keeps_fragment(self) -> None:
        """The fragment is left in place after the query."""
        url = build_share_url("https://example.com/#top", "0A")
        assert url == "https://example.com/?u=0A#top"


class TestExtractPayload:
    """Tests for reading payloads back out of URLs."""

    def test_from_url(self) -> None:
        """The 'u' parameter is returned."""
        assert extract_payload("https://example.com/?edit=1&u=0A1B~~") == "0A1B~~"

    def test_bare_payload(self) -> None:
        """A bare payload is returned stripped."""
        assert extract_payload("  0A1B~~\n") == "0A1B~~"

    def test_url_without_payload(self) -> None:
        """A URL lacking 'u' is returned as-is for the decoder to reject."""
        assert extract_payload("https://example.com/?x=1") == "https://example.com/?x=1"

    @pytest.mark.anyio
    async def test_roundtrip_through_url(self) -> None:
        """A document survives the trip through a share URL."""
        html = "<h1>Hello & welcome</h1>"
        result = await compress(html)

        url = build_share_url("https://example.com/", result.payload, edit=True)
        restored = await decompress(extract_payload(url))

        assert restored.data == html
