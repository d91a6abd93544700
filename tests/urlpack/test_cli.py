"""Tests for the command line."""

from __future__ import annotations

import io
import logging
import sys
from collections.abc import Iterator
from pathlib import Path

import pytest

from urlpack.__main__ import ColoredFormatter, build_parser, main, setup_logging

HTML = "<!DOCTYPE html>\n<html><body><h1>Hello</h1></body></html>\n"


@pytest.fixture(autouse=True)
def reset_cli_logging() -> Iterator[None]:
    """Drop the CLI handler and restore the root level after each test."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in [h for h in root.handlers if h.get_name() == "urlpack-cli"]:
        root.removeHandler(handler)
    root.setLevel(level)


def encode_file(path: Path, *extra: str) -> list[str]:
    """Arguments for encoding a file with logging kept plain."""
    return ["--no-color", "encode", str(path), *extra]


class TestEncode:
    """Tests for the encode subcommand."""

    def test_prints_payload(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """The bare payload is printed on stdout."""
        source = tmp_path / "page.html"
        source.write_text(HTML, encoding="utf-8")

        assert main(encode_file(source)) == 0

        payload = capsys.readouterr().out.strip()
        assert payload
        assert "&" not in payload

    def test_reads_stdin(self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
        """Without a path the document is read from stdin."""
        monkeypatch.setattr("sys.stdin", io.TextIOWrapper(io.BytesIO(b"  a   b  ")))

        assert main(["--no-color", "encode", "--normalize-whitespace"]) == 0
        payload = capsys.readouterr().out.strip()

        assert main(["--no-color", "decode", payload]) == 0
        assert capsys.readouterr().out == "a b"

    def test_share_url(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """With a base URL, a share link is printed instead."""
        source = tmp_path / "page.html"
        source.write_text(HTML, encoding="utf-8")

        assert main(encode_file(source, "--base-url", "https://example.com/", "--edit")) == 0

        url = capsys.readouterr().out.strip()
        assert url.startswith("https://example.com/?u=")
        assert url.endswith("&edit=1")

    def test_too_large_fails(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        """An oversized document exits with status 1 and logs why."""
        source = tmp_path / "page.html"
        source.write_text(HTML, encoding="utf-8")

        with caplog.at_level(logging.ERROR):
            assert main(encode_file(source, "--max-size", "5")) == 1

        assert "exceeds max URL size (5 chars)" in caplog.text

    def test_invalid_mime_type_fails(self, tmp_path: Path) -> None:
        """Option validation errors exit with status 1."""
        source = tmp_path / "page.html"
        source.write_text(HTML, encoding="utf-8")

        assert main(encode_file(source, "--mime-type", "text:html")) == 1


class TestDecode:
    """Tests for the decode subcommand."""

    def test_roundtrip_via_share_url(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """A share URL decodes back to the document."""
        source = tmp_path / "page.html"
        source.write_text(HTML, encoding="utf-8")
        main(encode_file(source, "--base-url", "https://example.com/"))
        url = capsys.readouterr().out.strip()

        assert main(["--no-color", "decode", url]) == 0
        assert capsys.readouterr().out == HTML

    def test_binary_to_file(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Binary documents are written back byte for byte."""
        data = bytes([0, 255, 127, 128, 65, 58])
        source = tmp_path / "blob.bin"
        source.write_bytes(data)
        main(["--no-color", "encode", "--binary", str(source)])
        payload = capsys.readouterr().out.strip()

        target = tmp_path / "out.bin"
        assert main(["--no-color", "decode", payload, "--output", str(target)]) == 0
        assert target.read_bytes() == data

    def test_crlf_text_file_roundtrip(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """CRLF and lone CR line endings survive encode and decode to a file."""
        data = "<p>one</p>\r\n<p>two</p>\r<p>three</p>\n".encode()
        source = tmp_path / "page.html"
        source.write_bytes(data)
        assert main(encode_file(source)) == 0
        payload = capsys.readouterr().out.strip()

        target = tmp_path / "out.html"
        assert main(["--no-color", "decode", payload, "--output", str(target)]) == 0
        assert target.read_bytes() == data

    def test_crlf_stdin_preserved(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Text read from stdin keeps its line endings."""
        monkeypatch.setattr("sys.stdin", io.TextIOWrapper(io.BytesIO(b"a\r\nb")))
        assert main(["--no-color", "encode"]) == 0
        payload = capsys.readouterr().out.strip()

        target = tmp_path / "out.html"
        assert main(["--no-color", "decode", payload, "--output", str(target)]) == 0
        assert target.read_bytes() == b"a\r\nb"

    def test_invalid_symbol_fails(self, caplog: pytest.LogCaptureFixture) -> None:
        """An undecodable payload exits with status 1."""
        with caplog.at_level(logging.ERROR):
            assert main(["--no-color", "decode", "abc&def"]) == 1

        assert "Invalid Base85 char" in caplog.text


class TestParser:
    """Tests for argument parsing."""

    def test_command_required(self) -> None:
        """Running without a subcommand is a usage error."""
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_output_type_choices(self) -> None:
        """Only known output types are accepted."""
        with pytest.raises(SystemExit):
            build_parser().parse_args(["decode", "x", "--output-type", "bytes"])


class TestLogging:
    """Tests for logging setup."""

    def test_handler_not_stacked(self) -> None:
        """Repeated setup replaces the CLI handler instead of adding another."""
        setup_logging(no_color=True)
        setup_logging(verbose=True)

        root = logging.getLogger()
        handlers = [h for h in root.handlers if h.get_name() == "urlpack-cli"]

        assert len(handlers) == 1
        assert isinstance(handlers[0].formatter, ColoredFormatter)
        assert root.level == logging.DEBUG

    def test_colored_formatter(self) -> None:
        """Level names are wrapped in the ANSI style for their level."""
        record = logging.LogRecord("urlpack", logging.ERROR, __file__, 1, "boom", None, None)
        line = ColoredFormatter().format(record)

        assert line.endswith("boom")
        assert ColoredFormatter.paint("ERROR   ", "38;5;196") in line
        assert ColoredFormatter.paint("urlpack", ColoredFormatter.NAME_STYLE) + ":" in line

    def test_colored_formatter_includes_traceback(self) -> None:
        """Exception details follow the message line."""
        try:
            raise RuntimeError("bad")
        except RuntimeError:
            record = logging.LogRecord(
                "urlpack", logging.ERROR, __file__, 1, "boom", None, sys.exc_info()
            )
        line = ColoredFormatter().format(record)

        assert "RuntimeError: bad" in line
