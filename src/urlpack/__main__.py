"""
urlpack command line.

Encode a document into a URL-safe payload, or decode one back.

Usage::

    python -m urlpack encode page.html
    python -m urlpack encode page.html --base-url https://example.com/ --edit
    python -m urlpack encode --binary --mime-type image/png logo.png
    cat page.html | python -m urlpack encode --normalize-whitespace

    python -m urlpack decode 'https://example.com/?u=1F8B...'
    python -m urlpack decode 1F8B... --output-type binary --output page.bin

Exit status is 1 when the codec rejects the input.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from urlpack.codec import CompressOptions, DecompressOptions, compress, decompress
from urlpack.exceptions import UrlPackError
from urlpack.share import build_share_url, extract_payload

logger = logging.getLogger(__name__)

_HANDLER_NAME = "urlpack-cli"


class ColoredFormatter(logging.Formatter):
    """Formatter that paints the timestamp, level and logger name for a terminal."""

    LEVEL_STYLES = {
        logging.DEBUG: "38;5;244",
        logging.INFO: "38;5;40",
        logging.WARNING: "38;5;220",
        logging.ERROR: "38;5;196",
        logging.CRITICAL: "38;5;196;1",
    }
    TIME_STYLE = "38;5;51"
    NAME_STYLE = "38;5;39"

    @staticmethod
    def paint(text: str, style: str) -> str:
        """Wrap text in an ANSI SGR sequence."""
        return f"\x1b[{style}m{text}\x1b[0m"

    def format(self, record: logging.LogRecord) -> str:
        level_style = self.LEVEL_STYLES.get(record.levelno, "0")
        parts = [
            self.paint(self.formatTime(record, self.datefmt), self.TIME_STYLE),
            self.paint(f"{record.levelname:8}", level_style),
            self.paint(record.name, self.NAME_STYLE) + ":",
            record.getMessage(),
        ]
        line = " ".join(parts)
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def setup_logging(verbose: bool = False, no_color: bool = False) -> None:
    """Configure logging for the CLI with optional colors."""
    level = logging.DEBUG if verbose else logging.INFO

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setLevel(level)

    if no_color:
        formatter = logging.Formatter(
            "%(asctime)s %(levelname)-8s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    else:
        formatter = ColoredFormatter(datefmt="%Y-%m-%d %H:%M:%S")

    handler.setFormatter(formatter)

    # Replace the handler from an earlier call rather than stacking another.
    root = logging.getLogger()
    for existing in [h for h in root.handlers if h.get_name() == _HANDLER_NAME]:
        root.removeHandler(existing)
    root.setLevel(level)
    root.addHandler(handler)


def _read_input(path: Path | None, binary: bool) -> str | bytes:
    """Read the document from a file, or from stdin when no path is given.

    Text is decoded from the raw bytes so line endings reach the codec untranslated.
    """
    raw = sys.stdin.buffer.read() if path is None else path.read_bytes()
    return raw if binary else raw.decode("utf-8")


async def run_encode(args: argparse.Namespace) -> None:
    """Encode a document and print the payload or share URL."""
    options = CompressOptions(
        input_type="binary" if args.binary else "string",
        mime_type=args.mime_type,
        normalize_whitespace=args.normalize_whitespace,
        **({"max_size": args.max_size} if args.max_size is not None else {}),
    )
    result = await compress(_read_input(args.input, args.binary), options)
    logger.info("Encoded payload: %d chars (limit %d)", result.size, options.max_size)

    if args.base_url:
        print(build_share_url(args.base_url, result.payload, edit=args.edit))
    else:
        print(result.payload)


async def run_decode(args: argparse.Namespace) -> None:
    """Decode a payload (or share URL) and write the document."""
    result = await decompress(
        extract_payload(args.payload),
        DecompressOptions(output_type=args.output_type),
    )
    logger.info("Decoded %s payload", result.mime_type)

    data = result.data
    if args.output is not None:
        if isinstance(data, str):
            args.output.write_text(data, encoding="utf-8", newline="")
        else:
            args.output.write_bytes(data)
    elif isinstance(data, str):
        sys.stdout.write(data)
        sys.stdout.flush()
    else:
        sys.stdout.buffer.write(data)
        sys.stdout.buffer.flush()


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser for both subcommands."""
    parser = argparse.ArgumentParser(
        prog="urlpack",
        description="URL-safe compressed payloads",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored logging output",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    encode = commands.add_parser("encode", help="Encode a document into a payload")
    encode.add_argument(
        "input",
        nargs="?",
        type=Path,
        default=None,
        help="File to encode (default: stdin)",
    )
    encode.add_argument(
        "--binary",
        action="store_true",
        help="Treat the input as raw bytes",
    )
    encode.add_argument(
        "--mime-type",
        default=None,
        help="Content tag (default: text/html, or application/octet-stream with --binary)",
    )
    encode.add_argument(
        "--max-size",
        type=int,
        default=None,
        help="Maximum payload length in characters (default: URLPACK_MAX_SIZE or 2083)",
    )
    encode.add_argument(
        "--normalize-whitespace",
        action="store_true",
        help="Collapse whitespace runs before encoding (text only)",
    )
    encode.add_argument(
        "--base-url",
        default=None,
        help="Print a share URL built on this page instead of the bare payload",
    )
    encode.add_argument(
        "--edit",
        action="store_true",
        help="Mark the share URL to open in the editor",
    )
    encode.set_defaults(handler=run_encode)

    decode = commands.add_parser("decode", help="Decode a payload or share URL")
    decode.add_argument("payload", help="Encoded payload or share URL")
    decode.add_argument(
        "--output-type",
        choices=["auto", "string", "binary"],
        default="auto",
        help="Return text, bytes, or pick by content tag (default: auto)",
    )
    decode.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write the decoded document to this file (default: stdout)",
    )
    decode.set_defaults(handler=run_decode)

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    args = build_parser().parse_args(argv)

    setup_logging(args.verbose, args.no_color)

    try:
        asyncio.run(args.handler(args))
    except (UrlPackError, ValidationError) as e:
        logger.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
