"""Exception hierarchy for the urlpack codec."""

from __future__ import annotations


class UrlPackError(Exception):
    """
    Base exception for all urlpack errors.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"


class InvalidInputTypeError(UrlPackError, TypeError):
    """
    Raised when the input value does not match the declared input type.

    Attributes:
        expected: The declared input type ("string" or "binary").
        actual: The Python type name of the value that was supplied.
    """

    def __init__(self, expected: str, actual: str) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            f'Expected {expected} input for inputType "{expected}", got {actual}'
        )


class PayloadTooLargeError(UrlPackError):
    """
    Raised when the encoded payload exceeds the configured maximum size.

    Attributes:
        actual: Length of the encoded payload in characters.
        allowed: The configured maximum length.
    """

    def __init__(self, actual: int, allowed: int) -> None:
        self.actual = actual
        self.allowed = allowed

        super().__init__(
            f"Compressed payload ({actual} chars) exceeds max URL size ({allowed} chars)"
        )


class BackendUnavailableError(UrlPackError):
    """
    Raised when no compression capability exists for the requested backend.

    Attributes:
        preference: The backend that was requested ("auto", "native" or "stream").
    """

    def __init__(self, preference: str) -> None:
        self.preference = preference

        super().__init__(f"No gzip compression backend available for preference '{preference}'")


class InvalidSymbolError(UrlPackError, ValueError):
    """
    Raised when a character outside the alphabet appears during decoding.

    Attributes:
        symbol: The offending character.
        position: Its index in the encoded string.
    """

    def __init__(self, symbol: str, position: int) -> None:
        self.symbol = symbol
        self.position = position

        super().__init__(f"Invalid Base85 char {symbol!r} at position {position}")


class MissingDelimiterError(UrlPackError, ValueError):
    """Raised when decompressed bytes contain no colon separating tag from payload."""

    def __init__(self) -> None:
        super().__init__("MIME type not found in payload")


class CorruptPayloadError(UrlPackError):
    """
    Raised when the compression backend cannot inflate the decoded bytes.

    Attributes:
        detail: Description of the underlying failure.
    """

    def __init__(self, detail: str) -> None:
        self.detail = detail

        super().__init__(f"Failed to inflate payload: {detail}")
