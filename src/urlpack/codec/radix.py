"""
Radix-85 text encoding for compressed payloads.

This module turns arbitrary bytes into a string that can be pasted into a URL
query parameter without percent-encoding, and back again.


HOW ENCODING WORKS
------------------
Bytes are pushed into a bit accumulator 8 bits at a time. Whenever 5 or more
unconsumed bits are waiting, the top 5 are pulled off and mapped to a symbol::

    bytes:   01001000 01101001                  b"Hi"
    groups:  01001 00001 10100 1----
    values:  9     1     20    16               (last group zero-padded: 10000)
    symbols: '9'   '1'   'K'   'G'   '~~'       -> "91KG~~"

Each symbol carries 5 bits, so only the first 32 alphabet characters ever
appear as data.


LENGTH RECOVERY
---------------
No length field is transmitted. When the bit stream does not end on a symbol
boundary, the encoder appends filler characters (the last alphabet symbol)::

    filler_count = (4 - N mod 4) mod 4        N = input byte count

The decoder reverses the arithmetic::

    estimated = floor((len(core) * 5 - filler_count * 8) / 8)
    expected  = estimated + filler_count

and trims the spurious trailing byte that the zero-padded final symbol
produces. The formula must stay exactly as written: any "simpler" variant
trims a different number of bytes and breaks existing payloads.


ACCUMULATOR
-----------
Python integers are arbitrary precision, so the accumulator can never
overflow. Consumed bits are masked off after every symbol to keep it small.
"""

from __future__ import annotations

from ..exceptions import InvalidSymbolError
from .constants import (
    ALPHABET,
    BITS_PER_BYTE,
    BITS_PER_SYMBOL,
    BYTE_MASK,
    FILLER_MODULUS,
    MIN_ALPHABET_SIZE,
    SYMBOL_MASK,
)


class Radix85Codec:
    """
    Bytes-to-text codec over a fixed URL-safe alphabet.

    The alphabet is fixed per deployment. Encoding with one alphabet and
    decoding with another silently corrupts data.
    """

    __slots__ = ("alphabet", "filler", "_index")

    def __init__(self, alphabet: str = ALPHABET) -> None:
        if len(alphabet) < MIN_ALPHABET_SIZE:
            raise ValueError(
                f"Alphabet needs at least {MIN_ALPHABET_SIZE} symbols, got {len(alphabet)}"
            )
        if len(set(alphabet)) != len(alphabet):
            raise ValueError("Alphabet symbols must be unique")

        self.alphabet = alphabet
        # Highest-valued symbol, reserved for trailing length padding.
        self.filler = alphabet[-1]

        self._index = {symbol: value for value, symbol in enumerate(alphabet)}

    def encode(self, data: bytes) -> str:
        """
        Encode bytes as a symbol string.

        Args:
            data: Arbitrary bytes, possibly empty.

        Returns:
            Symbol string, followed by 0-3 filler characters when the bit
            stream does not end on a symbol boundary.
        """
        alphabet = self.alphabet
        out: list[str] = []

        acc = 0
        bits = 0

        # Step 1: Stream 8 bits in, 5 bits out.
        for byte in data:
            acc = (acc << BITS_PER_BYTE) | byte
            bits += BITS_PER_BYTE
            while bits >= BITS_PER_SYMBOL:
                bits -= BITS_PER_SYMBOL
                out.append(alphabet[(acc >> bits) & SYMBOL_MASK])
            acc &= (1 << bits) - 1

        # Step 2: Flush the 1-4 leftover bits, then mark the length.
        if bits > 0:
            acc <<= BITS_PER_SYMBOL - bits
            out.append(alphabet[acc & SYMBOL_MASK])
            fillers = (FILLER_MODULUS - len(data) % FILLER_MODULUS) % FILLER_MODULUS
            out.append(self.filler * fillers)

        return "".join(out)

    def decode(self, text: str) -> bytes:
        """
        Decode a symbol string back into bytes.

        Args:
            text: String produced by :meth:`encode`.

        Returns:
            The original bytes.

        Raises:
            InvalidSymbolError: If a character is not part of the alphabet.
        """
        # Step 1: Separate the filler run from the data symbols.
        core = text.rstrip(self.filler)
        padding = len(text) - len(core)

        # Step 2: Estimate the byte count from the symbol and filler counts.
        #
        # Floor division rounds negative estimates down, never toward zero.
        estimated = (len(core) * BITS_PER_SYMBOL - padding * BITS_PER_BYTE) // BITS_PER_BYTE
        if estimated <= 0 and not core:
            # All-padding input carries no data.
            estimated = 1

        # Step 3: Stream 5 bits in, 8 bits out.
        index = self._index
        out = bytearray()
        acc = 0
        bits = 0
        for position, symbol in enumerate(core):
            value = index.get(symbol)
            if value is None:
                raise InvalidSymbolError(symbol, position)
            acc = (acc << BITS_PER_SYMBOL) + value
            bits += BITS_PER_SYMBOL
            while bits >= BITS_PER_BYTE:
                bits -= BITS_PER_BYTE
                out.append((acc >> bits) & BYTE_MASK)
            acc &= (1 << bits) - 1

        # Step 4: Flush leftover bits as one (possibly spurious) byte.
        if bits > 0:
            out.append((acc << (BITS_PER_BYTE - bits)) & BYTE_MASK)

        # Step 5: Trim back to the recovered length.
        expected = estimated + padding
        if len(out) > expected:
            del out[max(expected, 0) :]

        return bytes(out)


_CANONICAL = Radix85Codec()


def encode(data: bytes) -> str:
    """Encode bytes with the canonical alphabet."""
    return _CANONICAL.encode(data)


def decode(text: str) -> bytes:
    """Decode a string produced with the canonical alphabet."""
    return _CANONICAL.decode(text)
