"""
Strict base64url decoding for JWT sections.

JWT compact serialization uses the URL-safe alphabet from RFC 4648 section 5
without ``=`` padding; a correctly padded final quantum is still tolerated.
The standard library decoder silently discards bytes outside the alphabet,
so the text is validated here first and only then handed to PyJWT's
``base64url_decode``.  Failures report the offending byte and its offset.
"""

from __future__ import annotations

import string

from jwt.utils import base64url_decode

__all__ = [
    "URL_SAFE_ALPHABET",
    "Base64Error",
    "InvalidByteError",
    "InvalidLengthError",
    "InvalidLastSymbolError",
    "decode",
]

URL_SAFE_ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits + "-_"

# byte value -> 6-bit value; built once at import and only ever read
_DECODE_TABLE: dict[int, int] = {
    ord(symbol): value for value, symbol in enumerate(URL_SAFE_ALPHABET)
}

_PAD = b"="


def _to_bytes(data: str | bytes) -> bytes:
    if not isinstance(data, str):
        return bytes(data)
    try:
        return data.encode("utf-8", "surrogateescape")
    except UnicodeEncodeError:
        # lone surrogates outside the escape range
        return data.encode("utf-8", "surrogatepass")


class Base64Error(ValueError):
    """Raised when a section is not valid base64url."""


class InvalidByteError(Base64Error):
    """A byte outside the URL-safe alphabet, or misplaced ``=`` padding."""

    def __init__(self, byte: int, offset: int) -> None:
        self.byte = byte
        self.offset = offset
        super().__init__(f"Invalid byte {byte}, offset {offset}.")


class InvalidLengthError(Base64Error):
    """The text leaves a single dangling 6-bit group."""

    def __init__(self) -> None:
        super().__init__("Encoded text cannot have a 6-bit remainder.")


class InvalidLastSymbolError(Base64Error):
    """The final symbol carries bits that do not belong to any output byte."""

    def __init__(self, byte: int, offset: int) -> None:
        self.byte = byte
        self.offset = offset
        super().__init__(f"Invalid last symbol {byte}, offset {offset}.")


def decode(data: str | bytes) -> bytes:
    """Decode base64url *data* into raw bytes.

    Padding is not required, but a correctly placed run of ``=`` closing the
    final quantum is accepted.  Text is encoded to UTF-8 before validation,
    so offsets and byte values in error messages refer to the UTF-8 form of
    the input; undecodable command line bytes (lone surrogates) map back to
    the original byte.

    Raises:
        InvalidByteError: If a byte is outside the URL-safe alphabet, or
            ``=`` appears anywhere but as the final quantum's padding.
        InvalidLengthError: If the length leaves a 6-bit remainder.
        InvalidLastSymbolError: If the last symbol has non-zero trailing bits.
    """
    encoded = _to_bytes(data)
    raw = encoded.rstrip(_PAD)

    for offset, byte in enumerate(raw):
        if byte not in _DECODE_TABLE:
            raise InvalidByteError(byte, offset)

    # "xx==" and "xxx=" are the only padded final quanta
    padding = len(encoded) - len(raw)
    if padding and (padding > 2 or len(raw) % 4 + padding != 4):
        raise InvalidByteError(_PAD[0], len(raw))

    remainder = len(raw) % 4
    if remainder == 1:
        raise InvalidLengthError()

    # 2 trailing symbols carry 12 bits for 1 byte, 3 carry 18 bits for 2 bytes
    if remainder:
        unused_bits = 4 if remainder == 2 else 2
        last = raw[-1]
        if _DECODE_TABLE[last] & ((1 << unused_bits) - 1):
            raise InvalidLastSymbolError(last, len(raw) - 1)

    return base64url_decode(raw)
