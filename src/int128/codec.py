"""Conversions between Int128 and bytes or text."""

from __future__ import annotations

import struct

from .errors import Int128OverflowError, Int128RangeError
from .primitives import to_signed64
from .value import BYTES, Int128

DIGITS: str = "0123456789abcdefghijklmnopqrstuvwxyz"

_WORDS = struct.Struct(">qq")
_WORD = struct.Struct(">q")


# ---------------------------------------------------------------------------
# Big-endian bytes
# ---------------------------------------------------------------------------


def to_big_endian(value: Int128) -> bytes:
    """16-byte two's-complement big-endian encoding."""
    return _WORDS.pack(value.high, value.low)


def write_big_endian(value: Int128, buffer: bytearray, offset: int = 0) -> None:
    _WORDS.pack_into(buffer, offset, value.high, value.low)


def from_big_endian(data: bytes) -> Int128:
    """Decode a big-endian two's-complement sequence of any non-zero length.

    Shorter sequences are sign-extended. Longer ones must only carry sign
    extension in the bytes before the last 16.
    """
    length = len(data)
    if length == 0:
        raise Int128RangeError("empty byte sequence")
    if length >= BYTES:
        offset = length - BYTES
        high, low = _WORDS.unpack_from(data, offset)
        sign = (high >> 63) & 0xFF
        for i in range(offset):
            if data[i] != sign:
                raise Int128OverflowError("Overflow")
        return Int128(high, low)
    if length > 8:
        (low,) = _WORD.unpack_from(data, length - 8)
        high = int.from_bytes(data[: length - 8], "big", signed=True)
        return Int128(high, low)
    low = int.from_bytes(data, "big", signed=True)
    return Int128(low >> 63, low)


# ---------------------------------------------------------------------------
# Text
# ---------------------------------------------------------------------------


def _check_radix(radix: int) -> None:
    if radix < 2 or radix > len(DIGITS):
        raise ValueError(f"radix must be in [2, 36]: {radix}")


def format_radix(value: Int128, radix: int = 10) -> str:
    """Render in the given radix with lower-case digits and a leading '-'."""
    _check_radix(radix)
    n = value.to_int()
    if radix == 10:
        return str(n)
    if n == 0:
        return "0"
    negative = n < 0
    if negative:
        n = -n
    digits: list[str] = []
    while n:
        n, d = divmod(n, radix)
        digits.append(DIGITS[d])
    if negative:
        digits.append("-")
    return "".join(reversed(digits))


def parse(text: str, radix: int = 10) -> Int128:
    """Parse an optionally signed string of digits in the given radix."""
    _check_radix(radix)
    digits = text[1:] if text[:1] in ("+", "-") else text
    # int() also takes prefixes, underscores and surrounding whitespace
    if not digits or any(c not in DIGITS[:radix] for c in digits.lower()):
        raise Int128RangeError(f"invalid integer literal for radix {radix}: {text!r}")
    n = int(text, radix)
    if n < -(1 << 127) or n >= (1 << 127):
        raise Int128RangeError(f"value out of 128-bit range: {text}")
    return Int128(to_signed64(n >> 64), to_signed64(n))
