"""Int128 — immutable signed 128-bit integer over a (high, low) word pair."""

from __future__ import annotations

from dataclasses import dataclass

from . import primitives as p
from .division import divide_words
from .errors import Int128OverflowError, Int128RangeError
from .multiply import multiply_exact_words

SIZE: int = 128
BYTES: int = SIZE // 8

_WORD_MIN: int = -(1 << 63)
_WORD_MAX: int = (1 << 64) - 1
_VALUE_MIN: int = -(1 << 127)
_VALUE_MAX: int = (1 << 127) - 1


def _check_word(word: int, name: str) -> int:
    if not isinstance(word, int):
        raise TypeError(f"{name} must be an int, got {type(word).__name__}")
    if word < _WORD_MIN or word > _WORD_MAX:
        raise Int128RangeError(f"{name} word out of 64-bit range: {word}")
    return p.to_signed64(word)


@dataclass(frozen=True, slots=True)
class Int128:
    """Signed two's-complement integer in [-2^127, 2^127 - 1].

    `high` holds the sign and the upper 64 bits, `low` the lower 64 bits.
    Both accept signed or unsigned 64-bit spellings and are stored signed.
    The arithmetic operators wrap; use the `*_exact` functions to get an
    overflow error instead.
    """

    high: int
    low: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "high", _check_word(self.high, "high"))
        object.__setattr__(self, "low", _check_word(self.low, "low"))

    # --- construction

    @classmethod
    def from_words(cls, high: int, low: int) -> Int128:
        return cls(high, low)

    @classmethod
    def from_long(cls, value: int) -> Int128:
        """Sign-extend a 64-bit integer."""
        if value < p.LONG_MIN or value > p.LONG_MAX:
            raise Int128RangeError(f"value out of 64-bit range: {value}")
        return cls(value >> 63, value)

    @classmethod
    def value_of(cls, value: int | str) -> Int128:
        """Build from a Python int or a decimal string."""
        if isinstance(value, str):
            from .codec import parse

            return parse(value, 10)
        if isinstance(value, Int128):
            return value
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"cannot convert {type(value).__name__} to Int128")
        if value < _VALUE_MIN or value > _VALUE_MAX:
            raise Int128RangeError(f"value out of 128-bit range: {value}")
        return cls(p.to_signed64(value >> 64), p.to_signed64(value))

    @classmethod
    def parse(cls, text: str, radix: int = 10) -> Int128:
        from .codec import parse

        return parse(text, radix)

    @classmethod
    def from_big_endian(cls, data: bytes) -> Int128:
        from .codec import from_big_endian

        return from_big_endian(data)

    # --- conversion

    def to_int(self) -> int:
        return (self.high << 64) | (self.low & p.MASK64)

    def to_long(self) -> int:
        """Low 64 bits as a signed integer (truncating)."""
        return self.low

    def to_long_exact(self) -> int:
        if not p.in_long_range(self.high, self.low):
            raise Int128RangeError(f"value too big for a long: {self}")
        return self.low

    def to_big_endian_bytes(self) -> bytes:
        from .codec import to_big_endian

        return to_big_endian(self)

    def write_big_endian(self, buffer: bytearray, offset: int = 0) -> None:
        from .codec import write_big_endian

        write_big_endian(self, buffer, offset)

    def to_string(self, radix: int = 10) -> str:
        from .codec import format_radix

        return format_radix(self, radix)

    def __int__(self) -> int:
        return self.to_int()

    def __index__(self) -> int:
        return self.to_int()

    def __str__(self) -> str:
        return str(self.to_int())

    # --- queries

    def is_negative(self) -> bool:
        return self.high < 0

    def is_positive(self) -> bool:
        return self.high > 0 or (self.high == 0 and self.low != 0)

    def is_zero(self) -> bool:
        return p.is_zero(self.high, self.low)

    def in_long_range(self) -> bool:
        """Whether the value fits in a signed 64-bit integer."""
        return p.in_long_range(self.high, self.low)

    def __bool__(self) -> bool:
        return not self.is_zero()

    # --- ordering

    def compare_to(self, other: Int128) -> int:
        return compare(self, other)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Int128):
            return NotImplemented
        return compare(self, other) < 0

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Int128):
            return NotImplemented
        return compare(self, other) <= 0

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Int128):
            return NotImplemented
        return compare(self, other) > 0

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Int128):
            return NotImplemented
        return compare(self, other) >= 0

    # --- operators (wrapping)

    def __add__(self, other: Int128 | int) -> Int128:
        return add(self, _coerce(other))

    __radd__ = __add__

    def __sub__(self, other: Int128 | int) -> Int128:
        return subtract(self, _coerce(other))

    def __rsub__(self, other: int) -> Int128:
        return subtract(_coerce(other), self)

    def __mul__(self, other: Int128 | int) -> Int128:
        return multiply(self, _coerce(other))

    __rmul__ = __mul__

    def __neg__(self) -> Int128:
        return negate(self)

    def __pos__(self) -> Int128:
        return self

    def __abs__(self) -> Int128:
        return abs_(self)

    def __invert__(self) -> Int128:
        return not_(self)

    def __and__(self, other: Int128 | int) -> Int128:
        return and_(self, _coerce(other))

    __rand__ = __and__

    def __or__(self, other: Int128 | int) -> Int128:
        return or_(self, _coerce(other))

    __ror__ = __or__

    def __xor__(self, other: Int128 | int) -> Int128:
        return xor(self, _coerce(other))

    __rxor__ = __xor__

    def __lshift__(self, shift: int) -> Int128:
        return shift_left(self, shift)

    def __rshift__(self, shift: int) -> Int128:
        return shift_right(self, shift)


def _coerce(value: Int128 | int) -> Int128:
    if isinstance(value, Int128):
        return value
    return Int128.value_of(value)


@dataclass(frozen=True, slots=True)
class DivisionResult:
    quotient: Int128
    remainder: Int128


ZERO = Int128(0, 0)
ONE = Int128(0, 1)
MAX_VALUE = Int128(0x7FFFFFFFFFFFFFFF, 0xFFFFFFFFFFFFFFFF)
MIN_VALUE = Int128(0x8000000000000000, 0x0000000000000000)


def _check_shift(shift: int) -> None:
    if shift < 0 or shift >= SIZE:
        raise ValueError(f"shift must be in [0, 127]: {shift}")


# ---------------------------------------------------------------------------
# Comparison
# ---------------------------------------------------------------------------


def compare(a: Int128, b: Int128) -> int:
    return p.compare(a.high, a.low, b.high, b.low)


# ---------------------------------------------------------------------------
# Bitwise
# ---------------------------------------------------------------------------


def and_(a: Int128, b: Int128) -> Int128:
    return Int128(
        p.and_high(a.high, a.low, b.high, b.low),
        p.and_low(a.high, a.low, b.high, b.low),
    )


def or_(a: Int128, b: Int128) -> Int128:
    return Int128(
        p.or_high(a.high, a.low, b.high, b.low),
        p.or_low(a.high, a.low, b.high, b.low),
    )


def xor(a: Int128, b: Int128) -> Int128:
    return Int128(
        p.xor_high(a.high, a.low, b.high, b.low),
        p.xor_low(a.high, a.low, b.high, b.low),
    )


def not_(value: Int128) -> Int128:
    return Int128(p.not_high(value.high, value.low), p.not_low(value.high, value.low))


def shift_left(value: Int128, shift: int) -> Int128:
    _check_shift(shift)
    return Int128(
        p.shift_left_high(value.high, value.low, shift),
        p.shift_left_low(value.high, value.low, shift),
    )


def shift_right(value: Int128, shift: int) -> Int128:
    """Arithmetic (sign-extending) shift right."""
    _check_shift(shift)
    return Int128(
        p.shift_right_high(value.high, value.low, shift),
        p.shift_right_low(value.high, value.low, shift),
    )


def shift_right_unsigned(value: Int128, shift: int) -> Int128:
    _check_shift(shift)
    return Int128(
        p.shift_right_unsigned_high(value.high, value.low, shift),
        p.shift_right_unsigned_low(value.high, value.low, shift),
    )


def number_of_leading_zeros(value: Int128) -> int:
    return p.number_of_leading_zeros(value.high, value.low)


def number_of_trailing_zeros(value: Int128) -> int:
    return p.number_of_trailing_zeros(value.high, value.low)


def bit_count(value: Int128) -> int:
    return p.bit_count(value.high, value.low)


# ---------------------------------------------------------------------------
# Addition and subtraction
# ---------------------------------------------------------------------------


def add(a: Int128, b: Int128) -> Int128:
    return Int128(
        p.add_high(a.high, a.low, b.high, b.low),
        p.add_low(a.high, a.low, b.high, b.low),
    )


def add_exact(a: Int128, b: Int128) -> Int128:
    result_high = p.add_high(a.high, a.low, b.high, b.low)
    result_low = p.add_low(a.high, a.low, b.high, b.low)
    # HD 2-13: overflow iff both operands have the same sign and the result differs
    if ((result_high ^ a.high) & (result_high ^ b.high)) < 0:
        raise Int128OverflowError("overflow")
    return Int128(result_high, result_low)


def subtract(a: Int128, b: Int128) -> Int128:
    return Int128(
        p.subtract_high(a.high, a.low, b.high, b.low),
        p.subtract_low(a.high, a.low, b.high, b.low),
    )


def subtract_exact(a: Int128, b: Int128) -> Int128:
    result_high = p.subtract_high(a.high, a.low, b.high, b.low)
    result_low = p.subtract_low(a.high, a.low, b.high, b.low)
    # HD 2-13: overflow iff the operands have different signs and the result
    # has the sign of the subtrahend
    if ((a.high ^ b.high) & (a.high ^ result_high)) < 0:
        raise Int128OverflowError("overflow")
    return Int128(result_high, result_low)


def increment(value: Int128) -> Int128:
    return Int128(
        p.increment_high(value.high, value.low),
        p.increment_low(value.high, value.low),
    )


def increment_exact(value: Int128) -> Int128:
    if value == MAX_VALUE:
        raise Int128OverflowError("Integer overflow")
    return increment(value)


def decrement(value: Int128) -> Int128:
    return Int128(
        p.decrement_high(value.high, value.low),
        p.decrement_low(value.high, value.low),
    )


def decrement_exact(value: Int128) -> Int128:
    if value == MIN_VALUE:
        raise Int128OverflowError("Integer overflow")
    return decrement(value)


def negate(value: Int128) -> Int128:
    """Two's-complement negation; MIN_VALUE maps to itself."""
    return Int128(
        p.negate_high(value.high, value.low),
        p.negate_low(value.high, value.low),
    )


def negate_exact(value: Int128) -> Int128:
    if value == MIN_VALUE:
        raise Int128OverflowError("overflow")
    return negate(value)


def abs_(value: Int128) -> Int128:
    if value.is_negative():
        return negate(value)
    return value


def abs_exact(value: Int128) -> Int128:
    if value.is_negative():
        return negate_exact(value)
    return value


# ---------------------------------------------------------------------------
# Multiplication
# ---------------------------------------------------------------------------


def multiply(a: Int128, b: Int128) -> Int128:
    """Low 128 bits of the product."""
    return Int128(
        p.multiply_high128(a.high, a.low, b.high, b.low),
        p.multiply_low128(a.high, a.low, b.high, b.low),
    )


def multiply_exact(a: Int128, b: Int128) -> Int128:
    high, low, overflowed = multiply_exact_words(a.high, a.low, b.high, b.low)
    if overflowed:
        raise Int128OverflowError("overflow")
    return Int128(high, low)


def multiply_long(a: int, b: int) -> Int128:
    """64 x 64 -> 128 product of two signed 64-bit integers; never overflows."""
    return multiply(Int128.from_long(a), Int128.from_long(b))


# ---------------------------------------------------------------------------
# Division
# ---------------------------------------------------------------------------


def divide(dividend: Int128, divisor: Int128) -> Int128:
    """Quotient rounded toward zero."""
    q_high, q_low, _, _ = divide_words(dividend.high, dividend.low, divisor.high, divisor.low)
    return Int128(q_high, q_low)


def remainder(dividend: Int128, divisor: Int128) -> Int128:
    """Remainder with the sign of the dividend."""
    _, _, r_high, r_low = divide_words(dividend.high, dividend.low, divisor.high, divisor.low)
    return Int128(r_high, r_low)


def divide_with_remainder(dividend: Int128, divisor: Int128) -> DivisionResult:
    q_high, q_low, r_high, r_low = divide_words(
        dividend.high, dividend.low, divisor.high, divisor.low
    )
    return DivisionResult(Int128(q_high, q_low), Int128(r_high, r_low))
