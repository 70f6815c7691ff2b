"""Word-pair primitives — 128-bit two's-complement arithmetic on (high, low) words.

Every function takes explicit 64-bit words and returns one word (or a flag or
count). Words are Python ints normalized to the signed range [-2^63, 2^63-1],
matching a machine `int64`; the low word carries unsigned weight when the pair
is read as one number.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Layer 1: 64-bit words
# ---------------------------------------------------------------------------

MASK64: int = 0xFFFFFFFFFFFFFFFF
MASK32: int = 0xFFFFFFFF
SIGN64: int = 0x8000000000000000
LONG_MIN: int = -(1 << 63)
LONG_MAX: int = (1 << 63) - 1


def to_signed64(x: int) -> int:
    """Wrap an arbitrary int to a signed 64-bit word."""
    return ((x + SIGN64) & MASK64) - SIGN64


def to_unsigned64(x: int) -> int:
    return x & MASK64


def if_negative(test: int, value: int) -> int:
    """Branchless `value if test < 0 else 0`."""
    return value & (test >> 63)


def unsigned_carry(a: int, b: int) -> int:
    """Carry out of the unsigned 64-bit sum a + b."""
    return ((a & MASK64) + (b & MASK64)) >> 64


def unsigned_borrow(a: int, b: int) -> int:
    """Borrow out of the unsigned 64-bit difference a - b."""
    if (a & MASK64) < (b & MASK64):
        return 1
    return 0


def multiply_high(x: int, y: int) -> int:
    """High word of the signed 64x64 -> 128 product."""
    return (x * y) >> 64


def unsigned_multiply_high(x: int, y: int) -> int:
    """High word of the unsigned 64x64 -> 128 product.

    Derived from the signed product: each negative operand contributed
    -2^64 * other, so add the other operand back once per negative operand.
    """
    return to_signed64(multiply_high(x, y) + if_negative(x, y) + if_negative(y, x))


def leading_zeros64(x: int) -> int:
    return 64 - (x & MASK64).bit_length()


def trailing_zeros64(x: int) -> int:
    x = x & MASK64
    if x == 0:
        return 64
    return (x & -x).bit_length() - 1


def bit_count64(x: int) -> int:
    return (x & MASK64).bit_count()


# ---------------------------------------------------------------------------
# Layer 2: Predicates and comparison
# ---------------------------------------------------------------------------


def in_long_range(high: int, low: int) -> bool:
    """Whether [high, low] fits in a signed 64-bit integer."""
    return high == (low >> 63)


def is_zero(high: int, low: int) -> bool:
    return (high | low) == 0


def compare(a_high: int, a_low: int, b_high: int, b_low: int) -> int:
    """Signed three-way comparison: -1, 0 or 1."""
    if a_high != b_high:
        return -1 if a_high < b_high else 1
    a_low = a_low & MASK64
    b_low = b_low & MASK64
    if a_low != b_low:
        return -1 if a_low < b_low else 1
    return 0


def compare_unsigned(a_high: int, a_low: int, b_high: int, b_low: int) -> int:
    """Three-way comparison of both pairs read as unsigned 128-bit values."""
    a_high = a_high & MASK64
    b_high = b_high & MASK64
    if a_high != b_high:
        return -1 if a_high < b_high else 1
    a_low = a_low & MASK64
    b_low = b_low & MASK64
    if a_low != b_low:
        return -1 if a_low < b_low else 1
    return 0


# ---------------------------------------------------------------------------
# Layer 3: Bit counts
# ---------------------------------------------------------------------------


def number_of_leading_zeros(high: int, low: int) -> int:
    count: int = leading_zeros64(high)
    if count == 64:
        count += leading_zeros64(low)
    return count


def number_of_trailing_zeros(high: int, low: int) -> int:
    count: int = trailing_zeros64(low)
    if count == 64:
        count += trailing_zeros64(high)
    return count


def bit_count(high: int, low: int) -> int:
    return bit_count64(high) + bit_count64(low)


# ---------------------------------------------------------------------------
# Layer 4: Shifts (shift in [0, 127])
# ---------------------------------------------------------------------------


def shift_left_high(high: int, low: int, shift: int) -> int:
    if shift < 64:
        return to_signed64((high << shift) | ((low & MASK64) >> (64 - shift)))
    return to_signed64(low << (shift - 64))


def shift_left_low(high: int, low: int, shift: int) -> int:
    if shift < 64:
        return to_signed64(low << shift)
    return 0


def shift_right_high(high: int, low: int, shift: int) -> int:
    if shift < 64:
        return high >> shift
    return high >> 63


def shift_right_low(high: int, low: int, shift: int) -> int:
    if shift < 64:
        return to_signed64((high << (64 - shift)) | ((low & MASK64) >> shift))
    return high >> (shift - 64)


def shift_right_unsigned_high(high: int, low: int, shift: int) -> int:
    if shift < 64:
        return to_signed64((high & MASK64) >> shift)
    return 0


def shift_right_unsigned_low(high: int, low: int, shift: int) -> int:
    if shift < 64:
        return to_signed64((high << (64 - shift)) | ((low & MASK64) >> shift))
    return to_signed64((high & MASK64) >> (shift - 64))


# ---------------------------------------------------------------------------
# Layer 5: Bitwise
# ---------------------------------------------------------------------------


def and_high(a_high: int, a_low: int, b_high: int, b_low: int) -> int:
    return a_high & b_high


def and_low(a_high: int, a_low: int, b_high: int, b_low: int) -> int:
    return a_low & b_low


def or_high(a_high: int, a_low: int, b_high: int, b_low: int) -> int:
    return a_high | b_high


def or_low(a_high: int, a_low: int, b_high: int, b_low: int) -> int:
    return a_low | b_low


def xor_high(a_high: int, a_low: int, b_high: int, b_low: int) -> int:
    return a_high ^ b_high


def xor_low(a_high: int, a_low: int, b_high: int, b_low: int) -> int:
    return a_low ^ b_low


def not_high(high: int, low: int) -> int:
    return ~high


def not_low(high: int, low: int) -> int:
    return ~low


# ---------------------------------------------------------------------------
# Layer 6: Additive arithmetic
# ---------------------------------------------------------------------------


def add_high(a_high: int, a_low: int, b_high: int, b_low: int) -> int:
    return to_signed64(a_high + b_high + unsigned_carry(a_low, b_low))


def add_low(a_high: int, a_low: int, b_high: int, b_low: int) -> int:
    return to_signed64(a_low + b_low)


def subtract_high(a_high: int, a_low: int, b_high: int, b_low: int) -> int:
    return to_signed64(a_high - b_high - unsigned_borrow(a_low, b_low))


def subtract_low(a_high: int, a_low: int, b_high: int, b_low: int) -> int:
    return to_signed64(a_low - b_low)


def increment_high(high: int, low: int) -> int:
    if low == -1:
        return to_signed64(high + 1)
    return high


def increment_low(high: int, low: int) -> int:
    return to_signed64(low + 1)


def decrement_high(high: int, low: int) -> int:
    if low == 0:
        return to_signed64(high - 1)
    return high


def decrement_low(high: int, low: int) -> int:
    return to_signed64(low - 1)


def negate_high(high: int, low: int) -> int:
    if low != 0:
        return to_signed64(-high - 1)
    return to_signed64(-high)


def negate_low(high: int, low: int) -> int:
    return to_signed64(-low)


# ---------------------------------------------------------------------------
# Layer 7: Wrapping multiplication
# ---------------------------------------------------------------------------


def multiply_high128(a_high: int, a_low: int, b_high: int, b_low: int) -> int:
    """High word of the 128-bit wrapping product.

    a_high * b_high only affects bits >= 128 and is dropped.
    """
    z1_high: int = unsigned_multiply_high(a_low, b_low)
    z2_low: int = a_low * b_high
    z3_low: int = a_high * b_low
    return to_signed64(z1_high + z2_low + z3_low)


def multiply_low128(a_high: int, a_low: int, b_high: int, b_low: int) -> int:
    return to_signed64(a_low * b_low)
