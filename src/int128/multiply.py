"""Overflow detection for the 128x128 -> 128 product."""

from __future__ import annotations

from .primitives import (
    if_negative,
    in_long_range,
    to_signed64,
    unsigned_borrow,
    unsigned_carry,
    unsigned_multiply_high,
)


def multiply_exact_words(a_high: int, a_low: int, b_high: int, b_low: int) -> tuple[int, int, bool]:
    """Multiply two word pairs. Returns (high, low, overflowed).

    The product is assembled from three cross terms over the 64-bit halves:
    z1 = a_low * b_low, z2 = a_low * b_high and z3 = a_high * b_low, each as
    an unsigned 64x64 -> 128 product.
    """
    z1_high: int = unsigned_multiply_high(a_low, b_low)
    z1_low: int = to_signed64(a_low * b_low)

    z2_high: int = unsigned_multiply_high(b_high, a_low)
    z2_low: int = to_signed64(a_low * b_high)

    z3_high: int = unsigned_multiply_high(a_high, b_low)
    z3_low: int = to_signed64(a_high * b_low)

    result_high: int = to_signed64(z1_high + z2_low + z3_low)
    overflowed = product_overflows(
        a_high, a_low, b_high, b_low, z1_high, z2_high, z2_low, z3_high, z3_low, result_high
    )
    return (result_high, z1_low, overflowed)


def product_overflows(
    a_high: int,
    a_low: int,
    b_high: int,
    b_low: int,
    z1_high: int,
    z2_high: int,
    z2_low: int,
    z3_high: int,
    z3_low: int,
    result_high: int,
) -> bool:
    """Whether the true product of a and b lies outside the signed 128-bit range."""
    a_in_long_range = in_long_range(a_high, a_low)
    b_in_long_range = in_long_range(b_high, b_low)

    # |a|, |b| < 2^63, so |a * b| <= 2^126
    if a_in_long_range and b_in_long_range:
        return False

    # |a|, |b| >= 2^63: only fits when both are at most one word wide and the
    # sign of the wrapped result agrees with the operand signs
    if not a_in_long_range and not b_in_long_range:
        return (
            (a_high == b_high and result_high <= 0)
            or (a_high != b_high and result_high >= 0)
            or (a_high != 0 and a_high != -1)
            or (b_high != 0 and b_high != -1)
        )

    # Exactly one operand is wide. The narrow operand's high word is only its
    # sign extension, so the matching cross term drops out; correct the other
    # one from unsigned to two's complement and carry z1's high word into it.
    w_high: int
    w_low: int
    if not a_in_long_range:
        w_high = to_signed64(
            z3_high
            - if_negative(a_high, b_low)
            - if_negative(b_low, a_high + unsigned_borrow(z3_low, a_low))
        )
        w_low = to_signed64(z3_low - if_negative(b_low, a_low))
    else:
        w_high = to_signed64(
            z2_high
            - if_negative(b_high, a_low)
            - if_negative(a_low, b_high + unsigned_borrow(z2_low, b_low))
        )
        w_low = to_signed64(z2_low - if_negative(a_low, b_low))

    t_low: int = to_signed64(w_low + z1_high)
    t_high: int = to_signed64(w_high + unsigned_carry(w_low, z1_high))
    return not in_long_range(t_high, t_low)
