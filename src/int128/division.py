"""Truncating 128-by-128 division producing quotient and remainder together.

The signed operands are reduced to magnitudes, divided as unsigned 128-bit
values and the signs restored afterwards:

- quotient is negated when the operand signs differ
- remainder takes the sign of the dividend

Magnitudes are word pairs like everything else; MIN_VALUE's magnitude 2^127
is the pair (-2^63, 0), which the unsigned primitives read correctly.
"""

from __future__ import annotations

import logging

from .errors import Int128DivisionByZero
from .primitives import (
    MASK32,
    MASK64,
    compare_unsigned,
    decrement_high,
    decrement_low,
    is_zero,
    leading_zeros64,
    negate_high,
    negate_low,
    number_of_leading_zeros,
    number_of_trailing_zeros,
    shift_left_high,
    shift_left_low,
    shift_right_unsigned_high,
    shift_right_unsigned_low,
    subtract_high,
    subtract_low,
    to_signed64,
)

logger = logging.getLogger(__name__)

# Divisors at least this many bits narrower than the dividend go through
# Algorithm D instead of the bit-at-a-time loop.
FAST_DIVISION_GAP: int = 15

DIGIT_BASE: int = 1 << 32


def divide_words(
    dividend_high: int, dividend_low: int, divisor_high: int, divisor_low: int
) -> tuple[int, int, int, int]:
    """Divide signed word pairs. Returns (quotient_high, quotient_low, remainder_high, remainder_low).

    MIN_VALUE / -1 wraps to MIN_VALUE; no overflow is reported.
    """
    if is_zero(divisor_high, divisor_low):
        raise Int128DivisionByZero("Divide by zero")

    dividend_negative = dividend_high < 0
    divisor_negative = divisor_high < 0

    if dividend_negative:
        dividend_high, dividend_low = (
            negate_high(dividend_high, dividend_low),
            negate_low(dividend_high, dividend_low),
        )
    if divisor_negative:
        divisor_high, divisor_low = (
            negate_high(divisor_high, divisor_low),
            negate_low(divisor_high, divisor_low),
        )

    q_high, q_low, r_high, r_low = divide_unsigned(
        dividend_high, dividend_low, divisor_high, divisor_low
    )

    if dividend_negative != divisor_negative:
        q_high, q_low = negate_high(q_high, q_low), negate_low(q_high, q_low)
    if dividend_negative:
        r_high, r_low = negate_high(r_high, r_low), negate_low(r_high, r_low)
    return (q_high, q_low, r_high, r_low)


def divide_unsigned(
    dividend_high: int, dividend_low: int, divisor_high: int, divisor_low: int
) -> tuple[int, int, int, int]:
    """Divide two word pairs read as unsigned 128-bit values.

    The divisor must be non-zero; `divide_words` checks it.
    """
    order = compare_unsigned(dividend_high, dividend_low, divisor_high, divisor_low)
    if order < 0:
        return (0, 0, dividend_high, dividend_low)
    if order == 0:
        return (0, 1, 0, 0)

    # single-word divisor, which also covers divisor == 1
    if divisor_high == 0:
        dividend = ((dividend_high & MASK64) << 64) | (dividend_low & MASK64)
        divisor = divisor_low & MASK64
        logger.debug("single-word division")
        quotient = dividend // divisor
        return (
            to_signed64(quotient >> 64),
            to_signed64(quotient),
            0,
            to_signed64(dividend - quotient * divisor),
        )

    divisor_leading = number_of_leading_zeros(divisor_high, divisor_low)
    divisor_trailing = number_of_trailing_zeros(divisor_high, divisor_low)
    if divisor_leading + divisor_trailing == 127:
        mask_high = decrement_high(divisor_high, divisor_low)
        mask_low = decrement_low(divisor_high, divisor_low)
        return (
            shift_right_unsigned_high(dividend_high, dividend_low, divisor_trailing),
            shift_right_unsigned_low(dividend_high, dividend_low, divisor_trailing),
            dividend_high & mask_high,
            dividend_low & mask_low,
        )

    gap = divisor_leading - number_of_leading_zeros(dividend_high, dividend_low)
    if gap > FAST_DIVISION_GAP:
        logger.debug("algorithm D division, magnitude gap %d bits", gap)
        return divide_knuth(dividend_high, dividend_low, divisor_high, divisor_low)
    logger.debug("bitwise division, magnitude gap %d bits", gap)
    return divide_bitwise(dividend_high, dividend_low, divisor_high, divisor_low, gap)


# ---------------------------------------------------------------------------
# Bitwise long division
# ---------------------------------------------------------------------------


def divide_bitwise(
    dividend_high: int,
    dividend_low: int,
    divisor_high: int,
    divisor_low: int,
    shift: int,
) -> tuple[int, int, int, int]:
    """Shift-subtract division, one quotient bit per step.

    `shift` aligns the divisor's top bit with the dividend's; requires the
    dividend to be at least as large as the divisor.
    """
    d_high: int = shift_left_high(divisor_high, divisor_low, shift)
    d_low: int = shift_left_low(divisor_high, divisor_low, shift)
    r_high: int = dividend_high
    r_low: int = dividend_low
    q_high: int = 0
    q_low: int = 0
    for _ in range(shift + 1):
        q_high, q_low = shift_left_high(q_high, q_low, 1), shift_left_low(q_high, q_low, 1)
        if compare_unsigned(d_high, d_low, r_high, r_low) <= 0:
            r_high, r_low = (
                subtract_high(r_high, r_low, d_high, d_low),
                subtract_low(r_high, r_low, d_high, d_low),
            )
            q_low = q_low | 1
        d_high, d_low = (
            shift_right_unsigned_high(d_high, d_low, 1),
            shift_right_unsigned_low(d_high, d_low, 1),
        )
    return (q_high, q_low, r_high, r_low)


# ---------------------------------------------------------------------------
# Knuth Algorithm D over base-2^32 digits
# ---------------------------------------------------------------------------


def _to_digits(high: int, low: int) -> list[int]:
    """Little-endian 32-bit digits with leading zero digits dropped."""
    digits = [
        low & MASK32,
        (low >> 32) & MASK32,
        high & MASK32,
        (high >> 32) & MASK32,
    ]
    while len(digits) > 1 and digits[-1] == 0:
        digits.pop()
    return digits


def _from_digits(digits: list[int]) -> tuple[int, int]:
    padded = digits + [0] * (4 - len(digits))
    low = padded[0] | (padded[1] << 32)
    high = padded[2] | (padded[3] << 32)
    return (to_signed64(high), to_signed64(low))


def divide_knuth(
    dividend_high: int, dividend_low: int, divisor_high: int, divisor_low: int
) -> tuple[int, int, int, int]:
    """Multi-precision long division (TAOCP 4.3.1, Algorithm D).

    Requires dividend >= divisor > 0 as unsigned values.
    """
    u = _to_digits(dividend_high, dividend_low)
    v = _to_digits(divisor_high, divisor_low)
    m = len(u)
    n = len(v)
    q = [0] * (m - n + 1)

    if n == 1:
        divisor = v[0]
        rem = 0
        for j in range(m - 1, -1, -1):
            t = (rem << 32) | u[j]
            q[j] = t // divisor
            rem = t - q[j] * divisor
        q_high, q_low = _from_digits(q)
        return (q_high, q_low, 0, rem)

    # D1: normalize so the divisor's top digit has its high bit set. The
    # dividend gains one digit to hold the bits shifted out of its top.
    s = leading_zeros64(v[n - 1]) - 32
    vn = [0] * n
    for i in range(n - 1, 0, -1):
        vn[i] = ((v[i] << s) | (v[i - 1] >> (32 - s))) & MASK32
    vn[0] = (v[0] << s) & MASK32
    un = [0] * (m + 1)
    un[m] = u[m - 1] >> (32 - s)
    for i in range(m - 1, 0, -1):
        un[i] = ((u[i] << s) | (u[i - 1] >> (32 - s))) & MASK32
    un[0] = (u[0] << s) & MASK32

    v_top = vn[n - 1]
    v_next = vn[n - 2]
    for j in range(m - n, -1, -1):
        # D3: estimate the digit from the top two dividend digits; the
        # estimate is at most two too large and this loop removes the excess
        t = (un[j + n] << 32) | un[j + n - 1]
        qhat = t // v_top
        rhat = t - qhat * v_top
        while qhat >= DIGIT_BASE or qhat * v_next > (rhat << 32) + un[j + n - 2]:
            qhat -= 1
            rhat += v_top
            if rhat >= DIGIT_BASE:
                break

        # D4: multiply and subtract
        borrow = 0
        for i in range(n):
            p = qhat * vn[i]
            t = un[i + j] - borrow - (p & MASK32)
            un[i + j] = t & MASK32
            borrow = (p >> 32) - (t >> 32)
        t = un[j + n] - borrow
        un[j + n] = t & MASK32

        # D5/D6: the estimate was one too large, add the divisor back
        q[j] = qhat
        if t < 0:
            q[j] -= 1
            carry = 0
            for i in range(n):
                t = un[i + j] + vn[i] + carry
                un[i + j] = t & MASK32
                carry = t >> 32
            un[j + n] = (un[j + n] + carry) & MASK32

    # D8: unnormalize the remainder
    r = [((un[i] >> s) | (un[i + 1] << (32 - s))) & MASK32 for i in range(n)]
    q_high, q_low = _from_digits(q)
    r_high, r_low = _from_digits(r)
    return (q_high, q_low, r_high, r_low)
