"""Random Int128 values for tests and simulations."""

from __future__ import annotations

import random

from .value import (
    ONE,
    ZERO,
    Int128,
    add,
    and_,
    bit_count,
    decrement,
    remainder,
    shift_left,
    shift_right_unsigned,
    subtract,
)

_default_rng = random.Random()


def random_int128(rng: random.Random | None = None) -> Int128:
    """Uniform over [MIN_VALUE, MAX_VALUE]."""
    r = rng if rng is not None else _default_rng
    return Int128(r.getrandbits(64), r.getrandbits(64))


def random_magnitude(magnitude: int, rng: random.Random | None = None) -> Int128:
    """Uniform over [2^(magnitude-1), 2^magnitude); ZERO when magnitude is 0."""
    if magnitude < 0 or magnitude > 126:
        raise ValueError(f"magnitude must be in [0, 126]: {magnitude}")
    if magnitude == 0:
        return ZERO
    if magnitude == 1:
        return ONE
    base = shift_left(ONE, magnitude - 1)
    return add(base, random_below(base, rng))


def random_below(bound: Int128, rng: random.Random | None = None) -> Int128:
    """Uniform over [0, bound) for a positive bound."""
    if not bound.is_positive():
        raise ValueError(f"bound must be positive: {bound}")
    m = decrement(bound)
    result = random_int128(rng)
    if bit_count(bound) == 1:
        return and_(result, m)
    # Rejection sampling on 127-bit candidates: reject the candidates that
    # fall in the last, incomplete multiple of bound
    value = shift_right_unsigned(result, 1)
    while True:
        result = remainder(value, bound)
        if not subtract(add(value, m), result).is_negative():
            return result
        value = shift_right_unsigned(random_int128(rng), 1)
