"""Fixed-width signed 128-bit integers — public API."""

from __future__ import annotations

from .errors import (
    Int128DivisionByZero as Int128DivisionByZero,
    Int128Error as Int128Error,
    Int128OverflowError as Int128OverflowError,
    Int128RangeError as Int128RangeError,
)
from .sampling import (
    random_below as random_below,
    random_int128 as random_int128,
    random_magnitude as random_magnitude,
)
from .value import (
    BYTES as BYTES,
    MAX_VALUE as MAX_VALUE,
    MIN_VALUE as MIN_VALUE,
    ONE as ONE,
    SIZE as SIZE,
    ZERO as ZERO,
    DivisionResult as DivisionResult,
    Int128 as Int128,
    abs_ as abs_,
    abs_exact as abs_exact,
    add as add,
    add_exact as add_exact,
    and_ as and_,
    bit_count as bit_count,
    compare as compare,
    decrement as decrement,
    decrement_exact as decrement_exact,
    divide as divide,
    divide_with_remainder as divide_with_remainder,
    increment as increment,
    increment_exact as increment_exact,
    multiply as multiply,
    multiply_exact as multiply_exact,
    multiply_long as multiply_long,
    negate as negate,
    negate_exact as negate_exact,
    not_ as not_,
    number_of_leading_zeros as number_of_leading_zeros,
    number_of_trailing_zeros as number_of_trailing_zeros,
    or_ as or_,
    remainder as remainder,
    shift_left as shift_left,
    shift_right as shift_right,
    shift_right_unsigned as shift_right_unsigned,
    subtract as subtract,
    subtract_exact as subtract_exact,
    xor as xor,
)
