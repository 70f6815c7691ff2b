"""Tests for the Int128 value type and its simple operations."""

import pytest

from int128 import (
    MAX_VALUE,
    MIN_VALUE,
    ONE,
    ZERO,
    Int128,
    Int128OverflowError,
    Int128RangeError,
    abs_,
    abs_exact,
    add,
    add_exact,
    and_,
    bit_count,
    compare,
    decrement,
    decrement_exact,
    increment,
    increment_exact,
    negate,
    negate_exact,
    not_,
    number_of_leading_zeros,
    number_of_trailing_zeros,
    or_,
    shift_left,
    shift_right,
    shift_right_unsigned,
    subtract,
    subtract_exact,
    xor,
)

from weighted import VALUE_MAX, VALUE_MIN, weighted_int128, wrap128

LONG_MAX = (1 << 63) - 1
LONG_MIN = -(1 << 63)


def test_constants():
    assert ZERO.to_int() == 0
    assert ONE.to_int() == 1
    assert MAX_VALUE.to_int() == 2**127 - 1
    assert MIN_VALUE.to_int() == -(2**127)
    assert MAX_VALUE.high == 0x7FFFFFFFFFFFFFFF
    assert MAX_VALUE.low == -1
    assert MIN_VALUE.high == -(1 << 63)
    assert MIN_VALUE.low == 0


def test_words_are_normalized():
    assert Int128(0xFFFFFFFFFFFFFFFF, 0xFFFFFFFFFFFFFFFF) == Int128(-1, -1)
    assert Int128(0, 0x8000000000000000).low == -(1 << 63)
    with pytest.raises(Int128RangeError):
        Int128(1 << 64, 0)
    with pytest.raises(Int128RangeError):
        Int128(0, -(1 << 63) - 1)


def test_from_words():
    assert Int128.from_words(0, 0xFFFFFFFFFFFFFFFF) == Int128(0, -1)
    assert Int128.from_words(-1, 5).to_int() == -(1 << 64) + 5
    with pytest.raises(Int128RangeError):
        Int128.from_words(0, 1 << 64)


def test_construction_type_errors():
    with pytest.raises(TypeError):
        Int128(1.5, 0)
    with pytest.raises(TypeError):
        Int128(0, "1")
    with pytest.raises(TypeError):
        Int128.value_of(True)
    with pytest.raises(TypeError):
        Int128.value_of(None)


def test_ordering_against_other_types():
    for op in [
        lambda a, b: a < b,
        lambda a, b: a <= b,
        lambda a, b: a > b,
        lambda a, b: a >= b,
    ]:
        with pytest.raises(TypeError):
            op(ONE, 1)
        with pytest.raises(TypeError):
            op(1.0, ONE)
    assert ONE != 1
    assert not (ONE == 1)


def test_immutable_and_hashable():
    value = Int128.value_of(42)
    with pytest.raises(AttributeError):
        value.low = 1
    assert {value, Int128(0, 42)} == {value}


def test_is_positive():
    assert ONE.is_positive()
    assert not ZERO.is_positive()
    assert MAX_VALUE.is_positive()
    assert not MIN_VALUE.is_positive()
    assert Int128.value_of(1000).is_positive()
    assert not Int128.value_of(-1000).is_positive()
    assert Int128(0, 0x8000000000000000).is_positive()


def test_is_zero():
    assert not ONE.is_zero()
    assert ZERO.is_zero()
    assert not MAX_VALUE.is_zero()
    assert not MIN_VALUE.is_zero()
    assert not Int128.value_of(1000).is_zero()
    assert not Int128.value_of(-1000).is_zero()
    assert not ZERO
    assert ONE


def test_is_negative():
    assert not ONE.is_negative()
    assert not ZERO.is_negative()
    assert not MAX_VALUE.is_negative()
    assert MIN_VALUE.is_negative()
    assert not Int128.value_of(1000).is_negative()
    assert Int128.value_of(-1000).is_negative()


def test_from_long():
    assert Int128.from_long(-1) == Int128(-1, -1)
    assert Int128.from_long(LONG_MIN) == Int128(-1, LONG_MIN)
    assert Int128.from_long(LONG_MAX) == Int128(0, LONG_MAX)
    with pytest.raises(Int128RangeError):
        Int128.from_long(LONG_MAX + 1)


def test_value_of():
    assert Int128.value_of(VALUE_MAX) == MAX_VALUE
    assert Int128.value_of(VALUE_MIN) == MIN_VALUE
    assert Int128.value_of("-1") == Int128(-1, -1)
    with pytest.raises(Int128RangeError):
        Int128.value_of(VALUE_MAX + 1)
    with pytest.raises(Int128RangeError):
        Int128.value_of(VALUE_MIN - 1)
    with pytest.raises(Int128RangeError):
        Int128.value_of("170141183460469231731687303715884105728")
    with pytest.raises(TypeError):
        Int128.value_of(1.5)


def test_in_long_range():
    assert Int128.value_of(LONG_MAX).in_long_range()
    assert Int128.value_of(LONG_MIN).in_long_range()
    assert not add(Int128.value_of(LONG_MAX), ONE).in_long_range()
    assert not subtract(Int128.value_of(LONG_MIN), ONE).in_long_range()
    assert not MAX_VALUE.in_long_range()
    assert not MIN_VALUE.in_long_range()
    assert ZERO.in_long_range()


def test_to_long():
    assert Int128.value_of(LONG_MAX).to_long() == LONG_MAX
    assert Int128.value_of(LONG_MAX).to_long_exact() == LONG_MAX
    assert Int128.value_of(LONG_MIN).to_long() == LONG_MIN
    assert Int128.value_of(LONG_MIN).to_long_exact() == LONG_MIN
    assert ZERO.to_long() == 0
    assert ZERO.to_long_exact() == 0
    assert MAX_VALUE.to_long() == -1
    assert MIN_VALUE.to_long() == 0
    with pytest.raises(Int128RangeError):
        MAX_VALUE.to_long_exact()
    with pytest.raises(Int128RangeError):
        MIN_VALUE.to_long_exact()


def test_compare():
    assert compare(ZERO, ZERO) == 0
    assert compare(ONE, ONE) == 0
    assert compare(MAX_VALUE, MAX_VALUE) == 0
    assert compare(MIN_VALUE, MIN_VALUE) == 0
    assert compare(MIN_VALUE, ZERO) == -1
    assert compare(MAX_VALUE, ZERO) == 1
    assert compare(ZERO, MIN_VALUE) == 1
    assert compare(ZERO, MAX_VALUE) == -1
    assert compare(MIN_VALUE, MAX_VALUE) == -1
    assert compare(MAX_VALUE, MIN_VALUE) == 1
    assert compare(Int128.value_of(LONG_MAX), MAX_VALUE) == -1
    assert compare(Int128.value_of(LONG_MIN), MAX_VALUE) == -1
    assert compare(Int128.value_of(LONG_MAX), MIN_VALUE) == 1
    assert compare(Int128.value_of(LONG_MIN), MIN_VALUE) == 1
    assert compare(Int128(0, 0xFFFFFFFFFFFFFFFF), Int128(0, 0xFFFFFFFFFFFFFFFE)) == 1
    assert compare(Int128(-1, 1), Int128(-1, 0)) == 1
    assert compare(Int128.value_of(-1), ZERO) == -1
    assert compare(Int128.value_of(-1), Int128.value_of(-1)) == 0


def test_compare_matches_reference(rng, rounds):
    for _ in range(rounds):
        a = weighted_int128(rng)
        b = weighted_int128(rng)
        x = a.to_int()
        y = b.to_int()
        assert compare(a, b) == (x > y) - (x < y)
        assert (a < b) == (x < y)
        assert (a <= b) == (x <= y)
        assert (a > b) == (x > y)
        assert (a >= b) == (x >= y)
        assert (a == b) == (x == y)


def test_add():
    assert add(ZERO, ZERO) == ZERO
    assert add(MAX_VALUE, ONE) == MIN_VALUE
    assert add(ZERO, ONE) == ONE
    assert add(Int128.value_of(LONG_MAX - 1), ONE) == Int128.value_of(LONG_MAX)
    assert add(Int128.value_of(-1), ONE) == ZERO
    assert add_exact(Int128.value_of(LONG_MIN + 1), Int128.value_of(-1)) == Int128.value_of(LONG_MIN)
    with pytest.raises(Int128OverflowError):
        add_exact(MAX_VALUE, ONE)
    with pytest.raises(Int128OverflowError):
        add_exact(MAX_VALUE, MAX_VALUE)
    with pytest.raises(Int128OverflowError):
        add_exact(MIN_VALUE, MIN_VALUE)


def test_subtract():
    assert subtract(ZERO, ZERO) == ZERO
    assert subtract(MIN_VALUE, ONE) == MAX_VALUE
    assert subtract_exact(Int128.value_of(LONG_MAX - 1), Int128.value_of(-1)) == Int128.value_of(LONG_MAX)
    with pytest.raises(Int128OverflowError):
        subtract_exact(MIN_VALUE, ONE)
    with pytest.raises(Int128OverflowError):
        subtract_exact(MIN_VALUE, MAX_VALUE)
    with pytest.raises(Int128OverflowError):
        subtract_exact(ZERO, MIN_VALUE)


@pytest.mark.parametrize("op", ["add", "subtract"])
def test_additive_reference(op: str, rng, rounds):
    wrapping, exact, ref = {
        "add": (add, add_exact, lambda x, y: x + y),
        "subtract": (subtract, subtract_exact, lambda x, y: x - y),
    }[op]
    fails = 0
    first_failure = ""
    for _ in range(rounds):
        a = weighted_int128(rng)
        b = weighted_int128(rng)
        expected = ref(a.to_int(), b.to_int())
        got = wrapping(a, b).to_int()
        overflows = expected < VALUE_MIN or expected > VALUE_MAX
        try:
            exact_got = exact(a, b).to_int()
        except Int128OverflowError:
            exact_got = None
        ok = got == wrap128(expected) and (exact_got is None) == overflows
        if ok and exact_got is not None:
            ok = exact_got == expected
        if not ok:
            fails += 1
            if fails == 1:
                first_failure = f"{op}({a}, {b}): got {got} / {exact_got}, expected {expected}"
    assert fails == 0, f"{fails}/{rounds} failures. First: {first_failure}"


def test_abs():
    assert abs_(ZERO) == ZERO
    assert abs_(ONE) == ONE
    assert abs_(negate(ONE)) == ONE
    assert abs_(MAX_VALUE) == MAX_VALUE
    assert abs_(negate(MAX_VALUE)) == MAX_VALUE
    assert abs_(MIN_VALUE) == MIN_VALUE
    assert abs(Int128.value_of(-5)) == Int128.value_of(5)
    with pytest.raises(Int128OverflowError):
        abs_exact(MIN_VALUE)


def test_negate():
    assert negate(ZERO) == ZERO
    assert negate_exact(ZERO) == ZERO
    assert negate(ONE) == Int128.value_of(-1)
    assert negate_exact(ONE) == Int128.value_of(-1)
    assert negate(MAX_VALUE) == Int128.value_of(-MAX_VALUE.to_int())
    assert negate_exact(MAX_VALUE) == Int128.value_of(-MAX_VALUE.to_int())
    assert negate(MIN_VALUE) == MIN_VALUE
    assert -Int128.value_of(7) == Int128.value_of(-7)
    with pytest.raises(Int128OverflowError):
        negate_exact(MIN_VALUE)


def test_increment():
    assert increment(ZERO) == ONE
    assert increment_exact(ZERO) == ONE
    assert increment(MAX_VALUE) == MIN_VALUE
    assert increment(Int128(0, -1)) == Int128(1, 0)
    with pytest.raises(Int128OverflowError, match="Integer overflow"):
        increment_exact(MAX_VALUE)


def test_decrement():
    assert decrement(ZERO) == negate(ONE)
    assert decrement_exact(ZERO) == negate(ONE)
    assert decrement(MIN_VALUE) == MAX_VALUE
    assert decrement(Int128(1, 0)) == Int128(0, -1)
    with pytest.raises(Int128OverflowError, match="Integer overflow"):
        decrement_exact(MIN_VALUE)


def test_shift_left():
    for shift in range(127):
        assert shift_left(ONE, shift) == Int128.value_of(1 << shift), f"<< {shift}"


def test_shift_right():
    for shift in range(127):
        assert shift_right(MAX_VALUE, shift) == Int128.value_of(VALUE_MAX >> shift), f">> {shift}"
    for shift in range(127):
        assert shift_right(MIN_VALUE, shift) == Int128.value_of(VALUE_MIN >> shift), f">> {shift}"


def test_shift_right_unsigned():
    for shift in range(127):
        assert shift_right_unsigned(MAX_VALUE, shift) == Int128.value_of(VALUE_MAX >> shift)
    for shift in range(1, 127):
        assert shift_right_unsigned(MIN_VALUE, shift) == Int128.value_of((1 << 127) >> shift)


def test_shift_amount_checked():
    with pytest.raises(ValueError):
        shift_left(ONE, 128)
    with pytest.raises(ValueError):
        shift_right(ONE, -1)


def test_shift_inverse(rng):
    for _ in range(2_000):
        value = weighted_int128(rng)
        n = value.to_int()
        for shift in range(127):
            # recoverable iff no significant bit is shifted out
            fits = -(1 << (127 - shift)) <= n < (1 << (127 - shift))
            recovered = shift_right(shift_left(value, shift), shift) == value
            assert recovered == fits, f"{n} << {shift} >> {shift}"


def test_number_of_leading_zeros():
    for shift in range(127):
        assert number_of_leading_zeros(shift_left(ONE, shift)) == 127 - shift


def test_number_of_trailing_zeros():
    for shift in range(127):
        assert number_of_trailing_zeros(shift_left(ONE, shift)) == shift


def test_bit_count():
    assert bit_count(Int128(0x0000000000000000, 0x0000000000000000)) == 0
    assert bit_count(Int128(0xFFFFFFFFFFFFFFFF, 0x0000000000000000)) == 64
    assert bit_count(Int128(0x0000000000000000, 0xFFFFFFFFFFFFFFFF)) == 64
    assert bit_count(Int128(0xFFFFFFFFFFFFFFFF, 0xFFFFFFFFFFFFFFFF)) == 128
    assert bit_count(Int128(0x0000000000000000, 0x0000000000000001)) == 1
    assert bit_count(Int128(0x0000000000000001, 0x0000000000000000)) == 1
    assert bit_count(Int128.value_of(-1)) == 128


def test_not():
    assert not_(Int128(0xFFFFFFFFFFFFFFFF, 0xFFFFFFFFFFFFFFFF)) == Int128(0, 0)
    assert not_(Int128(0, 0)) == Int128(0xFFFFFFFFFFFFFFFF, 0xFFFFFFFFFFFFFFFF)
    assert not_(Int128(0, 0xFFFFFFFFFFFFFFFF)) == Int128(0xFFFFFFFFFFFFFFFF, 0)
    assert ~ZERO == Int128.value_of(-1)


ALL = 0xFFFFFFFFFFFFFFFF


@pytest.mark.parametrize(
    "a,b,and_expected,or_expected,xor_expected",
    [
        ((ALL, ALL), (ALL, ALL), (ALL, ALL), (ALL, ALL), (0, 0)),
        ((ALL, ALL), (0, 0), (0, 0), (ALL, ALL), (ALL, ALL)),
        ((0, 0), (ALL, ALL), (0, 0), (ALL, ALL), (ALL, ALL)),
        ((0, 0), (0, 0), (0, 0), (0, 0), (0, 0)),
        ((ALL, ALL), (0, ALL), (0, ALL), (ALL, ALL), (ALL, 0)),
        ((ALL, 0), (0, 0), (0, 0), (ALL, 0), (ALL, 0)),
    ],
)
def test_bitwise(a, b, and_expected, or_expected, xor_expected):
    x = Int128(*a)
    y = Int128(*b)
    assert and_(x, y) == Int128(*and_expected)
    assert or_(x, y) == Int128(*or_expected)
    assert xor(x, y) == Int128(*xor_expected)
    assert (x & y, x | y, x ^ y) == (and_(x, y), or_(x, y), xor(x, y))


def test_operators():
    a = Int128.value_of(1000)
    assert a + 1 == Int128.value_of(1001)
    assert 1 + a == Int128.value_of(1001)
    assert a - 1 == Int128.value_of(999)
    assert 1 - a == Int128.value_of(-999)
    assert a * -3 == Int128.value_of(-3000)
    assert a << 2 == Int128.value_of(4000)
    assert Int128.value_of(-8) >> 1 == Int128.value_of(-4)
    assert MAX_VALUE + 1 == MIN_VALUE
    assert int(a) == 1000
    assert hex(a) == "0x3e8"
    assert str(MIN_VALUE) == "-170141183460469231731687303715884105728"


def test_to_string():
    assert str(ZERO) == "0"
    assert str(ONE) == "1"
    assert MIN_VALUE.to_string() == "-170141183460469231731687303715884105728"
    assert MAX_VALUE.to_string() == "170141183460469231731687303715884105727"
