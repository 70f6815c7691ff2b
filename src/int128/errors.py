"""Errors raised by the 128-bit integer engine."""

from __future__ import annotations


class Int128Error(ArithmeticError):
    """Base error for 128-bit arithmetic and conversions."""

    def __init__(self, msg: str):
        super().__init__(msg)
        self.msg = msg


class Int128OverflowError(Int128Error, OverflowError):
    """Exact operation whose true result does not fit in 128 bits."""


class Int128DivisionByZero(Int128Error, ZeroDivisionError):
    """Division or remainder by zero."""


class Int128RangeError(Int128Error, ValueError):
    """Value does not fit the requested representation."""
