"""int128 CLI: evaluate one 128-bit integer operation."""

from __future__ import annotations

import logging
import sys
from typing import Callable

from . import value as v
from .errors import (
    Int128DivisionByZero,
    Int128Error,
    Int128OverflowError,
    Int128RangeError,
)
from .value import Int128

logger = logging.getLogger(__name__)

USAGE: str = """\
int128 [OPTIONS] OP A [B]

Evaluate a signed 128-bit integer operation. Operands are decimal, or
hexadecimal with a 0x prefix.

Operations:
  binary   add sub mul div rem divrem and or xor cmp
  shift    shl shr ushr              (B is the shift amount, 0-127)
  unary    neg abs inc dec not bits nlz ntz bytes

Options:
  --exact            Fail on overflow instead of wrapping
  --radix N          Print results in radix N (2-36, default 10)
  --verbose          Log engine decisions to stderr
  --help             Show this help message
"""

BINARY: dict[str, tuple[Callable[[Int128, Int128], Int128], Callable[[Int128, Int128], Int128]]] = {
    "add": (v.add, v.add_exact),
    "sub": (v.subtract, v.subtract_exact),
    "mul": (v.multiply, v.multiply_exact),
    "div": (v.divide, v.divide),
    "rem": (v.remainder, v.remainder),
    "and": (v.and_, v.and_),
    "or": (v.or_, v.or_),
    "xor": (v.xor, v.xor),
}

UNARY: dict[str, tuple[Callable[[Int128], Int128], Callable[[Int128], Int128]]] = {
    "neg": (v.negate, v.negate_exact),
    "abs": (v.abs_, v.abs_exact),
    "inc": (v.increment, v.increment_exact),
    "dec": (v.decrement, v.decrement_exact),
    "not": (v.not_, v.not_),
}

SHIFTS: dict[str, Callable[[Int128, int], Int128]] = {
    "shl": v.shift_left,
    "shr": v.shift_right,
    "ushr": v.shift_right_unsigned,
}

COUNTS: dict[str, Callable[[Int128], int]] = {
    "bits": v.bit_count,
    "nlz": v.number_of_leading_zeros,
    "ntz": v.number_of_trailing_zeros,
}

ARITY: dict[str, int] = {
    **{op: 2 for op in BINARY},
    **{op: 2 for op in SHIFTS},
    **{op: 1 for op in UNARY},
    **{op: 1 for op in COUNTS},
    "divrem": 2,
    "cmp": 2,
    "bytes": 1,
}


def _operand(text: str) -> Int128:
    negative = text.startswith("-")
    body = text[1:] if negative else text
    if body.lower().startswith("0x"):
        return Int128.parse(("-" if negative else "") + body[2:], 16)
    return Int128.parse(text, 10)


def _setup_logging() -> None:
    root = logging.getLogger("int128")
    root.setLevel(logging.DEBUG)
    if root.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))
    root.addHandler(handler)


def evaluate(op: str, operands: list[str], exact: bool, radix: int) -> list[str]:
    """Run one operation and return the output lines."""
    a = _operand(operands[0])
    if op in UNARY:
        wrapping, checked = UNARY[op]
        return [(checked if exact else wrapping)(a).to_string(radix)]
    if op in COUNTS:
        return [str(COUNTS[op](a))]
    if op == "bytes":
        return [a.to_big_endian_bytes().hex()]
    if op in SHIFTS:
        try:
            shift = int(operands[1])
        except ValueError:
            raise ValueError(f"invalid shift amount '{operands[1]}'") from None
        return [SHIFTS[op](a, shift).to_string(radix)]
    b = _operand(operands[1])
    if op == "cmp":
        return [str(v.compare(a, b))]
    if op == "divrem":
        result = v.divide_with_remainder(a, b)
        return [result.quotient.to_string(radix), result.remainder.to_string(radix)]
    wrapping2, checked2 = BINARY[op]
    return [(checked2 if exact else wrapping2)(a, b).to_string(radix)]


def main(argv: list[str] | None = None) -> int:
    args = argv if argv is not None else sys.argv[1:]
    exact = False
    verbose = False
    radix = 10
    positional: list[str] = []
    i = 0
    while i < len(args):
        arg = args[i]
        if arg == "--help" or arg == "-h":
            print(USAGE, end="")
            return 0
        elif arg == "--exact":
            exact = True
            i += 1
        elif arg == "--verbose":
            verbose = True
            i += 1
        elif arg == "--radix":
            if i + 1 >= len(args):
                print("int128: --radix requires a value", file=sys.stderr)
                return 2
            try:
                radix = int(args[i + 1])
            except ValueError:
                print("int128: invalid radix '" + args[i + 1] + "'", file=sys.stderr)
                return 2
            if radix < 2 or radix > 36:
                print("int128: radix must be in [2, 36]", file=sys.stderr)
                return 2
            i += 2
        elif arg.startswith("--"):
            print("int128: unknown flag '" + arg + "'", file=sys.stderr)
            return 2
        else:
            positional.append(arg)
            i += 1

    if not positional:
        print("int128: missing operation", file=sys.stderr)
        return 2
    op = positional[0]
    if op not in ARITY:
        print("int128: unknown operation '" + op + "'", file=sys.stderr)
        return 2
    operands = positional[1:]
    if len(operands) != ARITY[op]:
        print(
            f"int128: {op} takes {ARITY[op]} operand(s), got {len(operands)}",
            file=sys.stderr,
        )
        return 2

    if verbose:
        _setup_logging()
    logger.debug("evaluating %s %s (exact=%s)", op, " ".join(operands), exact)

    try:
        lines = evaluate(op, operands, exact, radix)
    except Int128OverflowError as e:
        print("int128: overflow: " + str(e), file=sys.stderr)
        return 1
    except Int128DivisionByZero as e:
        print("int128: division by zero: " + str(e), file=sys.stderr)
        return 1
    except Int128RangeError as e:
        print("int128: range error: " + str(e), file=sys.stderr)
        return 1
    except Int128Error as e:
        print("int128: error: " + str(e), file=sys.stderr)
        return 1
    except ValueError as e:
        print("int128: " + str(e), file=sys.stderr)
        return 1

    for line in lines:
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
