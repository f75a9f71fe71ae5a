"""Pure arithmetic operations, keyed by the name used in routes and logs.

Domain failures are returned as :class:`Failure` values instead of raised, so
callers decide how to surface them. Results follow IEEE-754 float semantics:
where Python's ``math`` functions would raise on overflow or an undefined
value, the operation returns ``inf`` or ``nan`` instead.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Union


class ErrorKind(str, Enum):
    INVALID_INPUT = "InvalidInput"
    DIVISION_BY_ZERO = "DivisionByZero"
    NEGATIVE_RADICAND = "NegativeRadicand"


@dataclass(frozen=True)
class Failure:
    kind: ErrorKind
    message: str


Outcome = Union[float, Failure]


@dataclass(frozen=True)
class Operation:
    name: str
    arity: int
    evaluate: Callable[..., Outcome]
    label: str


def add(n1: float, n2: float) -> Outcome:
    return n1 + n2


def subtract(n1: float, n2: float) -> Outcome:
    return n1 - n2


def multiply(n1: float, n2: float) -> Outcome:
    return n1 * n2


def divide(n1: float, n2: float) -> Outcome:
    if n2 == 0:
        return Failure(ErrorKind.DIVISION_BY_ZERO, "Cannot divide by zero")
    return n1 / n2


def _is_odd_integer(value: float) -> bool:
    return math.isfinite(value) and value.is_integer() and value % 2 == 1


def _infinity_for(base: float, exponent: float) -> float:
    negative = math.copysign(1.0, base) < 0 and _is_odd_integer(exponent)
    return -math.inf if negative else math.inf


def exponentiate(base: float, exponent: float) -> Outcome:
    try:
        return math.pow(base, exponent)
    except OverflowError:
        return _infinity_for(base, exponent)
    except ValueError:
        # math.pow refuses 0 ** negative and negative ** fractional.
        if base == 0:
            return _infinity_for(base, exponent)
        return math.nan


def square_root(number: float) -> Outcome:
    if number < 0:
        return Failure(ErrorKind.NEGATIVE_RADICAND, "No real square root of a negative number")
    return math.sqrt(number)


def modulo(n1: float, n2: float) -> Outcome:
    # Remainder takes the sign of the dividend; a zero divisor is not an error.
    if n2 == 0 or math.isinf(n1):
        return math.nan
    return math.fmod(n1, n2)


OPERATIONS: dict[str, Operation] = {
    op.name: op
    for op in (
        Operation("add", 2, add, "add"),
        Operation("subtract", 2, subtract, "subtract"),
        Operation("multiply", 2, multiply, "multiply"),
        Operation("divide", 2, divide, "divide"),
        Operation("exponentiate", 2, exponentiate, "exponentiate"),
        Operation("squareRoot", 1, square_root, "squareRoot"),
        Operation("modulo", 2, modulo, "modulo"),
    )
}


def get_operation(name: str) -> Operation:
    try:
        return OPERATIONS[name]
    except KeyError:
        raise ValueError(f"Unknown operation: {name!r}") from None
