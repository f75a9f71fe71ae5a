import math

import pytest

from calculator.models.schemas import SuccessEnvelope
from calculator.services.operations import (
    OPERATIONS,
    ErrorKind,
    Failure,
    add,
    divide,
    exponentiate,
    get_operation,
    modulo,
    multiply,
    square_root,
    subtract,
)


PAIRS = [(3.0, 4.0), (-2.5, 7.25), (0.0, -1.0), (1e10, 3e-5)]


@pytest.mark.parametrize("a, b", PAIRS)
def test_add_and_multiply_are_commutative(a: float, b: float) -> None:
    assert add(a, b) == add(b, a)
    assert multiply(a, b) == multiply(b, a)


@pytest.mark.parametrize("a, b", PAIRS)
def test_subtract_is_negated_when_swapped(a: float, b: float) -> None:
    assert subtract(a, b) == -subtract(b, a)


def test_divide_returns_quotient() -> None:
    assert divide(9.0, 3.0) == 3.0
    assert divide(1.0, -4.0) == -0.25


@pytest.mark.parametrize("zero", [0.0, -0.0])
def test_divide_by_zero_is_a_failure(zero: float) -> None:
    outcome = divide(5.0, zero)
    assert outcome == Failure(ErrorKind.DIVISION_BY_ZERO, "Cannot divide by zero")


def test_exponentiate() -> None:
    assert exponentiate(2.0, 10.0) == 1024.0
    assert exponentiate(4.0, 0.5) == 2.0


def test_exponentiate_passes_non_finite_results_through() -> None:
    assert exponentiate(10.0, 400.0) == math.inf
    assert exponentiate(-10.0, 401.0) == -math.inf
    assert exponentiate(0.0, -1.0) == math.inf
    assert exponentiate(-0.0, -3.0) == -math.inf
    assert math.isnan(exponentiate(-8.0, 0.5))


def test_square_root() -> None:
    assert square_root(4.0) == 2.0
    assert square_root(0.0) == 0.0
    assert square_root(-1.0) == Failure(
        ErrorKind.NEGATIVE_RADICAND, "No real square root of a negative number"
    )


def test_modulo_keeps_the_sign_of_the_dividend() -> None:
    assert modulo(7.0, 3.0) == 1.0
    assert modulo(-7.0, 3.0) == -1.0
    assert modulo(7.0, -3.0) == 1.0
    assert modulo(5.5, 2.0) == 1.5


def test_modulo_by_zero_is_nan_not_a_failure() -> None:
    outcome = modulo(5.0, 0.0)
    assert not isinstance(outcome, Failure)
    assert math.isnan(outcome)


def test_registry_arity_and_lookup() -> None:
    assert set(OPERATIONS) == {
        "add",
        "subtract",
        "multiply",
        "divide",
        "exponentiate",
        "squareRoot",
        "modulo",
    }
    assert get_operation("squareRoot").arity == 1
    assert all(op.arity == 2 for name, op in OPERATIONS.items() if name != "squareRoot")
    with pytest.raises(ValueError):
        get_operation("factorial")


def test_success_envelope_writes_whole_numbers_as_ints() -> None:
    assert SuccessEnvelope(data=1024.0).model_dump() == {"statuscode": 200, "data": 1024}
    assert isinstance(SuccessEnvelope(data=1024.0).model_dump()["data"], int)
    assert SuccessEnvelope(data=2.5).model_dump()["data"] == 2.5
    assert math.isnan(SuccessEnvelope(data=math.nan).model_dump()["data"])
