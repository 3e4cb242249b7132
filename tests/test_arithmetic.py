import math

import pytest

from shuntcalc.parser import MalformedExpressionError, MismatchedParenthesesError
from shuntcalc.runtime import evaluate, evaluate_expression
from shuntcalc.tokenizer import UnexpectedCharacterError
from shuntcalc.utils import EvaluationError


@pytest.mark.parametrize(
    "code, expected_ret_val",
    [
        pytest.param("1", 1.0),
        pytest.param("-1", -1.0),
        pytest.param("1+2", 3.0),
        pytest.param("(1+2)", 3.0),
        pytest.param("-(1+2)", -3.0),
        pytest.param("(((1)))", 1.0),
        pytest.param("1 * 4 + 5", 9.0),
        pytest.param("1 + 4 * 5", 21.0),
        pytest.param("10 / 5 / 2 / 2", 0.5),
        pytest.param("10 + 2 * (5 + 3 - 1)", 24.0),
        pytest.param("8-3-2", 3.0),
        pytest.param("2^3^2", 512.0),
        pytest.param("2+3*4", 14.0),
        pytest.param("(2+3)*4", 20.0),
        pytest.param("-3+4", 1.0),
        pytest.param("-2^2", 4.0),
        pytest.param("2^-2", 0.25),
        pytest.param("2*-3", -6.0),
        pytest.param("80225/+2", 40112.5),
        pytest.param("--3", 3.0),
        pytest.param("-+-3", 3.0),
        pytest.param("4^0.5", 2.0),
        pytest.param("\t1 +\t 2 ", 3.0),
        pytest.param("1.", 1.0),
        pytest.param("1 + 14 * (54^2)", 40825.0),
    ],
)
def test_eval_arithmetic(code: str, expected_ret_val: float) -> None:
    assert evaluate_expression(code) == expected_ret_val


@pytest.mark.parametrize("literal", ["0", "7", "42", "0.5", "3.25", "123.456", "1000000", "0.001"])
def test_literal_evaluates_to_itself(literal: str) -> None:
    assert math.isclose(evaluate_expression(literal), float(literal))


@pytest.mark.parametrize(
    "code, expected_ret_val",
    [
        pytest.param("1/0", math.inf),
        pytest.param("-1/0", -math.inf),
        pytest.param("1/-0", -math.inf),
        pytest.param("0^-1", math.inf),
        pytest.param("(-0)^-1", -math.inf),
        pytest.param("0^-2", math.inf),
        pytest.param("10^400", math.inf),
        pytest.param("(-10)^401", -math.inf),
        pytest.param("(-10)^400", math.inf),
        pytest.param("0.5^-2000", math.inf),
    ],
)
def test_eval_ieee_infinities(code: str, expected_ret_val: float) -> None:
    assert evaluate_expression(code) == expected_ret_val


@pytest.mark.parametrize("code", ["0/0", "(-8)^(1/3)", "(-2)^0.5", "(1/0)-(1/0)"])
def test_eval_ieee_nan(code: str) -> None:
    assert math.isnan(evaluate_expression(code))


@pytest.mark.parametrize(
    "code, error_cls",
    [
        pytest.param("(2+3", MismatchedParenthesesError),
        pytest.param("2+3)", MismatchedParenthesesError),
        pytest.param("((1)", MismatchedParenthesesError),
        pytest.param(")(", MismatchedParenthesesError),
        pytest.param("", MalformedExpressionError),
        pytest.param("  \t ", MalformedExpressionError),
        pytest.param("+", MalformedExpressionError),
        pytest.param("2 3", MalformedExpressionError),
        pytest.param("2+", MalformedExpressionError),
        pytest.param("*2", MalformedExpressionError),
        pytest.param("()", MalformedExpressionError),
        pytest.param("(1)(2)", MalformedExpressionError),
        pytest.param("1 + a", UnexpectedCharacterError),
        pytest.param(".5", UnexpectedCharacterError),
        pytest.param("1.2.3", UnexpectedCharacterError),
    ],
)
def test_eval_errors(code: str, error_cls: type[EvaluationError]) -> None:
    with pytest.raises(error_cls):
        evaluate_expression(code)


@pytest.mark.parametrize("code", ["2^3^2 - 1", "(2+3", "2 3", "1 + a"])
def test_evaluation_is_idempotent(code: str) -> None:
    def outcome() -> object:
        try:
            return evaluate_expression(code)
        except EvaluationError as e:
            return type(e)

    assert outcome() == outcome()


@pytest.mark.parametrize(
    "code, expected_ret_val",
    [
        pytest.param("1" + "+1" * 5000, 5001.0, id="left-deep sum"),
        pytest.param("1" + "^1" * 5000, 1.0, id="right-deep power"),
        pytest.param("-" * 5000 + "1", 1.0, id="even unary chain"),
        pytest.param("-" * 5001 + "1", -1.0, id="odd unary chain"),
        pytest.param("(" * 2000 + "1" + "+1)" * 2000, 2001.0, id="nested brackets"),
    ],
)
def test_eval_deep_expressions(code: str, expected_ret_val: float) -> None:
    assert evaluate_expression(code) == expected_ret_val


def test_evaluate_rejects_non_expression() -> None:
    with pytest.raises(TypeError):
        evaluate("1 + 2")  # type: ignore
