import math
import operator
from typing import Callable

from shuntcalc.parser import BinaryOperation, BinaryOperator, Expression, UnaryOperation, UnaryOperator, parse
from shuntcalc.tokenizer import Tokenizer


def evaluate_expression(code: str) -> float:
    """Tokenizes, parses and evaluates one line of source.

    Raises the first `EvaluationError` encountered; nothing is computed
    for an expression that fails to parse.
    """
    return evaluate(parse(Tokenizer(code)))


def evaluate(expression: Expression) -> float:
    """Post-order walk over the tree, left operand before right.

    Uses an explicit stack, so tree depth is not bounded by the
    interpreter's recursion limit.
    """
    results: list[float] = []
    # (node, operands already evaluated)
    pending: list[tuple[Expression, bool]] = [(expression, False)]
    while pending:
        node, operands_done = pending.pop()
        if isinstance(node, float):
            results.append(node)
        elif isinstance(node, BinaryOperation):
            if operands_done:
                right_res = results.pop()
                left_res = results.pop()
                results.append(binary_impls[node.operator](left_res, right_res))
            else:
                pending.append((node, True))
                pending.append((node.right, False))
                pending.append((node.left, False))
        elif isinstance(node, UnaryOperation):
            if operands_done:
                results.append(unary_impls[node.operator](results.pop()))
            else:
                pending.append((node, True))
                pending.append((node.operand, False))
        else:
            raise TypeError(f"Unexpected expression type: {node!r}")
    return results[0]


def _is_odd_integer(x: float) -> bool:
    return math.isfinite(x) and x.is_integer() and x % 2 == 1


def ieee_div(a: float, b: float) -> float:
    try:
        return a / b
    except ZeroDivisionError:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)


def ieee_pow(base: float, exponent: float) -> float:
    try:
        return math.pow(base, exponent)
    except OverflowError:
        return -math.inf if base < 0 and _is_odd_integer(exponent) else math.inf
    except ValueError:
        # pow(+-0, y < 0) is a pole, everything else left here is a domain error
        if base == 0:
            return math.copysign(math.inf, base) if _is_odd_integer(exponent) else math.inf
        return math.nan


binary_impls: dict[BinaryOperator, Callable[[float, float], float]] = {
    BinaryOperator.ADD: operator.add,
    BinaryOperator.SUB: operator.sub,
    BinaryOperator.MUL: operator.mul,
    BinaryOperator.DIV: ieee_div,
    BinaryOperator.POW: ieee_pow,
}

unary_impls: dict[UnaryOperator, Callable[[float], float]] = {
    UnaryOperator.POS: operator.pos,
    UnaryOperator.NEG: operator.neg,
}
