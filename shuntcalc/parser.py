import enum
import logging
from dataclasses import dataclass

from shuntcalc.tokenizer import Token, Tokenizer, TokenType
from shuntcalc.utils import EvaluationError, PrintableEnum

logger = logging.getLogger(__name__)


@dataclass
class ParserError(EvaluationError):
    stage = "Parser"


class MismatchedParenthesesError(ParserError):
    pass


class MalformedExpressionError(ParserError):
    pass


class BinaryOperator(PrintableEnum):
    ADD = enum.auto()
    SUB = enum.auto()
    MUL = enum.auto()
    DIV = enum.auto()
    POW = enum.auto()


@dataclass
class BinaryOperation:
    operator: BinaryOperator
    left: "Expression"
    right: "Expression"


class UnaryOperator(PrintableEnum):
    NEG = enum.auto()
    POS = enum.auto()


@dataclass
class UnaryOperation:
    operator: UnaryOperator
    operand: "Expression"


Operator = BinaryOperator | UnaryOperator
Expression = float | BinaryOperation | UnaryOperation


class Associativity(PrintableEnum):
    LEFT = enum.auto()
    RIGHT = enum.auto()


BINARY_OPERATORS = {
    "+": BinaryOperator.ADD,
    "-": BinaryOperator.SUB,
    "*": BinaryOperator.MUL,
    "/": BinaryOperator.DIV,
    "^": BinaryOperator.POW,
}

UNARY_OPERATORS = {
    "+": UnaryOperator.POS,
    "-": UnaryOperator.NEG,
}

OPERATOR_INFO: dict[Operator, tuple[int, Associativity]] = {
    BinaryOperator.ADD: (1, Associativity.LEFT),
    BinaryOperator.SUB: (1, Associativity.LEFT),
    BinaryOperator.MUL: (2, Associativity.LEFT),
    BinaryOperator.DIV: (2, Associativity.LEFT),
    BinaryOperator.POW: (3, Associativity.RIGHT),
    UnaryOperator.NEG: (10, Associativity.RIGHT),
    UnaryOperator.POS: (10, Associativity.RIGHT),
}

OPERATOR_TOKEN_TYPES = {TokenType.BINARY_OPERATOR, TokenType.UNARY_OPERATOR}


def get_op_precedence(op: Operator) -> int:
    return OPERATOR_INFO[op][0]


def is_rtl_op(op: Operator) -> bool:
    return OPERATOR_INFO[op][1] is Associativity.RIGHT


def operator_info(symbol: str, arity: int) -> tuple[int, Associativity]:
    """Precedence and associativity of an operator given by its symbol and arity"""
    table = {1: UNARY_OPERATORS, 2: BINARY_OPERATORS}.get(arity)
    if table is None or symbol not in table:
        raise KeyError(f"No {arity}-ary operator {symbol!r}")
    return OPERATOR_INFO[table[symbol]]


def token_operator(token: Token) -> Operator:
    if token.type is TokenType.BINARY_OPERATOR:
        return BINARY_OPERATORS[token.lexeme]
    elif token.type is TokenType.UNARY_OPERATOR:
        return UNARY_OPERATORS[token.lexeme]
    else:
        raise ValueError(f"Not an operator token: {token}")


def parse(tokenizer: Tokenizer) -> Expression:
    rpn = to_rpn(tokenizer)
    logger.debug("rpn: %s", " ".join(str(t) for t in rpn))
    return rpn_to_ast(rpn, code=tokenizer.code)


def to_rpn(tokenizer: Tokenizer) -> list[Token]:
    """Shunting-yard pass: reorders the token stream into postfix order.

    Pulls tokens from `tokenizer` until `EXPR_END`. The returned list holds
    only number and operator tokens.
    """
    output: list[Token] = []
    stack: list[Token] = []
    while True:
        token = tokenizer.next_token()
        if token.type is TokenType.EXPR_END:
            break
        elif token.type is TokenType.NUMBER:
            output.append(token)
        elif token.type is TokenType.BINARY_OPERATOR:
            operator = token_operator(token)
            curr_precedence = get_op_precedence(operator)
            while stack and stack[-1].type in OPERATOR_TOKEN_TYPES:
                top_operator = token_operator(stack[-1])
                top_precedence = get_op_precedence(top_operator)
                if top_precedence > curr_precedence or (
                    top_precedence == curr_precedence and not is_rtl_op(top_operator)
                ):
                    output.append(stack.pop())
                else:
                    break
            stack.append(token)
        elif token.type in (TokenType.UNARY_OPERATOR, TokenType.BRACKET_OPEN):
            stack.append(token)
        elif token.type is TokenType.BRACKET_CLOSE:
            while stack and stack[-1].type is not TokenType.BRACKET_OPEN:
                output.append(stack.pop())
            if not stack:
                raise MismatchedParenthesesError(
                    "Closing bracket without a matching opening one",
                    code=tokenizer.code,
                    error_char_idx=token.position,
                )
            stack.pop()
        else:
            raise ParserError(f"Unexpected token {token}", code=tokenizer.code, error_char_idx=token.position)

    while stack:
        token = stack.pop()
        if token.type is TokenType.BRACKET_OPEN:
            raise MismatchedParenthesesError("Unclosed bracket", code=tokenizer.code, error_char_idx=token.position)
        output.append(token)
    return output


def rpn_to_ast(rpn: list[Token], code: str) -> Expression:
    """Folds a postfix token sequence into a single expression tree"""
    # each entry keeps the source index where its subexpression starts
    nodes: list[tuple[Expression, int]] = []
    for token in rpn:
        if token.type is TokenType.NUMBER:
            nodes.append((token.value, token.position))  # type: ignore
        elif token.type is TokenType.BINARY_OPERATOR:
            if len(nodes) < 2:
                raise MalformedExpressionError(
                    f"Operator {token.lexeme!r} is missing an operand", code=code, error_char_idx=token.position
                )
            right, _ = nodes.pop()
            left, left_start = nodes.pop()
            nodes.append((BinaryOperation(operator=token_operator(token), left=left, right=right), left_start))
        elif token.type is TokenType.UNARY_OPERATOR:
            if not nodes:
                raise MalformedExpressionError(
                    f"Unary {token.lexeme!r} is missing its operand", code=code, error_char_idx=token.position
                )
            operand, _ = nodes.pop()
            nodes.append((UnaryOperation(operator=token_operator(token), operand=operand), token.position))
        else:
            raise ParserError(f"Unexpected token in postfix sequence: {token}", code=code, error_char_idx=token.position)

    if not nodes:
        raise MalformedExpressionError("Empty expression", code=code, error_char_idx=len(code))
    if len(nodes) > 1:
        _, extra_start = nodes[1]
        raise MalformedExpressionError("Operator expected between operands", code=code, error_char_idx=extra_start)
    return nodes[0][0]
