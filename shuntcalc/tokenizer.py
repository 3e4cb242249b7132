import enum
import logging
from dataclasses import dataclass
from typing import Optional

from shuntcalc.utils import EvaluationError, PrintableEnum

logger = logging.getLogger(__name__)


@dataclass
class UnexpectedCharacterError(EvaluationError):
    stage = "Tokenizer"

    char: str


class TokenType(PrintableEnum):
    NUMBER = enum.auto()
    BINARY_OPERATOR = enum.auto()
    UNARY_OPERATOR = enum.auto()
    BRACKET_OPEN = enum.auto()
    BRACKET_CLOSE = enum.auto()
    EXPR_END = enum.auto()


@dataclass(frozen=True)
class Token:
    type: TokenType
    lexeme: str
    position: int
    value: Optional[float] = None

    def __str__(self) -> str:
        return f"<{self.type}>{self.lexeme}"


DIGITS = "0123456789"
SKIPPED_CHARS = " \t"
SIGN_CHARS = "+-"

ALLOWED_CHARS = frozenset(SKIPPED_CHARS + DIGITS + ".+-*/^()")


def is_allowed_char(char: str) -> bool:
    return char in ALLOWED_CHARS


def _is_valid_in_number(s: str) -> bool:
    return s in DIGITS or s == "."


SINGLE_CHAR_TOKENS = {
    "*": TokenType.BINARY_OPERATOR,
    "/": TokenType.BINARY_OPERATOR,
    "^": TokenType.BINARY_OPERATOR,
    "(": TokenType.BRACKET_OPEN,
    ")": TokenType.BRACKET_CLOSE,
}

# a sign following one of these (or nothing) is unary
UNARY_CONTEXT = {TokenType.BINARY_OPERATOR, TokenType.UNARY_OPERATOR, TokenType.BRACKET_OPEN}


class Tokenizer:
    """Lazy tokenizer over a single line of source.

    Tokens are produced one at a time by `next_token`; once the source is
    exhausted every further call returns an `EXPR_END` token.
    """

    def __init__(self, code: str) -> None:
        self.code = code
        self._i = 0
        self._last_type: Optional[TokenType] = None

    def next_token(self) -> Token:
        token = self._read_token()
        if token.type is not TokenType.EXPR_END:
            self._last_type = token.type
        logger.debug("token %s at %d", token, token.position)
        return token

    def _read_token(self) -> Token:
        code = self.code
        while self._i < len(code) and code[self._i] in SKIPPED_CHARS:
            self._i += 1

        i = self._i
        if i >= len(code):
            return Token(type=TokenType.EXPR_END, lexeme="", position=len(code))

        char = code[i]
        if char in DIGITS:
            number_end_idx = i + 1
            while number_end_idx < len(code) and _is_valid_in_number(code[number_end_idx]):
                number_end_idx += 1
            lexeme = code[i:number_end_idx]
            try:
                value = float(lexeme)
            except ValueError:
                raise UnexpectedCharacterError(
                    f"Malformed number: {lexeme!r}", code=code, error_char_idx=i, char=lexeme
                ) from None
            self._i = number_end_idx
            return Token(type=TokenType.NUMBER, lexeme=lexeme, position=i, value=value)
        elif char in SIGN_CHARS:
            self._i += 1
            if self._last_type is None or self._last_type in UNARY_CONTEXT:
                return Token(type=TokenType.UNARY_OPERATOR, lexeme=char, position=i)
            return Token(type=TokenType.BINARY_OPERATOR, lexeme=char, position=i)
        elif char in SINGLE_CHAR_TOKENS:
            self._i += 1
            return Token(type=SINGLE_CHAR_TOKENS[char], lexeme=char, position=i)
        else:
            raise UnexpectedCharacterError(f"Unexpected character: {char!r}", code=code, error_char_idx=i, char=char)


def tokenize(code: str) -> list[Token]:
    tokenizer = Tokenizer(code)
    tokens: list[Token] = []
    while True:
        token = tokenizer.next_token()
        tokens.append(token)
        if token.type is TokenType.EXPR_END:
            return tokens
