"""Literal values and operator kinds at the scanner boundary.

The scanner that turns source into tokens lives outside this package. This
module covers what the value engine needs from it: converting literal
tokens into variables and mapping operator tokens onto operator kinds.

`parse_literal` is a convenience for text that has not been scanned, such as
command line arguments. It classifies a single literal with a small Lark
grammar and hands the resulting token to `literal_value`.
"""

__all__ = ["TokenKind", "Token", "operator_for", "literal_value", "parse_literal"]

import enum
import functools
import re
from dataclasses import dataclass

from lark import Lark, Transformer
from lark.exceptions import LarkError

from . import bigint
from ._error import MalformedInteger, ParseError
from ._ops import CmpKind, OpKind
from ._value import Integer, Intermediate, Invalid, Number, Text


class TokenKind(enum.Enum):
    """Scanner token kinds consumed by the value engine."""

    INTEGER_LITERAL = "IntegerLiteral"
    DOUBLE_LITERAL = "DoubleLiteral"
    STRING_LITERAL = "StringLiteral"
    BOOLEAN_TRUE = "BooleanTrue"
    BOOLEAN_FALSE = "BooleanFalse"

    PLUS = "Plus"
    MINUS = "Minus"
    MULTIPLY = "Multiply"
    DIVIDE = "Divide"
    MODULUS = "Modulus"
    EXPONENT = "Exponent"
    STR_CONCAT = "StrConcat"

    GREATER = "Greater"
    LESSER = "Lesser"
    EQUALS_EQUALS = "EqualsEquals"
    GREATER_EQUALS = "GreaterEquals"
    LESSER_EQUALS = "LesserEquals"


@dataclass(frozen=True, slots=True)
class Token:
    """Scanned token with its 1-based source position.

    String literal lexemes are the quoted source text.
    """

    kind: TokenKind
    lexeme: str
    row: int = 1
    col: int = 1


_OPERATORS = {
    TokenKind.PLUS: OpKind.ADD,
    TokenKind.MINUS: OpKind.SUB,
    TokenKind.MULTIPLY: OpKind.MUL,
    TokenKind.DIVIDE: OpKind.DIV,
    TokenKind.MODULUS: OpKind.MOD,
    TokenKind.EXPONENT: OpKind.POW,
    TokenKind.STR_CONCAT: OpKind.CONCAT,
    TokenKind.GREATER: CmpKind.GT,
    TokenKind.LESSER: CmpKind.LT,
    TokenKind.EQUALS_EQUALS: CmpKind.EQ,
    TokenKind.GREATER_EQUALS: CmpKind.GE,
    TokenKind.LESSER_EQUALS: CmpKind.LE,
}

_DOUBLE_RE = re.compile(r"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?")
_ESCAPE_RE = re.compile(r"\\(.)", re.DOTALL)
_ESCAPES = {'"': '"', "\\": "\\", "n": "\n", "t": "\t"}


def operator_for(kind):
    """Operator kind for an operator token.

    Args:
        kind: (TokenKind) Scanned token kind
    Returns:
        (OpKind | CmpKind | None) Matching operator, None for non-operators
    """
    return _OPERATORS.get(kind)


def literal_value(token):
    """Convert a literal token into an intermediate variable.

    Malformed lexemes produce an Invalid value rather than raising, the same
    as a failed operator.

    Args:
        token: (Token) Literal token from the scanner
    Returns:
        (Intermediate) Literal value
    Raises:
        TypeError: If the token is not a literal kind
    """
    kind = token.kind
    lexeme = token.lexeme
    if kind is TokenKind.INTEGER_LITERAL:
        try:
            return Intermediate(Integer(bigint.from_string(lexeme)))
        except MalformedInteger as e:
            return Intermediate(Invalid(_located(e.message, token), type(e).__name__))
    if kind is TokenKind.DOUBLE_LITERAL:
        if not _DOUBLE_RE.fullmatch(lexeme):
            return Intermediate(Invalid(
                _located(f"Invalid number {lexeme!r}", token), ParseError.__name__))
        return Intermediate(Number(float(lexeme)))
    if kind is TokenKind.STRING_LITERAL:
        return Intermediate(Text(_unquote(lexeme)))
    if kind is TokenKind.BOOLEAN_TRUE:
        return Intermediate(Integer(bigint.ONE))
    if kind is TokenKind.BOOLEAN_FALSE:
        return Intermediate(Integer(bigint.ZERO))
    raise TypeError(f"Token {kind} is not a literal")


def parse_literal(text):
    """Parse a single literal from text.

    Args:
        text: (str) Literal such as `42`, `-3.5`, `"hi"` or `true`
    Returns:
        (Intermediate) Literal value
    Raises:
        ParseError: If the text is not exactly one literal
    """
    try:
        token = _parser().parse(text)
    except LarkError as e:
        raise ParseError(f"Invalid literal {text!r}", getattr(e, "pos_in_stream", None)) from e
    return literal_value(token)


GRAMMAR = r"""
start: literal

literal: INTEGER -> integer
       | DOUBLE -> double
       | STRING -> string
       | TRUE -> true
       | FALSE -> false

INTEGER: /[+-]?[0-9]+/
DOUBLE.2: /[+-]?([0-9]+\.[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?/
        | /[+-]?[0-9]+[eE][+-]?[0-9]+/
STRING: /"(\\.|[^"\\])*"/
TRUE: "true"
FALSE: "false"

%import common.WS
%ignore WS
"""


class LiteralTransformer(Transformer):
    """Turn the parse tree for one literal into a Token."""

    def start(self, children):
        return children[0]

    def integer(self, children):
        return _token(TokenKind.INTEGER_LITERAL, children[0])

    def double(self, children):
        return _token(TokenKind.DOUBLE_LITERAL, children[0])

    def string(self, children):
        return _token(TokenKind.STRING_LITERAL, children[0])

    def true(self, children):
        return _token(TokenKind.BOOLEAN_TRUE, children[0])

    def false(self, children):
        return _token(TokenKind.BOOLEAN_FALSE, children[0])


@functools.cache
def _parser():
    # Built on first use, the transformer runs inline with the LALR parse
    return Lark(GRAMMAR, parser="lalr", transformer=LiteralTransformer())


def _token(kind, lark_token):
    return Token(kind, str(lark_token), lark_token.line or 1, lark_token.column or 1)


def _unquote(lexeme):
    if len(lexeme) >= 2 and lexeme[0] == '"' and lexeme[-1] == '"':
        lexeme = lexeme[1:-1]
    return _ESCAPE_RE.sub(lambda m: _ESCAPES.get(m.group(1), m.group(0)), lexeme)


def _located(message, token):
    return f"{message} at {token.row}:{token.col}"
