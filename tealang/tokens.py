"""Token kinds, the token record and keyword lookup."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class TokenType(enum.IntEnum):
    """Kinds of token produced by the lexer."""

    FN = enum.auto()
    LET = enum.auto()
    MUT = enum.auto()
    NATIVE = enum.auto()
    IF = enum.auto()
    ELSE = enum.auto()
    WHILE = enum.auto()
    STRUCT = enum.auto()
    IMPL = enum.auto()
    RETURN = enum.auto()
    NEW = enum.auto()
    IDENT = enum.auto()
    LPAREN = enum.auto()
    RPAREN = enum.auto()
    LBRACE = enum.auto()
    RBRACE = enum.auto()
    AT = enum.auto()
    COLON = enum.auto()
    COMMA = enum.auto()
    SEMICOLON = enum.auto()
    ASSIGN = enum.auto()
    MINUS = enum.auto()
    PLUS = enum.auto()
    STAR = enum.auto()
    SLASH = enum.auto()
    ARROW = enum.auto()
    GT = enum.auto()
    LT = enum.auto()
    EQ = enum.auto()
    NE = enum.auto()
    GE = enum.auto()
    LE = enum.auto()
    AND = enum.auto()
    OR = enum.auto()
    NUMBER = enum.auto()
    STRING = enum.auto()
    DOT = enum.auto()


_KEYWORDS = {
    "fn": TokenType.FN,
    "let": TokenType.LET,
    "mut": TokenType.MUT,
    "native": TokenType.NATIVE,
    "if": TokenType.IF,
    "else": TokenType.ELSE,
    "while": TokenType.WHILE,
    "struct": TokenType.STRUCT,
    "impl": TokenType.IMPL,
    "return": TokenType.RETURN,
    "new": TokenType.NEW,
}


@dataclass(frozen=True)
class Token:
    """A lexed token with its text and where it was found."""

    type: TokenType
    text: str = ""
    line: int = 0
    column: int = 0
    position: int = 0

    @property
    def name(self) -> str | None:
        return token_name(self.type)


def ident_token_type(ident: str) -> TokenType:
    """Return the keyword token type for ``ident``, or IDENT if it is not a keyword."""
    return _KEYWORDS.get(ident, TokenType.IDENT)


def token_name(token_type) -> str | None:
    """Return the display name of a token type, or None if it is unknown."""
    try:
        return TokenType(token_type).name
    except ValueError:
        return None