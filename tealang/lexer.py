"""Turns source text into a list of tokens."""

from __future__ import annotations

import logging
import string

from tealang.tokens import Token, TokenType, ident_token_type, token_name

logger = logging.getLogger(__name__)

_DIGITS = frozenset(string.digits)
_ALPHA = frozenset(string.ascii_letters)
_IDENT_START = _ALPHA | {"_"}
_IDENT_BODY = _ALPHA | _DIGITS | {"_"}

_TWO_CHAR_OPERATORS = {
    "==": TokenType.EQ,
    "!=": TokenType.NE,
    "->": TokenType.ARROW,
    ">=": TokenType.GE,
    "<=": TokenType.LE,
    "&&": TokenType.AND,
    "||": TokenType.OR,
}

_ONE_CHAR_OPERATORS = {
    "@": TokenType.AT,
    ":": TokenType.COLON,
    ",": TokenType.COMMA,
    ";": TokenType.SEMICOLON,
    "=": TokenType.ASSIGN,
    "-": TokenType.MINUS,
    "+": TokenType.PLUS,
    "*": TokenType.STAR,
    "/": TokenType.SLASH,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    ">": TokenType.GT,
    "<": TokenType.LT,
    ".": TokenType.DOT,
}


class LexerError(Exception):
    """Raised when the source cannot be tokenized."""

    def __init__(self, message: str, line: int, column: int) -> None:
        super().__init__(message)
        self.line = line
        self.column = column


class Lexer:
    """A tokenizer that keeps its position and the tokens it has produced."""

    def __init__(self) -> None:
        self.position = 0
        self.line = 1
        self.column = 1
        self.tokens: list[Token] = []
        self._input = ""

    def tokenize(self, source: str) -> list[Token]:
        """Tokenize ``source``, appending to ``self.tokens``, and return that list."""
        self._input = source.split("\0", 1)[0]
        scanners = (
            self._scan_comment,
            self._scan_operator,
            self._scan_string,
            self._scan_number,
            self._scan_ident,
        )
        while self._at(self.position):
            self._skip_whitespace()
            if not any(scan() for scan in scanners):
                self._unknown_character()
        return self.tokens

    def _at(self, index: int) -> str:
        return self._input[index] if index < len(self._input) else ""

    def _char(self, offset: int = 0) -> str:
        return self._at(self.position + offset)

    def _emit(self, token_type: TokenType, text: str) -> None:
        token = Token(token_type, text, self.line, self.column, self.position)
        if token_type is TokenType.STRING:
            logger.debug("Token: '%s' (line: %d, col: %d)", text, token.line, token.column)
        elif token_type in (TokenType.IDENT, TokenType.NUMBER):
            logger.debug("Token: %s (line: %d, col: %d)", text, token.line, token.column)
        else:
            logger.debug(
                "Token: <%s> (line: %d, col: %d)", token_name(token_type), token.line, token.column
            )
        self.tokens.append(token)

    def _skip_whitespace(self) -> None:
        while True:
            c = self._char()
            if c in (" ", "\r", "\t") and c:
                self.column += 1
                self.position += 1
            elif c == "\n":
                self.column = 1
                self.position += 1
                self.line += 1
            else:
                return

    def _scan_comment(self) -> bool:
        if self._char() != "/":
            return False
        kind = self._char(1)
        pos = self.position + 2
        if kind == "*":
            while True:
                c = self._at(pos)
                if not c:
                    self.position = pos
                    return True
                if c == "\n":
                    pos += 1
                    self.line += 1
                    self.column = 1
                elif c == "*" and self._at(pos + 1) == "/":
                    self.position = pos + 2
                    self.column += 2
                    return True
                else:
                    pos += 1
                    self.column += 1
        if kind == "/":
            while True:
                c = self._at(pos)
                if not c:
                    self.position = pos
                    return True
                if c == "\n":
                    self.line += 1
                    self.column = 1
                    self.position = pos + 1
                    return True
                pos += 1
                self.column += 1
        return False

    def _scan_operator(self) -> bool:
        pair = self._char() + self._char(1)
        if pair in _TWO_CHAR_OPERATORS:
            token_type, text = _TWO_CHAR_OPERATORS[pair], pair
        elif self._char() in _ONE_CHAR_OPERATORS:
            token_type, text = _ONE_CHAR_OPERATORS[self._char()], self._char()
        else:
            return False
        self._emit(token_type, text)
        self.column += len(text)
        self.position += len(text)
        return True

    def _scan_number(self) -> bool:
        first = self._char()
        if not (first in _DIGITS or (first == "." and self._char(1) in _DIGITS)) or not first:
            return False
        start = self.position
        pos = start
        is_float = False
        while True:
            c = self._at(pos)
            if not c:
                break
            if c in _DIGITS:
                pos += 1
                continue
            if c == "." and not is_float and self._at(pos + 1) in _DIGITS and self._at(pos + 1):
                is_float = True
                pos += 1
                continue
            break
        text = self._input[start:pos]
        self._emit(TokenType.NUMBER, text)
        self.column += len(text)
        self.position = pos
        return True

    def _scan_string(self) -> bool:
        if self._char() != "'":
            return False
        start = self.position + 1
        pos = start
        while True:
            c = self._at(pos)
            if not c:
                raise LexerError(
                    f"Unterminated string literal at line {self.line}, column {self.column}",
                    self.line,
                    self.column,
                )
            if c == "'":
                break
            if c == "\n":
                return False
            self.column += 1
            pos += 1
        self._emit(TokenType.STRING, self._input[start:pos])
        self.position = pos + 1
        self.column += 1
        return True

    def _scan_ident(self) -> bool:
        if self._char() not in _IDENT_START or not self._char():
            return False
        end = self.position
        while self._at(end) and self._at(end) in _IDENT_BODY:
            end += 1
        name = self._input[self.position:end]
        token_type = ident_token_type(name)
        self._emit(token_type, name if token_type is TokenType.IDENT else "")
        self.column += len(name)
        self.position = end
        return True

    def _unknown_character(self) -> None:
        c = self._char()
        if not c:
            return
        shown = "<EOL>" if c == "\n" else c
        raise LexerError(
            f"Unknown character: {shown}, line: {self.line}, column: {self.column}, "
            f"position: {self.position}",
            self.line,
            self.column,
        )


def tokenize(source: str) -> list[Token]:
    """Tokenize ``source`` with a fresh lexer."""
    return Lexer().tokenize(source)