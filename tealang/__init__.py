"""Lexer, syntax tree and tree-walking interpreter for the Tea scripting language."""

__version__ = "0.1.0"

__all__ = ["interpret", "lexer", "syntax", "tokens"]