"""Tree-walking interpreter: values, variables and statement execution."""

from __future__ import annotations

import enum
import logging
import math
import re
import struct
from dataclasses import dataclass
from typing import Optional

from tealang.syntax import Node, NodeType, node_type_name
from tealang.tokens import Token, TokenType, token_name

logger = logging.getLogger(__name__)

_INT_RE = re.compile(r"\s*[+-]?\d+")
_FLOAT_RE = re.compile(r"\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1

_ARITHMETIC = {TokenType.PLUS, TokenType.MINUS, TokenType.STAR, TokenType.SLASH}
_COMPARISON = {
    TokenType.EQ: lambda a, b: a == b,
    TokenType.NE: lambda a, b: a != b,
    TokenType.GT: lambda a, b: a > b,
    TokenType.GE: lambda a, b: a >= b,
    TokenType.LT: lambda a, b: a < b,
    TokenType.LE: lambda a, b: a <= b,
}


class ValueType(enum.Enum):
    """Kinds of runtime value."""

    I32 = enum.auto()
    F32 = enum.auto()
    STRING = enum.auto()
    OBJECT = enum.auto()


_VALUE_TYPE_NAMES = {
    ValueType.I32: "i32",
    ValueType.F32: "f32",
    ValueType.STRING: "string",
    ValueType.OBJECT: "object",
}


def value_type_name(value_type) -> str:
    """Return the language name of a value type, or "UNKNOWN"."""
    return _VALUE_TYPE_NAMES.get(value_type, "UNKNOWN")


@dataclass(frozen=True)
class Value:
    """A runtime value tagged with its type."""

    type: ValueType
    data: object = None


@dataclass
class Variable:
    """A declared variable."""

    name: Token
    value: Value
    is_mutable: bool = False


class InterpreterError(Exception):
    """Raised when a program cannot be evaluated."""


def _wrap_i32(number: int) -> int:
    return ((number + 2**31) % 2**32) - 2**31


def _to_f32(number: float) -> float:
    try:
        return struct.unpack("f", struct.pack("f", number))[0]
    except OverflowError:
        return math.copysign(math.inf, number)


def _truthy(value: Value) -> bool:
    """Whether a value counts as true when read as a condition."""
    if value.type is ValueType.I32:
        return value.data != 0
    if value.type is ValueType.F32:
        return struct.unpack("I", struct.pack("f", value.data))[0] != 0
    if value.type is ValueType.STRING:
        return value.data is not None
    return value.data is not None


def _describe(value: Value) -> str:
    if value.type is ValueType.I32:
        return "%d" % value.data
    if value.type is ValueType.F32:
        return "%f" % value.data
    if value.type is ValueType.STRING:
        return "'%s'" % value.data
    return ""


def _token_detail(token: Optional[Token]) -> str:
    if token is None:
        return ""
    return (
        f"; token: <{token_name(token.type)}> {token.text} "
        f"(line: {token.line}, column: {token.column})"
    )


def _first_child(node: Node) -> Node:
    if not node.children:
        raise InterpreterError(f"Node {node_type_name(node.type)} has no operand")
    return node.children[0]


class Interpreter:
    """Executes syntax trees and keeps the declared variables."""

    def __init__(self) -> None:
        self.variables: list[Variable] = []

    def find_variable(self, name: str) -> Optional[Variable]:
        """Return the variable called ``name``, or None."""
        for variable in self.variables:
            if variable.name is not None and variable.name.text == name:
                return variable
        return None

    # Statements

    def execute(self, node: Node) -> bool:
        """Execute a statement node; return False if it could not be executed."""
        if node is None:
            raise InterpreterError("Cannot execute a missing node")
        kind = node.type
        if kind in (NodeType.PROGRAM, NodeType.STMT, NodeType.THEN, NodeType.ELSE):
            return self._execute_block(node)
        if kind is NodeType.LET:
            return self._execute_let(node)
        if kind is NodeType.ASSIGN:
            return self._execute_assign(node)
        if kind is NodeType.IF:
            return self._execute_if(node)
        logger.error("Not implemented: %s%s", node_type_name(kind), _token_detail(node.token))
        return False

    def _execute_block(self, node: Node) -> bool:
        return all(self.execute(child) for child in node.children)

    def _execute_let(self, node: Node) -> bool:
        is_mutable = False
        expr = None
        for child in node.children:
            if child.type is NodeType.MUT:
                is_mutable = True
            elif child.type is NodeType.TYPE_ANNOT:
                pass
            else:
                expr = child
        return self._declare(node.token, is_mutable, expr)

    def _declare(self, name: Optional[Token], is_mutable: bool, expr: Optional[Node]) -> bool:
        if name is None:
            return False
        if self.find_variable(name.text) is not None:
            logger.error(
                "Variable %s is already declared (line: %d, col: %d)",
                name.text,
                name.line,
                name.column,
            )
            return False
        value = self.evaluate(expr)
        if value.type is not ValueType.OBJECT:
            logger.debug(
                "Declare variable %s : %s = %s",
                name.text,
                value_type_name(value.type),
                _describe(value),
            )
        self.variables.append(Variable(name, value, is_mutable))
        return True

    def _execute_assign(self, node: Node) -> bool:
        name = node.token
        if name is None:
            raise InterpreterError("Assignment has no target")
        variable = self.find_variable(name.text)
        if variable is None:
            raise InterpreterError(f"Cannot find variable '{name.text}'")
        if not variable.is_mutable:
            raise InterpreterError(
                f"Variable '{name.text}' is not mutable, so cannot be modified"
            )
        new_value = self.evaluate(_first_child(node))
        if new_value.type is not variable.value.type:
            raise InterpreterError(
                f"Cannot assign variable '{name.text}', because the original type is "
                f"{value_type_name(variable.value.type)}, but the new type is "
                f"{value_type_name(new_value.type)}"
            )
        variable.value = new_value
        if new_value.type is not ValueType.OBJECT:
            logger.debug(
                "New value for variable %s : %s = %s",
                name.text,
                value_type_name(new_value.type),
                _describe(new_value),
            )
        return True

    def _execute_if(self, node: Node) -> bool:
        condition = then_node = else_node = None
        for child in node.children:
            if child.type is NodeType.THEN:
                then_node = child
            elif child.type is NodeType.ELSE:
                else_node = child
            else:
                condition = child
        if _truthy(self.evaluate(condition)):
            if then_node is None:
                raise InterpreterError("If statement has no then branch")
            return self.execute(then_node)
        if else_node is not None:
            return self.execute(else_node)
        return True

    # Expressions

    def evaluate(self, node: Optional[Node]) -> Value:
        """Evaluate an expression node to a value."""
        if node is None:
            raise InterpreterError("Cannot evaluate a missing node")
        kind = node.type
        if kind is NodeType.NUMBER:
            return self._evaluate_number(node.token)
        if kind is NodeType.BINOP:
            return self._evaluate_binop(node)
        if kind is NodeType.UNARY:
            return self._evaluate_unary(node)
        if kind is NodeType.IDENT:
            return self._evaluate_ident(node)
        if kind is NodeType.STRING:
            if node.token is None:
                raise InterpreterError("Impossible to evaluate string token")
            return Value(ValueType.STRING, node.token.text)
        raise InterpreterError(
            f"Failed to evaluate node <{node_type_name(kind)}>{_token_detail(node.token)}"
        )

    @staticmethod
    def _evaluate_number(token: Optional[Token]) -> Value:
        if token is None:
            raise InterpreterError("Impossible to evaluate number token")
        text = token.text
        if text == "" or _INT_RE.fullmatch(text):
            number = int(text) if text.strip() else 0
            number = max(_INT64_MIN, min(_INT64_MAX, number))
            return Value(ValueType.I32, _wrap_i32(number))
        if _FLOAT_RE.fullmatch(text):
            return Value(ValueType.F32, _to_f32(float(text)))
        raise InterpreterError(f"Error parsing {text} as a number!")

    def _evaluate_binop(self, node: Node) -> Value:
        lhs = self.evaluate(node.lhs)
        rhs = self.evaluate(node.rhs)
        if node.token is None:
            raise InterpreterError("Binary operation has no operator")
        return _binop(lhs, rhs, node.token)

    def _evaluate_unary(self, node: Node) -> Value:
        operand = self.evaluate(_first_child(node))
        token = node.token
        if token is None:
            raise InterpreterError("Unary operation has no operator")
        if token.type is TokenType.PLUS:
            return operand
        if token.type is TokenType.MINUS:
            if operand.type is ValueType.I32:
                return Value(ValueType.I32, _wrap_i32(-operand.data))
            if operand.type is ValueType.F32:
                return Value(ValueType.F32, -operand.data)
            return operand
        logger.error("Impossible to apply operator %s as unary", token.text)
        return operand

    def _evaluate_ident(self, node: Node) -> Value:
        token = node.token
        if token is None:
            raise InterpreterError("Impossible to evaluate ident token")
        variable = self.find_variable(token.text)
        if variable is None:
            raise InterpreterError(f"Can't find variable {token.text}")
        return variable.value


def _apply(a, b, op: TokenType, integral: bool):
    if op in _COMPARISON:
        return 1 if _COMPARISON[op](a, b) else 0
    if op not in _ARITHMETIC:
        raise InterpreterError(f"Operator {token_name(op)} is not a binary operator")
    if op is TokenType.PLUS:
        return a + b
    if op is TokenType.MINUS:
        return a - b
    if op is TokenType.STAR:
        return a * b
    if b == 0:
        raise InterpreterError("Can't divide by zero!")
    if integral:
        quotient = abs(a) // abs(b)
        return quotient if (a < 0) == (b < 0) else -quotient
    return a / b


def _binop(lhs: Value, rhs: Value, op: Token) -> Value:
    if op.type is TokenType.OR:
        return Value(ValueType.I32, int(_truthy(lhs) or _truthy(rhs)))
    if op.type is TokenType.AND:
        return Value(ValueType.I32, int(_truthy(lhs) and _truthy(rhs)))

    numeric = (ValueType.I32, ValueType.F32)
    if lhs.type in numeric and rhs.type in numeric:
        if lhs.type is ValueType.I32 and rhs.type is ValueType.I32:
            return Value(ValueType.I32, _wrap_i32(_apply(lhs.data, rhs.data, op.type, True)))
        a = _to_f32(float(lhs.data))
        b = _to_f32(float(rhs.data))
        return Value(ValueType.F32, _to_f32(float(_apply(a, b, op.type, False))))

    raise InterpreterError(
        f"Binary operations for type {value_type_name(lhs.type)} and type "
        f"{value_type_name(rhs.type)} are not implemented!"
    )