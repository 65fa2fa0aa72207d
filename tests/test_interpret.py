import pytest

from tealang.interpret import (
    Interpreter,
    InterpreterError,
    Value,
    ValueType,
    Variable,
    value_type_name,
)
from tealang.syntax import Node, NodeType
from tealang.tokens import Token, TokenType

_OPS = {
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.STAR,
    "/": TokenType.SLASH,
    "==": TokenType.EQ,
    "!=": TokenType.NE,
    "<": TokenType.LT,
    "<=": TokenType.LE,
    ">": TokenType.GT,
    ">=": TokenType.GE,
    "&&": TokenType.AND,
    "||": TokenType.OR,
}


def num(text):
    return Node(NodeType.NUMBER, Token(TokenType.NUMBER, text, 1, 1))


def string(text):
    return Node(NodeType.STRING, Token(TokenType.STRING, text, 1, 1))


def ident(name):
    return Node(NodeType.IDENT, Token(TokenType.IDENT, name, 1, 1))


def binop(op, lhs, rhs):
    node = Node(NodeType.BINOP, Token(_OPS[op], op, 1, 1))
    node.set_binop_children(lhs, rhs)
    return node


def neg(operand):
    node = Node(NodeType.UNARY, Token(TokenType.MINUS, "-", 1, 1))
    node.add_child(operand)
    return node


def let(name, expr, mutable=False):
    node = Node(NodeType.LET, Token(TokenType.IDENT, name, 1, 1))
    if mutable:
        node.add_child(Node(NodeType.MUT))
    node.add_child(expr)
    return node


def assign(name, expr):
    node = Node(NodeType.ASSIGN, Token(TokenType.IDENT, name, 1, 1))
    node.add_child(expr)
    return node


def block(kind, *stmts):
    node = Node(kind)
    node.add_children(list(stmts))
    return node


def if_node(cond, then_stmts, else_stmts=None):
    node = Node(NodeType.IF)
    node.add_child(cond)
    node.add_child(block(NodeType.THEN, *then_stmts))
    if else_stmts is not None:
        node.add_child(block(NodeType.ELSE, *else_stmts))
    return node


def test_value_type_names():
    assert value_type_name(ValueType.I32) == "i32"
    assert value_type_name(ValueType.F32) == "f32"
    assert value_type_name(ValueType.STRING) == "string"
    assert value_type_name(ValueType.OBJECT) == "object"
    assert value_type_name("bogus") == "UNKNOWN"


def test_integer_literal():
    assert Interpreter().evaluate(num("42")) == Value(ValueType.I32, 42)


def test_float_literal():
    value = Interpreter().evaluate(num("1.5"))
    assert value.type is ValueType.F32
    assert value.data == 1.5


def test_malformed_number_raises():
    with pytest.raises(InterpreterError):
        Interpreter().evaluate(num("1.2.3"))


def test_string_literal():
    assert Interpreter().evaluate(string("hello")) == Value(ValueType.STRING, "hello")


def test_mixed_arithmetic_is_float():
    interp = Interpreter()
    assert interp.evaluate(binop("+", num("2"), num("1.5"))).type is ValueType.F32
    assert interp.evaluate(binop("*", num("1.5"), num("2"))).type is ValueType.F32


def test_integer_addition_matches_literal():
    interp = Interpreter()
    assert interp.evaluate(binop("+", num("2"), num("3"))) == interp.evaluate(num("5"))


def test_integer_division_truncates_toward_zero():
    interp = Interpreter()
    positive = interp.evaluate(binop("/", num("7"), num("2")))
    negative = interp.evaluate(binop("/", neg(num("7")), num("2")))
    assert positive.type is ValueType.I32
    assert negative.data == -positive.data


def test_integer_overflow_wraps():
    result = Interpreter().evaluate(binop("+", num("2147483647"), num("1")))
    assert result == Value(ValueType.I32, -2147483648)


@pytest.mark.parametrize("lhs, rhs", [("1", "0"), ("1.5", "0"), ("1", "0.0")])
def test_division_by_zero(lhs, rhs):
    with pytest.raises(InterpreterError):
        Interpreter().evaluate(binop("/", num(lhs), num(rhs)))


def test_integer_comparisons():
    interp = Interpreter()
    less = interp.evaluate(binop("<", num("3"), num("4")))
    greater = interp.evaluate(binop(">", num("3"), num("4")))
    assert less.type is ValueType.I32
    assert less.data == 1
    assert greater.data == 0


def test_float_comparison_stays_float():
    result = Interpreter().evaluate(binop("==", num("1.5"), num("1.5")))
    assert result.type is ValueType.F32
    assert bool(result.data)


def test_logical_operators():
    interp = Interpreter()
    assert interp.evaluate(binop("&&", num("1"), num("0"))) == interp.evaluate(num("0"))
    assert interp.evaluate(binop("||", num("0"), num("7"))) == interp.evaluate(num("1"))


def test_string_binop_raises():
    with pytest.raises(InterpreterError):
        Interpreter().evaluate(binop("+", string("a"), string("b")))


def test_unary_minus_is_involution():
    interp = Interpreter()
    assert interp.evaluate(neg(neg(num("9")))) == interp.evaluate(num("9"))
    assert interp.evaluate(neg(num("2.5"))).data == -interp.evaluate(num("2.5")).data


def test_let_declares_variable():
    interp = Interpreter()
    assert interp.execute(let("x", num("10")))
    variable = interp.find_variable("x")
    assert isinstance(variable, Variable)
    assert variable.value == Value(ValueType.I32, 10)
    assert variable.is_mutable is False
    assert interp.evaluate(ident("x")) == variable.value


def test_redeclaration_fails_and_keeps_original():
    interp = Interpreter()
    assert interp.execute(let("x", num("1")))
    assert interp.execute(let("x", num("2"))) is False
    assert interp.find_variable("x").value == Value(ValueType.I32, 1)
    assert len(interp.variables) == 1


def test_assign_mutable_variable():
    interp = Interpreter()
    interp.execute(let("x", num("1"), mutable=True))
    assert interp.execute(assign("x", binop("+", ident("x"), num("4"))))
    assert interp.find_variable("x").value == interp.evaluate(num("5"))


def test_assign_immutable_raises():
    interp = Interpreter()
    interp.execute(let("x", num("1")))
    with pytest.raises(InterpreterError, match="not mutable"):
        interp.execute(assign("x", num("2")))


def test_assign_type_mismatch_raises():
    interp = Interpreter()
    interp.execute(let("x", num("1"), mutable=True))
    with pytest.raises(InterpreterError, match="original type is i32"):
        interp.execute(assign("x", string("s")))


def test_assign_unknown_variable_raises():
    with pytest.raises(InterpreterError, match="Cannot find variable 'y'"):
        Interpreter().execute(assign("y", num("1")))


def test_unknown_identifier_raises():
    with pytest.raises(InterpreterError):
        Interpreter().evaluate(ident("missing"))


def test_evaluate_none_raises():
    with pytest.raises(InterpreterError):
        Interpreter().evaluate(None)


def test_evaluate_unsupported_node_raises():
    with pytest.raises(InterpreterError, match="CALL"):
        Interpreter().evaluate(Node(NodeType.CALL))


@pytest.mark.parametrize("cond, expected", [("1", "a"), ("0", "b")])
def test_if_chooses_branch(cond, expected):
    interp = Interpreter()
    program = block(
        NodeType.PROGRAM,
        if_node(num(cond), [let("a", num("1"))], [let("b", num("2"))]),
    )
    assert interp.execute(program)
    assert [v.name.text for v in interp.variables] == [expected]


def test_if_without_else_false_does_nothing():
    interp = Interpreter()
    assert interp.execute(if_node(num("0"), [let("a", num("1"))]))
    assert interp.variables == []


def test_unimplemented_statement_returns_false():
    assert Interpreter().execute(Node(NodeType.WHILE)) is False


def test_block_stops_at_first_failure():
    interp = Interpreter()
    program = block(
        NodeType.PROGRAM,
        let("x", num("1")),
        let("x", num("2")),
        let("y", num("3")),
    )
    assert interp.execute(program) is False
    assert interp.find_variable("y") is None
    assert interp.find_variable("x").value == interp.evaluate(num("1"))