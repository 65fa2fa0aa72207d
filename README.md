# tealang

`tealang` is a small toolkit for the Tea scripting language. It has four
modules:

- **`tealang.tokens`**: the token kinds (`TokenType`), the frozen `Token`
  record (`type`, `text`, `line`, `column`, `position`), keyword lookup
  (`ident_token_type`) and token names (`token_name`, which returns `None`
  for an unknown kind).
- **`tealang.lexer`**: turns source text into a list of tokens, through the
  `Lexer` class (which keeps `position`, `line`, `column` and `tokens`) or the
  `tokenize` shortcut. An unterminated string literal or a character the
  language does not know raises `LexerError`, which carries `line` and
  `column`.
- **`tealang.syntax`**: the syntax tree. A `Node` has a `NodeType`, an
  optional token, and either a list of children or, for `BINOP` nodes, `lhs`
  and `rhs` operands (`set_binop_children`). `add_child` and `add_children`
  build the child list; `render` returns the tree as indented text and
  `print_tree` writes it to standard output. `node_type_name` gives the
  display name of a node type.
- **`tealang.interpret`**: the `Interpreter`. It keeps a list of `Variable`
  entries, each holding a `Value` tagged with a `ValueType` (i32, f32,
  string or object; `value_type_name` gives the language's name for each).
  `execute` runs a statement, `evaluate` computes an expression and
  `find_variable` looks a variable up by name.

## Lexing

The lexer understands `//` and `/* */` comments, single-quoted strings,
integer and decimal numbers, identifiers, the keywords `fn let mut native if
else while struct impl return new`, and the operators
`@ : , ; = == != -> + - * / ( ) { } > >= < <= && || .`.

```python
from tealang.lexer import tokenize
from tealang.tokens import token_name

for token in tokenize("let mut x = 1 + 2.5;"):
    print(token_name(token.type), token.text)
```

Keyword tokens have empty `text`; identifiers, numbers, strings and
operators keep theirs.

## Running a tree

The interpreter executes these node kinds:

- `PROGRAM`, `STMT`, `THEN` and `ELSE` blocks, whose children run in order.
- `LET`: the node's token is the variable name; a `MUT` child makes it
  mutable, a `TYPE_ANNOT` child is accepted, and the other child is the
  initial value.
- `ASSIGN`: the node's token is the name, the first child the new value.
- `IF`: a condition child plus `THEN` and optional `ELSE` children.

Expressions are `NUMBER` (i32 when the text is an integer, otherwise f32,
with i32 arithmetic wrapping at 32 bits), `STRING`, `IDENT`, `UNARY` (`+`
and `-`) and `BINOP`: `+ - * /` with i32/f32 promotion, comparisons
`== != < <= > >=` and logical `&& ||`, the last two groups giving i32 0 or 1.

```python
from tealang.interpret import Interpreter
from tealang.syntax import Node, NodeType
from tealang.tokens import Token, TokenType

program = Node(NodeType.PROGRAM)
program.add_child(
    Node(
        NodeType.LET,
        Token(TokenType.IDENT, "x"),
        children=[Node(NodeType.NUMBER, Token(TokenType.NUMBER, "10"))],
    )
)

interpreter = Interpreter()
interpreter.execute(program)
print(interpreter.find_variable("x").value)   # Value(type=<ValueType.I32: 1>, data=10)
```

Errors in the program being run raise `InterpreterError`: an unknown
variable, assigning to an immutable variable, assigning a value of another
type, dividing by zero, a number that cannot be read, or an expression node
that cannot be evaluated. Declaring a name twice, or a statement kind the
interpreter does not run (such as `WHILE`, `FUNCTION` or `CALL`), is logged
through the `logging` module and makes `execute` return `False`.

## What it does not do

There is no parser: nothing turns the token list into a syntax tree, so trees
are built from `Node` objects by hand. There is also no command-line program.
Functions, loops, structs and `impl` blocks have token and node kinds but are
not executed.

`tealang` needs nothing outside the Python standard library and supports
Python 3.10 and later.