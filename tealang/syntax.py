"""Syntax tree nodes and their tree printing."""

from __future__ import annotations

import enum
import sys
from dataclasses import dataclass, field
from typing import Iterable, Optional

from tealang.tokens import Token


class NodeType(enum.Enum):
    """Kinds of syntax tree node."""

    PROGRAM = enum.auto()
    FUNCTION = enum.auto()
    NATIVE_FUNCTION = enum.auto()
    PARAM = enum.auto()
    ATTR = enum.auto()
    STMT = enum.auto()
    LET = enum.auto()
    MUT = enum.auto()
    ASSIGN = enum.auto()
    BINOP = enum.auto()
    UNARY = enum.auto()
    IDENT = enum.auto()
    TYPE_ANNOT = enum.auto()
    NUMBER = enum.auto()
    CALL = enum.auto()
    RETURN = enum.auto()
    IF = enum.auto()
    THEN = enum.auto()
    ELSE = enum.auto()
    WHILE = enum.auto()
    STRUCT = enum.auto()
    STRUCT_FIELD = enum.auto()
    STRUCT_INSTANCE = enum.auto()
    STRUCT_FIELD_INIT = enum.auto()
    IMPL_ITEM = enum.auto()
    IMPL_BLOCK = enum.auto()
    STRING = enum.auto()
    FIELD_ACCESS = enum.auto()


def node_type_name(node_type) -> str:
    """Return the display name of a node type, or "UNKNOWN"."""
    if isinstance(node_type, NodeType):
        return node_type.name
    return "UNKNOWN"


@dataclass(eq=False)
class Node:
    """A syntax tree node: binary operators hold lhs/rhs, others a child list."""

    type: NodeType
    token: Optional[Token] = None
    children: list[Node] = field(default_factory=list)
    lhs: Optional[Node] = None
    rhs: Optional[Node] = None

    def add_child(self, child: Optional[Node]) -> None:
        """Append ``child``; None is ignored."""
        if child is None:
            return
        self.children.append(child)

    def add_children(self, children: Iterable[Node]) -> None:
        """Move all nodes from ``children`` to this node; a list given is emptied."""
        moved = list(children)
        if isinstance(children, list):
            children.clear()
        for child in moved:
            self.add_child(child)

    def set_binop_children(self, lhs: Optional[Node], rhs: Optional[Node]) -> None:
        """Set the operands of a binary operator node; other nodes are left alone."""
        if self.type is not NodeType.BINOP:
            return
        self.lhs = lhs
        self.rhs = rhs

    def _subnodes(self) -> list[Node]:
        if self.type is NodeType.BINOP:
            return [n for n in (self.lhs, self.rhs) if n is not None]
        return list(self.children)

    def _lines(self, depth: int):
        prefix = "".join("`- " if i == depth - 1 else "|  " for i in range(depth))
        line = prefix + node_type_name(self.type)
        token = self.token
        if token is not None:
            if self.type is NodeType.STRING:
                line += f": '{token.text}'"
            else:
                line += f": {token.text}"
            if token.line > 0 and token.column > 0:
                line += f" (line {token.line}, col {token.column})"
        yield line
        for child in self._subnodes():
            yield from child._lines(depth + 1)

    def render(self, depth: int = 0) -> str:
        """Return the tree below this node as indented text, one node per line."""
        return "".join(line + "\n" for line in self._lines(depth))

    def print_tree(self, depth: int = 0) -> None:
        """Write the rendered tree to standard output."""
        sys.stdout.write(self.render(depth))