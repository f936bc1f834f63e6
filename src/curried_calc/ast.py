"""AST nodes for curried-calc expressions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .operators import Operator


@dataclass(frozen=True)
class Symbol:
    name: str
    negate: bool = False

    def __str__(self) -> str:
        return to_source(self)


@dataclass(frozen=True)
class Literal:
    value: int
    negate: bool = False

    def __str__(self) -> str:
        return to_source(self)


@dataclass(frozen=True)
class BinaryOp:
    left: "Expr"
    op: Operator
    right: "Expr"
    negate: bool = False

    def __str__(self) -> str:
        return to_source(self)


@dataclass(frozen=True)
class Conditional:
    predicate: "Expr"
    when_true: "Expr"
    when_false: "Expr"
    negate: bool = False

    def __str__(self) -> str:
        return to_source(self)


@dataclass(frozen=True)
class Call:
    name: str
    args: tuple["Expr", ...]
    negate: bool = False

    def __str__(self) -> str:
        return to_source(self)


Expr = Union[Symbol, Literal, BinaryOp, Conditional, Call]


def _children(expr: Expr) -> tuple[Expr, ...]:
    if isinstance(expr, BinaryOp):
        return (expr.left, expr.right)
    if isinstance(expr, Conditional):
        return (expr.predicate, expr.when_true, expr.when_false)
    if isinstance(expr, Call):
        return expr.args
    return ()


def _operand_source(expr: Expr, text: str, *, op: Operator, is_left: bool) -> str:
    if op.distributive:
        return f"({text})"
    if isinstance(expr, Conditional) and not expr.negate:
        return f"({text})"
    if is_left and isinstance(expr, BinaryOp) and not expr.negate and not expr.op.distributive:
        return f"({text})"
    return text


def to_source(expr: Expr) -> str:
    """Render ``expr`` as source text that parses back to an equal tree.

    Walks the tree with an explicit stack so long operator chains render
    without touching the interpreter recursion limit.
    """
    rendered: list[str] = []
    pending: list[tuple[Expr, bool]] = [(expr, False)]
    while pending:
        node, children_done = pending.pop()
        children = _children(node)
        if children and not children_done:
            pending.append((node, True))
            pending.extend((child, False) for child in reversed(children))
            continue
        parts = rendered[len(rendered) - len(children) :]
        del rendered[len(rendered) - len(children) :]
        rendered.append(_render_node(node, parts))
    return rendered[0]


def _render_node(expr: Expr, parts: list[str]) -> str:
    if isinstance(expr, Symbol):
        return f"-{expr.name}" if expr.negate else expr.name

    if isinstance(expr, Literal):
        return str(-expr.value if expr.negate else expr.value)

    if isinstance(expr, Call):
        text = f"{expr.name}({','.join(parts)})"
        return f"-{text}" if expr.negate else text

    if isinstance(expr, Conditional):
        predicate, when_true, when_false = parts
        text = f"if {predicate} then {when_true} else {when_false}"
        return f"-({text})" if expr.negate else text

    if isinstance(expr, BinaryOp):
        left = _operand_source(expr.left, parts[0], op=expr.op, is_left=True)
        right = _operand_source(expr.right, parts[1], op=expr.op, is_left=False)
        # ``a-b`` only reads back as ``a+(-b)`` when ``-b`` is a single term.
        right_is_chain = isinstance(expr.right, BinaryOp) and not expr.right.negate and not expr.right.op.distributive
        if expr.op is Operator.PLUS and right.startswith("-") and not right_is_chain:
            text = left + right
        else:
            text = f"{left}{expr.op.value}{right}"
        return f"-({text})" if expr.negate else text

    raise TypeError(f"Unsupported expression node: {type(expr)!r}")


def free_symbols(expr: Expr) -> set[str]:
    """Names of every Symbol node in ``expr``; call names are not symbols."""
    found: set[str] = set()
    pending: list[Expr] = [expr]
    while pending:
        node = pending.pop()
        if isinstance(node, Symbol):
            found.add(node.name)
        elif isinstance(node, BinaryOp):
            pending.extend((node.left, node.right))
        elif isinstance(node, Conditional):
            pending.extend((node.predicate, node.when_true, node.when_false))
        elif isinstance(node, Call):
            pending.extend(node.args)
    return found
