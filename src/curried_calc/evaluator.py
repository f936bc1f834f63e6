"""Evaluator for curried-calc expressions.

Reduction is driven by an explicit stack of generator frames instead of
native recursion. A frame asks for a sub-result by yielding either a
``_Reduce`` request (evaluate an expression under a context) or a
``_SuspendedCall`` (run a fully applied function body); the driver pushes a
new frame for the request and sends the result back when that frame returns.
The stack belongs to one top-level call, so its depth is the recursion guard.
"""

from __future__ import annotations

import logging
from collections.abc import Generator, Mapping
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Union, cast

from .ast import BinaryOp, Call, Conditional, Expr, Literal, Symbol
from .config import MAX_DEPTH
from .context import Context, FunctionBinding, SymbolBinding, ValueBinding, as_context, stitch
from .errors import RecursionLimitExceededError, UnresolvedConditionError, UnresolvedExpressionError

if TYPE_CHECKING:
    from .function import Function

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Reduce:
    expr: Expr
    context: Context


@dataclass(frozen=True)
class _SuspendedCall:
    """A fully applied call whose body has not been evaluated yet."""

    function: "Function"
    arguments: tuple[int, ...]
    context: Context
    negate: bool = False


_Result = Union[Expr, _SuspendedCall]
_Frame = Generator[Union[_Reduce, _SuspendedCall], _Result, _Result]


def _negated(value: int, negate: bool) -> Literal:
    return Literal(-value if negate else value)


def _force(result: _Result) -> Generator[_SuspendedCall, _Result, Expr]:
    if isinstance(result, _SuspendedCall):
        result = yield result
    return result


def _apply(call: _SuspendedCall) -> _Frame:
    local = call.function.bind(call.arguments)
    logger.debug("forcing %s%s", call.function.name or "<anonymous>", call.arguments)
    result = yield _Reduce(call.function.body, stitch(local, call.context))
    result = yield from _force(result)
    if not isinstance(result, Literal):
        raise UnresolvedExpressionError(result)
    return _negated(result.value, call.negate)


def _reduce(expr: Expr, context: Context) -> _Frame:
    if isinstance(expr, Literal):
        return _negated(expr.value, expr.negate)

    if isinstance(expr, Symbol):
        var = context.get(expr.name)
        if isinstance(var, ValueBinding):
            return _negated(var.value, expr.negate)
        if isinstance(var, SymbolBinding):
            return Symbol(var.name, negate=expr.negate)
        return expr

    if isinstance(expr, Conditional):
        predicate = yield _Reduce(expr.predicate, context)
        predicate = yield from _force(predicate)
        if not isinstance(predicate, Literal):
            raise UnresolvedConditionError(predicate)
        branch = expr.when_true if predicate.value != 0 else expr.when_false
        result = yield _Reduce(branch, context)
        if not expr.negate:
            return result
        if isinstance(result, _SuspendedCall):
            return replace(result, negate=not result.negate)
        if isinstance(result, Literal):
            return Literal(-result.value)
        return replace(result, negate=not result.negate)

    if isinstance(expr, Call):
        args: list[Expr] = []
        for arg in expr.args:
            value = yield _Reduce(arg, context)
            args.append((yield from _force(value)))
        binding = context.get(expr.name)
        if isinstance(binding, FunctionBinding) and all(isinstance(arg, Literal) for arg in args):
            values = tuple(arg.value for arg in args)
            return _SuspendedCall(binding.function, values, context, negate=expr.negate)
        return Call(expr.name, tuple(args), negate=expr.negate)

    if isinstance(expr, BinaryOp):
        left = yield _Reduce(expr.left, context)
        left = yield from _force(left)
        right = yield _Reduce(expr.right, context)
        right = yield from _force(right)
        if isinstance(left, Literal) and isinstance(right, Literal):
            return _negated(expr.op.apply(left.value, right.value), expr.negate)
        return BinaryOp(left, expr.op, right, negate=expr.negate)

    raise TypeError(f"Unsupported expression node: {type(expr)!r}")


def _evaluate_root(expr: Expr, context: Context) -> _Frame:
    result = yield _Reduce(expr, context)
    return (yield from _force(result))


def _run(root: _Frame, max_depth: int) -> Expr:
    stack: list[_Frame] = [root]
    sent: _Result | None = None
    while stack:
        try:
            request = stack[-1].send(sent)
        except StopIteration as stop:
            stack.pop()
            sent = stop.value
            continue

        if len(stack) >= max_depth:
            raise RecursionLimitExceededError(max_depth)
        if isinstance(request, _Reduce):
            stack.append(_reduce(request.expr, request.context))
        else:
            stack.append(_apply(request))
        sent = None

    # The root frame forces its result, so only an expression reaches here.
    return cast(Expr, sent)


def evaluate(expr: Expr, context: Mapping[str, object] | None = None, *, max_depth: int | None = None) -> Expr:
    """Reduce ``expr`` as far as ``context`` allows.

    Returns a ``Literal`` when the expression is fully determined, otherwise a
    residual tree that still holds the unresolved symbols and calls.
    """
    limit = MAX_DEPTH if max_depth is None else max_depth
    if limit < 1:
        raise ValueError("max_depth must be at least 1")
    result = _run(_evaluate_root(expr, as_context(context)), limit)
    logger.debug("evaluated %s -> %s", expr, result)
    return result


def evaluate_to_integer(expr: Expr, context: Mapping[str, object] | None = None, *, max_depth: int | None = None) -> int:
    result = evaluate(expr, context, max_depth=max_depth)
    if not isinstance(result, Literal):
        raise UnresolvedExpressionError(result)
    return result.value
