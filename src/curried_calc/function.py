"""Named and anonymous curried functions."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass

from .ast import Expr, free_symbols
from .config import KEYWORD_LET, is_reserved
from .context import ContextVar, SymbolBinding, ValueBinding, as_context, stitch
from .errors import ArityMismatchError, ReservedNameError, UnknownSymbolError
from .evaluator import evaluate, evaluate_to_integer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Function:
    """A function over integer parameters.

    ``name`` is ``None`` for anonymous functions such as the residual of a
    partial evaluation; those cannot be registered or exported.
    """

    name: str | None
    parameters: tuple[str, ...]
    body: Expr

    def __str__(self) -> str:
        prefix = "" if self.name is None else f"{self.name} = "
        return f"{prefix}func({','.join(self.parameters)}) -> {self.body}"

    def bind(self, arguments: tuple[int, ...]) -> dict[str, ContextVar]:
        if len(arguments) != len(self.parameters):
            raise ArityMismatchError(len(self.parameters), len(arguments))
        return {name: ValueBinding(value) for name, value in zip(self.parameters, arguments)}

    def evaluate(self, context: Mapping[str, object] | None, *args: int, max_depth: int | None = None) -> int:
        """Apply to exactly ``len(parameters)`` arguments and reduce to an integer."""
        local = self.bind(tuple(args))
        return evaluate_to_integer(self.body, stitch(local, as_context(context)), max_depth=max_depth)

    def partial_eval(self, context: Mapping[str, object] | None, *args: int, max_depth: int | None = None) -> "Function":
        """Bind the leading parameters and return a function over the rest."""
        if len(args) > len(self.parameters):
            raise ArityMismatchError(len(self.parameters), len(args))
        bound, remaining = self.parameters[: len(args)], self.parameters[len(args) :]
        local: dict[str, ContextVar] = {name: ValueBinding(value) for name, value in zip(bound, args)}
        # Unbound parameters resolve to themselves so outer bindings cannot capture them.
        for name in remaining:
            local[name] = SymbolBinding(name)
        residual = evaluate(self.body, stitch(local, as_context(context)), max_depth=max_depth)
        logger.debug("partially applied %s to %s -> %s", self.name or "<anonymous>", args, residual)
        return Function(name=None, parameters=remaining, body=residual)

    def to_declaration_string(self) -> str:
        if self.name is None:
            raise ValueError("Anonymous functions have no declaration")
        head = " ".join((KEYWORD_LET, self.name, *self.parameters))
        return f"{head} = {self.body}"

    def validate(self) -> "Function":
        if self.name is not None and is_reserved(self.name):
            raise ReservedNameError(self.name)
        params = set(self.parameters)
        for name in sorted(free_symbols(self.body)):
            if name not in params:
                raise UnknownSymbolError(name)
        return self
