"""Name bindings used while parsing and evaluating expressions."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

from .ast import Call, Expr, Literal, Symbol

if TYPE_CHECKING:
    from .function import Function


@dataclass(frozen=True)
class SymbolBinding:
    """Renames a bound name to another symbol."""

    name: str

    def __str__(self) -> str:
        return self.name

    def to_expression(self) -> Expr:
        return Symbol(self.name)


@dataclass(frozen=True)
class ValueBinding:
    value: int

    def __str__(self) -> str:
        return str(self.value)

    def to_expression(self) -> Expr:
        return Literal(self.value)


@dataclass(frozen=True)
class FunctionBinding:
    function: "Function"

    def __str__(self) -> str:
        return str(self.function)

    def to_expression(self) -> Expr:
        if self.function.name is None:
            raise ValueError("Anonymous functions cannot be referenced by name")
        return Call(self.function.name, tuple(Symbol(p) for p in self.function.parameters))


ContextVar = Union[SymbolBinding, ValueBinding, FunctionBinding]
_CONTEXT_VAR_TYPES = (SymbolBinding, ValueBinding, FunctionBinding)


class Context(Mapping[str, ContextVar]):
    """Read-only name -> ContextVar mapping.

    Every derived context (``stitch``, ``clone``, ``with_binding``) is a new
    object, so a single context can back any number of evaluations.
    """

    __slots__ = ("_data",)

    def __init__(self, data: Mapping[str, ContextVar] | None = None) -> None:
        self._data: dict[str, ContextVar] = {}
        if data is not None:
            for name, var in data.items():
                if not isinstance(var, _CONTEXT_VAR_TYPES):
                    raise TypeError(f"context[{name!r}] must be a ContextVar, got {type(var).__name__}")
                self._data[name] = var

    def __getitem__(self, key: str) -> ContextVar:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"Context({self._data!r})"

    @classmethod
    def from_values(cls, values: Mapping[str, int]) -> "Context":
        return cls({name: ValueBinding(int(value)) for name, value in values.items()})

    @classmethod
    def from_functions(cls, functions: Iterable["Function"]) -> "Context":
        data: dict[str, ContextVar] = {}
        for function in functions:
            if function.name is None:
                raise ValueError("Cannot map anonymous function")
            data[function.name] = FunctionBinding(function)
        return cls(data)

    def clone(self) -> "Context":
        return Context(self._data)

    def with_binding(self, name: str, var: ContextVar) -> "Context":
        data = dict(self._data)
        data[name] = var
        return Context(data)

    def source(self) -> str:
        """Declarations for every named function, one per line."""
        lines = []
        for var in self._data.values():
            if isinstance(var, FunctionBinding) and var.function.name is not None:
                lines.append(var.function.to_declaration_string())
        return "\n".join(lines)


def stitch(local: Mapping[str, ContextVar], global_: Mapping[str, ContextVar]) -> Context:
    """Merge two contexts; ``local`` wins on collision."""
    data: dict[str, ContextVar] = dict(local)
    for name, var in global_.items():
        data.setdefault(name, var)
    return Context(data)


def as_context(env: Mapping[str, object] | None) -> Context:
    """Coerce a plain mapping of ints, functions or ContextVars into a Context."""
    from .function import Function

    if env is None:
        return Context()
    if isinstance(env, Context):
        return env

    data: dict[str, ContextVar] = {}
    for name, value in env.items():
        if isinstance(value, _CONTEXT_VAR_TYPES):
            data[name] = value
        elif isinstance(value, Function):
            data[name] = FunctionBinding(value)
        elif isinstance(value, int) and not isinstance(value, bool):
            data[name] = ValueBinding(value)
        else:
            raise TypeError(f"env[{name!r}] must be an int, Function or ContextVar, got {type(value).__name__}")
    return Context(data)
