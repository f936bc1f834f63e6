"""Structured error types for parser/runtime separation."""

from __future__ import annotations


class CalcError(Exception):
    """Base class for structured curried-calc errors."""


class CalcParseError(CalcError, SyntaxError):
    """Parse-stage failure with the offending span of the source text."""

    def __init__(self, message: str, start: int, end: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.start = start
        self.end = start if end is None else end

    def __str__(self) -> str:
        return f"{self.message} at index {self.start}"


class InvalidCharacterError(CalcParseError):
    def __init__(self, char: str, index: int) -> None:
        super().__init__(f"Invalid symbol {char!r}", index, index + 1)
        self.char = char
        self.index = index


class UnmatchedParenthesisError(CalcParseError):
    def __init__(self, index: int) -> None:
        super().__init__("Unmatched parenthesis in expression", index, index + 1)


class MismatchedConditionalError(CalcParseError):
    def __init__(self, message: str, index: int) -> None:
        super().__init__(message, index)


class EmptyArgumentError(CalcParseError):
    def __init__(self, index: int) -> None:
        super().__init__("Empty argument given", index)


class IncompleteExpressionError(CalcParseError):
    def __init__(self, index: int) -> None:
        super().__init__("Reached end of input with incomplete expression", index)


class NestingTooDeepError(CalcParseError):
    def __init__(self, index: int) -> None:
        super().__init__("Expression nests too deeply", index)


class MissingBodyError(CalcParseError):
    def __init__(self, index: int) -> None:
        super().__init__("Missing function body", index)


class DuplicateParameterError(CalcParseError):
    def __init__(self, name: str, index: int) -> None:
        super().__init__(f"Duplicate input {name!r}", index, index + len(name))
        self.name = name


class ReservedNameError(CalcParseError):
    def __init__(self, name: str, index: int = 0) -> None:
        super().__init__(f"Invalid identifier; {name!r} is a reserved word", index, index + len(name))
        self.name = name


class UnknownSymbolError(CalcParseError):
    """A function body refers to a symbol that is not one of its parameters."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown symbol {name!r} is not defined", 0)
        self.name = name

    def __str__(self) -> str:
        return self.message


class CalcEvalError(CalcError):
    """Generic evaluation failure after a successful parse."""


class ArityMismatchError(CalcEvalError):
    def __init__(self, expected: int, got: int) -> None:
        super().__init__(f"Expected {expected} inputs, found {got}")
        self.expected = expected
        self.got = got


class UnresolvedExpressionError(CalcEvalError):
    """Full reduction was demanded but free symbols or calls remain."""

    def __init__(self, residual: object) -> None:
        super().__init__(f"Could not fully evaluate the expression; variables still remain: {residual}")
        self.residual = residual


class UnresolvedConditionError(CalcEvalError):
    def __init__(self, predicate: object) -> None:
        super().__init__(f"Condition does not reduce to a value: {predicate}")
        self.predicate = predicate


class RecursionLimitExceededError(CalcEvalError):
    def __init__(self, limit: int) -> None:
        super().__init__(f"Evaluation exceeded the maximum depth of {limit}")
        self.limit = limit


class CalcArithmeticError(CalcEvalError, ArithmeticError):
    """Native arithmetic fault (division by zero, overflow) raised by an operator."""


class SessionError(CalcError):
    """Session-level failure outside the core parse/evaluate pipeline."""


class SessionExit(Exception):
    """Raised by the session when the user asks to leave."""
