"""curried-calc public API."""

from .ast import BinaryOp, Call, Conditional, Expr, Literal, Symbol, free_symbols, to_source
from .context import Context, ContextVar, FunctionBinding, SymbolBinding, ValueBinding, as_context, stitch
from .errors import (
    ArityMismatchError,
    CalcArithmeticError,
    CalcError,
    CalcEvalError,
    CalcParseError,
    DuplicateParameterError,
    EmptyArgumentError,
    IncompleteExpressionError,
    InvalidCharacterError,
    MismatchedConditionalError,
    MissingBodyError,
    NestingTooDeepError,
    RecursionLimitExceededError,
    ReservedNameError,
    SessionError,
    SessionExit,
    UnknownSymbolError,
    UnmatchedParenthesisError,
    UnresolvedConditionError,
    UnresolvedExpressionError,
)
from .evaluator import evaluate, evaluate_to_integer
from .function import Function
from .operators import Operator
from .parser import parse, parse_expression, parse_function_definition
from .session import Session

__all__ = [
    "parse",
    "parse_expression",
    "parse_function_definition",
    "evaluate",
    "evaluate_to_integer",
    "Function",
    "Operator",
    "Expr",
    "Symbol",
    "Literal",
    "BinaryOp",
    "Conditional",
    "Call",
    "free_symbols",
    "to_source",
    "Context",
    "ContextVar",
    "SymbolBinding",
    "ValueBinding",
    "FunctionBinding",
    "as_context",
    "stitch",
    "Session",
    "CalcError",
    "CalcParseError",
    "CalcEvalError",
    "CalcArithmeticError",
    "InvalidCharacterError",
    "UnmatchedParenthesisError",
    "MismatchedConditionalError",
    "EmptyArgumentError",
    "IncompleteExpressionError",
    "MissingBodyError",
    "NestingTooDeepError",
    "DuplicateParameterError",
    "ReservedNameError",
    "UnknownSymbolError",
    "ArityMismatchError",
    "UnresolvedExpressionError",
    "UnresolvedConditionError",
    "RecursionLimitExceededError",
    "SessionError",
    "SessionExit",
]
