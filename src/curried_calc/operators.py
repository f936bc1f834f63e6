"""Binary operator semantics over integers."""

from __future__ import annotations

import math
from enum import Enum

from .errors import CalcArithmeticError


class Operator(str, Enum):
    PLUS = "+"
    TIMES = "*"
    DIVIDE = "/"
    POWER = "^"
    GREATER = ">"
    LESS = "<"
    OR = "|"
    AND = "&"
    EQUAL = "="

    def __str__(self) -> str:
        return self.value

    @property
    def distributive(self) -> bool:
        """Distributive operators bind tighter and chain to the left."""
        return self in _DISTRIBUTIVE

    def apply(self, left: int, right: int) -> int:
        try:
            return _APPLY[self](left, right)
        except ZeroDivisionError as exc:
            raise CalcArithmeticError(f"Division by zero in {left} {self.value} {right}") from exc
        except (OverflowError, ValueError) as exc:
            raise CalcArithmeticError(f"Arithmetic fault in {left} {self.value} {right}: {exc}") from exc


_DISTRIBUTIVE = frozenset({Operator.TIMES, Operator.DIVIDE, Operator.POWER, Operator.AND})

OPERATOR_CHARS = frozenset(op.value for op in Operator)


def truncated_divide(left: int, right: int) -> int:
    # Quotient rounds toward zero, unlike floor division.
    quotient = abs(left) // abs(right)
    return quotient if (left < 0) == (right < 0) else -quotient


def truncated_power(left: int, right: int) -> int:
    return int(math.pow(left, right))


_APPLY = {
    Operator.PLUS: lambda l, r: l + r,
    Operator.TIMES: lambda l, r: l * r,
    Operator.DIVIDE: truncated_divide,
    Operator.POWER: truncated_power,
    Operator.GREATER: lambda l, r: 1 if l > r else 0,
    Operator.LESS: lambda l, r: 1 if l < r else 0,
    Operator.OR: lambda l, r: 1 if l != 0 or r != 0 else 0,
    Operator.AND: lambda l, r: 1 if l != 0 and r != 0 else 0,
    Operator.EQUAL: lambda l, r: 1 if l == r else 0,
}
