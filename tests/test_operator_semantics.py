from __future__ import annotations

import unittest

from curried_calc.errors import CalcArithmeticError, CalcEvalError
from curried_calc.operators import OPERATOR_CHARS, Operator, truncated_divide, truncated_power


class OperatorSemanticsTests(unittest.TestCase):
    def test_operator_table(self) -> None:
        self.assertEqual(OPERATOR_CHARS, frozenset("+*/^><|&="))
        self.assertEqual({op for op in Operator if op.distributive}, {Operator.TIMES, Operator.DIVIDE, Operator.POWER, Operator.AND})
        self.assertIs(Operator("^"), Operator.POWER)
        self.assertEqual(str(Operator.EQUAL), "=")

    def test_arithmetic(self) -> None:
        cases = [
            (Operator.PLUS, 2, 3, 5),
            (Operator.PLUS, -2, 3, 1),
            (Operator.TIMES, -4, 6, -24),
            (Operator.DIVIDE, 7, 2, 3),
            (Operator.DIVIDE, -7, 2, -3),
            (Operator.DIVIDE, 7, -2, -3),
            (Operator.DIVIDE, -7, -2, 3),
            (Operator.DIVIDE, 0, 5, 0),
            (Operator.POWER, 2, 10, 1024),
            (Operator.POWER, -2, 3, -8),
            (Operator.POWER, 2, -1, 0),
            (Operator.POWER, 1, -5, 1),
            (Operator.POWER, 0, 0, 1),
        ]
        for op, left, right, want in cases:
            with self.subTest(op=op.value, left=left, right=right):
                self.assertEqual(op.apply(left, right), want)

    def test_comparisons_and_logic_yield_zero_or_one(self) -> None:
        cases = [
            (Operator.GREATER, 3, 2, 1),
            (Operator.GREATER, 2, 2, 0),
            (Operator.LESS, -1, 0, 1),
            (Operator.LESS, 5, 1, 0),
            (Operator.EQUAL, 4, 4, 1),
            (Operator.EQUAL, 4, -4, 0),
            (Operator.OR, 0, 0, 0),
            (Operator.OR, 0, -7, 1),
            (Operator.OR, 9, 9, 1),
            (Operator.AND, 2, 3, 1),
            (Operator.AND, 2, 0, 0),
            (Operator.AND, 0, 0, 0),
        ]
        for op, left, right, want in cases:
            with self.subTest(op=op.value, left=left, right=right):
                self.assertEqual(op.apply(left, right), want)

    def test_helpers_round_toward_zero(self) -> None:
        self.assertEqual(truncated_divide(-1, 3), 0)
        self.assertEqual(truncated_divide(-9, 3), -3)
        self.assertEqual(truncated_power(3, 4), 81)
        self.assertEqual(truncated_power(-2, -1), 0)

    def test_native_faults_become_calc_errors(self) -> None:
        for op, left, right in ((Operator.DIVIDE, 1, 0), (Operator.DIVIDE, 0, 0), (Operator.POWER, 0, -1), (Operator.POWER, 10, 400)):
            with self.subTest(op=op.value, left=left, right=right):
                with self.assertRaises(CalcArithmeticError) as ctx:
                    op.apply(left, right)
                self.assertIsInstance(ctx.exception, CalcEvalError)
                self.assertIsInstance(ctx.exception, ArithmeticError)

    def test_division_by_zero_message(self) -> None:
        with self.assertRaises(CalcArithmeticError) as ctx:
            Operator.DIVIDE.apply(1, 0)
        self.assertEqual(str(ctx.exception), "Division by zero in 1 / 0")
