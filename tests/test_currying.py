from __future__ import annotations

import unittest

from curried_calc.ast import BinaryOp, Call, Literal, Symbol
from curried_calc.context import Context
from curried_calc.errors import ArityMismatchError, ReservedNameError, UnknownSymbolError, UnresolvedConditionError
from curried_calc.function import Function
from curried_calc.operators import Operator
from curried_calc.parser import parse_function_definition


class CurryingTests(unittest.TestCase):
    def setUp(self) -> None:
        self.f = parse_function_definition("let f x y z = x*y + z")

    def test_full_evaluation(self) -> None:
        self.assertEqual(self.f.evaluate({}, 2, 3, 4), 10)
        self.assertEqual(self.f.evaluate(None, -1, 5, 0), -5)

    def test_full_evaluation_checks_arity(self) -> None:
        with self.assertRaises(ArityMismatchError) as ctx:
            self.f.evaluate({}, 1)
        self.assertEqual((ctx.exception.expected, ctx.exception.got), (3, 1))
        with self.assertRaises(ArityMismatchError):
            self.f.evaluate({}, 1, 2, 3, 4)

    def test_partial_evaluation_binds_leading_parameters(self) -> None:
        g = self.f.partial_eval({}, 2)
        self.assertIsNone(g.name)
        self.assertEqual(g.parameters, ("y", "z"))
        self.assertEqual(
            g.body,
            BinaryOp(BinaryOp(Literal(2), Operator.TIMES, Symbol("y")), Operator.PLUS, Symbol("z")),
        )
        self.assertEqual(g.evaluate({}, 3, 4), 10)

    def test_partial_evaluation_with_every_argument(self) -> None:
        done = self.f.partial_eval({}, 2, 3, 4)
        self.assertEqual(done.parameters, ())
        self.assertEqual(done.body, Literal(10))
        self.assertEqual(done.evaluate({}), 10)

    def test_partial_evaluation_with_too_many_arguments(self) -> None:
        with self.assertRaises(ArityMismatchError):
            self.f.partial_eval({}, 1, 2, 3, 4)

    def test_outer_bindings_cannot_capture_parameters(self) -> None:
        g = self.f.partial_eval({"y": 100, "z": 100}, 2)
        self.assertEqual(g.evaluate({}, 3, 4), 10)
        self.assertEqual(g.evaluate({"y": 100}, 3, 4), 10)

    def test_partial_evaluation_through_calls(self) -> None:
        sq = parse_function_definition("let sq x = x*x")
        sumsq = parse_function_definition("let sumsq x y = sq(x) + sq(y)")
        ctx = Context.from_functions([sq, sumsq])

        rest = sumsq.partial_eval(ctx, 3)
        self.assertEqual(rest.body, BinaryOp(Literal(9), Operator.PLUS, Call("sq", (Symbol("y"),))))
        self.assertEqual(rest.evaluate(ctx, 4), 25)

    def test_partial_evaluation_of_conditionals(self) -> None:
        h = parse_function_definition("let h a b = if a then b else 0")
        picked = h.partial_eval({}, 1)
        self.assertEqual(picked.body, Symbol("b"))
        self.assertEqual(picked.evaluate({}, 7), 7)
        self.assertEqual(h.partial_eval({}, 0).body, Literal(0))

        with self.assertRaises(UnresolvedConditionError):
            h.partial_eval({})

    def test_rendering(self) -> None:
        self.assertEqual(str(self.f), "f = func(x,y,z) -> (x)*(y)+z")
        self.assertEqual(self.f.to_declaration_string(), "let f x y z = (x)*(y)+z")
        self.assertEqual(parse_function_definition(self.f.to_declaration_string()), self.f)

        anonymous = self.f.partial_eval({}, 1)
        self.assertEqual(str(anonymous), "func(y,z) -> (1)*(y)+z")
        with self.assertRaises(ValueError):
            anonymous.to_declaration_string()

    def test_validate(self) -> None:
        with self.assertRaises(ReservedNameError):
            Function("Let", ("x",), Symbol("x")).validate()
        with self.assertRaises(UnknownSymbolError) as ctx:
            Function("f", ("x",), BinaryOp(Symbol("b"), Operator.PLUS, Symbol("a"))).validate()
        self.assertEqual(ctx.exception.name, "a")

        fn = Function("f", ("x",), Call("g", (Symbol("x"),)))
        self.assertIs(fn.validate(), fn)


if __name__ == "__main__":
    unittest.main()
