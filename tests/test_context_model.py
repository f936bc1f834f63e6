from __future__ import annotations

import unittest

from curried_calc.ast import Call, Literal, Symbol
from curried_calc.context import Context, FunctionBinding, SymbolBinding, ValueBinding, as_context, stitch
from curried_calc.function import Function
from curried_calc.parser import parse_function_definition


class ContextModelTests(unittest.TestCase):
    def test_stitch_prefers_local_and_leaves_inputs_untouched(self) -> None:
        local = Context({"x": ValueBinding(1)})
        global_ = Context({"x": ValueBinding(2), "y": ValueBinding(3)})

        merged = stitch(local, global_)
        self.assertEqual(dict(merged), {"x": ValueBinding(1), "y": ValueBinding(3)})
        self.assertEqual(dict(local), {"x": ValueBinding(1)})
        self.assertEqual(dict(global_), {"x": ValueBinding(2), "y": ValueBinding(3)})

    def test_context_is_read_only(self) -> None:
        ctx = Context({"x": ValueBinding(1)})
        with self.assertRaises(TypeError):
            ctx["x"] = ValueBinding(2)  # type: ignore[index]

        updated = ctx.with_binding("x", ValueBinding(2))
        self.assertEqual(ctx["x"], ValueBinding(1))
        self.assertEqual(updated["x"], ValueBinding(2))

        copy = ctx.clone()
        self.assertIsNot(copy, ctx)
        self.assertEqual(dict(copy), dict(ctx))

    def test_rejects_non_binding_values(self) -> None:
        with self.assertRaises(TypeError):
            Context({"x": 1})  # type: ignore[dict-item]

    def test_as_context_coerces_plain_mappings(self) -> None:
        fn = parse_function_definition("let f x = x")
        ctx = as_context({"x": 3, "f": fn, "y": SymbolBinding("z")})
        self.assertEqual(ctx["x"], ValueBinding(3))
        self.assertEqual(ctx["f"], FunctionBinding(fn))
        self.assertEqual(ctx["y"], SymbolBinding("z"))

        self.assertEqual(len(as_context(None)), 0)
        same = Context({"x": ValueBinding(1)})
        self.assertIs(as_context(same), same)

        for bad in (True, "1", 1.5):
            with self.subTest(bad=bad):
                with self.assertRaises(TypeError):
                    as_context({"x": bad})

    def test_from_values_and_from_functions(self) -> None:
        self.assertEqual(dict(Context.from_values({"a": 1, "b": -2})), {"a": ValueBinding(1), "b": ValueBinding(-2)})

        fn = parse_function_definition("let f x = x")
        self.assertEqual(dict(Context.from_functions([fn])), {"f": FunctionBinding(fn)})
        with self.assertRaises(ValueError):
            Context.from_functions([Function(None, ("x",), Symbol("x"))])

    def test_binding_rendering_and_expressions(self) -> None:
        fn = parse_function_definition("let add x y = x + y")
        self.assertEqual(str(ValueBinding(-3)), "-3")
        self.assertEqual(str(SymbolBinding("q")), "q")
        self.assertEqual(str(FunctionBinding(fn)), "add = func(x,y) -> x+y")

        self.assertEqual(ValueBinding(4).to_expression(), Literal(4))
        self.assertEqual(SymbolBinding("q").to_expression(), Symbol("q"))
        self.assertEqual(FunctionBinding(fn).to_expression(), Call("add", (Symbol("x"), Symbol("y"))))
        with self.assertRaises(ValueError):
            FunctionBinding(Function(None, (), Literal(1))).to_expression()

    def test_source_lists_function_declarations(self) -> None:
        add = parse_function_definition("let add x y = x + y")
        twice = parse_function_definition("let twice x = add(x, x)")
        ctx = Context.from_functions([add, twice]).with_binding("n", ValueBinding(1))
        self.assertEqual(ctx.source(), "let add x y = x+y\nlet twice x = add(x,x)")
        self.assertEqual(Context().source(), "")
