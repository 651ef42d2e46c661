from __future__ import annotations

import ast
import unittest

import tagview
from tagview import AmbiguousGroupError, BuilderApi, ClassArityError, ParseError, expand, expand_ast, expand_fragments

HTML = BuilderApi(namespace="html")


class _Element:
    def __init__(self, log: list) -> None:
        self._log = log

    def __getattr__(self, method: str):
        def call(*args):
            self._log.append((method, args))
            return self

        return call


class _Html:
    """Builder double that records every call made on the chain."""

    def __init__(self) -> None:
        self.log: list = []

    def __getattr__(self, tag: str):
        def construct():
            self.log.append(("construct", (tag,)))
            return _Element(self.log)

        return construct


class ExpandScenarioTests(unittest.TestCase):
    def test_literal_to_call_chain(self) -> None:
        cases = [
            ("div", "html.div()"),
            ('div(class="card")', 'html.div().classes("card")'),
            ('div(class=(is_on, "active"))', 'html.div().class_(is_on, "active")'),
            ("div(style=my_style)", "html.div().style(my_style)"),
            ('div(id="x")', 'html.div().attr("id", "x")'),
            ('div()(span_node, "text")', 'html.div().child(span_node).child("text")'),
            ("div(span_node)", "html.div().child(span_node)"),
            ("div()", "html.div()"),
            ("div()()", "html.div()"),
        ]
        for source, expected in cases:
            with self.subTest(source=source):
                self.assertEqual(expand(source, api=HTML), expected)

    def test_fragments_are_one_call_each(self) -> None:
        fragments = expand_fragments('a(href=url, class=(active, "on"))(label, icon)', api=HTML)
        self.assertEqual(
            fragments,
            ("html.a()", '.attr("href", url)', '.class_(active, "on")', ".child(label)", ".child(icon)"),
        )

    def test_expansion_is_a_valid_host_expression(self) -> None:
        tree = expand_ast('div(class="card", id=key)(header, "text")', api=HTML)
        self.assertIsInstance(tree, ast.Expression)
        self.assertIsInstance(tree.body, ast.Call)

    def test_expanded_chain_calls_builder_in_declaration_order(self) -> None:
        source = """
            section(
                id="main",
                class=(is_on, "active"),
                style=theme,
                class="wide",
            )(
                title,
                "body",
            )
        """
        html = _Html()
        code = compile(expand_ast(source, api=HTML), "<view>", "eval")
        eval(code, {"html": html, "is_on": True, "theme": "color: red", "title": "T"})
        self.assertEqual(
            html.log,
            [
                ("construct", ("section",)),
                ("attr", ("id", "main")),
                ("class_", (True, "active")),
                ("style", ("color: red",)),
                ("classes", ("wide",)),
                ("child", ("T",)),
                ("child", ("body",)),
            ],
        )

    def test_nested_literals_compose_through_child_expressions(self) -> None:
        inner = expand('span(class="icon")', api=HTML)
        outer = expand(f"li()({inner}, label)", api=HTML)
        self.assertEqual(outer, 'html.li().child(html.span().classes("icon")).child(label)')

    def test_default_api_is_used_without_override(self) -> None:
        self.assertEqual(expand("div"), tagview.render(tagview.parse("div")))


class ExpandFailureTests(unittest.TestCase):
    def test_failures_raise_and_produce_nothing(self) -> None:
        cases = [
            ("42", ParseError),
            ("div(id=1 +, x)", AmbiguousGroupError),
            ("div(class=(a, b, c))", AmbiguousGroupError),
            ("div(a)(b)", ParseError),
            ("div(", ParseError),
        ]
        for source, error_type in cases:
            with self.subTest(source=source):
                with self.assertRaises(error_type):
                    expand(source, api=HTML)

    def test_arity_failure_is_reachable_from_the_combined_error(self) -> None:
        with self.assertRaises(AmbiguousGroupError) as ctx:
            expand("div(class=(a,))", api=HTML)
        self.assertIsInstance(ctx.exception.field_error, ClassArityError)

    def test_parse_errors_are_syntax_errors(self) -> None:
        with self.assertRaises(SyntaxError):
            expand("div span", api=HTML)


if __name__ == "__main__":
    unittest.main()
