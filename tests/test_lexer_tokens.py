from __future__ import annotations

import unittest

from tagview.lexer import ParseError, Token, match_brackets, tokenize


class LexerTokenTests(unittest.TestCase):
    def _tokens(self, source: str, *, with_spans: bool = False):
        if with_spans:
            return [(tok.kind, tok.text, tok.pos, tok.end) for tok in tokenize(source) if tok.kind != "EOF"]
        return [(tok.kind, tok.text) for tok in tokenize(source) if tok.kind != "EOF"]

    def test_token_golden_fields_and_spans(self) -> None:
        tokens = self._tokens('div(class="card", id=key)', with_spans=True)
        self.assertEqual(
            tokens,
            [
                ("NAME", "div", 0, 3),
                ("LPAREN", "(", 3, 4),
                ("NAME", "class", 4, 9),
                ("EQUAL", "=", 9, 10),
                ("STRING", '"card"', 10, 16),
                ("COMMA", ",", 16, 17),
                ("NAME", "id", 18, 20),
                ("EQUAL", "=", 20, 21),
                ("NAME", "key", 21, 24),
                ("RPAREN", ")", 24, 25),
            ],
        )

    def test_eof_token_closes_the_stream(self) -> None:
        tokens = tokenize("div")
        self.assertEqual(tokens[-1], Token("EOF", "", 3, 3))

    def test_empty_source_is_only_eof(self) -> None:
        self.assertEqual(tokenize(""), [Token("EOF", "", 0, 0)])

    def test_other_operators_keep_generic_kind(self) -> None:
        tokens = self._tokens("a == b + c[0]")
        self.assertEqual(
            tokens,
            [
                ("NAME", "a"),
                ("OP", "=="),
                ("NAME", "b"),
                ("OP", "+"),
                ("NAME", "c"),
                ("OP", "["),
                ("NUMBER", "0"),
                ("OP", "]"),
            ],
        )

    def test_newlines_indentation_and_comments_are_layout(self) -> None:
        source = "div(\n    a,  # first\n    b,\n)"
        self.assertEqual(
            self._tokens(source),
            [
                ("NAME", "div"),
                ("LPAREN", "("),
                ("NAME", "a"),
                ("COMMA", ","),
                ("NAME", "b"),
                ("COMMA", ","),
                ("RPAREN", ")"),
            ],
        )

    def test_offsets_on_later_lines_are_absolute(self) -> None:
        source = "div(\n  a,\n)"
        spans = self._tokens(source, with_spans=True)
        self.assertEqual(spans[2], ("NAME", "a", 7, 8))
        self.assertEqual(source[7:8], "a")
        self.assertEqual(spans[-1], ("RPAREN", ")", 10, 11))

    def test_leading_indentation_is_ignored(self) -> None:
        self.assertEqual(self._tokens("    div"), [("NAME", "div")])

    def test_unbalanced_brackets_are_rejected(self) -> None:
        for source in ("div(", "div)", "div(]", "div(a))(", "div[a"):
            with self.subTest(source=source):
                with self.assertRaises(ParseError):
                    tokenize(source)

    def test_unterminated_string_is_rejected(self) -> None:
        with self.assertRaises(ParseError):
            tokenize('div("oops)')

    def test_match_brackets_pairs_nested_groups(self) -> None:
        tokens = tokenize("f(a[0], {b: (c)})")
        partners = match_brackets(tokens)
        pairs = {(tokens[i].text, tokens[j].text) for i, j in partners.items()}
        self.assertEqual(pairs, {("(", ")"), ("[", "]"), ("{", "}")})
        self.assertEqual(len(partners), 4)
        for opener, closer in partners.items():
            with self.subTest(opener=opener):
                self.assertLess(opener, closer)


if __name__ == "__main__":
    unittest.main()
