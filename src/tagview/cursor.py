"""Positionable token cursor with speculative forks."""

from __future__ import annotations

import ast
import itertools
from dataclasses import dataclass, field, replace
from typing import Callable, Iterator, NoReturn, TypeVar

from .ast import HostExpr, Span
from .lexer import ParseError, Token, match_brackets, tokenize

T = TypeVar("T")


def _argument_problem(call: ast.expr) -> str | None:
    assert isinstance(call, ast.Call)
    if call.keywords:
        return "keyword argument is not an expression"
    if len(call.args) != 2:
        return "expected a single expression"
    if isinstance(call.args[1], ast.Starred):
        return "starred expression is not an expression"
    return None


@dataclass
class Cursor:
    """Cursor over ``tokens[index:limit]``.

    ``limit`` indexes the token that terminates the range: the closing
    parenthesis of a group, or ``EOF`` for the whole literal. Forks share the
    token buffer and copy only the position, so dropping a fork is free and
    ``advance_to`` is the single commit point.
    """

    source: str
    tokens: list[Token]
    partners: dict[int, int] = field(repr=False)
    index: int = 0
    limit: int = -1
    origin: int = 0

    def __post_init__(self) -> None:
        if self.limit < 0:
            self.limit = len(self.tokens) - 1

    @classmethod
    def from_source(cls, source: str) -> "Cursor":
        tokens = tokenize(source)
        return cls(source=source, tokens=tokens, partners=match_brackets(tokens))

    def peek(self) -> Token:
        return self.tokens[self.index]

    def peek_kind(self, kind: str, text: str | None = None) -> bool:
        if self.at_end():
            return False
        tok = self.peek()
        return tok.kind == kind and (text is None or tok.text == text)

    def at_end(self) -> bool:
        return self.index >= self.limit

    def advance(self) -> Token:
        if self.at_end():
            self.error(message="Unexpected end of input")
        tok = self.tokens[self.index]
        self.index += 1
        return tok

    def expect(self, kind: str, text: str | None = None, *, message: str | None = None) -> Token:
        if not self.peek_kind(kind, text):
            self.error(message=message, expected=(repr(text) if text is not None else kind,))
        return self.advance()

    def error(self, tok: Token | None = None, *, message: str | None = None, expected: tuple[str, ...] = ()) -> NoReturn:
        token = tok if tok is not None else self.peek()
        detail = message if message is not None else "Unexpected token"
        normalized_expected = tuple(dict.fromkeys(expected))
        if token.kind == "EOF":
            found = "EOF"
        elif token.text:
            found = f"{token.kind}({token.text})"
        else:
            found = token.kind
        raise ParseError(detail, token.pos, token.end, expected=normalized_expected, found=found)

    def fork(self) -> "Cursor":
        return replace(self)

    def advance_to(self, fork: "Cursor") -> None:
        if fork.tokens is not self.tokens or fork.limit != self.limit:
            raise ValueError("Fork does not belong to this cursor")
        if fork.index < self.index:
            raise ValueError("Cannot commit a fork positioned behind the cursor")
        self.index = fork.index

    def parenthesized(self) -> "Cursor":
        """Step over the next ``( ... )`` group and return a cursor over its content."""
        if not self.peek_kind("LPAREN"):
            self.error(expected=("LPAREN",))
        opener = self.index
        closer = self.partners[opener]
        self.index = closer + 1
        return replace(self, index=opener + 1, limit=closer, origin=opener + 1)

    def enclosing_span(self) -> Span:
        """Span of the brackets around this cursor's range."""
        start = self.tokens[self.origin - 1].pos if self.origin > 0 else 0
        return (start, self.tokens[self.limit].end)

    def _top_level_commas(self) -> Iterator[int]:
        i = self.index
        while i < self.limit:
            if i in self.partners:
                i = self.partners[i] + 1
                continue
            if self.tokens[i].kind == "COMMA":
                yield i
            i += 1

    def has_top_level_comma(self) -> bool:
        return next(self._top_level_commas(), None) is not None

    def parse_expression(self) -> HostExpr:
        """Consume one host expression ending before a top-level comma.

        Candidates are checked as the second argument of a call, the position
        the generated code puts them in. The shortest comma-free prefix is
        tried first. Later prefixes are only accepted when they still form a
        single argument, which lets constructs with their own commas
        (``lambda a, b: a``) through.
        """
        if self.at_end() or self.peek_kind("COMMA"):
            self.error(message="Expected expression", expected=("expression",))

        first = self.tokens[self.index]
        failure: ParseError | None = None
        stops = itertools.chain(self._top_level_commas(), (self.limit,))
        for stop in stops:
            last = self.tokens[stop - 1]
            text = self.source[first.pos : last.end]
            try:
                call = ast.parse(f"_(_, {text}\n)", mode="eval").body
                reason = _argument_problem(call)
            except SyntaxError as exc:
                reason = exc.msg
            if reason is None:
                self.index = stop
                return HostExpr(source=text, start=first.pos, end=last.end)
            if failure is None:
                failure = ParseError(
                    f"Invalid expression: {reason}",
                    first.pos,
                    last.end,
                    expected=("expression",),
                    found=text,
                )

        assert failure is not None
        raise failure

    def parse_terminated(self, item: Callable[["Cursor"], T]) -> tuple[T, ...]:
        """Parse comma-separated items up to the end of the range.

        A trailing comma is accepted; anything left over is an error.
        """
        items: list[T] = []
        while not self.at_end():
            items.append(item(self))
            if self.at_end():
                break
            self.expect("COMMA", message="Expected ',' between items")
        return tuple(items)
