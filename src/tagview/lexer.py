"""Tokenization of view literals on top of the standard tokenize module."""

from __future__ import annotations

import io
import token as _token
import tokenize as _tokenize
from dataclasses import dataclass


@dataclass(frozen=True)
class Token:
    kind: str
    text: str
    pos: int
    end: int


class ParseError(SyntaxError):
    def __init__(
        self,
        message: str,
        start: int,
        end: int,
        expected: tuple[str, ...] = (),
        found: str | None = None,
        causes: tuple["ParseError", ...] = (),
    ) -> None:
        super().__init__(message)
        self.message = message
        self.start = start
        self.end = end
        self.expected = expected
        self.found = found
        self.causes = causes

    def __str__(self) -> str:
        expected_text = ""
        if self.expected:
            expected_text = f"; expected {', '.join(self.expected)}"
        found_text = ""
        if self.found is not None:
            found_text = f"; found {self.found}"
        return f"{self.message} at span [{self.start}, {self.end}){expected_text}{found_text}"


_EXACT_KINDS = {
    _token.LPAR: "LPAREN",
    _token.RPAR: "RPAREN",
    _token.COMMA: "COMMA",
    _token.EQUAL: "EQUAL",
}

_LAYOUT_TYPES = {
    _token.NEWLINE,
    _token.NL,
    _token.INDENT,
    _token.DEDENT,
    _token.COMMENT,
    _token.ENCODING,
    _token.ENDMARKER,
}

_CLOSERS = {"(": ")", "[": "]", "{": "}"}


def _sentence(message: str) -> str:
    return message[:1].upper() + message[1:]


def _line_starts(text: str) -> list[int]:
    starts = [0]
    for i, ch in enumerate(text):
        if ch == "\n":
            starts.append(i + 1)
    return starts


def _is_bracket(tok: Token) -> bool:
    return tok.kind in {"LPAREN", "RPAREN"} or (tok.kind == "OP" and tok.text in "[]{}")


def match_brackets(tokens: list[Token]) -> dict[int, int]:
    """Map the index of every opening bracket to the index of its closer."""
    partners: dict[int, int] = {}
    stack: list[int] = []
    for index, tok in enumerate(tokens):
        if not _is_bracket(tok):
            continue
        if tok.text in _CLOSERS:
            stack.append(index)
            continue
        if not stack:
            raise ParseError(f"Unmatched {tok.text!r}", tok.pos, tok.end, found=f"{tok.kind}({tok.text})")
        opener_index = stack.pop()
        opener = tokens[opener_index]
        if _CLOSERS[opener.text] != tok.text:
            raise ParseError(
                f"Closing {tok.text!r} does not match {opener.text!r} opened at index {opener.pos}",
                tok.pos,
                tok.end,
                expected=(_CLOSERS[opener.text],),
                found=f"{tok.kind}({tok.text})",
            )
        partners[opener_index] = index
    if stack:
        opener = tokens[stack[-1]]
        raise ParseError(f"Unclosed {opener.text!r}", opener.pos, opener.end, expected=(_CLOSERS[opener.text],))
    return partners


def tokenize(source: str) -> list[Token]:
    # The literal is wrapped in parentheses so the host tokenizer applies
    # implicit line joining: indentation and newlines inside it are layout.
    wrapped = f"({source}\n)"
    starts = _line_starts(wrapped)

    def offset(row: int, col: int) -> int:
        row = min(max(row, 1), len(starts))
        absolute = starts[row - 1] + max(col, 0) - 1
        return min(max(absolute, 0), len(source))

    raw: list[Token] = []
    try:
        for info in _tokenize.generate_tokens(io.StringIO(wrapped).readline):
            if info.type in _LAYOUT_TYPES:
                continue
            pos = offset(*info.start)
            end = offset(*info.end)
            if info.type == _token.ERRORTOKEN:
                if not info.string.strip():
                    continue
                raise ParseError(f"Unexpected character {info.string!r}", pos, end, found=info.string)
            if info.type == _token.OP:
                kind = _EXACT_KINDS.get(info.exact_type, "OP")
            else:
                kind = _token.tok_name[info.type]
            raw.append(Token(kind, info.string, pos, end))
    except ParseError:
        raise
    except _tokenize.TokenError as exc:
        message = exc.args[0] if exc.args else "Invalid token"
        location = exc.args[1] if len(exc.args) > 1 else (len(starts), 0)
        pos = offset(*location)
        raise ParseError(_sentence(str(message)), pos, pos) from exc
    except SyntaxError as exc:
        pos = offset(exc.lineno or 1, (exc.offset or 1) - 1)
        raise ParseError(_sentence(exc.msg or "Invalid syntax"), pos, pos) from exc

    # Drop the wrapping pair. Anything else left unbalanced belongs to the literal.
    tokens = raw[1:-1]
    match_brackets(tokens)
    tokens.append(Token("EOF", "", len(source), len(source)))
    return tokens
