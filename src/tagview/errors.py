"""Structured error values and diagnostic rendering."""

from __future__ import annotations

from dataclasses import dataclass

from .parser import ParseError


class ViewError(Exception):
    """Base class for structured tagview errors."""


@dataclass(frozen=True)
class ViewParseError(ViewError):
    """Detached, comparable snapshot of a parser failure and its causes."""

    message: str
    start: int
    end: int
    expected: tuple[str, ...] = ()
    found: str | None = None
    causes: tuple["ViewParseError", ...] = ()

    @classmethod
    def from_parse_error(cls, err: ParseError) -> "ViewParseError":
        return cls(
            message=err.message,
            start=err.start,
            end=err.end,
            expected=err.expected,
            found=err.found,
            causes=tuple(cls.from_parse_error(cause) for cause in err.causes),
        )

    def __str__(self) -> str:
        expected = ""
        if self.expected:
            expected = f"; expected {', '.join(self.expected)}"
        found = ""
        if self.found is not None:
            found = f"; found {self.found}"
        return f"{self.message} at span [{self.start}, {self.end}){expected}{found}"


def line_and_column(source: str, offset: int) -> tuple[int, int]:
    """1-based line and column of a character offset."""
    offset = max(0, min(offset, len(source)))
    line = source.count("\n", 0, offset) + 1
    column = offset - (source.rfind("\n", 0, offset) + 1) + 1
    return line, column


def format_diagnostic(source: str, err: ParseError | ViewParseError, *, _depth: int = 0) -> str:
    line, column = line_and_column(source, err.start)
    lines = source.split("\n")
    text = lines[line - 1]
    width = max(1, min(err.end - err.start, len(text) - column + 1))
    indent = "  " * _depth
    out = [
        f"{indent}{line}:{column}: {err.message}",
        f"{indent}  {text}",
        f"{indent}  {' ' * (column - 1)}{'^' * width}",
    ]
    if err.expected:
        out.append(f"{indent}  expected {', '.join(err.expected)}")
    for cause in err.causes:
        out.append(f"{indent}caused by:")
        out.append(format_diagnostic(source, cause, _depth=_depth + 1))
    return "\n".join(out)
