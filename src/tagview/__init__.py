"""tagview public API."""

from .ast import Attr, Child, Class, DynamicClass, HostExpr, Node, StaticClass, Style
from .codegen import DEFAULT_API, BuilderApi, generate, render
from .errors import ViewError, ViewParseError, format_diagnostic
from .macro import expand, expand_ast, expand_fragments
from .parser import AmbiguousGroupError, ClassArityError, ParseError, parse

__all__ = [
    "parse",
    "expand",
    "expand_fragments",
    "expand_ast",
    "generate",
    "render",
    "BuilderApi",
    "DEFAULT_API",
    "Node",
    "Attr",
    "Class",
    "Style",
    "StaticClass",
    "DynamicClass",
    "Child",
    "HostExpr",
    "ParseError",
    "AmbiguousGroupError",
    "ClassArityError",
    "ViewError",
    "ViewParseError",
    "format_diagnostic",
]
