"""Entry points: one literal in, one builder call chain out."""

from __future__ import annotations

import ast
import logging

from .codegen import DEFAULT_API, BuilderApi, generate
from .parser import parse

logger = logging.getLogger(__name__)


def expand_fragments(source: str, *, api: BuilderApi | None = None) -> tuple[str, ...]:
    node = parse(source)
    fragments = generate(node, api or DEFAULT_API)
    logger.debug("expanded <%s> into %d call(s)", node.tag, len(fragments))
    return fragments


def expand(source: str, *, api: BuilderApi | None = None) -> str:
    """Translate a view literal into Python source for its builder call chain.

    Raises ``ParseError`` (or a subclass) with the offending span; nothing is
    produced for a literal that fails to parse.
    """
    return "".join(expand_fragments(source, api=api))


def expand_ast(source: str, *, api: BuilderApi | None = None) -> ast.Expression:
    """Like ``expand`` but returns the host parser's tree, ready to splice."""
    return ast.parse(expand(source, api=api), filename="<view>", mode="eval")
