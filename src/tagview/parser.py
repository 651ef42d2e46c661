"""Recursive-descent parser for view literals.

Grammar::

    Node       := tag ( "(" Group ")" )? ( "(" Children ")" )?
    Group      := Field,* | Child,*
    Field      := Class | Style | Attr
    Attr       := NAME "=" expr
    Class      := "class" "=" ClassValue
    ClassValue := "(" expr "," expr ")" | expr
    Style      := "style" "=" expr
    Children   := Child,*
    Child      := expr

The first group is ambiguous. It is read as a field list on a fork of the
group cursor; only a successful fork is committed. Otherwise the same group
content is read as a child list, and the literal then has no second group.
"""

from __future__ import annotations

import keyword
import logging

from .ast import Attr, Child, Class, ClassValue, DynamicClass, Field, HostExpr, Node, Span, StaticClass, Style
from .cursor import Cursor
from .lexer import ParseError

logger = logging.getLogger(__name__)

CLASS_KEYWORD = "class"
STYLE_KEYWORD = "style"
DYNAMIC_CLASS_ARITY = 2


class AmbiguousGroupError(ParseError):
    """Neither the field-list nor the child-list reading of a group parsed."""

    def __init__(self, span: Span, field_error: ParseError, child_error: ParseError) -> None:
        super().__init__(
            "Expected attributes or children",
            span[0],
            span[1],
            expected=("attributes", "children"),
            causes=(field_error, child_error),
        )

    @property
    def field_error(self) -> ParseError:
        return self.causes[0]

    @property
    def child_error(self) -> ParseError:
        return self.causes[1]

    def __str__(self) -> str:
        return f"{super().__str__()}; as attributes: {self.field_error}; as children: {self.child_error}"


class ClassArityError(ParseError):
    def __init__(self, actual: int, span: Span) -> None:
        super().__init__(
            f"Class tuple has {actual} items, expected {DYNAMIC_CLASS_ARITY}",
            span[0],
            span[1],
            expected=(f"{DYNAMIC_CLASS_ARITY} items",),
            found=f"{actual} items",
        )
        self.actual = actual
        self.expected_count = DYNAMIC_CLASS_ARITY


def parse_node(cursor: Cursor) -> Node:
    tag_tok = cursor.peek()
    if cursor.at_end() or tag_tok.kind != "NAME" or keyword.iskeyword(tag_tok.text):
        cursor.error(tag_tok, message="Expected element tag", expected=("NAME",))
    cursor.advance()

    fields: tuple[Field, ...] = ()
    fields_span: Span | None = None
    children: tuple[Child, ...] = ()
    children_span: Span | None = None
    parsed_children = False

    if cursor.peek_kind("LPAREN"):
        content = cursor.parenthesized()
        span = content.enclosing_span()
        fork = content.fork()
        try:
            fields = fork.parse_terminated(parse_field)
        except ParseError as field_error:
            logger.debug("group at %s is not a field list: %s", span, field_error)
            parsed_children = True
            try:
                children = parse_children(content)
            except ParseError as child_error:
                raise AmbiguousGroupError(span, field_error, child_error) from child_error
            children_span = span
        else:
            content.advance_to(fork)
            fields_span = span

    if cursor.peek_kind("LPAREN") and not parsed_children:
        content = cursor.parenthesized()
        children_span = content.enclosing_span()
        children = parse_children(content)

    logger.debug("parsed <%s> with %d field(s) and %d child(ren)", tag_tok.text, len(fields), len(children))
    return Node(
        tag=tag_tok.text,
        fields=fields,
        children=children,
        fields_span=fields_span,
        children_span=children_span,
    )


def parse_field(cursor: Cursor) -> Field:
    if cursor.peek_kind("NAME", CLASS_KEYWORD):
        return parse_class(cursor)
    if cursor.peek_kind("NAME", STYLE_KEYWORD):
        return parse_style(cursor)
    return parse_attr(cursor)


def parse_attr(cursor: Cursor) -> Attr:
    name = cursor.expect("NAME", message="Expected attribute name")
    cursor.expect("EQUAL", message=f"Expected '=' after {name.text!r}")
    return Attr(name=name.text, value=cursor.parse_expression())


def parse_class(cursor: Cursor) -> Class:
    cursor.expect("NAME", CLASS_KEYWORD)
    cursor.expect("EQUAL", message=f"Expected '=' after {CLASS_KEYWORD!r}")
    return Class(value=parse_class_value(cursor))


def _parse_tuple(cursor: Cursor) -> tuple[tuple[HostExpr, ...], Span] | None:
    if not cursor.peek_kind("LPAREN"):
        return None
    content = cursor.parenthesized()
    if not (cursor.at_end() or cursor.peek_kind("COMMA")):
        # Something like `(a, b)[0]`: the tuple is only part of the value.
        return None
    if not (content.at_end() or content.has_top_level_comma()):
        # `(x)` is a parenthesized expression, not a tuple.
        return None
    try:
        items = content.parse_terminated(lambda c: c.parse_expression())
    except ParseError:
        return None
    return items, content.enclosing_span()


def parse_class_value(cursor: Cursor) -> ClassValue:
    fork = cursor.fork()
    parsed = _parse_tuple(fork)
    if parsed is None:
        return StaticClass(value=cursor.parse_expression())

    cursor.advance_to(fork)
    items, span = parsed
    if len(items) != DYNAMIC_CLASS_ARITY:
        raise ClassArityError(len(items), span)
    condition, value = items
    return DynamicClass(condition=condition, value=value)


def parse_style(cursor: Cursor) -> Style:
    cursor.expect("NAME", STYLE_KEYWORD)
    cursor.expect("EQUAL", message=f"Expected '=' after {STYLE_KEYWORD!r}")
    return Style(value=cursor.parse_expression())


def parse_children(cursor: Cursor) -> tuple[Child, ...]:
    if cursor.at_end():
        return ()
    return cursor.parse_terminated(parse_child)


def parse_child(cursor: Cursor) -> Child:
    return Child(expr=cursor.parse_expression())


def parse(source: str) -> Node:
    """Parse one complete literal; trailing tokens are an error."""
    cursor = Cursor.from_source(source)
    node = parse_node(cursor)
    if not cursor.at_end():
        cursor.error(message="Expected end of input", expected=("EOF",))
    return node
