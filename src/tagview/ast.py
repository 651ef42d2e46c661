"""Syntax tree for view literals."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

Span = tuple[int, int]


@dataclass(frozen=True)
class HostExpr:
    """A host expression kept verbatim; only its validity is checked."""

    source: str
    start: int
    end: int


@dataclass(frozen=True)
class Attr:
    name: str
    value: HostExpr


@dataclass(frozen=True)
class StaticClass:
    value: HostExpr


@dataclass(frozen=True)
class DynamicClass:
    condition: HostExpr
    value: HostExpr


ClassValue = Union[StaticClass, DynamicClass]


@dataclass(frozen=True)
class Class:
    value: ClassValue


@dataclass(frozen=True)
class Style:
    value: HostExpr


@dataclass(frozen=True)
class Child:
    expr: HostExpr


Field = Union[Attr, Class, Style]


@dataclass(frozen=True)
class Node:
    tag: str
    fields: tuple[Field, ...] = ()
    children: tuple[Child, ...] = ()
    fields_span: Span | None = None
    children_span: Span | None = None
