"""Lowering of parsed literals into builder call chains."""

from __future__ import annotations

import keyword
import os
from dataclasses import dataclass, fields
from typing import Final

from .ast import Attr, Child, Class, DynamicClass, Field, Node, StaticClass, Style

DEFAULT_NAMESPACE: Final[str] = os.environ.get("TAGVIEW_NAMESPACE", "html")


def _is_name(text: str) -> bool:
    return text.isidentifier() and not keyword.iskeyword(text)


@dataclass(frozen=True)
class BuilderApi:
    """Names the generated calls target.

    ``class_`` stands for the host's conditional ``class`` method, which
    cannot be spelled as a Python attribute.
    """

    namespace: str = DEFAULT_NAMESPACE
    attr: str = "attr"
    classes: str = "classes"
    class_: str = "class_"
    style: str = "style"
    child: str = "child"

    def __post_init__(self) -> None:
        if self.namespace and not all(_is_name(part) for part in self.namespace.split(".")):
            raise ValueError(f"Invalid builder namespace {self.namespace!r}")
        for item in fields(self):
            if item.name == "namespace":
                continue
            method = getattr(self, item.name)
            if not _is_name(method):
                raise ValueError(f"Invalid builder method name {method!r} for {item.name}")


DEFAULT_API: Final[BuilderApi] = BuilderApi()


def _construct(tag: str, api: BuilderApi) -> str:
    if api.namespace:
        return f"{api.namespace}.{tag}()"
    return f"{tag}()"


def _field_call(field: Field, api: BuilderApi) -> str:
    if isinstance(field, Attr):
        return f'.{api.attr}("{field.name}", {field.value.source})'
    if isinstance(field, Class):
        value = field.value
        if isinstance(value, StaticClass):
            return f".{api.classes}({value.value.source})"
        if isinstance(value, DynamicClass):
            return f".{api.class_}({value.condition.source}, {value.value.source})"
        raise AssertionError(f"unreachable class value {value!r}")
    if isinstance(field, Style):
        return f".{api.style}({field.value.source})"
    raise AssertionError(f"unreachable field {field!r}")


def _child_call(child: Child, api: BuilderApi) -> str:
    return f".{api.child}({child.expr.source})"


def generate(node: Node, api: BuilderApi = DEFAULT_API) -> tuple[str, ...]:
    """Constructor call, then one call per field, then one per child, in source order."""
    fragments = [_construct(node.tag, api)]
    fragments.extend(_field_call(field, api) for field in node.fields)
    fragments.extend(_child_call(child, api) for child in node.children)
    return tuple(fragments)


def render(node: Node, api: BuilderApi = DEFAULT_API) -> str:
    return "".join(generate(node, api))
