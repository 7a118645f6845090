# SPDX-FileCopyrightText: 2024 Benedict Harcourt <ben.harcourt@harcourtprogramming.co.uk>
#
# SPDX-License-Identifier: BSD-2-Clause

"""
Minimal document tree that renders itself as indented HTML.

Trees are built bottom up from TextNode leaves and Element composites, then
rendered from the root. Rendering never mutates the tree, so a finished tree
may be rendered any number of times, including from several threads, as long
as nothing is adding or removing children at the same time.

A node instance may appear under more than one parent; it is simply rendered
once per appearance.
"""

from __future__ import annotations as _future_annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

import abc

from .errors import DomError, InvalidArgumentError, TreeTooDeepError

# Each level of the tree costs one Python stack frame while rendering.
DEFAULT_MAX_DEPTH = 256

_INDENT = "  "
_TEXT_ENTITIES = (("&", "&amp;"), ("<", "&lt;"), (">", "&gt;"), ('"', "&quot;"))
_ATTRIBUTE_ENTITIES = (("&", "&amp;"), ('"', "&quot;"), ("<", "&lt;"), (">", "&gt;"))


def _replace(value: str, entities: tuple[tuple[str, str], ...]) -> str:
    for char, entity in entities:
        value = value.replace(char, entity)
    return value


def escape_text(value: str) -> str:
    return _replace(value, _TEXT_ENTITIES)


def escape_attribute(value: str) -> str:
    return _replace(value, _ATTRIBUTE_ENTITIES)


def indent(depth: int, max_depth: int = DEFAULT_MAX_DEPTH) -> str:
    if depth < 0:
        raise InvalidArgumentError("depth", "must not be negative")
    if depth > max_depth:
        raise TreeTooDeepError(depth, max_depth)

    return _INDENT * depth


class Node(abc.ABC):
    __slots__ = ()

    @abc.abstractmethod
    def render(self, depth: int = 0, *, max_depth: int = DEFAULT_MAX_DEPTH) -> str:
        pass

    @property
    def html(self) -> str:
        return self.render()

    def __str__(self) -> str:
        return self.render()


class TextNode(Node):
    __slots__ = ("_content",)

    _content: str

    def __init__(self, content: Any = None) -> None:
        self._content = "" if content is None else str(content)

    @property
    def content(self) -> str:
        return self._content

    def render(self, depth: int = 0, *, max_depth: int = DEFAULT_MAX_DEPTH) -> str:
        return indent(depth, max_depth) + escape_text(self._content)

    def __repr__(self) -> str:
        return f"TextNode({self._content!r})"


class Element(Node):
    __slots__ = ("_tag", "_attributes", "_children")

    _tag: str
    _attributes: dict[str, str]
    _children: list[Node]

    def __init__(self, tag: str, *children: Node | str | None, **attributes: Any) -> None:
        if not tag:
            raise InvalidArgumentError("tag", "element tag is required")

        self._tag = tag
        self._attributes = {}
        self._children = []

        self.add_children(*children)
        for key, value in attributes.items():
            self.set_attribute(key.strip("_"), value)

    @property
    def tag(self) -> str:
        return self._tag

    @property
    def attributes(self) -> Mapping[str, str]:
        return MappingProxyType(self._attributes)

    @property
    def children(self) -> tuple[Node, ...]:
        return tuple(self._children)

    def add_children(self, *nodes: Node | str | None) -> Element:
        for node in nodes:
            if node is None:
                continue
            self._children.append(node if isinstance(node, Node) else TextNode(node))

        return self

    def remove_child(self, node: Node) -> Element:
        for index, child in enumerate(self._children):
            if child is node:
                del self._children[index]
                break

        return self

    def set_attribute(self, name: str, value: Any = None) -> Element:
        if not name:
            raise InvalidArgumentError("name", "attribute name is required")

        self._attributes[name] = "" if value is None else str(value)
        return self

    def render(self, depth: int = 0, *, max_depth: int = DEFAULT_MAX_DEPTH) -> str:
        prefix = indent(depth, max_depth)
        parts = [prefix, "<", self._tag]

        for name, value in self._attributes.items():
            parts.append(f' {name}="{escape_attribute(value)}"')

        if not self._children:
            parts.append(" />")
            return "".join(parts)

        parts.append(">\n")
        for child in self._children:
            parts.append(child.render(depth + 1, max_depth=max_depth))
            parts.append("\n")
        parts.append(f"{prefix}</{self._tag}>")

        return "".join(parts)

    def __repr__(self) -> str:
        return f"<Element {self._tag} children={len(self._children)}>"


from .document import DOCTYPE, Document, page  # noqa: E402

__all__ = [
    "DEFAULT_MAX_DEPTH",
    "DOCTYPE",
    "Document",
    "DomError",
    "Element",
    "InvalidArgumentError",
    "Node",
    "TextNode",
    "TreeTooDeepError",
    "escape_attribute",
    "escape_text",
    "indent",
    "page",
]
