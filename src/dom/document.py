# SPDX-FileCopyrightText: 2024 Benedict Harcourt <ben.harcourt@harcourtprogramming.co.uk>
#
# SPDX-License-Identifier: BSD-2-Clause

from __future__ import annotations as _future_annotations

from collections.abc import Iterable
from typing import Any

import logging

from . import DEFAULT_MAX_DEPTH, Element, Node, TextNode
from .errors import InvalidArgumentError

DOCTYPE = "<!doctype html>"

_logger = logging.getLogger("dom")


class Document(Node):
    """A root element preceded by the HTML doctype line."""

    __slots__ = ("_root",)

    _root: Element

    def __init__(self, root: Element) -> None:
        if not isinstance(root, Element):
            raise InvalidArgumentError("root", "document root must be an Element")
        self._root = root

    @property
    def root(self) -> Element:
        return self._root

    def render(self, depth: int = 0, *, max_depth: int = DEFAULT_MAX_DEPTH) -> str:
        content = DOCTYPE + "\n" + self._root.render(depth, max_depth=max_depth)
        _logger.debug(
            "Rendered document",
            extra={"root": self._root.tag, "length": len(content)},
        )
        return content


def page(
    title: str,
    *body: Node | str | None,
    styles: Iterable[str] = (),
    scripts: Iterable[str] = (),
    lang: str = "en",
    **body_attributes: Any,
) -> Document:
    head = Element(
        "head",
        Element("meta", charset="utf-8"),
        Element("meta", name="viewport", content="width=device-width, initial-scale=1"),
        Element("title", title),
    )

    for style in styles:
        head.add_children(Element("link", rel="stylesheet", href=style))

    # <script /> is not a valid way to close a script element
    for script in scripts:
        head.add_children(Element("script", TextNode(), type="module", src=script))

    return Document(
        Element(
            "html",
            head,
            Element("body", *body, **body_attributes),
            lang=lang,
        ),
    )
