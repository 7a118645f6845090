# SPDX-FileCopyrightText: 2024 Benedict Harcourt <ben.harcourt@harcourtprogramming.co.uk>
#
# SPDX-License-Identifier: BSD-2-Clause

from __future__ import annotations as _future_annotations

from dom import Document, Element, TextNode

DEFAULT_TITLE = "Composite HTML Example"


def build(title: str = DEFAULT_TITLE) -> Document:
    head = Element("head").add_children(Element("title").add_children(TextNode(title)))

    heading = Element("h1").add_children(TextNode("Hello, Composite!"))
    paragraph = Element("p").add_children(
        TextNode("This is an HTML tree built using the Composite pattern."),
    )
    items = Element("ul").add_children(
        Element("li").add_children(TextNode("Item 1")),
        Element("li").add_children(TextNode("Item 2")),
        Element("li").add_children(TextNode("Item 3")),
    )

    body = Element("body").add_children(heading, paragraph, items)

    return Document(Element("html").add_children(head, body))
