from __future__ import annotations

from typing import Iterable

from .dom import Attribute, DocumentTree, Node


def has_class(attrs: Iterable[Attribute], name: str) -> bool:
    # Substring test: "comment" also matches "comment-content".
    return any(a.name == "class" and name in a.value for a in attrs)


def has_attr(attrs: Iterable[Attribute], name: str, value: str) -> bool:
    return any(a.name == name and a.value == value for a in attrs)


def attr_value(attrs: Iterable[Attribute], name: str) -> str | None:
    for a in attrs:
        if a.name == name:
            return a.value
    return None


def find_ancestor_attr(tree: DocumentTree, node: Node, name: str) -> str | None:
    """
    Return the `name` attribute of the nearest element above `node`.

    Only parents are visited; siblings and `node` itself are never inspected.
    """
    for ancestor in tree.ancestors(node):
        if ancestor.kind != "element":
            continue
        value = attr_value(ancestor.attrs, name)
        if value is not None:
            return value
    return None
