from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Literal, Sequence

from bs4 import BeautifulSoup, Tag
from bs4.element import (
    CData,
    Comment,
    Declaration,
    Doctype,
    NavigableString,
    PageElement,
    ProcessingInstruction,
)

NodeKind = Literal["document", "element", "text", "comment"]

_SKIPPED_STRINGS = (CData, Declaration, Doctype, ProcessingInstruction)


@dataclass(frozen=True)
class Attribute:
    name: str
    value: str


@dataclass(frozen=True)
class Node:
    """
    One node of a parsed post page.

    Nodes never hold references to each other; `parent` and `children` are
    indices into the owning DocumentTree.
    """

    index: int
    kind: NodeKind
    parent: int | None = None
    children: tuple[int, ...] = ()
    tag: str = ""
    attrs: tuple[Attribute, ...] = ()
    text: str = ""


class DocumentTree:
    """Read-only arena of nodes. Index 0 is always the document root."""

    def __init__(self, nodes: Sequence[Node]) -> None:
        if not nodes or nodes[0].kind != "document":
            raise ValueError("DocumentTree requires a document node at index 0")
        self._nodes: tuple[Node, ...] = tuple(nodes)

    def __len__(self) -> int:
        return len(self._nodes)

    @property
    def root(self) -> Node:
        return self._nodes[0]

    def node(self, index: int) -> Node:
        return self._nodes[index]

    def parent(self, node: Node) -> Node | None:
        if node.parent is None:
            return None
        return self._nodes[node.parent]

    def children(self, node: Node) -> list[Node]:
        return [self._nodes[i] for i in node.children]

    def ancestors(self, node: Node) -> Iterator[Node]:
        current = self.parent(node)
        while current is not None:
            yield current
            current = self.parent(current)


class TreeBuilder:
    """Accumulates nodes in document order while child lists are still open."""

    def __init__(self) -> None:
        self._kinds: list[NodeKind] = []
        self._parents: list[int | None] = []
        self._children: list[list[int]] = []
        self._tags: list[str] = []
        self._attrs: list[tuple[Attribute, ...]] = []
        self._texts: list[str] = []
        self.add("document", None)

    def add(
        self,
        kind: NodeKind,
        parent: int | None,
        *,
        tag: str = "",
        attrs: tuple[Attribute, ...] = (),
        text: str = "",
    ) -> int:
        index = len(self._kinds)
        self._kinds.append(kind)
        self._parents.append(parent)
        self._children.append([])
        self._tags.append(tag)
        self._attrs.append(attrs)
        self._texts.append(text)
        if parent is not None:
            self._children[parent].append(index)
        return index

    def build(self) -> DocumentTree:
        nodes = [
            Node(
                index=i,
                kind=self._kinds[i],
                parent=self._parents[i],
                children=tuple(self._children[i]),
                tag=self._tags[i],
                attrs=self._attrs[i],
                text=self._texts[i],
            )
            for i in range(len(self._kinds))
        ]
        return DocumentTree(nodes)


def _attr_value(value: object) -> str:
    if isinstance(value, (list, tuple)):
        return " ".join(str(v) for v in value)
    return "" if value is None else str(value)


def _add_soup_children(builder: TreeBuilder, element: Tag, parent: int) -> None:
    for child in element.children:
        _add_soup_node(builder, child, parent)


def _add_soup_node(builder: TreeBuilder, item: PageElement, parent: int) -> None:
    if isinstance(item, Tag):
        attrs = tuple(
            Attribute(name=str(name).lower(), value=_attr_value(value))
            for name, value in (item.attrs or {}).items()
        )
        index = builder.add("element", parent, tag=(item.name or "").lower(), attrs=attrs)
        _add_soup_children(builder, item, index)
        return

    if isinstance(item, Comment):
        builder.add("comment", parent, text=str(item))
        return

    if isinstance(item, _SKIPPED_STRINGS):
        return

    if isinstance(item, NavigableString):
        builder.add("text", parent, text=str(item))


def parse_html(markup: str) -> DocumentTree:
    """
    Parse a Takeout post page into a DocumentTree.

    `class` is kept as its raw space-joined string so class tests stay
    substring matches against the attribute text.
    """
    soup = BeautifulSoup(markup, "html.parser", multi_valued_attributes=None)
    builder = TreeBuilder()
    _add_soup_children(builder, soup, 0)
    return builder.build()
