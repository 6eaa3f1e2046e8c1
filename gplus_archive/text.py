from __future__ import annotations

from typing import Sequence

from .dom import DocumentTree, Node
from .predicates import attr_value, has_class


def append_link(buffer: str, url: str, label: str) -> str:
    """
    Append a Markdown link to `buffer`.

    A bare URL (label empty or equal to the URL) becomes `<url>`, anything
    else `[label](url)`. A single space separates the link from preceding
    non-whitespace text.
    """
    out = buffer
    if out and not out[-1].isspace():
        out += " "
    if not label or label == url:
        return out + f"<{url}>"
    return out + f"[{label}]({url})"


def _collect_plain(tree: DocumentTree, node: Node, out: list[str]) -> None:
    if node.kind == "text":
        out.append(node.text)
        return
    for child in tree.children(node):
        _collect_plain(tree, child, out)


def plain_text(tree: DocumentTree, node: Node) -> str:
    """Concatenate every text leaf under `node`, ignoring markup."""
    out: list[str] = []
    _collect_plain(tree, node, out)
    return "".join(out).strip()


def _skipped(node: Node, skip_classes: Sequence[str]) -> bool:
    if node.kind != "element" or not skip_classes:
        return False
    return any(has_class(node.attrs, c) for c in skip_classes)


def _collect_formatted(
    tree: DocumentTree,
    node: Node,
    out: list[str],
    skip_classes: Sequence[str],
) -> None:
    if node.kind == "text":
        out.append(node.text)
        return

    if node.kind == "element":
        if node.tag == "br":
            out.append("\n")
            return
        if node.tag == "a":
            href = attr_value(node.attrs, "href")
            if href is not None:
                merged = append_link("".join(out), href, plain_text(tree, node))
                out[:] = [merged]
                return

    for child in tree.children(node):
        if _skipped(child, skip_classes):
            continue
        _collect_formatted(tree, child, out, skip_classes)


def formatted_text(
    tree: DocumentTree,
    node: Node,
    *,
    skip_classes: Sequence[str] = (),
) -> str:
    """
    Collect text under `node`, keeping line breaks and links.

    `<br>` becomes a newline and `<a href>` a Markdown link built from its
    plain text. Descendant elements whose class contains any of
    `skip_classes` are left out along with everything below them.
    """
    out: list[str] = []
    _collect_formatted(tree, node, out, skip_classes)
    return "".join(out).strip()
