from __future__ import annotations

from .dom import DocumentTree, Node
from .normalize import clean_location, convert_to_utc
from .post import Comment, Link, PostRecord
from .predicates import attr_value, find_ancestor_attr, has_attr, has_class
from .text import formatted_text, plain_text

POST_PERMALINK_MARKER = "/posts/"
PLACEHOLDER_TITLE = "Google+ post"

VISIBILITY_PREFIX = "Shared with: "
PLUS_ONES_PREFIX = "+1'd by: "
RESHARE_PREFIX = "Originally shared by "
COMMENT_TIME_MARKER = "- "

_RESHARE_SKIP_CLASSES = ("reshare-attribution", "link-embed")


def _strip_prefix(text: str, prefix: str) -> str:
    return text[len(prefix) :] if text.startswith(prefix) else text


def extract_post(tree: DocumentTree) -> PostRecord:
    """
    Walk the whole page once and collect every recognised post field.

    Matching a node never stops the walk from descending into it, so links
    and comments nested inside other matches are still picked up.
    """
    record = PostRecord()
    _walk(tree, tree.root, record)
    return record


def _walk(tree: DocumentTree, node: Node, record: PostRecord) -> None:
    if node.kind == "element":
        _match_element(tree, node, record)
    for child in tree.children(node):
        _walk(tree, child, record)


def _match_element(tree: DocumentTree, node: Node, record: PostRecord) -> None:
    tag = node.tag
    attrs = node.attrs

    if tag == "a" and has_class(attrs, "author") and not record.is_set("author"):
        record.offer("author", plain_text(tree, node))

    if tag == "a" and not record.is_set("date"):
        href = attr_value(attrs, "href")
        if href is not None and POST_PERMALINK_MARKER in href:
            date_text = plain_text(tree, node)
            if date_text:
                record.offer("date", convert_to_utc(date_text))
                record.offer("canonical_url", href)

    if has_class(attrs, "main-content"):
        record.offer("content", formatted_text(tree, node))

    if tag == "title":
        title = plain_text(tree, node)
        if title and title != PLACEHOLDER_TITLE:
            record.offer("title", title)

    if has_class(attrs, "location"):
        record.offer("location", clean_location(plain_text(tree, node)))

    if tag == "img" and has_class(attrs, "media"):
        src = attr_value(attrs, "src")
        if src is not None:
            record.offer("images", src)

    if has_class(attrs, "video-placeholder"):
        href = find_ancestor_attr(tree, node, "href")
        if href is not None:
            record.offer("video_url", href)

    if tag == "a" and (has_attr(attrs, "rel", "nofollow") or has_class(attrs, "link-embed")):
        href = attr_value(attrs, "href")
        if href is not None:
            record.offer("links", Link(url=href, label=plain_text(tree, node)))

    if has_class(attrs, "visibility"):
        record.offer("visibility", _strip_prefix(plain_text(tree, node), VISIBILITY_PREFIX))

    if has_class(attrs, "plus-oners"):
        text = plain_text(tree, node)
        if text.startswith(PLUS_ONES_PREFIX):
            record.offer("plus_ones", text[len(PLUS_ONES_PREFIX) :].split(", "))

    if tag == "a" and has_class(attrs, "reshare-attribution"):
        record.offer("reshare_author", _strip_prefix(plain_text(tree, node), RESHARE_PREFIX))
        reshare = extract_reshare_content(tree, node)
        if reshare is not None:
            record.offer("reshare_content", reshare)

    if has_class(attrs, "comment"):
        comment = extract_comment(tree, node)
        if comment is not None:
            record.offer("comments", comment)


def extract_reshare_content(tree: DocumentTree, attribution: Node) -> str | None:
    """Formatted text of the attribution's parent, minus attribution and embeds."""
    parent = tree.parent(attribution)
    if parent is None:
        return None
    text = formatted_text(tree, parent, skip_classes=_RESHARE_SKIP_CLASSES)
    return text or None


class _CommentParts:
    def __init__(self) -> None:
        self.author = ""
        self.date = ""
        self.content = ""


def _comment_date(text: str) -> str:
    while text.startswith(COMMENT_TIME_MARKER):
        text = text[len(COMMENT_TIME_MARKER) :]
    return convert_to_utc(text.strip())


def _walk_comment(tree: DocumentTree, node: Node, parts: _CommentParts) -> None:
    if node.kind == "element":
        attrs = node.attrs
        if node.tag == "a" and has_class(attrs, "author") and not parts.author:
            parts.author = plain_text(tree, node)
        elif has_class(attrs, "time") and not parts.date:
            parts.date = _comment_date(plain_text(tree, node))
        elif has_class(attrs, "comment-content") and not parts.content:
            parts.content = formatted_text(tree, node)

    for child in tree.children(node):
        _walk_comment(tree, child, parts)


def extract_comment(tree: DocumentTree, container: Node) -> Comment | None:
    """
    Pull author, time and body out of one comment container.

    Returns None unless both author and body were found.
    """
    parts = _CommentParts()
    _walk_comment(tree, container, parts)
    if not parts.author or not parts.content:
        return None
    return Comment(author=parts.author, content=parts.content, date=parts.date)
