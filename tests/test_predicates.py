from __future__ import annotations

import unittest

from gplus_archive.dom import Attribute, parse_html
from gplus_archive.predicates import attr_value, find_ancestor_attr, has_attr, has_class


def _attrs(**kwargs: str) -> tuple[Attribute, ...]:
    return tuple(Attribute(name=k, value=v) for k, v in kwargs.items())


class TestPredicates(unittest.TestCase):
    def test_has_class_is_substring_match(self) -> None:
        attrs = _attrs(**{"class": "foobar"})
        self.assertTrue(has_class(attrs, "foo"))
        self.assertTrue(has_class(attrs, "bar"))
        self.assertFalse(has_class(attrs, "baz"))

    def test_has_class_ignores_other_attributes(self) -> None:
        self.assertFalse(has_class(_attrs(id="author"), "author"))

    def test_has_attr_requires_exact_value(self) -> None:
        attrs = _attrs(rel="nofollow noopener")
        self.assertFalse(has_attr(attrs, "rel", "nofollow"))
        self.assertTrue(has_attr(attrs, "rel", "nofollow noopener"))

    def test_attr_value_returns_first(self) -> None:
        attrs = (Attribute("href", "a"), Attribute("href", "b"))
        self.assertEqual(attr_value(attrs, "href"), "a")
        self.assertIsNone(attr_value(attrs, "src"))


class TestFindAncestorAttr(unittest.TestCase):
    def _placeholder(self, markup: str):
        tree = parse_html(markup)
        for i in range(len(tree)):
            node = tree.node(i)
            if node.kind == "element" and has_class(node.attrs, "video-placeholder"):
                return tree, node
        raise AssertionError("placeholder not found")

    def test_finds_nearest_ancestor(self) -> None:
        tree, node = self._placeholder(
            '<a href="outer"><div><a href="inner"><span class="video-placeholder"></span></a></div></a>'
        )
        self.assertEqual(find_ancestor_attr(tree, node, "href"), "inner")

    def test_ignores_node_itself_and_siblings(self) -> None:
        tree, node = self._placeholder(
            '<div><a href="sibling">x</a><span class="video-placeholder" href="self"></span></div>'
        )
        self.assertIsNone(find_ancestor_attr(tree, node, "href"))

    def test_tree_unchanged_after_search(self) -> None:
        tree, node = self._placeholder('<a href="v"><i class="video-placeholder"></i></a>')
        before = [tree.node(i) for i in range(len(tree))]
        self.assertEqual(find_ancestor_attr(tree, node, "href"), "v")
        self.assertEqual(find_ancestor_attr(tree, node, "href"), "v")
        self.assertEqual(before, [tree.node(i) for i in range(len(tree))])


if __name__ == "__main__":
    unittest.main()
