"""
Unit tests for the fragment walker.

Tests eligibility rules, document order and tree immutability.
"""
import pytest
from lxml import etree

from src.core.xhtml.document import parse_document, serialize_document
from src.core.xhtml.walker import (
    TextFragment,
    collect_fragments,
    local_tag_name,
    TEXT_SLOT,
    TAIL_SLOT,
)


def _texts(fragments):
    return [fragment.text for fragment in fragments]


class TestCollectFragments:
    """Tests for collect_fragments."""

    def test_simple_document(self):
        root = parse_document("<div><h1>Hello</h1><p>World</p></div>")
        fragments = collect_fragments(root)
        assert _texts(fragments) == ["Hello", "World"]
        assert [f.index for f in fragments] == [0, 1]

    def test_inline_markup_in_document_order(self):
        """Text before, inside and after an inline element, in pre-order."""
        root = parse_document("<p>Hello <b>bold</b> world</p>")
        fragments = collect_fragments(root)
        assert _texts(fragments) == ["Hello ", "bold", " world"]
        assert [f.slot for f in fragments] == [TEXT_SLOT, TEXT_SLOT, TAIL_SLOT]

    def test_tail_comes_after_subtree(self):
        root = parse_document("<div><p>one<i>two</i>three</p>four</div>")
        assert _texts(collect_fragments(root)) == ["one", "two", "three", "four"]

        root = parse_document("<div><span>a<em>b</em></span>c<span>d</span></div>")
        assert _texts(collect_fragments(root)) == ["a", "b", "c", "d"]

    def test_whitespace_only_text_skipped(self):
        root = parse_document("<div>\n   <p>Text</p>\n\t <p> </p>\n</div>")
        assert _texts(collect_fragments(root)) == ["Text"]

    def test_script_and_style_skipped(self):
        root = parse_document(
            "<div><script>alert('x')</script><style>p {}</style><p>Hi</p></div>"
        )
        assert _texts(collect_fragments(root)) == ["Hi"]

    def test_text_after_script_is_translated(self):
        """The tail of a script belongs to its parent, not to the script."""
        root = parse_document("<div><script>var a;</script>after</div>")
        fragments = collect_fragments(root)
        assert _texts(fragments) == ["after"]
        assert local_tag_name(fragments[0].parent) == "div"

    def test_comment_content_skipped_but_tail_kept(self):
        root = parse_document("<div><!-- note -->visible</div>")
        fragments = collect_fragments(root)
        assert _texts(fragments) == ["visible"]
        assert fragments[0].slot == TAIL_SLOT

    def test_namespaced_xhtml(self, sample_xhtml):
        root = parse_document(sample_xhtml)
        assert _texts(collect_fragments(root)) == ["Title", "Hello ", "bold", " world"]

    def test_custom_non_translatable_tags(self):
        root = parse_document("<div><p>Text</p><code>x = 1</code><pre>raw</pre></div>")
        fragments = collect_fragments(root, non_translatable_tags={"CODE", "pre"})
        assert _texts(fragments) == ["Text"]

    def test_empty_body(self):
        root = parse_document("<html><body></body></html>")
        assert collect_fragments(root) == []

    def test_root_tail_not_collected(self):
        root = etree.fromstring("<p>inside</p>")
        root.tail = "outside"
        assert _texts(collect_fragments(root)) == ["inside"]

    def test_deep_nesting_does_not_recurse(self):
        root = etree.Element("div")
        node = root
        for _ in range(5000):
            node = etree.SubElement(node, "span")
        node.text = "deep"
        fragments = collect_fragments(root)
        assert _texts(fragments) == ["deep"]

    def test_tree_not_modified(self, sample_xhtml):
        root = parse_document(sample_xhtml)
        before = serialize_document(root)
        collect_fragments(root)
        assert serialize_document(root) == before


class TestTextFragment:
    """Tests for TextFragment."""

    def test_write_text_slot(self):
        root = etree.fromstring("<p>Hello<b>x</b> tail</p>")
        fragment = TextFragment(root, TEXT_SLOT, "Hello", 0)
        fragment.write("Hola")
        assert root.text == "Hola"
        assert fragment.text == "Hello"

    def test_write_tail_slot(self):
        root = etree.fromstring("<p>Hello<b>x</b> tail</p>")
        bold = root[0]
        fragment = TextFragment(bold, TAIL_SLOT, " tail", 1)
        assert fragment.parent is root
        fragment.write(" cola")
        assert etree.tostring(root, encoding="unicode") == "<p>Hello<b>x</b> cola</p>"


class TestLocalTagName:
    """Tests for local_tag_name."""

    @pytest.mark.parametrize("markup,expected", [
        ("<SCRIPT/>", "script"),
        ('<style xmlns="http://www.w3.org/1999/xhtml"/>', "style"),
        ("<p/>", "p"),
    ])
    def test_element_names(self, markup, expected):
        assert local_tag_name(etree.fromstring(markup)) == expected

    def test_comment_has_no_name(self):
        assert local_tag_name(etree.Comment("c")) is None
        assert local_tag_name(None) is None
