"""
Tests for the tree provider helpers and the inline / list extractors in isolation.
"""

import pytest

from article_parser import tree
from article_parser.diagnostics import DiagnosticCollector, DiagnosticKind
from article_parser.inline import InlineRunExtractor, trim_first
from article_parser.lists import ListItemExtractor
from article_parser.schemas import (
    CodeRun,
    CommonRun,
    ItalicRun,
    LinkRun,
    ParagraphBlock,
    StrongRun,
    TextBlock,
)


def first_element(html: str):
    return tree.children(tree.parse_fragment(html))[0]


def runs_of(html: str) -> tuple[list, DiagnosticCollector]:
    collector = DiagnosticCollector()
    return InlineRunExtractor(collector).extract(first_element(html)), collector


# --- Tree provider ---

def test_sanitize_fragment():
    assert tree.sanitize_fragment("a\x00b\x07c\r\nd\re") == "abc\nd\ne"


def test_parse_fragment_rejects_unknown_builder():
    with pytest.raises(ValueError):
        tree.parse_fragment("<p>x</p>", builder="regex")


def test_comments_are_not_text():
    paragraph = first_element("<p><!-- note -->text</p>")
    comment, text = tree.children(paragraph)
    assert tree.text_of(comment) is None
    assert not tree.is_element(comment)
    assert tree.text_of(text) == "text"


def test_concatenated_text_skips_comments():
    node = first_element("<blockquote>a<!-- hidden --><b>b</b></blockquote>")
    assert tree.concatenated_trimmed_text(node) == "a b"


def test_attr_and_first_child():
    node = first_element('<pre class="lang-go extra">x</pre>')
    assert tree.attr(node, "class") == "lang-go extra"
    assert tree.attr(node, "id") is None
    assert tree.text_of(tree.first_child(node)) == "x"
    assert tree.first_child(first_element("<p></p>")) is None


# --- Inline runs ---

def test_trim_first():
    assert trim_first(0, "  a ") == "a "
    assert trim_first(3, "  a ") == "  a "


def test_formatting_runs():
    runs, collector = runs_of("<p><em>a</em> b <strong>c</strong> <i>d</i> <code>e</code></p>")
    assert runs == [
        ItalicRun(text="a"),
        CommonRun(text=" b "),
        StrongRun(text="c"),
        CommonRun(text=" "),
        ItalicRun(text="d"),
        CommonRun(text=" "),
        CodeRun(text="e"),
    ]
    assert len(collector) == 0


def test_first_formatting_run_is_trimmed_later_ones_are_not():
    runs, _ = runs_of("<p><em>  a</em><strong>  b</strong></p>")
    assert runs == [ItalicRun(text="a"), StrongRun(text="  b")]


def test_inline_link():
    runs, _ = runs_of('<p>see <a href="https://docs">docs</a>.</p>')
    assert runs == [
        CommonRun(text="see "),
        LinkRun(url="https://docs", value="docs"),
        CommonRun(text="."),
    ]


def test_inline_link_without_children_uses_url():
    runs, _ = runs_of('<p>x <a href="u"></a></p>')
    assert runs == [CommonRun(text="x "), LinkRun(url="u", value="u")]


def test_inline_link_around_image_uses_url():
    runs, _ = runs_of('<p><a href="u"><img src="i.png"></a></p>')
    assert runs == [LinkRun(url="u", value="u")]


def test_inline_link_without_href_is_skipped():
    runs, collector = runs_of('<p>a <a name="anchor">b</a></p>')
    assert runs == [CommonRun(text="a ")]
    assert collector.kinds() == [DiagnosticKind.MISSING_ATTRIBUTE]


def test_unknown_inline_tag_is_skipped_with_diagnostic():
    runs, collector = runs_of("<p>a <span>b</span> c</p>")
    assert runs == [CommonRun(text="a "), CommonRun(text=" c")]
    assert collector.kinds() == [DiagnosticKind.UNSUPPORTED_INLINE_TAG]
    assert collector.diagnostics[0].tag == "span"


def test_nested_formatting_is_skipped_silently():
    runs, collector = runs_of("<p><b><i>x</i></b> y</p>")
    assert runs == [CommonRun(text=" y")]
    assert len(collector) == 0


def test_comment_keeps_its_index():
    runs, _ = runs_of("<p><!-- c -->  text</p>")
    assert runs == [CommonRun(text="  text")]


# --- List items ---

def test_list_items_from_text_and_elements():
    node = first_element('<ul><li> plain </li><li><em>styled</em> rest</li><li></li></ul>')
    items = ListItemExtractor().extract(node)
    assert items == [
        TextBlock(run=CommonRun(text="plain")),
        ParagraphBlock(runs=[CommonRun(text="styled")]),
    ]


def test_list_item_diagnostics_go_through_the_inline_sink():
    collector = DiagnosticCollector()
    extractor = ListItemExtractor(InlineRunExtractor(collector))
    items = extractor.extract(first_element("<ol><li><p>a <u>b</u></p></li></ol>"))
    assert items == [ParagraphBlock(runs=[CommonRun(text="a ")])]
    assert collector.kinds() == [DiagnosticKind.UNSUPPORTED_INLINE_TAG]
