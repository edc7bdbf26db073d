"""
Recursive content classifier.

Maps one element (and its subtree) to zero or more ContentBlocks by looking
the tag name up in a handler table. Unsupported tags are reported to the
diagnostics sink and produce nothing, so one odd element never costs the
rest of the article.

Pipeline position: parse_fragment → ContentClassifier → list[ContentBlock]
"""

from typing import Callable, Optional

from bs4.element import PageElement

from . import tree
from .diagnostics import Diagnostic, DiagnosticKind, DiagnosticSink, log_diagnostic
from .inline import InlineRunExtractor
from .lists import ListItemExtractor
from .schemas import (
    BlockquoteBlock,
    CodeBlock,
    CommonRun,
    ContentBlock,
    HeaderBlock,
    ImageBlock,
    ItalicRun,
    LineBreakBlock,
    OrderedListBlock,
    ParagraphBlock,
    TextBlock,
    UnorderedListBlock,
    link_run,
)

Handler = Callable[[PageElement], list[ContentBlock]]


class ContentClassifier:
    """
    Tag-dispatching classifier.

    Adding support for a tag means one entry in ``self.handlers`` and one
    handler method.
    """

    def __init__(self, sink: Optional[DiagnosticSink] = None):
        self.sink = sink or log_diagnostic
        self.inline = InlineRunExtractor(self.sink)
        self.lists = ListItemExtractor(self.inline)
        self.handlers: dict[str, Handler] = {
            "img": self._image,
            "figure": self._figure,
            "p": self._paragraph,
            "h2": self._header,
            "h3": self._header,
            "h4": self._header,
            "pre": self._pre,
            "code": self._code,
            "blockquote": self._blockquote,
            "ul": self._unordered_list,
            "ol": self._ordered_list,
            "a": self._anchor,
            "i": self._italic,
            "div": self._div,
            "br": self._line_break,
        }

    def classify(self, node: PageElement) -> list[ContentBlock]:
        """Classify one element. Non-element nodes produce nothing."""
        name = tree.tag_name(node)
        if name is None:
            return []

        handler = self.handlers.get(name)
        if handler is None:
            self.sink(Diagnostic(
                kind=DiagnosticKind.UNSUPPORTED_TAG,
                message=f"Unsupported tag: {name} (class={tree.attr(node, 'class')!r})",
                tag=name,
                markup=tree.serialize(node)
            ))
            return []
        return handler(node)

    # --- Handlers ---

    def _image(self, node: PageElement) -> list[ContentBlock]:
        src = tree.attr(node, "src")
        if src is None:
            self.sink(Diagnostic(
                kind=DiagnosticKind.MISSING_ATTRIBUTE,
                message="Image without src",
                tag="img",
                markup=tree.serialize(node)
            ))
            return []
        return [ImageBlock(url=src)]

    def _figure(self, node: PageElement) -> list[ContentBlock]:
        # <figure><img ...><figcaption>...</figcaption></figure>: only the image is kept
        first = tree.first_child(node)
        if not tree.is_element(first):
            # Also <figure>\n<img ...>: the first child is the newline
            self.sink(Diagnostic(
                kind=DiagnosticKind.UNEXPECTED_CHILD,
                message="Figure whose first child is not an element",
                tag="figure",
                markup=tree.serialize(node)
            ))
            return []
        return self.classify(first)

    def _paragraph(self, node: PageElement) -> list[ContentBlock]:
        return [ParagraphBlock(runs=self.inline.extract(node))]

    def _header(self, node: PageElement) -> list[ContentBlock]:
        level = int(tree.tag_name(node)[1])
        return [HeaderBlock(level=level, text=tree.concatenated_trimmed_text(node))]

    def _pre(self, node: PageElement) -> list[ContentBlock]:
        first = tree.first_child(node)
        text = tree.text_of(first)
        if text is not None:
            return [CodeBlock(lang=tree.attr(node, "class") or "", content=text)]
        if tree.is_element(first):
            # <pre><code class="python">...</code></pre>
            return self.classify(first)
        return [CodeBlock(
            lang=tree.attr(node, "class") or "",
            content=tree.concatenated_trimmed_text(node)
        )]

    def _code(self, node: PageElement) -> list[ContentBlock]:
        return [CodeBlock(
            lang=tree.attr(node, "class") or "",
            content=tree.concatenated_trimmed_text(node)
        )]

    def _blockquote(self, node: PageElement) -> list[ContentBlock]:
        return [BlockquoteBlock(text=tree.concatenated_trimmed_text(node))]

    def _unordered_list(self, node: PageElement) -> list[ContentBlock]:
        return [UnorderedListBlock(items=self.lists.extract(node))]

    def _ordered_list(self, node: PageElement) -> list[ContentBlock]:
        return [OrderedListBlock(items=self.lists.extract(node))]

    def _anchor(self, node: PageElement) -> list[ContentBlock]:
        url = tree.attr(node, "href")
        if url is None:
            self.sink(Diagnostic(
                kind=DiagnosticKind.MISSING_ATTRIBUTE,
                message="Anchor without href",
                tag="a",
                markup=tree.serialize(node)
            ))
            url = ""
        return [ParagraphBlock(runs=[link_run(url, tree.concatenated_trimmed_text(node))])]

    def _italic(self, node: PageElement) -> list[ContentBlock]:
        return [ParagraphBlock(runs=[ItalicRun(text=tree.concatenated_trimmed_text(node))])]

    def _div(self, node: PageElement) -> list[ContentBlock]:
        blocks = []
        for child in tree.children(node):
            if tree.is_element(child):
                blocks.extend(self.classify(child))
                continue
            text = tree.text_of(child)
            if text is not None and text.strip():
                blocks.append(TextBlock(run=CommonRun(text=text.strip())))
        return blocks

    def _line_break(self, node: PageElement) -> list[ContentBlock]:
        return [LineBreakBlock()]


def classify(node: PageElement, sink: Optional[DiagnosticSink] = None) -> list[ContentBlock]:
    """Convenience function to classify one element."""
    return ContentClassifier(sink).classify(node)
