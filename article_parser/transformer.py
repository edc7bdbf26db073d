"""
Article transformer: raw HTML fragment → list[ContentBlock].

Wires the tree provider and the classifier together and applies the root
shape rule: the fragment must have exactly one top-level child, an element,
which is classified; any other shape yields an empty document.

Pipeline position:
  content API payload → transform_response → parse_fragment → ContentClassifier
  → ParsedArticle / list[ContentBlock] → ArticleContentStore (store.py)
"""

from typing import Optional

from pydantic import ValidationError

from . import tree
from .classifier import ContentClassifier
from .config import get_settings
from .diagnostics import (
    Diagnostic,
    DiagnosticCollector,
    DiagnosticKind,
    DiagnosticSink,
    log_diagnostic,
)
from .exceptions import PayloadError
from .logger import get_module_logger
from .schemas import ArticleResponse, ContentBlock, ParsedArticle, TransformResult

logger = get_module_logger("transformer")


class ArticleTransformer:
    """
    Pure HTML-to-document-model transform.

    Holds configuration only (tree builder, diagnostics sink); every call
    builds its own classifier and shares no state with other calls, so one
    transformer can serve several loader threads.
    """

    def __init__(self, builder: Optional[str] = None, sink: Optional[DiagnosticSink] = None):
        # ARTICLE_PARSER_TREE_BUILDER when no builder is given
        self.builder = builder or get_settings().tree_builder
        self.sink = sink or log_diagnostic

    def transform(self, raw_html: str) -> list[ContentBlock]:
        """Transform one fragment, reporting diagnostics to the configured sink."""
        return self._transform(raw_html, self.sink)

    def transform_with_diagnostics(self, raw_html: str) -> TransformResult:
        """Transform one fragment and return the diagnostics alongside the blocks."""
        collector = DiagnosticCollector(forward=self.sink)
        blocks = self._transform(raw_html, collector)
        return TransformResult(blocks=blocks, diagnostics=collector.diagnostics)

    def transform_response(self, payload: dict) -> ParsedArticle:
        """
        Validate a content API article payload and transform its body.

        Raises:
            PayloadError: the payload has no textHtml/text field
        """
        try:
            response = ArticleResponse.model_validate(payload)
        except ValidationError as e:
            raise PayloadError(
                message="Article payload has no body",
                details={"errors": [err["msg"] for err in e.errors()]}
            )

        return ParsedArticle(
            title=extract_text_from_html(response.title, builder=self.builder),
            blocks=self.transform(response.text)
        )

    def _transform(self, raw_html: str, sink: DiagnosticSink) -> list[ContentBlock]:
        root = tree.parse_fragment(raw_html, builder=self.builder)
        top_level = tree.children(root)

        # Multi-root fragments are plausible API output but produce nothing
        # until there is a product decision on how to join them.
        if len(top_level) != 1 or not tree.is_element(top_level[0]):
            sink(Diagnostic(
                kind=DiagnosticKind.UNEXPECTED_ROOT_SHAPE,
                message=f"Expected one top-level element, found {len(top_level)} node(s)"
            ))
            return []

        blocks = ContentClassifier(sink).classify(top_level[0])
        logger.debug(f"Transformed fragment into {len(blocks)} blocks")
        return blocks


def html_fragment_to_blocks(raw_html: str, sink: Optional[DiagnosticSink] = None) -> list[ContentBlock]:
    """Convenience function to transform one HTML fragment."""
    return ArticleTransformer(sink=sink).transform(raw_html)


def extract_text_from_html(raw_html: str, builder: Optional[str] = None) -> str:
    """
    Plain text of a fragment: every text node trimmed and joined with a space.

    Used for HTML-bearing fields that are rendered as plain labels: article
    and hub titles, comment bodies.
    """
    root = tree.parse_fragment(raw_html, builder=builder or get_settings().tree_builder)
    return tree.concatenated_trimmed_text(root)
