"""
Article Parser

Turns article bodies from the content API (HTML fragments) into an ordered,
immutable list of typed content blocks that any presentation layer can render.
- Tree provider: lenient BeautifulSoup parsing of the fragment
- Classifier:    recursive tag dispatch to ContentBlocks
- Inline runs:   mixed-formatting paragraph text to TextRuns
- Store/loader:  background transform with last-request-wins publication

Public API surface:
  Transform        - ArticleTransformer, html_fragment_to_blocks, extract_text_from_html
  Components       - ContentClassifier, InlineRunExtractor, ListItemExtractor
  Document model   - ContentBlock and TextRun variants, TransformResult, ParsedArticle
  Diagnostics      - Diagnostic, DiagnosticKind, DiagnosticCollector
  Error types      - ArticleParserError, FragmentParseError, PayloadError, ConfigurationError
  Shared state     - ArticleContentStore, ArticleLoader
"""

# --- Transform entry points ---
from .transformer import ArticleTransformer, html_fragment_to_blocks, extract_text_from_html

# --- Transform components ---
from .classifier import ContentClassifier, classify
from .inline import InlineRunExtractor, extract_inline_runs
from .lists import ListItemExtractor, extract_list_items

# --- Document model ---
from .schemas import (
    ContentBlock,
    ImageBlock,
    HeaderBlock,
    ParagraphBlock,
    CodeBlock,
    BlockquoteBlock,
    TextBlock,
    UnorderedListBlock,
    OrderedListBlock,
    LineBreakBlock,
    TextRun,
    CommonRun,
    CodeRun,
    LinkRun,
    ItalicRun,
    StrongRun,
    TransformResult,
    ArticleResponse,
    ParsedArticle,
)

# --- Diagnostics (the non-fatal side channel) ---
from .diagnostics import Diagnostic, DiagnosticKind, DiagnosticCollector, log_diagnostic

# --- Exceptions (the fatal cases) ---
from .exceptions import ArticleParserError, FragmentParseError, PayloadError, ConfigurationError

# --- Shared state for the rendering layer ---
from .store import ArticleContentStore, ArticleLoader

__version__ = "0.3.0"
__all__ = [
    "ArticleTransformer",
    "html_fragment_to_blocks",
    "extract_text_from_html",
    "ContentClassifier",
    "classify",
    "InlineRunExtractor",
    "extract_inline_runs",
    "ListItemExtractor",
    "extract_list_items",
    "ContentBlock",
    "ImageBlock",
    "HeaderBlock",
    "ParagraphBlock",
    "CodeBlock",
    "BlockquoteBlock",
    "TextBlock",
    "UnorderedListBlock",
    "OrderedListBlock",
    "LineBreakBlock",
    "TextRun",
    "CommonRun",
    "CodeRun",
    "LinkRun",
    "ItalicRun",
    "StrongRun",
    "TransformResult",
    "ArticleResponse",
    "ParsedArticle",
    "Diagnostic",
    "DiagnosticKind",
    "DiagnosticCollector",
    "log_diagnostic",
    "ArticleParserError",
    "FragmentParseError",
    "PayloadError",
    "ConfigurationError",
    "ArticleContentStore",
    "ArticleLoader",
]
