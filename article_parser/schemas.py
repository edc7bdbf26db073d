"""
Pydantic schemas for the article document model.

ContentBlock: one top-level renderable unit of an article
TextRun:      one inline span of text inside a paragraph or list item

Data flow:
  raw HTML fragment → tree.parse_fragment → ContentClassifier → list[ContentBlock]
  → ArticleContentStore snapshot → rendering layer (external)

Every model is frozen and every sequence is a tuple: a model is built once
per transform call and never mutated afterwards. Both unions are
discriminated on ``kind`` so a rendered JSON dump validates back into the
same variants.
"""

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from .diagnostics import Diagnostic


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


# --- Inline runs ---

class CommonRun(_Frozen):
    """Plain text."""
    kind: Literal["common"] = "common"
    text: str


class CodeRun(_Frozen):
    """Inline <code>."""
    kind: Literal["code"] = "code"
    text: str


class LinkRun(_Frozen):
    """
    An anchor.

    ``value`` is the visible text; it is never empty because link_run()
    falls back to the url when the anchor has no text.
    """
    kind: Literal["link"] = "link"
    url: str
    value: str


class ItalicRun(_Frozen):
    """<i> or <em>."""
    kind: Literal["italic"] = "italic"
    text: str


class StrongRun(_Frozen):
    """<strong>."""
    kind: Literal["strong"] = "strong"
    text: str


TextRun = Annotated[
    Union[CommonRun, CodeRun, LinkRun, ItalicRun, StrongRun],
    Field(discriminator="kind")
]


def link_run(url: str, text: Optional[str]) -> LinkRun:
    """Build a LinkRun, using the url as the visible value when text is empty."""
    return LinkRun(url=url, value=text or url)


# --- Content blocks ---

class ImageBlock(_Frozen):
    kind: Literal["image"] = "image"
    url: str


class HeaderBlock(_Frozen):
    kind: Literal["header"] = "header"
    level: Literal[2, 3, 4]
    text: str


class ParagraphBlock(_Frozen):
    kind: Literal["paragraph"] = "paragraph"
    runs: tuple[TextRun, ...] = ()


class CodeBlock(_Frozen):
    """A code listing; ``lang`` is the raw class attribute (e.g. "lang-rust"), or ""."""
    kind: Literal["code"] = "code"
    lang: str = ""
    content: str


class BlockquoteBlock(_Frozen):
    kind: Literal["blockquote"] = "blockquote"
    text: str


class TextBlock(_Frozen):
    """A bare inline run promoted to block level (stray text in a wrapping div, a plain list item)."""
    kind: Literal["text"] = "text"
    run: TextRun


class UnorderedListBlock(_Frozen):
    """
    <ul>. Items are ContentBlocks, but ListItemExtractor only ever produces
    TextBlock and ParagraphBlock items (never nested lists).
    """
    kind: Literal["unordered_list"] = "unordered_list"
    items: tuple["ContentBlock", ...] = ()


class OrderedListBlock(_Frozen):
    """<ol>. Same item constraint as UnorderedListBlock."""
    kind: Literal["ordered_list"] = "ordered_list"
    items: tuple["ContentBlock", ...] = ()


class LineBreakBlock(_Frozen):
    kind: Literal["line_break"] = "line_break"


ContentBlock = Annotated[
    Union[
        ImageBlock,
        HeaderBlock,
        ParagraphBlock,
        CodeBlock,
        BlockquoteBlock,
        TextBlock,
        UnorderedListBlock,
        OrderedListBlock,
        LineBreakBlock,
    ],
    Field(discriminator="kind")
]

UnorderedListBlock.model_rebuild()
OrderedListBlock.model_rebuild()

# Validates a JSON list (e.g. from run_transform.py output) back into blocks
ContentBlockList = TypeAdapter(list[ContentBlock])


# --- Transform outputs ---

class TransformResult(_Frozen):
    """Output of one transform call plus the diagnostics it emitted."""
    blocks: tuple[ContentBlock, ...] = ()
    diagnostics: tuple[Diagnostic, ...] = ()


# --- Content API contract ---

class ArticleResponse(BaseModel):
    """
    Article payload returned by the content API.

    The API names the fields titleHtml/textHtml; older endpoints and the
    test fixtures use title/text. Both spellings are accepted.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    title: str = Field(default="", alias="titleHtml")
    text: str = Field(alias="textHtml")


class ParsedArticle(_Frozen):
    """An article ready for rendering."""
    title: str
    blocks: tuple[ContentBlock, ...] = ()
