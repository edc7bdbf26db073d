"""
Tree provider: BeautifulSoup-backed parsing of article fragments.

The classifier only ever reads the tree through the helpers below, so the
rest of the package does not depend on BeautifulSoup's API directly.

Design principle: NEVER FAIL on bad HTML. Sanitize what breaks parsers,
then let a lenient tree builder rebalance the rest.
"""

import re
from typing import Iterator, Optional

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PageElement, PreformattedString

from .config import TREE_BUILDERS
from .exceptions import FragmentParseError
from .logger import get_module_logger

logger = get_module_logger("tree")

# C0 control characters except tab, newline and carriage return
_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f]")


def sanitize_fragment(html: str) -> str:
    """
    String-level cleanup before parsing.

    NULL bytes and control characters make some builders drop or truncate
    text; line endings are normalized so code blocks come out identical
    regardless of the server's platform.
    """
    sanitized = _CONTROL_CHARS.sub("", html)
    return sanitized.replace("\r\n", "\n").replace("\r", "\n")


def _builder_chain(builder: Optional[str]) -> list[str]:
    if builder is None:
        return list(TREE_BUILDERS)
    if builder not in TREE_BUILDERS:
        raise ValueError(f"Unknown tree builder: {builder}")
    return [builder] + [b for b in TREE_BUILDERS if b != builder]


def parse_fragment(raw_html: str, builder: Optional[str] = None) -> Tag:
    """
    Parse an HTML fragment and return its root.

    The builders only parse whole documents, so the fragment is fed to them
    after an opening <body> tag. That puts every builder in body context:
    whitespace around the top-level element is kept on both sides, and
    head-only tags (<style>, <meta>, <script>) stay where they were written.

    Args:
        raw_html: Article body as returned by the content API
        builder: Preferred tree builder; the others are tried after it

    Returns:
        The <body> element, whose children are the fragment's top-level nodes
    """
    if isinstance(raw_html, bytes):
        markup = b"<body>" + raw_html
    else:
        markup = "<body>" + sanitize_fragment(raw_html)
    tried = []
    errors = {}

    # --- Builder fallback chain: html5lib → lxml → html.parser ---
    for name in _builder_chain(builder):
        tried.append(name)
        try:
            # Single-valued attributes: class="lang-rust hljs" stays one string
            soup = BeautifulSoup(markup, name, multi_valued_attributes=None)
        except Exception as e:
            logger.warning(f"{name} parsing failed: {e}")
            errors[name] = str(e)
            continue

        body = soup.body
        if body is None:
            # The builder dropped the <body> it was given; nothing to return
            logger.warning(f"{name} produced no <body> for the fragment")
            errors[name] = "no <body> in parsed tree"
            continue
        return body

    raise FragmentParseError(
        "No tree builder could parse the fragment",
        builders=tried,
        details=errors
    )


# --- Node access ---

def children(node: PageElement) -> list[PageElement]:
    """Ordered children; text and comment nodes included."""
    if isinstance(node, Tag):
        return list(node.children)
    return []


def first_child(node: PageElement) -> Optional[PageElement]:
    if isinstance(node, Tag) and node.contents:
        return node.contents[0]
    return None


def is_element(node: Optional[PageElement]) -> bool:
    return isinstance(node, Tag)


def text_of(node: Optional[PageElement]) -> Optional[str]:
    """
    String content of a text node, None for anything else.

    Comments, CDATA, doctypes and processing instructions subclass
    NavigableString in bs4 but are not text.
    """
    if isinstance(node, NavigableString) and not isinstance(node, PreformattedString):
        return str(node)
    return None


def tag_name(node: PageElement) -> Optional[str]:
    if isinstance(node, Tag):
        return node.name
    return None


def attr(node: PageElement, name: str) -> Optional[str]:
    if not isinstance(node, Tag):
        return None
    value = node.get(name)
    if isinstance(value, list):
        # Only reachable for trees parsed outside parse_fragment
        return " ".join(value)
    return value


def serialize(node: PageElement) -> str:
    return str(node)


def descendant_texts(node: PageElement) -> Iterator[str]:
    """All text nodes below ``node`` in document order."""
    if not isinstance(node, Tag):
        text = text_of(node)
        if text is not None:
            yield text
        return
    for descendant in node.descendants:
        text = text_of(descendant)
        if text is not None:
            yield text


def concatenated_trimmed_text(node: PageElement) -> str:
    """Every descendant text node, trimmed, joined with a single space."""
    return " ".join(text.strip() for text in descendant_texts(node))
