"""
Custom exceptions for the article parser.

Error philosophy:
  - Content-shape problems (unknown tags, missing attributes, odd root shape)
    are NOT exceptions. They become Diagnostic records and the offending piece
    is omitted; see diagnostics.py.
  - FragmentParseError → FAIL HARD for one call: no tree builder could parse the input.
  - PayloadError       → FAIL HARD: the content API payload has no article body.
  - ConfigurationError → FAIL HARD at startup: an environment setting is invalid.
"""

from typing import Optional


class ArticleParserError(Exception):
    """Base exception for all article parser errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class FragmentParseError(ArticleParserError):
    """
    Raised when every tree builder in the fallback chain failed.

    html.parser ships with Python and accepts nearly anything, so in practice
    this only surfaces for input that is not markup at all.
    """

    def __init__(
        self,
        message: str,
        builders: Optional[list[str]] = None,
        details: Optional[dict] = None
    ):
        super().__init__(message, details)
        self.builders = builders or []  # builders that were tried, in order


class PayloadError(ArticleParserError):
    """Raised when an article payload from the content API cannot be validated."""
    pass


class ConfigurationError(ArticleParserError):
    """Raised when an ARTICLE_PARSER_* environment setting is invalid."""

    def __init__(self, message: str, setting: str, details: Optional[dict] = None):
        super().__init__(message, details)
        self.setting = setting
