"""
Tests for ARTICLE_PARSER_* settings.
"""

import logging

import pytest

from article_parser.config import get_settings
from article_parser.transformer import ArticleTransformer
from article_parser.exceptions import ConfigurationError
from article_parser.logger import setup_logger


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    for name in ("TREE_BUILDER", "LOG_LEVEL", "LOG_FILE", "WORKERS"):
        monkeypatch.delenv(f"ARTICLE_PARSER_{name}", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_defaults():
    settings = get_settings()
    assert settings.tree_builder == "html5lib"
    assert settings.log_level_number() == logging.INFO
    assert settings.log_file is None
    assert settings.workers == 2


def test_values_from_environment(monkeypatch):
    monkeypatch.setenv("ARTICLE_PARSER_TREE_BUILDER", "lxml")
    monkeypatch.setenv("ARTICLE_PARSER_LOG_LEVEL", "debug")
    monkeypatch.setenv("ARTICLE_PARSER_WORKERS", "4")

    settings = get_settings()
    assert settings.tree_builder == "lxml"
    assert settings.log_level_number() == logging.DEBUG
    assert settings.workers == 4


def test_unknown_tree_builder(monkeypatch):
    monkeypatch.setenv("ARTICLE_PARSER_TREE_BUILDER", "regex")
    with pytest.raises(ConfigurationError) as exc_info:
        get_settings()
    assert exc_info.value.setting == "ARTICLE_PARSER_TREE_BUILDER"


def test_workers_must_be_positive(monkeypatch):
    monkeypatch.setenv("ARTICLE_PARSER_WORKERS", "0")
    with pytest.raises(ConfigurationError):
        get_settings()


def test_unknown_log_level(monkeypatch):
    monkeypatch.setenv("ARTICLE_PARSER_LOG_LEVEL", "LOUD")
    with pytest.raises(ConfigurationError):
        get_settings().log_level_number()


def test_transformer_defaults_to_configured_builder(monkeypatch):
    monkeypatch.setenv("ARTICLE_PARSER_TREE_BUILDER", "html.parser")
    assert ArticleTransformer().builder == "html.parser"
    assert ArticleTransformer(builder="lxml").builder == "lxml"


def test_setup_logger_relevels_without_stacking_handlers():
    package_logger = setup_logger(level=logging.DEBUG)
    try:
        handlers = list(package_logger.handlers)
        assert setup_logger(level=logging.WARNING).handlers == handlers
        assert package_logger.level == logging.WARNING
        assert all(h.level == logging.WARNING for h in handlers)
    finally:
        setup_logger(level=logging.INFO)
