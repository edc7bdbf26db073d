#!/usr/bin/env python3
"""
CLI script to run the article transform.

Reads article bodies and prints the content blocks as JSON.

Usage:
    python run_transform.py article.html
    python run_transform.py article1.html article2.html -o blocks.json
    python run_transform.py response.json --payload
    python run_transform.py comment.html --text
"""

import argparse
import json
import logging
from pathlib import Path

# Load .env file automatically
from dotenv import load_dotenv
load_dotenv()

from article_parser.config import get_settings, TREE_BUILDERS
from article_parser.exceptions import ArticleParserError
from article_parser.logger import setup_logger
from article_parser.transformer import ArticleTransformer, extract_text_from_html


def transform_file(path: Path, transformer: ArticleTransformer, args) -> dict:
    raw = path.read_text(encoding="utf-8", errors="replace")

    if args.payload:
        article = transformer.transform_response(json.loads(raw))
        return {
            "file": path.name,
            "status": "success",
            "title": article.title,
            "blocks": [b.model_dump(mode="json") for b in article.blocks],
        }

    if args.text:
        return {
            "file": path.name,
            "status": "success",
            "text": extract_text_from_html(raw, builder=transformer.builder),
        }

    result = transformer.transform_with_diagnostics(raw)
    return {
        "file": path.name,
        "status": "success",
        "blocks": [b.model_dump(mode="json") for b in result.blocks],
        "diagnostics": [d.model_dump(mode="json") for d in result.diagnostics],
    }


def main():
    parser = argparse.ArgumentParser(description="Transform article HTML into content blocks")
    parser.add_argument("files", nargs="+", help="HTML fragments (or JSON payloads with --payload)")
    parser.add_argument("--output", "-o", help="Output JSON file")
    parser.add_argument("--payload", "-p", action="store_true",
                        help="Inputs are content API article responses (titleHtml/textHtml)")
    parser.add_argument("--text", "-t", action="store_true", help="Print plain text instead of blocks")
    parser.add_argument("--builder", "-b", choices=TREE_BUILDERS, help="Preferred tree builder")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose logging")
    args = parser.parse_args()

    settings = get_settings()
    level = logging.DEBUG if args.verbose else settings.log_level_number()
    setup_logger(level=level, log_file=settings.log_file)

    transformer = ArticleTransformer(builder=args.builder or settings.tree_builder)

    results = []
    for filepath in args.files:
        path = Path(filepath)
        try:
            results.append(transform_file(path, transformer, args))
        except (ArticleParserError, OSError, ValueError) as e:
            # ValueError covers malformed JSON payloads
            results.append({"file": path.name, "status": "error", "error": str(e)})

    # ensure_ascii=False keeps non-Latin article text readable
    output = json.dumps(results, indent=2, ensure_ascii=False)

    if args.output:
        Path(args.output).write_text(output, encoding="utf-8")
        print(f"Saved to: {args.output}")
    else:
        print(output)


if __name__ == "__main__":
    main()
