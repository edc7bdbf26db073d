"""
Inline run extraction for text-bearing containers (<p>, <li> content, <a>).

Each child of the container becomes at most one TextRun:

  text node           → CommonRun
  <a href>            → LinkRun (value: first child's text, else the url)
  <code>              → CodeRun      ┐
  <i>, <em>           → ItalicRun    ├ only when the element's first child is text
  <strong>            → StrongRun    ┘
  other tag with text → dropped, unsupported_inline_tag diagnostic
  anything else       → dropped silently (e.g. <b><i>x</i></b>)

Only the run at index 0 loses its leading whitespace; every later run keeps
its spacing so "Hello <code>x</code> world" reads correctly when the runs
are laid out side by side.
"""

from typing import Optional

from bs4.element import PageElement

from . import tree
from .diagnostics import Diagnostic, DiagnosticKind, DiagnosticSink, log_diagnostic
from .schemas import CodeRun, CommonRun, ItalicRun, StrongRun, TextRun, link_run

# Tag → run model for formatted inline elements
INLINE_RUNS = {
    "code": CodeRun,
    "i": ItalicRun,
    "em": ItalicRun,
    "strong": StrongRun,
}


def trim_first(index: int, text: str) -> str:
    """Strip leading whitespace from the first run only."""
    if index == 0:
        return text.lstrip()
    return text


class InlineRunExtractor:
    """Turns a container's children into an ordered list of TextRuns."""

    def __init__(self, sink: Optional[DiagnosticSink] = None):
        self.sink = sink or log_diagnostic

    def extract(self, container: PageElement) -> list[TextRun]:
        runs = []
        for index, child in enumerate(tree.children(container)):
            run = self._run_for(index, child)
            if run is not None:
                runs.append(run)
        return runs

    def _run_for(self, index: int, child: PageElement) -> Optional[TextRun]:
        text = tree.text_of(child)
        if text is not None:
            return CommonRun(text=trim_first(index, text))

        if not tree.is_element(child):
            # Comments and other non-content nodes
            return None

        name = tree.tag_name(child)
        inner = tree.first_child(child)

        if name == "a":
            return self._link(index, child, inner)

        inner_text = tree.text_of(inner)
        if inner_text is None:
            # Formatting nested in formatting (<b><i>x</i></b>) is not flattened
            return None

        run_model = INLINE_RUNS.get(name)
        if run_model is None:
            self.sink(Diagnostic(
                kind=DiagnosticKind.UNSUPPORTED_INLINE_TAG,
                message=f"Unknown tag inside paragraph: {name}",
                tag=name,
                markup=tree.serialize(child)
            ))
            return None
        return run_model(text=trim_first(index, inner_text))

    def _link(self, index: int, anchor: PageElement, inner: Optional[PageElement]) -> Optional[TextRun]:
        url = tree.attr(anchor, "href")
        if url is None:
            self.sink(Diagnostic(
                kind=DiagnosticKind.MISSING_ATTRIBUTE,
                message="Anchor without href inside paragraph",
                tag="a",
                markup=tree.serialize(anchor)
            ))
            return None

        inner_text = tree.text_of(inner)
        value = trim_first(index, inner_text) if inner_text is not None else None
        return link_run(url, value)


def extract_inline_runs(container: PageElement, sink: Optional[DiagnosticSink] = None) -> list[TextRun]:
    """Convenience function to extract the inline runs of one container."""
    return InlineRunExtractor(sink).extract(container)
