"""
Diagnostics emitted while transforming an article.

The classifier never raises on unexpected content. Each piece it has to drop
is reported to a DiagnosticSink, a plain callable injected by the caller:

  log_diagnostic      → default; one WARNING line per diagnostic
  DiagnosticCollector → records diagnostics (tests, TransformResult), can forward
"""

from enum import Enum
from typing import Callable, Optional

from pydantic import BaseModel, ConfigDict

from .logger import get_module_logger

logger = get_module_logger("diagnostics")


class DiagnosticKind(str, Enum):
    """What went wrong. All kinds are non-fatal."""
    UNSUPPORTED_TAG = "unsupported_tag"                  # block-level tag without a handler
    UNSUPPORTED_INLINE_TAG = "unsupported_inline_tag"    # inline tag without a run kind
    MISSING_ATTRIBUTE = "missing_required_attribute"     # <a> without href, <img> without src
    UNEXPECTED_ROOT_SHAPE = "unexpected_root_shape"      # fragment root has 0 or >1 children
    UNEXPECTED_CHILD = "unexpected_child"                # wrapper whose first child is not an element


class Diagnostic(BaseModel):
    """One dropped or degraded piece of content."""
    model_config = ConfigDict(frozen=True)

    kind: DiagnosticKind
    message: str
    tag: Optional[str] = None
    markup: str = ""   # serialized subtree, for operability


DiagnosticSink = Callable[[Diagnostic], None]


def log_diagnostic(diagnostic: Diagnostic) -> None:
    """Default sink: log the diagnostic as a warning."""
    if diagnostic.markup:
        logger.warning(f"[{diagnostic.kind.value}] {diagnostic.message}: {diagnostic.markup}")
    else:
        logger.warning(f"[{diagnostic.kind.value}] {diagnostic.message}")


class DiagnosticCollector:
    """Sink that keeps every diagnostic in emission order."""

    def __init__(self, forward: Optional[DiagnosticSink] = None):
        self.diagnostics: list[Diagnostic] = []
        self.forward = forward

    def __call__(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)
        if self.forward is not None:
            self.forward(diagnostic)

    def kinds(self) -> list[DiagnosticKind]:
        return [d.kind for d in self.diagnostics]

    def __len__(self) -> int:
        return len(self.diagnostics)
