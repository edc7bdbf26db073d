"""
Shared article content with last-request-wins publication.

The rendering thread reads ArticleContentStore.snapshot(); ArticleLoader
transforms articles on worker threads and publishes the result with one
swap under the store lock. Every request bumps a generation counter, and a
result whose generation is no longer current is dropped on arrival, so a
slow response for an article the user already left never replaces newer
content.
"""

import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, Iterable, Optional

from .config import get_settings
from .exceptions import ArticleParserError
from .logger import get_module_logger
from .schemas import ContentBlock
from .transformer import ArticleTransformer

logger = get_module_logger("store")

# Network collaborator: article id → article body HTML
Fetcher = Callable[[str], str]


class ArticleContentStore:
    """Current article content, replaced atomically."""

    def __init__(self):
        self._lock = threading.Lock()
        self._generation = 0
        self._requested_id: Optional[str] = None
        self._article_id: Optional[str] = None
        self._blocks: tuple[ContentBlock, ...] = ()
        self._loading = False
        self._last_error: Optional[str] = None

    def begin(self, article_id: str) -> int:
        """Start a request for ``article_id``; results of older requests become stale."""
        with self._lock:
            self._generation += 1
            self._requested_id = article_id
            self._loading = True
            self._last_error = None
            return self._generation

    def publish(self, generation: int, blocks: Iterable[ContentBlock]) -> bool:
        """
        Swap in the blocks for ``generation``.

        Returns:
            False if a newer request (or clear()) superseded this one
        """
        snapshot = tuple(blocks)
        with self._lock:
            if generation != self._generation:
                logger.debug(f"Discarding stale content for generation {generation}")
                return False
            self._article_id = self._requested_id
            self._blocks = snapshot
            self._loading = False
            return True

    def fail(self, generation: int, error: str) -> bool:
        """Record a failed request. Stale failures are dropped like stale results."""
        with self._lock:
            if generation != self._generation:
                return False
            self._loading = False
            self._last_error = error
            return True

    def clear(self) -> None:
        """Drop the content (article view closed); in-flight requests become stale."""
        with self._lock:
            self._generation += 1
            self._requested_id = None
            self._article_id = None
            self._blocks = ()
            self._loading = False
            self._last_error = None

    def snapshot(self) -> tuple[ContentBlock, ...]:
        with self._lock:
            return self._blocks

    @property
    def article_id(self) -> Optional[str]:
        with self._lock:
            return self._article_id

    @property
    def is_loading(self) -> bool:
        with self._lock:
            return self._loading

    @property
    def last_error(self) -> Optional[str]:
        with self._lock:
            return self._last_error


class ArticleLoader:
    """
    Fire-and-forget article loading on a thread pool.

    The returned Future is for callers that want to wait (tests, scripts);
    the UI only polls the store.
    """

    def __init__(
        self,
        store: ArticleContentStore,
        transformer: Optional[ArticleTransformer] = None,
        max_workers: Optional[int] = None
    ):
        self.store = store
        self.transformer = transformer or ArticleTransformer()
        self.executor = ThreadPoolExecutor(
            max_workers=max_workers or get_settings().workers,
            thread_name_prefix="article-loader"
        )

    def load(self, article_id: str, fetch: Fetcher) -> Future:
        """Fetch and transform ``article_id`` in the background."""
        generation = self.store.begin(article_id)
        return self.executor.submit(self._run, generation, article_id, lambda: fetch(article_id))

    def load_html(self, article_id: str, raw_html: str) -> Future:
        """Transform an already fetched article body in the background."""
        generation = self.store.begin(article_id)
        return self.executor.submit(self._run, generation, article_id, lambda: raw_html)

    def _run(self, generation: int, article_id: str, get_html: Callable[[], str]) -> bool:
        try:
            raw_html = get_html()
        except Exception as e:
            logger.error(f"Failed to fetch article {article_id}: {e}")
            self.store.fail(generation, str(e))
            return False

        try:
            blocks = self.transformer.transform(raw_html)
        except ArticleParserError as e:
            logger.error(f"Failed to transform article {article_id}: {e.message}")
            self.store.fail(generation, e.message)
            return False
        except Exception as e:
            logger.exception(f"Unexpected error transforming article {article_id}")
            self.store.fail(generation, str(e))
            return False

        published = self.store.publish(generation, blocks)
        if published:
            logger.info(f"Article {article_id}: {len(blocks)} blocks")
        return published

    def shutdown(self, wait: bool = True) -> None:
        self.executor.shutdown(wait=wait)

    def __enter__(self) -> "ArticleLoader":
        return self

    def __exit__(self, *exc) -> None:
        self.shutdown()
