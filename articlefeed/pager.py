"""
In-process driver for the article paging source.

The pager keeps the pages loaded so far, extends them in either direction
using the continuation keys each page carries, and recovers after
invalidation by restarting from a refresh key computed around the article the
caller was last looking at.
"""

import enum
import logging
from typing import Callable, List, Optional

from .models import AnchorState, Article, Page
from .paging import ArticlePagingSource, InvalidArgumentError

# Configure logging
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

# Number of articles requested per page
ITEMS_PER_PAGE = 50


class PagerState(enum.Enum):
    EMPTY = "empty"
    LOADING = "loading"
    LOADED = "loaded"
    INVALIDATED = "invalidated"


class Pager:
    """Holds loaded pages and drives an ArticlePagingSource."""

    def __init__(self,
                 source_factory: Callable[[], ArticlePagingSource],
                 page_size: int = ITEMS_PER_PAGE,
                 initial_key: Optional[int] = None,
                 max_pages: Optional[int] = None):
        """
        Initialize the pager.

        Args:
            source_factory: Builds a fresh paging source; called again after every invalidation
            page_size: Number of articles to load per page
            initial_key: Key of the first load, None to start at the beginning
            max_pages: Maximum number of pages kept in memory, None to keep all
        """
        if page_size <= 0:
            raise InvalidArgumentError(f"page_size must be positive, got {page_size}")
        if max_pages is not None and max_pages < 1:
            raise InvalidArgumentError(f"max_pages must be at least 1, got {max_pages}")

        self.source_factory = source_factory
        self.page_size = page_size
        self.max_pages = max_pages
        self.source = source_factory()
        self.pages: List[Page] = []
        self.state = PagerState.EMPTY
        self._refresh_key = initial_key

    @property
    def items(self) -> List[Article]:
        """All retained articles in ascending key order."""
        return [article for page in self.pages for article in page.records]

    def _load(self, key: Optional[int]) -> Page:
        self.state = PagerState.LOADING
        page = self.source.fetch_page(key, self.page_size)
        self.state = PagerState.LOADED
        return page

    def refresh(self) -> Page:
        """Drop every retained page and load the first one again."""
        page = self._load(self._refresh_key)
        self.pages = [page]
        logger.debug(f"Refreshed from key {self._refresh_key}, next key {page.next_key}")
        return page

    def append(self) -> Page:
        """Load the page after the last retained one."""
        if not self.pages:
            return self.refresh()

        page = self._load(self.pages[-1].next_key)
        self.pages.append(page)
        if self.max_pages is not None and len(self.pages) > self.max_pages:
            self.pages = self.pages[-self.max_pages:]
        return page

    def prepend(self) -> Optional[Page]:
        """Load the page before the first retained one, or None at the start of the feed."""
        if not self.pages:
            return self.refresh()

        prev_key = self.pages[0].prev_key
        if prev_key is None:
            return None

        page = self._load(prev_key)
        self.pages.insert(0, page)
        if self.max_pages is not None and len(self.pages) > self.max_pages:
            self.pages = self.pages[:self.max_pages]
        return page

    def closest_item_to_position(self, position: int) -> Optional[Article]:
        """Return the retained article at ``position``, clamped to the retained range."""
        items = self.items
        if not items:
            return None
        position = min(max(position, 0), len(items) - 1)
        return items[position]

    def invalidate(self, anchor_position: Optional[int] = None) -> Optional[int]:
        """
        Mark every retained page stale and prepare the recovery load.

        Args:
            anchor_position: Index into ``items`` the caller last had in view

        Returns:
            Key the next refresh will start from
        """
        anchor = None
        if anchor_position is not None:
            article = self.closest_item_to_position(anchor_position)
            if article is not None:
                anchor = AnchorState(anchor_key=article.id, page_size=self.page_size)

        self._refresh_key = self.source.compute_refresh_key(anchor)
        self.source = self.source_factory()
        self.pages = []
        self.state = PagerState.INVALIDATED
        logger.info(f"Invalidated pager, next refresh starts at key {self._refresh_key}")
        return self._refresh_key
