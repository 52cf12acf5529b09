"""
Paged fetch contract for the synthetic article feed.

Pages are contiguous windows ``[start, start + page_size)`` of the virtual
dataset. Each page carries the key of the window before it (clamped to
``MIN_KEY``) and the key of the window after it (always present, the feed is
unbounded forward).
"""

import logging
from typing import Optional

from .generator import ArticleGenerator
from .models import MIN_KEY, AnchorState, Page

# Configure logging
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)


class InvalidArgumentError(ValueError):
    """Raised when a caller passes an argument no page can be built from."""


def ensure_valid_key(key: int) -> int:
    """Make sure a paging key is never less than ``MIN_KEY``."""
    return max(MIN_KEY, key)


class ArticlePagingSource:
    """Loads pages of articles and computes the restart key after invalidation."""

    def __init__(self, generator: ArticleGenerator):
        self.generator = generator

    def fetch_page(self, key: Optional[int], page_size: int) -> Page:
        """
        Load one page of articles.

        Args:
            key: First key of the window, or None for the very first load
            page_size: Number of articles to load

        Returns:
            Page with the articles and the previous/next continuation keys
        """
        if page_size <= 0:
            raise InvalidArgumentError(f"page_size must be positive, got {page_size}")

        # Start paging with MIN_KEY if this is the first load
        start = key if key is not None else MIN_KEY
        end = start + page_size
        logger.debug(f"Loading articles [{start}, {end})")

        records = [self.generator.generate(number) for number in range(start, end)]

        # Don't try to load items behind MIN_KEY
        if start == MIN_KEY:
            prev_key = None
        else:
            prev_key = ensure_valid_key(start - page_size)

        return Page(records=records, prev_key=prev_key, next_key=end)

    def compute_refresh_key(self, anchor: Optional[AnchorState]) -> Optional[int]:
        """
        Compute the key to restart from after the feed has been invalidated.

        The new window starts half a page before the anchored article so the
        reloaded page brackets what the caller was looking at.

        Args:
            anchor: Article key the caller last had in view and its page size

        Returns:
            Key for the first load after invalidation, or None to start over
        """
        if anchor is None:
            return None
        # Half a page, truncated toward zero
        half_page = abs(anchor.page_size) // 2
        if anchor.page_size < 0:
            half_page = -half_page
        return ensure_valid_key(anchor.anchor_key - half_page)
