from datetime import datetime
from typing import Optional

from .generator import ArticleGenerator
from .paging import ArticlePagingSource


class ArticleRepository:
    """Hands out paging sources that all read from the same article generator."""

    def __init__(self, epoch: Optional[datetime] = None):
        self.generator = ArticleGenerator(epoch)

    def article_paging_source(self) -> ArticlePagingSource:
        """Create a new paging source; a pager asks for one after every invalidation."""
        return ArticlePagingSource(self.generator)
