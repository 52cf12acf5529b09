from datetime import datetime, timedelta
from typing import Optional

from .models import Article


class ArticleGenerator:
    """Deterministic source of articles keyed by integer offset.

    Article ``n`` is created ``n`` days before the generator's epoch, so ids
    grow into the past. Keys reaching past the range ``datetime`` can
    represent get the earliest (or latest) representable time instead.
    """

    def __init__(self, epoch: Optional[datetime] = None):
        """Capture the epoch once; it stays fixed for this instance."""
        self._epoch = epoch or datetime.now()
        self._earliest = datetime.min.replace(tzinfo=self._epoch.tzinfo)
        self._latest = datetime.max.replace(tzinfo=self._epoch.tzinfo)
        self._days_to_earliest = (self._epoch - self._earliest).days
        self._days_to_latest = (self._latest - self._epoch).days

    @property
    def epoch(self) -> datetime:
        return self._epoch

    def created_at(self, key: int) -> datetime:
        """Creation time of article ``key``, clamped to the representable range."""
        if key > self._days_to_earliest:
            return self._earliest
        if -key > self._days_to_latest:
            return self._latest
        return self._epoch - timedelta(days=key)

    def generate(self, key: int) -> Article:
        """Build the article stored at ``key``."""
        return Article(
            id=key,
            title=f"Article {key}",
            description=f"This describes article {key}",
            created_at=self.created_at(key),
        )
