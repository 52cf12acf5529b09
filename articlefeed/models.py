from datetime import datetime
from typing import Optional, List

from pydantic import BaseModel, ConfigDict


# Paging keys never go below this value
MIN_KEY = 0


class Article(BaseModel):
    """A single synthetic article, derived entirely from its key."""
    model_config = ConfigDict(frozen=True)

    id: int
    title: str
    description: str
    created_at: datetime

    def __repr__(self) -> str:
        return f"<Article(id={self.id}, title='{self.title}', created_at='{self.created_at.isoformat()}')>"


class Page(BaseModel):
    """One contiguous window of articles plus the keys of its neighbours."""
    model_config = ConfigDict(frozen=True)

    records: List[Article]
    prev_key: Optional[int] = None
    next_key: int

    @property
    def first_key(self) -> Optional[int]:
        return self.records[0].id if self.records else None

    @property
    def last_key(self) -> Optional[int]:
        return self.records[-1].id if self.records else None


class AnchorState(BaseModel):
    """Position the caller last had in view, used to recover after invalidation."""
    model_config = ConfigDict(frozen=True)

    anchor_key: int
    page_size: int
