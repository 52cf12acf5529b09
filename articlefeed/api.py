import logging
from typing import Optional

from fastapi import FastAPI, HTTPException, Query
from pydantic import BaseModel

from . import __version__
from .config import Config
from .models import MIN_KEY, AnchorState, Article, Page
from .repository import ArticleRepository

# Configure logging
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)


# Pydantic models for API
class RefreshKeyRequest(BaseModel):
    anchor: Optional[AnchorState] = None


class RefreshKeyResponse(BaseModel):
    refresh_key: Optional[int] = None


def create_api(config: Config, repository: Optional[ArticleRepository] = None) -> FastAPI:
    """Create FastAPI application."""
    app = FastAPI(
        title="articlefeed API",
        description="Paged access to an unbounded synthetic article feed",
        version=__version__
    )

    # One repository per app keeps article timestamps stable across requests
    repository = repository or ArticleRepository(config.epoch)

    # Query defaults are not checked against their own bounds
    default_page_size = min(max(config.page_size, 1), config.max_page_size)
    if default_page_size != config.page_size:
        logger.warning(f"Configured page size {config.page_size} is outside 1..{config.max_page_size}, using {default_page_size}")

    # List a page of articles
    @app.get("/api/v1/articles", response_model=Page, tags=["Articles"])
    def list_articles(
        key: Optional[int] = Query(None, ge=MIN_KEY),
        page_size: int = Query(default_page_size, ge=1, le=config.max_page_size)
    ):
        """
        Load one page of articles.

        - **key**: First key of the page; omit for the first page
        - **page_size**: Number of articles to return
        """
        source = repository.article_paging_source()
        return source.fetch_page(key, page_size)

    # Get article by ID
    @app.get("/api/v1/articles/{article_id}", response_model=Article, tags=["Articles"])
    def get_article(article_id: int):
        """
        Get article by ID.

        - **article_id**: ID of the article
        """
        if article_id < MIN_KEY:
            raise HTTPException(status_code=404, detail="Article not found")
        return repository.generator.generate(article_id)

    # Compute the restart key after invalidation
    @app.post("/api/v1/refresh-key", response_model=RefreshKeyResponse, tags=["Paging"])
    def refresh_key(request: RefreshKeyRequest):
        """
        Compute the key to reload from after the client's pages went stale.

        Send `{"anchor": null}` to start over from the first page.
        """
        source = repository.article_paging_source()
        key = source.compute_refresh_key(request.anchor)
        logger.info(f"Refresh key for anchor {request.anchor}: {key}")
        return {"refresh_key": key}

    return app
