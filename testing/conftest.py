from datetime import datetime

import pytest

from articlefeed.generator import ArticleGenerator
from articlefeed.paging import ArticlePagingSource
from articlefeed.repository import ArticleRepository

EPOCH = datetime(2024, 3, 1, 12, 0, 0)


@pytest.fixture
def epoch():
    return EPOCH


@pytest.fixture
def generator():
    return ArticleGenerator(EPOCH)


@pytest.fixture
def source(generator):
    return ArticlePagingSource(generator)


@pytest.fixture
def repository():
    return ArticleRepository(EPOCH)
