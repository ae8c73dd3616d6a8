"""Shared fixtures."""

from datetime import datetime, timezone
from typing import Dict, List, Union

import httpx
import pytest

from ggnews.config import IngestionConfig
from ggnews.ingestion import RSSFetcher
from ggnews.pipeline import IngestionCoordinator

from .fakes import InMemoryContentStore

FIXED_NOW = datetime(2024, 6, 2, 12, 0, tzinfo=timezone.utc)


class FeedServer:
    """Routes feed URLs to canned bodies, status codes or transport errors."""

    def __init__(self) -> None:
        self.routes: Dict[str, Union[bytes, int, Exception]] = {}
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get(str(request.url))
        if route is None:
            return httpx.Response(404, request=request)
        if isinstance(route, Exception):
            raise type(route)(str(route), request=request)
        if isinstance(route, int):
            return httpx.Response(route, request=request)
        return httpx.Response(
            200,
            content=route,
            headers={"Content-Type": "application/rss+xml"},
            request=request,
        )

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


@pytest.fixture
def feeds() -> FeedServer:
    return FeedServer()


@pytest.fixture
def fetcher(feeds: FeedServer) -> RSSFetcher:
    return RSSFetcher(transport=feeds.transport)


@pytest.fixture
def store() -> InMemoryContentStore:
    return InMemoryContentStore()


@pytest.fixture
def coordinator(store: InMemoryContentStore, fetcher: RSSFetcher) -> IngestionCoordinator:
    return IngestionCoordinator(
        store=store,
        fetcher=fetcher,
        config=IngestionConfig(),
        clock=lambda: FIXED_NOW,
    )
