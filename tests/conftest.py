"""
Pytest configuration and shared fixtures for SocialAI Insights tests.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

from datetime import datetime, timezone
from typing import Callable, Dict, Generator

import httpx
import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine

from socialai.connectors.platforms.client import PlatformClient
from socialai.models.metrics_models import (
    DemographicSegment,
    EngagementSample,
    PlatformMetric,
)
from socialai.repository import MetricsRepository


@pytest.fixture(scope="function")
def engine():
    """Fresh in-memory SQLite database for each test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture
def session(engine) -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session


@pytest.fixture
def session_factory(engine) -> Callable[[], Session]:
    return lambda: Session(engine)


@pytest.fixture
def repository(session: Session) -> MetricsRepository:
    return MetricsRepository(session)


# ── Platform API fakes ──

INSTAGRAM_BODY = {"followers_count": 15300, "media_count": 212, "id": "1789"}
YOUTUBE_BODY = {
    "items": [
        {
            "id": "UC123",
            "statistics": {
                "subscriberCount": "2300000",
                "videoCount": "40",
                "viewCount": "1000003",
            },
        }
    ]
}
SEARCH_BODY = {
    "totals": {"impressions": 48210, "clicks": 1200, "ctr": 0.25, "position": 7.84}
}


def platform_router(
    overrides: Dict[str, httpx.Response] | None = None,
    calls: list | None = None,
) -> Callable[[httpx.Request], httpx.Response]:
    """Mock transport handler serving the three platform endpoints.

    ``overrides`` maps a platform name to the response it should return.
    Every request is appended to ``calls`` when given.
    """
    overrides = overrides or {}

    def handler(request: httpx.Request) -> httpx.Response:
        if calls is not None:
            calls.append(request)
        if request.url.host == "graph.instagram.com":
            platform, body = "instagram", INSTAGRAM_BODY
        elif request.url.path.endswith("/channels"):
            platform, body = "youtube", YOUTUBE_BODY
        elif request.url.path.endswith("/searchAnalytics/query"):
            platform, body = "google", SEARCH_BODY
        else:
            return httpx.Response(404, json={"error": "unknown endpoint"})
        if platform in overrides:
            return overrides[platform]
        return httpx.Response(200, json=body)

    return handler


@pytest.fixture
def make_client() -> Callable[..., PlatformClient]:
    """Build a PlatformClient backed by a mock transport."""

    def _make(handler: Callable[[httpx.Request], httpx.Response]) -> PlatformClient:
        transport = httpx.MockTransport(handler)
        return PlatformClient(http_client=httpx.AsyncClient(transport=transport))

    return _make


@pytest.fixture
def seeded_session(session: Session) -> Session:
    """Store with metrics for two platforms, engagement and demographics."""
    session.add(
        PlatformMetric(
            platform="instagram",
            followers=15300,
            total_posts=212,
            engagement_rate=4.2,
            growth_rate=12,
        )
    )
    session.add(
        PlatformMetric(
            platform="youtube",
            followers=2300000,
            total_posts=40,
            avg_views=25000,
            growth_rate=3.5,
        )
    )
    for ts, platform, count in [
        (datetime(2024, 3, 9, 12, tzinfo=timezone.utc), "youtube", 900),
        (datetime(2024, 3, 7, 8, tzinfo=timezone.utc), "instagram", 420),
        (datetime(2024, 3, 8, 18, tzinfo=timezone.utc), "instagram", 610),
    ]:
        session.add(EngagementSample(timestamp=ts, platform=platform, engagement_count=count))
    for platform, group, pct in [
        ("instagram", "18-24", 35),
        ("instagram", "25-34", 40.5),
        ("instagram", "35-44", 15),
        ("instagram", "45+", 9.5),
        ("youtube", "18-24", 20),
        ("youtube", "25-34", 80),
    ]:
        session.add(DemographicSegment(platform=platform, age_group=group, percentage=pct))
    session.commit()
    return session


@pytest.fixture
def platform_api() -> Callable[..., Callable[[httpx.Request], httpx.Response]]:
    return platform_router
