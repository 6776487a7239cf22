"""SocialAI Insights — Metrics Updater.

Runs the platform fetchers whose credentials are present, concurrently,
and reports one result per platform.
"""

import asyncio
from typing import Awaitable, Callable, List, Optional, Tuple

from socialai.connectors.platforms.client import PlatformClient
from socialai.connectors.platforms.fetchers import (
    fetch_instagram_metrics,
    fetch_search_console_metrics,
    fetch_youtube_metrics,
)
from socialai.models.update_models import (
    CredentialConfig,
    PlatformUpdateResult,
    UpdateReport,
)
from socialai.repository import MetricsRepository
from socialai.core.logging import get_logger

logger = get_logger("updater")

FetchJob = Tuple[str, Callable[[], Awaitable[object]]]


class MetricsUpdater:
    """Fetch-and-upsert orchestration for a single refresh."""

    def __init__(self, repository: MetricsRepository, client: Optional[PlatformClient] = None):
        self.repository = repository
        self.client = client

    def select_jobs(self, config: CredentialConfig, client: PlatformClient) -> List[FetchJob]:
        """Build the fetch jobs whose required credentials are all present."""
        jobs: List[FetchJob] = []

        if config.instagram_token:
            token = config.instagram_token
            jobs.append(
                ("instagram", lambda: fetch_instagram_metrics(client, self.repository, token))
            )

        if config.youtube_key and config.youtube_channel_id:
            key, channel = config.youtube_key, config.youtube_channel_id
            jobs.append(
                ("youtube", lambda: fetch_youtube_metrics(client, self.repository, key, channel))
            )

        if config.google_token:
            google = config.google_token
            jobs.append(
                ("google", lambda: fetch_search_console_metrics(client, self.repository, google))
            )

        return jobs

    async def run_update(self, config: CredentialConfig) -> UpdateReport:
        """Run every selected fetcher to completion and collect outcomes.

        One platform failing never cancels the others, and rows already
        written by the successful ones stay written.
        """
        client = self.client or PlatformClient()
        try:
            jobs = self.select_jobs(config, client)
            if not jobs:
                logger.warning("No platform credentials configured — nothing to update")
                return UpdateReport()

            logger.info(f"Updating platforms: {', '.join(name for name, _ in jobs)}")
            outcomes = await asyncio.gather(
                *(job() for _, job in jobs), return_exceptions=True
            )
        finally:
            if self.client is None:
                await client.close()

        results: List[PlatformUpdateResult] = []
        for (platform, _), outcome in zip(jobs, outcomes):
            if isinstance(outcome, BaseException):
                logger.error(
                    f"❌ {platform} update failed: {outcome}", extra={"platform": platform}
                )
                results.append(
                    PlatformUpdateResult(platform=platform, success=False, error=str(outcome))
                )
            else:
                results.append(PlatformUpdateResult(platform=platform, success=True))

        report = UpdateReport(results=results)
        if report.success:
            logger.info(f"✅ Updated {len(results)} platform(s)")
        return report

    async def update_social_metrics(self, config: CredentialConfig) -> bool:
        """True only if every selected platform updated successfully."""
        report = await self.run_update(config)
        return report.success
