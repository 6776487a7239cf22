"""SocialAI Insights — Dashboard State Controller.

Loads display state from the store, runs manual refreshes, and keeps the
demographic panel in step with the selected platform.
"""

import asyncio
from typing import Callable, Optional

from sqlmodel import Session

from socialai.config import settings
from socialai.connectors.platforms.client import PlatformClient
from socialai.dashboard.formatting import (
    build_demographics,
    build_engagement_series,
    build_metric_cards,
)
from socialai.database import new_session
from socialai.models.dashboard_models import DashboardState
from socialai.models.metrics_models import PLATFORMS
from socialai.models.update_models import CredentialConfig, UpdateReport
from socialai.repository import MetricsRepository
from socialai.updater import MetricsUpdater
from socialai.core.logging import get_logger

logger = get_logger("dashboard.controller")


class RefreshInProgressError(Exception):
    """Raised when a refresh is requested while another is running."""


class DashboardController:
    """Owns the current ``DashboardState`` snapshot."""

    def __init__(
        self,
        session_factory: Callable[[], Session] = new_session,
        platform_client: Optional[PlatformClient] = None,
        selected_platform: str | None = None,
    ):
        self.session_factory = session_factory
        self.platform_client = platform_client
        self._state = DashboardState(
            selected_platform=selected_platform or settings.default_platform
        )
        self._refresh_lock = asyncio.Lock()

    @property
    def state(self) -> DashboardState:
        return self._state

    @property
    def has_loaded(self) -> bool:
        return self._state.last_loaded_at is not None

    async def load_dashboard_data(self) -> DashboardState:
        """Re-read metrics, engagement and demographics from the store.

        Errors are logged and the previous data stays on screen.
        """
        self._state = self._state.begin_load()
        platform = self._state.selected_platform
        try:
            with self.session_factory() as session:
                repo = MetricsRepository(session)
                metrics = build_metric_cards(repo.list_platform_metrics())
                engagement = build_engagement_series(repo.list_engagement())
                demographics = build_demographics(repo.list_demographics(platform))
        except Exception as e:
            logger.error(f"Error fetching dashboard data: {e}")
            self._state = self._state.fail_load()
            return self._state

        self._state = self._state.finish_load(metrics, engagement, demographics)
        logger.info(
            f"Dashboard loaded: {len(engagement)} engagement points, "
            f"{len(demographics)} {platform} segments",
            extra={"platform": platform},
        )
        return self._state

    async def refresh(self, config: CredentialConfig | None = None) -> UpdateReport:
        """Pull fresh metrics from the platforms, then reload on full success."""
        if self._refresh_lock.locked():
            raise RefreshInProgressError("A refresh is already running")

        config = config or CredentialConfig.from_settings()
        async with self._refresh_lock:
            self._state = self._state.begin_update()
            try:
                with self.session_factory() as session:
                    updater = MetricsUpdater(MetricsRepository(session), self.platform_client)
                    report = await updater.run_update(config)

                if report.success:
                    await self.load_dashboard_data()
                else:
                    logger.warning(
                        f"Refresh incomplete; failed: {', '.join(report.failed_platforms)}"
                    )
                return report
            finally:
                self._state = self._state.finish_update()

    async def select_platform(self, platform: str) -> DashboardState:
        """Switch the demographic filter and reload."""
        if platform not in PLATFORMS:
            raise ValueError(f"Unknown platform: {platform}")
        self._state = self._state.select_platform(platform)
        return await self.load_dashboard_data()
