"""SocialAI Insights — Dashboard API Routes."""

from typing import List

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlmodel import Session

from socialai.dashboard.controller import DashboardController, RefreshInProgressError
from socialai.database import get_session
from socialai.models.dashboard_models import DashboardState
from socialai.models.metrics_models import PlatformMetric
from socialai.models.update_models import PlatformUpdateResult
from socialai.repository import MetricsRepository
from socialai.core.logging import get_logger

logger = get_logger("api.dashboard")

router = APIRouter(tags=["Dashboard"])

_controller: DashboardController | None = None


def get_controller() -> DashboardController:
    """Dependency — the process-wide dashboard controller."""
    global _controller
    if _controller is None:
        _controller = DashboardController()
    return _controller


# ── Request / Response Models ──


class SelectPlatformRequest(BaseModel):
    """Request body for PUT /dashboard/platform."""

    platform: str


class RefreshResponse(BaseModel):
    success: bool
    results: List[PlatformUpdateResult]
    state: DashboardState


# ── Endpoints ──


@router.get("/dashboard", response_model=DashboardState)
async def get_dashboard(controller: DashboardController = Depends(get_controller)):
    """Current dashboard snapshot; loads from the store on first call."""
    if not controller.has_loaded:
        return await controller.load_dashboard_data()
    return controller.state


@router.post("/dashboard/reload", response_model=DashboardState)
async def reload_dashboard(controller: DashboardController = Depends(get_controller)):
    """Re-read everything from the store."""
    return await controller.load_dashboard_data()


@router.post("/dashboard/refresh", response_model=RefreshResponse)
async def refresh_dashboard(controller: DashboardController = Depends(get_controller)):
    """Fetch fresh metrics from every configured platform.

    ``success`` is true only if every configured platform updated; the
    per-platform ``results`` show which ones failed.
    """
    try:
        report = await controller.refresh()
    except RefreshInProgressError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except Exception as e:
        logger.error(f"Error updating accounts: {e}")
        raise HTTPException(status_code=502, detail=f"Refresh failed: {e}")

    return RefreshResponse(
        success=report.success, results=report.results, state=controller.state
    )


@router.put("/dashboard/platform", response_model=DashboardState)
async def select_platform(
    request: SelectPlatformRequest,
    controller: DashboardController = Depends(get_controller),
):
    """Select the platform whose audience demographics are shown."""
    try:
        return await controller.select_platform(request.platform)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.get("/metrics/platforms", tags=["Metrics"])
async def list_platform_metrics(session: Session = Depends(get_session)):
    """Raw stored metric rows, one per platform."""
    rows: List[PlatformMetric] = MetricsRepository(session).list_platform_metrics()
    return {
        "status": "success",
        "count": len(rows),
        "metrics": [row.model_dump(mode="json") for row in rows],
    }
