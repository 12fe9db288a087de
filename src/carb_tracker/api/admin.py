"""Admin API endpoints with simple token auth."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

from carb_tracker.api.models import MockDataRequest
from carb_tracker.services.mock_data import load_mock_data

if TYPE_CHECKING:
    from carb_tracker.containers import AppContainer

router = APIRouter(prefix="/admin", tags=["admin"])


def _get_admin_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.admin_token


async def require_admin(
    x_admin_token: str | None = Header(default=None),
    admin_token: str = Depends(_get_admin_token),
) -> None:
    """Ensure requests include a valid admin token."""
    if not x_admin_token or x_admin_token != admin_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.get("/health", dependencies=[Depends(require_admin)])
async def admin_health() -> dict[str, str]:
    """Admin health check endpoint."""
    return {"status": "ok"}


@router.post("/mock-data", dependencies=[Depends(require_admin)])
async def generate_mock_data(
    payload: MockDataRequest, request: Request
) -> dict[str, object]:
    """Fill the store with generated entries for demos."""
    container: AppContainer = request.app.state.container
    created = load_mock_data(
        container.entry_service,
        container.mock_data_generator,
        now=container.stats_service.now(),
        days=payload.days,
        scenario=payload.scenario,
        clear_existing=payload.clear_existing,
    )
    return {"created": created, "scenario": payload.scenario.value}


@router.delete("/entries", dependencies=[Depends(require_admin)])
async def clear_entries(request: Request) -> dict[str, int]:
    """Delete every stored entry."""
    container: AppContainer = request.app.state.container
    return {"deleted": container.entry_service.clear()}
