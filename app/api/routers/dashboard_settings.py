"""
app/api/routers/dashboard_settings.py

Dashboard settings endpoints.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status

from app.api.dependencies import get_campaign_store
from app.config import DashboardDefaults, get_dashboard_defaults
from app.domain.errors import StoreFailureError
from app.repositories.campaign_store import SQLAlchemyCampaignStore
from app.schemas.dashboard_settings import DashboardSettingsResponse, DashboardSettingsUpdateRequest

router = APIRouter(prefix="/settings", tags=["settings"])


def _to_response(settings: Any, defaults: DashboardDefaults) -> DashboardSettingsResponse:
    if settings is None:
        return DashboardSettingsResponse(cpl_alert=Decimal(str(defaults.cpl_alert)))
    cpl_alert = settings.cpl_alert
    if cpl_alert is None:
        cpl_alert = Decimal(str(defaults.cpl_alert))
    return DashboardSettingsResponse(
        monthly_goal=settings.monthly_goal,
        cpl_alert=cpl_alert,
        total_budget=settings.total_budget,
    )


def _store_unavailable(exc: StoreFailureError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail="Dashboard settings unavailable.",
    )


@router.get("", response_model=DashboardSettingsResponse)
async def get_dashboard_settings(
    store: SQLAlchemyCampaignStore = Depends(get_campaign_store),
    defaults: DashboardDefaults = Depends(get_dashboard_defaults),
) -> DashboardSettingsResponse:
    try:
        settings = await store.get_settings()
    except StoreFailureError as exc:
        raise _store_unavailable(exc) from exc
    return _to_response(settings, defaults)


@router.put("", response_model=DashboardSettingsResponse)
async def update_dashboard_settings(
    body: DashboardSettingsUpdateRequest,
    store: SQLAlchemyCampaignStore = Depends(get_campaign_store),
    defaults: DashboardDefaults = Depends(get_dashboard_defaults),
) -> DashboardSettingsResponse:
    """
    Save the fields present in the body; omitted fields keep their value.
    """

    try:
        settings = await store.update_settings(body.model_dump(exclude_unset=True))
    except StoreFailureError as exc:
        raise _store_unavailable(exc) from exc
    return _to_response(settings, defaults)
