"""
app/api/routers/campaigns.py

Campaign CRUD and dashboard aggregate endpoints.
"""

from __future__ import annotations

import logging
import uuid
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from app.api.dependencies import get_campaign_store
from app.config import DashboardDefaults, get_dashboard_defaults
from app.domain.errors import StoreFailureError
from app.repositories.campaign_store import CAMPAIGN_UPDATABLE_FIELDS, SQLAlchemyCampaignStore
from app.schemas.campaign import (
    CampaignCreateRequest,
    CampaignInsightsResponse,
    CampaignResponse,
    CampaignSummaryResponse,
    CampaignUpdateRequest,
)
from app.services.period_filter import DEFAULT_PERIOD, DateRange, resolve_period
from kpi.campaign import build_insights, summarize

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/campaigns", tags=["campaigns"])


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def get_date_range(
    period: str = Query(default=DEFAULT_PERIOD, description="today, 7d, 30d, 90d, custom, or all"),
    start: date | None = Query(default=None, description="Custom period start (inclusive)"),
    end: date | None = Query(default=None, description="Custom period end (inclusive)"),
) -> DateRange:
    try:
        return resolve_period(period, start=start, end=end)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc


def _store_unavailable(exc: StoreFailureError) -> HTTPException:
    logger.error("Campaign store failure: %s", exc)
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail="Campaign store unavailable.",
    )


def _not_found(campaign_id: uuid.UUID) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Campaign {campaign_id} not found.",
    )


# ---------------------------------------------------------------------------
# Aggregates
# ---------------------------------------------------------------------------


@router.get("/summary", response_model=CampaignSummaryResponse)
async def get_campaign_summary(
    date_range: DateRange = Depends(get_date_range),
    store: SQLAlchemyCampaignStore = Depends(get_campaign_store),
) -> CampaignSummaryResponse:
    """
    Overview totals and ratios for the selected period.
    """

    try:
        campaigns = await store.list_campaigns(start=date_range.start, end=date_range.end)
    except StoreFailureError as exc:
        raise _store_unavailable(exc) from exc

    totals = summarize(campaigns)
    return CampaignSummaryResponse(
        period_start=date_range.start,
        period_end=date_range.end,
        campaign_count=totals.campaign_count,
        total_spend=totals.total_spend,
        total_leads=totals.total_leads,
        total_conversions=totals.total_conversions,
        total_revenue=totals.total_revenue,
        average_cpl=totals.average_cpl,
        total_roi=totals.total_roi,
        average_conversion_rate=totals.average_conversion_rate,
    )


@router.get("/insights", response_model=CampaignInsightsResponse)
async def get_campaign_insights(
    date_range: DateRange = Depends(get_date_range),
    store: SQLAlchemyCampaignStore = Depends(get_campaign_store),
    defaults: DashboardDefaults = Depends(get_dashboard_defaults),
) -> CampaignInsightsResponse:
    """
    Best campaign, CPL alerts, and spend trend for the selected period.

    The CPL alert threshold comes from saved settings, else the configured
    default.
    """

    try:
        campaigns = await store.list_campaigns(start=date_range.start, end=date_range.end)
        settings = await store.get_settings()
    except StoreFailureError as exc:
        raise _store_unavailable(exc) from exc

    cpl_alert = defaults.cpl_alert
    if settings is not None and settings.cpl_alert is not None:
        cpl_alert = float(settings.cpl_alert)

    # The trend compares older to newer spend, so feed oldest first.
    insights = build_insights(list(reversed(campaigns)), cpl_alert=cpl_alert)
    return CampaignInsightsResponse(
        period_start=date_range.start,
        period_end=date_range.end,
        best_campaign_name=insights.best_campaign_name,
        best_campaign_cpl=insights.best_campaign_cpl,
        high_cpl_count=insights.high_cpl_count,
        cpl_alert=insights.cpl_alert,
        spend_trend=insights.spend_trend,
    )


# ---------------------------------------------------------------------------
# CRUD
# ---------------------------------------------------------------------------


@router.get("", response_model=list[CampaignResponse])
async def list_campaigns(
    date_range: DateRange = Depends(get_date_range),
    store: SQLAlchemyCampaignStore = Depends(get_campaign_store),
) -> list[CampaignResponse]:
    """
    Campaigns whose start date falls in the selected period, newest first.
    """

    try:
        campaigns = await store.list_campaigns(start=date_range.start, end=date_range.end)
    except StoreFailureError as exc:
        raise _store_unavailable(exc) from exc
    return [CampaignResponse.from_model(campaign) for campaign in campaigns]


@router.post(
    "",
    response_model=CampaignResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_campaign(
    body: CampaignCreateRequest,
    store: SQLAlchemyCampaignStore = Depends(get_campaign_store),
) -> CampaignResponse:
    """
    Create one campaign by hand.
    """

    try:
        campaign = await store.create_campaign(body.to_campaign_input())
    except StoreFailureError as exc:
        raise _store_unavailable(exc) from exc
    logger.info("Campaign created id=%s name=%r", campaign.id, campaign.name)
    return CampaignResponse.from_model(campaign)


@router.get("/{campaign_id}", response_model=CampaignResponse)
async def get_campaign(
    campaign_id: uuid.UUID,
    store: SQLAlchemyCampaignStore = Depends(get_campaign_store),
) -> CampaignResponse:
    try:
        campaign = await store.get_campaign(campaign_id)
    except StoreFailureError as exc:
        raise _store_unavailable(exc) from exc
    if campaign is None:
        raise _not_found(campaign_id)
    return CampaignResponse.from_model(campaign)


@router.patch("/{campaign_id}", response_model=CampaignResponse)
async def update_campaign(
    campaign_id: uuid.UUID,
    body: CampaignUpdateRequest,
    store: SQLAlchemyCampaignStore = Depends(get_campaign_store),
) -> CampaignResponse:
    """
    Apply a partial update.

    The merged record is re-validated as a whole, so a change that breaks
    a cross-field rule (end before start, conversions over leads) is
    rejected with HTTP 422.
    """

    try:
        campaign = await store.get_campaign(campaign_id)
    except StoreFailureError as exc:
        raise _store_unavailable(exc) from exc
    if campaign is None:
        raise _not_found(campaign_id)

    merged = {field: getattr(campaign, field) for field in CAMPAIGN_UPDATABLE_FIELDS}
    merged.update(body.changes())
    try:
        validated = CampaignCreateRequest.model_validate(merged)
    except ValidationError as exc:
        raise RequestValidationError(exc.errors(include_url=False, include_context=False)) from exc

    try:
        updated = await store.update_campaign(campaign_id, validated.model_dump())
    except StoreFailureError as exc:
        raise _store_unavailable(exc) from exc
    if updated is None:
        raise _not_found(campaign_id)
    return CampaignResponse.from_model(updated)


@router.delete("/{campaign_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_campaign(
    campaign_id: uuid.UUID,
    store: SQLAlchemyCampaignStore = Depends(get_campaign_store),
) -> Response:
    try:
        deleted = await store.delete_campaign(campaign_id)
    except StoreFailureError as exc:
        raise _store_unavailable(exc) from exc
    if not deleted:
        raise _not_found(campaign_id)
    logger.info("Campaign deleted id=%s", campaign_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
