"""
app/schemas/campaign.py

Request and response schemas for campaign endpoints.
"""

from __future__ import annotations

import uuid
from datetime import date, datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from app.domain.campaign import (
    ALLOWED_CAMPAIGN_STATUSES,
    AMOUNT_DECIMAL_PLACES,
    AMOUNT_MAX_DIGITS,
    COUNT_MAX,
    NAME_MAX_LENGTH,
    CampaignInput,
)
from app.validators.campaign_validator import normalize_status
from kpi.campaign import derive_metrics


class CampaignCreateRequest(BaseModel):
    """
    Manually entered campaign; enforces the same invariants as file imports.
    """

    name: str = Field(..., min_length=1, max_length=NAME_MAX_LENGTH)
    status: str
    start_date: date
    end_date: date | None = None
    spend: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        max_digits=AMOUNT_MAX_DIGITS,
        decimal_places=AMOUNT_DECIMAL_PLACES,
    )
    leads_generated: int = Field(default=0, ge=0, le=COUNT_MAX)
    conversions: int = Field(default=0, ge=0, le=COUNT_MAX)
    revenue: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        max_digits=AMOUNT_MAX_DIGITS,
        decimal_places=AMOUNT_DECIMAL_PLACES,
    )

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("name required")
        return value

    @field_validator("status")
    @classmethod
    def _normalize_status(cls, value: str) -> str:
        status = normalize_status(value)
        if status not in ALLOWED_CAMPAIGN_STATUSES:
            raise ValueError("invalid status")
        return status

    @model_validator(mode="after")
    def _check_cross_fields(self) -> "CampaignCreateRequest":
        if self.end_date is not None and self.end_date < self.start_date:
            raise ValueError("end date must be after start date")
        if self.conversions > self.leads_generated:
            raise ValueError("conversions exceeds leads")
        return self

    def to_campaign_input(self) -> CampaignInput:
        return CampaignInput(**self.model_dump())


class CampaignUpdateRequest(BaseModel):
    """
    Partial campaign update; cross-field checks run on the merged record.
    """

    name: str | None = Field(default=None, min_length=1, max_length=NAME_MAX_LENGTH)
    status: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    spend: Decimal | None = Field(
        default=None,
        ge=0,
        max_digits=AMOUNT_MAX_DIGITS,
        decimal_places=AMOUNT_DECIMAL_PLACES,
    )
    leads_generated: int | None = Field(default=None, ge=0, le=COUNT_MAX)
    conversions: int | None = Field(default=None, ge=0, le=COUNT_MAX)
    revenue: Decimal | None = Field(
        default=None,
        ge=0,
        max_digits=AMOUNT_MAX_DIGITS,
        decimal_places=AMOUNT_DECIMAL_PLACES,
    )

    def changes(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class CampaignMetricsResponse(BaseModel):
    cpl: float
    roi: float
    conversion_rate: float


class CampaignResponse(BaseModel):
    id: uuid.UUID
    name: str
    status: str
    start_date: date
    end_date: date | None
    spend: Decimal
    leads_generated: int
    conversions: int
    revenue: Decimal
    created_at: datetime
    updated_at: datetime
    metrics: CampaignMetricsResponse

    model_config = {"from_attributes": True}

    @classmethod
    def from_model(cls, campaign: Any) -> "CampaignResponse":
        metrics = derive_metrics(campaign)
        return cls(
            id=campaign.id,
            name=campaign.name,
            status=campaign.status,
            start_date=campaign.start_date,
            end_date=campaign.end_date,
            spend=campaign.spend,
            leads_generated=campaign.leads_generated,
            conversions=campaign.conversions,
            revenue=campaign.revenue,
            created_at=campaign.created_at,
            updated_at=campaign.updated_at,
            metrics=CampaignMetricsResponse(
                cpl=metrics.cpl,
                roi=metrics.roi,
                conversion_rate=metrics.conversion_rate,
            ),
        )


class CampaignSummaryResponse(BaseModel):
    period_start: date | None
    period_end: date | None
    campaign_count: int
    total_spend: float
    total_leads: int
    total_conversions: int
    total_revenue: float
    average_cpl: float
    total_roi: float
    average_conversion_rate: float


class CampaignInsightsResponse(BaseModel):
    period_start: date | None
    period_end: date | None
    best_campaign_name: str | None
    best_campaign_cpl: float | None
    high_cpl_count: int
    cpl_alert: float
    spend_trend: float
