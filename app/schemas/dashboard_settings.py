"""
app/schemas/dashboard_settings.py

Schemas for dashboard settings endpoints.
"""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, Field


class DashboardSettingsUpdateRequest(BaseModel):
    monthly_goal: Decimal | None = Field(default=None, ge=0, max_digits=14, decimal_places=2)
    cpl_alert: Decimal | None = Field(default=None, ge=0, max_digits=14, decimal_places=2)
    total_budget: Decimal | None = Field(default=None, ge=0, max_digits=14, decimal_places=2)


class DashboardSettingsResponse(BaseModel):
    """
    Saved settings; ``cpl_alert`` falls back to the configured default.
    """

    monthly_goal: Decimal | None = None
    cpl_alert: Decimal
    total_budget: Decimal | None = None
