"""
app/services package marker.
"""

from app.services.campaign_import_service import (
    CampaignImportService,
    get_campaign_import_service,
)
from app.services.period_filter import DateRange, Period, resolve_period

__all__ = [
    "CampaignImportService",
    "DateRange",
    "Period",
    "get_campaign_import_service",
    "resolve_period",
]
