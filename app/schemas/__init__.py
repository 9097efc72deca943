"""
app/schemas package marker.
"""

from app.schemas.campaign import (
    CampaignCreateRequest,
    CampaignInsightsResponse,
    CampaignMetricsResponse,
    CampaignResponse,
    CampaignSummaryResponse,
    CampaignUpdateRequest,
)
from app.schemas.campaign_import import (
    ImportOutcomeResponse,
    ImportPreviewResponse,
    ImportResultResponse,
    ParseDiagnosticsResponse,
    RowValidationErrorResponse,
    UploadHistoryResponse,
)
from app.schemas.dashboard_settings import DashboardSettingsResponse, DashboardSettingsUpdateRequest

__all__ = [
    "CampaignCreateRequest",
    "CampaignInsightsResponse",
    "CampaignMetricsResponse",
    "CampaignResponse",
    "CampaignSummaryResponse",
    "CampaignUpdateRequest",
    "DashboardSettingsResponse",
    "DashboardSettingsUpdateRequest",
    "ImportOutcomeResponse",
    "ImportPreviewResponse",
    "ImportResultResponse",
    "ParseDiagnosticsResponse",
    "RowValidationErrorResponse",
    "UploadHistoryResponse",
]
