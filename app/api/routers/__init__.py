"""
app/api/routers package marker.
"""

from app.api.routers.campaign_import import router as campaign_import_router
from app.api.routers.campaigns import router as campaigns_router
from app.api.routers.dashboard_settings import router as dashboard_settings_router
from app.api.routers.upload_history import router as upload_history_router

__all__ = [
    "campaign_import_router",
    "campaigns_router",
    "dashboard_settings_router",
    "upload_history_router",
]
