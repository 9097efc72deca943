"""
Model package exports.

Import all SQLAlchemy models here so metadata registration and Alembic
autogeneration work without extra imports.
"""

from db.models.campaign import Campaign
from db.models.dashboard_settings import DashboardSettings
from db.models.upload_history import UploadHistory

__all__ = [
    "Campaign",
    "DashboardSettings",
    "UploadHistory",
]
