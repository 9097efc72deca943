"""
app/repositories package marker.
"""

from app.repositories.campaign_store import CampaignStore, SQLAlchemyCampaignStore

__all__ = [
    "CampaignStore",
    "SQLAlchemyCampaignStore",
]
