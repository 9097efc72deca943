"""
app/validators package marker.
"""

from app.validators.campaign_validator import STATUS_ALIASES, CampaignRowValidator, normalize_status

__all__ = [
    "CampaignRowValidator",
    "STATUS_ALIASES",
    "normalize_status",
]
