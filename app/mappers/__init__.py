"""
app/mappers package marker.
"""

from app.mappers.campaign_mapper import CampaignRowMapper
from app.mappers.header_mapper import (
    CANONICAL_FIELDS,
    DEFAULT_COLUMN_ALIASES,
    HEADER_SYNONYMS,
    HeaderMapper,
    normalize_header,
)

__all__ = [
    "CANONICAL_FIELDS",
    "DEFAULT_COLUMN_ALIASES",
    "HEADER_SYNONYMS",
    "CampaignRowMapper",
    "HeaderMapper",
    "normalize_header",
]
