"""
app/parsers package marker.
"""

from app.parsers.csv_parser import CampaignCSVParser, decode_content, detect_delimiter

__all__ = [
    "CampaignCSVParser",
    "decode_content",
    "detect_delimiter",
]
