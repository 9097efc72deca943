"""
app/mappers/campaign_mapper.py

Converts validated raw rows into typed campaign records.
"""

from __future__ import annotations

from typing import Mapping

from app.domain.campaign import CampaignInput
from app.normalizers.locale_normalizer import is_blank, parse_date, parse_decimal, parse_integer
from app.validators.campaign_validator import normalize_status


class CampaignRowMapper:
    """
    Coerces raw row text into a CampaignInput.

    Callers must validate the row first; invalid text raises the normalizer's
    field-level errors here. Blank numeric cells become zero and a blank end
    date becomes None.
    """

    def to_campaign_input(self, raw_row: Mapping[str, str | None]) -> CampaignInput:
        raw_end_date = raw_row.get("end_date")
        return CampaignInput(
            name=str(raw_row.get("name") or "").strip(),
            status=normalize_status(raw_row.get("status")),
            start_date=parse_date(raw_row.get("start_date")),
            end_date=None if is_blank(raw_end_date) else parse_date(raw_end_date),
            spend=parse_decimal(raw_row.get("spend")),
            leads_generated=parse_integer(raw_row.get("leads_generated")),
            conversions=parse_integer(raw_row.get("conversions")),
            revenue=parse_decimal(raw_row.get("revenue")),
        )
