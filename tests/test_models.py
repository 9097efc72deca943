from __future__ import annotations

import unittest

from db.base import Base
from db.models import Campaign, DashboardSettings, UploadHistory


class TestModelMetadata(unittest.TestCase):
    def test_all_tables_registered(self) -> None:
        self.assertEqual(
            set(Base.metadata.tables),
            {"campaigns", "upload_history", "dashboard_settings"},
        )

    def test_campaign_invariants_are_check_constraints(self) -> None:
        names = {constraint.name for constraint in Campaign.__table__.constraints if constraint.name}
        for expected in (
            "ck_campaigns_status_allowed",
            "ck_campaigns_end_after_start",
            "ck_campaigns_spend_non_negative",
            "ck_campaigns_conversions_within_leads",
        ):
            self.assertIn(expected, names)

    def test_nullable_columns(self) -> None:
        self.assertTrue(Campaign.__table__.c.end_date.nullable)
        self.assertFalse(Campaign.__table__.c.start_date.nullable)
        self.assertTrue(UploadHistory.__table__.c.error_detail.nullable)
        self.assertTrue(DashboardSettings.__table__.c.cpl_alert.nullable)


if __name__ == "__main__":
    unittest.main()
