"""
tests/test_campaign_api.py

HTTP tests for the campaign endpoints.

The app is assembled from the routers with the store and settings
dependencies overridden, so no database or environment is needed.
"""

from __future__ import annotations

import unittest
from decimal import Decimal

from fastapi import FastAPI
from fastapi.testclient import TestClient

from app.api.dependencies import get_campaign_store
from app.api.routers import (
    campaign_import_router,
    campaigns_router,
    dashboard_settings_router,
    upload_history_router,
)
from app.config import (
    CampaignImportSettings,
    DashboardDefaults,
    get_campaign_import_settings,
    get_dashboard_defaults,
)
from app.services.campaign_import_service import CampaignImportService, get_campaign_import_service
from tests.fakes import FakeCampaignStore

VALID_CSV = (
    "campanha,status,data_inicio,data_fim,gasto,leads,conversoes,receita\n"
    "Alpha,active,2026-01-10,2026-01-31,\"1.000,00\",50,5,\"3.000,00\"\n"
    "Beta,paused,2026-02-01,,400,10,2,200\n"
    "Gamma,completed,2026-03-01,2026-03-30,300,30,3,900\n"
).encode("utf-8")

INVALID_CSV = (
    "campanha,status,data_inicio,data_fim,gasto,leads,conversoes,receita\n"
    "Alpha,,2026-01-10,,100,10,1,10\n"
    "Beta,bogus,2026-01-10,,100,10,1,10\n"
    "Gamma,active,2026-01-10,2026-01-01,100,10,1,10\n"
).encode("utf-8")


def _campaign_body(**overrides: object) -> dict[str, object]:
    body: dict[str, object] = {
        "name": "Manual",
        "status": "Ativa",
        "start_date": "2026-04-01",
        "end_date": "2026-04-30",
        "spend": "500.00",
        "leads_generated": 25,
        "conversions": 5,
        "revenue": "1500.00",
    }
    body.update(overrides)
    return body


class CampaignAPITestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.store = FakeCampaignStore()
        self.settings = CampaignImportSettings(max_display_errors=2, preview_rows=2, max_upload_bytes=4096)

        application = FastAPI()
        application.include_router(campaign_import_router)
        application.include_router(campaigns_router)
        application.include_router(upload_history_router)
        application.include_router(dashboard_settings_router)
        application.dependency_overrides[get_campaign_store] = lambda: self.store
        application.dependency_overrides[get_campaign_import_settings] = lambda: self.settings
        application.dependency_overrides[get_campaign_import_service] = lambda: CampaignImportService()
        application.dependency_overrides[get_dashboard_defaults] = lambda: DashboardDefaults(cpl_alert=30.0)

        self.client = TestClient(application)

    def _upload(self, path: str, content: bytes, filename: str = "campaigns.csv", content_type: str = "text/csv"):
        return self.client.post(path, files={"file": (filename, content, content_type)})


class TestImportEndpoints(CampaignAPITestCase):
    def test_preview_returns_capped_rows_and_all_errors(self) -> None:
        response = self._upload("/campaigns/import/preview", INVALID_CSV)

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["total_rows"], 3)
        self.assertFalse(body["is_valid"])
        self.assertEqual(len(body["rows"]), 2)
        self.assertEqual(len(body["errors"]), 3)
        self.assertEqual(body["diagnostics"]["delimiter"], ",")
        self.assertEqual(self.store.insert_calls, 0)

    def test_preview_unparseable_file(self) -> None:
        response = self._upload("/campaigns/import/preview", b"\xff\xfe\x00bad")
        self.assertEqual(response.status_code, 400)

    def test_rejects_non_csv_upload(self) -> None:
        response = self._upload("/campaigns/import", VALID_CSV, filename="report.pdf", content_type="application/pdf")
        self.assertEqual(response.status_code, 400)

    def test_accepts_txt_upload(self) -> None:
        response = self._upload("/campaigns/import", VALID_CSV, filename="export.txt", content_type="application/octet-stream")
        self.assertEqual(response.status_code, 201)

    def test_rejects_oversized_upload(self) -> None:
        response = self._upload("/campaigns/import", VALID_CSV + b"x" * 5000)
        self.assertEqual(response.status_code, 413)
        self.assertEqual(self.store.insert_calls, 0)

    def test_import_commits_all_rows(self) -> None:
        response = self._upload("/campaigns/import", VALID_CSV)

        self.assertEqual(response.status_code, 201)
        body = response.json()
        self.assertEqual(body["committed_count"], 3)
        self.assertEqual(body["outcome"]["status"], "success")
        self.assertEqual(body["outcome"]["file_name"], "campaigns.csv")
        self.assertEqual(len(self.store.campaigns), 3)

    def test_import_with_errors_returns_capped_422(self) -> None:
        response = self._upload("/campaigns/import", INVALID_CSV)

        self.assertEqual(response.status_code, 422)
        detail = response.json()["detail"]
        self.assertEqual(detail["total_errors"], 3)
        self.assertEqual(detail["hidden_errors"], 1)
        self.assertEqual(len(detail["errors"]), 2)
        self.assertEqual(detail["errors"][0]["row_number"], 2)
        self.assertEqual(self.store.campaigns, [])

    def test_store_failure_returns_503(self) -> None:
        self.store.fail_insert = True

        response = self._upload("/campaigns/import", VALID_CSV)

        self.assertEqual(response.status_code, 503)
        self.assertEqual(self.store.outcomes[0].status, "failure")

    def test_upload_history_newest_first(self) -> None:
        self._upload("/campaigns/import", VALID_CSV, filename="first.csv")
        self._upload("/campaigns/import", VALID_CSV, filename="second.csv")

        response = self.client.get("/upload-history")

        self.assertEqual(response.status_code, 200)
        self.assertEqual([entry["file_name"] for entry in response.json()], ["second.csv", "first.csv"])


class TestCampaignEndpoints(CampaignAPITestCase):
    def test_create_returns_metrics(self) -> None:
        response = self.client.post("/campaigns", json=_campaign_body())

        self.assertEqual(response.status_code, 201)
        body = response.json()
        self.assertEqual(body["status"], "active")
        self.assertEqual(Decimal(body["spend"]), Decimal("500"))
        self.assertAlmostEqual(body["metrics"]["cpl"], 20.0)
        self.assertAlmostEqual(body["metrics"]["roi"], 200.0)
        self.assertAlmostEqual(body["metrics"]["conversion_rate"], 20.0)

    def test_create_enforces_record_invariants(self) -> None:
        cases = [
            _campaign_body(conversions=30),
            _campaign_body(end_date="2026-03-01"),
            _campaign_body(status="running"),
            _campaign_body(spend="-1"),
            _campaign_body(name="   "),
            _campaign_body(name="x" * 256),
            _campaign_body(spend="10.555"),
            _campaign_body(leads_generated=2**31, conversions=0),
        ]
        for body in cases:
            with self.subTest(body=body):
                self.assertEqual(self.client.post("/campaigns", json=body).status_code, 422)
        self.assertEqual(self.store.campaigns, [])

    def test_get_update_delete(self) -> None:
        created = self.client.post("/campaigns", json=_campaign_body()).json()
        url = f"/campaigns/{created['id']}"

        self.assertEqual(self.client.get(url).json()["name"], "Manual")

        updated = self.client.patch(url, json={"leads_generated": 50, "status": "paused"})
        self.assertEqual(updated.status_code, 200)
        self.assertEqual(updated.json()["status"], "paused")
        self.assertAlmostEqual(updated.json()["metrics"]["cpl"], 10.0)

        self.assertEqual(self.client.delete(url).status_code, 204)
        self.assertEqual(self.client.get(url).status_code, 404)

    def test_update_revalidates_merged_record(self) -> None:
        created = self.client.post("/campaigns", json=_campaign_body()).json()

        response = self.client.patch(f"/campaigns/{created['id']}", json={"leads_generated": 1})

        self.assertEqual(response.status_code, 422)
        self.assertEqual(self.store.campaigns[0].leads_generated, 25)

    def test_unknown_campaign_is_404(self) -> None:
        missing = "00000000-0000-0000-0000-000000000000"
        self.assertEqual(self.client.get(f"/campaigns/{missing}").status_code, 404)
        self.assertEqual(self.client.delete(f"/campaigns/{missing}").status_code, 404)

    def test_list_filters_by_custom_period(self) -> None:
        self._upload("/campaigns/import", VALID_CSV)

        response = self.client.get(
            "/campaigns",
            params={"period": "custom", "start": "2026-01-15", "end": "2026-03-15"},
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual([item["name"] for item in response.json()], ["Gamma", "Beta"])

    def test_list_rejects_unknown_period(self) -> None:
        self.assertEqual(self.client.get("/campaigns", params={"period": "forever"}).status_code, 400)

    def test_summary_and_insights(self) -> None:
        self._upload("/campaigns/import", VALID_CSV)

        summary = self.client.get("/campaigns/summary", params={"period": "all"}).json()
        self.assertEqual(summary["campaign_count"], 3)
        self.assertAlmostEqual(summary["total_spend"], 1700.0)
        self.assertEqual(summary["total_leads"], 90)
        self.assertIsNone(summary["period_start"])

        insights = self.client.get("/campaigns/insights", params={"period": "all"}).json()
        self.assertEqual(insights["best_campaign_name"], "Gamma")
        self.assertEqual(insights["high_cpl_count"], 1)
        self.assertEqual(insights["cpl_alert"], 30.0)

    def test_insights_use_saved_cpl_alert(self) -> None:
        self._upload("/campaigns/import", VALID_CSV)
        self.client.put("/settings", json={"cpl_alert": "15"})

        insights = self.client.get("/campaigns/insights", params={"period": "all"}).json()

        self.assertEqual(insights["cpl_alert"], 15.0)
        self.assertEqual(insights["high_cpl_count"], 2)

    def test_spend_trend_is_positive_when_newer_campaigns_spend_more(self) -> None:
        for month, spend in (("01", "100"), ("02", "100"), ("03", "200"), ("04", "200")):
            body = _campaign_body(
                name=f"Month {month}",
                start_date=f"2026-{month}-01",
                end_date=f"2026-{month}-28",
                spend=spend,
            )
            self.assertEqual(self.client.post("/campaigns", json=body).status_code, 201)

        insights = self.client.get(
            "/campaigns/insights",
            params={"period": "custom", "start": "2026-01-01", "end": "2026-12-31"},
        ).json()

        self.assertAlmostEqual(insights["spend_trend"], 100.0)

    def test_store_outage_is_503(self) -> None:
        self.store.fail_reads = True
        self.assertEqual(self.client.get("/campaigns", params={"period": "all"}).status_code, 503)


class TestSettingsEndpoints(CampaignAPITestCase):
    def test_defaults_before_first_save(self) -> None:
        body = self.client.get("/settings").json()

        self.assertEqual(Decimal(body["cpl_alert"]), Decimal("30"))
        self.assertIsNone(body["monthly_goal"])

    def test_partial_update_keeps_other_fields(self) -> None:
        self.client.put("/settings", json={"monthly_goal": "10000", "total_budget": "5000"})
        response = self.client.put("/settings", json={"total_budget": "7500"})

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(Decimal(body["monthly_goal"]), Decimal("10000"))
        self.assertEqual(Decimal(body["total_budget"]), Decimal("7500"))

    def test_negative_values_rejected(self) -> None:
        self.assertEqual(self.client.put("/settings", json={"cpl_alert": "-1"}).status_code, 422)


if __name__ == "__main__":
    unittest.main()
