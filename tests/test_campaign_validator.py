from __future__ import annotations

import unittest
from datetime import date
from decimal import Decimal

from app.mappers.campaign_mapper import CampaignRowMapper
from app.validators.campaign_validator import CampaignRowValidator, normalize_status


def _row(**overrides: str) -> dict[str, str]:
    row = {
        "name": "Summer Launch",
        "status": "active",
        "start_date": "2024-01-01",
        "end_date": "2024-01-31",
        "spend": "1.000,00",
        "leads_generated": "100",
        "conversions": "10",
        "revenue": "2500,50",
    }
    row.update(overrides)
    return row


class TestCampaignRowValidator(unittest.TestCase):
    def setUp(self) -> None:
        self.validator = CampaignRowValidator()

    def _errors(self, **overrides: str) -> list[tuple[str, str]]:
        errors = self.validator.validate_row(raw_row=_row(**overrides), row_number=2)
        return [(error.field, error.message) for error in errors]

    def test_valid_row_has_no_errors(self) -> None:
        self.assertEqual(self._errors(), [])

    def test_blank_optional_fields_are_valid(self) -> None:
        self.assertEqual(
            self._errors(end_date="", spend="", leads_generated="", conversions="", revenue=""),
            [],
        )

    def test_name_required(self) -> None:
        self.assertEqual(self._errors(name="   "), [("name", "name required")])

    def test_status_must_be_allowed(self) -> None:
        self.assertEqual(self._errors(status=""), [("status", "invalid status")])
        self.assertEqual(self._errors(status="running"), [("status", "invalid status")])

    def test_status_is_case_insensitive_and_accepts_portuguese(self) -> None:
        self.assertEqual(self._errors(status=" PAUSED "), [])
        self.assertEqual(self._errors(status="Concluída"), [])

    def test_start_date_required_and_parsed(self) -> None:
        self.assertEqual(self._errors(start_date=""), [("start_date", "start date required")])
        self.assertEqual(
            self._errors(start_date="01/01/2024"),
            [("start_date", "invalid start date")],
        )

    def test_end_date_rules(self) -> None:
        self.assertEqual(self._errors(end_date="31/01/2024"), [("end_date", "invalid end date")])
        self.assertEqual(
            self._errors(end_date="2023-12-31"),
            [("end_date", "end date must be after start date")],
        )
        self.assertEqual(self._errors(end_date="2024-01-01"), [])

    def test_numeric_type_errors(self) -> None:
        self.assertEqual(self._errors(spend="lots"), [("spend", "invalid spend")])
        self.assertEqual(self._errors(revenue="n/a"), [("revenue", "invalid revenue")])
        self.assertEqual(
            self._errors(leads_generated="1.5", conversions="0"),
            [("leads_generated", "invalid leads")],
        )

    def test_conversions_exceeds_leads(self) -> None:
        self.assertEqual(
            self._errors(leads_generated="5", conversions="6"),
            [("conversions", "conversions exceeds leads")],
        )

    def test_cross_field_check_runs_when_leads_fail_to_parse(self) -> None:
        self.assertEqual(
            self._errors(leads_generated="many", conversions="3"),
            [
                ("leads_generated", "invalid leads"),
                ("conversions", "conversions exceeds leads"),
            ],
        )

    def test_invalid_conversions_count_as_zero(self) -> None:
        self.assertEqual(
            self._errors(conversions="x"),
            [("conversions", "invalid conversions")],
        )

    def test_negative_amounts_rejected(self) -> None:
        self.assertEqual(self._errors(spend="-10"), [("spend", "spend cannot be negative")])
        self.assertEqual(self._errors(revenue="-1,50"), [("revenue", "revenue cannot be negative")])

    def test_negative_counts_rejected(self) -> None:
        self.assertEqual(
            self._errors(conversions="-1"),
            [("conversions", "conversions cannot be negative")],
        )
        # Any conversion count exceeds a negative lead count.
        self.assertEqual(
            self._errors(leads_generated="-1", conversions="0"),
            [
                ("conversions", "conversions exceeds leads"),
                ("leads_generated", "leads cannot be negative"),
            ],
        )

    def test_minus_after_the_first_digit_is_ignored(self) -> None:
        self.assertEqual(self._errors(spend="12-3"), [])
        self.assertEqual(self._errors(revenue="5-"), [])

    def test_name_longer_than_column_rejected(self) -> None:
        self.assertEqual(self._errors(name="x" * 256), [("name", "name too long")])
        self.assertEqual(self._errors(name="  " + "x" * 255 + "  "), [])

    def test_amount_must_fit_two_decimal_places(self) -> None:
        self.assertEqual(self._errors(spend="10,555"), [("spend", "invalid spend")])
        self.assertEqual(self._errors(revenue="0.001"), [("revenue", "invalid revenue")])
        self.assertEqual(self._errors(spend="10,500"), [])

    def test_amount_must_fit_twelve_integer_digits(self) -> None:
        self.assertEqual(self._errors(spend="999999999999,99"), [])
        self.assertEqual(self._errors(spend="1000000000000"), [("spend", "invalid spend")])

    def test_counts_must_fit_integer_column(self) -> None:
        self.assertEqual(self._errors(leads_generated="2147483647"), [])
        self.assertEqual(
            self._errors(leads_generated="3000000000", conversions="0"),
            [("leads_generated", "invalid leads")],
        )
        self.assertEqual(
            self._errors(conversions="2147483648"),
            [("conversions", "invalid conversions")],
        )

    def test_every_rule_reports_in_field_order(self) -> None:
        errors = self.validator.validate_row(
            raw_row={"name": "", "status": "x", "start_date": "", "spend": "?"},
            row_number=7,
        )
        self.assertEqual(
            [error.field for error in errors],
            ["name", "status", "start_date", "spend"],
        )
        self.assertTrue(all(error.row_number == 7 for error in errors))
        self.assertEqual(errors[3].value, "?")


class TestNormalizeStatus(unittest.TestCase):
    def test_aliases(self) -> None:
        self.assertEqual(normalize_status("Ativa"), "active")
        self.assertEqual(normalize_status("pausada"), "paused")
        self.assertEqual(normalize_status(None), "")


class TestCampaignRowMapper(unittest.TestCase):
    def test_converts_validated_row(self) -> None:
        record = CampaignRowMapper().to_campaign_input(_row(status="Ativa", end_date=""))

        self.assertEqual(record.name, "Summer Launch")
        self.assertEqual(record.status, "active")
        self.assertEqual(record.start_date, date(2024, 1, 1))
        self.assertIsNone(record.end_date)
        self.assertEqual(record.spend, Decimal("1000.00"))
        self.assertEqual(record.revenue, Decimal("2500.50"))
        self.assertEqual(record.leads_generated, 100)

    def test_blank_numbers_become_zero(self) -> None:
        record = CampaignRowMapper().to_campaign_input(
            _row(spend="", leads_generated="", conversions="", revenue="")
        )
        self.assertEqual(record.spend, Decimal("0"))
        self.assertEqual(record.conversions, 0)


if __name__ == "__main__":
    unittest.main()
