"""
app/validators/campaign_validator.py

Row-level validation for campaign file imports.

Every rule runs for every row, so one bad cell never hides another error.
Numeric cells are checked twice: first for their type, then, through
zero-defaulting fallbacks, for the business rules. A cell that fails to
parse, or does not fit its database column, still takes part in the
cross-field checks as zero.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any, Mapping

from app.domain.campaign import (
    ALLOWED_CAMPAIGN_STATUSES,
    AMOUNT_DECIMAL_PLACES,
    AMOUNT_MAX_INTEGER_DIGITS,
    COUNT_MAX,
    NAME_MAX_LENGTH,
    CampaignStatus,
    RowValidationError,
)
from app.normalizers.locale_normalizer import (
    is_blank,
    parse_date_with_fallback,
    parse_decimal_with_fallback,
    parse_integer_with_fallback,
    strip_diacritics,
)

# Status spellings found in Portuguese-language spreadsheets.
STATUS_ALIASES: dict[str, str] = {
    "ativa": CampaignStatus.ACTIVE,
    "pausada": CampaignStatus.PAUSED,
    "concluida": CampaignStatus.COMPLETED,
}


def normalize_status(value: Any) -> str:
    """
    Trim, lowercase, drop accents, and resolve Portuguese aliases.
    """

    if value is None:
        return ""
    normalized = strip_diacritics(str(value).strip().lower())
    return STATUS_ALIASES.get(normalized, normalized)


def _fits_amount_column(value: Decimal) -> bool:
    # Trailing zeros do not count as decimal places: "10,500" is 10.5.
    decimal_places = max(0, -value.normalize().as_tuple().exponent)
    integer_digits = len(str(int(abs(value))))
    return (
        decimal_places <= AMOUNT_DECIMAL_PLACES
        and integer_digits <= AMOUNT_MAX_INTEGER_DIGITS
    )


class CampaignRowValidator:
    """
    Validates one raw campaign row.
    """

    def validate_row(
        self,
        *,
        raw_row: Mapping[str, str | None],
        row_number: int,
    ) -> list[RowValidationError]:
        """
        Return every error found in one row; an empty list means valid.
        """

        errors: list[RowValidationError] = []

        self._validate_name(raw_row.get("name"), row_number, errors)
        self._validate_status(raw_row.get("status"), row_number, errors)
        start_date = self._validate_start_date(raw_row.get("start_date"), row_number, errors)
        end_date = self._validate_end_date(raw_row.get("end_date"), row_number, errors)

        if start_date is not None and end_date is not None and end_date < start_date:
            errors.append(
                RowValidationError(
                    row_number=row_number,
                    field="end_date",
                    message="end date must be after start date",
                    value=self._stringify_value(raw_row.get("end_date")),
                )
            )

        spend, _ = self._check_number(raw_row, "spend", "invalid spend", row_number, errors)
        leads, _ = self._check_integer(
            raw_row, "leads_generated", "invalid leads", row_number, errors
        )
        conversions, _ = self._check_integer(
            raw_row, "conversions", "invalid conversions", row_number, errors
        )
        revenue, _ = self._check_number(raw_row, "revenue", "invalid revenue", row_number, errors)

        if conversions > leads:
            errors.append(
                RowValidationError(
                    row_number=row_number,
                    field="conversions",
                    message="conversions exceeds leads",
                    value=self._stringify_value(raw_row.get("conversions")),
                )
            )

        for field, value, message in (
            ("spend", spend, "spend cannot be negative"),
            ("leads_generated", leads, "leads cannot be negative"),
            ("conversions", conversions, "conversions cannot be negative"),
            ("revenue", revenue, "revenue cannot be negative"),
        ):
            if value < 0:
                errors.append(
                    RowValidationError(
                        row_number=row_number,
                        field=field,
                        message=message,
                        value=self._stringify_value(raw_row.get(field)),
                    )
                )

        return errors

    def _validate_name(
        self,
        value: str | None,
        row_number: int,
        errors: list[RowValidationError],
    ) -> None:
        if is_blank(value):
            errors.append(
                RowValidationError(
                    row_number=row_number,
                    field="name",
                    message="name required",
                    value=self._stringify_value(value),
                )
            )
        elif len(str(value).strip()) > NAME_MAX_LENGTH:
            errors.append(
                RowValidationError(
                    row_number=row_number,
                    field="name",
                    message="name too long",
                    value=self._stringify_value(value),
                )
            )

    def _validate_status(
        self,
        value: str | None,
        row_number: int,
        errors: list[RowValidationError],
    ) -> None:
        if normalize_status(value) not in ALLOWED_CAMPAIGN_STATUSES:
            errors.append(
                RowValidationError(
                    row_number=row_number,
                    field="status",
                    message="invalid status",
                    value=self._stringify_value(value),
                )
            )

    def _validate_start_date(
        self,
        value: str | None,
        row_number: int,
        errors: list[RowValidationError],
    ) -> date | None:
        if is_blank(value):
            errors.append(
                RowValidationError(
                    row_number=row_number,
                    field="start_date",
                    message="start date required",
                    value=self._stringify_value(value),
                )
            )
            return None

        parsed, valid = parse_date_with_fallback(value)
        if not valid:
            errors.append(
                RowValidationError(
                    row_number=row_number,
                    field="start_date",
                    message="invalid start date",
                    value=self._stringify_value(value),
                )
            )
        return parsed

    def _validate_end_date(
        self,
        value: str | None,
        row_number: int,
        errors: list[RowValidationError],
    ) -> date | None:
        if is_blank(value):
            return None

        parsed, valid = parse_date_with_fallback(value)
        if not valid:
            errors.append(
                RowValidationError(
                    row_number=row_number,
                    field="end_date",
                    message="invalid end date",
                    value=self._stringify_value(value),
                )
            )
        return parsed

    def _check_number(
        self,
        raw_row: Mapping[str, str | None],
        field: str,
        message: str,
        row_number: int,
        errors: list[RowValidationError],
    ) -> tuple[Decimal, bool]:
        value = raw_row.get(field)
        parsed, valid = parse_decimal_with_fallback(value)
        if valid and not _fits_amount_column(parsed):
            parsed, valid = Decimal("0"), False
        if not valid:
            errors.append(
                RowValidationError(
                    row_number=row_number,
                    field=field,
                    message=message,
                    value=self._stringify_value(value),
                )
            )
        return parsed, valid

    def _check_integer(
        self,
        raw_row: Mapping[str, str | None],
        field: str,
        message: str,
        row_number: int,
        errors: list[RowValidationError],
    ) -> tuple[int, bool]:
        value = raw_row.get(field)
        parsed, valid = parse_integer_with_fallback(value)
        if valid and abs(parsed) > COUNT_MAX:
            parsed, valid = 0, False
        if not valid:
            errors.append(
                RowValidationError(
                    row_number=row_number,
                    field=field,
                    message=message,
                    value=self._stringify_value(value),
                )
            )
        return parsed, valid

    @staticmethod
    def _stringify_value(value: Any) -> str | None:
        if value is None:
            return None
        return str(value)
