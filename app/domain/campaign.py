"""
app/domain/campaign.py

Domain models used by the campaign import flow.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

# One data line keyed by canonical field name, values still raw text.
RawRow = dict[str, str]


class CampaignStatus:
    ACTIVE = "active"
    PAUSED = "paused"
    COMPLETED = "completed"


ALLOWED_CAMPAIGN_STATUSES: frozenset[str] = frozenset(
    {
        CampaignStatus.ACTIVE,
        CampaignStatus.PAUSED,
        CampaignStatus.COMPLETED,
    }
)


# Column limits shared by the row validator, the request schemas and the models.
NAME_MAX_LENGTH = 255
AMOUNT_MAX_DIGITS = 14
AMOUNT_DECIMAL_PLACES = 2
AMOUNT_MAX_INTEGER_DIGITS = AMOUNT_MAX_DIGITS - AMOUNT_DECIMAL_PLACES
COUNT_MAX = 2**31 - 1


class ImportStatus:
    SUCCESS = "success"
    FAILURE = "failure"
    # Not produced by the all-or-nothing importer.
    PARTIAL = "partial"


@dataclass(frozen=True)
class CampaignInput:
    """
    Typed campaign record prepared for persistence.

    Identity and timestamps are assigned by the store.
    """

    name: str
    status: str
    start_date: date
    end_date: date | None
    spend: Decimal
    leads_generated: int
    conversions: int
    revenue: Decimal


@dataclass(frozen=True)
class RowValidationError:
    """
    One row-level validation error detail.

    ``row_number`` matches the line the user sees in the file: the header is
    row 1 and the first data row is row 2.
    """

    row_number: int
    field: str
    message: str
    value: str | None = None


@dataclass(frozen=True)
class ImportOutcome:
    """
    Audit entry describing one import attempt.
    """

    file_name: str
    record_count: int
    status: str
    error_detail: str | None = None


@dataclass(frozen=True)
class ParseDiagnostics:
    """
    Facts about how a file was tokenized.
    """

    delimiter: str
    encoding: str
    raw_headers: tuple[str, ...]
    headers: tuple[str, ...]
    unrecognized_columns: tuple[str, ...]
    missing_fields: tuple[str, ...]
    blank_lines_skipped: int = 0
    rows_with_extra_cells: int = 0


@dataclass(frozen=True)
class ParsedFile:
    """
    Ordered raw rows plus tokenizer diagnostics.

    ``rows[i]`` has row number ``i + 2``.
    """

    rows: list[RawRow]
    diagnostics: ParseDiagnostics

    def row_number(self, index: int) -> int:
        return index + 2


@dataclass(frozen=True)
class PreviewResult:
    """
    Parse + validate result with no store side effects.
    """

    rows: list[RawRow]
    errors: list[RowValidationError]
    diagnostics: ParseDiagnostics

    @property
    def is_valid(self) -> bool:
        return not self.errors


@dataclass(frozen=True)
class ImportResult:
    """
    End-of-run import summary.
    """

    committed_count: int
    outcome: ImportOutcome | None = None
