"""
app/services/campaign_import_service.py

Service layer for campaign file imports.

The pipeline is parse -> validate every row -> commit everything or nothing:

    1. CampaignCSVParser.parse()          UnparseableFileError aborts here
    2. CampaignRowValidator.validate_row() on every row; all errors collected
                                           and raised as ValidationFailedError
    3. store.insert_many()                 only when no row has an error
    4. store.record_import_outcome()       success, or failure on StoreFailureError

No retries happen here; a caller that wants one re-runs the whole import.
"""

from __future__ import annotations

import logging
from functools import lru_cache

from app.config import get_campaign_import_settings
from app.domain.campaign import (
    CampaignInput,
    ImportOutcome,
    ImportResult,
    ImportStatus,
    PreviewResult,
    RowValidationError,
)
from app.domain.errors import StoreFailureError, ValidationFailedError
from app.mappers.campaign_mapper import CampaignRowMapper
from app.parsers.csv_parser import CampaignCSVParser
from app.repositories.campaign_store import CampaignStore
from app.validators.campaign_validator import CampaignRowValidator
from kpi.campaign import summarize

logger = logging.getLogger(__name__)


class CampaignImportService:
    """
    Coordinates campaign file parsing, validation, and commit.
    """

    def __init__(
        self,
        *,
        log_validation_errors: bool = True,
        record_blocked_imports: bool = False,
        parser: CampaignCSVParser | None = None,
        validator: CampaignRowValidator | None = None,
        mapper: CampaignRowMapper | None = None,
    ) -> None:
        self._log_validation_errors = log_validation_errors
        self._record_blocked_imports = record_blocked_imports
        self._parser = parser or CampaignCSVParser()
        self._validator = validator or CampaignRowValidator()
        self._mapper = mapper or CampaignRowMapper()

    def parse_and_validate(self, content: bytes | str) -> PreviewResult:
        """
        Parse and validate a file without touching the store.

        Pure with respect to ``content``: the same bytes always yield the same
        rows and the same error list.

        Raises
        ------
        UnparseableFileError
            When the file cannot be decoded or tokenized.
        """

        parsed = self._parser.parse(content)
        errors: list[RowValidationError] = []
        for index, raw_row in enumerate(parsed.rows):
            errors.extend(
                self._validator.validate_row(
                    raw_row=raw_row,
                    row_number=parsed.row_number(index),
                )
            )
        return PreviewResult(rows=parsed.rows, errors=errors, diagnostics=parsed.diagnostics)

    async def import_file(
        self,
        *,
        content: bytes | str,
        file_name: str,
        store: CampaignStore,
    ) -> ImportResult:
        """
        Run the full pipeline and commit on success.

        A file with any validation error commits nothing. Store failures are
        recorded as a ``failure`` outcome and re-raised.

        Raises
        ------
        UnparseableFileError
            When the file cannot be decoded or tokenized.
        ValidationFailedError
            When any row has an error; carries the full error list.
        StoreFailureError
            When the bulk insert or the success outcome write fails.
        """

        preview = self.parse_and_validate(content)

        if preview.errors:
            for error in preview.errors:
                self._log_error(file_name, error)
            logger.info(
                "Campaign import blocked file=%r rows=%s errors=%s",
                file_name,
                len(preview.rows),
                len(preview.errors),
            )
            outcome = None
            if self._record_blocked_imports:
                outcome = await self._record_failure(
                    store=store,
                    file_name=file_name,
                    error_detail=f"{len(preview.errors)} validation error(s); nothing imported.",
                )
            raise ValidationFailedError(errors=preview.errors, outcome=outcome)

        records: list[CampaignInput] = [
            self._mapper.to_campaign_input(raw_row) for raw_row in preview.rows
        ]

        try:
            stored = await store.insert_many(records)
            outcome = ImportOutcome(
                file_name=file_name,
                record_count=len(stored),
                status=ImportStatus.SUCCESS,
            )
            await store.record_import_outcome(outcome)
        except StoreFailureError as exc:
            logger.exception("Campaign import failed at the store file=%r", file_name)
            await self._record_failure(store=store, file_name=file_name, error_detail=str(exc))
            raise

        totals = summarize(records)
        logger.info(
            "Campaign import committed file=%r records=%s spend=%.2f revenue=%.2f "
            "cpl=%.2f roi=%.1f",
            file_name,
            outcome.record_count,
            totals.total_spend,
            totals.total_revenue,
            totals.average_cpl,
            totals.total_roi,
        )
        return ImportResult(committed_count=outcome.record_count, outcome=outcome)

    async def _record_failure(
        self,
        *,
        store: CampaignStore,
        file_name: str,
        error_detail: str,
    ) -> ImportOutcome | None:
        outcome = ImportOutcome(
            file_name=file_name,
            record_count=0,
            status=ImportStatus.FAILURE,
            error_detail=error_detail,
        )
        try:
            await store.record_import_outcome(outcome)
        except StoreFailureError:
            logger.error("Could not record failed import outcome file=%r", file_name)
            return None
        return outcome

    def _log_error(self, file_name: str, error: RowValidationError) -> None:
        if self._log_validation_errors:
            logger.warning(
                "Campaign validation error file=%r row=%s field=%s message=%s value=%r",
                file_name,
                error.row_number,
                error.field,
                error.message,
                error.value,
            )


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------


@lru_cache(maxsize=1)
def get_campaign_import_service() -> CampaignImportService:
    """
    Build and cache the import service with env-driven settings.
    """

    settings = get_campaign_import_settings()
    return CampaignImportService(
        log_validation_errors=settings.log_validation_errors,
        record_blocked_imports=settings.record_blocked_imports,
    )
