"""
app/domain/errors.py

Exceptions raised by the campaign import pipeline.

UnparseableFileError and StoreFailureError abort an import part way;
ValidationFailedError is raised once every row has been checked and carries
the full error list. The field-level errors are raised by the strict
normalizer helpers and are always converted into RowValidationError entries
by the row validator.
"""

from __future__ import annotations

from typing import Any, Sequence

from app.domain.campaign import ImportOutcome, RowValidationError


class CampaignImportError(Exception):
    """Base exception for campaign import failures."""


class UnparseableFileError(CampaignImportError, ValueError):
    """Raised when an uploaded file cannot be decoded or tokenized."""


class InvalidNumberError(CampaignImportError, ValueError):
    """Raised when a raw value does not normalize to a decimal number."""


class InvalidIntegerError(InvalidNumberError):
    """Raised when a raw value is numeric but not a whole number."""


class InvalidDateError(CampaignImportError, ValueError):
    """Raised when a raw value is not a real YYYY-MM-DD calendar date."""


class ValidationFailedError(CampaignImportError):
    """
    Raised when a file parsed but contains row or cross-field errors.

    Nothing was committed. ``outcome`` is the recorded failure entry when
    blocked imports are written to the upload history.
    """

    def __init__(
        self,
        *,
        errors: Sequence[RowValidationError],
        outcome: ImportOutcome | None = None,
    ) -> None:
        self.errors = tuple(errors)
        self.outcome = outcome
        super().__init__(f"Import blocked by {len(self.errors)} validation error(s).")

    def to_dict(self, *, max_errors: int | None = None) -> dict[str, Any]:
        shown = self.errors if max_errors is None else self.errors[: max(0, max_errors)]
        return {
            "message": str(self),
            "total_errors": len(self.errors),
            "hidden_errors": len(self.errors) - len(shown),
            "errors": [
                {
                    "row_number": error.row_number,
                    "field": error.field,
                    "message": error.message,
                    "value": error.value,
                }
                for error in shown
            ],
        }


class StoreFailureError(CampaignImportError, RuntimeError):
    """Raised when the store rejects a read, write, or bulk insert."""
