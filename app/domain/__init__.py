"""
app/domain package marker.
"""

from app.domain.campaign import (
    ALLOWED_CAMPAIGN_STATUSES,
    CampaignInput,
    CampaignStatus,
    ImportOutcome,
    ImportResult,
    ImportStatus,
    ParseDiagnostics,
    ParsedFile,
    PreviewResult,
    RawRow,
    RowValidationError,
)
from app.domain.errors import (
    CampaignImportError,
    InvalidDateError,
    InvalidIntegerError,
    InvalidNumberError,
    StoreFailureError,
    UnparseableFileError,
    ValidationFailedError,
)

__all__ = [
    "ALLOWED_CAMPAIGN_STATUSES",
    "CampaignImportError",
    "CampaignInput",
    "CampaignStatus",
    "ImportOutcome",
    "ImportResult",
    "ImportStatus",
    "InvalidDateError",
    "InvalidIntegerError",
    "InvalidNumberError",
    "ParseDiagnostics",
    "ParsedFile",
    "PreviewResult",
    "RawRow",
    "RowValidationError",
    "StoreFailureError",
    "UnparseableFileError",
    "ValidationFailedError",
]
