"""
app/schemas/campaign_import.py

Response schemas for campaign import endpoints.
"""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, Field


class RowValidationErrorResponse(BaseModel):
    """
    API response model for one row-level validation error.
    """

    row_number: int = Field(..., ge=2)
    field: str
    message: str
    value: str | None = None


class ParseDiagnosticsResponse(BaseModel):
    delimiter: str
    encoding: str
    raw_headers: list[str]
    headers: list[str]
    unrecognized_columns: list[str]
    missing_fields: list[str]
    blank_lines_skipped: int = Field(..., ge=0)
    rows_with_extra_cells: int = Field(..., ge=0)


class ImportPreviewResponse(BaseModel):
    """
    Parse + validate result; ``rows`` holds only the first few data rows.
    """

    total_rows: int = Field(..., ge=0)
    is_valid: bool
    rows: list[dict[str, str]] = Field(default_factory=list)
    errors: list[RowValidationErrorResponse] = Field(default_factory=list)
    diagnostics: ParseDiagnosticsResponse


class ImportOutcomeResponse(BaseModel):
    file_name: str
    record_count: int = Field(..., ge=0)
    status: str
    error_detail: str | None = None


class ImportResultResponse(BaseModel):
    committed_count: int = Field(..., ge=0)
    outcome: ImportOutcomeResponse | None = None


class UploadHistoryResponse(BaseModel):
    id: uuid.UUID
    file_name: str
    record_count: int
    status: str
    error_detail: str | None
    uploaded_at: datetime

    model_config = {"from_attributes": True}
