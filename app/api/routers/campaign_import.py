"""
app/api/routers/campaign_import.py

Campaign file import HTTP endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, UploadFile, status

from app.api.dependencies import get_campaign_store, get_csv_upload, read_csv_upload
from app.config import CampaignImportSettings, get_campaign_import_settings
from app.domain.errors import StoreFailureError, UnparseableFileError, ValidationFailedError
from app.repositories.campaign_store import CampaignStore
from app.schemas.campaign_import import (
    ImportOutcomeResponse,
    ImportPreviewResponse,
    ImportResultResponse,
    ParseDiagnosticsResponse,
    RowValidationErrorResponse,
)
from app.services.campaign_import_service import (
    CampaignImportService,
    get_campaign_import_service,
)

router = APIRouter(prefix="/campaigns/import", tags=["import"])


@router.post("/preview", response_model=ImportPreviewResponse)
def preview_import(
    content: bytes = Depends(read_csv_upload),
    settings: CampaignImportSettings = Depends(get_campaign_import_settings),
    import_service: CampaignImportService = Depends(get_campaign_import_service),
) -> ImportPreviewResponse:
    """
    Parse and validate a campaign file without storing anything.
    """

    try:
        preview = import_service.parse_and_validate(content)
    except UnparseableFileError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc

    diagnostics = preview.diagnostics
    return ImportPreviewResponse(
        total_rows=len(preview.rows),
        is_valid=preview.is_valid,
        rows=preview.rows[: settings.preview_rows],
        errors=[
            RowValidationErrorResponse(
                row_number=error.row_number,
                field=error.field,
                message=error.message,
                value=error.value,
            )
            for error in preview.errors
        ],
        diagnostics=ParseDiagnosticsResponse(
            delimiter=diagnostics.delimiter,
            encoding=diagnostics.encoding,
            raw_headers=list(diagnostics.raw_headers),
            headers=list(diagnostics.headers),
            unrecognized_columns=list(diagnostics.unrecognized_columns),
            missing_fields=list(diagnostics.missing_fields),
            blank_lines_skipped=diagnostics.blank_lines_skipped,
            rows_with_extra_cells=diagnostics.rows_with_extra_cells,
        ),
    )


@router.post(
    "",
    response_model=ImportResultResponse,
    status_code=status.HTTP_201_CREATED,
)
async def import_campaigns(
    file: UploadFile = Depends(get_csv_upload),
    content: bytes = Depends(read_csv_upload),
    settings: CampaignImportSettings = Depends(get_campaign_import_settings),
    import_service: CampaignImportService = Depends(get_campaign_import_service),
    store: CampaignStore = Depends(get_campaign_store),
) -> ImportResultResponse:
    """
    Import every row of a campaign file, or none of them.

    Raises HTTP 400 for an unreadable file, 422 when any row fails
    validation, and 503 when the store rejects the batch.
    """

    try:
        result = await import_service.import_file(
            content=content,
            file_name=file.filename or "upload.csv",
            store=store,
        )
    except UnparseableFileError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    except ValidationFailedError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=exc.to_dict(max_errors=settings.max_display_errors),
        ) from exc
    except StoreFailureError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Unable to store campaigns. Nothing was imported.",
        ) from exc

    outcome = result.outcome
    return ImportResultResponse(
        committed_count=result.committed_count,
        outcome=(
            ImportOutcomeResponse(
                file_name=outcome.file_name,
                record_count=outcome.record_count,
                status=outcome.status,
                error_detail=outcome.error_detail,
            )
            if outcome is not None
            else None
        ),
    )
