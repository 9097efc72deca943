"""
app/api/dependencies.py

Shared FastAPI dependencies for request validation and store access.
"""

from __future__ import annotations

from functools import lru_cache

from fastapi import Depends, File, HTTPException, UploadFile, status

from app.config import CampaignImportSettings, get_campaign_import_settings
from app.repositories.campaign_store import SQLAlchemyCampaignStore

CSV_CONTENT_TYPES = {
    "text/csv",
    "text/plain",
    "application/csv",
    "application/vnd.ms-excel",
}
CSV_FILE_EXTENSIONS = (".csv", ".txt")


def get_csv_upload(file: UploadFile = File(...)) -> UploadFile:
    """
    Validate that the uploaded file is a CSV by extension or MIME type.
    """

    filename = (file.filename or "").strip().lower()
    content_type = (file.content_type or "").strip().lower()

    is_csv_filename = filename.endswith(CSV_FILE_EXTENSIONS)
    is_csv_content_type = content_type in CSV_CONTENT_TYPES

    if not is_csv_filename and not is_csv_content_type:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Only CSV or TXT files are allowed.",
        )

    return file


async def read_csv_upload(
    file: UploadFile = Depends(get_csv_upload),
    settings: CampaignImportSettings = Depends(get_campaign_import_settings),
) -> bytes:
    """
    Read the upload body, rejecting files over the configured size cap.
    """

    try:
        content = await file.read(settings.max_upload_bytes + 1)
    finally:
        await file.close()

    if len(content) > settings.max_upload_bytes:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"File exceeds the {settings.max_upload_bytes} byte upload limit.",
        )
    return content


@lru_cache(maxsize=1)
def get_campaign_store() -> SQLAlchemyCampaignStore:
    """
    Return the process-wide SQLAlchemy campaign store.
    """

    return SQLAlchemyCampaignStore()
