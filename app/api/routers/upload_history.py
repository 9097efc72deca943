"""
app/api/routers/upload_history.py

Import audit trail endpoint.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.api.dependencies import get_campaign_store
from app.domain.errors import StoreFailureError
from app.repositories.campaign_store import SQLAlchemyCampaignStore
from app.schemas.campaign_import import UploadHistoryResponse

router = APIRouter(tags=["import"])


@router.get("/upload-history", response_model=list[UploadHistoryResponse])
async def list_upload_history(
    limit: int = Query(default=100, ge=1, le=1000),
    store: SQLAlchemyCampaignStore = Depends(get_campaign_store),
) -> list[UploadHistoryResponse]:
    """
    Recorded import outcomes, newest first.
    """

    try:
        entries = await store.list_import_outcomes(limit=limit)
    except StoreFailureError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Upload history unavailable.",
        ) from exc
    return [UploadHistoryResponse.model_validate(entry) for entry in entries]
