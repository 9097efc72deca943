"""
app/repositories/campaign_store.py

Persistence for campaigns, import outcomes, and dashboard settings.

The import pipeline depends only on the two-method ``CampaignStore``
protocol; ``SQLAlchemyCampaignStore`` is the production implementation and
also serves the CRUD endpoints. Every SQLAlchemy failure surfaces as
``StoreFailureError``.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Mapping, Sequence
from datetime import date
from typing import Any, Protocol

from sqlalchemy import Select, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.domain.campaign import CampaignInput, ImportOutcome
from app.domain.errors import StoreFailureError
from db.models.campaign import Campaign
from db.models.dashboard_settings import DashboardSettings
from db.models.upload_history import UploadHistory

logger = logging.getLogger(__name__)

CAMPAIGN_UPDATABLE_FIELDS: frozenset[str] = frozenset(
    {
        "name",
        "status",
        "start_date",
        "end_date",
        "spend",
        "leads_generated",
        "conversions",
        "revenue",
    }
)
SETTINGS_UPDATABLE_FIELDS: frozenset[str] = frozenset({"monthly_goal", "cpl_alert", "total_budget"})


class CampaignStore(Protocol):
    """
    Store operations the import pipeline suspends on.
    """

    async def insert_many(self, records: Sequence[CampaignInput]) -> Sequence[Any]:
        ...

    async def record_import_outcome(self, outcome: ImportOutcome) -> Any:
        ...


def _to_model(record: CampaignInput) -> Campaign:
    return Campaign(
        name=record.name,
        status=record.status,
        start_date=record.start_date,
        end_date=record.end_date,
        spend=record.spend,
        leads_generated=record.leads_generated,
        conversions=record.conversions,
        revenue=record.revenue,
    )


class SQLAlchemyCampaignStore:
    """
    Async SQLAlchemy implementation of the campaign store.

    Each call runs in its own session and transaction.
    """

    def __init__(self, *, session_factory: async_sessionmaker[AsyncSession] | None = None) -> None:
        if session_factory is None:
            from db.session import get_session_factory

            self._session_factory = get_session_factory()
        else:
            self._session_factory = session_factory

    # ------------------------------------------------------------------
    # Import pipeline
    # ------------------------------------------------------------------

    async def insert_many(self, records: Sequence[CampaignInput]) -> list[Campaign]:
        """
        Insert all records in one transaction; nothing is kept on failure.
        """

        if not records:
            return []

        models = [_to_model(record) for record in records]
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    session.add_all(models)
                    await session.flush()
        except SQLAlchemyError as exc:
            logger.warning("Bulk campaign insert failed count=%s: %s", len(models), exc)
            raise StoreFailureError("Failed to insert campaigns.") from exc
        return models

    async def record_import_outcome(self, outcome: ImportOutcome) -> UploadHistory:
        entry = UploadHistory(
            file_name=outcome.file_name,
            record_count=outcome.record_count,
            status=outcome.status,
            error_detail=outcome.error_detail,
        )
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    session.add(entry)
                    await session.flush()
        except SQLAlchemyError as exc:
            logger.warning("Import outcome write failed file=%r: %s", outcome.file_name, exc)
            raise StoreFailureError("Failed to record import outcome.") from exc
        return entry

    async def list_import_outcomes(self, *, limit: int = 100) -> list[UploadHistory]:
        stmt = (
            select(UploadHistory)
            .order_by(UploadHistory.uploaded_at.desc())
            .limit(max(1, limit))
        )
        try:
            async with self._session_factory() as session:
                return list((await session.scalars(stmt)).all())
        except SQLAlchemyError as exc:
            raise StoreFailureError("Failed to load upload history.") from exc

    # ------------------------------------------------------------------
    # Campaign CRUD
    # ------------------------------------------------------------------

    async def create_campaign(self, record: CampaignInput) -> Campaign:
        created = await self.insert_many([record])
        return created[0]

    async def get_campaign(self, campaign_id: uuid.UUID) -> Campaign | None:
        try:
            async with self._session_factory() as session:
                return await session.get(Campaign, campaign_id)
        except SQLAlchemyError as exc:
            raise StoreFailureError("Failed to load campaign.") from exc

    async def list_campaigns(
        self,
        *,
        start: date | None = None,
        end: date | None = None,
    ) -> list[Campaign]:
        """
        List campaigns whose start date falls in ``[start, end]``.

        Filtered lists are ordered by start date, unfiltered lists by creation
        time; both newest first.
        """

        stmt: Select[tuple[Campaign]] = select(Campaign)
        if start is not None:
            stmt = stmt.where(Campaign.start_date >= start)
        if end is not None:
            stmt = stmt.where(Campaign.start_date <= end)

        if start is None and end is None:
            stmt = stmt.order_by(Campaign.created_at.desc())
        else:
            stmt = stmt.order_by(Campaign.start_date.desc())

        try:
            async with self._session_factory() as session:
                return list((await session.scalars(stmt)).all())
        except SQLAlchemyError as exc:
            raise StoreFailureError("Failed to list campaigns.") from exc

    async def update_campaign(
        self,
        campaign_id: uuid.UUID,
        changes: Mapping[str, Any],
    ) -> Campaign | None:
        unknown = set(changes) - CAMPAIGN_UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Unknown campaign fields: {sorted(unknown)}.")

        try:
            async with self._session_factory() as session:
                async with session.begin():
                    campaign = await session.get(Campaign, campaign_id)
                    if campaign is None:
                        return None
                    for field, value in changes.items():
                        setattr(campaign, field, value)
                    await session.flush()
                await session.refresh(campaign)
                return campaign
        except SQLAlchemyError as exc:
            raise StoreFailureError("Failed to update campaign.") from exc

    async def delete_campaign(self, campaign_id: uuid.UUID) -> bool:
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    campaign = await session.get(Campaign, campaign_id)
                    if campaign is None:
                        return False
                    await session.delete(campaign)
        except SQLAlchemyError as exc:
            raise StoreFailureError("Failed to delete campaign.") from exc
        return True

    # ------------------------------------------------------------------
    # Dashboard settings
    # ------------------------------------------------------------------

    async def get_settings(self) -> DashboardSettings | None:
        stmt = select(DashboardSettings).order_by(DashboardSettings.created_at).limit(1)
        try:
            async with self._session_factory() as session:
                return (await session.scalars(stmt)).first()
        except SQLAlchemyError as exc:
            raise StoreFailureError("Failed to load dashboard settings.") from exc

    async def update_settings(self, changes: Mapping[str, Any]) -> DashboardSettings:
        """
        Apply changes to the settings row, creating it on first use.
        """

        unknown = set(changes) - SETTINGS_UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Unknown settings fields: {sorted(unknown)}.")

        stmt = select(DashboardSettings).order_by(DashboardSettings.created_at).limit(1)
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    settings = (await session.scalars(stmt)).first()
                    if settings is None:
                        settings = DashboardSettings()
                        session.add(settings)
                    for field, value in changes.items():
                        setattr(settings, field, value)
                    await session.flush()
                await session.refresh(settings)
                return settings
        except SQLAlchemyError as exc:
            raise StoreFailureError("Failed to update dashboard settings.") from exc
