"""
db/models/dashboard_settings.py

Single-row dashboard settings: monthly goal, CPL alert threshold, budget.
"""

from __future__ import annotations

import uuid
from decimal import Decimal

from sqlalchemy import Numeric
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base, TimestampMixin


class DashboardSettings(Base, TimestampMixin):
    __tablename__ = "dashboard_settings"
    # Load server-side timestamps on flush.
    __mapper_args__ = {"eager_defaults": True}

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    monthly_goal: Mapped[Decimal | None] = mapped_column(
        Numeric(14, 2),
        nullable=True,
        comment="Target revenue for the current month",
    )
    cpl_alert: Mapped[Decimal | None] = mapped_column(
        Numeric(14, 2),
        nullable=True,
        comment="Campaigns with a CPL above this value are flagged",
    )
    total_budget: Mapped[Decimal | None] = mapped_column(Numeric(14, 2), nullable=True)
