"""
db/models/upload_history.py

Audit trail of campaign file imports. Rows are written once and never updated.
"""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, Index, Integer, String, Text, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base


class UploadHistory(Base):
    __tablename__ = "upload_history"
    # Load server-side timestamps on flush.
    __mapper_args__ = {"eager_defaults": True}

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    file_name: Mapped[str] = mapped_column(String(255), nullable=False)
    record_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    status: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        comment="success, failure, partial",
    )
    error_detail: Mapped[str | None] = mapped_column(Text, nullable=True)
    uploaded_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    __table_args__ = (
        CheckConstraint("status IN ('success', 'failure', 'partial')", name="status_allowed"),
        CheckConstraint("record_count >= 0", name="record_count_non_negative"),
        Index("ix_upload_history_uploaded_at", "uploaded_at"),
    )
