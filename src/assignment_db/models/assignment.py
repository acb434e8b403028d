"""AssignmentDocument ORM model — one row per stored assignment.

The full assignment document (metadata plus the resolved question list)
lives in a single JSONB column so a form can be loaded and rendered from
one row.  The few fields that are filtered or listed on get their own
columns, copied out of the document on every save.
"""

from datetime import datetime, timezone

from sqlalchemy import Index, Text, text
from sqlalchemy.dialects.postgresql import JSONB, TIMESTAMP
from sqlalchemy.orm import Mapped, mapped_column

from assignment_db.models.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AssignmentDocument(Base):
    """One stored assignment, keyed by its document id."""

    __tablename__ = "assignments"

    # Caller-chosen on overwrite, uuid4 hex on create
    id: Mapped[str] = mapped_column(Text, primary_key=True)

    # --- Listing columns (mirrors of document fields) ---
    account: Mapped[str] = mapped_column(Text, nullable=False, index=True)
    assessment_name: Mapped[str] = mapped_column(Text, nullable=False)
    author: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(Text, nullable=False)

    # --- Full document ---
    # {"assessmentName": ..., "questions": [...], "schoolSelectorId": ..., ...}
    document: Mapped[dict] = mapped_column(
        JSONB,
        nullable=False,
        server_default=text("'{}'::jsonb"),
    )

    # --- Projected role question ids ---
    school_selector_id: Mapped[str | None] = mapped_column(Text, nullable=True)
    completion_date_id: Mapped[str | None] = mapped_column(Text, nullable=True)
    completion_time_id: Mapped[str | None] = mapped_column(Text, nullable=True)

    # --- Timestamps ---
    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
    )

    __table_args__ = (
        Index("ix_assignments_account_created", "account", "created_at"),
    )

    def __repr__(self) -> str:
        return (
            f"<AssignmentDocument id={self.id!r} account={self.account!r} "
            f"name={self.assessment_name!r}>"
        )
