"""Async repository for AssignmentDocument rows.

Methods take an ``AsyncSession`` and only ``flush``; the caller owns the
transaction (the server's ``get_db`` dependency commits per request).
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from assignment_db.models.assignment import AssignmentDocument

logger = logging.getLogger(__name__)


def _listing_columns(record: dict[str, Any]) -> dict[str, Any]:
    """Copy the indexed/listed fields out of an assignment document."""
    return {
        "account": record.get("accountSubmittedFor") or "",
        "assessment_name": record.get("assessmentName") or "",
        "author": record.get("author") or "",
        "status": record.get("status") or "",
        "school_selector_id": record.get("schoolSelectorId"),
        "completion_date_id": record.get("completionDateId"),
        "completion_time_id": record.get("completionTimeId"),
    }


class AssignmentRepository:
    """Read/write operations on the ``assignments`` table."""

    async def save(
        self,
        db: AsyncSession,
        *,
        record: dict[str, Any],
        document_id: str | None = None,
    ) -> AssignmentDocument:
        """Insert a new document, or overwrite the one with ``document_id``.

        Overwrite replaces the whole document (the editor always submits the
        full question list).  An unknown ``document_id`` is inserted under
        that id.
        """
        columns = _listing_columns(record)

        row = await db.get(AssignmentDocument, document_id) if document_id else None
        if row is None:
            row = AssignmentDocument(
                id=document_id or uuid.uuid4().hex,
                document=record,
                **columns,
            )
            db.add(row)
            logger.debug("Inserting assignment %s", row.id)
        else:
            row.document = record
            for key, value in columns.items():
                setattr(row, key, value)
            row.updated_at = datetime.now(timezone.utc)
            logger.debug("Overwriting assignment %s", row.id)

        await db.flush()
        return row

    async def get_by_id(
        self, db: AsyncSession, document_id: str
    ) -> AssignmentDocument | None:
        return await db.get(AssignmentDocument, document_id)
