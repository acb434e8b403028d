"""SqlAssignmentSink — stores assignment documents through the repository."""

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from assignment_db.repository import AssignmentRepository
from assignment_questions.interfaces import AssignmentSink


class SqlAssignmentSink(AssignmentSink):
    """``AssignmentSink`` bound to one request-scoped ``AsyncSession``.

    Writes are flushed, not committed; the session owner commits.
    """

    def __init__(self, db: AsyncSession, repo: AssignmentRepository | None = None) -> None:
        self._db = db
        self._repo = repo or AssignmentRepository()

    async def save(self, record: dict[str, Any], document_id: str | None = None) -> str:
        row = await self._repo.save(self._db, record=record, document_id=document_id)
        return row.id
