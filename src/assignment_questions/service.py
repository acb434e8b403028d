"""AssignmentService — builds and stores assignment documents.

Wraps the ``QuestionGraphResolver`` with the assignment-level work done on
every create/edit request:

  1. resolve the submitted question drafts
  2. fill assignment metadata defaults (name, dates, frequency, sharing, ...)
  3. hand the finished document to the ``AssignmentSink``

A blank document id means "create"; a given one overwrites that document,
which is how the editor saves changes to an existing assignment.

Usage::

    service = AssignmentService(resolver, SqlAssignmentSink(db))
    stored = await service.save_assignment(
        payload, account="district-9", author="admin@example.org",
    )
    stored.id, stored.record["questions"]
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Callable
from zoneinfo import ZoneInfo

from assignment_questions.constants import (
    ASSIGNMENT_TIMEZONE,
    DEFAULT_ASSESSMENT_NAME,
    DEFAULT_ASSIGNMENT_TYPE,
    DEFAULT_FREQUENCY,
    DEFAULT_STATUS,
)
from assignment_questions.interfaces import AssignmentSink
from assignment_questions.models.assignment import AssignmentPayload, StoredAssignment
from assignment_questions.models.resolution import ResolutionResult
from assignment_questions.resolver import QuestionGraphResolver

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class AssignmentService:
    """Orchestrates resolution and persistence of one assignment.

    Args:
        resolver: the question resolver (stateless, safe to share)
        sink: persistence collaborator for finished documents
        tz_name: IANA zone used for ``createdDate`` / default ``dueDate``
        clock: returns the current aware datetime (injectable for tests)
    """

    def __init__(
        self,
        resolver: QuestionGraphResolver,
        sink: AssignmentSink,
        *,
        tz_name: str = ASSIGNMENT_TIMEZONE,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._resolver = resolver
        self._sink = sink
        self._tz = ZoneInfo(tz_name)
        self._clock = clock

    # ------------------------------------------------------------------
    # Record assembly
    # ------------------------------------------------------------------

    def build_record(
        self,
        payload: AssignmentPayload,
        *,
        account: str,
        author: str,
    ) -> tuple[dict[str, Any], ResolutionResult]:
        """Resolve the questions and assemble the assignment document.

        Returns the document together with the full resolution result so
        callers can report anomalies.
        """
        now = self._clock()
        today = now.astimezone(self._tz).strftime("%m-%d-%Y")

        result = self._resolver.resolve(payload.content)

        record: dict[str, Any] = {
            "accountSubmittedFor": account,
            "assessmentName": payload.assessment_name or DEFAULT_ASSESSMENT_NAME,
            "assignmentAdminArray": payload.assignment_admin_array or [],
            "createdDate": today,
            "dueDate": payload.due_date or today,
            "frequency": payload.frequency or DEFAULT_FREQUENCY,
            "assignmentType": payload.assignment_type or DEFAULT_ASSIGNMENT_TYPE,
            "author": author,
            "description": (
                payload.description or f"Assignment created by {author} on {today}."
            ),
            "communityShare": payload.community_share is True,
            "shareWith": payload.share_with or {"assignToUsers": [author]},
            "status": payload.status or DEFAULT_STATUS,
            "timeStamp": now.astimezone(timezone.utc).isoformat(),
            "questions": result.question_documents(),
            "schoolSelectorId": result.school_selector_id,
            "completionDateId": result.completion_date_id,
            "completionTimeId": result.completion_time_id,
        }
        return record, result

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    async def save_assignment(
        self,
        payload: AssignmentPayload,
        *,
        account: str,
        author: str,
        document_id: str | None = None,
    ) -> StoredAssignment:
        """Resolve, build, and store an assignment; return the stored document.

        ``document_id`` takes precedence over ``payload.id``.  Sink errors
        are logged and re-raised.
        """
        target_id = (document_id or payload.id or "").strip() or None
        record, result = self.build_record(payload, account=account, author=author)

        try:
            stored_id = await self._sink.save(record, target_id)
        except Exception:
            logger.error(
                "Failed to store assignment %r for account %s",
                target_id or record["assessmentName"],
                account,
                exc_info=True,
            )
            raise

        logger.info(
            "Assignment %s stored for account %s (%d questions, %s)",
            stored_id,
            account,
            len(result.questions),
            "overwrite" if target_id else "create",
        )
        return StoredAssignment(id=stored_id, record=record, anomalies=result.anomalies)
