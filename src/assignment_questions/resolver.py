"""QuestionGraphResolver — turns submitted question drafts into storable questions.

Runs once per assignment create/edit request.  Each stage consumes and
fully rewrites the in-memory list before handing it on:

    1. intake      — defaults, canonical conditional links, option lists
    2. reorder     — single best-effort pass placing children after parents
    3. identifiers — permanent ids + rewriting of conditional references
    4. numbering   — "1", "2", "2a", ... and the final question objects
    5. projector   — schoolSelectorId / completionDateId / completionTimeId

The resolver holds no per-request state and performs no I/O; the only
non-determinism is the injected ``IdGenerator``.

Usage::

    resolver = QuestionGraphResolver(UuidIdGenerator())
    result = resolver.resolve(body["content"])
    result.questions[0].question_number   # "1"
"""

from __future__ import annotations

import logging
from typing import Any

from assignment_questions.identifiers import IdentifierResolver, UuidIdGenerator
from assignment_questions.interfaces import IdGenerator
from assignment_questions.intake import normalize_drafts
from assignment_questions.models.resolution import ResolutionResult
from assignment_questions.numbering import number_questions
from assignment_questions.projector import project_metadata
from assignment_questions.reorder import reorder_by_dependency

logger = logging.getLogger(__name__)


class QuestionGraphResolver:
    """Resolves a submitted question list into a numbered, dependency-ordered list.

    Args:
        id_generator: mints permanent ids; defaults to :class:`UuidIdGenerator`
        temp_prefixes: placeholder-id prefixes; defaults to ``TEMP_ID_PREFIXES``
    """

    def __init__(
        self,
        id_generator: IdGenerator | None = None,
        temp_prefixes: tuple[str, ...] | None = None,
    ) -> None:
        self._identifiers = IdentifierResolver(
            id_generator or UuidIdGenerator(),
            temp_prefixes=temp_prefixes,
        )

    def resolve(self, question_drafts: Any) -> ResolutionResult:
        """Resolve ``question_drafts`` (a list of draft objects, or None).

        Raises ``ValueError`` only for content that is not a list of question
        objects.  Malformed conditional wiring never raises; it is reported
        in ``ResolutionResult.anomalies``.
        """
        drafts = normalize_drafts(question_drafts)
        drafts = reorder_by_dependency(drafts)
        identified = self._identifiers.resolve(drafts)
        numbered = number_questions(identified.drafts)
        metadata = project_metadata(numbered.questions)

        anomalies = identified.anomalies + numbered.anomalies
        if anomalies:
            logger.warning(
                "Resolved %d questions with %d anomalies", len(numbered.questions), len(anomalies)
            )
        else:
            logger.debug("Resolved %d questions", len(numbered.questions))

        return ResolutionResult(
            questions=numbered.questions,
            anomalies=anomalies,
            school_selector_id=metadata.school_selector_id,
            completion_date_id=metadata.completion_date_id,
            completion_time_id=metadata.completion_time_id,
        )
