"""Metadata projector — last stage of question resolution.

Copies the ids of role-bearing questions into top-level assignment
attributes so completion views can find them without scanning:

    schoolSelector  -> schoolSelectorId
    completionDate  -> completionDateId
    completionTime  -> completionTimeId

If several questions share a role the last one in final order wins.
"""

from __future__ import annotations

import logging

from assignment_questions.constants import (
    ROLE_COMPLETION_DATE,
    ROLE_COMPLETION_TIME,
    ROLE_SCHOOL_SELECTOR,
)
from assignment_questions.models.question import ResolvedQuestion
from assignment_questions.models.resolution import ProjectedMetadata

logger = logging.getLogger(__name__)

# component role -> ProjectedMetadata attribute
ROLE_ATTRIBUTES: dict[str, str] = {
    ROLE_SCHOOL_SELECTOR: "school_selector_id",
    ROLE_COMPLETION_DATE: "completion_date_id",
    ROLE_COMPLETION_TIME: "completion_time_id",
}


def project_metadata(questions: list[ResolvedQuestion]) -> ProjectedMetadata:
    """Return the projected role ids for ``questions`` (last one wins)."""
    projected: dict[str, str] = {}
    for question in questions:
        attr = ROLE_ATTRIBUTES.get(question.component)
        if attr is None:
            continue
        if attr in projected:
            logger.info(
                "Multiple %s questions; %s replaces %s",
                question.component,
                question.id,
                projected[attr],
            )
        projected[attr] = question.id
    return ProjectedMetadata(**projected)
