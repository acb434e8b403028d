"""Resolution result models — what ``QuestionGraphResolver.resolve`` hands back.

The result carries the finalised question list plus three scalar
cross-references (the location selector, completion-date and
completion-time questions).  ``anomalies`` records every degraded path the
resolver took (unknown parents, forward references, duplicate ids) so
callers can surface them; it is not part of the stored assignment.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from .question import ResolvedQuestion

AnomalyKind = Literal[
    "unknown_parent",
    "forward_parent",
    "duplicate_identifier",
]


class ResolutionAnomaly(BaseModel):
    """A non-fatal irregularity found while resolving one question."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    kind: AnomalyKind
    question_id: str
    reference: str | None = None
    detail: str | None = None


class ProjectedMetadata(BaseModel):
    """Top-level assignment attributes pointing at role-bearing questions."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    school_selector_id: str | None = None
    completion_date_id: str | None = None
    completion_time_id: str | None = None


class ResolutionResult(ProjectedMetadata):
    """Finalised question list plus the projected metadata ids."""

    questions: list[ResolvedQuestion] = []
    anomalies: list[ResolutionAnomaly] = []

    def question_documents(self) -> list[dict]:
        """Questions serialised for storage."""
        return [q.to_document() for q in self.questions]
