"""Numbering engine — fourth stage of question resolution.

Assigns each question its human-readable hierarchical number while
building the final ``ResolvedQuestion`` list.  The pass is a single fold
over the drafts in final order with all counters held in local state, so
concurrent resolutions never share anything.

Numbering rules:
  - top-level questions take the next integer: "1", "2", "3", ...
  - a conditional question takes its parent's number plus a sub-index
    counted per parent: "2a", "2b", ... "2z", then "227" for the 27th child
  - the parent must already have been numbered in this pass; otherwise the
    parent number falls back to "0" (e.g. "0a") and the conditional link is
    dropped, since stored conditionals may only point at earlier questions
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from assignment_questions.constants import (
    DEFAULT_COMPONENT,
    DEFAULT_CRITICALITY,
    DEFAULT_LABEL,
    ORPHAN_PARENT_NUMBER,
    SUB_INDEX_LETTERS,
)
from assignment_questions.models.draft import NormalizedDraft
from assignment_questions.models.question import ResolvedConditional, ResolvedQuestion
from assignment_questions.models.resolution import ResolutionAnomaly

logger = logging.getLogger(__name__)


def sub_index_suffix(sub_index: int) -> str:
    """Letter for sub-indices 1..26, the bare numeral beyond that."""
    if 1 <= sub_index <= len(SUB_INDEX_LETTERS):
        return SUB_INDEX_LETTERS[sub_index - 1]
    return str(sub_index)


@dataclass
class NumberingOutcome:
    questions: list[ResolvedQuestion] = field(default_factory=list)
    anomalies: list[ResolutionAnomaly] = field(default_factory=list)


@dataclass
class _NumberingState:
    top_level: int = 0
    # parent identifier -> number of children numbered so far
    sub_counters: dict[str, int] = field(default_factory=dict)
    # permanent id -> question numbered earlier in this pass
    numbered: dict[str, ResolvedQuestion] = field(default_factory=dict)


def build_question(
    draft: NormalizedDraft,
    question_number: str,
    conditional: ResolvedConditional | None,
) -> ResolvedQuestion:
    """Assemble the stored question from a resolved draft."""
    raw = draft.draft
    return ResolvedQuestion(
        id=draft.resolved_id,
        order=draft.order,
        question_number=question_number,
        label=raw.label or DEFAULT_LABEL,
        component=raw.component or DEFAULT_COMPONENT,
        page_number=draft.page_number,
        required=raw.required is True,
        comment=raw.comment is True,
        photo_upload=raw.photo_upload is True,
        criticality=raw.criticality or DEFAULT_CRITICALITY,
        options=draft.options,
        conditional=conditional,
        assigned_to_email=draft.assigned_to_email,
        assigned_to_role=raw.assigned_to_role or None,
        assigned_to_locations=draft.assigned_to_locations,
        category=raw.category or None,
        sub_category=raw.sub_category or None,
        section=raw.section or None,
        sub_section=raw.sub_section or None,
        observation_location=raw.observation_location or None,
        deficiency_label=raw.deficiency_label or None,
        deficiency_values=raw.deficiency_values,
        ai_deficiency_check=raw.ai_deficiency_check,
        original_question_id=raw.question_id or None,
    )


def number_questions(drafts: list[NormalizedDraft]) -> NumberingOutcome:
    """Number resolved drafts (final order) and build the output questions."""
    known_ids = {d.resolved_id for d in drafts}
    state = _NumberingState()
    outcome = NumberingOutcome()

    for draft in drafts:
        if draft.resolved_id is None:
            raise ValueError(
                f"Draft at submission position {draft.position} has no resolved id; "
                "identifiers must be resolved before numbering"
            )

        link = draft.conditional
        conditional: ResolvedConditional | None = None
        if link is None:
            state.top_level += 1
            number = str(state.top_level)
        else:
            parent = state.numbered.get(link.field)
            sub_index = state.sub_counters.get(link.field, 0) + 1
            state.sub_counters[link.field] = sub_index
            if parent is not None:
                number = parent.question_number + sub_index_suffix(sub_index)
                conditional = ResolvedConditional(field=link.field, value=link.value)
            else:
                number = ORPHAN_PARENT_NUMBER + sub_index_suffix(sub_index)
                kind = "forward_parent" if link.field in known_ids else "unknown_parent"
                outcome.anomalies.append(
                    ResolutionAnomaly(
                        kind=kind,
                        question_id=draft.resolved_id,
                        reference=link.field,
                        detail=f"numbered {number}; conditional ({link.origin}) dropped",
                    )
                )
                logger.warning(
                    "Parent question %r for conditional question %s not numbered yet (%s); "
                    "using %s",
                    link.field,
                    draft.resolved_id,
                    kind,
                    number,
                )

        question = build_question(draft, number, conditional)
        state.numbered[question.id] = question
        outcome.questions.append(question)

    return outcome
