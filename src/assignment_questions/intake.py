"""Intake normalizer — first stage of question resolution.

Turns the raw ``content`` list of a create/edit request into
``NormalizedDraft`` objects:

  - absent content becomes an empty list; anything that is not a list is
    rejected with ``ValueError``
  - ``pageNumber`` defaults to 1 and ``order`` to the submission index
  - nested and legacy-flattened conditional logic collapse into one
    canonical ``ConditionalLink``
  - options and routing fields given as ``;``-delimited strings become lists
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from assignment_questions.constants import DEFAULT_PAGE_NUMBER, LIST_DELIMITER
from assignment_questions.models.draft import ConditionalLink, NormalizedDraft, QuestionDraft
from assignment_questions.models.question import OptionEntry

logger = logging.getLogger(__name__)


def coerce_draft_list(raw: Any) -> list[QuestionDraft]:
    """Validate the raw request content into a list of ``QuestionDraft``.

    Raises ``ValueError`` (or pydantic's ``ValidationError``, a subclass)
    when the content is not a list or an element is not a question object.
    """
    if raw is None:
        return []
    if not isinstance(raw, (list, tuple)):
        # Rejected rather than coerced to [], which would silently save an
        # assignment with no questions
        raise ValueError(
            f"Question content must be a list of question drafts, got {type(raw).__name__}"
        )

    drafts: list[QuestionDraft] = []
    for index, item in enumerate(raw):
        if isinstance(item, QuestionDraft):
            drafts.append(item)
            continue
        if not isinstance(item, dict):
            raise ValueError(
                f"Question draft at index {index} must be an object, got {type(item).__name__}"
            )
        try:
            drafts.append(QuestionDraft.model_validate(item))
        except ValidationError:
            logger.warning("Invalid question draft at index %d", index)
            raise
    return drafts


def split_delimited(value: str | list[Any] | None) -> list[str]:
    """Split a ``;``-delimited string (or clean a list) into trimmed, non-empty items."""
    if value is None:
        return []
    if isinstance(value, str):
        items: list[Any] = value.split(LIST_DELIMITER)
    else:
        items = list(value)
    return [str(item).strip() for item in items if item is not None and str(item).strip()]


def normalize_options(raw: str | list[Any] | None) -> list[OptionEntry]:
    """Normalize options into ``{component: "option", label, value}`` entries.

    ``"Yes;No; Maybe"`` and ``["Yes", "No", "Maybe"]`` produce the same
    list.  Mapping entries (``{"label": ..., "value": ...}``) keep their
    value, defaulting it to the label.
    """
    if raw is None:
        return []
    items = raw.split(LIST_DELIMITER) if isinstance(raw, str) else list(raw)

    options: list[OptionEntry] = []
    for item in items:
        if isinstance(item, dict):
            label = str(item.get("label") or item.get("value") or "").strip()
            value = str(item.get("value") or label).strip()
        elif item is None:
            continue
        else:
            label = str(item).strip()
            value = label
        if not label:
            continue
        options.append(OptionEntry(label=label, value=value))
    return options


def normalize_conditional(draft: QuestionDraft) -> ConditionalLink | None:
    """Return the canonical conditional link for a draft, or None.

    The legacy flattened pair takes precedence over the nested object: the
    assignment editor sends the legacy pair and blanks the nested field.
    A link with an empty ``field`` means "no conditional".
    """
    if draft.conditional_question_id:
        return ConditionalLink(
            field=draft.conditional_question_id,
            value=draft.conditional_question_value or "",
            origin="legacy",
        )
    if draft.conditional is not None and draft.conditional.field:
        return ConditionalLink(
            field=draft.conditional.field,
            value=draft.conditional.value,
            origin="nested",
        )
    return None


def normalize_drafts(raw: Any) -> list[NormalizedDraft]:
    """Run intake over raw request content.  See module docstring."""
    drafts = coerce_draft_list(raw)

    normalized: list[NormalizedDraft] = []
    for position, draft in enumerate(drafts):
        routed_emails = (
            split_delimited(draft.assigned_to_email)
            if draft.assigned_to_email is not None
            else None
        )
        normalized.append(
            NormalizedDraft(
                position=position,
                draft=draft,
                client_id=draft.client_id or None,
                local_id=draft.id or None,
                page_number=(
                    draft.page_number if draft.page_number is not None else DEFAULT_PAGE_NUMBER
                ),
                order=draft.order if draft.order is not None else position + 1,
                conditional=normalize_conditional(draft),
                options=normalize_options(draft.options),
                assigned_to_email=routed_emails,
                assigned_to_locations=split_delimited(draft.assigned_to_locations),
            )
        )

    logger.debug(
        "Intake normalized %d drafts (%d conditional)",
        len(normalized),
        sum(1 for d in normalized if d.conditional is not None),
    )
    return normalized
