"""Dependency reorderer — second stage of question resolution.

Ensures a conditional question follows the question it depends on, using a
single best-effort pass:

  - drafts are visited in their original submission order
  - the parent is the first draft whose client id or local id equals the
    child's ``conditional.field`` (still the client-side identifier here)
  - if that parent currently sits *after* the child, the child is removed
    and reinserted immediately after the parent
  - missing parents and parents already before the child leave the list as-is

Moves are not repaired afterwards.  Chained conditionals (C depends on B,
B depends on A, submitted as C, B, A) can therefore still end with a child
ahead of its parent; the numbering engine degrades those to "0"-prefixed
numbers.  Replacing this with a topological sort would change the numbers
existing assignments were stored with.
"""

from __future__ import annotations

import logging

from assignment_questions.models.draft import NormalizedDraft

logger = logging.getLogger(__name__)


def find_draft_index(drafts: list[NormalizedDraft], identifier: str) -> int | None:
    """Index of the first draft whose client id or local id is ``identifier``."""
    for index, draft in enumerate(drafts):
        if identifier in draft.aliases:
            return index
    return None


def _index_of_position(drafts: list[NormalizedDraft], position: int) -> int:
    for index, draft in enumerate(drafts):
        if draft.position == position:
            return index
    raise LookupError(f"draft at submission position {position} missing from working list")


def move_after(
    drafts: list[NormalizedDraft], child_index: int, parent_index: int
) -> list[NormalizedDraft]:
    """Return a new list with the child moved to immediately follow the parent.

    Only valid when ``parent_index > child_index``: removing the child
    shifts the parent one slot left, so the child lands at ``parent_index``.
    """
    child = drafts[child_index]
    without = drafts[:child_index] + drafts[child_index + 1:]
    parent_after_removal = parent_index - 1
    insert_at = parent_after_removal + 1
    return without[:insert_at] + [child] + without[insert_at:]


def reorder_by_dependency(drafts: list[NormalizedDraft]) -> list[NormalizedDraft]:
    """Apply the single reordering pass and renumber ``order`` 1..N."""
    working = list(drafts)
    moves = 0

    for draft in drafts:
        if draft.conditional is None:
            continue
        child_index = _index_of_position(working, draft.position)
        parent_index = find_draft_index(working, draft.conditional.field)
        if parent_index is None or parent_index <= child_index:
            continue
        working = move_after(working, child_index, parent_index)
        moves += 1
        logger.debug(
            "Moved draft %d after its parent %r (index %d -> %d)",
            draft.position,
            draft.conditional.field,
            child_index,
            parent_index,
        )

    if moves:
        logger.info("Dependency reorder moved %d of %d drafts", moves, len(drafts))
    return [d.model_copy(update={"order": i + 1}) for i, d in enumerate(working)]
