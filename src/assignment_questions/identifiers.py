"""Identifier resolver — third stage of question resolution.

Gives every draft a permanent id and rewrites conditional references:

  - a non-temporary originating id (client id, else local id) is kept, so
    a question keeps its id across edits of the same assignment
  - temporary ids (``#...``, ``new-...``, see ``TEMP_ID_PREFIXES``) and
    missing ids get a freshly minted id, taken from a pool generated up
    front and falling back to one-at-a-time generation
  - as soon as a draft's id is settled, every ``conditional.field`` in the
    *whole* list that still points at one of its old aliases is rewritten,
    including drafts that were already processed

This stage has no failure mode of its own; only errors raised by the
injected ``IdGenerator`` propagate.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field

from assignment_questions.constants import TEMP_ID_PREFIXES
from assignment_questions.interfaces import IdGenerator
from assignment_questions.models.draft import NormalizedDraft
from assignment_questions.models.resolution import ResolutionAnomaly

logger = logging.getLogger(__name__)

# Generators are contractually unique; this only guards against a broken one
_MAX_MINT_ATTEMPTS = 5


class UuidIdGenerator(IdGenerator):
    """Default generator: 32-character hex UUID4 strings."""

    def generate_ids(self, count: int) -> list[str]:
        if count < 0:
            raise ValueError(f"Identifier count must be non-negative, got {count}")
        return [uuid.uuid4().hex for _ in range(count)]


def is_temporary_id(identifier: str | None, prefixes: tuple[str, ...] = TEMP_ID_PREFIXES) -> bool:
    """True if ``identifier`` is empty or a client-side placeholder."""
    if not identifier:
        return True
    return any(identifier.startswith(prefix) for prefix in prefixes)


@dataclass
class IdentifierResolution:
    """Output of :meth:`IdentifierResolver.resolve`."""

    drafts: list[NormalizedDraft]
    # old (client-side) identifier -> permanent id, only where they differ
    id_map: dict[str, str] = field(default_factory=dict)
    anomalies: list[ResolutionAnomaly] = field(default_factory=list)


class IdentifierResolver:
    """Assigns permanent ids and keeps conditional references pointing at them.

    Args:
        generator: collaborator used to mint new ids
        temp_prefixes: prefixes marking placeholder ids (defaults to
            ``TEMP_ID_PREFIXES``)
    """

    def __init__(
        self,
        generator: IdGenerator,
        temp_prefixes: tuple[str, ...] | None = None,
    ) -> None:
        self._generator = generator
        self._temp_prefixes = temp_prefixes if temp_prefixes is not None else TEMP_ID_PREFIXES

    def resolve(self, drafts: list[NormalizedDraft]) -> IdentifierResolution:
        """Resolve ids for drafts already in final order."""
        pool = list(self._generator.generate_ids(len(drafts)))
        if len(pool) < len(drafts):
            logger.warning(
                "Id generator returned %d of %d requested ids; minting the rest on demand",
                len(pool),
                len(drafts),
            )

        working = list(drafts)
        claimed: set[str] = set()
        result = IdentifierResolution(drafts=working)

        for index in range(len(working)):
            draft = working[index]
            originating = draft.originating_id

            permanent: str | None = None
            if not is_temporary_id(originating, self._temp_prefixes):
                if originating in claimed:
                    result.anomalies.append(
                        ResolutionAnomaly(
                            kind="duplicate_identifier",
                            question_id=originating,
                            detail=f"draft at submission position {draft.position} reuses an id",
                        )
                    )
                    logger.warning(
                        "Duplicate question id %r at submission position %d; minting a new id",
                        originating,
                        draft.position,
                    )
                else:
                    permanent = originating
            if permanent is None:
                permanent = self._mint(pool, index, claimed)

            claimed.add(permanent)
            working[index] = draft.model_copy(update={"resolved_id": permanent})
            if not draft.aliases:
                # Placeholder ids cannot be referenced; record them for tracing only
                result.id_map[originating] = permanent

            # Aliases another draft already owns as a permanent id must keep
            # pointing at that draft.
            stale = [alias for alias in draft.aliases if alias != permanent and alias not in claimed]
            if not stale:
                continue
            for alias in stale:
                result.id_map.setdefault(alias, permanent)
            working[:] = [_rewrite_reference(d, stale, permanent) for d in working]

        logger.debug(
            "Resolved %d question ids (%d remapped)", len(working), len(result.id_map)
        )
        return result

    def _mint(self, pool: list[str], index: int, claimed: set[str]) -> str:
        """Take the pooled id for ``index`` if usable, else generate one."""
        if index < len(pool):
            candidate = pool[index]
            if isinstance(candidate, str) and candidate and candidate not in claimed:
                return candidate
            logger.warning("Pooled id slot %d unusable (%r); generating on demand", index, candidate)

        for _ in range(_MAX_MINT_ATTEMPTS):
            candidate = self._generator.generate_id()
            if candidate and candidate not in claimed:
                return candidate
        raise RuntimeError(
            f"{type(self._generator).__name__} failed to produce a unique identifier "
            f"after {_MAX_MINT_ATTEMPTS} attempts"
        )


def _rewrite_reference(
    draft: NormalizedDraft, stale: list[str], permanent: str
) -> NormalizedDraft:
    if draft.conditional is None or draft.conditional.field not in stale:
        return draft
    conditional = draft.conditional.model_copy(update={"field": permanent})
    return draft.model_copy(update={"conditional": conditional})
