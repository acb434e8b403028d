"""Resolved question models — the permanent, storage-ready question shape.

A ``ResolvedQuestion`` is produced for every submitted draft once the
resolver has assigned it a permanent ``id``, its final ``order``, and a
hierarchical ``questionNumber``:

  - top-level questions are numbered "1", "2", "3", ...
  - conditional questions append a sub-index to their parent's number:
    "3a", "3b", ... "3z", then "327" for a 27th child; a child of "3a" is
    numbered "3aa"

All models serialise with camelCase keys (``model_dump(by_alias=True)``) so
the stored document matches what the forms editor and the completion views
read back.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class OptionEntry(BaseModel):
    """A selectable value for option-set components (radio, select, ...)."""

    component: Literal["option"] = "option"
    label: str
    value: str


class ResolvedConditional(BaseModel):
    """Visibility link to an earlier question, by permanent id."""

    field: str
    value: str | list[str] = ""


class ResolvedQuestion(BaseModel):
    """One finalised question, in final storage order."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    order: int
    question_number: str
    label: str
    component: str
    page_number: int
    required: bool = False
    comment: bool = False
    photo_upload: bool = False
    criticality: str
    options: list[OptionEntry] = []
    # Absent for top-level questions and for children whose parent could not
    # be placed before them.
    conditional: ResolvedConditional | None = None

    # --- Pass-through attributes (copied, not interpreted) ---
    assigned_to_email: list[str] | None = None
    assigned_to_role: str | None = None
    assigned_to_locations: list[str] = []
    category: str | None = None
    sub_category: str | None = None
    section: str | None = None
    sub_section: str | None = None
    observation_location: str | None = None
    deficiency_label: str | None = None
    deficiency_values: list[str] | None = None
    ai_deficiency_check: bool | None = None
    # Legacy per-question business key (``questionId`` on the draft)
    original_question_id: str | None = None

    def to_document(self) -> dict:
        """Serialise for storage: camelCase keys, absent attributes omitted."""
        return self.model_dump(by_alias=True, exclude_none=True)
