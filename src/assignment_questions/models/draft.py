"""Question draft models — the untrusted, client-submitted question shape.

Drafts arrive from the forms editor (or a CSV import) in submission order.
They may carry:

  - a client identifier (``clientId``, historically sent as ``_uid``) and/or
    a draft-local ``id``; either may be a temporary placeholder such as
    ``new-3`` or ``#12``
  - conditional logic in one of two shapes:
      * nested:  ``{"conditional": {"field": "<id>", "value": "Yes"}}``
      * legacy:  ``{"conditionalQuestionId": "<id>",
                    "conditionalQuestionValue": "Yes"}``
  - options as a list or as a ``;``-delimited string

``QuestionDraft`` accepts all of these as-is.  The intake normalizer turns
each into a ``NormalizedDraft`` whose ``conditional`` is the single canonical
``ConditionalLink`` every later stage reads.
"""

from __future__ import annotations

import logging
from typing import Any, Literal

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    field_validator,
)
from pydantic.alias_generators import to_camel

from assignment_questions.constants import DEFAULT_PAGE_NUMBER, PLACEHOLDER_ID_PREFIX

from .question import OptionEntry

logger = logging.getLogger(__name__)


def _is_number(v: Any) -> bool:
    return isinstance(v, (int, float)) and not isinstance(v, bool)


def _scalar_to_str(v: Any) -> str | None:
    """Strings as-is, numbers stringified (editors send numeric ids); else None."""
    if isinstance(v, str):
        return v
    if _is_number(v):
        return str(v)
    return None


def _drop(field_name: str | None, v: Any) -> None:
    logger.warning("Ignoring unusable %s value of type %s", field_name, type(v).__name__)
    return None


def _text_or_none(v: Any, field_name: str | None) -> str | None:
    if v is None:
        return None
    text = _scalar_to_str(v)
    if text is None:
        return _drop(field_name, v)
    return text


def _text_list_or_none(v: Any, field_name: str | None) -> str | list[str] | None:
    """Keep a string or a list of strings; unusable list items are dropped."""
    if v is None or isinstance(v, str):
        return v
    if _is_number(v):
        return str(v)
    if not isinstance(v, (list, tuple)):
        return _drop(field_name, v)
    items: list[str] = []
    for item in v:
        text = _scalar_to_str(item)
        if text is None:
            if item is not None:
                _drop(field_name, item)
            continue
        items.append(text)
    return items


class ConditionalLink(BaseModel):
    """Canonical conditional linkage: show this question when ``field`` == ``value``.

    ``origin`` tags which client shape produced the link.  It is kept for
    logging only and never serialised.
    """

    field: str = ""
    value: str | list[str] = ""
    origin: Literal["nested", "legacy"] = Field(default="nested", exclude=True)

    @field_validator("field", mode="before")
    @classmethod
    def _field_str(cls, v: Any, info: ValidationInfo) -> Any:
        return _text_or_none(v, info.field_name) or ""

    @field_validator("value", mode="before")
    @classmethod
    def _value_str(cls, v: Any, info: ValidationInfo) -> Any:
        value = _text_list_or_none(v, info.field_name)
        return "" if value is None else value


class QuestionDraft(BaseModel):
    """A question definition as submitted by the client."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    # --- Identity ---
    client_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("clientId", "_uid", "client_id"),
    )
    id: str | None = None
    # Legacy per-question business key, stored as originalQuestionId
    question_id: str | None = None

    # --- Presentation ---
    label: str | None = None
    component: str | None = None
    page_number: int | None = None
    order: int | None = None
    options: str | list[Any] | None = None

    # --- Conditional logic (nested and legacy flattened shapes) ---
    conditional: ConditionalLink | None = None
    conditional_question_id: str | None = None
    conditional_question_value: str | list[str] | None = None

    # --- Pass-through attributes ---
    required: bool | None = None
    comment: bool | None = None
    photo_upload: bool | None = None
    criticality: str | None = None
    assigned_to_email: str | list[str] | None = None
    assigned_to_role: str | None = None
    assigned_to_locations: str | list[str] | None = None
    category: str | None = None
    sub_category: str | None = None
    section: str | None = None
    sub_section: str | None = None
    observation_location: str | None = None
    deficiency_label: str | None = None
    deficiency_values: list[str] | None = None
    ai_deficiency_check: bool | None = None

    # Pass-through attributes are copied, not interpreted: a value of the
    # wrong type is stringified or dropped, never fatal to the whole request.
    @field_validator(
        "client_id",
        "id",
        "question_id",
        "conditional_question_id",
        "label",
        "component",
        "criticality",
        "assigned_to_role",
        "category",
        "sub_category",
        "section",
        "sub_section",
        "observation_location",
        "deficiency_label",
        mode="before",
    )
    @classmethod
    def _lenient_text(cls, v: Any, info: ValidationInfo) -> Any:
        return _text_or_none(v, info.field_name)

    @field_validator(
        "assigned_to_email",
        "assigned_to_locations",
        "conditional_question_value",
        mode="before",
    )
    @classmethod
    def _lenient_text_list(cls, v: Any, info: ValidationInfo) -> Any:
        return _text_list_or_none(v, info.field_name)

    @field_validator("options", mode="before")
    @classmethod
    def _lenient_options(cls, v: Any, info: ValidationInfo) -> Any:
        # List entries may be mappings; intake interprets those
        if v is None or isinstance(v, (str, list)):
            return v
        if isinstance(v, tuple):
            return list(v)
        return _text_or_none(v, info.field_name)

    @field_validator("conditional", mode="before")
    @classmethod
    def _blank_conditional(cls, v: Any) -> Any:
        # The editor blanks the nested object to "" when it sends the legacy pair
        if isinstance(v, (dict, ConditionalLink)):
            return v
        return None

    @field_validator("page_number", "order", mode="before")
    @classmethod
    def _lenient_int(cls, v: Any) -> Any:
        # Unparseable hints fall back to the defaults applied at intake
        if v is None or v == "" or isinstance(v, bool):
            return None
        try:
            return int(v)
        except (TypeError, ValueError):
            return None

    @field_validator("required", "comment", "photo_upload", "ai_deficiency_check", mode="before")
    @classmethod
    def _lenient_bool(cls, v: Any) -> Any:
        if isinstance(v, bool) or v is None:
            return v
        if isinstance(v, str) and v.strip().lower() in {"true", "false"}:
            return v.strip().lower() == "true"
        return None

    @field_validator("deficiency_values", mode="before")
    @classmethod
    def _list_only(cls, v: Any) -> Any:
        if isinstance(v, (list, tuple)):
            return [str(item) for item in v]
        return None


class NormalizedDraft(BaseModel):
    """A draft after intake, carrying the canonical fields later stages read.

    ``position`` is the 0-based index in the submitted list and identifies
    the draft through reordering.  ``resolved_id`` is filled in by the
    identifier resolver.
    """

    position: int
    draft: QuestionDraft
    client_id: str | None = None
    local_id: str | None = None
    page_number: int = DEFAULT_PAGE_NUMBER
    order: int
    conditional: ConditionalLink | None = None
    options: list[OptionEntry] = []
    assigned_to_email: list[str] | None = None
    assigned_to_locations: list[str] = []
    resolved_id: str | None = None

    @property
    def aliases(self) -> tuple[str, ...]:
        """Non-empty identifiers other drafts may use to reference this one."""
        out: list[str] = []
        for ident in (self.client_id, self.local_id):
            if ident and ident not in out:
                out.append(ident)
        return tuple(out)

    @property
    def originating_id(self) -> str:
        """Client id, else local id, else a synthesized placeholder."""
        return self.client_id or self.local_id or f"{PLACEHOLDER_ID_PREFIX}{self.position}"
