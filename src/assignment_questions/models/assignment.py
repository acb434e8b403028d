"""Assignment models — the create/edit request body and the stored result.

``AssignmentPayload`` is what the assignment editor posts.  Everything other
than ``content`` is assignment-level metadata that the service copies into
the stored document with defaults; ``content`` is the raw question draft
list handed to the resolver untouched (the resolver decides what input it
can accept).
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from .resolution import ResolutionAnomaly


class AssignmentPayload(BaseModel):
    """Body for assignment create/edit requests."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    # Caller-chosen document id; blank means "create a new document"
    id: str | None = None
    assessment_name: str | None = None
    assignment_admin_array: list[Any] | None = None
    due_date: str | None = None
    frequency: str | None = None
    assignment_type: str | None = None
    description: str | None = None
    community_share: Any = None
    # {assignToUsers: [...], assignToLocations: {...}, assignToTitles: {...}}
    share_with: dict[str, Any] | None = None
    status: str | None = None
    content: Any = None


class StoredAssignment(BaseModel):
    """An assignment document as handed to (and acknowledged by) the sink."""

    id: str
    record: dict[str, Any]
    # Not stored; reported back to the caller
    anomalies: list[ResolutionAnomaly] = []
