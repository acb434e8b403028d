"""Public model re-exports for assignment_questions.

Consumers should import from ``assignment_questions.models`` rather than
reaching into sub-modules directly.
"""

# --- Drafts (input) ---
from assignment_questions.models.draft import (
    ConditionalLink,
    NormalizedDraft,
    QuestionDraft,
)

# --- Resolved questions (output) ---
from assignment_questions.models.question import (
    OptionEntry,
    ResolvedConditional,
    ResolvedQuestion,
)

# --- Resolution result ---
from assignment_questions.models.resolution import (
    ProjectedMetadata,
    ResolutionAnomaly,
    ResolutionResult,
)

# --- Assignment ---
from assignment_questions.models.assignment import (
    AssignmentPayload,
    StoredAssignment,
)

__all__ = [
    # Drafts
    "ConditionalLink",
    "NormalizedDraft",
    "QuestionDraft",
    # Resolved
    "OptionEntry",
    "ResolvedConditional",
    "ResolvedQuestion",
    # Result
    "ProjectedMetadata",
    "ResolutionAnomaly",
    "ResolutionResult",
    # Assignment
    "AssignmentPayload",
    "StoredAssignment",
]
