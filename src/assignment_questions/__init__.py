"""assignment_questions — assignment question graph resolution SDK.

Public API:
    QuestionGraphResolver — turns submitted question drafts into permanent,
                            dependency-ordered, hierarchically numbered questions
    AssignmentService     — resolves + stores a whole assignment document
    UuidIdGenerator       — default permanent-id generator
    ResolutionResult      — resolver output (questions + projected role ids)
    ResolvedQuestion      — one finalised question
    QuestionDraft         — one submitted question, as received

Collaborator interfaces:
    IdGenerator           — ABC for minting permanent question ids
    AssignmentSink        — ABC for storing finished assignment documents
"""

from assignment_questions.identifiers import UuidIdGenerator, is_temporary_id
from assignment_questions.interfaces import AssignmentSink, IdGenerator
from assignment_questions.models.assignment import AssignmentPayload, StoredAssignment
from assignment_questions.models.draft import QuestionDraft
from assignment_questions.models.question import ResolvedQuestion
from assignment_questions.models.resolution import ResolutionAnomaly, ResolutionResult
from assignment_questions.resolver import QuestionGraphResolver
from assignment_questions.service import AssignmentService

__all__ = [
    # Resolver & service
    "QuestionGraphResolver",
    "AssignmentService",
    "UuidIdGenerator",
    "is_temporary_id",
    # Interfaces
    "IdGenerator",
    "AssignmentSink",
    # Models
    "AssignmentPayload",
    "QuestionDraft",
    "ResolutionAnomaly",
    "ResolutionResult",
    "ResolvedQuestion",
    "StoredAssignment",
]
