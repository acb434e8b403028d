"""assignment_db — PostgreSQL persistence layer for assignment documents.

Provides the ORM model, async engine factory, repository, and the
``SqlAssignmentSink`` that plugs the repository into
``assignment_questions.AssignmentService``.
"""

from assignment_db.engine import dispose_engine, get_engine, get_session_factory
from assignment_db.models.assignment import AssignmentDocument
from assignment_db.repository import AssignmentRepository
from assignment_db.sink import SqlAssignmentSink

__all__ = [
    "AssignmentDocument",
    "AssignmentRepository",
    "SqlAssignmentSink",
    "dispose_engine",
    "get_engine",
    "get_session_factory",
]
