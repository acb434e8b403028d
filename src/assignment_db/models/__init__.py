"""ORM models for assignment_db."""

from assignment_db.models.assignment import AssignmentDocument
from assignment_db.models.base import Base

__all__ = ["Base", "AssignmentDocument"]
