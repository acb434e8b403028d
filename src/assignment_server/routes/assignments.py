"""Assignment endpoints — create and edit.

Both endpoints take the full assignment body, re-resolve its whole question
list, and store the result.  Edits overwrite the stored document.
"""

from fastapi import APIRouter, Depends

from assignment_questions.models.assignment import AssignmentPayload, StoredAssignment
from assignment_questions.service import AssignmentService

from assignment_server.dependencies import get_account, get_author_email, get_service

router = APIRouter(tags=["assignments"])


@router.post("/assignments", status_code=201)
async def create_assignment(
    body: AssignmentPayload,
    author: str = Depends(get_author_email),
    account: str = Depends(get_account),
    service: AssignmentService = Depends(get_service),
) -> StoredAssignment:
    """Create an assignment.

    A non-blank ``id`` in the body stores the document under that id.
    Returns 201 with the stored document and any resolution anomalies.
    """
    return await service.save_assignment(body, account=account, author=author)


@router.put("/assignments/{assignment_id}")
async def update_assignment(
    assignment_id: str,
    body: AssignmentPayload,
    author: str = Depends(get_author_email),
    account: str = Depends(get_account),
    service: AssignmentService = Depends(get_service),
) -> StoredAssignment:
    """Overwrite an assignment with a freshly resolved document."""
    return await service.save_assignment(
        body, account=account, author=author, document_id=assignment_id,
    )
