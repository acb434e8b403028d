"""Question resolution preview — resolve without storing.

Lets the editor show final numbering and flag broken conditional wiring
before the assignment is saved.  Ids minted here are throwaway.
"""

from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from assignment_questions.models.resolution import ResolutionResult
from assignment_questions.resolver import QuestionGraphResolver

from assignment_server.dependencies import get_author_email, get_resolver

router = APIRouter(tags=["questions"])


class ResolveRequest(BaseModel):
    """Body for POST /questions/resolve."""
    content: Any = None


@router.post("/questions/resolve", response_model_exclude_none=True)
async def resolve_questions(
    body: ResolveRequest,
    _author: str = Depends(get_author_email),
    resolver: QuestionGraphResolver = Depends(get_resolver),
) -> ResolutionResult:
    return resolver.resolve(body.content)
