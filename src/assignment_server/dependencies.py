"""FastAPI dependencies — DB sessions, the resolver, the service, caller identity.

``get_db`` owns the transaction: repository methods only flush, so the
commit (or rollback) for a request happens here.
"""

import hmac
from typing import AsyncGenerator

from fastapi import Depends, Header, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession

from assignment_db.engine import get_session_factory
from assignment_db.sink import SqlAssignmentSink
from assignment_questions.interfaces import AssignmentSink
from assignment_questions.resolver import QuestionGraphResolver
from assignment_questions.service import AssignmentService


# ------------------------------------------------------------------
# Database session (transaction boundary)
# ------------------------------------------------------------------

async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield an async DB session; commit on success, rollback on error."""
    factory = get_session_factory()
    async with factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


# ------------------------------------------------------------------
# Resolver, sink & service
# ------------------------------------------------------------------

def get_resolver(request: Request) -> QuestionGraphResolver:
    """Return the resolver singleton from ``app.state``."""
    return request.app.state.resolver


def get_sink(db: AsyncSession = Depends(get_db)) -> AssignmentSink:
    return SqlAssignmentSink(db)


def get_service(
    resolver: QuestionGraphResolver = Depends(get_resolver),
    sink: AssignmentSink = Depends(get_sink),
) -> AssignmentService:
    return AssignmentService(resolver, sink)


# ------------------------------------------------------------------
# Caller identity from X-User-Email and Account headers
# ------------------------------------------------------------------

async def get_author_email(
    request: Request,
    x_user_email: str | None = Header(None, alias="X-User-Email"),
    x_proxy_secret: str | None = Header(None, alias="X-Proxy-Secret"),
) -> str:
    """Return the caller's email from ``X-User-Email`` (401 when missing).

    When ``TRUSTED_PROXY_SECRET`` is configured the request must also carry
    a matching ``X-Proxy-Secret`` (403 otherwise).
    """
    if not x_user_email:
        raise HTTPException(status_code=401, detail="X-User-Email header is required")

    expected_secret: str | None = request.app.state.settings.trusted_proxy_secret
    if expected_secret:
        if not x_proxy_secret:
            raise HTTPException(status_code=403, detail="X-Proxy-Secret header is required")
        if not hmac.compare_digest(x_proxy_secret, expected_secret):
            raise HTTPException(status_code=403, detail="Invalid proxy secret")

    return x_user_email


async def get_account(account: str | None = Header(None, alias="Account")) -> str:
    """Return the account the assignment is submitted for (403 when missing)."""
    if not account or not account.strip():
        raise HTTPException(status_code=403, detail="Account header is required")
    return account.strip()
