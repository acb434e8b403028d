"""Route registration — mounts all routers under ``/api/v1``."""

from fastapi import FastAPI

from assignment_server.routes.assignments import router as assignments_router
from assignment_server.routes.questions import router as questions_router

API_PREFIX = "/api/v1"


def register_routes(app: FastAPI) -> None:
    app.include_router(assignments_router, prefix=API_PREFIX)
    app.include_router(questions_router, prefix=API_PREFIX)
