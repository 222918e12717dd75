"""
API Router.

Aggregates the routers served under /api.
"""

from fastapi import APIRouter

from todo_tracker.api import todos

router = APIRouter()

# Todo endpoints
router.include_router(todos.router, prefix="/todos", tags=["todos"])
