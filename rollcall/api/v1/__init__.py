"""API routes. Everything under /students sits behind the request gate."""

from fastapi import APIRouter, Depends

from rollcall.api.gate import require_identity
from rollcall.api.v1 import health, students, users

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(
    students.router,
    prefix="/students",
    tags=["students"],
    dependencies=[Depends(require_identity)],
)
