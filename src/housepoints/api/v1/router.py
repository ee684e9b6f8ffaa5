"""Primary API router definition."""

from fastapi import APIRouter

from . import awards, backup, badges, bingo, groups, leaderboard, students

api_router = APIRouter()

api_router.include_router(students.router)
api_router.include_router(groups.router)
api_router.include_router(awards.router)
api_router.include_router(badges.router)
api_router.include_router(leaderboard.router)
api_router.include_router(bingo.router)
api_router.include_router(backup.router)


@api_router.get("/health", tags=["health"])
async def healthcheck() -> dict[str, str]:
    """Basic health probe endpoint."""
    return {"status": "ok"}
