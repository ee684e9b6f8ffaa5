"""Service layer exports."""

from . import (
	backup_service,
	badge_service,
	bingo_import_service,
	bingo_service,
	leaderboard_service,
	mirror_service,
	roster_service,
)

__all__ = [
	"backup_service",
	"badge_service",
	"bingo_import_service",
	"bingo_service",
	"leaderboard_service",
	"mirror_service",
	"roster_service",
]
