"""Scheduled jobs."""

from .mirror_snapshot import register_scheduler, run_mirror_once

__all__ = ["register_scheduler", "run_mirror_once"]
