"""Scheduled retention sweeps."""

from .notifications import sweep_expired_notifications
from .recipes import RecipeSweepResult, compute_keep_set, sweep_stale_recipes

__all__ = [
    "RecipeSweepResult",
    "compute_keep_set",
    "sweep_expired_notifications",
    "sweep_stale_recipes",
]
