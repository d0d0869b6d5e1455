"""
Database queries, grouped by area.

Every function takes the Database it should use as its first argument.

Module organization:
- progress.py: XP source aggregates
- habits.py: Daily habit logs
- exercises.py: Exercise catalogue and media coverage
"""

from fitscore.db.queries.progress import get_experience_inputs
from fitscore.db.queries.habits import (
    get_habit_logs_since,
    get_habit_logs_between,
    get_habit_logs_for_week,
    upsert_habit_log,
)
from fitscore.db.queries.exercises import get_active_exercises, get_public_media_counts

__all__ = [
    "get_experience_inputs",
    "get_habit_logs_since",
    "get_habit_logs_between",
    "get_habit_logs_for_week",
    "upsert_habit_log",
    "get_active_exercises",
    "get_public_media_counts",
]
