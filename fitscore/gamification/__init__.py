"""
Gamification scoring for the fitness platform

Pure scoring functions with no database or framework dependency:
- XP aggregation and leveling
- Habit streaks
- Exercise media priority
"""

from fitscore.gamification.xp_system import (
    aggregate_xp,
    calculate_xp_breakdown,
    calculate_level_from_xp,
    xp_required_for_level,
    detect_level_up,
)
from fitscore.gamification.streak_system import (
    calculate_daily_score,
    calculate_streaks,
    sort_logs_most_recent_first,
)
from fitscore.gamification.media_priority import (
    calculate_priority_score,
    rank_by_priority,
)

__all__ = [
    "aggregate_xp",
    "calculate_xp_breakdown",
    "calculate_level_from_xp",
    "xp_required_for_level",
    "detect_level_up",
    "calculate_daily_score",
    "calculate_streaks",
    "sort_logs_most_recent_first",
    "calculate_priority_score",
    "rank_by_priority",
]
