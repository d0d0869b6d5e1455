"""
Habit Streak System

Computes consecutive-day streaks from daily habit logs.

Rules:
- A day counts when its daily score (sum of the eight habit ratings) is > 0
- A zero-score day ends the streak, including the most recent day
- A missing calendar day (gap > 1) ends the streak
- Two logs for the same date neither extend nor break the streak

Only the run ending at the most recent supplied log is measured, so the
caller decides the window (typically the last 365 days).
"""

from typing import Iterable, List, Sequence
import logging

from fitscore.models.habits import DailyHabitRecord, StreakResult

logger = logging.getLogger(__name__)


def calculate_daily_score(record: DailyHabitRecord) -> int:
    """Sum of a day's ratings, treating missing ratings as 0"""
    return record.daily_score


def sort_logs_most_recent_first(logs: Iterable[DailyHabitRecord]) -> List[DailyHabitRecord]:
    """Order logs newest first, as calculate_streaks expects"""
    return sorted(logs, key=lambda log: log.date, reverse=True)


def calculate_streaks(logs: Sequence[DailyHabitRecord]) -> StreakResult:
    """
    Calculate the current and longest streak from habit logs

    Args:
        logs: Habit logs sorted by date, most recent first

    Returns:
        StreakResult; (0, 0) for an empty log or a zero-score latest day
    """
    streak = 0
    longest_streak = 0
    prev_date = None

    for log in logs:
        if calculate_daily_score(log) <= 0:
            break

        if prev_date is None:
            streak = 1
            longest_streak = max(longest_streak, streak)
            prev_date = log.date
            continue

        gap_days = (prev_date - log.date).days
        if gap_days == 1:
            streak += 1
            longest_streak = max(longest_streak, streak)
        elif gap_days > 1:
            break

        prev_date = log.date

    logger.debug(f"Walked {len(logs)} habit logs: current={streak}, longest={longest_streak}")

    return StreakResult(current_streak=streak, longest_streak=longest_streak)
