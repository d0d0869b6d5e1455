"""
ProgressService - Progress and Gamification Business Logic

Reads activity data through the query layer and hands it to the pure
scoring functions in fitscore.gamification.
"""

import asyncio
import logging
from datetime import date, datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from fitscore.config import (
    HABIT_STREAK_WINDOW_DAYS,
    MEDIA_PRIORITY_RECENCY_DAYS,
)
from fitscore.db.connection import Database
from fitscore.db import queries
from fitscore.gamification import (
    calculate_level_from_xp,
    calculate_streaks,
    calculate_xp_breakdown,
    detect_level_up,
    rank_by_priority,
)
from fitscore.models.exercise import RankedExercise
from fitscore.models.habits import DailyHabitRecord, HabitLogInput, StreakResult
from fitscore.exceptions import ValidationError
from fitscore.observability import metrics
from fitscore.validators import (
    clamp_priority_limit,
    validate_date_range,
    validate_week_number,
    week_bounds,
)

logger = logging.getLogger(__name__)


class ProgressService:
    """
    Service for progress features.

    Responsibilities:
    - XP totals and level progress
    - Habit logging, weekly views and streaks
    - Exercise media priority for the content team
    """

    def __init__(self, database: Database):
        """
        Initialize ProgressService.

        Args:
            database: Database pool manager used for every query
        """
        self.db = database
        logger.debug("ProgressService initialized")

    # ------------------------------------------------------------------
    # XP & levels
    # ------------------------------------------------------------------

    async def get_user_progress(
        self,
        user_id: str,
        previous_total_xp: Optional[int] = None,
    ) -> Dict[str, Any]:
        """
        Get a user's XP breakdown and level.

        Args:
            user_id: User identifier
            previous_total_xp: Total XP the caller last saw; when given the
                result also reports whether the user has leveled up since

        Returns:
            {
                'user_id': str,
                'breakdown': XpBreakdown,
                'level': LevelResult,
                'level_up': dict or None
            }
        """
        if previous_total_xp is not None and previous_total_xp < 0:
            raise ValidationError(
                message="Must be at least 0",
                field="previous_total_xp",
                value=previous_total_xp,
                user_id=user_id,
            )

        inputs = await queries.get_experience_inputs(self.db, user_id)
        breakdown = calculate_xp_breakdown(inputs)

        total_xp = breakdown.total
        if total_xp < 0:
            # negative bonus points can outweigh earned XP
            logger.warning(f"User {user_id} has negative total XP ({total_xp}), reporting 0")
            total_xp = 0

        level = calculate_level_from_xp(total_xp)
        metrics.level_calculations_total.inc()

        logger.info(f"User {user_id}: {level.total_xp} XP, level {level.level}")

        level_up = None
        if previous_total_xp is not None:
            level_up = self.check_level_up(user_id, previous_total_xp, level.total_xp)

        return {"user_id": user_id, "breakdown": breakdown, "level": level, "level_up": level_up}

    def check_level_up(self, user_id: str, old_total_xp: int, new_total_xp: int) -> Dict[str, Any]:
        """Report whether an XP change moved the user up a level."""
        result = detect_level_up(old_total_xp, new_total_xp)
        if result["leveled_up"]:
            metrics.level_ups_detected_total.inc()
            logger.info(f"User {user_id} leveled up from {result['old_level']} to {result['new_level']}!")
        return result

    # ------------------------------------------------------------------
    # Habits
    # ------------------------------------------------------------------

    async def get_habit_streaks(self, user_id: str, today: Optional[date] = None) -> StreakResult:
        """
        Get the habit streak ending at the user's most recent log.

        Args:
            user_id: User identifier
            today: Reference date for the lookback window (defaults to today, UTC)
        """
        today = today or datetime.now(timezone.utc).date()
        since = today - timedelta(days=HABIT_STREAK_WINDOW_DAYS)

        logs = await queries.get_habit_logs_since(self.db, user_id, since)
        result = calculate_streaks(logs)
        metrics.streak_calculations_total.inc()

        logger.info(
            f"User {user_id} habit streak: current={result.current_streak}, "
            f"longest={result.longest_streak} ({len(logs)} logs since {since.isoformat()})"
        )
        return result

    async def list_habit_logs(
        self,
        user_id: str,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> List[DailyHabitRecord]:
        """List habit logs oldest first, optionally within [start, end]."""
        start, end = validate_date_range(start, end)
        return await queries.get_habit_logs_between(self.db, user_id, start, end)

    async def log_habit(self, user_id: str, entry: HabitLogInput) -> DailyHabitRecord:
        """
        Save a day's habit ratings (replaces an existing log for that day).

        Derives the ISO week number, the day of week (Monday=1..Sunday=7) and
        the weekly score, which is the sum of the supplied ratings or None
        when no rating was supplied.
        """
        _, iso_week, iso_weekday = entry.date.isocalendar()
        weekly_score = sum(entry.ratings.values()) if entry.ratings else None

        record = DailyHabitRecord(
            date=entry.date,
            week_number=iso_week,
            day_of_week=iso_weekday,
            weekly_score=weekly_score,
            notes=entry.notes,
            **entry.ratings,
        )

        saved = await queries.upsert_habit_log(self.db, user_id, record)
        metrics.habit_logs_saved_total.inc()
        return saved

    async def get_habit_week(
        self,
        user_id: str,
        week_number: int,
        anchor: Optional[date] = None,
    ) -> List[DailyHabitRecord]:
        """
        Get the logs stored under an ISO week number.

        Args:
            week_number: 1-53
            anchor: Any date inside the wanted week, narrows the result to
                that Monday-Sunday range
        """
        validate_week_number(week_number)
        start, end = week_bounds(anchor) if anchor else (None, None)
        return await queries.get_habit_logs_for_week(self.db, user_id, week_number, start, end)

    # ------------------------------------------------------------------
    # Exercise media priority
    # ------------------------------------------------------------------

    async def get_media_priority(
        self,
        limit: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> List[RankedExercise]:
        """
        Rank active exercises that have no approved public media.

        Args:
            limit: Requested result count, clamped to the configured maximum
            now: Reference time for the recency bonus
        """
        limit = clamp_priority_limit(limit)

        exercises, media_counts = await asyncio.gather(
            queries.get_active_exercises(self.db),
            queries.get_public_media_counts(self.db),
        )

        candidates = [e for e in exercises if media_counts.get(e.id, 0) == 0]
        metrics.media_priority_candidates.observe(len(candidates))

        ranked = rank_by_priority(
            candidates,
            recency_threshold_days=MEDIA_PRIORITY_RECENCY_DAYS,
            limit=limit,
            now=now,
        )
        metrics.media_priority_rankings_total.inc()

        logger.info(
            f"Media priority: {len(candidates)} of {len(exercises)} active exercises lack media, "
            f"returning top {len(ranked)}"
        )
        return ranked
