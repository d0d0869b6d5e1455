"""
Exercise Media Priority

Ranks exercises that still lack approved public media so the content team
knows what to film first.

Score = usage_count * 2 + difficulty bonus + recency bonus
- Difficulty bonus: BEGINNER +10, INTERMEDIATE +5, ADVANCED +0
  (missing or unknown difficulty is treated as BEGINNER)
- Recency bonus: +5 if the exercise was created within the threshold (90 days)
"""

from datetime import datetime, timedelta, timezone
from typing import List, Optional, Sequence
import logging

from fitscore.models.exercise import ExerciseDifficulty, ExercisePriorityCandidate, RankedExercise

logger = logging.getLogger(__name__)

USAGE_WEIGHT = 2
RECENCY_BONUS = 5
DEFAULT_RECENCY_THRESHOLD_DAYS = 90
DEFAULT_LIMIT = 20

DIFFICULTY_BONUS = {
    ExerciseDifficulty.BEGINNER: 10,
    ExerciseDifficulty.INTERMEDIATE: 5,
    ExerciseDifficulty.ADVANCED: 0,
}


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def difficulty_bonus(difficulty: Optional[str]) -> int:
    """Bonus for a difficulty label, case-insensitive"""
    try:
        level = ExerciseDifficulty((difficulty or ExerciseDifficulty.BEGINNER.value).strip().upper())
    except ValueError:
        level = ExerciseDifficulty.BEGINNER
    return DIFFICULTY_BONUS[level]


def recency_bonus(
    created_at: datetime,
    now: datetime,
    threshold_days: int = DEFAULT_RECENCY_THRESHOLD_DAYS,
) -> int:
    """Bonus for exercises created less than threshold_days before now"""
    if _as_utc(now) - _as_utc(created_at) < timedelta(days=threshold_days):
        return RECENCY_BONUS
    return 0


def calculate_priority_score(
    candidate: ExercisePriorityCandidate,
    now: datetime,
    threshold_days: int = DEFAULT_RECENCY_THRESHOLD_DAYS,
) -> int:
    return (
        candidate.usage_count * USAGE_WEIGHT
        + difficulty_bonus(candidate.difficulty)
        + recency_bonus(candidate.created_at, now, threshold_days)
    )


def rank_by_priority(
    candidates: Sequence[ExercisePriorityCandidate],
    recency_threshold_days: int = DEFAULT_RECENCY_THRESHOLD_DAYS,
    limit: int = DEFAULT_LIMIT,
    now: Optional[datetime] = None,
) -> List[RankedExercise]:
    """
    Rank candidates by media priority

    Args:
        candidates: Exercises already filtered to those without approved public media
        recency_threshold_days: Age under which an exercise earns the recency bonus
        limit: Maximum number of results
        now: Reference time (defaults to current UTC time)

    Returns:
        Highest priority first. Equal scores keep their input order.
    """
    if limit <= 0:
        return []

    now = now or datetime.now(timezone.utc)

    ranked = [
        RankedExercise(
            id=candidate.id,
            name=candidate.name,
            category=candidate.category,
            muscle_groups=list(candidate.muscle_groups),
            difficulty=candidate.difficulty,
            priority_score=calculate_priority_score(candidate, now, recency_threshold_days),
        )
        for candidate in candidates
    ]

    # sorted() is stable, ties stay in input order
    ranked = sorted(ranked, key=lambda item: item.priority_score, reverse=True)

    logger.debug(f"Ranked {len(ranked)} exercises for media priority, returning {min(limit, len(ranked))}")

    return ranked[:limit]
