"""
XP and Leveling System

Turns aggregate activity counts into total XP and a level.

XP Sources:
- Workout logged: 10 XP each
- Training volume: 5 XP per full 1000 units of reps x weight
- Achievement earned: 50 XP each
- Bonus points (trainer points etc.): added as-is

Leveling Curve:
- Level n requires 100 + 50*(n-1) XP to complete
- Level 1: 100 XP, Level 2: 150 XP, Level 3: 200 XP, ...

All functions are pure; callers fetch and validate the inputs.
"""

from typing import Dict, Any
import logging

from fitscore.models.progress import ExperienceInputs, XpBreakdown, LevelResult

logger = logging.getLogger(__name__)

XP_PER_WORKOUT = 10
VOLUME_XP_UNIT = 1000
XP_PER_VOLUME_UNIT = 5
XP_PER_ACHIEVEMENT = 50

BASE_LEVEL_XP = 100
LEVEL_XP_INCREMENT = 50


def xp_required_for_level(level: int) -> int:
    """XP needed to complete `level` and reach `level + 1`"""
    if level < 1:
        raise ValueError(f"level must be >= 1, got {level}")
    return BASE_LEVEL_XP + LEVEL_XP_INCREMENT * (level - 1)


def calculate_xp_breakdown(inputs: ExperienceInputs) -> XpBreakdown:
    """
    Calculate XP contributed by each activity source

    Args:
        inputs: Validated aggregate counters

    Returns:
        XpBreakdown with per-source XP and the total
    """
    from_workouts = inputs.workout_count * XP_PER_WORKOUT
    from_volume = int(inputs.total_volume // VOLUME_XP_UNIT) * XP_PER_VOLUME_UNIT
    from_achievements = inputs.achievement_count * XP_PER_ACHIEVEMENT
    from_bonus = inputs.bonus_points

    return XpBreakdown(
        from_workouts=from_workouts,
        from_volume=from_volume,
        from_achievements=from_achievements,
        from_bonus=from_bonus,
        total=from_workouts + from_volume + from_achievements + from_bonus,
    )


def aggregate_xp(inputs: ExperienceInputs) -> int:
    """Total XP for a set of aggregate counters"""
    return calculate_xp_breakdown(inputs).total


def calculate_level_from_xp(total_xp: int) -> LevelResult:
    """
    Calculate level from total XP

    Walks the level curve, spending each level's requirement until the
    remainder no longer covers the next one. Every requirement is at least
    100 XP so the loop runs O(sqrt(total_xp)) times.

    Returns:
        LevelResult where current_level_xp + xp_to_next_level equals
        xp_required_for_level(level)
    """
    if total_xp < 0:
        raise ValueError(f"total_xp must be non-negative, got {total_xp}")

    level = 1
    xp_remaining = total_xp

    while xp_remaining >= xp_required_for_level(level):
        xp_remaining -= xp_required_for_level(level)
        level += 1

    xp_for_next_level = xp_required_for_level(level)

    logger.debug(f"{total_xp} XP -> level {level} ({xp_remaining}/{xp_for_next_level})")

    return LevelResult(
        total_xp=total_xp,
        level=level,
        current_level_xp=xp_remaining,
        xp_to_next_level=xp_for_next_level - xp_remaining,
        xp_for_next_level=xp_for_next_level,
        xp_at_level_start=total_xp - xp_remaining,
        progress_percent=(xp_remaining * 1000 // xp_for_next_level) / 10,
    )


def detect_level_up(old_total_xp: int, new_total_xp: int) -> Dict[str, Any]:
    """
    Compare levels before and after an XP change

    Returns:
        {
            'old_level': int,
            'new_level': int,
            'leveled_up': bool,
            'levels_gained': int
        }
    """
    old_level = calculate_level_from_xp(max(old_total_xp, 0)).level
    new_level = calculate_level_from_xp(max(new_total_xp, 0)).level

    return {
        "old_level": old_level,
        "new_level": new_level,
        "leveled_up": new_level > old_level,
        "levels_gained": max(new_level - old_level, 0),
    }
