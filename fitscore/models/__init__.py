"""Pydantic models for progress scoring, habits and exercise media priority"""

from fitscore.models.progress import ExperienceInputs, XpBreakdown, LevelResult
from fitscore.models.habits import HABIT_RATING_FIELDS, DailyHabitRecord, HabitLogInput, StreakResult
from fitscore.models.exercise import ExerciseDifficulty, ExercisePriorityCandidate, RankedExercise

__all__ = [
    "ExperienceInputs",
    "XpBreakdown",
    "LevelResult",
    "HABIT_RATING_FIELDS",
    "DailyHabitRecord",
    "HabitLogInput",
    "StreakResult",
    "ExerciseDifficulty",
    "ExercisePriorityCandidate",
    "RankedExercise",
]
