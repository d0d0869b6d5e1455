"""Daily habit log models"""
from datetime import date as Date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt, computed_field, field_validator

# Rating columns of a habit log, in display order
HABIT_RATING_FIELDS: tuple[str, ...] = (
    "sleep_rating",
    "stress_rating",
    "resistance_rating",
    "aerobic_rating",
    "calorie_rating",
    "protein_rating",
    "vegetable_rating",
    "habit8_rating",
)

MIN_RATING = 0
MAX_RATING = 3


class DailyHabitRecord(BaseModel):
    """
    One user's habit ratings for one calendar day

    Stored rows are read as-is; the 0-3 rating range is enforced on
    HabitLogInput when a log is written.
    """
    date: Date
    sleep_rating: Optional[int] = None
    stress_rating: Optional[int] = None
    resistance_rating: Optional[int] = None
    aerobic_rating: Optional[int] = None
    calorie_rating: Optional[int] = None
    protein_rating: Optional[int] = None
    vegetable_rating: Optional[int] = None
    habit8_rating: Optional[int] = None
    week_number: Optional[int] = Field(default=None, ge=1, le=53)
    day_of_week: Optional[int] = Field(default=None, ge=1, le=7)  # 1=Monday .. 7=Sunday
    weekly_score: Optional[int] = None
    notes: Optional[str] = None

    @property
    def ratings(self) -> dict[str, Optional[int]]:
        return {name: getattr(self, name) for name in HABIT_RATING_FIELDS}

    @computed_field
    @property
    def daily_score(self) -> int:
        """Sum of the eight ratings, missing ratings count as 0"""
        return sum(value or 0 for value in self.ratings.values())


class HabitLogInput(BaseModel):
    """Request to record the habit ratings for a day"""
    model_config = ConfigDict(extra="forbid")

    date: Date
    ratings: dict[str, Optional[StrictInt]] = Field(default_factory=dict)
    notes: Optional[str] = Field(default=None, max_length=2000)

    @field_validator("ratings")
    @classmethod
    def validate_ratings(cls, v: dict[str, Optional[int]]) -> dict[str, int]:
        """Only known rating names, each within 0-3; null ratings are dropped"""
        unknown = sorted(set(v) - set(HABIT_RATING_FIELDS))
        if unknown:
            raise ValueError(f"Unknown habit ratings: {', '.join(unknown)}")
        for name, value in v.items():
            if value is not None and not MIN_RATING <= value <= MAX_RATING:
                raise ValueError(f"{name} must be between {MIN_RATING} and {MAX_RATING}, got {value}")
        return {name: value for name, value in v.items() if value is not None}


class StreakResult(BaseModel):
    """Consecutive-day habit streaks ending at the most recent log"""
    model_config = ConfigDict(frozen=True)

    current_streak: int = Field(default=0, ge=0)
    longest_streak: int = Field(default=0, ge=0)
