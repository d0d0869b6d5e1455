"""XP and level models"""
from pydantic import BaseModel, ConfigDict, Field


class ExperienceInputs(BaseModel):
    """Aggregate activity counters for one user, as read from the database"""
    model_config = ConfigDict(frozen=True)

    workout_count: int = Field(default=0, ge=0, description="Logged workout entries")
    total_volume: float = Field(
        default=0.0,
        ge=0,
        allow_inf_nan=False,
        description="Sum of reps x weight across logged sets",
    )
    achievement_count: int = Field(default=0, ge=0, description="Achievements earned")
    bonus_points: int = Field(default=0, description="Externally granted points, added as-is")


class XpBreakdown(BaseModel):
    """XP contributed by each activity source"""
    model_config = ConfigDict(frozen=True)

    from_workouts: int
    from_volume: int
    from_achievements: int
    from_bonus: int
    total: int


class LevelResult(BaseModel):
    """Level reached for a total XP value"""
    model_config = ConfigDict(frozen=True)

    total_xp: int = Field(ge=0)
    level: int = Field(ge=1)
    current_level_xp: int = Field(ge=0)  # XP earned inside the current level
    xp_to_next_level: int = Field(ge=0)
    xp_for_next_level: int  # full requirement of the current level
    xp_at_level_start: int = Field(ge=0)  # XP spent on completed levels
    progress_percent: float = Field(ge=0, lt=100)
