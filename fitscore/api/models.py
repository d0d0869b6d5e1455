"""Pydantic models for API responses"""
from typing import List, Optional
from pydantic import BaseModel, Field
from datetime import datetime

from fitscore.models.exercise import RankedExercise
from fitscore.models.habits import DailyHabitRecord
from fitscore.models.progress import XpBreakdown


class LevelUpResponse(BaseModel):
    """Level change since a previously seen XP total"""
    old_level: int
    new_level: int
    leveled_up: bool
    levels_gained: int


class ProgressResponse(BaseModel):
    """Response with XP and level info"""
    user_id: str
    total_xp: int
    level: int
    current_level_xp: int
    xp_to_next_level: int
    xp_for_next_level: int
    xp_at_level_start: int
    progress_percent: float
    breakdown: XpBreakdown
    level_up: Optional[LevelUpResponse] = None


class StreakResponse(BaseModel):
    """Response with habit streak info"""
    user_id: str
    current_streak: int
    longest_streak: int


class HabitLogResponse(BaseModel):
    """Response after saving a habit log"""
    success: bool = True
    log: DailyHabitRecord


class HabitLogListResponse(BaseModel):
    """Response with a list of habit logs"""
    user_id: str
    logs: List[DailyHabitRecord]


class HabitWeekResponse(BaseModel):
    """Response with the habit logs of one ISO week"""
    user_id: str
    week_number: int
    logs: List[DailyHabitRecord]


class MediaPriorityResponse(BaseModel):
    """Response with exercises ranked by media priority"""
    success: bool = True
    items: List[RankedExercise]


class HealthCheckResponse(BaseModel):
    """Health check response"""
    status: str = Field(..., description="Service status")
    database: str = Field(..., description="Database connection status")
    timestamp: datetime = Field(..., description="Check timestamp")

