"""Exercise media priority models"""
from enum import Enum
from typing import Optional
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ExerciseDifficulty(str, Enum):
    """Exercise difficulty levels"""
    BEGINNER = "BEGINNER"
    INTERMEDIATE = "INTERMEDIATE"
    ADVANCED = "ADVANCED"


class ExercisePriorityCandidate(BaseModel):
    """Active exercise that has no approved public media yet"""
    id: str
    name: str
    category: Optional[str] = None
    muscle_groups: list[str] = Field(default_factory=list)
    difficulty: Optional[str] = None  # free text from the catalogue, see ExerciseDifficulty
    created_at: datetime
    usage_count: int = Field(default=0, ge=0)


class RankedExercise(BaseModel):
    """Candidate with its computed media priority"""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    category: Optional[str] = None
    muscle_groups: list[str] = Field(default_factory=list)
    difficulty: Optional[str] = None
    priority_score: int
