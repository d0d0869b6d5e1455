"""Global test fixtures and utilities for fitscore tests"""
import pytest
from unittest.mock import AsyncMock, MagicMock
from datetime import date, datetime, timedelta, timezone

from fitscore.db.connection import Database
from fitscore.models.habits import DailyHabitRecord
from fitscore.models.exercise import ExercisePriorityCandidate


# ============================================================================
# Database Fixtures
# ============================================================================

@pytest.fixture
def mock_cursor():
    """Mock database cursor with standard query results"""
    cursor = AsyncMock()
    cursor.fetchone = AsyncMock(return_value=None)
    cursor.fetchall = AsyncMock(return_value=[])
    cursor.execute = AsyncMock()
    return cursor


@pytest.fixture
def mock_connection(mock_cursor):
    """Mock connection whose cursor() works as an async context manager"""
    conn = MagicMock()
    conn.cursor.return_value.__aenter__ = AsyncMock(return_value=mock_cursor)
    conn.cursor.return_value.__aexit__ = AsyncMock(return_value=False)
    conn.commit = AsyncMock()
    conn.rollback = AsyncMock()
    return conn


@pytest.fixture
def mock_database(mock_connection):
    """Mock Database whose connection() yields mock_connection"""
    database = MagicMock(spec=Database)
    database.connection.return_value.__aenter__ = AsyncMock(return_value=mock_connection)
    database.connection.return_value.__aexit__ = AsyncMock(return_value=False)
    database.ping = AsyncMock(return_value=True)
    return database


# ============================================================================
# User Fixtures
# ============================================================================

@pytest.fixture
def test_user_id():
    """Standard test user ID"""
    return "user_123456789"


# ============================================================================
# Habit & Exercise Fixtures
# ============================================================================

@pytest.fixture
def reference_date():
    """Fixed 'today' for habit tests (a Wednesday)"""
    return date(2024, 3, 13)


@pytest.fixture
def make_habit_log():
    """Factory for habit logs with a chosen daily score"""
    def _make(day: date, score: int = 3, **extra) -> DailyHabitRecord:
        ratings = {}
        if score:
            # spread the score over ratings of at most 3
            remaining = score
            for name in ("sleep_rating", "stress_rating", "resistance_rating", "aerobic_rating"):
                value = min(remaining, 3)
                ratings[name] = value
                remaining -= value
                if remaining <= 0:
                    break
        else:
            ratings["sleep_rating"] = 0
        return DailyHabitRecord(date=day, **ratings, **extra)

    return _make


@pytest.fixture
def fixed_now():
    """Fixed reference time for media priority tests"""
    return datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def make_exercise(fixed_now):
    """Factory for exercise priority candidates"""
    def _make(
        exercise_id: str,
        difficulty: str = "ADVANCED",
        usage_count: int = 0,
        age_days: int = 365,
        **extra
    ) -> ExercisePriorityCandidate:
        return ExercisePriorityCandidate(
            id=exercise_id,
            name=extra.pop("name", f"Exercise {exercise_id}"),
            category=extra.pop("category", "strength"),
            muscle_groups=extra.pop("muscle_groups", ["chest"]),
            difficulty=difficulty,
            created_at=fixed_now - timedelta(days=age_days),
            usage_count=usage_count,
            **extra
        )

    return _make
