"""Unit tests for database queries (fitscore/db/queries)"""
import pytest
from datetime import date, datetime, timezone
from uuid import UUID

import psycopg

from fitscore.db import queries
from fitscore.exceptions import ConnectionError as DatabaseConnectionError, QueryError, ValidationError
from fitscore.models.habits import DailyHabitRecord


# ============================================================================
# Progress Queries
# ============================================================================

@pytest.mark.asyncio
async def test_get_experience_inputs(mock_database, mock_cursor, test_user_id):
    mock_cursor.fetchone.return_value = {
        "workout_count": 5,
        "total_volume": 12500.0,
        "achievement_count": 2,
        "bonus_points": 30,
    }

    inputs = await queries.get_experience_inputs(mock_database, test_user_id)

    assert inputs.workout_count == 5
    assert inputs.total_volume == 12500.0
    assert inputs.achievement_count == 2
    assert inputs.bonus_points == 30

    sql, params = mock_cursor.execute.call_args[0]
    assert "workout_log_entries" in sql
    assert "trainer_achievements" in sql
    assert "trainer_points" in sql
    assert params == {"user_id": test_user_id}


@pytest.mark.asyncio
async def test_get_experience_inputs_no_row(mock_database, mock_cursor, test_user_id):
    mock_cursor.fetchone.return_value = None

    inputs = await queries.get_experience_inputs(mock_database, test_user_id)

    assert inputs.workout_count == 0
    assert inputs.total_volume == 0


@pytest.mark.asyncio
async def test_get_experience_inputs_rejects_negative_aggregate(mock_database, mock_cursor, test_user_id):
    mock_cursor.fetchone.return_value = {
        "workout_count": -2,
        "total_volume": 0.0,
        "achievement_count": 0,
        "bonus_points": 0,
    }

    with pytest.raises(ValidationError):
        await queries.get_experience_inputs(mock_database, test_user_id)


@pytest.mark.asyncio
async def test_get_experience_inputs_connection_failure(mock_database, mock_cursor, test_user_id):
    mock_cursor.execute.side_effect = psycopg.OperationalError("connection refused")

    with pytest.raises(DatabaseConnectionError) as exc_info:
        await queries.get_experience_inputs(mock_database, test_user_id)

    assert exc_info.value.operation == "get_experience_inputs"
    assert exc_info.value.user_id == test_user_id


# ============================================================================
# Habit Queries
# ============================================================================

@pytest.mark.asyncio
async def test_get_habit_logs_since(mock_database, mock_cursor, test_user_id):
    mock_cursor.fetchall.return_value = [
        {"date": date(2024, 3, 13), "sleep_rating": 3, "stress_rating": None},
        {"date": date(2024, 3, 12), "sleep_rating": 1, "protein_rating": 2},
    ]

    logs = await queries.get_habit_logs_since(mock_database, test_user_id, date(2023, 3, 14))

    assert [log.date for log in logs] == [date(2024, 3, 13), date(2024, 3, 12)]
    assert logs[0].daily_score == 3
    assert logs[1].daily_score == 3

    sql, params = mock_cursor.execute.call_args[0]
    assert "FROM habit_logs" in sql
    assert 'ORDER BY "date" DESC' in sql
    assert params == {"user_id": test_user_id, "since": date(2023, 3, 14)}


@pytest.mark.asyncio
async def test_get_habit_logs_since_converts_timestamps(mock_database, mock_cursor, test_user_id):
    mock_cursor.fetchall.return_value = [
        {"date": datetime(2024, 3, 13, 0, 0, tzinfo=timezone.utc), "sleep_rating": 2},
    ]

    logs = await queries.get_habit_logs_since(mock_database, test_user_id, date(2024, 1, 1))

    assert logs[0].date == date(2024, 3, 13)


@pytest.mark.asyncio
async def test_get_habit_logs_since_reads_out_of_range_rating(mock_database, mock_cursor, test_user_id):
    mock_cursor.fetchall.return_value = [
        {"date": date(2024, 3, 13), "sleep_rating": 5, "stress_rating": 1},
    ]

    logs = await queries.get_habit_logs_since(mock_database, test_user_id, date(2024, 1, 1))

    assert logs[0].sleep_rating == 5
    assert logs[0].daily_score == 6


@pytest.mark.asyncio
async def test_get_habit_logs_between_start_only(mock_database, mock_cursor, test_user_id):
    await queries.get_habit_logs_between(mock_database, test_user_id, start=date(2024, 3, 1))

    sql, params = mock_cursor.execute.call_args[0]
    assert '"date" >= %(start)s' in sql
    assert '"date" <= %(end)s' not in sql
    assert 'ORDER BY "date" ASC' in sql
    assert params == {"user_id": test_user_id, "start": date(2024, 3, 1)}


@pytest.mark.asyncio
async def test_get_habit_logs_for_week_with_range(mock_database, mock_cursor, test_user_id):
    await queries.get_habit_logs_for_week(
        mock_database, test_user_id, 11, date(2024, 3, 11), date(2024, 3, 17)
    )

    sql, params = mock_cursor.execute.call_args[0]
    assert '"weekNumber" = %(week_number)s' in sql
    assert "BETWEEN" in sql
    assert params["week_number"] == 11
    assert params["start"] == date(2024, 3, 11)
    assert params["end"] == date(2024, 3, 17)


@pytest.mark.asyncio
async def test_get_habit_logs_query_failure(mock_database, mock_cursor, test_user_id):
    mock_cursor.execute.side_effect = psycopg.errors.UndefinedTable("relation does not exist")

    with pytest.raises(QueryError):
        await queries.get_habit_logs_between(mock_database, test_user_id)


@pytest.mark.asyncio
async def test_upsert_habit_log(mock_database, mock_connection, mock_cursor, test_user_id):
    record = DailyHabitRecord(
        date=date(2024, 3, 13),
        sleep_rating=3,
        week_number=11,
        day_of_week=3,
        weekly_score=3,
    )
    mock_cursor.fetchone.return_value = {**record.model_dump(exclude={"daily_score"})}

    saved = await queries.upsert_habit_log(mock_database, test_user_id, record)

    assert saved == record
    sql, params = mock_cursor.execute.call_args[0]
    assert "INSERT INTO habit_logs" in sql
    assert 'ON CONFLICT ("userId", "date")' in sql
    assert params["user_id"] == test_user_id
    assert params["sleep_rating"] == 3
    assert params["week_number"] == 11
    assert "daily_score" not in params
    UUID(params["id"])
    mock_connection.commit.assert_called_once()


@pytest.mark.asyncio
async def test_upsert_habit_log_failure_carries_date(mock_database, mock_cursor, test_user_id):
    mock_cursor.execute.side_effect = psycopg.errors.NotNullViolation("null value in column")

    with pytest.raises(QueryError) as exc_info:
        await queries.upsert_habit_log(
            mock_database, test_user_id, DailyHabitRecord(date=date(2024, 3, 13))
        )

    assert exc_info.value.context["date"] == "2024-03-13"
    assert exc_info.value.operation == "upsert_habit_log"


# ============================================================================
# Exercise Queries
# ============================================================================

@pytest.mark.asyncio
async def test_get_active_exercises(mock_database, mock_cursor):
    exercise_id = UUID("12345678-1234-5678-1234-567812345678")
    mock_cursor.fetchall.return_value = [
        {
            "id": exercise_id,
            "name": "Goblet Squat",
            "category": "legs",
            "muscle_groups": None,
            "difficulty": "BEGINNER",
            "created_at": datetime(2024, 1, 1, tzinfo=timezone.utc),
            "usage_count": 4,
        },
    ]

    exercises = await queries.get_active_exercises(mock_database)

    assert exercises[0].id == str(exercise_id)
    assert exercises[0].muscle_groups == []
    assert exercises[0].usage_count == 4

    sql = mock_cursor.execute.call_args[0][0]
    assert '"isActive" = true' in sql


@pytest.mark.asyncio
async def test_get_public_media_counts(mock_database, mock_cursor):
    mock_cursor.fetchall.return_value = [
        {"exercise_id": "ex-1", "media_count": 2},
        {"exercise_id": "ex-2", "media_count": 1},
    ]

    counts = await queries.get_public_media_counts(mock_database)

    assert counts == {"ex-1": 2, "ex-2": 1}
    sql = mock_cursor.execute.call_args[0][0]
    assert "status = 'approved'" in sql
    assert "visibility = 'public'" in sql
