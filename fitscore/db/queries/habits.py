"""Habit log database queries"""
import logging
from datetime import date
from typing import Any, Optional
from uuid import uuid4

import psycopg

from fitscore.db.connection import Database
from fitscore.exceptions import wrap_external_exception
from fitscore.models.habits import DailyHabitRecord

logger = logging.getLogger(__name__)

# (column, model field) pairs for habit_logs
_COLUMNS = (
    ('"date"', "date"),
    ('"sleepRating"', "sleep_rating"),
    ('"stressRating"', "stress_rating"),
    ('"resistanceRating"', "resistance_rating"),
    ('"aerobicRating"', "aerobic_rating"),
    ('"calorieRating"', "calorie_rating"),
    ('"proteinRating"', "protein_rating"),
    ('"vegetableRating"', "vegetable_rating"),
    ('"habit8Rating"', "habit8_rating"),
    ('"weekNumber"', "week_number"),
    ('"dayOfWeek"', "day_of_week"),
    ('"weeklyScore"', "weekly_score"),
    ("notes", "notes"),
)

SELECT_COLUMNS = ", ".join(f"{column} AS {field}" for column, field in _COLUMNS)


def _to_record(row: dict[str, Any]) -> DailyHabitRecord:
    data = dict(row)
    # date columns may come back as timestamps
    if hasattr(data["date"], "date"):
        data["date"] = data["date"].date()
    return DailyHabitRecord(**data)


async def _fetch_records(
    database: Database,
    query: str,
    params: dict[str, Any],
    operation: str,
    user_id: str,
) -> list[DailyHabitRecord]:
    try:
        async with database.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(query, params)
                rows = await cur.fetchall()
    except psycopg.Error as e:
        raise wrap_external_exception(e, operation=operation, user_id=user_id) from e

    return [_to_record(row) for row in rows]


async def get_habit_logs_since(database: Database, user_id: str, since: date) -> list[DailyHabitRecord]:
    """
    Get habit logs on or after `since`

    Returns:
        Logs ordered most recent first
    """
    query = f"""
        SELECT {SELECT_COLUMNS}
        FROM habit_logs
        WHERE "userId" = %(user_id)s AND "date" >= %(since)s
        ORDER BY "date" DESC
    """
    return await _fetch_records(
        database, query, {"user_id": user_id, "since": since}, "get_habit_logs_since", user_id
    )


async def get_habit_logs_between(
    database: Database,
    user_id: str,
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> list[DailyHabitRecord]:
    """
    Get habit logs within an optional inclusive date range

    Returns:
        Logs ordered oldest first
    """
    conditions = ['"userId" = %(user_id)s']
    params: dict[str, Any] = {"user_id": user_id}
    if start:
        conditions.append('"date" >= %(start)s')
        params["start"] = start
    if end:
        conditions.append('"date" <= %(end)s')
        params["end"] = end

    query = f"""
        SELECT {SELECT_COLUMNS}
        FROM habit_logs
        WHERE {" AND ".join(conditions)}
        ORDER BY "date" ASC
    """
    return await _fetch_records(database, query, params, "get_habit_logs_between", user_id)


async def get_habit_logs_for_week(
    database: Database,
    user_id: str,
    week_number: int,
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> list[DailyHabitRecord]:
    """
    Get habit logs stored under an ISO week number

    Week numbers repeat every year, so callers pass start/end to pin the year.

    Returns:
        Logs ordered oldest first
    """
    conditions = ['"userId" = %(user_id)s', '"weekNumber" = %(week_number)s']
    params: dict[str, Any] = {"user_id": user_id, "week_number": week_number}
    if start and end:
        conditions.append('"date" BETWEEN %(start)s AND %(end)s')
        params.update(start=start, end=end)

    query = f"""
        SELECT {SELECT_COLUMNS}
        FROM habit_logs
        WHERE {" AND ".join(conditions)}
        ORDER BY "date" ASC
    """
    return await _fetch_records(database, query, params, "get_habit_logs_for_week", user_id)


async def upsert_habit_log(database: Database, user_id: str, record: DailyHabitRecord) -> DailyHabitRecord:
    """
    Insert or replace the habit log for (user, date)

    Returns:
        The stored log
    """
    values = record.model_dump(exclude={"daily_score"})
    insert_columns = ", ".join(column for column, _ in _COLUMNS)
    placeholders = ", ".join(f"%({field})s" for _, field in _COLUMNS)
    updates = ", ".join(f"{column} = EXCLUDED.{column}" for column, field in _COLUMNS if field != "date")

    query = f"""
        INSERT INTO habit_logs (id, "userId", {insert_columns}, "updatedAt")
        VALUES (%(id)s, %(user_id)s, {placeholders}, NOW())
        ON CONFLICT ("userId", "date") DO UPDATE
        SET {updates}, "updatedAt" = NOW()
        RETURNING {SELECT_COLUMNS}
    """
    params = {"id": str(uuid4()), "user_id": user_id, **values}

    try:
        async with database.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(query, params)
                row = await cur.fetchone()
            await conn.commit()
    except psycopg.Error as e:
        raise wrap_external_exception(
            e,
            operation="upsert_habit_log",
            user_id=user_id,
            context={"date": record.date.isoformat()},
        ) from e

    logger.info(f"Saved habit log for user {user_id} on {record.date.isoformat()}")
    return _to_record(row)
