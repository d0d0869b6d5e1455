"""Exercise catalogue and media coverage queries"""
import logging

import psycopg

from fitscore.db.connection import Database
from fitscore.exceptions import wrap_external_exception
from fitscore.models.exercise import ExercisePriorityCandidate

logger = logging.getLogger(__name__)


async def get_active_exercises(database: Database) -> list[ExercisePriorityCandidate]:
    """
    Get all active exercises in catalogue order

    Returns:
        Candidates for media priority, before media filtering
    """
    try:
        async with database.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(
                    """
                    SELECT id, name, category, "muscleGroups" AS muscle_groups,
                           difficulty, "createdAt" AS created_at,
                           COALESCE("usageCount", 0) AS usage_count
                    FROM exercises
                    WHERE "isActive" = true
                    ORDER BY "createdAt" ASC, id ASC
                    """
                )
                rows = await cur.fetchall()
    except psycopg.Error as e:
        raise wrap_external_exception(e, operation="get_active_exercises") from e

    return [
        ExercisePriorityCandidate(**{**row, "id": str(row["id"]), "muscle_groups": row.get("muscle_groups") or []})
        for row in rows
    ]


async def get_public_media_counts(database: Database) -> dict[str, int]:
    """
    Count approved, public media per exercise

    Returns:
        {exercise_id: media_count}; exercises without media are absent
    """
    try:
        async with database.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(
                    """
                    SELECT "globalExerciseId" AS exercise_id, COUNT(id) AS media_count
                    FROM exercise_media
                    WHERE status = 'approved'
                      AND visibility = 'public'
                      AND "globalExerciseId" IS NOT NULL
                    GROUP BY "globalExerciseId"
                    """
                )
                rows = await cur.fetchall()
    except psycopg.Error as e:
        raise wrap_external_exception(e, operation="get_public_media_counts") from e

    counts = {str(row["exercise_id"]): row["media_count"] for row in rows}
    logger.debug(f"{len(counts)} exercises have approved public media")
    return counts
