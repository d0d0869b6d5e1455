"""Progress (XP) database queries"""
import logging
import psycopg

from fitscore.db.connection import Database
from fitscore.exceptions import wrap_external_exception
from fitscore.models.progress import ExperienceInputs
from fitscore.validators import validate_experience_inputs

logger = logging.getLogger(__name__)

EXPERIENCE_INPUTS_QUERY = """
    SELECT
        (SELECT COUNT(*) FROM workout_log_entries WHERE "userId" = %(user_id)s) AS workout_count,
        (SELECT COALESCE(SUM("trainingVolume"), 0)::float8
           FROM workout_log_entries WHERE "userId" = %(user_id)s) AS total_volume,
        (SELECT COUNT(*) FROM trainer_achievements WHERE "trainerId" = %(user_id)s) AS achievement_count,
        (SELECT COALESCE(SUM(points), 0)::bigint
           FROM trainer_points WHERE "trainerId" = %(user_id)s) AS bonus_points
"""


async def get_experience_inputs(database: Database, user_id: str) -> ExperienceInputs:
    """
    Aggregate a user's XP sources in one round trip

    Returns:
        ExperienceInputs (all zero for users with no activity)
    """
    try:
        async with database.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(EXPERIENCE_INPUTS_QUERY, {"user_id": user_id})
                row = await cur.fetchone()
    except psycopg.Error as e:
        raise wrap_external_exception(
            e,
            operation="get_experience_inputs",
            user_id=user_id,
            context={"query": "experience_inputs"},
        ) from e

    logger.debug(f"Experience inputs for user {user_id}: {row}")
    return validate_experience_inputs(dict(row) if row else {}, user_id)
