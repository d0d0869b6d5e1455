"""
Boundary Input Validation

Validates caller input before it reaches the scoring functions, which assume
clean values and never re-check them.

Validation Categories:
1. Experience inputs - non-negative counts, finite volume
2. Habit logs - ratings 0-3, known rating names, notes length
3. Query parameters - week number, media priority limit, date ranges
"""

import logging
from datetime import date, timedelta
from typing import Any, Mapping, Optional, Tuple

from pydantic import ValidationError as PydanticValidationError

from fitscore.config import MEDIA_PRIORITY_DEFAULT_LIMIT, MEDIA_PRIORITY_MAX_LIMIT
from fitscore.exceptions import ValidationError
from fitscore.models.progress import ExperienceInputs
from fitscore.models.habits import HabitLogInput

logger = logging.getLogger(__name__)

MIN_WEEK_NUMBER = 1
MAX_WEEK_NUMBER = 53


def _raise_from_pydantic(error: PydanticValidationError, user_id: Optional[str] = None) -> None:
    """Re-raise the first pydantic error as our ValidationError"""
    first = error.errors()[0]
    field = ".".join(str(part) for part in first.get("loc", ())) or None
    raise ValidationError(
        message=first.get("msg", "Invalid value"),
        field=field,
        value=first.get("input"),
        user_id=user_id,
    ) from error


# ============================================================================
# EXPERIENCE INPUTS
# ============================================================================

def validate_experience_inputs(
    data: Mapping[str, Any],
    user_id: Optional[str] = None,
) -> ExperienceInputs:
    """
    Build ExperienceInputs from raw aggregates

    Database aggregates come back as None for users without rows, so None
    is read as zero.

    Raises:
        ValidationError: negative counts or non-finite volume
    """
    cleaned = {key: (0 if value is None else value) for key, value in data.items()}
    try:
        return ExperienceInputs(**cleaned)
    except PydanticValidationError as e:
        _raise_from_pydantic(e, user_id)


# ============================================================================
# HABIT LOGS
# ============================================================================

def validate_habit_log(
    data: Mapping[str, Any],
    user_id: Optional[str] = None,
) -> HabitLogInput:
    """
    Validate a habit log payload

    Raises:
        ValidationError: missing/invalid date, unknown rating or rating outside 0-3
    """
    try:
        return HabitLogInput.model_validate(dict(data))
    except PydanticValidationError as e:
        _raise_from_pydantic(e, user_id)


def validate_week_number(week_number: int) -> int:
    """ISO week numbers run 1-53"""
    if not MIN_WEEK_NUMBER <= week_number <= MAX_WEEK_NUMBER:
        raise ValidationError(
            message=f"Must be between {MIN_WEEK_NUMBER} and {MAX_WEEK_NUMBER}",
            field="week_number",
            value=week_number,
        )
    return week_number


def validate_date_range(start: Optional[date], end: Optional[date]) -> Tuple[Optional[date], Optional[date]]:
    """Both bounds optional; when both are given start must not be after end"""
    if start and end and start > end:
        raise ValidationError(
            message="start must be on or before end",
            field="start",
            value=start.isoformat(),
        )
    return start, end


def week_bounds(anchor: date) -> Tuple[date, date]:
    """Monday and Sunday of the week containing anchor"""
    monday = anchor - timedelta(days=anchor.weekday())
    return monday, monday + timedelta(days=6)


# ============================================================================
# MEDIA PRIORITY
# ============================================================================

def clamp_priority_limit(limit: Optional[int]) -> int:
    """
    Clamp a requested result count into 1..MEDIA_PRIORITY_MAX_LIMIT

    None falls back to MEDIA_PRIORITY_DEFAULT_LIMIT.
    """
    if limit is None:
        return MEDIA_PRIORITY_DEFAULT_LIMIT
    if limit > MEDIA_PRIORITY_MAX_LIMIT:
        logger.debug(f"Clamping media priority limit {limit} to {MEDIA_PRIORITY_MAX_LIMIT}")
        return MEDIA_PRIORITY_MAX_LIMIT
    if limit < 1:
        raise ValidationError(
            message="Must be at least 1",
            field="limit",
            value=limit,
        )
    return limit
