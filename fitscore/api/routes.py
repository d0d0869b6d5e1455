"""API routes for progress, habits and exercise media priority"""
import logging
from datetime import date, datetime
from typing import Any, Dict, Optional
from fastapi import APIRouter, Body, Depends, HTTPException, Query, Request, status

from fitscore.api.models import (
    ProgressResponse,
    StreakResponse,
    HabitLogResponse, HabitLogListResponse, HabitWeekResponse,
    MediaPriorityResponse,
    HealthCheckResponse,
)
from fitscore.api.middleware import limiter
from fitscore.config import RATE_LIMIT_DEFAULT
from fitscore.db.connection import Database
from fitscore.exceptions import FitScoreError
from fitscore.observability.metrics import track_error
from fitscore.services.progress_service import ProgressService
from fitscore.validators import validate_habit_log

logger = logging.getLogger(__name__)

router = APIRouter()


def get_database(request: Request) -> Database:
    """Database created by the application lifespan"""
    return request.app.state.database


def get_progress_service(database: Database = Depends(get_database)) -> ProgressService:
    return ProgressService(database)


def _internal_error(operation: str, error: Exception) -> HTTPException:
    logger.error(f"Error in {operation}: {error}", exc_info=True)
    track_error(type(error).__name__, "api")
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Internal server error"
    )


@router.get("/api/v1/users/{user_id}/progress", response_model=ProgressResponse)
@limiter.limit(RATE_LIMIT_DEFAULT)
async def get_progress_endpoint(
    request: Request,
    user_id: str,
    previous_total_xp: Optional[int] = Query(
        default=None, description="Total XP last shown to the user, to report a level-up"
    ),
    service: ProgressService = Depends(get_progress_service)
):
    """Get user XP, level and XP sources"""
    try:
        progress = await service.get_user_progress(user_id, previous_total_xp)
        level = progress["level"]

        return ProgressResponse(
            user_id=user_id,
            total_xp=level.total_xp,
            level=level.level,
            current_level_xp=level.current_level_xp,
            xp_to_next_level=level.xp_to_next_level,
            xp_for_next_level=level.xp_for_next_level,
            xp_at_level_start=level.xp_at_level_start,
            progress_percent=level.progress_percent,
            breakdown=progress["breakdown"],
            level_up=progress["level_up"],
        )

    except FitScoreError:
        raise
    except Exception as e:
        raise _internal_error("get_progress_endpoint", e)


@router.get("/api/v1/users/{user_id}/habits", response_model=HabitLogListResponse)
@limiter.limit(RATE_LIMIT_DEFAULT)
async def list_habits_endpoint(
    request: Request,
    user_id: str,
    start: Optional[date] = Query(default=None, description="First day to include (YYYY-MM-DD)"),
    end: Optional[date] = Query(default=None, description="Last day to include (YYYY-MM-DD)"),
    service: ProgressService = Depends(get_progress_service)
):
    """List habit logs, oldest first"""
    try:
        logs = await service.list_habit_logs(user_id, start, end)
        return HabitLogListResponse(user_id=user_id, logs=logs)

    except FitScoreError:
        raise
    except Exception as e:
        raise _internal_error("list_habits_endpoint", e)


@router.post(
    "/api/v1/users/{user_id}/habits",
    response_model=HabitLogResponse,
    status_code=status.HTTP_201_CREATED
)
@limiter.limit("30/minute")
async def log_habit_endpoint(
    request: Request,
    user_id: str,
    payload: Dict[str, Any] = Body(...),
    service: ProgressService = Depends(get_progress_service)
):
    """Save the habit ratings for one day (Rate limit: 30/minute)"""
    try:
        entry = validate_habit_log(payload, user_id=user_id)
        log = await service.log_habit(user_id, entry)
        return HabitLogResponse(log=log)

    except FitScoreError:
        raise
    except Exception as e:
        raise _internal_error("log_habit_endpoint", e)


@router.get("/api/v1/users/{user_id}/habits/streaks", response_model=StreakResponse)
@limiter.limit(RATE_LIMIT_DEFAULT)
async def get_habit_streaks_endpoint(
    request: Request,
    user_id: str,
    service: ProgressService = Depends(get_progress_service)
):
    """Get the current and longest habit streak"""
    try:
        result = await service.get_habit_streaks(user_id)
        return StreakResponse(
            user_id=user_id,
            current_streak=result.current_streak,
            longest_streak=result.longest_streak,
        )

    except FitScoreError:
        raise
    except Exception as e:
        raise _internal_error("get_habit_streaks_endpoint", e)


@router.get("/api/v1/users/{user_id}/habits/week/{week_number}", response_model=HabitWeekResponse)
@limiter.limit(RATE_LIMIT_DEFAULT)
async def get_habit_week_endpoint(
    request: Request,
    user_id: str,
    week_number: int,
    anchor: Optional[date] = Query(default=None, description="Any date inside the wanted week"),
    service: ProgressService = Depends(get_progress_service)
):
    """Get the habit logs of one ISO week"""
    try:
        logs = await service.get_habit_week(user_id, week_number, anchor)
        return HabitWeekResponse(user_id=user_id, week_number=week_number, logs=logs)

    except FitScoreError:
        raise
    except Exception as e:
        raise _internal_error("get_habit_week_endpoint", e)


@router.get("/api/v1/exercises/priority", response_model=MediaPriorityResponse)
@limiter.limit(RATE_LIMIT_DEFAULT)
async def get_media_priority_endpoint(
    request: Request,
    limit: Optional[int] = Query(default=None, description="Maximum number of exercises (capped at 100)"),
    service: ProgressService = Depends(get_progress_service)
):
    """Rank exercises without approved public media"""
    try:
        items = await service.get_media_priority(limit)
        return MediaPriorityResponse(items=items)

    except FitScoreError:
        raise
    except Exception as e:
        raise _internal_error("get_media_priority_endpoint", e)


@router.get("/health", response_model=HealthCheckResponse)
async def health_check(database: Database = Depends(get_database)):
    """Health check endpoint"""
    db_status = "connected" if await database.ping() else "disconnected"

    return HealthCheckResponse(
        status="healthy" if db_status == "connected" else "degraded",
        database=db_status,
        timestamp=datetime.now()
    )
