"""Unit tests for Exercise Media Priority (fitscore/gamification/media_priority.py)"""
from datetime import datetime, timedelta

import pytest

from fitscore.gamification.media_priority import (
    calculate_priority_score,
    difficulty_bonus,
    rank_by_priority,
    recency_bonus,
)


# ============================================================================
# Bonus Tests
# ============================================================================

@pytest.mark.parametrize("difficulty,expected", [
    ("BEGINNER", 10),
    ("INTERMEDIATE", 5),
    ("ADVANCED", 0),
    ("intermediate", 5),
    ("Advanced", 0),
    (None, 10),
    ("", 10),
    ("EXPERT", 10),
])
def test_difficulty_bonus(difficulty, expected):
    assert difficulty_bonus(difficulty) == expected


def test_recency_bonus_recent_exercise(fixed_now):
    assert recency_bonus(fixed_now - timedelta(days=10), fixed_now) == 5
    assert recency_bonus(fixed_now - timedelta(days=89), fixed_now) == 5


def test_recency_bonus_threshold_is_exclusive(fixed_now):
    assert recency_bonus(fixed_now - timedelta(days=90), fixed_now) == 0
    assert recency_bonus(fixed_now - timedelta(days=400), fixed_now) == 0


def test_recency_bonus_custom_threshold(fixed_now):
    created_at = fixed_now - timedelta(days=20)

    assert recency_bonus(created_at, fixed_now, threshold_days=30) == 5
    assert recency_bonus(created_at, fixed_now, threshold_days=14) == 0


def test_recency_bonus_naive_created_at_is_utc(fixed_now):
    naive = datetime(2024, 5, 30, 12, 0, 0)

    assert recency_bonus(naive, fixed_now) == 5


# ============================================================================
# Score Tests
# ============================================================================

def test_calculate_priority_score_combines_parts(make_exercise, fixed_now):
    exercise = make_exercise("ex-1", difficulty="INTERMEDIATE", usage_count=3, age_days=5)

    # 3*2 usage + 5 intermediate + 5 recent
    assert calculate_priority_score(exercise, fixed_now) == 16


def test_calculate_priority_score_old_advanced_unused(make_exercise, fixed_now):
    exercise = make_exercise("ex-1", difficulty="ADVANCED", usage_count=0, age_days=365)

    assert calculate_priority_score(exercise, fixed_now) == 0


# ============================================================================
# Ranking Tests
# ============================================================================

def test_rank_by_priority_orders_descending(make_exercise, fixed_now):
    candidates = [
        make_exercise("low", difficulty="ADVANCED"),
        make_exercise("high", difficulty="BEGINNER", usage_count=10),
        make_exercise("mid", difficulty="INTERMEDIATE", age_days=1),
    ]

    ranked = rank_by_priority(candidates, now=fixed_now)

    assert [item.id for item in ranked] == ["high", "mid", "low"]
    assert [item.priority_score for item in ranked] == [30, 10, 0]


def test_rank_by_priority_keeps_input_order_for_ties(make_exercise, fixed_now):
    candidates = [make_exercise(f"ex-{index}", difficulty="BEGINNER") for index in range(5)]

    ranked = rank_by_priority(candidates, now=fixed_now)

    assert [item.id for item in ranked] == ["ex-0", "ex-1", "ex-2", "ex-3", "ex-4"]


def test_rank_by_priority_ties_behind_higher_scores(make_exercise, fixed_now):
    candidates = [
        make_exercise("tie-a"),
        make_exercise("top", usage_count=1),
        make_exercise("tie-b"),
    ]

    ranked = rank_by_priority(candidates, now=fixed_now)

    assert [item.id for item in ranked] == ["top", "tie-a", "tie-b"]


def test_rank_by_priority_limit_only_truncates(make_exercise, fixed_now):
    candidates = [
        make_exercise(f"ex-{index}", usage_count=index % 3, age_days=30 * index)
        for index in range(8)
    ]

    full = rank_by_priority(candidates, now=fixed_now, limit=100)
    limited = rank_by_priority(candidates, now=fixed_now, limit=3)

    assert len(limited) == 3
    assert limited == full[:3]


def test_rank_by_priority_limit_zero(make_exercise, fixed_now):
    assert rank_by_priority([make_exercise("ex-1")], now=fixed_now, limit=0) == []


def test_rank_by_priority_empty_candidates(fixed_now):
    assert rank_by_priority([], now=fixed_now) == []


def test_rank_by_priority_carries_exercise_fields(make_exercise, fixed_now):
    exercise = make_exercise(
        "ex-1",
        difficulty="beginner",
        name="Goblet Squat",
        category="legs",
        muscle_groups=["quadriceps", "glutes"],
    )

    ranked = rank_by_priority([exercise], now=fixed_now)

    assert ranked[0].name == "Goblet Squat"
    assert ranked[0].category == "legs"
    assert ranked[0].muscle_groups == ["quadriceps", "glutes"]
    assert ranked[0].difficulty == "beginner"
    assert ranked[0].priority_score == 10


def test_rank_by_priority_is_deterministic(make_exercise, fixed_now):
    candidates = [make_exercise(f"ex-{index}", usage_count=index) for index in range(4)]

    assert rank_by_priority(candidates, now=fixed_now) == rank_by_priority(candidates, now=fixed_now)
