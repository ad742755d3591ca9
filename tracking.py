"""
FitPlanner - Completion Tracking
Per-exercise completion events, favorites, calorie estimates and the
dashboard statistics derived from them.
"""

import logging
import re
import uuid
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone
from typing import Optional

from exercise_catalog import LARGE_MUSCLE_GROUPS, Exercise, MuscleGroup
from user_profile import CompletedWorkout, UserProfile

log = logging.getLogger(__name__)

DEFAULT_SETS = 3
MINUTES_PER_SET = 0.5
PROGRESS_GOAL_WORKOUTS = 12
MONTHLY_CALORIE_TARGET = 2000
MONTH_NAMES = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
               "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

_LOWER_BODY = {MuscleGroup.lower_body_push.value, MuscleGroup.lower_body_pull.value}


def _now() -> datetime:
    return datetime.now(timezone.utc)


def exercise_id_for(name: str) -> str:
    return re.sub(r"\s+", "_", name).lower()


# ══════════════════════════════════════════════════════════════════════════════
# DATA STRUCTURES
# ══════════════════════════════════════════════════════════════════════════════

@dataclass
class CompletedExercise:
    id: str
    exercise_id: str
    workout_id: str
    completed_at: datetime
    calories_burned: int = 0


@dataclass
class FavoriteExercise:
    exercise_id: str
    name: str
    muscle_group: Optional[str] = None
    added_at: datetime = field(default_factory=_now)


# ══════════════════════════════════════════════════════════════════════════════
# COMPLETION TRACKER
# ══════════════════════════════════════════════════════════════════════════════

class CompletionTracker:
    """
    In-memory completion and favorite state for one user.
    At most one completion record per exercise id; re-completing overwrites.
    """

    def __init__(self, completed: Optional[dict[str, CompletedExercise]] = None,
                 favorites: Optional[dict[str, FavoriteExercise]] = None):
        self.completed: dict[str, CompletedExercise] = dict(completed or {})
        self.favorites: dict[str, FavoriteExercise] = dict(favorites or {})

    def mark_exercise_complete(self, exercise_id: str, workout_id: str,
                               calories_burned: int,
                               completed_at: Optional[datetime] = None) -> CompletedExercise:
        if not exercise_id:
            raise ValueError("Exercise ID is required.")
        if not workout_id:
            raise ValueError("Workout ID is required.")
        if calories_burned < 0:
            raise ValueError("Calories burned must be a positive number.")

        record = CompletedExercise(
            id=f"completion_{uuid.uuid4().hex[:12]}",
            exercise_id=exercise_id,
            workout_id=workout_id,
            completed_at=completed_at or _now(),
            calories_burned=calories_burned,
        )
        if exercise_id in self.completed:
            log.debug(f"Overwriting completion for {exercise_id}")
        self.completed[exercise_id] = record
        return record

    def is_exercise_completed(self, exercise_id: str) -> bool:
        return exercise_id in self.completed

    def _for_workout(self, workout_id: str) -> list[CompletedExercise]:
        return [c for c in self.completed.values() if c.workout_id == workout_id]

    def completion_percentage(self, workout_id: str, total_exercises: int) -> int:
        if total_exercises <= 0:
            return 0
        return round(len(self._for_workout(workout_id)) / total_exercises * 100)

    def total_calories_burned(self, workout_id: str) -> int:
        return sum(c.calories_burned for c in self._for_workout(workout_id))

    def add_favorite(self, exercise_id: str, name: str,
                     muscle_group: Optional[str] = None) -> FavoriteExercise:
        if not exercise_id:
            raise ValueError("Exercise ID is required.")
        favorite = FavoriteExercise(exercise_id=exercise_id, name=name, muscle_group=muscle_group)
        self.favorites[exercise_id] = favorite
        return favorite

    def remove_favorite(self, exercise_id: str) -> None:
        self.favorites.pop(exercise_id, None)

    def is_favorite(self, exercise_id: str) -> bool:
        return exercise_id in self.favorites


# ══════════════════════════════════════════════════════════════════════════════
# CALORIE ESTIMATES
# ══════════════════════════════════════════════════════════════════════════════

def estimate_exercise_calories(exercise: Exercise) -> int:
    """Per-minute rate by muscle group over sets x 0.5 minutes, scaled again by sets."""
    if exercise.muscle_group in _LOWER_BODY:
        per_minute = 7
    elif exercise.muscle_group == MuscleGroup.core.value:
        per_minute = 6
    else:
        per_minute = 5
    sets = exercise.sets or DEFAULT_SETS
    return round(per_minute * sets * MINUTES_PER_SET * sets)


def estimate_workout_calories(workout: CompletedWorkout) -> int:
    per_minute = 8
    if workout.difficulty == "beginner":
        per_minute = 6
    elif workout.difficulty == "advanced":
        per_minute = 10
    if any(group in LARGE_MUSCLE_GROUPS for group in workout.muscle_groups):
        per_minute += 2
    return round((workout.duration or 0) * per_minute)


# ══════════════════════════════════════════════════════════════════════════════
# DASHBOARD
# ══════════════════════════════════════════════════════════════════════════════

@dataclass
class MonthlyCalories:
    name: str
    calories: int
    target: int

    @property
    def deficit(self) -> int:
        return self.target - self.calories


@dataclass
class DashboardStats:
    workouts_completed: int = 0
    total_minutes: int = 0
    calories_burned: int = 0
    progress: int = 0
    streak_days: int = 0
    weekly_average: float = 0.0
    difficulty_breakdown: dict[str, int] = field(default_factory=dict)
    muscle_group_counts: dict[str, int] = field(default_factory=dict)
    monthly_calories: list[MonthlyCalories] = field(default_factory=list)


def monthly_target(month_index: int) -> int:
    """Seasonal target: full in July, up to 30% lower toward winter."""
    seasonal = abs((month_index - 6) / 6)
    return round(MONTHLY_CALORIE_TARGET * (1 - seasonal * 0.3))


def current_streak(workout_dates: list[date], today: date) -> int:
    """Consecutive training days ending today or yesterday; 0 otherwise."""
    days = set(workout_dates)
    if today in days:
        cursor = today
    elif today - timedelta(days=1) in days:
        cursor = today - timedelta(days=1)
    else:
        return 0
    streak = 0
    while cursor in days:
        streak += 1
        cursor -= timedelta(days=1)
    return streak


def weekly_average(workout_dates: list[datetime]) -> float:
    if not workout_dates:
        return 0.0
    weeks = {int(d.timestamp() // (7 * 24 * 60 * 60)) for d in workout_dates}
    return round(len(workout_dates) / len(weeks), 1)


def monthly_calories(workouts: list[CompletedWorkout],
                     tracker: Optional[CompletionTracker] = None) -> list[MonthlyCalories]:
    months = [MonthlyCalories(name, 0, monthly_target(i)) for i, name in enumerate(MONTH_NAMES)]
    if tracker is not None:
        for record in tracker.completed.values():
            months[record.completed_at.month - 1].calories += record.calories_burned
    for workout in workouts:
        months[workout.date.month - 1].calories += estimate_workout_calories(workout)
    return months


def dashboard_stats(profile: Optional[UserProfile],
                    tracker: Optional[CompletionTracker] = None,
                    today: Optional[date] = None) -> DashboardStats:
    if profile is None:
        return DashboardStats()

    today = today or _now().date()
    workouts = profile.completed_workouts
    tracked = sum(c.calories_burned for c in tracker.completed.values()) if tracker else 0
    estimated = sum(estimate_workout_calories(w) for w in workouts)

    difficulty: dict[str, int] = {}
    groups: dict[str, int] = {}
    for workout in workouts:
        difficulty[workout.difficulty] = difficulty.get(workout.difficulty, 0) + 1
        for group in workout.muscle_groups:
            groups[group] = groups.get(group, 0) + 1

    return DashboardStats(
        workouts_completed=len(workouts),
        total_minutes=sum(w.duration or 0 for w in workouts),
        calories_burned=max(tracked, estimated),
        progress=min(100, round(len(workouts) / PROGRESS_GOAL_WORKOUTS * 100)),
        streak_days=current_streak([w.date.date() for w in workouts], today),
        weekly_average=weekly_average([w.date for w in workouts]),
        difficulty_breakdown=difficulty,
        muscle_group_counts=groups,
        monthly_calories=monthly_calories(workouts, tracker),
    )
