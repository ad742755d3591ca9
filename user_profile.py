"""
FitPlanner - User Profile Store
Profile, history and rating records plus the pure update operations
applied after every save, completion and rating event.
"""

import logging
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Optional

from plan_assembler import WorkoutPlan

log = logging.getLogger(__name__)

DEFAULT_SAVE_RATING = 4

SATISFACTION_RATINGS = {
    "very-satisfied": 5,
    "satisfied": 4,
    "unsatisfied": 2,
}


def _now() -> datetime:
    return datetime.now(timezone.utc)


# ══════════════════════════════════════════════════════════════════════════════
# DATA STRUCTURES
# ══════════════════════════════════════════════════════════════════════════════

@dataclass
class CompletedWorkout:
    id: str
    date: datetime
    workout_plan_id: str
    duration: int
    muscle_groups: list[str]
    difficulty: str


@dataclass
class WorkoutRating:
    workout_plan_id: str
    rating: int                      # 1-5
    timestamp: datetime
    feedback: Optional[str] = None


@dataclass
class UserProfile:
    id: str
    name: str
    gender: str
    age: int
    weight: str
    preferred_equipment: list[str] = field(default_factory=list)
    preferred_muscle_groups: list[str] = field(default_factory=list)
    completed_workouts: list[CompletedWorkout] = field(default_factory=list)
    ratings: list[WorkoutRating] = field(default_factory=list)
    last_updated: datetime = field(default_factory=_now)


@dataclass
class SavedWorkout:
    id: str
    name: str
    date: datetime
    plan: WorkoutPlan


# ══════════════════════════════════════════════════════════════════════════════
# PROFILE OPERATIONS
# ══════════════════════════════════════════════════════════════════════════════

def create_user_profile(
    name: str,
    gender: str,
    age: int,
    weight: str,
    equipment: list[str],
    muscle_groups: list[str],
    user_id: Optional[str] = None,
) -> UserProfile:
    return UserProfile(
        id=user_id or f"user_{uuid.uuid4().hex[:12]}",
        name=name,
        gender=gender,
        age=age,
        weight=weight,
        preferred_equipment=list(equipment),
        preferred_muscle_groups=list(muscle_groups),
    )


def temporary_profile(plan: WorkoutPlan) -> UserProfile:
    """Single-use cold-start profile built from the form inputs behind a plan."""
    return UserProfile(
        id=f"temp_{uuid.uuid4().hex[:12]}",
        name=plan.name or "User",
        gender=plan.gender or "neutral",
        age=30,
        weight="70kg",
        preferred_equipment=list(plan.equipment),
        preferred_muscle_groups=list(plan.muscle_groups),
    )


def add_completed_workout(profile: UserProfile, workout: CompletedWorkout) -> UserProfile:
    return replace(
        profile,
        completed_workouts=[*profile.completed_workouts, workout],
        last_updated=_now(),
    )


def add_workout_rating(
    profile: UserProfile,
    workout_plan_id: str,
    rating: int,
    feedback: Optional[str] = None,
) -> UserProfile:
    """Upsert: a new rating for an already-rated plan replaces the old one in place."""
    if not 1 <= rating <= 5:
        raise ValueError(f"Rating must be between 1 and 5, got {rating}.")

    entry = WorkoutRating(workout_plan_id=workout_plan_id, rating=rating,
                          timestamp=_now(), feedback=feedback)
    ratings = list(profile.ratings)
    for i, existing in enumerate(ratings):
        if existing.workout_plan_id == workout_plan_id:
            ratings[i] = entry
            break
    else:
        ratings.append(entry)

    return replace(profile, ratings=ratings, last_updated=_now())


def rating_for_satisfaction(satisfaction: Optional[str]) -> int:
    return SATISFACTION_RATINGS.get(satisfaction or "", 3)


def completed_workout_for(plan: WorkoutPlan, plan_id: str) -> CompletedWorkout:
    return CompletedWorkout(
        id=f"workout_{uuid.uuid4().hex[:12]}",
        date=_now(),
        workout_plan_id=plan_id,
        duration=plan.duration,
        muscle_groups=list(plan.muscle_groups),
        difficulty=plan.difficulty,
    )


def save_plan(
    profile: Optional[UserProfile],
    plan: WorkoutPlan,
    age: int = 30,
    weight: str = "",
) -> tuple[UserProfile, SavedWorkout]:
    """
    Saving a plan records it as completed and rates it 4 stars.
    A profile is created from the plan's form inputs when none exists yet.
    """
    plan_id = plan.id or uuid.uuid4().hex
    plan = replace(plan, id=plan_id)
    saved = SavedWorkout(id=plan_id, name=plan.name or "Workout Plan", date=_now(), plan=plan)

    if profile is None:
        profile = create_user_profile(
            name=plan.name or "User",
            gender=plan.gender or "",
            age=age,
            weight=weight,
            equipment=plan.equipment,
            muscle_groups=plan.muscle_groups,
        )
        log.info(f"Created profile {profile.id} on first save")

    profile = add_completed_workout(profile, completed_workout_for(plan, plan_id))
    profile = add_workout_rating(profile, plan_id, DEFAULT_SAVE_RATING)
    return profile, saved
