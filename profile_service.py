"""
FitPlanner - Profile Service
Async persistence for profiles, tracking state and saved workouts.
Maps ORM records to the plain domain values the engines operate on.
"""

from dataclasses import asdict
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import select, desc
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
import logging

from exercise_catalog import Exercise
from models import (
    UserProfileRecord, CompletedWorkoutRecord, WorkoutRatingRecord,
    CompletedExerciseRecord, FavoriteExerciseRecord, SavedWorkoutRecord,
)
from plan_assembler import WorkoutPlan
from tracking import CompletedExercise, CompletionTracker, FavoriteExercise
from user_profile import CompletedWorkout, SavedWorkout, UserProfile, WorkoutRating

log = logging.getLogger(__name__)


def _aware(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone-aware columns
    return value.replace(tzinfo=timezone.utc) if value.tzinfo is None else value


# ══════════════════════════════════════════════════════════════════════════════
# PLAN SERIALIZATION
# ══════════════════════════════════════════════════════════════════════════════

def plan_to_dict(plan: WorkoutPlan) -> dict:
    data = asdict(plan)
    for exercise in data["exercises"]:
        exercise["equipment"] = list(exercise["equipment"])
    return data


def plan_from_dict(data: dict) -> WorkoutPlan:
    exercises = [
        Exercise(**{**ex, "equipment": tuple(ex.get("equipment") or ())})
        for ex in data.get("exercises", [])
    ]
    return WorkoutPlan(**{**data, "exercises": exercises})


# ══════════════════════════════════════════════════════════════════════════════
# PROFILES
# ══════════════════════════════════════════════════════════════════════════════

async def _get_profile_record(db: AsyncSession, user_id: str) -> Optional[UserProfileRecord]:
    result = await db.execute(
        select(UserProfileRecord)
        .where(UserProfileRecord.id == user_id)
        .options(
            selectinload(UserProfileRecord.completed_workouts),
            selectinload(UserProfileRecord.ratings),
        )
    )
    return result.scalar_one_or_none()


def _to_domain(record: UserProfileRecord) -> UserProfile:
    return UserProfile(
        id=record.id,
        name=record.name,
        gender=record.gender,
        age=record.age,
        weight=record.weight,
        preferred_equipment=list(record.preferred_equipment or []),
        preferred_muscle_groups=list(record.preferred_muscle_groups or []),
        completed_workouts=[
            CompletedWorkout(
                id=w.id,
                date=_aware(w.date),
                workout_plan_id=w.workout_plan_id,
                duration=w.duration,
                muscle_groups=list(w.muscle_groups or []),
                difficulty=w.difficulty,
            )
            for w in record.completed_workouts
        ],
        ratings=[
            WorkoutRating(
                workout_plan_id=r.workout_plan_id,
                rating=r.rating,
                timestamp=_aware(r.timestamp),
                feedback=r.feedback,
            )
            for r in record.ratings
        ],
        last_updated=_aware(record.last_updated),
    )


async def load_profile(db: AsyncSession, user_id: str) -> Optional[UserProfile]:
    record = await _get_profile_record(db, user_id)
    return _to_domain(record) if record else None


async def save_profile(db: AsyncSession, profile: UserProfile) -> UserProfile:
    """
    Write a profile snapshot. History is append-only by workout id and
    ratings are upserted by plan id, so the stored state mirrors the value.
    """
    record = await _get_profile_record(db, profile.id)
    if record is None:
        record = UserProfileRecord(id=profile.id, completed_workouts=[], ratings=[])
        db.add(record)

    record.name = profile.name
    record.gender = profile.gender
    record.age = profile.age
    record.weight = profile.weight
    record.preferred_equipment = list(profile.preferred_equipment)
    record.preferred_muscle_groups = list(profile.preferred_muscle_groups)
    record.last_updated = profile.last_updated

    known = {w.id for w in record.completed_workouts}
    for workout in profile.completed_workouts:
        if workout.id in known:
            continue
        record.completed_workouts.append(CompletedWorkoutRecord(
            id=workout.id,
            date=workout.date,
            workout_plan_id=workout.workout_plan_id,
            duration=workout.duration,
            muscle_groups=list(workout.muscle_groups),
            difficulty=workout.difficulty,
        ))

    by_plan = {r.workout_plan_id: r for r in record.ratings}
    for rating in profile.ratings:
        row = by_plan.get(rating.workout_plan_id)
        if row:
            row.rating = rating.rating
            row.timestamp = rating.timestamp
            row.feedback = rating.feedback
        else:
            record.ratings.append(WorkoutRatingRecord(
                workout_plan_id=rating.workout_plan_id,
                rating=rating.rating,
                timestamp=rating.timestamp,
                feedback=rating.feedback,
            ))

    await db.flush()
    log.debug(f"Saved profile {profile.id}")
    return profile


# ══════════════════════════════════════════════════════════════════════════════
# TRACKING
# ══════════════════════════════════════════════════════════════════════════════

async def load_tracker(db: AsyncSession, user_id: str) -> CompletionTracker:
    completions = await db.execute(
        select(CompletedExerciseRecord).where(CompletedExerciseRecord.user_id == user_id)
    )
    favorites = await db.execute(
        select(FavoriteExerciseRecord).where(FavoriteExerciseRecord.user_id == user_id)
    )
    return CompletionTracker(
        completed={
            row.exercise_id: CompletedExercise(
                id=row.id,
                exercise_id=row.exercise_id,
                workout_id=row.workout_id,
                completed_at=_aware(row.completed_at),
                calories_burned=row.calories_burned,
            )
            for row in completions.scalars()
        },
        favorites={
            row.exercise_id: FavoriteExercise(
                exercise_id=row.exercise_id,
                name=row.name,
                muscle_group=row.muscle_group,
                added_at=_aware(row.added_at),
            )
            for row in favorites.scalars()
        },
    )


async def store_tracker(db: AsyncSession, user_id: str, tracker: CompletionTracker) -> None:
    """Sync completion and favorite rows to the tracker's current state."""
    completions = await db.execute(
        select(CompletedExerciseRecord).where(CompletedExerciseRecord.user_id == user_id)
    )
    rows = {row.exercise_id: row for row in completions.scalars()}
    for exercise_id, record in tracker.completed.items():
        row = rows.get(exercise_id)
        if row:
            row.workout_id = record.workout_id
            row.completed_at = record.completed_at
            row.calories_burned = record.calories_burned
        else:
            db.add(CompletedExerciseRecord(
                id=record.id,
                user_id=user_id,
                exercise_id=exercise_id,
                workout_id=record.workout_id,
                completed_at=record.completed_at,
                calories_burned=record.calories_burned,
            ))

    favorites = await db.execute(
        select(FavoriteExerciseRecord).where(FavoriteExerciseRecord.user_id == user_id)
    )
    stored = {row.exercise_id: row for row in favorites.scalars()}
    for exercise_id, row in stored.items():
        if exercise_id not in tracker.favorites:
            await db.delete(row)
    for exercise_id, favorite in tracker.favorites.items():
        if exercise_id not in stored:
            db.add(FavoriteExerciseRecord(
                user_id=user_id,
                exercise_id=exercise_id,
                name=favorite.name,
                muscle_group=favorite.muscle_group,
                added_at=favorite.added_at,
            ))

    await db.flush()


# ══════════════════════════════════════════════════════════════════════════════
# SAVED WORKOUTS
# ══════════════════════════════════════════════════════════════════════════════

def _saved_to_domain(row: SavedWorkoutRecord) -> SavedWorkout:
    return SavedWorkout(id=row.id, name=row.name, date=_aware(row.date), plan=plan_from_dict(row.plan))


async def store_saved_workout(db: AsyncSession, user_id: str, saved: SavedWorkout) -> SavedWorkout:
    row = await db.get(SavedWorkoutRecord, saved.id)
    if row and row.user_id != user_id:
        raise ValueError(f"Workout {saved.id} belongs to another profile.")
    if row:
        row.name = saved.name
        row.date = saved.date
        row.plan = plan_to_dict(saved.plan)
    else:
        db.add(SavedWorkoutRecord(
            id=saved.id,
            user_id=user_id,
            name=saved.name,
            date=saved.date,
            plan=plan_to_dict(saved.plan),
        ))
    await db.flush()
    return saved


async def list_saved_workouts(db: AsyncSession, user_id: str) -> list[SavedWorkout]:
    result = await db.execute(
        select(SavedWorkoutRecord)
        .where(SavedWorkoutRecord.user_id == user_id)
        .order_by(desc(SavedWorkoutRecord.date))
    )
    return [_saved_to_domain(row) for row in result.scalars()]


async def delete_saved_workout(db: AsyncSession, user_id: str, workout_id: str) -> None:
    row = await db.get(SavedWorkoutRecord, workout_id)
    if not row or row.user_id != user_id:
        raise ValueError(f"Saved workout {workout_id} not found.")
    await db.delete(row)
    await db.flush()
