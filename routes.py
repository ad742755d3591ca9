"""
FitPlanner - API Routes
All endpoint implementations.
"""

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
import logging
import random
import uuid

from database import get_db
from schemas import (
    PlanRequestSchema, RegenerateRequestSchema, WorkoutPlanSchema,
    SavePlanRequestSchema, SavePlanResponseSchema, SavedWorkoutSchema,
    ProfileCreateSchema, ProfileSchema, RatingInputSchema, DifficultySchema,
    RecommendationRequestSchema, RecommendationSchema,
    CompleteExerciseSchema, CompletedExerciseSchema, WorkoutProgressSchema,
    FavoriteInputSchema, FavoriteSchema, DashboardSchema, MessageSchema,
)
from exercise_catalog import Exercise
from plan_assembler import PlanAssembler, PlanConstraints, WorkoutPlan
from difficulty_adjuster import difficulty_adjuster
from recommendation_engine import RecommendationEngine
from tracking import dashboard_stats, estimate_exercise_calories, exercise_id_for
from user_profile import (
    UserProfile, add_completed_workout, add_workout_rating, completed_workout_for,
    create_user_profile, rating_for_satisfaction, save_plan, temporary_profile,
)
from profile_service import (
    load_profile, save_profile, load_tracker, store_tracker,
    store_saved_workout, list_saved_workouts, delete_saved_workout,
)
from config import settings

log = logging.getLogger(__name__)

recommendation_engine = RecommendationEngine(similar_user_count=settings.SIMILAR_USER_COUNT)


# ══════════════════════════════════════════════════════════════════════════════
# HELPERS
# ══════════════════════════════════════════════════════════════════════════════

def _assembler() -> PlanAssembler:
    seed = settings.PLAN_RANDOM_SEED
    return PlanAssembler(rng=random.Random(seed) if seed is not None else None)


def _constraints(data: PlanRequestSchema, difficulty: Optional[str] = None) -> PlanConstraints:
    return PlanConstraints(
        equipment=data.equipment,
        muscle_groups=data.muscle_groups,
        gender=data.gender,
        duration=data.duration,
        difficulty=difficulty or data.difficulty.value,
        goal=data.goal.value if data.goal else None,
        name=data.name,
    )


def _exercise_from_schema(data) -> Exercise:
    return Exercise(**{**data.model_dump(), "equipment": tuple(data.equipment)})


def _plan_from_schema(data: WorkoutPlanSchema) -> WorkoutPlan:
    return WorkoutPlan(
        id=data.id,
        name=data.name,
        exercises=[_exercise_from_schema(ex) for ex in data.exercises],
        duration=data.duration,
        difficulty=data.difficulty.value,
        muscle_groups=list(data.muscle_groups),
        equipment=list(data.equipment),
        gender=data.gender,
        goal=data.goal,
    )


async def _require_profile(db: AsyncSession, user_id: str) -> UserProfile:
    profile = await load_profile(db, user_id)
    if not profile:
        raise HTTPException(status_code=404, detail=f"No profile found for '{user_id}'. POST /profile first.")
    return profile


async def _resolve_difficulty(db: AsyncSession, data: PlanRequestSchema) -> Optional[str]:
    if not (data.auto_difficulty and data.user_id):
        return None
    profile = await _require_profile(db, data.user_id)
    adjustment = difficulty_adjuster.analyze(profile)
    log.info(f"Auto difficulty for {profile.id}: {adjustment.difficulty}")
    return adjustment.difficulty


# ══════════════════════════════════════════════════════════════════════════════
# PLANS ROUTER
# ══════════════════════════════════════════════════════════════════════════════

plans_router = APIRouter()


@plans_router.post("/generate", response_model=WorkoutPlanSchema)
async def generate(data: PlanRequestSchema, db: AsyncSession = Depends(get_db)):
    """
    Build a workout plan from questionnaire answers.
    An empty exercise list is a valid result when nothing matches.
    """
    difficulty = await _resolve_difficulty(db, data)
    try:
        plan = _assembler().generate(_constraints(data, difficulty))
    except Exception as e:
        log.error(f"Plan generation failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Plan generation failed. Please try again.")
    return WorkoutPlanSchema.model_validate(plan)


@plans_router.post("/regenerate", response_model=WorkoutPlanSchema)
async def regenerate(data: RegenerateRequestSchema, db: AsyncSession = Depends(get_db)):
    """Rebuild a plan after applying free-text feedback ("too hard", "more arms")."""
    difficulty = await _resolve_difficulty(db, data)
    try:
        plan = _assembler().regenerate_from_feedback(_constraints(data, difficulty), data.feedback)
    except Exception as e:
        log.error(f"Plan regeneration failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Plan regeneration failed. Please try again.")
    return WorkoutPlanSchema.model_validate(plan)


@plans_router.post("/save", response_model=SavePlanResponseSchema, status_code=201)
async def save(data: SavePlanRequestSchema, db: AsyncSession = Depends(get_db)):
    """Save a plan; records it as completed and rates it 4 stars, creating a profile if needed."""
    profile = await _require_profile(db, data.user_id) if data.user_id else None
    profile, saved = save_plan(profile, _plan_from_schema(data.plan), age=data.age, weight=data.weight)

    await save_profile(db, profile)
    try:
        await store_saved_workout(db, profile.id, saved)
    except ValueError as e:
        raise HTTPException(status_code=409, detail=str(e))

    return SavePlanResponseSchema(profile_id=profile.id, workout=SavedWorkoutSchema.model_validate(saved))


@plans_router.get("/saved/{user_id}", response_model=List[SavedWorkoutSchema])
async def saved_workouts(user_id: str, db: AsyncSession = Depends(get_db)):
    await _require_profile(db, user_id)
    return [SavedWorkoutSchema.model_validate(w) for w in await list_saved_workouts(db, user_id)]


@plans_router.delete("/saved/{user_id}/{workout_id}", response_model=MessageSchema)
async def remove_saved_workout(user_id: str, workout_id: str, db: AsyncSession = Depends(get_db)):
    try:
        await delete_saved_workout(db, user_id, workout_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return MessageSchema(message="Saved workout deleted.", detail=workout_id)


# ══════════════════════════════════════════════════════════════════════════════
# PROFILE ROUTER
# ══════════════════════════════════════════════════════════════════════════════

profile_router = APIRouter()


@profile_router.post("", response_model=ProfileSchema, status_code=201)
async def create_profile(data: ProfileCreateSchema, db: AsyncSession = Depends(get_db)):
    if data.user_id and await load_profile(db, data.user_id):
        raise HTTPException(status_code=409, detail=f"Profile '{data.user_id}' already exists.")

    profile = create_user_profile(
        name=data.name,
        gender=data.gender,
        age=data.age,
        weight=data.weight,
        equipment=data.equipment,
        muscle_groups=data.muscle_groups,
        user_id=data.user_id,
    )
    await save_profile(db, profile)
    log.info(f"Created profile {profile.id}")
    return ProfileSchema.model_validate(profile)


@profile_router.get("/{user_id}", response_model=ProfileSchema)
async def get_profile(user_id: str, db: AsyncSession = Depends(get_db)):
    return ProfileSchema.model_validate(await _require_profile(db, user_id))


@profile_router.post("/{user_id}/ratings", response_model=ProfileSchema)
async def rate_workout(user_id: str, data: RatingInputSchema, db: AsyncSession = Depends(get_db)):
    """Upsert a rating; a second rating for the same plan replaces the first."""
    profile = await _require_profile(db, user_id)
    rating = data.rating if data.rating is not None else rating_for_satisfaction(data.satisfaction.value)

    try:
        profile = add_workout_rating(profile, data.workout_plan_id, rating, data.feedback)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    await save_profile(db, profile)
    return ProfileSchema.model_validate(profile)


@profile_router.post("/{user_id}/completed", response_model=ProfileSchema, status_code=201)
async def complete_workout(user_id: str, data: WorkoutPlanSchema, db: AsyncSession = Depends(get_db)):
    """Append a finished plan to the profile's workout history."""
    profile = await _require_profile(db, user_id)
    plan = _plan_from_schema(data)
    profile = add_completed_workout(profile, completed_workout_for(plan, plan.id or uuid.uuid4().hex))
    await save_profile(db, profile)
    return ProfileSchema.model_validate(profile)


@profile_router.get("/{user_id}/difficulty", response_model=DifficultySchema)
async def get_difficulty(user_id: str, db: AsyncSession = Depends(get_db)):
    profile = await _require_profile(db, user_id)
    return DifficultySchema.model_validate(difficulty_adjuster.analyze(profile))


# ══════════════════════════════════════════════════════════════════════════════
# RECOMMENDATIONS ROUTER
# ══════════════════════════════════════════════════════════════════════════════

recommendations_router = APIRouter()


@recommendations_router.post("", response_model=List[RecommendationSchema])
async def recommend(data: RecommendationRequestSchema, db: AsyncSession = Depends(get_db)):
    """
    Collaborative picks first, then plans similar to the current workout.
    Short lists are topped up with the panel's most popular plans.
    """
    top_n = data.top_n or settings.RECOMMENDATION_TOP_N
    current = _plan_from_schema(data.current_workout) if data.current_workout else None

    profile = await load_profile(db, data.user_id) if data.user_id else None
    if profile is None and current is not None:
        profile = temporary_profile(current)

    try:
        recs = recommendation_engine.recommend(profile, current, top_n)
        if len(recs) < top_n:
            recs += recommendation_engine.popular(top_n - len(recs), exclude={r.id for r in recs})
    except Exception as e:
        log.error(f"Recommendation failed for {data.user_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Recommendations unavailable. Please try again.")

    return [RecommendationSchema.model_validate(r) for r in recs]


# ══════════════════════════════════════════════════════════════════════════════
# TRACKING ROUTER
# ══════════════════════════════════════════════════════════════════════════════

tracking_router = APIRouter()


@tracking_router.post("/{user_id}/complete", response_model=CompletedExerciseSchema, status_code=201)
async def complete_exercise(user_id: str, data: CompleteExerciseSchema, db: AsyncSession = Depends(get_db)):
    await _require_profile(db, user_id)
    tracker = await load_tracker(db, user_id)

    exercise = _exercise_from_schema(data.exercise) if data.exercise else None
    exercise_id = data.exercise_id or exercise_id_for(exercise.name)
    if data.calories_burned is not None:
        calories = data.calories_burned
    else:
        calories = estimate_exercise_calories(exercise) if exercise else 0

    try:
        record = tracker.mark_exercise_complete(exercise_id, data.workout_id, calories)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    await store_tracker(db, user_id, tracker)
    return CompletedExerciseSchema.model_validate(record)


@tracking_router.get("/{user_id}/workouts/{workout_id}", response_model=WorkoutProgressSchema)
async def workout_progress(
    user_id: str,
    workout_id: str,
    total_exercises: int = Query(..., ge=0),
    db: AsyncSession = Depends(get_db),
):
    tracker = await load_tracker(db, user_id)
    done = [c.exercise_id for c in tracker.completed.values() if c.workout_id == workout_id]
    return WorkoutProgressSchema(
        workout_id=workout_id,
        completed_exercises=done,
        total_exercises=total_exercises,
        completion_percentage=tracker.completion_percentage(workout_id, total_exercises),
        calories_burned=tracker.total_calories_burned(workout_id),
    )


@tracking_router.get("/{user_id}/favorites", response_model=List[FavoriteSchema])
async def list_favorites(user_id: str, db: AsyncSession = Depends(get_db)):
    tracker = await load_tracker(db, user_id)
    return [FavoriteSchema.model_validate(f) for f in tracker.favorites.values()]


@tracking_router.post("/{user_id}/favorites", response_model=FavoriteSchema, status_code=201)
async def add_favorite(user_id: str, data: FavoriteInputSchema, db: AsyncSession = Depends(get_db)):
    await _require_profile(db, user_id)
    tracker = await load_tracker(db, user_id)
    favorite = tracker.add_favorite(data.exercise_id or exercise_id_for(data.name), data.name, data.muscle_group)
    await store_tracker(db, user_id, tracker)
    return FavoriteSchema.model_validate(favorite)


@tracking_router.delete("/{user_id}/favorites/{exercise_id}", response_model=MessageSchema)
async def remove_favorite(user_id: str, exercise_id: str, db: AsyncSession = Depends(get_db)):
    tracker = await load_tracker(db, user_id)
    tracker.remove_favorite(exercise_id)
    await store_tracker(db, user_id, tracker)
    return MessageSchema(message="Removed from favorites.", detail=exercise_id)


# ══════════════════════════════════════════════════════════════════════════════
# DASHBOARD ROUTER
# ══════════════════════════════════════════════════════════════════════════════

dashboard_router = APIRouter()


@dashboard_router.get("/{user_id}", response_model=DashboardSchema)
async def get_dashboard(user_id: str, db: AsyncSession = Depends(get_db)):
    """Totals, streak, breakdowns and the monthly calorie series for one profile."""
    profile = await _require_profile(db, user_id)
    tracker = await load_tracker(db, user_id)
    return DashboardSchema.model_validate(dashboard_stats(profile, tracker))
