"""
FitPlanner - Pydantic Schemas
Request/response models for all API endpoints.
"""

from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Optional, List, Dict
from datetime import datetime
from enum import Enum

from recommendation_engine import RecommendationSource


# ══════════════════════════════════════════════════════════════════════════════
# PLANS
# ══════════════════════════════════════════════════════════════════════════════

class Difficulty(str, Enum):
    beginner = "beginner"
    intermediate = "intermediate"
    advanced = "advanced"


class Goal(str, Enum):
    strength = "strength"
    hypertrophy = "hypertrophy"
    cardio = "cardio"
    flexibility = "flexibility"


class PlanRequestSchema(BaseModel):
    """Questionnaire answers. Unknown equipment or muscle groups simply match nothing."""
    equipment: List[str] = []
    muscle_groups: List[str] = []
    gender: str = ""
    duration: int = Field(default=30, ge=5, le=180, description="Session length in minutes")
    difficulty: Difficulty = Difficulty.intermediate
    goal: Optional[Goal] = None
    name: Optional[str] = Field(None, max_length=128)

    # Let the difficulty adjuster pick the tier from this profile's history
    user_id: Optional[str] = None
    auto_difficulty: bool = False

    @field_validator("equipment")
    @classmethod
    def normalise_equipment(cls, v: List[str]) -> List[str]:
        return [tag.strip().lower() for tag in v if tag.strip()]


class RegenerateRequestSchema(PlanRequestSchema):
    feedback: str = Field(..., min_length=1, max_length=2000)


class ExerciseSchema(BaseModel):
    name: str
    muscle_group: Optional[str] = None
    equipment: List[str] = []
    sets: Optional[int] = None
    reps: Optional[str] = None          # e.g. "8-12" or "30 seconds"
    rest: Optional[str] = None
    duration: Optional[str] = None
    intensity: Optional[str] = None
    instructions: Optional[str] = None
    weight_note: Optional[str] = None

    class Config:
        from_attributes = True


class WorkoutPlanSchema(BaseModel):
    id: Optional[str] = None
    name: Optional[str] = None
    exercises: List[ExerciseSchema]
    duration: int = Field(..., ge=1)
    difficulty: Difficulty
    muscle_groups: List[str]
    equipment: List[str] = []
    gender: Optional[str] = None
    goal: Optional[str] = None

    class Config:
        from_attributes = True


class SavePlanRequestSchema(BaseModel):
    user_id: Optional[str] = None
    plan: WorkoutPlanSchema
    age: int = Field(default=30, ge=13, le=100)
    weight: str = ""


class SavedWorkoutSchema(BaseModel):
    id: str
    name: str
    date: datetime
    plan: WorkoutPlanSchema

    class Config:
        from_attributes = True


class SavePlanResponseSchema(BaseModel):
    profile_id: str
    workout: SavedWorkoutSchema


# ══════════════════════════════════════════════════════════════════════════════
# PROFILE
# ══════════════════════════════════════════════════════════════════════════════

class Satisfaction(str, Enum):
    very_satisfied = "very-satisfied"
    satisfied = "satisfied"
    neutral = "neutral"
    unsatisfied = "unsatisfied"


class ProfileCreateSchema(BaseModel):
    name: str = Field(..., min_length=1, max_length=128)
    gender: str = ""
    age: int = Field(..., ge=13, le=100)
    weight: str = ""
    equipment: List[str] = []
    muscle_groups: List[str] = []
    user_id: Optional[str] = Field(None, max_length=64)


class CompletedWorkoutSchema(BaseModel):
    id: str
    date: datetime
    workout_plan_id: str
    duration: int
    muscle_groups: List[str]
    difficulty: str

    class Config:
        from_attributes = True


class WorkoutRatingSchema(BaseModel):
    workout_plan_id: str
    rating: int = Field(..., ge=1, le=5)
    timestamp: datetime
    feedback: Optional[str] = None

    class Config:
        from_attributes = True


class ProfileSchema(BaseModel):
    id: str
    name: str
    gender: str
    age: int
    weight: str
    preferred_equipment: List[str]
    preferred_muscle_groups: List[str]
    completed_workouts: List[CompletedWorkoutSchema]
    ratings: List[WorkoutRatingSchema]
    last_updated: datetime

    class Config:
        from_attributes = True


class RatingInputSchema(BaseModel):
    """Either a 1-5 star rating or a satisfaction answer from the feedback form."""
    workout_plan_id: str = Field(..., min_length=1)
    rating: Optional[int] = Field(None, ge=1, le=5)
    satisfaction: Optional[Satisfaction] = None
    feedback: Optional[str] = Field(None, max_length=2000)

    @model_validator(mode="after")
    def require_rating_or_satisfaction(self):
        if self.rating is None and self.satisfaction is None:
            raise ValueError("Provide either a rating or a satisfaction level.")
        return self


class FeedbackSummarySchema(BaseModel):
    average_rating: float
    rating_trend: str
    sentiment: str

    class Config:
        from_attributes = True


class DifficultySchema(BaseModel):
    difficulty: Difficulty
    reason: str
    workouts_per_week: float
    consistency_score: float = Field(..., ge=0, le=10)
    feedback: FeedbackSummarySchema

    class Config:
        from_attributes = True


# ══════════════════════════════════════════════════════════════════════════════
# RECOMMENDATIONS
# ══════════════════════════════════════════════════════════════════════════════

class RecommendationRequestSchema(BaseModel):
    user_id: Optional[str] = None
    current_workout: Optional[WorkoutPlanSchema] = None
    top_n: Optional[int] = Field(None, ge=1, le=20)


class RecommendationSchema(BaseModel):
    id: str
    name: str
    score: float
    reason: str
    source: RecommendationSource
    muscle_groups: List[str]
    equipment: List[str]
    difficulty: str
    duration: int

    class Config:
        from_attributes = True


# ══════════════════════════════════════════════════════════════════════════════
# TRACKING
# ══════════════════════════════════════════════════════════════════════════════

class CompleteExerciseSchema(BaseModel):
    """Calories are estimated from the exercise when not reported."""
    workout_id: str = Field(..., min_length=1)
    exercise_id: Optional[str] = None
    exercise: Optional[ExerciseSchema] = None
    calories_burned: Optional[int] = Field(None, ge=0)

    @model_validator(mode="after")
    def require_exercise(self):
        if not self.exercise_id and self.exercise is None:
            raise ValueError("Provide an exercise_id or the exercise itself.")
        return self


class CompletedExerciseSchema(BaseModel):
    id: str
    exercise_id: str
    workout_id: str
    completed_at: datetime
    calories_burned: int

    class Config:
        from_attributes = True


class WorkoutProgressSchema(BaseModel):
    workout_id: str
    completed_exercises: List[str]
    total_exercises: int
    completion_percentage: int = Field(..., ge=0)
    calories_burned: int


class FavoriteInputSchema(BaseModel):
    name: str = Field(..., min_length=1, max_length=128)
    exercise_id: Optional[str] = None
    muscle_group: Optional[str] = None


class FavoriteSchema(BaseModel):
    exercise_id: str
    name: str
    muscle_group: Optional[str] = None
    added_at: datetime

    class Config:
        from_attributes = True


# ══════════════════════════════════════════════════════════════════════════════
# DASHBOARD
# ══════════════════════════════════════════════════════════════════════════════

class MonthlyCaloriesSchema(BaseModel):
    name: str
    calories: int
    target: int
    deficit: int

    class Config:
        from_attributes = True


class DashboardSchema(BaseModel):
    workouts_completed: int
    total_minutes: int
    calories_burned: int
    progress: int = Field(..., ge=0, le=100)
    streak_days: int
    weekly_average: float
    difficulty_breakdown: Dict[str, int]
    muscle_group_counts: Dict[str, int]
    monthly_calories: List[MonthlyCaloriesSchema]

    class Config:
        from_attributes = True


# ══════════════════════════════════════════════════════════════════════════════
# GENERIC
# ══════════════════════════════════════════════════════════════════════════════

class MessageSchema(BaseModel):
    message: str
    detail: Optional[str] = None
