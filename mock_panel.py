"""
FitPlanner - Reference Panel
Read-only comparison population for collaborative filtering: a small set of
panel users with ratings, and the catalog of named plans they rated.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone

from user_profile import UserProfile, WorkoutRating


@dataclass(frozen=True)
class CatalogPlan:
    id: str
    name: str
    muscle_groups: list[str] = field(default_factory=list)
    equipment: list[str] = field(default_factory=list)
    difficulty: str = "intermediate"
    duration: int = 30


_UBPUSH = "Upper Body Push"
_UBPULL = "Upper Body Pull"
_LBPUSH = "Lower Body Push"
_LBPULL = "Lower Body Pull"

MOCK_WORKOUT_PLANS: tuple[CatalogPlan, ...] = (
    CatalogPlan("plan_1", "Dumbbell Upper Body Builder", [_UBPUSH, _UBPULL, "Arms"], ["dumbbells"], "intermediate", 45),
    CatalogPlan("plan_2", "Bodyweight Leg Day", [_LBPUSH, _LBPULL], ["bodyweight"], "beginner", 30),
    CatalogPlan("plan_3", "Kettlebell Total Body", [_LBPULL, "Core", "Shoulders"], ["kettlebells"], "advanced", 40),
    CatalogPlan("plan_4", "Band Shoulder Sculpt", ["Shoulders", "Arms"], ["resistance bands"], "beginner", 20),
    CatalogPlan("plan_5", "Barbell Strength Base", [_LBPUSH, _UBPUSH, _UBPULL], ["barbells", "bench"], "advanced", 60),
    CatalogPlan("plan_6", "Core Crusher", ["Core"], ["bodyweight", "yoga mat"], "intermediate", 20),
    CatalogPlan("plan_7", "Cable Pull Day", [_UBPULL, "Arms"], ["cables"], "intermediate", 35),
    CatalogPlan("plan_8", "TRX Full Body Flow", [_UBPUSH, _UBPULL, "Core"], ["trx"], "intermediate", 30),
    CatalogPlan("plan_9", "Glute and Hamstring Focus", [_LBPULL], ["dumbbells", "resistance bands"], "intermediate", 40),
    CatalogPlan("plan_10", "Medicine Ball Power", ["Core", "Shoulders", _LBPUSH], ["medicine ball"], "advanced", 30),
    CatalogPlan("plan_11", "Mobility and Recovery", ["Core", _LBPULL], ["foam roller", "yoga mat"], "beginner", 25),
    CatalogPlan("plan_12", "Dumbbell Arm Blast", ["Arms", "Shoulders"], ["dumbbells"], "beginner", 20),
)


def _rated(plan_id: str, rating: int, day: int, feedback: str = None) -> WorkoutRating:
    return WorkoutRating(
        workout_plan_id=plan_id,
        rating=rating,
        timestamp=datetime(2024, 3, day, 18, 0, tzinfo=timezone.utc),
        feedback=feedback,
    )


MOCK_USERS: tuple[UserProfile, ...] = (
    UserProfile(
        id="mock_alex", name="Alex", gender="male", age=28, weight="82kg",
        preferred_equipment=["dumbbells", "barbells", "bench"],
        preferred_muscle_groups=[_UBPUSH, _UBPULL, "Arms"],
        ratings=[_rated("plan_1", 5, 2, "Great pump"), _rated("plan_5", 4, 5), _rated("plan_12", 4, 9)],
    ),
    UserProfile(
        id="mock_jordan", name="Jordan", gender="female", age=34, weight="61kg",
        preferred_equipment=["resistance bands", "yoga mat"],
        preferred_muscle_groups=[_LBPULL, "Core"],
        ratings=[_rated("plan_9", 5, 3), _rated("plan_6", 4, 6), _rated("plan_11", 5, 10, "Perfect cooldown")],
    ),
    UserProfile(
        id="mock_sam", name="Sam", gender="male", age=41, weight="90kg",
        preferred_equipment=["kettlebells", "medicine ball"],
        preferred_muscle_groups=[_LBPULL, "Core", "Shoulders"],
        ratings=[_rated("plan_3", 5, 1), _rated("plan_10", 4, 4), _rated("plan_2", 2, 8, "Too easy")],
    ),
    UserProfile(
        id="mock_priya", name="Priya", gender="female", age=26, weight="57kg",
        preferred_equipment=["dumbbells", "resistance bands"],
        preferred_muscle_groups=["Arms", "Shoulders", _LBPULL],
        ratings=[_rated("plan_4", 5, 2), _rated("plan_12", 5, 7), _rated("plan_9", 4, 11)],
    ),
    UserProfile(
        id="mock_marcus", name="Marcus", gender="male", age=23, weight="76kg",
        preferred_equipment=["cables", "dumbbells"],
        preferred_muscle_groups=[_UBPULL, "Arms"],
        ratings=[_rated("plan_7", 5, 3), _rated("plan_1", 4, 6), _rated("plan_8", 3, 12)],
    ),
    UserProfile(
        id="mock_elena", name="Elena", gender="female", age=47, weight="66kg",
        preferred_equipment=["bodyweight", "foam roller", "yoga mat"],
        preferred_muscle_groups=["Core", _LBPUSH],
        ratings=[_rated("plan_2", 4, 1), _rated("plan_11", 5, 5), _rated("plan_6", 5, 13)],
    ),
    UserProfile(
        id="mock_chris", name="Chris", gender="male", age=31, weight="85kg",
        preferred_equipment=["trx", "bodyweight"],
        preferred_muscle_groups=[_UBPUSH, _UBPULL, "Core"],
        ratings=[_rated("plan_8", 5, 2), _rated("plan_6", 4, 8), _rated("plan_5", 2, 14, "Too hard for me")],
    ),
    UserProfile(
        id="mock_mia", name="Mia", gender="female", age=38, weight="70kg",
        preferred_equipment=["medicine ball", "kettlebells", "dumbbells"],
        preferred_muscle_groups=[_LBPUSH, "Shoulders", "Core"],
        ratings=[_rated("plan_10", 5, 4), _rated("plan_3", 4, 9), _rated("plan_4", 3, 15)],
    ),
)
