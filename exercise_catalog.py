"""
FitPlanner - Exercise Catalog
Static reference data: goal -> exercise type -> exercise records,
plus the per-equipment fallback tables used when the catalog is thin.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Mapping, Optional

log = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════════
# MUSCLE GROUPS
# ══════════════════════════════════════════════════════════════════════════════

class MuscleGroup(str, Enum):
    upper_body_push = "Upper Body Push"
    upper_body_pull = "Upper Body Pull"
    lower_body_push = "Lower Body Push"
    lower_body_pull = "Lower Body Pull"
    core = "Core"
    arms = "Arms"
    shoulders = "Shoulders"


ALL_MUSCLE_GROUPS = "All"

LARGE_MUSCLE_GROUPS = {
    MuscleGroup.lower_body_push.value,
    MuscleGroup.lower_body_pull.value,
    MuscleGroup.upper_body_pull.value,
}


def expand_muscle_groups(groups: Iterable[str]) -> list[str]:
    """Replace the "All" selector with every muscle group, keeping request order."""
    expanded: list[str] = []
    for group in groups:
        names = [g.value for g in MuscleGroup] if group == ALL_MUSCLE_GROUPS else [group]
        for name in names:
            if name not in expanded:
                expanded.append(name)
    return expanded


# ══════════════════════════════════════════════════════════════════════════════
# DATA STRUCTURES
# ══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Exercise:
    name: str
    muscle_group: Optional[str]
    equipment: tuple[str, ...] = ()
    sets: Optional[int] = None
    reps: Optional[str] = None          # "8-12" or "15" or "10 per leg"
    rest: Optional[str] = None
    duration: Optional[str] = None      # timed exercises, e.g. "30-60 sec"
    intensity: Optional[str] = None
    instructions: Optional[str] = None
    weight_note: Optional[str] = None

    def uses_equipment(self, equipment: Iterable[str]) -> bool:
        wanted = set(equipment)
        return any(tag.lower() in wanted for tag in self.equipment)


@dataclass(frozen=True)
class ExerciseCatalog:
    """Read-only nested mapping goal -> exercise type -> exercises."""
    goals: Mapping[str, Mapping[str, tuple[Exercise, ...]]] = field(default_factory=dict)

    def exercises_for_goal(self, goal: Optional[str]) -> list[Exercise]:
        """Exercises of one goal, or of every goal when the goal is unknown or empty."""
        if goal and self.goals.get(goal):
            return [ex for exercises in self.goals[goal].values() for ex in exercises]
        return self.all_exercises()

    def all_exercises(self) -> list[Exercise]:
        return [
            ex
            for types in self.goals.values()
            for exercises in types.values()
            for ex in exercises
        ]


# ══════════════════════════════════════════════════════════════════════════════
# CATALOG ROWS
# ══════════════════════════════════════════════════════════════════════════════

UBPUSH = MuscleGroup.upper_body_push.value
UBPULL = MuscleGroup.upper_body_pull.value
LBPUSH = MuscleGroup.lower_body_push.value
LBPULL = MuscleGroup.lower_body_pull.value
CORE = MuscleGroup.core.value
ARMS = MuscleGroup.arms.value
SHOULDERS = MuscleGroup.shoulders.value

# Each row: (name, sets, reps, duration, rest, muscle_group, equipment)
_STRENGTH = {
    "full-body": [
        ("Barbell Squat",     4, "6-8",   None,        "2-3 min", LBPUSH,    ("barbells",)),
        ("Bench Press",       4, "6-8",   None,        "2-3 min", UBPUSH,    ("barbells",)),
        ("Deadlift",          3, "5-6",   None,        "3 min",   LBPULL,    ("barbells",)),
        ("Pull-ups",          3, "8-10",  None,        "2 min",   UBPULL,    ("bodyweight",)),
        ("Overhead Press",    3, "8-10",  None,        "2 min",   SHOULDERS, ("barbells", "dumbbells")),
        ("Barbell Rows",      3, "8-10",  None,        "2 min",   UBPULL,    ("barbells",)),
        ("Dips",              3, "8-12",  None,        "2 min",   UBPUSH,    ("bodyweight",)),
        ("Lunges",            3, "10-12 per leg", None, "2 min",  LBPUSH,    ("bodyweight", "dumbbells")),
        ("Face Pulls",        3, "12-15", None,        "1-2 min", SHOULDERS, ("cables",)),
        ("Plank",             3, None,    "30-60 sec", "1 min",   CORE,      ("bodyweight",)),
        ("Kettlebell Swing",  3, "15-20", None,        "1-2 min", LBPULL,    ("kettlebells",)),
        ("TRX Row",           3, "10-12", None,        "1-2 min", UBPULL,    ("trx",)),
        ("Medicine Ball Slam", 3, "10-12", None,       "1-2 min", CORE,      ("medicine ball",)),
    ],
    "upper-body": [
        ("Bent Over Rows",         3, "8-10",  None, "2 min",   UBPULL,    ("barbells", "dumbbells")),
        ("Tricep Dips",            3, "8-12",  None, "90 sec",  ARMS,      ("bodyweight", "machine")),
        ("Incline Dumbbell Press", 3, "8-10",  None, "2 min",   UBPUSH,    ("dumbbells",)),
        ("Lat Pulldown",           3, "10-12", None, "90 sec",  UBPULL,    ("machine", "cables")),
        ("Lateral Raises",         3, "12-15", None, "60 sec",  SHOULDERS, ("dumbbells",)),
        ("Bicep Curls",            3, "10-12", None, "60 sec",  ARMS,      ("dumbbells", "barbells")),
        ("Tricep Pushdowns",       3, "10-12", None, "60 sec",  ARMS,      ("cables",)),
        ("Kettlebell Single-Arm Press", 3, "8-10 per arm", None, "90 sec", SHOULDERS, ("kettlebells",)),
        ("TRX Chest Press",        3, "10-12", None, "90 sec",  UBPUSH,    ("trx",)),
        ("Resistance Band Pull-Apart", 3, "15-20", None, "60 sec", UBPULL, ("resistance bands",)),
        ("Resistance Band Bicep Curls", 3, "12-15", None, "45 sec", ARMS,  ("resistance bands",)),
        ("Resistance Band Shoulder Press", 3, "12-15", None, "60 sec", SHOULDERS, ("resistance bands",)),
    ],
    "lower-body": [
        ("Leg Press",              4, "8-10",  None, "2 min",   LBPUSH, ("machine",)),
        ("Romanian Deadlift",      3, "8-10",  None, "2 min",   LBPULL, ("barbells", "dumbbells")),
        ("Calf Raises",            4, "12-15", None, "60 sec",  LBPUSH, ("bodyweight", "machine")),
        ("Leg Curls",              3, "10-12", None, "90 sec",  LBPULL, ("machine",)),
        ("Hip Thrusts",            3, "8-12",  None, "2 min",   LBPUSH, ("barbells",)),
        ("Bulgarian Split Squats", 3, "8-10 per leg", None, "90 sec", LBPUSH, ("dumbbells", "bodyweight")),
        ("Kettlebell Goblet Squat", 3, "10-12", None, "90 sec", LBPUSH, ("kettlebells",)),
        ("TRX Hamstring Curl",     3, "10-12", None, "60 sec",  LBPULL, ("trx",)),
    ],
    "push": [
        ("Incline Bench Press",      4, "8-10",  None, "2 min",  UBPUSH, ("barbells", "dumbbells")),
        ("Chest Flyes",              3, "10-12", None, "90 sec", UBPUSH, ("dumbbells", "cables", "machine")),
        ("Kettlebell Floor Press",   3, "10-12", None, "90 sec", UBPUSH, ("kettlebells",)),
        ("Medicine Ball Chest Pass", 3, "10-12", None, "60 sec", UBPUSH, ("medicine ball",)),
    ],
    "pull": [
        ("Hammer Curls",          3, "10-12", None, "60 sec", ARMS,   ("dumbbells",)),
        ("Kettlebell High Pull",  3, "10-12", None, "90 sec", UBPULL, ("kettlebells",)),
    ],
    "split": [
        ("Kettlebell Turkish Get-Up", 3, "3-5 per side", None, "2 min", CORE, ("kettlebells",)),
        ("TRX Pistol Squat",          3, "6-8 per leg",  None, "90 sec", LBPUSH, ("trx",)),
        ("Medicine Ball Rotational Throw", 3, "8-10 per side", None, "60 sec", CORE, ("medicine ball",)),
    ],
}

_HYPERTROPHY = {
    "full-body": [
        ("Barbell Squat",           4, "8-12",  None, "90 sec", LBPUSH,    ("barbells",)),
        ("Bench Press",             4, "8-12",  None, "90 sec", UBPUSH,    ("barbells",)),
        ("Lat Pulldown",            4, "10-12", None, "90 sec", UBPULL,    ("machine", "cables")),
        ("Dumbbell Shoulder Press", 3, "10-12", None, "90 sec", SHOULDERS, ("dumbbells",)),
        ("Bicep Curls",             3, "10-12", None, "60 sec", ARMS,      ("dumbbells",)),
        ("Tricep Pushdowns",        3, "12-15", None, "60 sec", ARMS,      ("cables",)),
        ("TRX Chest Press",         3, "12-15", None, "60 sec", UBPUSH,    ("trx",)),
    ],
    "upper-body": [
        ("Seated Cable Rows",       4, "10-12", None, "90 sec", UBPULL,    ("cables",)),
        ("Chest Flyes",             3, "12-15", None, "60 sec", UBPUSH,    ("dumbbells", "cables")),
        ("Tricep Extensions",       3, "10-12", None, "60 sec", ARMS,      ("dumbbells", "cables")),
        ("Kettlebell Single-Arm Row", 3, "10-12 per arm", None, "60 sec", UBPULL, ("kettlebells",)),
        ("TRX Bicep Curl",          3, "12-15", None, "60 sec", ARMS,      ("trx",)),
        ("Resistance Band Overhead Press", 3, "12-15", None, "60 sec", SHOULDERS, ("resistance bands",)),
    ],
    "lower-body": [
        ("Romanian Deadlift",       4, "8-12",  None, "90 sec", LBPULL, ("barbells",)),
        ("Leg Extensions",          3, "12-15", None, "60 sec", LBPUSH, ("machine",)),
        ("Kettlebell Sumo Deadlift", 3, "10-12", None, "90 sec", LBPULL, ("kettlebells",)),
        ("Resistance Band Lateral Walk", 3, "15 per side", None, "45 sec", LBPUSH, ("resistance bands",)),
    ],
    "pull": [
        ("Rear Delt Flyes",         3, "12-15", None, "60 sec", SHOULDERS, ("dumbbells",)),
        ("Hammer Curls",            3, "10-12", None, "60 sec", ARMS,      ("dumbbells",)),
    ],
}

_CARDIO = {
    "full-body": [
        ("Jump Rope",        None, None, "5 min", None, None, ("jump rope",)),
        ("Burpees",          3, "15",    None,    "30 sec", None, ("bodyweight",)),
        ("Kettlebell Swings", 3, "15-20", None,   "45 sec", None, ("kettlebells",)),
        ("TRX Jump Squats",  3, "12-15", None,    "45 sec", LBPUSH, ("trx",)),
        ("Medicine Ball Slams", 3, "12-15", None, "45 sec", None, ("medicine ball",)),
    ],
    "lower-body": [
        ("Jump Squats",      4, "15",     None, "30 sec", None, ("bodyweight",)),
        ("Box Jumps",        3, "12",     None, "45 sec", None, ("box",)),
    ],
}

_FLEXIBILITY = {
    "full-body": [
        ("Sun Salutation",          3, None, "2 min",         None, None, ("bodyweight",)),
        ("World's Greatest Stretch", 2, "5 per side", None,   None, None, ("bodyweight",)),
        ("Pigeon Pose",             2, None, "1 min per side", None, None, ("bodyweight",)),
    ],
}

_INTENSITY = {"Jump Rope": "Moderate"}

_INSTRUCTIONS = {
    "Barbell Squat": (
        "Stand with feet shoulder-width apart, barbell across upper back. Bend knees and hips "
        "to lower until thighs are parallel to ground. Push through heels to return to starting position."
    ),
    "Bench Press": (
        "Lie on bench with feet flat on floor. Grip barbell with hands slightly wider than "
        "shoulder-width. Lower bar to chest, then press back up to starting position."
    ),
    "Deadlift": (
        "Stand with feet hip-width apart, barbell over mid-foot. Bend at hips and knees to grip bar. "
        "Keep back flat, chest up, and pull bar up along legs until standing upright."
    ),
    "Pull-ups": (
        "Hang from bar with hands slightly wider than shoulder-width. Pull body up until chin "
        "clears bar, then lower with control."
    ),
    "Plank": (
        "Start in push-up position with forearms on ground. Keep body in straight line from "
        "head to heels, engaging core muscles throughout."
    ),
    "Bicep Curls": (
        "Stand holding weights with palms facing forward. Curl the weights toward your shoulders "
        "keeping elbows pinned to your sides, then lower with control."
    ),
    "Hammer Curls": (
        "Hold dumbbells with palms facing each other. Curl toward your shoulders without "
        "rotating the wrists, then lower with control."
    ),
}


def _make_exercise(row: tuple) -> Exercise:
    name, sets, reps, duration, rest, muscle, equipment = row
    return Exercise(
        name=name,
        muscle_group=muscle,
        equipment=tuple(equipment),
        sets=sets,
        reps=reps,
        rest=rest,
        duration=duration,
        intensity=_INTENSITY.get(name),
        instructions=_INSTRUCTIONS.get(name),
    )


def build_catalog(raw: Mapping[str, Mapping[str, list[tuple]]]) -> ExerciseCatalog:
    return ExerciseCatalog(
        goals={
            goal: {kind: tuple(_make_exercise(r) for r in rows) for kind, rows in types.items()}
            for goal, types in raw.items()
        }
    )


DEFAULT_CATALOG = build_catalog({
    "strength": _STRENGTH,
    "hypertrophy": _HYPERTROPHY,
    "cardio": _CARDIO,
    "flexibility": _FLEXIBILITY,
})


# ══════════════════════════════════════════════════════════════════════════════
# FALLBACK TABLES
# ══════════════════════════════════════════════════════════════════════════════

# Checked in this order when a muscle group has fewer than two candidates.
FALLBACK_EQUIPMENT_ORDER = (
    "dumbbells",
    "resistance bands",
    "trx",
    "medicine ball",
    "kettlebells",
    "cables",
    "foam roller",
    "yoga mat",
    "bands",
)

# Each row: (name, sets, reps, duration, rest); two rows per muscle group in
# the order UBPUSH, UBPULL, ARMS, SHOULDERS, LBPUSH, LBPULL, CORE.
_FALLBACK_ROWS = {
    "dumbbells": [
        ("Dumbbell Bench Press", 3, "8-12", None, "90 sec"),
        ("Incline Dumbbell Press", 3, "8-12", None, "90 sec"),
        ("Dumbbell Rows", 3, "10-12", None, "90 sec"),
        ("Dumbbell Pullovers", 3, "10-12", None, "90 sec"),
        ("Dumbbell Bicep Curls", 3, "12-15", None, "60 sec"),
        ("Dumbbell Tricep Extensions", 3, "12-15", None, "60 sec"),
        ("Dumbbell Shoulder Press", 3, "10-12", None, "90 sec"),
        ("Lateral Raises", 3, "12-15", None, "60 sec"),
        ("Dumbbell Squats", 3, "10-12", None, "90 sec"),
        ("Dumbbell Lunges", 3, "10-12 per leg", None, "90 sec"),
        ("Dumbbell Romanian Deadlift", 3, "10-12", None, "90 sec"),
        ("Dumbbell Glute Bridge", 3, "12-15", None, "60 sec"),
        ("Dumbbell Russian Twists", 3, "12-15 per side", None, "60 sec"),
        ("Dumbbell Side Bends", 3, "12-15 per side", None, "60 sec"),
    ],
    "resistance bands": [
        ("Resistance Band Chest Press", 3, "12-15", None, "60 sec"),
        ("Resistance Band Push-ups", 3, "10-12", None, "60 sec"),
        ("Resistance Band Rows", 3, "12-15", None, "60 sec"),
        ("Resistance Band Lat Pulldowns", 3, "12-15", None, "60 sec"),
        ("Resistance Band Bicep Curls", 3, "12-15", None, "45 sec"),
        ("Resistance Band Tricep Extensions", 3, "12-15", None, "45 sec"),
        ("Resistance Band Shoulder Press", 3, "12-15", None, "60 sec"),
        ("Resistance Band Lateral Raises", 3, "12-15", None, "45 sec"),
        ("Resistance Band Squats", 3, "12-15", None, "60 sec"),
        ("Resistance Band Leg Press", 3, "12-15", None, "60 sec"),
        ("Resistance Band Deadlifts", 3, "12-15", None, "60 sec"),
        ("Resistance Band Hamstring Curls", 3, "12-15", None, "45 sec"),
        ("Resistance Band Pallof Press", 3, "12-15 per side", None, "45 sec"),
        ("Resistance Band Russian Twists", 3, "12-15 per side", None, "45 sec"),
    ],
    "trx": [
        ("TRX Push-ups", 3, "10-12", None, "60 sec"),
        ("TRX Chest Fly", 3, "10-12", None, "60 sec"),
        ("TRX Rows", 3, "10-12", None, "60 sec"),
        ("TRX Y-Pulls", 3, "10-12", None, "60 sec"),
        ("TRX Bicep Curls", 3, "10-12", None, "60 sec"),
        ("TRX Tricep Extensions", 3, "10-12", None, "60 sec"),
        ("TRX Y-Raises", 3, "10-12", None, "60 sec"),
        ("TRX T-Raises", 3, "10-12", None, "60 sec"),
        ("TRX Squats", 3, "12-15", None, "60 sec"),
        ("TRX Lunges", 3, "10-12 per leg", None, "60 sec"),
        ("TRX Hamstring Curls", 3, "10-12", None, "60 sec"),
        ("TRX Hip Press", 3, "12-15", None, "60 sec"),
        ("TRX Plank", 3, None, "30-45 sec", "45 sec"),
        ("TRX Pike", 3, "10-12", None, "60 sec"),
    ],
    "medicine ball": [
        ("Medicine Ball Chest Pass", 3, "12-15", None, "60 sec"),
        ("Medicine Ball Push-ups", 3, "10-12", None, "60 sec"),
        ("Medicine Ball Pull-overs", 3, "10-12", None, "60 sec"),
        ("Medicine Ball Rows", 3, "12-15", None, "60 sec"),
        ("Medicine Ball Bicep Curls", 3, "12-15", None, "60 sec"),
        ("Medicine Ball Tricep Extensions", 3, "12-15", None, "60 sec"),
        ("Medicine Ball Front Raises", 3, "12-15", None, "60 sec"),
        ("Medicine Ball Shoulder Press", 3, "10-12", None, "60 sec"),
        ("Medicine Ball Squats", 3, "12-15", None, "60 sec"),
        ("Medicine Ball Lunges", 3, "10-12 per leg", None, "60 sec"),
        ("Medicine Ball Deadlifts", 3, "12-15", None, "60 sec"),
        ("Medicine Ball Glute Bridges", 3, "15-20", None, "60 sec"),
        ("Medicine Ball Russian Twists", 3, "12-15 per side", None, "60 sec"),
        ("Medicine Ball Slams", 3, "12-15", None, "60 sec"),
    ],
    "kettlebells": [
        ("Kettlebell Floor Press", 3, "10-12 per arm", None, "60 sec"),
        ("Kettlebell Push Press", 3, "10-12 per arm", None, "60 sec"),
        ("Kettlebell Rows", 3, "10-12 per arm", None, "60 sec"),
        ("Kettlebell High Pulls", 3, "10-12", None, "60 sec"),
        ("Kettlebell Bicep Curls", 3, "12-15 per arm", None, "60 sec"),
        ("Kettlebell Tricep Extensions", 3, "12-15 per arm", None, "60 sec"),
        ("Kettlebell Shoulder Press", 3, "10-12 per arm", None, "60 sec"),
        ("Kettlebell Halos", 3, "10-12 each direction", None, "60 sec"),
        ("Kettlebell Goblet Squats", 3, "12-15", None, "60 sec"),
        ("Kettlebell Lunges", 3, "10-12 per leg", None, "60 sec"),
        ("Kettlebell Swings", 3, "15-20", None, "60 sec"),
        ("Kettlebell Deadlifts", 3, "12-15", None, "60 sec"),
        ("Kettlebell Russian Twists", 3, "12-15 per side", None, "60 sec"),
        ("Kettlebell Windmills", 3, "8-10 per side", None, "60 sec"),
    ],
    "cables": [
        ("Cable Chest Press", 3, "12-15", None, "60 sec"),
        ("Cable Flyes", 3, "12-15", None, "60 sec"),
        ("Cable Rows", 3, "12-15", None, "60 sec"),
        ("Cable Lat Pulldowns", 3, "12-15", None, "60 sec"),
        ("Cable Bicep Curls", 3, "12-15", None, "60 sec"),
        ("Cable Tricep Pushdowns", 3, "12-15", None, "60 sec"),
        ("Cable Lateral Raises", 3, "12-15", None, "60 sec"),
        ("Cable Face Pulls", 3, "12-15", None, "60 sec"),
        ("Cable Squats", 3, "12-15", None, "60 sec"),
        ("Cable Lunges", 3, "10-12 per leg", None, "60 sec"),
        ("Cable Pull-throughs", 3, "12-15", None, "60 sec"),
        ("Cable Deadlifts", 3, "12-15", None, "60 sec"),
        ("Cable Woodchoppers", 3, "12-15 per side", None, "60 sec"),
        ("Cable Pallof Press", 3, "12-15 per side", None, "60 sec"),
    ],
    "foam roller": [
        ("Foam Roller Chest Release", 2, None, "30-60 sec per side", "30 sec"),
        ("Foam Roller T-Spine Extension", 2, "10-12", None, "30 sec"),
        ("Foam Roller Lat Release", 2, None, "30-60 sec per side", "30 sec"),
        ("Foam Roller Upper Back Release", 2, None, "30-60 sec", "30 sec"),
        ("Foam Roller Tricep Release", 2, None, "30-60 sec per arm", "30 sec"),
        ("Foam Roller Forearm Release", 2, None, "30-60 sec per arm", "30 sec"),
        ("Foam Roller Shoulder Release", 2, None, "30-60 sec per shoulder", "30 sec"),
        ("Foam Roller Rotator Cuff Release", 2, None, "30-60 sec per shoulder", "30 sec"),
        ("Foam Roller Quad Release", 2, None, "30-60 sec per leg", "30 sec"),
        ("Foam Roller Calf Release", 2, None, "30-60 sec per leg", "30 sec"),
        ("Foam Roller Hamstring Release", 2, None, "30-60 sec per leg", "30 sec"),
        ("Foam Roller Glute Release", 2, None, "30-60 sec per side", "30 sec"),
        ("Foam Roller Plank", 3, None, "20-30 sec", "30 sec"),
        ("Foam Roller Back Extension", 2, "10-12", None, "30 sec"),
    ],
    "yoga mat": [
        ("Push-ups", 3, "10-15", None, "60 sec"),
        ("Downward Dog Push-ups", 3, "8-12", None, "60 sec"),
        ("Superman Hold", 3, None, "20-30 sec", "45 sec"),
        ("Reverse Snow Angels", 3, "10-12", None, "45 sec"),
        ("Plank Up-Downs", 3, "8-12", None, "60 sec"),
        ("Diamond Push-ups", 3, "8-12", None, "60 sec"),
        ("Pike Push-ups", 3, "8-12", None, "60 sec"),
        ("Dolphin Pose", 3, None, "30-45 sec", "45 sec"),
        ("Bodyweight Squats", 3, "15-20", None, "60 sec"),
        ("Lunges", 3, "12-15 per leg", None, "60 sec"),
        ("Glute Bridges", 3, "15-20", None, "60 sec"),
        ("Single-Leg Glute Bridges", 3, "10-12 per leg", None, "60 sec"),
        ("Plank", 3, None, "30-60 sec", "45 sec"),
        ("Bicycle Crunches", 3, "15-20 per side", None, "45 sec"),
    ],
    "bands": [
        ("Band Push-ups", 3, "10-15", None, "60 sec"),
        ("Band Chest Press", 3, "12-15", None, "60 sec"),
        ("Band Rows", 3, "12-15", None, "60 sec"),
        ("Band Pull-Aparts", 3, "15-20", None, "45 sec"),
        ("Band Bicep Curls", 3, "12-15", None, "45 sec"),
        ("Band Tricep Extensions", 3, "12-15", None, "45 sec"),
        ("Band Lateral Raises", 3, "12-15", None, "45 sec"),
        ("Band Front Raises", 3, "12-15", None, "45 sec"),
        ("Band Squats", 3, "12-15", None, "60 sec"),
        ("Band Lunges", 3, "10-12 per leg", None, "60 sec"),
        ("Band Deadlifts", 3, "12-15", None, "60 sec"),
        ("Band Good Mornings", 3, "12-15", None, "60 sec"),
        ("Band Pallof Press", 3, "12-15 per side", None, "45 sec"),
        ("Band Russian Twists", 3, "12-15 per side", None, "45 sec"),
    ],
}

_FALLBACK_GROUP_ORDER = (UBPUSH, UBPULL, ARMS, SHOULDERS, LBPUSH, LBPULL, CORE)


def _build_fallback_tables() -> dict[str, dict[str, tuple[Exercise, ...]]]:
    tables: dict[str, dict[str, tuple[Exercise, ...]]] = {}
    for equipment, rows in _FALLBACK_ROWS.items():
        table = {}
        for i, group in enumerate(_FALLBACK_GROUP_ORDER):
            table[group] = tuple(
                _make_exercise((name, sets, reps, duration, rest, group, (equipment,)))
                for name, sets, reps, duration, rest in rows[2 * i: 2 * i + 2]
            )
        tables[equipment] = table
    return tables


FALLBACK_TABLES = _build_fallback_tables()
