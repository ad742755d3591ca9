"""
FitPlanner - Plan Assembler
Questionnaire constraints -> filtered, balanced, shuffled and trimmed workout plan.
"""

import logging
import random
import re
from dataclasses import dataclass, field, replace
from typing import Optional

from exercise_catalog import (
    DEFAULT_CATALOG,
    FALLBACK_EQUIPMENT_ORDER,
    FALLBACK_TABLES,
    Exercise,
    ExerciseCatalog,
    MuscleGroup,
    expand_muscle_groups,
)

log = logging.getLogger(__name__)

EXERCISES_PER_GROUP = 2

MALE_WEIGHT_NOTE = " Consider starting with a challenging weight that allows proper form."

GENERIC_INSTRUCTIONS = (
    "Perform {name} with proper form, focusing on controlled movements and breathing. "
    "Start with a lighter weight to master the technique before increasing intensity."
)

# Feedback keyword -> muscle group added on regeneration
FEEDBACK_MUSCLE_KEYWORDS = {
    "arms": MuscleGroup.arms.value,
    "chest": MuscleGroup.upper_body_push.value,
    "back": MuscleGroup.upper_body_pull.value,
    "legs": MuscleGroup.lower_body_push.value,
    "shoulders": MuscleGroup.shoulders.value,
    "core": MuscleGroup.core.value,
    "abs": MuscleGroup.core.value,
}

_REP_RANGE = re.compile(r"^(\d+)-(\d+)(.*)$")


# ══════════════════════════════════════════════════════════════════════════════
# DATA STRUCTURES
# ══════════════════════════════════════════════════════════════════════════════

@dataclass
class PlanConstraints:
    equipment: list[str]
    muscle_groups: list[str]
    gender: str = ""
    duration: int = 30
    difficulty: str = "intermediate"
    goal: Optional[str] = None
    name: Optional[str] = None


@dataclass
class WorkoutPlan:
    exercises: list[Exercise]
    duration: int
    difficulty: str
    muscle_groups: list[str]
    gender: Optional[str] = None
    name: Optional[str] = None
    equipment: list[str] = field(default_factory=list)
    goal: Optional[str] = None
    id: Optional[str] = None


# ══════════════════════════════════════════════════════════════════════════════
# REP / SET ADJUSTMENTS
# ══════════════════════════════════════════════════════════════════════════════

def shift_rep_range(reps: Optional[str], low_delta: int, high_delta: int,
                    low_floor: int = 0, high_floor: int = 0) -> Optional[str]:
    """
    Shift both bounds of a "min-max" rep string, keeping any suffix ("per leg").
    Fixed counts and timed strings are returned unchanged.
    """
    if not reps:
        return reps
    match = _REP_RANGE.match(reps.strip())
    if not match:
        return reps
    low, high, suffix = int(match.group(1)), int(match.group(2)), match.group(3)
    return f"{max(low_floor, low + low_delta)}-{max(high_floor, high + high_delta)}{suffix}"


def apply_gender_adjustment(exercises: list[Exercise], gender: Optional[str]) -> list[Exercise]:
    if gender == "female":
        return [replace(ex, reps=shift_rep_range(ex.reps, 2, 2)) for ex in exercises]
    if gender == "male":
        return [
            replace(ex, weight_note=ex.weight_note + MALE_WEIGHT_NOTE) if ex.weight_note else ex
            for ex in exercises
        ]
    return list(exercises)


def apply_difficulty_adjustment(exercises: list[Exercise], difficulty: str) -> list[Exercise]:
    if difficulty == "beginner":
        return [
            replace(
                ex,
                sets=max(2, ex.sets - 1) if ex.sets else ex.sets,
                reps=shift_rep_range(ex.reps, -2, -2, low_floor=6, high_floor=8),
            )
            for ex in exercises
        ]
    if difficulty == "advanced":
        return [
            replace(
                ex,
                sets=ex.sets + 1 if ex.sets else ex.sets,
                reps=shift_rep_range(ex.reps, 2, 2),
            )
            for ex in exercises
        ]
    return list(exercises)


def target_exercise_count(duration: int, available: int) -> int:
    """Short sessions get at most 4 exercises, medium 6, long 8; longer ones keep everything."""
    if duration <= 20:
        return min(4, available)
    if duration <= 40:
        return min(6, available)
    if duration <= 60:
        return min(8, available)
    return available


# ══════════════════════════════════════════════════════════════════════════════
# PLAN ASSEMBLER
# ══════════════════════════════════════════════════════════════════════════════

class PlanAssembler:

    def __init__(self, catalog: Optional[ExerciseCatalog] = None,
                 rng: Optional[random.Random] = None):
        self.catalog = catalog if catalog is not None else DEFAULT_CATALOG
        self.rng = rng if rng is not None else random.Random()

    def _bucket(self, pool: list[Exercise], groups: list[str],
                equipment: list[str]) -> dict[str, list[Exercise]]:
        buckets: dict[str, list[Exercise]] = {group: [] for group in groups}
        for ex in pool:
            if ex.muscle_group in buckets and ex.uses_equipment(equipment):
                buckets[ex.muscle_group].append(ex)
        return buckets

    def _backfill(self, group: str, bucket: list[Exercise], pool: list[Exercise],
                  equipment: list[str]) -> list[Exercise]:
        """Top up a thin bucket from the catalog, then from the fallback tables."""
        names = {ex.name for ex in bucket}
        bucket = bucket + [
            ex for ex in pool
            if ex.muscle_group == group and ex.uses_equipment(equipment) and ex.name not in names
        ]
        for tag in FALLBACK_EQUIPMENT_ORDER:
            if len(bucket) >= EXERCISES_PER_GROUP:
                break
            if tag in equipment:
                bucket = bucket + list(FALLBACK_TABLES[tag].get(group, ()))
        return bucket

    def _select(self, groups: list[str], equipment: list[str], goal: Optional[str]) -> list[Exercise]:
        pool = self.catalog.exercises_for_goal(goal)
        buckets = self._bucket(pool, groups, equipment)

        selected: list[Exercise] = []
        for group in groups:
            bucket = buckets[group]
            if len(bucket) < EXERCISES_PER_GROUP:
                bucket = self._backfill(group, bucket, pool, equipment)
            log.debug(f"{group}: {len(bucket)} candidate(s)")
            selected.extend(bucket[:EXERCISES_PER_GROUP])
        return selected

    def _trim(self, exercises: list[Exercise], groups: list[str], target: int) -> list[Exercise]:
        """
        Keep one exercise per requested group first, then fill up to the target in order.
        Groups beyond the target count lose their slot.
        """
        if len(exercises) <= target:
            return exercises
        essential: list[Exercise] = []
        remaining = list(exercises)
        for group in groups:
            if len(essential) >= target:
                break
            index = next((i for i, ex in enumerate(remaining) if ex.muscle_group == group), None)
            if index is not None:
                essential.append(remaining.pop(index))
        extra = max(0, target - len(essential))
        return essential + remaining[:extra]

    def generate(self, constraints: PlanConstraints) -> WorkoutPlan:
        groups = expand_muscle_groups(constraints.muscle_groups)
        equipment = list(constraints.equipment)

        exercises = self._select(groups, equipment, constraints.goal)
        exercises = apply_gender_adjustment(exercises, constraints.gender)

        # Fisher-Yates; per-group ordering is not preserved
        self.rng.shuffle(exercises)

        exercises = apply_difficulty_adjustment(exercises, constraints.difficulty)
        target = target_exercise_count(constraints.duration, len(exercises))

        exercises = [
            ex if ex.instructions else replace(ex, instructions=GENERIC_INSTRUCTIONS.format(name=ex.name))
            for ex in exercises
        ]
        exercises = self._trim(exercises, groups, target)

        if not exercises:
            log.info(f"No exercises matched groups={groups} equipment={equipment}")

        return WorkoutPlan(
            exercises=exercises,
            duration=constraints.duration,
            difficulty=constraints.difficulty,
            muscle_groups=groups,
            gender=constraints.gender,
            name=constraints.name,
            equipment=equipment,
            goal=constraints.goal,
        )

    def regenerate_from_feedback(self, constraints: PlanConstraints, feedback: str) -> WorkoutPlan:
        """
        Adjust difficulty, duration and muscle groups from free-text feedback
        ("too hard", "too long", "more arms") and build a fresh plan.
        """
        text = (feedback or "").lower()
        adjusted = replace(constraints, muscle_groups=list(constraints.muscle_groups))

        if "too hard" in text or "difficult" in text:
            adjusted.difficulty = "beginner"
        elif "too easy" in text:
            adjusted.difficulty = "advanced"

        if "too long" in text:
            adjusted.duration = max(15, constraints.duration - 10)
        elif "too short" in text:
            adjusted.duration = constraints.duration + 10

        for keyword, group in FEEDBACK_MUSCLE_KEYWORDS.items():
            if keyword in text and group not in adjusted.muscle_groups:
                adjusted.muscle_groups.append(group)

        log.debug(f"Regenerating with difficulty={adjusted.difficulty} duration={adjusted.duration}")
        return self.generate(adjusted)


def generate_plan(constraints: PlanConstraints,
                  catalog: Optional[ExerciseCatalog] = None,
                  rng: Optional[random.Random] = None) -> WorkoutPlan:
    return PlanAssembler(catalog, rng).generate(constraints)
