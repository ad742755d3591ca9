"""
FitPlanner - Unit Tests
Plan assembly, difficulty rules and similarity scoring.
Run with: pytest test_engines.py -v
"""

import random
from datetime import datetime, timedelta, timezone

import pytest

from exercise_catalog import Exercise, MuscleGroup, build_catalog
from plan_assembler import (
    PlanAssembler, PlanConstraints, apply_difficulty_adjustment,
    apply_gender_adjustment, shift_rep_range, target_exercise_count,
)
from user_profile import CompletedWorkout, UserProfile, WorkoutRating

BASE = datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc)


def _workout(day: int, difficulty: str = "intermediate", plan_id: str = None) -> CompletedWorkout:
    return CompletedWorkout(
        id=f"w{day}",
        date=BASE + timedelta(days=day),
        workout_plan_id=plan_id or f"p{day}",
        duration=30,
        muscle_groups=["Arms"],
        difficulty=difficulty,
    )


def _rating(plan_id: str, rating: int, feedback: str = None, day: int = 0) -> WorkoutRating:
    return WorkoutRating(plan_id, rating, BASE + timedelta(days=day), feedback)


def _profile(**overrides) -> UserProfile:
    fields = dict(
        id="u1", name="Casey", gender="female", age=30, weight="65kg",
        preferred_equipment=["dumbbells"], preferred_muscle_groups=["Arms"],
    )
    fields.update(overrides)
    return UserProfile(**fields)


# ══════════════════════════════════════════════════════════════════════════════
# PLAN ASSEMBLER TESTS
# ══════════════════════════════════════════════════════════════════════════════

class TestRepAdjustments:

    def test_shift_keeps_suffix(self):
        assert shift_rep_range("10-12 per leg", 2, 2) == "12-14 per leg"

    def test_shift_ignores_fixed_counts(self):
        assert shift_rep_range("15", 2, 2) == "15"
        assert shift_rep_range(None, 2, 2) is None

    def test_female_widens_rep_range(self):
        ex = Exercise("Curl", "Arms", ("dumbbells",), sets=3, reps="8-12")
        assert apply_gender_adjustment([ex], "female")[0].reps == "10-14"

    def test_male_keeps_reps(self):
        ex = Exercise("Curl", "Arms", ("dumbbells",), sets=3, reps="8-12", weight_note="Moderate load.")
        adjusted = apply_gender_adjustment([ex], "male")[0]
        assert adjusted.reps == "8-12"
        assert adjusted.weight_note.startswith("Moderate load.")
        assert len(adjusted.weight_note) > len("Moderate load.")

    def test_beginner(self):
        ex = Exercise("Curl", "Arms", sets=3, reps="8-12")
        adjusted = apply_difficulty_adjustment([ex], "beginner")[0]
        assert adjusted.sets == 2
        assert adjusted.reps == "6-10"

    def test_advanced(self):
        ex = Exercise("Curl", "Arms", sets=3, reps="8-12")
        adjusted = apply_difficulty_adjustment([ex], "advanced")[0]
        assert adjusted.sets == 4
        assert adjusted.reps == "10-14"

    def test_beginner_floors(self):
        ex = Exercise("Squat", "Lower Body Push", sets=2, reps="6-8")
        adjusted = apply_difficulty_adjustment([ex], "beginner")[0]
        assert adjusted.sets == 2
        assert adjusted.reps == "6-8"

    def test_intermediate_unchanged(self):
        ex = Exercise("Curl", "Arms", sets=3, reps="8-12")
        assert apply_difficulty_adjustment([ex], "intermediate") == [ex]

    def test_target_counts(self):
        assert target_exercise_count(15, 10) == 4
        assert target_exercise_count(30, 10) == 6
        assert target_exercise_count(60, 10) == 8
        assert target_exercise_count(90, 10) == 10
        assert target_exercise_count(15, 3) == 3


class TestPlanAssembler:

    def setup_method(self):
        self.assembler = PlanAssembler(rng=random.Random(7))

    def test_strength_arms_dumbbells(self):
        plan = self.assembler.generate(PlanConstraints(
            equipment=["dumbbells"], muscle_groups=["Arms"], gender="male",
            duration=15, difficulty="intermediate", goal="strength",
        ))
        assert len(plan.exercises) == 2
        assert all(ex.muscle_group == "Arms" for ex in plan.exercises)
        assert {ex.name for ex in plan.exercises} == {"Bicep Curls", "Hammer Curls"}

    @pytest.mark.parametrize("duration", [15, 30, 45, 90])
    def test_plan_respects_target_and_groups(self, duration):
        groups = ["Upper Body Push", "Lower Body Pull", "Core"]
        plan = self.assembler.generate(PlanConstraints(
            equipment=["dumbbells", "kettlebells"], muscle_groups=groups, duration=duration,
        ))
        assert 0 < len(plan.exercises) <= target_exercise_count(duration, 100)
        assert all(ex.muscle_group in groups for ex in plan.exercises)

    def test_all_expands_and_is_capped(self):
        plan = self.assembler.generate(PlanConstraints(
            equipment=["dumbbells"], muscle_groups=["All"], duration=15,
        ))
        assert len(plan.exercises) == 4
        assert len({ex.muscle_group for ex in plan.exercises}) == 4
        assert plan.muscle_groups == [g.value for g in MuscleGroup]
        assert "All" not in plan.muscle_groups

    def test_all_plan_overlaps_catalog_groups(self):
        from mock_panel import MOCK_WORKOUT_PLANS
        from recommendation_engine import content_similarity
        plan = self.assembler.generate(PlanConstraints(
            equipment=["dumbbells"], muscle_groups=["All"], duration=90,
        ))
        arm_blast = next(p for p in MOCK_WORKOUT_PLANS if p.id == "plan_12")
        # 2 of 7 groups shared, same equipment, different difficulty
        assert content_similarity(plan, arm_blast) == pytest.approx(2 / 7 * 0.6 + 0.3)

    def test_equipment_matches_or_fallback(self):
        plan = self.assembler.generate(PlanConstraints(
            equipment=["resistance bands"], muscle_groups=["Shoulders", "Core"], duration=90,
        ))
        assert plan.exercises
        for ex in plan.exercises:
            assert "resistance bands" in ex.equipment

    def test_unknown_equipment_yields_empty_plan(self):
        plan = self.assembler.generate(PlanConstraints(equipment=["spaceship"], muscle_groups=["Arms"]))
        assert plan.exercises == []

    def test_backfill_from_fallback_table(self):
        catalog = build_catalog({
            "strength": {"arms": [("Cable Curl", 3, "8-12", None, "60 sec", "Arms", ("dumbbells",))]},
        })
        assembler = PlanAssembler(catalog, random.Random(1))
        plan = assembler.generate(PlanConstraints(equipment=["dumbbells"], muscle_groups=["Arms"]))
        assert {ex.name for ex in plan.exercises} == {"Cable Curl", "Dumbbell Bicep Curls"}

    def test_empty_catalog_uses_fallbacks(self):
        assembler = PlanAssembler(build_catalog({}), random.Random(1))
        plan = assembler.generate(PlanConstraints(equipment=["kettlebells"], muscle_groups=["Core"]))
        assert len(plan.exercises) == 2
        assert all(ex.equipment == ("kettlebells",) for ex in plan.exercises)

    def test_fallback_tables_follow_priority_order(self):
        assembler = PlanAssembler(build_catalog({}), random.Random(1))
        plan = assembler.generate(PlanConstraints(
            equipment=["resistance bands", "dumbbells"], muscle_groups=["Core"], duration=90,
        ))
        # Dumbbells come first in the fallback order and fill the bucket alone
        assert len(plan.exercises) == 2
        assert {ex.name for ex in plan.exercises} == {"Dumbbell Russian Twists", "Dumbbell Side Bends"}

    def test_instructions_always_present(self):
        plan = self.assembler.generate(PlanConstraints(
            equipment=["dumbbells"], muscle_groups=["Arms", "Shoulders"], duration=90,
        ))
        assert all(ex.instructions for ex in plan.exercises)

    def test_seeded_rng_is_deterministic(self):
        constraints = PlanConstraints(equipment=["dumbbells", "trx"], muscle_groups=["All"], duration=90)
        first = PlanAssembler(rng=random.Random(42)).generate(constraints)
        second = PlanAssembler(rng=random.Random(42)).generate(constraints)
        assert [ex.name for ex in first.exercises] == [ex.name for ex in second.exercises]

    def test_regenerate_from_feedback(self):
        constraints = PlanConstraints(
            equipment=["dumbbells"], muscle_groups=["Core"], duration=40, difficulty="intermediate",
        )
        plan = self.assembler.regenerate_from_feedback(constraints, "Too hard and too long, more arms")
        assert plan.difficulty == "beginner"
        assert plan.duration == 30
        assert "Arms" in plan.muscle_groups
        assert constraints.muscle_groups == ["Core"]


# ══════════════════════════════════════════════════════════════════════════════
# DIFFICULTY ADJUSTER TESTS
# ══════════════════════════════════════════════════════════════════════════════

class TestDifficultyAdjuster:

    def setup_method(self):
        from difficulty_adjuster import DifficultyAdjuster
        self.adjuster = DifficultyAdjuster()

    def test_no_history(self):
        result = self.adjuster.analyze(_profile())
        assert result.difficulty == "intermediate"
        assert result.reason == "No workout history available"

    def test_no_profile(self):
        assert self.adjuster.analyze(None).difficulty == "intermediate"

    def test_too_hard_feedback(self):
        profile = _profile(
            completed_workouts=[_workout(0, plan_id="p1")],
            ratings=[_rating("p1", 1, "too hard")],
        )
        assert self.adjuster.analyze(profile).difficulty == "beginner"

    def test_too_easy_feedback(self):
        profile = _profile(
            completed_workouts=[_workout(0, plan_id="p1")],
            ratings=[_rating("p1", 5, "Way too easy")],
        )
        assert self.adjuster.analyze(profile).difficulty == "advanced"

    def test_too_hard_rating_without_matching_workout(self):
        profile = _profile(
            completed_workouts=[_workout(0, plan_id="other")],
            ratings=[_rating("p1", 1, "too hard")],
        )
        assert self.adjuster.analyze(profile).difficulty == "beginner"

    def test_feedback_scan_last_match_wins(self):
        # Newest workout scanned first, so the older "too easy" rating overwrites
        profile = _profile(
            completed_workouts=[_workout(0, plan_id="old"), _workout(1, plan_id="new")],
            ratings=[_rating("old", 5, "too easy"), _rating("new", 3, "too hard")],
        )
        assert self.adjuster.analyze(profile).difficulty == "advanced"

    def test_consistent_intermediate_goes_advanced(self):
        profile = _profile(completed_workouts=[_workout(d) for d in range(8)])
        result = self.adjuster.analyze(profile)
        assert result.difficulty == "advanced"
        assert "8 workouts/week" in result.reason
        assert "10.0/10" in result.reason

    def test_beginner_progression(self):
        profile = _profile(completed_workouts=[_workout(d * 3, "beginner") for d in range(5)])
        result = self.adjuster.analyze(profile)
        assert result.difficulty == "intermediate"
        assert "beginner" in result.reason

    def test_intermediate_progression(self):
        profile = _profile(completed_workouts=[_workout(d * 3) for d in range(5)])
        assert self.adjuster.analyze(profile).difficulty == "advanced"

    def test_short_beginner_history(self):
        profile = _profile(completed_workouts=[_workout(0, "beginner"), _workout(4, "beginner")])
        result = self.adjuster.analyze(profile)
        assert result.difficulty == "beginner"
        assert result.reason == "Starting with beginner workouts to build a foundation"

    def test_unknown_tiers_default_intermediate(self):
        profile = _profile(completed_workouts=[_workout(0, "extreme")])
        assert self.adjuster.analyze(profile).difficulty == "intermediate"


class TestHistoryMetrics:

    def test_workouts_per_week(self):
        from difficulty_adjuster import workouts_per_week
        assert workouts_per_week([_workout(0)]) == 1.0
        # 5 workouts over 12 days -> 2 weeks
        assert workouts_per_week([_workout(d * 3) for d in range(5)]) == pytest.approx(2.5)

    def test_consistency_defaults_to_five(self):
        from difficulty_adjuster import consistency_score
        assert consistency_score([]) == 5.0
        assert consistency_score([_workout(0)]) == 5.0

    def test_consistency_uneven_gaps(self):
        from difficulty_adjuster import consistency_score
        # gaps of 1 and 9 days -> population std-dev 4
        workouts = [_workout(0), _workout(1), _workout(10)]
        assert consistency_score(workouts) == pytest.approx(6.0)

    def test_consistency_clamped(self):
        from difficulty_adjuster import consistency_score
        workouts = [_workout(0), _workout(1), _workout(40)]
        assert consistency_score(workouts) == 0.0

    def test_feedback_summary(self):
        from difficulty_adjuster import summarize_feedback
        ratings = [
            _rating("a", 2, day=0),
            _rating("b", 3, day=1),
            _rating("c", 4, "Great session, loved it", day=2),
        ]
        summary = summarize_feedback(ratings)
        assert summary.average_rating == pytest.approx(3.0)
        assert summary.rating_trend == "increasing"
        assert summary.sentiment == "positive"

    def test_feedback_summary_empty(self):
        from difficulty_adjuster import summarize_feedback
        summary = summarize_feedback([])
        assert summary.average_rating == 0.0
        assert summary.rating_trend == "stable"
        assert summary.sentiment == "neutral"


# ══════════════════════════════════════════════════════════════════════════════
# SIMILARITY & RECOMMENDATION TESTS
# ══════════════════════════════════════════════════════════════════════════════

class TestUserSimilarity:

    def setup_method(self):
        from recommendation_engine import overlap_ratio, user_similarity
        self.overlap = overlap_ratio
        self.similarity = user_similarity

    def test_overlap(self):
        assert self.overlap(["a", "b"], ["b", "c"]) == pytest.approx(0.5)
        assert self.overlap([], []) == 1.0
        assert self.overlap(["a"], []) == 0.0

    def test_identical_users_without_shared_ratings(self):
        a = _profile(id="a")
        b = _profile(id="b")
        assert self.similarity(a, b) == pytest.approx(1.0)

    def test_rating_disagreement_counts(self):
        a = _profile(id="a", ratings=[_rating("p1", 5)])
        b = _profile(id="b", ratings=[_rating("p1", 1)])
        assert self.similarity(a, b) == pytest.approx(0.7)

    def test_partial_match(self):
        a = _profile(id="a", age=20, gender="male", preferred_equipment=["dumbbells", "trx"])
        b = _profile(id="b", age=30, gender="female", preferred_equipment=["trx"])
        # age 0.5*0.1 + gender 0 + equipment 0.5*0.25 + muscle 1*0.25 over 0.7
        assert self.similarity(a, b) == pytest.approx((0.05 + 0.125 + 0.25) / 0.7)

    def test_bounded_with_empty_profiles(self):
        a = _profile(id="a", age=18, gender="", preferred_equipment=[], preferred_muscle_groups=[])
        b = _profile(id="b", age=80, gender="male", preferred_equipment=[], preferred_muscle_groups=[])
        score = self.similarity(a, b)
        assert 0.0 <= score <= 1.0


class TestRecommendations:

    def setup_method(self):
        from mock_panel import CatalogPlan
        self.plans = [
            CatalogPlan("arms", "Arm Day", ["Arms"], ["dumbbells"], "beginner", 20),
            CatalogPlan("legs", "Leg Day", ["Lower Body Push"], ["barbells"], "advanced", 45),
            CatalogPlan("core", "Core Day", ["Core"], ["yoga mat"], "intermediate", 20),
        ]
        self.pat = _profile(id="pat", name="Pat", ratings=[_rating("arms", 5), _rating("core", 3)])
        self.sam = _profile(id="sam", name="Sam", ratings=[_rating("arms", 4), _rating("legs", 5)])
        self.user = _profile(id="me", name="Me")

    def test_panel_equipment_uses_catalog_tags(self):
        from mock_panel import MOCK_USERS, MOCK_WORKOUT_PLANS
        from recommendation_engine import overlap_ratio
        barbell_plan = next(p for p in MOCK_WORKOUT_PLANS if p.id == "plan_5")
        assert overlap_ratio(["barbells"], barbell_plan.equipment) == pytest.approx(0.5)
        tags = {tag for p in MOCK_WORKOUT_PLANS for tag in p.equipment}
        tags |= {tag for u in MOCK_USERS for tag in u.preferred_equipment}
        assert "barbell" not in tags

    def test_find_similar_users_excludes_self(self):
        from recommendation_engine import find_similar_users
        panel = [self.pat, self.user]
        assert [u.id for u, _ in find_similar_users(self.user, panel)] == ["pat"]

    def test_collaborative_scores_and_reason(self):
        from recommendation_engine import RecommendationSource, collaborative_recommendations
        recs = collaborative_recommendations(self.user, [self.pat, self.sam], self.plans)
        assert [r.id for r in recs] == ["arms", "legs"]
        assert recs[0].score == pytest.approx(9.0)
        assert recs[0].reason == "Recommended because Pat and Sam enjoyed this workout"
        assert all(r.source == RecommendationSource.collaborative for r in recs)

    def test_collaborative_skips_rated_and_low_ratings(self):
        from recommendation_engine import collaborative_recommendations
        user = _profile(id="me", ratings=[_rating("arms", 2)])
        recs = collaborative_recommendations(user, [self.pat, self.sam], self.plans)
        assert [r.id for r in recs] == ["legs"]

    def test_collaborative_reason_with_many_users(self):
        from recommendation_engine import collaborative_recommendations
        panel = [_profile(id=n, name=n, ratings=[_rating("core", 5)]) for n in ("Ana", "Ben", "Cy")]
        recs = collaborative_recommendations(self.user, panel, self.plans)
        assert recs[0].reason == "Recommended because Ana and Ben and others enjoyed this workout"

    def test_content_based(self):
        from plan_assembler import WorkoutPlan
        from recommendation_engine import content_based_recommendations
        current = WorkoutPlan(exercises=[], duration=20, difficulty="beginner",
                              muscle_groups=["Arms"], equipment=["dumbbells"], id="core")
        recs = content_based_recommendations(current, self.plans)
        assert "core" not in [r.id for r in recs]
        assert recs[0].id == "arms"
        assert recs[0].score == pytest.approx(1.0)
        assert recs[0].reason == "Matches your preferred muscle groups and equipment"
        assert recs[1].score == pytest.approx(0.0)

    def test_diverse_combines_without_duplicates(self):
        from plan_assembler import WorkoutPlan
        from recommendation_engine import RecommendationEngine, RecommendationSource
        engine = RecommendationEngine(panel=[self.pat], plans=self.plans)
        current = WorkoutPlan(exercises=[], duration=20, difficulty="beginner",
                              muscle_groups=["Arms"], equipment=["dumbbells"])
        recs = engine.recommend(self.user, current, top_n=3)
        assert [r.id for r in recs][0] == "arms"
        assert recs[0].source == RecommendationSource.collaborative
        assert len({r.id for r in recs}) == len(recs) == 3

    def test_diverse_without_current_workout(self):
        from recommendation_engine import RecommendationEngine
        engine = RecommendationEngine(panel=[self.pat], plans=self.plans)
        assert [r.id for r in engine.recommend(self.user)] == ["arms"]

    def test_empty_panel_and_catalog(self):
        from plan_assembler import WorkoutPlan
        from recommendation_engine import RecommendationEngine
        engine = RecommendationEngine(panel=[], plans=[])
        current = WorkoutPlan(exercises=[], duration=20, difficulty="beginner", muscle_groups=[])
        assert engine.recommend(self.user, current) == []
        assert engine.recommend(None) == []

    def test_popular(self):
        from recommendation_engine import RecommendationSource, popular_recommendations
        recs = popular_recommendations([self.pat, self.sam], self.plans, top_n=2, exclude={"legs"})
        assert [r.id for r in recs] == ["arms", "core"]
        assert recs[0].score == pytest.approx(4.5)
        assert recs[0].source == RecommendationSource.popular

    def test_default_panel_cold_start(self):
        from plan_assembler import WorkoutPlan
        from recommendation_engine import get_diverse_recommendations
        from user_profile import temporary_profile
        current = WorkoutPlan(exercises=[], duration=20, difficulty="beginner",
                              muscle_groups=["Arms", "Shoulders"], equipment=["dumbbells"])
        recs = get_diverse_recommendations(temporary_profile(current), current)
        assert 0 < len(recs) <= 4
        assert len({r.id for r in recs}) == len(recs)
