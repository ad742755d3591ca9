"""
FitPlanner - Tracking & Profile Store Tests
Run with: pytest test_tracking.py -v
"""

from datetime import date, datetime, timedelta, timezone

import pytest

from exercise_catalog import Exercise
from plan_assembler import WorkoutPlan
from user_profile import CompletedWorkout, create_user_profile


def _workout(when: datetime, difficulty: str = "intermediate",
             groups=("Arms",), duration: int = 30) -> CompletedWorkout:
    return CompletedWorkout(
        id=f"w-{when.isoformat()}",
        date=when,
        workout_plan_id=f"p-{when.isoformat()}",
        duration=duration,
        muscle_groups=list(groups),
        difficulty=difficulty,
    )


def _plan(**overrides) -> WorkoutPlan:
    fields = dict(
        exercises=[Exercise("Bicep Curls", "Arms", ("dumbbells",), sets=3, reps="10-12")],
        duration=20,
        difficulty="beginner",
        muscle_groups=["Arms"],
        equipment=["dumbbells"],
        gender="female",
        name="Arm Day",
    )
    fields.update(overrides)
    return WorkoutPlan(**fields)


# ══════════════════════════════════════════════════════════════════════════════
# COMPLETION TRACKER TESTS
# ══════════════════════════════════════════════════════════════════════════════

class TestCompletionTracker:

    def setup_method(self):
        from tracking import CompletionTracker
        self.tracker = CompletionTracker()

    def test_mark_complete(self):
        record = self.tracker.mark_exercise_complete("bicep_curls", "w1", 25)
        assert record.exercise_id == "bicep_curls"
        assert self.tracker.is_exercise_completed("bicep_curls")
        assert not self.tracker.is_exercise_completed("squats")

    def test_recomplete_overwrites(self):
        self.tracker.mark_exercise_complete("bicep_curls", "w1", 25)
        self.tracker.mark_exercise_complete("bicep_curls", "w1", 40)
        assert len(self.tracker.completed) == 1
        assert self.tracker.total_calories_burned("w1") == 40

    def test_missing_ids_rejected(self):
        with pytest.raises(ValueError):
            self.tracker.mark_exercise_complete("", "w1", 10)
        with pytest.raises(ValueError):
            self.tracker.mark_exercise_complete("curls", "", 10)

    def test_negative_calories_rejected(self):
        with pytest.raises(ValueError):
            self.tracker.mark_exercise_complete("curls", "w1", -5)

    def test_completion_percentage(self):
        self.tracker.mark_exercise_complete("a", "w1", 10)
        self.tracker.mark_exercise_complete("b", "w2", 10)
        assert self.tracker.completion_percentage("w1", 3) == 33
        assert self.tracker.completion_percentage("w1", 0) == 0
        assert self.tracker.completion_percentage("w3", 4) == 0

    def test_calories_per_workout(self):
        self.tracker.mark_exercise_complete("a", "w1", 10)
        self.tracker.mark_exercise_complete("b", "w1", 15)
        self.tracker.mark_exercise_complete("c", "w2", 99)
        assert self.tracker.total_calories_burned("w1") == 25

    def test_favorites(self):
        self.tracker.add_favorite("plank", "Plank", "Core")
        assert self.tracker.is_favorite("plank")
        self.tracker.remove_favorite("plank")
        assert not self.tracker.is_favorite("plank")
        self.tracker.remove_favorite("plank")

    def test_exercise_id_for(self):
        from tracking import exercise_id_for
        assert exercise_id_for("Barbell  Back Squat") == "barbell_back_squat"


# ══════════════════════════════════════════════════════════════════════════════
# CALORIE & DASHBOARD TESTS
# ══════════════════════════════════════════════════════════════════════════════

class TestCalories:

    def test_exercise_estimate_lower_body(self):
        from tracking import estimate_exercise_calories
        ex = Exercise("Squat", "Lower Body Push", sets=4)
        assert estimate_exercise_calories(ex) == 56   # 7 * 4 * 0.5 * 4

    def test_exercise_estimate_default_sets(self):
        from tracking import estimate_exercise_calories
        assert estimate_exercise_calories(Exercise("Plank", "Core")) == 27   # 6 * 3 * 0.5 * 3

    def test_exercise_estimate_upper_body(self):
        from tracking import estimate_exercise_calories
        assert estimate_exercise_calories(Exercise("Curl", "Arms", sets=2)) == 10

    def test_workout_estimate(self):
        from tracking import estimate_workout_calories
        now = datetime(2024, 6, 1, tzinfo=timezone.utc)
        assert estimate_workout_calories(_workout(now, groups=["Lower Body Push"])) == 300
        assert estimate_workout_calories(_workout(now, "beginner", duration=20)) == 120
        assert estimate_workout_calories(_workout(now, "advanced", ["Core"], duration=10)) == 100

    def test_monthly_targets(self):
        from tracking import monthly_target
        assert monthly_target(6) == 2000
        assert monthly_target(0) == 1400
        assert monthly_target(11) == 1500


class TestDashboard:

    def setup_method(self):
        self.today = date(2024, 6, 15)
        self.noon = datetime(2024, 6, 15, 12, tzinfo=timezone.utc)

    def test_streak(self):
        from tracking import current_streak
        days = [self.today, self.today - timedelta(days=1), self.today - timedelta(days=2)]
        assert current_streak(days, self.today) == 3
        assert current_streak(days[1:], self.today) == 2
        assert current_streak([self.today - timedelta(days=3)], self.today) == 0
        assert current_streak([], self.today) == 0

    def test_weekly_average(self):
        from tracking import weekly_average
        assert weekly_average([]) == 0.0
        assert weekly_average([self.noon, self.noon + timedelta(hours=1)]) == 2.0

    def test_no_profile(self):
        from tracking import dashboard_stats
        stats = dashboard_stats(None)
        assert stats.workouts_completed == 0
        assert stats.monthly_calories == []

    def test_stats(self):
        from tracking import CompletionTracker, dashboard_stats
        profile = create_user_profile("Casey", "female", 30, "65kg", ["dumbbells"], ["Arms"])
        profile.completed_workouts = [
            _workout(self.noon, "beginner", duration=20),
            _workout(self.noon - timedelta(days=1), "intermediate", ["Arms", "Core"]),
            _workout(self.noon - timedelta(days=2), "intermediate", ["Upper Body Pull"]),
        ]
        tracker = CompletionTracker()
        tracker.mark_exercise_complete("a", "w1", 50, completed_at=self.noon)

        stats = dashboard_stats(profile, tracker, today=self.today)

        assert stats.workouts_completed == 3
        assert stats.total_minutes == 80
        assert stats.progress == 25
        assert stats.streak_days == 3
        assert stats.difficulty_breakdown == {"beginner": 1, "intermediate": 2}
        assert stats.muscle_group_counts == {"Arms": 2, "Core": 1, "Upper Body Pull": 1}
        # 20*6 + 30*8 + 30*10 estimated beats 50 tracked
        assert stats.calories_burned == 660
        june = stats.monthly_calories[5]
        assert june.calories == 710
        assert june.deficit == june.target - 710

    def test_progress_capped(self):
        from tracking import dashboard_stats
        profile = create_user_profile("Casey", "female", 30, "65kg", [], [])
        profile.completed_workouts = [_workout(self.noon - timedelta(days=d)) for d in range(20)]
        assert dashboard_stats(profile, today=self.today).progress == 100


# ══════════════════════════════════════════════════════════════════════════════
# PROFILE STORE TESTS
# ══════════════════════════════════════════════════════════════════════════════

class TestProfileStore:

    def setup_method(self):
        self.profile = create_user_profile("Casey", "female", 30, "65kg", ["dumbbells"], ["Arms"],
                                           user_id="casey")

    def test_create(self):
        assert self.profile.id == "casey"
        assert self.profile.completed_workouts == []
        assert self.profile.ratings == []
        generated = create_user_profile("Dana", "male", 40, "80kg", [], [])
        assert generated.id.startswith("user_")

    def test_rating_upsert(self):
        from user_profile import add_workout_rating
        profile = add_workout_rating(self.profile, "p1", 3)
        profile = add_workout_rating(profile, "p1", 5, "Great")
        assert len(profile.ratings) == 1
        assert profile.ratings[0].rating == 5
        assert profile.ratings[0].feedback == "Great"

    def test_rating_bounds(self):
        from user_profile import add_workout_rating
        with pytest.raises(ValueError):
            add_workout_rating(self.profile, "p1", 6)
        with pytest.raises(ValueError):
            add_workout_rating(self.profile, "p1", 0)

    def test_completed_workout_is_appended_to_new_value(self):
        from user_profile import add_completed_workout, completed_workout_for
        updated = add_completed_workout(self.profile, completed_workout_for(_plan(), "p1"))
        assert len(updated.completed_workouts) == 1
        assert updated.completed_workouts[0].difficulty == "beginner"
        assert self.profile.completed_workouts == []

    def test_save_plan_creates_profile(self):
        from user_profile import DEFAULT_SAVE_RATING, save_plan
        profile, saved = save_plan(None, _plan(id="plan-1"), age=28, weight="60kg")
        assert profile.name == "Arm Day"
        assert profile.age == 28
        assert profile.preferred_equipment == ["dumbbells"]
        assert saved.id == "plan-1"
        assert profile.completed_workouts[0].workout_plan_id == "plan-1"
        assert profile.ratings[0].rating == DEFAULT_SAVE_RATING

    def test_save_plan_assigns_id(self):
        from user_profile import save_plan
        profile, saved = save_plan(self.profile, _plan())
        assert saved.id
        assert saved.plan.id == saved.id
        assert profile.id == "casey"

    def test_satisfaction_ratings(self):
        from user_profile import rating_for_satisfaction
        assert rating_for_satisfaction("very-satisfied") == 5
        assert rating_for_satisfaction("satisfied") == 4
        assert rating_for_satisfaction("unsatisfied") == 2
        assert rating_for_satisfaction("neutral") == 3
        assert rating_for_satisfaction(None) == 3

    def test_temporary_profile(self):
        from user_profile import temporary_profile
        temp = temporary_profile(_plan())
        assert temp.id.startswith("temp_")
        assert temp.preferred_muscle_groups == ["Arms"]
        assert temp.ratings == []
        assert temp.completed_workouts == []


class TestPlanSerialization:

    def test_saved_plan_survives_json_columns(self):
        from profile_service import plan_from_dict, plan_to_dict
        plan = _plan(id="plan-1")
        data = plan_to_dict(plan)
        assert data["exercises"][0]["equipment"] == ["dumbbells"]
        assert plan_from_dict(data) == plan
