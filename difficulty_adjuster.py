"""
FitPlanner - Difficulty Adjuster
Rule-based difficulty suggestion from recent history, training frequency,
spacing consistency and keyword scanning of rating feedback.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from user_profile import CompletedWorkout, UserProfile, WorkoutRating

log = logging.getLogger(__name__)

DIFFICULTY_TIERS = ("beginner", "intermediate", "advanced")
DEFAULT_DIFFICULTY = "intermediate"

RECENT_WINDOW = 5
PROGRESSION_THRESHOLD = 4
NEUTRAL_CONSISTENCY = 5.0

EASIER_PHRASES = ("too difficult", "too hard")
HARDER_PHRASES = ("too easy",)

POSITIVE_WORDS = ("great", "good", "love", "enjoyed", "perfect", "amazing", "excellent")
NEGATIVE_WORDS = ("hard", "difficult", "challenging", "too", "couldn't", "struggle", "tough")

SECONDS_PER_DAY = 24 * 60 * 60


# ══════════════════════════════════════════════════════════════════════════════
# DATA STRUCTURES
# ══════════════════════════════════════════════════════════════════════════════

@dataclass
class FeedbackSummary:
    average_rating: float = 0.0
    rating_trend: str = "stable"     # increasing / decreasing / stable
    sentiment: str = "neutral"       # positive / negative / neutral


@dataclass
class DifficultyAdjustment:
    difficulty: str
    reason: str
    workouts_per_week: float = 0.0
    consistency_score: float = NEUTRAL_CONSISTENCY
    feedback: FeedbackSummary = field(default_factory=FeedbackSummary)


# ══════════════════════════════════════════════════════════════════════════════
# HISTORY METRICS
# ══════════════════════════════════════════════════════════════════════════════

def workouts_per_week(workouts: list[CompletedWorkout]) -> float:
    """Workouts divided by the number of weeks spanned (at least one), one decimal."""
    if len(workouts) < 2:
        return float(len(workouts))
    dates = [w.date for w in workouts]
    span_weeks = (max(dates) - min(dates)).total_seconds() / (7 * SECONDS_PER_DAY)
    weeks = max(1, math.ceil(span_weeks))
    return round(len(workouts) / weeks, 1)


def consistency_score(workouts: list[CompletedWorkout]) -> float:
    """
    0-10 score; 10 means perfectly even spacing between sessions.
    Computed as 10 minus the population std-dev of day gaps, clamped.
    """
    if len(workouts) < 2:
        return NEUTRAL_CONSISTENCY
    ordered = sorted(workouts, key=lambda w: w.date)
    gaps = [
        (b.date - a.date).total_seconds() / SECONDS_PER_DAY
        for a, b in zip(ordered, ordered[1:])
    ]
    return min(10.0, max(0.0, 10.0 - float(np.std(gaps))))


def rating_trend(ratings: list[WorkoutRating]) -> str:
    if len(ratings) < 3:
        return "stable"
    values = [r.rating for r in sorted(ratings, key=lambda r: r.timestamp)]
    increases = sum(1 for a, b in zip(values, values[1:]) if b > a)
    decreases = sum(1 for a, b in zip(values, values[1:]) if b < a)
    if increases > decreases * 2:
        return "increasing"
    if decreases > increases * 2:
        return "decreasing"
    return "stable"


def feedback_sentiment(ratings: list[WorkoutRating]) -> str:
    texts = [r.feedback.lower() for r in ratings if r.feedback]
    if not texts:
        return "neutral"
    positive = sum(1 for text in texts for word in POSITIVE_WORDS if word in text)
    negative = sum(1 for text in texts for word in NEGATIVE_WORDS if word in text)
    if positive > negative * 1.5:
        return "positive"
    if negative > positive * 1.5:
        return "negative"
    return "neutral"


def summarize_feedback(ratings: list[WorkoutRating]) -> FeedbackSummary:
    recent = sorted(ratings, key=lambda r: r.timestamp, reverse=True)[:RECENT_WINDOW]
    average = sum(r.rating for r in recent) / len(recent) if recent else 0.0
    return FeedbackSummary(
        average_rating=round(average, 2),
        rating_trend=rating_trend(ratings),
        sentiment=feedback_sentiment(ratings),
    )


# ══════════════════════════════════════════════════════════════════════════════
# FEEDBACK SCAN
# ══════════════════════════════════════════════════════════════════════════════

def _ratings_in_scan_order(workouts: list[CompletedWorkout],
                           ratings: list[WorkoutRating]) -> list[WorkoutRating]:
    """Ratings joined to completed workouts (newest first), then unmatched ratings."""
    by_plan = {r.workout_plan_id: r for r in ratings}
    joined = [by_plan[w.workout_plan_id] for w in workouts if w.workout_plan_id in by_plan]
    done = {w.workout_plan_id for w in workouts}
    return joined + [r for r in ratings if r.workout_plan_id not in done]


def feedback_suggestion(workouts: list[CompletedWorkout],
                        ratings: list[WorkoutRating]) -> Optional[str]:
    """
    Returns "easier", "harder" or None. Each matching rating overwrites the
    previous verdict, so the last one scanned wins.
    """
    suggestion = None
    for rating in _ratings_in_scan_order(workouts, ratings):
        text = (rating.feedback or "").lower()
        if rating.rating <= 2 or any(p in text for p in EASIER_PHRASES):
            suggestion = "easier"
        elif any(p in text for p in HARDER_PHRASES):
            suggestion = "harder"
    return suggestion


# ══════════════════════════════════════════════════════════════════════════════
# ADJUSTER
# ══════════════════════════════════════════════════════════════════════════════

class DifficultyAdjuster:

    def _most_common(self, counts: dict[str, int]) -> str:
        tier, best = DEFAULT_DIFFICULTY, 0
        for name in DIFFICULTY_TIERS:
            if counts[name] > best:
                tier, best = name, counts[name]
        return tier

    def analyze(self, profile: Optional[UserProfile]) -> DifficultyAdjustment:
        if profile is None:
            return DifficultyAdjustment(DEFAULT_DIFFICULTY, "Default difficulty level")

        history = sorted(profile.completed_workouts, key=lambda w: w.date, reverse=True)
        if not history:
            return DifficultyAdjustment(DEFAULT_DIFFICULTY, "No workout history available")

        recent = history[:RECENT_WINDOW]
        counts = {tier: 0 for tier in DIFFICULTY_TIERS}
        for workout in recent:
            if workout.difficulty in counts:
                counts[workout.difficulty] += 1

        per_week = workouts_per_week(history)
        consistency = consistency_score(history)
        suggestion = feedback_suggestion(history, profile.ratings)
        most_common = self._most_common(counts)

        if suggestion == "easier":
            difficulty = "beginner"
            reason = "Adjusted based on your feedback indicating workouts were too challenging"
        elif suggestion == "harder":
            difficulty = "advanced"
            reason = "Increased difficulty based on your feedback that workouts were too easy"
        elif consistency > 7 and per_week > 3 and most_common == "intermediate":
            difficulty = "advanced"
            reason = (
                f"Advanced workouts recommended based on your consistent training "
                f"({per_week:g} workouts/week, consistency score: {consistency:.1f}/10)"
            )
        elif (len(recent) >= RECENT_WINDOW and most_common == "beginner"
              and counts["beginner"] >= PROGRESSION_THRESHOLD):
            difficulty = "intermediate"
            reason = "Intermediate workouts recommended based on your progress with beginner workouts"
        elif (len(recent) >= RECENT_WINDOW and most_common == "intermediate"
              and counts["intermediate"] >= PROGRESSION_THRESHOLD):
            difficulty = "advanced"
            reason = "Advanced workouts recommended after steady progress with intermediate workouts"
        else:
            difficulty = most_common
            if difficulty == "beginner" and len(recent) < RECENT_WINDOW:
                reason = "Starting with beginner workouts to build a foundation"
            else:
                reason = f"Recommended {difficulty} difficulty based on your workout history"

        log.debug(f"Profile {profile.id}: {difficulty} ({reason})")
        return DifficultyAdjustment(
            difficulty=difficulty,
            reason=reason,
            workouts_per_week=per_week,
            consistency_score=round(consistency, 2),
            feedback=summarize_feedback(profile.ratings),
        )


difficulty_adjuster = DifficultyAdjuster()


def analyze_difficulty_adjustment(profile: Optional[UserProfile]) -> DifficultyAdjustment:
    return difficulty_adjuster.analyze(profile)
