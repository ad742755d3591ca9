"""
FitPlanner - Similarity & Recommendation Engine
Collaborative filtering over a reference panel, content-based plan similarity,
and a popularity ranking used to top up short result lists.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional, Sequence

from mock_panel import MOCK_USERS, MOCK_WORKOUT_PLANS, CatalogPlan
from plan_assembler import WorkoutPlan
from user_profile import UserProfile

log = logging.getLogger(__name__)

DEFAULT_TOP_N = 4
SIMILAR_USER_COUNT = 3
HIGH_RATING = 4

# Similarity weights
AGE_WEIGHT = 0.10
GENDER_WEIGHT = 0.10
EQUIPMENT_WEIGHT = 0.25
MUSCLE_GROUP_WEIGHT = 0.25
RATING_WEIGHT = 0.30
AGE_SPAN = 20

# Content similarity weights
CONTENT_MUSCLE_WEIGHT = 0.6
CONTENT_EQUIPMENT_WEIGHT = 0.3
CONTENT_DIFFICULTY_WEIGHT = 0.1


class RecommendationSource(str, Enum):
    collaborative = "collaborative"
    content_based = "content-based"
    popular = "popular"


@dataclass
class WorkoutRecommendation:
    id: str
    score: float
    reason: str
    source: RecommendationSource
    name: str
    muscle_groups: list[str] = field(default_factory=list)
    equipment: list[str] = field(default_factory=list)
    difficulty: str = "intermediate"
    duration: int = 30


def _recommendation(plan: CatalogPlan, score: float, reason: str,
                    source: RecommendationSource) -> WorkoutRecommendation:
    return WorkoutRecommendation(
        id=plan.id,
        score=score,
        reason=reason,
        source=source,
        name=plan.name,
        muscle_groups=list(plan.muscle_groups),
        equipment=list(plan.equipment),
        difficulty=plan.difficulty,
        duration=plan.duration,
    )


# ══════════════════════════════════════════════════════════════════════════════
# USER SIMILARITY
# ══════════════════════════════════════════════════════════════════════════════

def overlap_ratio(a: Iterable[str], b: Iterable[str]) -> float:
    """|A∩B| / max(|A|, |B|); two empty sets count as identical."""
    left, right = set(a or ()), set(b or ())
    if not left and not right:
        return 1.0
    return len(left & right) / max(len(left), len(right))


def rating_agreement(a: UserProfile, b: UserProfile) -> Optional[float]:
    """Mean of 1 - |rA - rB| / 4 over plans rated by both, None when there are none."""
    lookup = {r.workout_plan_id: r.rating for r in a.ratings}
    agreements = [
        1 - abs(lookup[r.workout_plan_id] - r.rating) / 4
        for r in b.ratings
        if r.workout_plan_id in lookup
    ]
    if not agreements:
        return None
    return sum(agreements) / len(agreements)


def user_similarity(a: UserProfile, b: UserProfile) -> float:
    """
    Weighted similarity in [0, 1] across age, gender, equipment, muscle
    groups and rating agreement. The rating term only counts toward the
    denominator when the two users share at least one rated plan.
    """
    score = 0.0
    weight = 0.0

    score += max(0.0, 1 - abs(a.age - b.age) / AGE_SPAN) * AGE_WEIGHT
    weight += AGE_WEIGHT

    score += (1.0 if a.gender == b.gender else 0.0) * GENDER_WEIGHT
    weight += GENDER_WEIGHT

    score += overlap_ratio(a.preferred_equipment, b.preferred_equipment) * EQUIPMENT_WEIGHT
    weight += EQUIPMENT_WEIGHT

    score += overlap_ratio(a.preferred_muscle_groups, b.preferred_muscle_groups) * MUSCLE_GROUP_WEIGHT
    weight += MUSCLE_GROUP_WEIGHT

    agreement = rating_agreement(a, b)
    if agreement is not None:
        score += agreement * RATING_WEIGHT
        weight += RATING_WEIGHT

    return score / weight


def find_similar_users(user: UserProfile, panel: Sequence[UserProfile],
                       top_n: int = SIMILAR_USER_COUNT) -> list[tuple[UserProfile, float]]:
    scored = [(other, user_similarity(user, other)) for other in panel if other.id != user.id]
    scored.sort(key=lambda pair: pair[1], reverse=True)
    return scored[:top_n]


# ══════════════════════════════════════════════════════════════════════════════
# COLLABORATIVE FILTERING
# ══════════════════════════════════════════════════════════════════════════════

def _collaborative_reason(names: list[str]) -> str:
    others = " and others" if len(names) > 2 else ""
    return f"Recommended because {' and '.join(names[:2])}{others} enjoyed this workout"


def collaborative_recommendations(
    user: UserProfile,
    panel: Sequence[UserProfile],
    plans: Sequence[CatalogPlan],
    top_n: int = DEFAULT_TOP_N,
    similar_user_count: int = SIMILAR_USER_COUNT,
) -> list[WorkoutRecommendation]:
    rated = {r.workout_plan_id for r in user.ratings}
    by_id = {plan.id: plan for plan in plans}

    scores: dict[str, float] = {}
    contributors: dict[str, list[str]] = {}
    for other, similarity in find_similar_users(user, panel, similar_user_count):
        for rating in other.ratings:
            if rating.rating < HIGH_RATING or rating.workout_plan_id in rated:
                continue
            plan_id = rating.workout_plan_id
            scores[plan_id] = scores.get(plan_id, 0.0) + rating.rating * similarity
            contributors.setdefault(plan_id, []).append(other.name)

    recs = [
        _recommendation(by_id[plan_id], score, _collaborative_reason(contributors[plan_id]),
                        RecommendationSource.collaborative)
        for plan_id, score in scores.items()
        if plan_id in by_id
    ]
    recs.sort(key=lambda r: r.score, reverse=True)
    return recs[:top_n]


# ══════════════════════════════════════════════════════════════════════════════
# CONTENT-BASED SIMILARITY
# ══════════════════════════════════════════════════════════════════════════════

def content_similarity(current: WorkoutPlan, plan: CatalogPlan) -> float:
    return (
        overlap_ratio(current.muscle_groups, plan.muscle_groups) * CONTENT_MUSCLE_WEIGHT
        + overlap_ratio(current.equipment, plan.equipment) * CONTENT_EQUIPMENT_WEIGHT
        + (1.0 if current.difficulty == plan.difficulty else 0.0) * CONTENT_DIFFICULTY_WEIGHT
    )


def _content_reason(current: WorkoutPlan, plan: CatalogPlan) -> str:
    shares_groups = bool(set(current.muscle_groups) & set(plan.muscle_groups))
    shares_equipment = bool(set(current.equipment) & set(plan.equipment))
    if shares_groups and shares_equipment:
        return "Matches your preferred muscle groups and equipment"
    if shares_groups:
        return "Matches your preferred muscle groups"
    if shares_equipment:
        return "Matches your preferred equipment"
    return "Similar to your current workout"


def content_based_recommendations(current: WorkoutPlan, plans: Sequence[CatalogPlan],
                                  top_n: int = DEFAULT_TOP_N) -> list[WorkoutRecommendation]:
    recs = [
        _recommendation(plan, content_similarity(current, plan), _content_reason(current, plan),
                        RecommendationSource.content_based)
        for plan in plans
        if plan.id != current.id
    ]
    recs.sort(key=lambda r: r.score, reverse=True)
    return recs[:top_n]


# ══════════════════════════════════════════════════════════════════════════════
# POPULARITY
# ══════════════════════════════════════════════════════════════════════════════

def popular_recommendations(
    panel: Sequence[UserProfile],
    plans: Sequence[CatalogPlan],
    top_n: int = DEFAULT_TOP_N,
    exclude: Iterable[str] = (),
) -> list[WorkoutRecommendation]:
    """Plans ranked by mean panel rating, most-rated first on ties."""
    skip = set(exclude)
    totals: dict[str, list[int]] = {}
    for member in panel:
        for rating in member.ratings:
            totals.setdefault(rating.workout_plan_id, []).append(rating.rating)

    ranked = []
    for plan in plans:
        if plan.id in skip or plan.id not in totals:
            continue
        values = totals[plan.id]
        mean = sum(values) / len(values)
        reason = f"Popular with {len(values)} other user{'s' if len(values) != 1 else ''}"
        ranked.append((mean, len(values), _recommendation(plan, mean, reason, RecommendationSource.popular)))

    ranked.sort(key=lambda item: (item[0], item[1]), reverse=True)
    return [rec for _, _, rec in ranked[:top_n]]


# ══════════════════════════════════════════════════════════════════════════════
# ENGINE
# ══════════════════════════════════════════════════════════════════════════════

class RecommendationEngine:

    def __init__(self, panel: Optional[Sequence[UserProfile]] = None,
                 plans: Optional[Sequence[CatalogPlan]] = None,
                 similar_user_count: int = SIMILAR_USER_COUNT):
        self.panel = list(panel) if panel is not None else list(MOCK_USERS)
        self.plans = list(plans) if plans is not None else list(MOCK_WORKOUT_PLANS)
        self.similar_user_count = similar_user_count

    def plan_by_id(self, plan_id: str) -> Optional[CatalogPlan]:
        return next((plan for plan in self.plans if plan.id == plan_id), None)

    def recommend(self, profile: Optional[UserProfile],
                  current_workout: Optional[WorkoutPlan] = None,
                  top_n: int = DEFAULT_TOP_N) -> list[WorkoutRecommendation]:
        """
        Collaborative results first; when a current workout is given,
        content-based results fill the remaining slots without repeating ids.
        """
        if profile is None:
            return []

        recs = collaborative_recommendations(profile, self.panel, self.plans, top_n,
                                             self.similar_user_count)
        if current_workout is None:
            return recs

        seen = {rec.id for rec in recs}
        for rec in content_based_recommendations(current_workout, self.plans, top_n):
            if len(recs) >= top_n:
                break
            if rec.id not in seen:
                recs.append(rec)
                seen.add(rec.id)

        log.debug(f"{len(recs)} recommendation(s) for profile {profile.id}")
        return recs[:top_n]

    def popular(self, top_n: int = DEFAULT_TOP_N, exclude: Iterable[str] = ()) -> list[WorkoutRecommendation]:
        return popular_recommendations(self.panel, self.plans, top_n, exclude)


recommendation_engine = RecommendationEngine()


def get_diverse_recommendations(profile: Optional[UserProfile],
                                current_workout: Optional[WorkoutPlan] = None,
                                top_n: int = DEFAULT_TOP_N) -> list[WorkoutRecommendation]:
    return recommendation_engine.recommend(profile, current_workout, top_n)
