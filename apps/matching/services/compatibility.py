from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from apps.matching.repositories import UserRepository
from apps.profile.models import BasicPreference, GenderPreference, LifestylePreference, Profile

CRITERIA_WEIGHTS: Dict[str, int] = {
    "age": 20,
    "budget": 20,
    "gender": 15,
    "sleep_schedule": 10,
    "cleanliness": 10,
    "smoking_pets": 10,
    "guest_policy": 5,
}
MAX_POINTS = sum(CRITERIA_WEIGHTS.values())

NEUTRAL_SCORE = 50
MISSING_PROFILE_SCORE = 0

GUEST_POLICY_ORDINALS = {
    "never": 0,
    "rarely": 1,
    "sometimes": 2,
    "often": 3,
}


class ScoreOutcome(str, Enum):
    COMPUTED = "computed"
    PROFILE_MISSING = "profile_missing"
    PREFERENCES_MISSING = "preferences_missing"
    LOOKUP_FAILED = "lookup_failed"


@dataclass(frozen=True)
class CompatibilityResult:
    score: int
    outcome: ScoreOutcome
    criteria: Tuple[str, ...] = field(default_factory=tuple)

    def as_dict(self) -> Dict[str, Any]:
        return {"score": self.score, "outcome": self.outcome.value, "criteria": list(self.criteria)}


PROFILE_MISSING = CompatibilityResult(MISSING_PROFILE_SCORE, ScoreOutcome.PROFILE_MISSING)
PREFERENCES_MISSING = CompatibilityResult(NEUTRAL_SCORE, ScoreOutcome.PREFERENCES_MISSING)
LOOKUP_FAILED = CompatibilityResult(NEUTRAL_SCORE, ScoreOutcome.LOOKUP_FAILED)


def _round_half_up(numerator: int, denominator: int) -> int:
    return (2 * numerator + denominator) // (2 * denominator)


def _within(value: Optional[int], low: Optional[int], high: Optional[int]) -> bool:
    if value is None:
        return False
    return (low or 0) <= value <= (high if high is not None else math.inf)


def _age_fits(profile_a: Profile, pref_a: BasicPreference, profile_b: Profile, pref_b: BasicPreference) -> bool:
    return _within(profile_a.age, pref_b.age_min, pref_b.age_max) and _within(
        profile_b.age, pref_a.age_min, pref_a.age_max
    )


def _budgets_overlap(pref_a: BasicPreference, pref_b: BasicPreference) -> bool:
    # A zero bound counts as unset, same as None.
    min_a = pref_a.budget_min or 0
    min_b = pref_b.budget_min or 0
    max_a = pref_a.budget_max or math.inf
    max_b = pref_b.budget_max or math.inf
    return min_a <= max_b and max_a >= min_b


def _gender_accepts(preference: Optional[str], gender: Optional[str]) -> bool:
    return preference == GenderPreference.ANY or preference == gender


def _genders_fit(profile_a: Profile, pref_a: BasicPreference, profile_b: Profile, pref_b: BasicPreference) -> bool:
    return _gender_accepts(pref_a.gender_preference, profile_b.gender) and _gender_accepts(
        pref_b.gender_preference, profile_a.gender
    )


def _guest_policies_close(policy_a: Optional[str], policy_b: Optional[str]) -> bool:
    ordinal_a = GUEST_POLICY_ORDINALS.get(str(policy_a or ""), 0)
    ordinal_b = GUEST_POLICY_ORDINALS.get(str(policy_b or ""), 0)
    return abs(ordinal_a - ordinal_b) <= 1


def evaluate(
    profile_a: Optional[Profile],
    pref_a: Optional[BasicPreference],
    lifestyle_a: Optional[LifestylePreference],
    profile_b: Optional[Profile],
    pref_b: Optional[BasicPreference],
    lifestyle_b: Optional[LifestylePreference],
) -> CompatibilityResult:
    """
    Score two users' profile and preference records against each other.

    Never raises on missing data. A missing profile scores 0, any missing
    preference record scores a neutral 50, otherwise every criterion in
    ``CRITERIA_WEIGHTS`` is checked all-or-nothing and the earned points are
    normalised against ``MAX_POINTS``. All criteria are symmetric, so the
    result does not depend on argument order.
    """
    if profile_a is None or profile_b is None:
        return PROFILE_MISSING
    if pref_a is None or pref_b is None or lifestyle_a is None or lifestyle_b is None:
        return PREFERENCES_MISSING

    checks = {
        "age": _age_fits(profile_a, pref_a, profile_b, pref_b),
        "budget": _budgets_overlap(pref_a, pref_b),
        "gender": _genders_fit(profile_a, pref_a, profile_b, pref_b),
        "sleep_schedule": lifestyle_a.sleep_schedule == lifestyle_b.sleep_schedule,
        "cleanliness": lifestyle_a.cleanliness == lifestyle_b.cleanliness,
        "smoking_pets": lifestyle_a.smoking == lifestyle_b.smoking and lifestyle_a.pets == lifestyle_b.pets,
        "guest_policy": _guest_policies_close(lifestyle_a.guest_policy, lifestyle_b.guest_policy),
    }
    met: List[str] = [name for name in CRITERIA_WEIGHTS if checks[name]]
    earned = sum(CRITERIA_WEIGHTS[name] for name in met)
    return CompatibilityResult(
        score=_round_half_up(100 * earned, MAX_POINTS),
        outcome=ScoreOutcome.COMPUTED,
        criteria=tuple(met),
    )


def score(
    profile_a: Optional[Profile],
    pref_a: Optional[BasicPreference],
    lifestyle_a: Optional[LifestylePreference],
    profile_b: Optional[Profile],
    pref_b: Optional[BasicPreference],
    lifestyle_b: Optional[LifestylePreference],
) -> int:
    return evaluate(profile_a, pref_a, lifestyle_a, profile_b, pref_b, lifestyle_b).score


def evaluate_users(user_a_id: int, user_b_id: int, *, users: UserRepository) -> CompatibilityResult:
    if user_a_id == user_b_id:
        raise ValueError("Cannot score a user against themself.")
    return evaluate(
        users.get_profile(user_a_id),
        users.get_basic_preference(user_a_id),
        users.get_lifestyle_preference(user_a_id),
        users.get_profile(user_b_id),
        users.get_basic_preference(user_b_id),
        users.get_lifestyle_preference(user_b_id),
    )


def score_users(user_a_id: int, user_b_id: int, *, users: UserRepository) -> int:
    return evaluate_users(user_a_id, user_b_id, users=users).score
