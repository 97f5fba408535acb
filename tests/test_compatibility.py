from __future__ import annotations

import itertools

import pytest

from apps.matching.services.compatibility import (
    MAX_POINTS,
    ScoreOutcome,
    evaluate,
    evaluate_users,
    score,
)
from apps.profile.models import BasicPreference, LifestylePreference, Profile


def _user(
    age=21,
    gender="male",
    gender_preference="any",
    age_min=20,
    age_max=25,
    budget_min=400,
    budget_max=600,
    sleep_schedule="night_owl",
    cleanliness="very_clean",
    guest_policy="sometimes",
    smoking=False,
    pets=False,
):
    return (
        Profile(age=age, gender=gender),
        BasicPreference(
            gender_preference=gender_preference,
            age_min=age_min,
            age_max=age_max,
            budget_min=budget_min,
            budget_max=budget_max,
        ),
        LifestylePreference(
            sleep_schedule=sleep_schedule,
            cleanliness=cleanliness,
            guest_policy=guest_policy,
            smoking=smoking,
            pets=pets,
        ),
    )


def _scenario_pair(**b_overrides):
    a = _user(age=21, age_min=21, age_max=25, budget_min=400, budget_max=600, guest_policy="sometimes")
    b_kwargs = dict(age=22, age_min=20, age_max=24, budget_min=450, budget_max=650, guest_policy="often")
    b_kwargs.update(b_overrides)
    return a, _user(**b_kwargs)


def test_weights_sum_to_denominator():
    assert MAX_POINTS == 90


def test_full_agreement_scores_100():
    a, b = _scenario_pair()
    result = evaluate(*a, *b)
    assert result.score == 100
    assert result.outcome is ScoreOutcome.COMPUTED
    assert set(result.criteria) == {
        "age",
        "budget",
        "gender",
        "sleep_schedule",
        "cleanliness",
        "smoking_pets",
        "guest_policy",
    }


def test_sleep_mismatch_loses_only_sleep_points():
    a, b = _scenario_pair(sleep_schedule="early_bird")
    result = evaluate(*a, *b)
    # 80 of 90 points, rounded half up.
    assert result.score == 89
    assert "sleep_schedule" not in result.criteria


def test_total_disagreement_scores_zero():
    a = _user(
        age=20,
        gender="male",
        gender_preference="male",
        age_min=18,
        age_max=21,
        budget_min=300,
        budget_max=400,
        sleep_schedule="early_bird",
        cleanliness="very_clean",
        guest_policy="never",
        smoking=False,
        pets=False,
    )
    b = _user(
        age=30,
        gender="female",
        gender_preference="female",
        age_min=28,
        age_max=35,
        budget_min=800,
        budget_max=1000,
        sleep_schedule="night_owl",
        cleanliness="relaxed",
        guest_policy="often",
        smoking=True,
        pets=False,
    )
    assert score(*a, *b) == 0


def test_missing_profile_scores_zero():
    a, b = _scenario_pair()
    result = evaluate(None, a[1], a[2], *b)
    assert result.score == 0
    assert result.outcome is ScoreOutcome.PROFILE_MISSING
    assert score(*a, None, b[1], b[2]) == 0


@pytest.mark.parametrize("missing_index", [1, 2, 4, 5])
def test_missing_preferences_score_neutral(missing_index):
    a, b = _scenario_pair()
    records = list(a + b)
    records[missing_index] = None
    result = evaluate(*records)
    assert result.score == 50
    assert result.outcome is ScoreOutcome.PREFERENCES_MISSING


def test_missing_preferences_ignore_profile_contents():
    a = _user(age=80, gender="other")
    b = _user(age=18, gender="female")
    assert score(a[0], None, None, b[0], b[1], b[2]) == 50


def test_age_must_fit_both_windows():
    # A is inside B's window, B is outside A's.
    a, b = _scenario_pair(age=30, age_min=20, age_max=24)
    result = evaluate(*a, *b)
    assert "age" not in result.criteria


def test_budget_touching_bounds_overlap():
    a, b = _scenario_pair(budget_min=600, budget_max=900)
    assert "budget" in evaluate(*a, *b).criteria


def test_budget_missing_bounds_are_open():
    a = _user(budget_min=None, budget_max=None)
    b = _user(budget_min=5000, budget_max=None)
    assert "budget" in evaluate(*a, *b).criteria


def test_budget_disjoint_ranges_fail():
    a = _user(budget_min=300, budget_max=400)
    b = _user(budget_min=401, budget_max=500)
    assert "budget" not in evaluate(*a, *b).criteria


def test_gender_preference_must_hold_both_ways():
    a = _user(gender="male", gender_preference="female")
    b = _user(gender="female", gender_preference="female")
    assert "gender" not in evaluate(*a, *b).criteria

    c = _user(gender="male", gender_preference="any")
    d = _user(gender="female", gender_preference="male")
    assert "gender" in evaluate(*c, *d).criteria


def test_smoking_and_pets_are_all_or_nothing():
    a = _user(smoking=False, pets=True)
    b = _user(smoking=False, pets=False)
    assert "smoking_pets" not in evaluate(*a, *b).criteria


@pytest.mark.parametrize(
    "policy_a,policy_b,close",
    [
        ("never", "rarely", True),
        ("sometimes", "sometimes", True),
        ("never", "sometimes", False),
        ("rarely", "often", False),
        ("unknown", "rarely", True),
    ],
)
def test_guest_policy_tolerates_adjacent_values(policy_a, policy_b, close):
    a = _user(guest_policy=policy_a)
    b = _user(guest_policy=policy_b)
    assert ("guest_policy" in evaluate(*a, *b).criteria) is close


def test_score_is_commutative_and_bounded():
    variants = [
        _user(),
        _user(age=30, gender="female", gender_preference="male", budget_min=900, budget_max=1200),
        _user(sleep_schedule="early_bird", cleanliness="relaxed", guest_policy="never", smoking=True),
        _user(age=19, gender="other", age_min=18, age_max=20, pets=True, guest_policy="often"),
    ]
    for a, b in itertools.product(variants, repeat=2):
        forward = score(*a, *b)
        assert forward == score(*b, *a)
        assert isinstance(forward, int)
        assert 0 <= forward <= 100


def test_evaluate_users_rejects_same_user():
    class _NoLookups:
        def __getattr__(self, name):
            raise AssertionError("no lookups expected")

    with pytest.raises(ValueError):
        evaluate_users(7, 7, users=_NoLookups())
