from __future__ import annotations

import pytest

from apps.matching.models import Match
from apps.matching.tasks import refresh_match_scores_task, score_pair_task
from apps.profile.models import BasicPreference, LifestylePreference, Profile
from apps.users.models import User


def _student(email: str, sleep: str = "normal") -> User:
    user = User.objects.create_user(email=email, password="pass12345")
    Profile.objects.create(user=user, age=21, gender="male")
    BasicPreference.objects.create(user=user, age_min=18, age_max=30, budget_min=400, budget_max=600)
    LifestylePreference.objects.create(user=user, sleep_schedule=sleep)
    return user


@pytest.mark.django_db
def test_score_pair_task_returns_score_and_outcome():
    a = _student("a@example.com")
    b = _student("b@example.com")
    assert score_pair_task.delay(a.id, b.id).get() == {"score": 100, "outcome": "computed"}


@pytest.mark.django_db
def test_score_pair_task_reports_missing_profile():
    a = _student("a@example.com")
    ghost = User.objects.create_user(email="ghost@example.com", password="pass12345")
    assert score_pair_task(a.id, ghost.id) == {"score": 0, "outcome": "profile_missing"}


@pytest.mark.django_db
def test_refresh_updates_only_changed_active_matches():
    a = _student("a@example.com")
    b = _student("b@example.com", sleep="night_owl")
    c = _student("c@example.com")
    stale = Match.objects.create(user_one=a, user_two=b, compatibility_score=100)
    current = Match.objects.create(user_one=a, user_two=c, compatibility_score=100)

    assert refresh_match_scores_task(a.id) == 1

    stale.refresh_from_db()
    current.refresh_from_db()
    assert stale.compatibility_score == 89
    assert current.compatibility_score == 100


@pytest.mark.django_db
def test_preference_change_queues_refresh(django_capture_on_commit_callbacks):
    a = _student("a@example.com")
    b = _student("b@example.com")
    match = Match.objects.create(user_one=a, user_two=b, compatibility_score=100)

    with django_capture_on_commit_callbacks(execute=True):
        lifestyle = LifestylePreference.objects.get(user=b)
        lifestyle.cleanliness = "relaxed"
        lifestyle.save()

    match.refresh_from_db()
    assert match.compatibility_score == 89
