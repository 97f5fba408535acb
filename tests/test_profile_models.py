from __future__ import annotations

import pytest
from django.core.exceptions import ValidationError

from apps.profile.models import BasicPreference, LifestylePreference, Profile
from apps.users.models import User


def test_profile_rejects_minors():
    with pytest.raises(ValidationError) as excinfo:
        Profile(age=17, gender="male").clean()
    assert "age" in excinfo.value.message_dict


def test_basic_preference_range_validation():
    with pytest.raises(ValidationError) as excinfo:
        BasicPreference(age_min=25, age_max=20, budget_min=900, budget_max=500).clean()
    assert {"age_max", "budget_max"} <= set(excinfo.value.message_dict)

    BasicPreference(age_min=18, age_max=99, budget_min=None, budget_max=500).clean()


@pytest.mark.django_db
def test_create_updates_existing_row_per_user():
    user = User.objects.create_user(email="p@example.com", password="pass12345")
    first = Profile.objects.create(user=user, age=20, gender="female")
    second = Profile.objects.create(user=user, age=21, gender="female", bio="updated")

    assert first.id == second.id
    assert Profile.objects.filter(user=user).count() == 1
    assert Profile.objects.get(user=user).bio == "updated"

    LifestylePreference.objects.create(user=user, pets=True)
    LifestylePreference.objects.create(user=user, pets=False, smoking=True)
    lifestyle = LifestylePreference.objects.get(user=user)
    assert (lifestyle.pets, lifestyle.smoking) == (False, True)


@pytest.mark.django_db
def test_user_display_name_and_status():
    user = User.objects.create_user(email="jane.doe@uni.edu", password="pass12345")
    assert user.display_name == "jane.doe"
    assert user.can_match is True
    user.status = User.Status.SUSPENDED
    assert user.can_match is False
