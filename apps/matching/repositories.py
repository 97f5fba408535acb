"""
Read-side collaborators for scoring and candidate search.

The scorer and the search never touch the ORM directly; they receive a
``UserRepository`` and a ``MatchRepository`` at call time. The Django
implementations below return ``None`` for missing rows and raise
``RepositoryError`` when the database itself fails.
"""

from __future__ import annotations

import functools
from dataclasses import dataclass
from typing import Iterable, List, Optional, Protocol, Set

from django.db import DatabaseError
from django.db.models import Q

from apps.matching.models import Match, MatchRequest
from apps.profile.models import BasicPreference, GenderPreference, LifestylePreference, Profile
from apps.users.models import User
from apps.users.services import blocked_user_ids


class RepositoryError(Exception):
    """Raised when a lookup could not be completed (as opposed to "not found")."""


@dataclass(frozen=True)
class CandidateFilters:
    gender: Optional[str] = None
    age_min: Optional[int] = None
    age_max: Optional[int] = None
    budget_min: Optional[int] = None
    budget_max: Optional[int] = None
    location: Optional[str] = None

    @classmethod
    def from_preference(cls, preference: BasicPreference) -> "CandidateFilters":
        gender = preference.gender_preference
        return cls(
            gender=None if not gender or gender == GenderPreference.ANY else gender,
            age_min=preference.age_min,
            age_max=preference.age_max,
            budget_min=preference.budget_min or None,
            budget_max=preference.budget_max or None,
            location=(preference.location_preference or "").strip() or None,
        )


class UserRepository(Protocol):
    def get_profile(self, user_id: int) -> Optional[Profile]: ...

    def get_basic_preference(self, user_id: int) -> Optional[BasicPreference]: ...

    def get_lifestyle_preference(self, user_id: int) -> Optional[LifestylePreference]: ...

    def search_candidate_ids(
        self,
        requester_id: int,
        filters: Optional[CandidateFilters],
        *,
        exclude: Iterable[int] = (),
        limit: int = 50,
    ) -> List[int]: ...


class MatchRepository(Protocol):
    def pending_request_receiver_ids(self, sender_id: int) -> Set[int]: ...

    def matched_user_ids(self, user_id: int) -> Set[int]: ...

    def blocked_user_ids(self, user_id: int) -> Set[int]: ...


def _translate_db_errors(func):
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except DatabaseError as exc:
            raise RepositoryError(f"{func.__name__} failed: {exc}") from exc

    return wrapper


class DjangoUserRepository:
    @_translate_db_errors
    def get_profile(self, user_id: int) -> Optional[Profile]:
        return Profile.objects.filter(user_id=user_id).first()

    @_translate_db_errors
    def get_basic_preference(self, user_id: int) -> Optional[BasicPreference]:
        return BasicPreference.objects.filter(user_id=user_id).first()

    @_translate_db_errors
    def get_lifestyle_preference(self, user_id: int) -> Optional[LifestylePreference]:
        return LifestylePreference.objects.filter(user_id=user_id).first()

    @_translate_db_errors
    def search_candidate_ids(
        self,
        requester_id: int,
        filters: Optional[CandidateFilters],
        *,
        exclude: Iterable[int] = (),
        limit: int = 50,
    ) -> List[int]:
        excluded = set(exclude)
        excluded.add(requester_id)
        queryset = Profile.objects.exclude(user_id__in=excluded).filter(
            user__is_active=True,
            user__status=User.Status.ACTIVE,
        )
        if filters is not None:
            queryset = queryset.filter(_candidate_query(filters))
        return list(queryset.order_by("user_id").values_list("user_id", flat=True)[:limit])


def _candidate_query(filters: CandidateFilters) -> Q:
    query = Q()
    if filters.gender:
        query &= Q(gender=filters.gender)
    if filters.age_min is not None:
        query &= Q(age__gte=filters.age_min)
    if filters.age_max is not None:
        query &= Q(age__lte=filters.age_max)

    # Candidates without a basic preference are never excluded by budget or location.
    no_preference = Q(user__basic_preference__isnull=True)
    if filters.budget_min is not None:
        query &= (
            no_preference
            | Q(user__basic_preference__budget_max__isnull=True)
            | Q(user__basic_preference__budget_max=0)
            | Q(user__basic_preference__budget_max__gte=filters.budget_min)
        )
    if filters.budget_max is not None:
        query &= (
            no_preference
            | Q(user__basic_preference__budget_min__isnull=True)
            | Q(user__basic_preference__budget_min__lte=filters.budget_max)
        )
    if filters.location:
        query &= (
            no_preference
            | Q(user__basic_preference__location_preference__isnull=True)
            | Q(user__basic_preference__location_preference="")
            | Q(user__basic_preference__location_preference__iexact=filters.location)
        )
    return query


class DjangoMatchRepository:
    @_translate_db_errors
    def pending_request_receiver_ids(self, sender_id: int) -> Set[int]:
        return set(
            MatchRequest.objects.filter(sender_id=sender_id, status=MatchRequest.Status.PENDING).values_list(
                "receiver_id", flat=True
            )
        )

    @_translate_db_errors
    def matched_user_ids(self, user_id: int) -> Set[int]:
        pairs = Match.objects.active().for_user(user_id).values_list("user_one_id", "user_two_id")
        return {second if first == user_id else first for first, second in pairs}

    @_translate_db_errors
    def blocked_user_ids(self, user_id: int) -> Set[int]:
        return blocked_user_ids(user_id)
