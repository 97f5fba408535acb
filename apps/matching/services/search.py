from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Dict, List, Optional

from django.conf import settings

from apps.matching.repositories import CandidateFilters, MatchRepository, RepositoryError, UserRepository
from apps.matching.services.compatibility import LOOKUP_FAILED, CompatibilityResult, ScoreOutcome, evaluate
from apps.profile.models import BasicPreference, LifestylePreference, Profile

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CandidateResult:
    requester_id: int
    candidate_id: int
    compatibility_score: int
    outcome: ScoreOutcome
    rank: int = 0
    criteria: tuple = ()
    profile: Optional[Profile] = None
    basic_preference: Optional[BasicPreference] = None
    lifestyle_preference: Optional[LifestylePreference] = None

    def as_dict(self) -> Dict[str, Any]:
        profile = self.profile
        return {
            "requester_id": self.requester_id,
            "candidate_id": self.candidate_id,
            "compatibility_score": self.compatibility_score,
            "outcome": self.outcome.value,
            "rank": self.rank,
            "criteria": list(self.criteria),
            "profile": {"age": profile.age, "gender": profile.gender, "bio": profile.bio} if profile else None,
        }


def _score_candidate(
    requester_id: int,
    candidate_id: int,
    requester_records: tuple,
    users: UserRepository,
) -> CandidateResult:
    try:
        profile = users.get_profile(candidate_id)
        basic = users.get_basic_preference(candidate_id)
        lifestyle = users.get_lifestyle_preference(candidate_id)
    except RepositoryError:
        logger.warning("Candidate lookup failed; using neutral score", extra={"candidate_id": candidate_id})
        return _result(requester_id, candidate_id, LOOKUP_FAILED)

    compat = evaluate(*requester_records, profile, basic, lifestyle)
    return _result(requester_id, candidate_id, compat, profile, basic, lifestyle)


def _result(
    requester_id: int,
    candidate_id: int,
    compat: CompatibilityResult,
    profile: Optional[Profile] = None,
    basic: Optional[BasicPreference] = None,
    lifestyle: Optional[LifestylePreference] = None,
) -> CandidateResult:
    return CandidateResult(
        requester_id=requester_id,
        candidate_id=candidate_id,
        compatibility_score=compat.score,
        outcome=compat.outcome,
        criteria=compat.criteria,
        profile=profile,
        basic_preference=basic,
        lifestyle_preference=lifestyle,
    )


def find_matches(
    requester_id: int,
    limit: Optional[int] = None,
    *,
    users: UserRepository,
    matches: MatchRepository,
) -> List[CandidateResult]:
    """
    Rank potential roommates for ``requester_id``.

    Without a basic preference every other user is a candidate. With one, the
    user repository applies the hard filters. The requester, users with a
    pending request from the requester, active matches and blocked users are
    never returned. Results are sorted by score descending, ties by candidate
    id ascending, and carry a 1-based rank.
    """
    if limit is None:
        limit = getattr(settings, "MATCH_SEARCH_DEFAULT_LIMIT", 10)
    if limit <= 0:
        return []

    requester_pref = users.get_basic_preference(requester_id)
    requester_records = (
        users.get_profile(requester_id),
        requester_pref,
        users.get_lifestyle_preference(requester_id),
    )
    filters = CandidateFilters.from_preference(requester_pref) if requester_pref is not None else None

    excluded = {requester_id}
    excluded |= matches.pending_request_receiver_ids(requester_id)
    excluded |= matches.matched_user_ids(requester_id)
    excluded |= matches.blocked_user_ids(requester_id)

    pool_size = getattr(settings, "MATCH_CANDIDATE_POOL_SIZE", 50)
    candidate_ids = users.search_candidate_ids(requester_id, filters, exclude=excluded, limit=pool_size)

    results = [
        _score_candidate(requester_id, candidate_id, requester_records, users)
        for candidate_id in candidate_ids
        if candidate_id not in excluded
    ]
    results.sort(key=lambda item: (-item.compatibility_score, item.candidate_id))
    logger.info(
        "Match search complete",
        extra={"requester_id": requester_id, "candidates": len(results), "limit": limit},
    )
    return [replace(item, rank=position) for position, item in enumerate(results[:limit], start=1)]
