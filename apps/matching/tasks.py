from __future__ import annotations

import logging

from celery import shared_task

from apps.matching.models import Match
from apps.matching.repositories import DjangoUserRepository
from apps.matching.services.compatibility import evaluate_users

logger = logging.getLogger(__name__)


@shared_task
def score_pair_task(user_a_id: int, user_b_id: int) -> dict[str, object]:
    result = evaluate_users(user_a_id, user_b_id, users=DjangoUserRepository())
    return {"score": result.score, "outcome": result.outcome.value}


@shared_task
def refresh_match_scores_task(user_id: int) -> int:
    """Recompute stored scores for the user's active matches. Returns how many changed."""
    users = DjangoUserRepository()
    updated = 0
    for match in Match.objects.active().for_user(user_id):
        score = evaluate_users(match.user_one_id, match.user_two_id, users=users).score
        if score != match.compatibility_score:
            match.compatibility_score = score
            match.save(update_fields=["compatibility_score", "updated_at"])
            updated += 1
    if updated:
        logger.info("Refreshed match scores", extra={"user_id": user_id, "updated": updated})
    return updated
