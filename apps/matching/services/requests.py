from __future__ import annotations

import logging
from typing import List, Optional

from django.db import transaction
from django.db.models import Q
from django.utils import timezone

from apps.matching.models import Match, MatchRequest, ordered_pair
from apps.matching.repositories import DjangoUserRepository, UserRepository
from apps.matching.services.compatibility import score_users
from apps.notifications.models import Notification
from apps.notifications.services import notify
from apps.users.models import User
from apps.users.services import is_blocked

logger = logging.getLogger(__name__)

RESPONSE_STATUSES = (
    MatchRequest.Status.ACCEPTED,
    MatchRequest.Status.REJECTED,
    MatchRequest.Status.CANCELLED,
)


class MatchWorkflowError(Exception):
    """Base class for match request and match lifecycle failures."""


class MatchRequestError(MatchWorkflowError):
    """The request is invalid for the current state of the two users."""


class MatchRequestNotFound(MatchWorkflowError):
    pass


class MatchRequestForbidden(MatchWorkflowError):
    pass


def _pending_between(user_a_id: int, user_b_id: int):
    return MatchRequest.objects.filter(status=MatchRequest.Status.PENDING).filter(
        Q(sender_id=user_a_id, receiver_id=user_b_id) | Q(sender_id=user_b_id, receiver_id=user_a_id)
    )


@transaction.atomic
def send_match_request(sender: User, receiver_id: int, message: str = "") -> MatchRequest:
    if sender.id == receiver_id:
        raise MatchRequestError("Cannot send a match request to yourself.")
    sender.refresh_from_db(fields=["status", "is_active"])
    if not sender.can_match:
        raise MatchRequestForbidden("Your account cannot send match requests.")
    receiver = User.objects.filter(id=receiver_id).first()
    if receiver is None or not receiver.can_match:
        raise MatchRequestNotFound("User not found.")
    if is_blocked(sender.id, receiver.id):
        raise MatchRequestForbidden("You cannot send a request to this user.")
    if _pending_between(sender.id, receiver.id).exists():
        raise MatchRequestError("A pending request already exists between these users.")
    if Match.objects.active().between(sender.id, receiver.id).exists():
        raise MatchRequestError("These users are already matched.")

    request = MatchRequest.objects.create(sender=sender, receiver=receiver, message=message or "")
    notify(
        receiver,
        Notification.Type.MATCH_REQUEST,
        {"request_id": request.id, "sender_id": sender.id, "text": f"{sender.display_name} sent you a match request!"},
    )
    logger.info("Match request sent", extra={"request_id": request.id, "sender_id": sender.id})
    return request


def _create_or_reactivate_match(user_a_id: int, user_b_id: int, score: int) -> Match:
    first, second = ordered_pair(user_a_id, user_b_id)
    match, created = Match.objects.get_or_create(
        user_one_id=first,
        user_two_id=second,
        defaults={"compatibility_score": score},
    )
    if not created:
        match.compatibility_score = score
        match.status = Match.Status.ACTIVE
        match.matched_at = timezone.now()
        match.save(update_fields=["compatibility_score", "status", "matched_at", "updated_at"])
    return match


@transaction.atomic
def respond_to_match_request(
    request_id: int,
    actor: User,
    status: str,
    *,
    users: Optional[UserRepository] = None,
) -> MatchRequest:
    if status not in RESPONSE_STATUSES:
        raise MatchRequestError("Invalid status.")
    request = MatchRequest.objects.select_for_update().filter(id=request_id).first()
    if request is None:
        raise MatchRequestNotFound("Request not found.")
    if not request.involves(actor.id):
        raise MatchRequestForbidden("Unauthorized.")
    if status == MatchRequest.Status.CANCELLED and actor.id != request.sender_id:
        raise MatchRequestForbidden("Only the sender can cancel a request.")
    if status != MatchRequest.Status.CANCELLED and actor.id != request.receiver_id:
        raise MatchRequestForbidden("Only the receiver can accept or reject a request.")
    if request.status != MatchRequest.Status.PENDING:
        raise MatchRequestError(f"Request is already {request.status}.")
    if status == MatchRequest.Status.ACCEPTED:
        participants = User.objects.filter(id__in=(request.sender_id, request.receiver_id))
        if len([user for user in participants if user.can_match]) != 2:
            raise MatchRequestForbidden("One of these users can no longer be matched.")

    request.status = status
    request.save(update_fields=["status", "updated_at"])

    if status == MatchRequest.Status.ACCEPTED:
        users = users or DjangoUserRepository()
        score = score_users(request.sender_id, request.receiver_id, users=users)
        match = _create_or_reactivate_match(request.sender_id, request.receiver_id, score)
        payload = {"match_id": match.id, "compatibility_score": score}
        notify(request.sender, Notification.Type.MATCH_ACCEPTED, {**payload, "text": "Your match request was accepted!"})
        notify(request.receiver, Notification.Type.MATCH_ACCEPTED, {**payload, "text": "You accepted a match request!"})
        logger.info("Match created", extra={"match_id": match.id, "score": score})
    return request


def list_match_requests(user: User) -> List[MatchRequest]:
    return list(
        MatchRequest.objects.filter(Q(sender=user) | Q(receiver=user)).select_related("sender", "receiver")
    )


def list_active_matches(user: User) -> List[Match]:
    return list(Match.objects.active().for_user(user.id))


@transaction.atomic
def end_match(match_id: int, actor: User) -> Match:
    match = Match.objects.select_for_update().filter(id=match_id).first()
    if match is None:
        raise MatchRequestNotFound("Match not found.")
    if not match.involves(actor.id):
        raise MatchRequestForbidden("Unauthorized.")
    if match.status != Match.Status.INACTIVE:
        match.status = Match.Status.INACTIVE
        match.save(update_fields=["status", "updated_at"])
    return match
