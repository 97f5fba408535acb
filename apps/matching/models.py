from __future__ import annotations

from typing import Tuple

from django.db import models
from django.db.models import Q

from apps.core.models import BaseModel


def ordered_pair(user_a_id: int, user_b_id: int) -> Tuple[int, int]:
    return (user_a_id, user_b_id) if user_a_id < user_b_id else (user_b_id, user_a_id)


class MatchRequest(BaseModel):
    class Status(models.TextChoices):
        PENDING = "pending", "Pending"
        ACCEPTED = "accepted", "Accepted"
        REJECTED = "rejected", "Rejected"
        CANCELLED = "cancelled", "Cancelled"

    sender = models.ForeignKey("users.User", on_delete=models.CASCADE, related_name="sent_match_requests")
    receiver = models.ForeignKey("users.User", on_delete=models.CASCADE, related_name="received_match_requests")
    status = models.CharField(max_length=16, choices=Status.choices, default=Status.PENDING)
    message = models.TextField(blank=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["sender", "status"], name="matching_req_sender_idx"),
            models.Index(fields=["receiver", "status"], name="matching_req_receiver_idx"),
        ]

    def __str__(self) -> str:  # pragma: no cover - debug helper
        return f"MatchRequest<{self.sender_id}->{self.receiver_id}:{self.status}>"

    def involves(self, user_id: int) -> bool:
        return user_id in (self.sender_id, self.receiver_id)


class MatchQuerySet(models.QuerySet):
    def active(self) -> "MatchQuerySet":
        return self.filter(status=Match.Status.ACTIVE)

    def for_user(self, user_id: int) -> "MatchQuerySet":
        return self.filter(Q(user_one_id=user_id) | Q(user_two_id=user_id))

    def between(self, user_a_id: int, user_b_id: int) -> "MatchQuerySet":
        first, second = ordered_pair(user_a_id, user_b_id)
        return self.filter(user_one_id=first, user_two_id=second)


class Match(BaseModel):
    """A confirmed pairing. ``user_one`` always holds the lower user id."""

    class Status(models.TextChoices):
        ACTIVE = "active", "Active"
        INACTIVE = "inactive", "Inactive"

    user_one = models.ForeignKey("users.User", on_delete=models.CASCADE, related_name="+")
    user_two = models.ForeignKey("users.User", on_delete=models.CASCADE, related_name="+")
    compatibility_score = models.PositiveSmallIntegerField(default=0)
    status = models.CharField(max_length=16, choices=Status.choices, default=Status.ACTIVE)
    matched_at = models.DateTimeField(auto_now_add=True)

    objects = MatchQuerySet.as_manager()

    class Meta:
        ordering = ["-matched_at", "-id"]
        unique_together = ("user_one", "user_two")

    def __str__(self) -> str:  # pragma: no cover - debug helper
        return f"Match<{self.user_one_id}:{self.user_two_id}:{self.status}>"

    def other_user_id(self, user_id: int) -> int:
        return self.user_two_id if self.user_one_id == user_id else self.user_one_id

    def involves(self, user_id: int) -> bool:
        return user_id in (self.user_one_id, self.user_two_id)
