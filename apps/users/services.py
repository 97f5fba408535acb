from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Set

from django.db import transaction
from django.db.models import Q

from apps.notifications.models import Notification
from apps.notifications.services import notify, notify_many
from apps.users.models import Block, Report, User

logger = logging.getLogger(__name__)


def is_blocked(user_a_id: int, user_b_id: int) -> bool:
    """True when either user has blocked the other."""
    return Block.objects.filter(
        Q(user_id=user_a_id, target_id=user_b_id) | Q(user_id=user_b_id, target_id=user_a_id)
    ).exists()


def blocked_user_ids(user_id: int) -> Set[int]:
    rows = Block.objects.filter(Q(user_id=user_id) | Q(target_id=user_id)).values_list("user_id", "target_id")
    ids: Set[int] = set()
    for blocker_id, target_id in rows:
        ids.add(target_id if blocker_id == user_id else blocker_id)
    return ids


@transaction.atomic
def block_user(user: User, target_id: int) -> Block:
    if user.id == target_id:
        raise ValueError("Users cannot block themselves.")
    target = User.objects.get(id=target_id)
    block, created = Block.objects.get_or_create(user=user, target=target)
    if created:
        from apps.matching.models import MatchRequest

        cancelled = (
            MatchRequest.objects.filter(status=MatchRequest.Status.PENDING)
            .filter(
                Q(sender_id=user.id, receiver_id=target.id) | Q(sender_id=target.id, receiver_id=user.id)
            )
            .update(status=MatchRequest.Status.CANCELLED)
        )
        logger.info(
            "user blocked",
            extra={"user_id": user.id, "target_id": target.id, "cancelled_requests": cancelled},
        )
    return block


def unblock_user(user: User, target_id: int) -> bool:
    deleted, _ = Block.objects.filter(user=user, target_id=target_id).delete()
    return deleted > 0


SUSPENSION_TEXT = "Your account has been suspended. Please contact support for more information."

REPORT_UPDATE_TEXT = {
    Report.Status.UNDER_REVIEW.value: "Your report is currently under review by our admin team.",
    Report.Status.RESOLVED.value: (
        "Your report has been resolved by an administrator. "
        "Thank you for helping keep our community safe."
    ),
    Report.Status.DISMISSED.value: (
        "Your report has been reviewed. After investigation, no action was required at this time."
    ),
}


def suspend_users(users: Iterable[User]) -> List[User]:
    """Suspend the given users and send each newly suspended one a system notice."""
    suspended = [user for user in users if user.status != User.Status.SUSPENDED]
    if not suspended:
        return []
    User.objects.filter(id__in=[user.id for user in suspended]).update(status=User.Status.SUSPENDED)
    for user in suspended:
        user.status = User.Status.SUSPENDED
    notify_many(suspended, Notification.Type.SYSTEM, {"text": SUSPENSION_TEXT})
    logger.info("users suspended", extra={"user_ids": [user.id for user in suspended]})
    return suspended


def report_user(reporter: User, reported_id: int, reason: str) -> Report:
    if reporter.id == reported_id:
        raise ValueError("Users cannot report themselves.")
    reason = (reason or "").strip()
    if not reason:
        raise ValueError("A reason is required.")
    reported = User.objects.get(id=reported_id)
    report = Report.objects.create(reporter=reporter, reported=reported, reason=reason)
    logger.info("user reported", extra={"report_id": report.id, "reported_id": reported.id})
    return report


def update_report_status(report: Report, status: str, admin_notes: Optional[str] = None) -> Report:
    if status not in Report.Status.values:
        raise ValueError(f"Invalid report status: {status}")
    report.status = status
    update_fields = ["status", "updated_at"]
    if admin_notes is not None:
        report.admin_notes = admin_notes
        update_fields.append("admin_notes")
    report.save(update_fields=update_fields)

    text = REPORT_UPDATE_TEXT.get(str(status))
    if text and report.reporter_id:
        notify(report.reporter, Notification.Type.REPORT_UPDATE, {"report_id": report.id, "status": status, "text": text})
    return report
