from __future__ import annotations

import logging
from typing import Any, Dict, Iterable

from django.utils import timezone

from apps.notifications.models import Notification
from apps.users.models import User

logger = logging.getLogger(__name__)


def notify(user: User, type: str, payload: Dict[str, Any] | None = None) -> Notification:
    notification = Notification.objects.create(user=user, type=type, payload=payload or {})
    logger.info("[in-app] %s for user %s", type, user.id)
    return notification


def notify_many(users: Iterable[User], type: str, payload: Dict[str, Any] | None = None) -> list[Notification]:
    return [notify(user, type, payload) for user in users]


def mark_read(notification: Notification) -> Notification:
    if notification.is_read:
        return notification
    notification.is_read = True
    notification.read_at = timezone.now()
    notification.save(update_fields=["is_read", "read_at", "updated_at"])
    return notification


def mark_all_read(user: User) -> int:
    now = timezone.now()
    return Notification.objects.filter(user=user, is_read=False).update(is_read=True, read_at=now, updated_at=now)


def unread_count(user: User) -> int:
    return Notification.objects.filter(user=user, is_read=False).count()
