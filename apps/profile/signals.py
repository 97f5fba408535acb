from __future__ import annotations

from django.conf import settings
from django.db import transaction
from django.db.models.signals import post_save
from django.dispatch import receiver

from .models import BasicPreference, LifestylePreference


@receiver(post_save, sender=BasicPreference)
@receiver(post_save, sender=LifestylePreference)
def queue_match_score_refresh(sender, instance, created: bool, **kwargs) -> None:
    if not getattr(settings, "MATCH_REFRESH_ON_PREFERENCE_CHANGE", True):
        return
    from apps.matching.tasks import refresh_match_scores_task

    user_id = instance.user_id
    transaction.on_commit(lambda: refresh_match_scores_task.delay(user_id))
