from __future__ import annotations

from django.contrib import admin

from apps.matching.models import Match, MatchRequest


@admin.register(MatchRequest)
class MatchRequestAdmin(admin.ModelAdmin):
    list_display = ("id", "sender_id", "receiver_id", "status", "created_at")
    list_filter = ("status",)
    search_fields = ("sender__email", "receiver__email")
    readonly_fields = ("created_at", "updated_at")


@admin.register(Match)
class MatchAdmin(admin.ModelAdmin):
    list_display = ("id", "user_one_id", "user_two_id", "compatibility_score", "status", "matched_at")
    list_filter = ("status",)
    search_fields = ("user_one__email", "user_two__email")
    readonly_fields = ("matched_at", "created_at", "updated_at")
    actions = ("deactivate_matches",)

    @admin.action(description="Mark selected matches inactive")
    def deactivate_matches(self, request, queryset):
        queryset.update(status=Match.Status.INACTIVE)
