from __future__ import annotations

from django.contrib import admin

from apps.profile.models import BasicPreference, LifestylePreference, Profile


@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    list_display = ("user_id", "age", "gender", "updated_at")
    list_filter = ("gender",)
    search_fields = ("user__email",)
    readonly_fields = ("created_at", "updated_at")


@admin.register(BasicPreference)
class BasicPreferenceAdmin(admin.ModelAdmin):
    list_display = ("user_id", "gender_preference", "age_min", "age_max", "budget_min", "budget_max")
    list_filter = ("gender_preference",)
    search_fields = ("user__email", "location_preference")


@admin.register(LifestylePreference)
class LifestylePreferenceAdmin(admin.ModelAdmin):
    list_display = ("user_id", "sleep_schedule", "cleanliness", "guest_policy", "smoking", "pets")
    list_filter = ("sleep_schedule", "cleanliness", "guest_policy", "smoking", "pets")
    search_fields = ("user__email",)
