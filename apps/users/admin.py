from __future__ import annotations

from django.contrib import admin

from apps.users.models import Block, Report, User
from apps.users import services as user_services


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ("id", "email", "status", "is_active", "is_staff", "last_login", "created_at")
    list_filter = ("status", "is_active", "is_staff")
    search_fields = ("email",)
    readonly_fields = ("last_login", "created_at", "updated_at")
    exclude = ("password",)
    actions = ("suspend_users", "reactivate_users")

    @admin.action(description="Suspend selected users")
    def suspend_users(self, request, queryset):
        user_services.suspend_users(queryset)

    @admin.action(description="Reactivate selected users")
    def reactivate_users(self, request, queryset):
        queryset.update(status=User.Status.ACTIVE)


@admin.register(Block)
class BlockAdmin(admin.ModelAdmin):
    list_display = ("user_id", "target_id", "created_at")
    search_fields = ("user__email", "target__email")
    readonly_fields = ("created_at", "updated_at")


@admin.register(Report)
class ReportAdmin(admin.ModelAdmin):
    list_display = ("id", "reporter_id", "reported_id", "status", "created_at")
    list_filter = ("status",)
    search_fields = ("reporter__email", "reported__email", "reason")
    readonly_fields = ("reporter", "reported", "reason", "created_at", "updated_at")
    actions = ("mark_under_review", "mark_resolved", "mark_dismissed")

    def save_model(self, request, obj, form, change):
        if change and "status" in form.changed_data:
            user_services.update_report_status(obj, obj.status, obj.admin_notes)
            return
        super().save_model(request, obj, form, change)

    def _set_status(self, queryset, status):
        for report in queryset.select_related("reporter"):
            user_services.update_report_status(report, status)

    @admin.action(description="Mark selected reports under review")
    def mark_under_review(self, request, queryset):
        self._set_status(queryset, Report.Status.UNDER_REVIEW)

    @admin.action(description="Resolve selected reports")
    def mark_resolved(self, request, queryset):
        self._set_status(queryset, Report.Status.RESOLVED)

    @admin.action(description="Dismiss selected reports")
    def mark_dismissed(self, request, queryset):
        self._set_status(queryset, Report.Status.DISMISSED)
