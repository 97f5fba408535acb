from __future__ import annotations

from django.contrib import admin
from django.urls import path

admin.site.site_header = "Roommatch moderation"
admin.site.site_title = "Roommatch admin"

urlpatterns = [
    path("admin/", admin.site.urls),
]
