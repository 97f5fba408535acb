from __future__ import annotations

import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Profile",
            fields=[
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("id", models.BigAutoField(primary_key=True, serialize=False)),
                ("age", models.PositiveSmallIntegerField(validators=[django.core.validators.MinValueValidator(18)])),
                (
                    "gender",
                    models.CharField(
                        choices=[
                            ("male", "Male"),
                            ("female", "Female"),
                            ("other", "Other"),
                            ("prefer_not_to_say", "Prefer not to say"),
                        ],
                        max_length=32,
                    ),
                ),
                ("personal_email", models.EmailField(blank=True, max_length=254)),
                ("bio", models.TextField(blank=True)),
                ("phone", models.CharField(blank=True, max_length=32)),
                (
                    "user",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="profile",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "abstract": False,
            },
        ),
        migrations.CreateModel(
            name="BasicPreference",
            fields=[
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("id", models.BigAutoField(primary_key=True, serialize=False)),
                (
                    "gender_preference",
                    models.CharField(
                        choices=[("any", "Any"), ("male", "Male"), ("female", "Female"), ("other", "Other")],
                        default="any",
                        max_length=16,
                    ),
                ),
                ("age_min", models.PositiveSmallIntegerField(default=18)),
                ("age_max", models.PositiveSmallIntegerField(default=99)),
                ("budget_min", models.PositiveIntegerField(blank=True, null=True)),
                ("budget_max", models.PositiveIntegerField(blank=True, null=True)),
                ("location_preference", models.CharField(blank=True, max_length=128, null=True)),
                (
                    "user",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="basic_preference",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "abstract": False,
            },
        ),
        migrations.CreateModel(
            name="LifestylePreference",
            fields=[
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("id", models.BigAutoField(primary_key=True, serialize=False)),
                (
                    "sleep_schedule",
                    models.CharField(
                        choices=[
                            ("early_bird", "Early bird"),
                            ("normal", "Normal"),
                            ("night_owl", "Night owl"),
                            ("flexible", "Flexible"),
                        ],
                        default="normal",
                        max_length=16,
                    ),
                ),
                (
                    "cleanliness",
                    models.CharField(
                        choices=[("very_clean", "Very clean"), ("moderate", "Moderate"), ("relaxed", "Relaxed")],
                        default="moderate",
                        max_length=16,
                    ),
                ),
                (
                    "guest_policy",
                    models.CharField(
                        choices=[
                            ("never", "Never"),
                            ("rarely", "Rarely"),
                            ("sometimes", "Sometimes"),
                            ("often", "Often"),
                        ],
                        default="sometimes",
                        max_length=16,
                    ),
                ),
                ("smoking", models.BooleanField(default=False)),
                ("pets", models.BooleanField(default=False)),
                (
                    "noise_tolerance",
                    models.CharField(
                        choices=[("quiet", "Quiet"), ("moderate", "Moderate"), ("loud", "Loud")],
                        default="moderate",
                        max_length=16,
                    ),
                ),
                (
                    "study_habits",
                    models.CharField(
                        choices=[("library", "Library"), ("home", "Home"), ("flexible", "Flexible")],
                        default="flexible",
                        max_length=16,
                    ),
                ),
                (
                    "user",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="lifestyle_preference",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "abstract": False,
            },
        ),
    ]
