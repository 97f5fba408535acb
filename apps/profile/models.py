from __future__ import annotations

from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models

from apps.core.models import BaseModel

MIN_AGE = 18


class PerUserManager(models.Manager):
    """Manager for one-row-per-user models: ``create`` updates the existing row."""

    def create(self, **kwargs):  # type: ignore[override]
        user = kwargs.get("user")
        user_id = kwargs.get("user_id")
        if user is not None or user_id is not None:
            lookup = {"user": user} if user is not None else {"user_id": user_id}
            existing = self.filter(**lookup).first()
            if existing:
                for field_name, value in kwargs.items():
                    if field_name in {"user", "user_id"}:
                        continue
                    setattr(existing, field_name, value)
                existing.save()
                return existing
        return super().create(**kwargs)


class Gender(models.TextChoices):
    MALE = "male", "Male"
    FEMALE = "female", "Female"
    OTHER = "other", "Other"
    PREFER_NOT_TO_SAY = "prefer_not_to_say", "Prefer not to say"


class GenderPreference(models.TextChoices):
    ANY = "any", "Any"
    MALE = "male", "Male"
    FEMALE = "female", "Female"
    OTHER = "other", "Other"


class SleepSchedule(models.TextChoices):
    EARLY_BIRD = "early_bird", "Early bird"
    NORMAL = "normal", "Normal"
    NIGHT_OWL = "night_owl", "Night owl"
    FLEXIBLE = "flexible", "Flexible"


class Cleanliness(models.TextChoices):
    VERY_CLEAN = "very_clean", "Very clean"
    MODERATE = "moderate", "Moderate"
    RELAXED = "relaxed", "Relaxed"


class GuestPolicy(models.TextChoices):
    NEVER = "never", "Never"
    RARELY = "rarely", "Rarely"
    SOMETIMES = "sometimes", "Sometimes"
    OFTEN = "often", "Often"


class NoiseTolerance(models.TextChoices):
    QUIET = "quiet", "Quiet"
    MODERATE = "moderate", "Moderate"
    LOUD = "loud", "Loud"


class StudyHabits(models.TextChoices):
    LIBRARY = "library", "Library"
    HOME = "home", "Home"
    FLEXIBLE = "flexible", "Flexible"


class Profile(BaseModel):
    objects = PerUserManager()

    user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="profile")
    age = models.PositiveSmallIntegerField(validators=[MinValueValidator(MIN_AGE)])
    gender = models.CharField(max_length=32, choices=Gender.choices)
    personal_email = models.EmailField(blank=True)
    bio = models.TextField(blank=True)
    phone = models.CharField(max_length=32, blank=True)

    def clean(self) -> None:
        if self.age is not None and self.age < MIN_AGE:
            raise ValidationError({"age": ValidationError(f"Age must be at least {MIN_AGE}.")})

    def __str__(self) -> str:  # pragma: no cover - debug helper
        return f"Profile<{self.user_id}>"


class BasicPreference(BaseModel):
    objects = PerUserManager()

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="basic_preference"
    )
    gender_preference = models.CharField(
        max_length=16, choices=GenderPreference.choices, default=GenderPreference.ANY
    )
    age_min = models.PositiveSmallIntegerField(default=MIN_AGE)
    age_max = models.PositiveSmallIntegerField(default=99)
    budget_min = models.PositiveIntegerField(null=True, blank=True)
    budget_max = models.PositiveIntegerField(null=True, blank=True)
    location_preference = models.CharField(max_length=128, blank=True, null=True)

    def clean(self) -> None:
        errors: dict[str, ValidationError] = {}
        if self.age_min is not None and self.age_min < MIN_AGE:
            errors["age_min"] = ValidationError(f"Minimum age must be at least {MIN_AGE}.")
        if self.age_min is not None and self.age_max is not None and self.age_min > self.age_max:
            errors["age_max"] = ValidationError("Maximum age must not be below minimum age.")
        if self.budget_min is not None and self.budget_max is not None and self.budget_min > self.budget_max:
            errors["budget_max"] = ValidationError("Maximum budget must not be below minimum budget.")
        if errors:
            raise ValidationError(errors)

    def __str__(self) -> str:  # pragma: no cover - debug helper
        return f"BasicPreference<{self.user_id}>"


class LifestylePreference(BaseModel):
    objects = PerUserManager()

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="lifestyle_preference"
    )
    sleep_schedule = models.CharField(max_length=16, choices=SleepSchedule.choices, default=SleepSchedule.NORMAL)
    cleanliness = models.CharField(max_length=16, choices=Cleanliness.choices, default=Cleanliness.MODERATE)
    guest_policy = models.CharField(max_length=16, choices=GuestPolicy.choices, default=GuestPolicy.SOMETIMES)
    smoking = models.BooleanField(default=False)
    pets = models.BooleanField(default=False)
    # Collected for display; not part of the compatibility score.
    noise_tolerance = models.CharField(
        max_length=16, choices=NoiseTolerance.choices, default=NoiseTolerance.MODERATE
    )
    study_habits = models.CharField(max_length=16, choices=StudyHabits.choices, default=StudyHabits.FLEXIBLE)

    def __str__(self) -> str:  # pragma: no cover - debug helper
        return f"LifestylePreference<{self.user_id}>"
