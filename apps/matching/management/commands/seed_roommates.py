from __future__ import annotations

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from apps.profile.models import BasicPreference, LifestylePreference, Profile
from apps.users.models import User

SEED_PASSWORD = "password123"

PROFILE_DEFAULTS = {"bio": "", "personal_email": "", "phone": ""}
BASIC_DEFAULTS = {
    "gender_preference": "any",
    "age_min": 18,
    "age_max": 99,
    "budget_min": None,
    "budget_max": None,
    "location_preference": None,
}
LIFESTYLE_DEFAULTS = {
    "sleep_schedule": "normal",
    "cleanliness": "moderate",
    "guest_policy": "sometimes",
    "smoking": False,
    "pets": False,
    "noise_tolerance": "moderate",
    "study_habits": "flexible",
}

SEEDS = [
    {
        "email": "alex.seed@roommatch.test",
        "profile": {"age": 21, "gender": "male", "bio": "CS junior, quiet evenings."},
        "basic": {"gender_preference": "any", "age_min": 19, "age_max": 25, "budget_min": 400, "budget_max": 600},
        "lifestyle": {"sleep_schedule": "night_owl", "cleanliness": "very_clean", "guest_policy": "sometimes"},
    },
    {
        "email": "bea.seed@roommatch.test",
        "profile": {"age": 22, "gender": "female", "bio": "Biology major, early runs."},
        "basic": {"gender_preference": "any", "age_min": 20, "age_max": 24, "budget_min": 450, "budget_max": 650},
        "lifestyle": {"sleep_schedule": "night_owl", "cleanliness": "very_clean", "guest_policy": "often"},
    },
    {
        "email": "cam.seed@roommatch.test",
        "profile": {"age": 24, "gender": "other", "bio": "Grad student, has a cat."},
        "basic": {"gender_preference": "any", "age_min": 21, "age_max": 30, "budget_min": 500, "budget_max": 900},
        "lifestyle": {"sleep_schedule": "early_bird", "cleanliness": "moderate", "guest_policy": "rarely", "pets": True},
    },
    {
        "email": "dana.seed@roommatch.test",
        "profile": {"age": 19, "gender": "female", "bio": "First year, likes board games."},
        "basic": {"gender_preference": "female", "age_min": 18, "age_max": 22, "budget_min": 300, "budget_max": 450},
        "lifestyle": {"sleep_schedule": "normal", "cleanliness": "relaxed", "guest_policy": "often"},
    },
    {
        "email": "eli.seed@roommatch.test",
        "profile": {"age": 23, "gender": "male", "bio": "Engineering, weekend hiker."},
        "basic": {"gender_preference": "male", "age_min": 20, "age_max": 26},
        "lifestyle": {"sleep_schedule": "flexible", "cleanliness": "moderate", "guest_policy": "never", "smoking": True},
    },
]


class Command(BaseCommand):
    help = "Seed students with profiles and preferences for roommate search (dev only)."

    def add_arguments(self, parser) -> None:
        parser.add_argument("--force", action="store_true", help="Allow running outside DEBUG.")

    def handle(self, *args, **options):
        if not settings.DEBUG and not options.get("force"):
            raise CommandError("Refusing to seed outside DEBUG. Use --force to override.")

        created_count = 0
        updated_count = 0
        for seed in SEEDS:
            user = User.objects.filter(email=seed["email"]).first()
            if user:
                updated_count += 1
            else:
                user = User.objects.create_user(email=seed["email"], password=SEED_PASSWORD)
                created_count += 1
            Profile.objects.create(user=user, **{**PROFILE_DEFAULTS, **seed["profile"]})
            BasicPreference.objects.create(user=user, **{**BASIC_DEFAULTS, **seed["basic"]})
            LifestylePreference.objects.create(user=user, **{**LIFESTYLE_DEFAULTS, **seed["lifestyle"]})

        self.stdout.write(
            self.style.SUCCESS(f"Seeded roommate users. Created: {created_count}, Updated: {updated_count}.")
        )
