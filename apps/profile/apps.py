from django.apps import AppConfig


class ProfileConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.profile"
    verbose_name = "Profiles"

    def ready(self) -> None:
        import apps.profile.signals  # noqa: F401
