"""
Django app configuration.
"""

from django.apps import AppConfig


class RecruitingConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "recruiting"
    verbose_name = "Esports Recruiting"

    def ready(self):
        """Wire profile-change subscribers once models are loaded."""
        from recruiting import events  # noqa: F401
