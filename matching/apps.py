from django.apps import AppConfig


class MatchingConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'matching'
    verbose_name = 'Seller Matching'

    def ready(self):
        from config import checks  # noqa: F401 (registers system checks)
