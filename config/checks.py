"""
Django system checks for required configuration.

Runs automatically on `manage.py runserver`, `migrate`, and `check`.
"""
import os

from django.conf import settings
from django.core.checks import Error, Warning, register


@register()
def check_required_settings(app_configs, **kwargs):
    errors = []

    # E001: DATABASE_URL required in production
    if not settings.DEBUG and not os.environ.get("DATABASE_URL"):
        errors.append(Error(
            "DATABASE_URL not set in production.",
            hint="Set DATABASE_URL for the hosted PostgreSQL connection.",
            id="mytarget.E001",
        ))

    # E002: Insecure SECRET_KEY in production
    if not settings.DEBUG and "insecure" in settings.SECRET_KEY:
        errors.append(Error(
            "SECRET_KEY contains 'insecure' — not safe for production.",
            hint="Generate a secure SECRET_KEY.",
            id="mytarget.E002",
        ))

    # E003: Matching thresholds must be valid scores
    config = getattr(settings, 'MATCHING_CONFIG', {})
    for key in ('notification_min_score', 'high_score_threshold'):
        value = config.get(key)
        if value is not None and not (isinstance(value, int) and 0 <= value <= 100):
            errors.append(Error(
                f"MATCHING_CONFIG['{key}'] must be an integer between 0 and 100.",
                hint=f"Got {value!r}.",
                id="mytarget.E003",
            ))

    # W001: Notification links need the public site URL
    if not getattr(settings, 'SITE_URL', ''):
        errors.append(Warning(
            "SITE_URL not configured.",
            hint="Set SITE_URL so notification emails link back to the target.",
            id="mytarget.W001",
        ))

    return errors
