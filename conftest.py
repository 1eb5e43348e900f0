"""
Root conftest for the MyTarget matching test suite.

Handles:
- Django settings selection (in-memory SQLite via config.test_settings)
- Unmanaged model (SupabaseProfile, SupabaseTarget) table creation via pre_migrate signal
- Shared fixtures for creating marketplace rows
"""

import os
import uuid
from datetime import timedelta

import pytest

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.test_settings')


# ---------------------------------------------------------------------------
# Hooks: create unmanaged model tables before migrations need them
# ---------------------------------------------------------------------------

_signal_connected = False


def pytest_configure(config):
    """Connect pre_migrate signal to create unmanaged model tables.

    SupabaseProfile and SupabaseTarget have managed=False because the hosted
    backend owns the real tables, so Django migrations never CREATE them.
    The test database still needs them: the pre_migrate handler builds both
    tables (with the current model schema) right before the matching app's
    migrations run.
    """
    global _signal_connected
    if _signal_connected:
        return

    from django.apps import apps
    from django.db.models.signals import pre_migrate

    def create_unmanaged_tables(sender, **kwargs):
        """Create tables for unmanaged models before matching migrations run."""
        if sender.label != 'matching':
            return

        from django.db import connection

        existing = set(connection.introspection.table_names())
        for model_name in ('SupabaseProfile', 'SupabaseTarget'):
            model = apps.get_model('matching', model_name)
            if model._meta.db_table in existing:
                continue
            old_managed = model._meta.managed
            model._meta.managed = True
            try:
                with connection.schema_editor() as editor:
                    editor.create_model(model)
            finally:
                model._meta.managed = old_managed

    pre_migrate.connect(create_unmanaged_tables)
    _signal_connected = True


# ---------------------------------------------------------------------------
# Sample data fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def make_profile(db):
    """Factory creating SupabaseProfile rows (sellers by default)."""
    from django.utils import timezone
    from matching.models import SupabaseProfile

    def _make(**overrides):
        fields = {
            'id': uuid.uuid4(),
            'email': 'seller@example.com',
            'full_name': 'Marco Rossi',
            'city': 'Milano',
            'role': SupabaseProfile.Role.SELLER,
            'primary_sector': 'Elettronica e Tecnologia',
            'notifications_enabled': True,
            'created_at': timezone.now(),
        }
        fields.update(overrides)
        return SupabaseProfile.objects.create(**fields)

    return _make


@pytest.fixture
def buyer(make_profile):
    return make_profile(
        email='buyer@example.com',
        full_name='Giulia Bianchi',
        city='Roma',
        role='buyer',
        primary_sector=None,
        notifications_enabled=False,
    )


@pytest.fixture
def make_target(buyer):
    """Factory creating active SupabaseTarget rows owned by ``buyer``.

    Each call is created one minute after the previous one, so newest-first
    ordering is deterministic.
    """
    from django.utils import timezone
    from matching.models import SupabaseTarget

    base = timezone.now() - timedelta(days=1)
    counter = {'n': 0}

    def _make(**overrides):
        counter['n'] += 1
        fields = {
            'id': uuid.uuid4(),
            'user': buyer,
            'title': f"Request {counter['n']}",
            'category': 'Elettronica',
            'location': 'Milano',
            'budget': 500,
            'status': SupabaseTarget.Status.ACTIVE,
            'created_at': base + timedelta(minutes=counter['n']),
        }
        fields.update(overrides)
        return SupabaseTarget.objects.create(**fields)

    return _make
