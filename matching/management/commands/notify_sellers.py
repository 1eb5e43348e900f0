"""Email interested sellers about a newly published target."""

from django.core.exceptions import ValidationError
from django.core.management.base import BaseCommand, CommandError

from config.logging_filters import correlation_scope
from matching.models import SupabaseTarget
from matching.notifications import NewTargetNotifier


class Command(BaseCommand):
    help = "Notify sellers whose sector fits a new target."

    def add_arguments(self, parser):
        parser.add_argument('target_id', help='UUID of the target')
        parser.add_argument('--dry-run', action='store_true', help='Skip actual email sending.')

    def handle(self, *args, **options):
        try:
            target = SupabaseTarget.objects.filter(pk=options['target_id']).first()
        except ValidationError:
            raise CommandError(f"Invalid target id: {options['target_id']}")
        if target is None:
            raise CommandError(f"Target {options['target_id']} not found")

        with correlation_scope():
            try:
                result = NewTargetNotifier().notify(target, dry_run=options['dry_run'])
            except ValueError as e:
                raise CommandError(str(e))

        self.stdout.write(self.style.SUCCESS(
            f"Notified {result['notified']}/{result['total_sellers']} sellers "
            f"(failed: {result['failed']}, skipped: {result['skipped']})"
        ))
