"""
Print the ranked opportunities for one seller.

Loads the seller profile and the most recent active targets, runs the matching
engine and prints one line per match (or JSON).

Usage:
    python manage.py match_seller <seller_id>
    python manage.py match_seller <seller_id> --sort-by date --limit 10
    python manage.py match_seller <seller_id> --min-score 50 --by-category
    python manage.py match_seller <seller_id> --json
"""

import json

from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.management.base import BaseCommand, CommandError

from config.logging_filters import correlation_scope
from matching.models import SupabaseProfile, SupabaseTarget
from matching.services import TargetMatchScoringService


class Command(BaseCommand):
    help = 'Show ranked buyer targets for a seller'

    def add_arguments(self, parser):
        parser.add_argument('seller_id', help='UUID of the seller profile')
        parser.add_argument(
            '--sort-by', choices=TargetMatchScoringService.SORT_KEYS, default='score',
            help='Sort key (default: score)',
        )
        parser.add_argument(
            '--min-score', type=int, default=TargetMatchScoringService.DEFAULT_MIN_SCORE,
            help='Minimum match score (default: 20)',
        )
        parser.add_argument(
            '--limit', type=int, default=TargetMatchScoringService.DEFAULT_LIMIT,
            help='Maximum number of matches (default: 50)',
        )
        parser.add_argument(
            '--by-category', action='store_true',
            help='Print a per-category summary instead of individual matches',
        )
        parser.add_argument(
            '--json', action='store_true', dest='as_json',
            help='Emit JSON instead of text',
        )

    def handle(self, *args, **options):
        with correlation_scope():
            self._handle(options)

    def _handle(self, options):
        try:
            seller = SupabaseProfile.objects.filter(pk=options['seller_id']).first()
        except ValidationError:
            raise CommandError(f"Invalid seller id: {options['seller_id']}")
        if seller is None:
            raise CommandError(f"Seller {options['seller_id']} not found")
        if not seller.is_seller:
            self.stderr.write(self.style.WARNING(
                f"Profile {seller.pk} has role '{seller.role}', not seller: no matches"
            ))

        page_size = getattr(settings, 'MATCHING_CONFIG', {}).get('opportunity_page_size', 100)
        targets = list(SupabaseTarget.objects.recent_active(page_size))

        service = TargetMatchScoringService()
        matches = service.find_matches_for_seller(
            seller,
            targets,
            min_score=options['min_score'],
            limit=options['limit'],
            sort_by=options['sort_by'],
        )

        if options['by_category']:
            groups = service.group_matches_by_category(matches)
            if options['as_json']:
                self.stdout.write(json.dumps([
                    {'category': g.category, 'avg_score': round(g.avg_score, 2), 'count': g.count}
                    for g in groups
                ], indent=2))
                return
            for g in groups:
                self.stdout.write(f"{g.category:<30} avg {g.avg_score:5.1f}  ({g.count})")
            return

        if options['as_json']:
            self.stdout.write(json.dumps([
                {
                    'target_id': str(m.target.id),
                    'title': m.target.title,
                    'score': m.score,
                    'reasons': m.reasons,
                }
                for m in matches
            ], indent=2, ensure_ascii=False))
            return

        self.stdout.write(f"Scanned {len(targets)} active targets for {seller}")
        for m in matches:
            self.stdout.write(f"{m.score:>3}  {m.target.title}  [{'; '.join(m.reasons)}]")
        self.stdout.write(self.style.SUCCESS(f"{len(matches)} matches"))
