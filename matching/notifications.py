"""
New-target notifications for sellers.

When a buyer publishes a target, sellers whose sector fits the category (or
who have not declared a sector yet) and who opted into notifications get an
email.  Email delivery goes through Django's mail backend and is treated as
fire-and-forget: a failure for one seller is logged and counted, never raised.
"""

import logging

from django.conf import settings
from django.core.mail import send_mail
from django.db.models import Q

from .models import SupabaseProfile
from .services import TargetMatchScoringService, format_amount, record_value

logger = logging.getLogger(__name__)


class NewTargetNotifier:
    """Emails interested sellers about a freshly published target."""

    REQUIRED_FIELDS = ('id', 'title', 'category')

    def __init__(self, site_url: str | None = None, from_email: str | None = None):
        self.site_url = (site_url or getattr(settings, 'SITE_URL', '')).rstrip('/')
        self.from_email = from_email  # None -> DEFAULT_FROM_EMAIL
        self.scorer = TargetMatchScoringService()

    def validate_target(self, target) -> None:
        missing = [name for name in self.REQUIRED_FIELDS if not record_value(target, name)]
        if missing:
            raise ValueError(f"Target is missing required fields: {', '.join(missing)}")

    def interested_sellers(self, target):
        """Opted-in sellers whose sector equals the category or is unset."""
        category = record_value(target, 'category')
        return SupabaseProfile.objects.accepting_notifications().filter(
            Q(primary_sector=category) | Q(primary_sector__isnull=True)
        )

    def build_message(self, target, seller) -> tuple[str, str]:
        """Return (subject, body) for one seller."""
        title = record_value(target, 'title')
        budget = record_value(target, 'budget')
        if budget is not None:
            budget_text = f"Budget: €{format_amount(budget)}"
        else:
            budget_text = "Budget to be agreed"

        match = self.scorer.score_pair(seller, target)
        reason_lines = '\n'.join(f"  - {reason}" for reason in match['reasons'])

        subject = f"New request matching your profile: {title}"
        lines = [
            f"Hi {seller.full_name or 'there'},",
            "",
            "A buyer just published a request that fits your profile.",
            "",
            f"{title}",
            f"Category: {record_value(target, 'category')}",
            f"Location: {record_value(target, 'location') or '-'}",
            budget_text,
            "",
            f"Match score: {match['score']}/100",
        ]
        if reason_lines:
            lines.append(reason_lines)
        lines += [
            "",
            f"See the details and send your offer: {self.site_url}/?target={record_value(target, 'id')}",
            "",
            "You receive this email because new-request notifications are enabled on your profile.",
        ]
        return subject, '\n'.join(lines)

    def notify(self, target, dry_run: bool = False) -> dict:
        """
        Notify every interested seller about ``target``.

        Returns:
            dict with notified, failed, skipped (no email address) and
            total_sellers counts.
        """
        self.validate_target(target)

        sellers = list(self.interested_sellers(target))
        counts = {'notified': 0, 'failed': 0, 'skipped': 0, 'total_sellers': len(sellers)}

        if not sellers:
            logger.info("No sellers to notify for target %s", record_value(target, 'id'))
            return counts

        for seller in sellers:
            if not seller.email:
                counts['skipped'] += 1
                continue

            subject, body = self.build_message(target, seller)
            if dry_run:
                logger.info("[DRY RUN] Would notify %s about target %s", seller.email, record_value(target, 'id'))
                counts['notified'] += 1
                continue

            try:
                send_mail(
                    subject=subject,
                    message=body,
                    from_email=self.from_email,
                    recipient_list=[seller.email],
                    fail_silently=False,
                )
                counts['notified'] += 1
            except Exception:
                logger.exception("Failed to notify seller %s", seller.pk)
                counts['failed'] += 1

        logger.info(
            "Target %s: notified=%d failed=%d skipped=%d total=%d",
            record_value(target, 'id'),
            counts['notified'], counts['failed'], counts['skipped'], counts['total_sellers'],
        )
        return counts
