"""
JSON endpoints for the seller opportunity panel and health checks.

/health/                                      - Liveness check
/health/ready/                                - Readiness check (DB, tables)
/matching/sellers/<uuid>/opportunities/       - Ranked targets for a seller
"""

import logging

from django.conf import settings
from django.db import connection
from django.http import JsonResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt

from .models import SupabaseProfile, SupabaseTarget
from .services import TargetMatchScoringService

logger = logging.getLogger(__name__)


def serialize_target(target) -> dict:
    return {
        'id': str(target.id),
        'title': target.title,
        'category': target.category,
        'location': target.location,
        'budget': float(target.budget) if target.budget is not None else None,
        'created_at': target.created_at.isoformat() if target.created_at else None,
    }


@method_decorator(csrf_exempt, name='dispatch')
class HealthCheckView(View):
    """Liveness check: always returns 200 if Django is running."""

    def get(self, request):
        return JsonResponse({"status": "ok"})


@method_decorator(csrf_exempt, name='dispatch')
class ReadinessCheckView(View):
    """Readiness check: checks the database and the marketplace tables."""

    def get(self, request):
        checks = {}

        try:
            with connection.cursor() as cursor:
                cursor.execute("SELECT 1")
            checks["database"] = "ok"
        except Exception as e:
            checks["database"] = f"error: {e}"

        try:
            checks["seller_count"] = SupabaseProfile.objects.sellers().count()
            checks["active_target_count"] = SupabaseTarget.objects.active().count()
        except Exception as e:
            checks["seller_count"] = f"error: {e}"

        checks["site_url"] = bool(getattr(settings, 'SITE_URL', ''))
        checks["supabase_url"] = bool(getattr(settings, 'SUPABASE_URL', ''))

        all_ok = (
            checks["database"] == "ok"
            and isinstance(checks.get("seller_count"), int)
        )

        return JsonResponse(
            {"status": "ready" if all_ok else "degraded", "checks": checks},
            status=200 if all_ok else 503,
        )


class SellerOpportunitiesView(View):
    """
    Ranked opportunities for one seller.

    Query params:
        sort_by: score (default), date or budget
        min_score: minimum match score, 0-100 (default MATCHING_CONFIG["notification_min_score"], 50)
        limit: maximum number of matches (default 100)

    A buyer profile gets an empty list rather than an error.
    """

    DEFAULT_MIN_SCORE = 50
    DEFAULT_LIMIT = 100

    def _int_param(self, request, name, default, low, high):
        raw = request.GET.get(name)
        if raw in (None, ''):
            return default
        try:
            value = int(raw)
        except ValueError:
            raise ValueError(f"{name} must be an integer")
        if not low <= value <= high:
            raise ValueError(f"{name} must be between {low} and {high}")
        return value

    def get(self, request, seller_id):
        config = getattr(settings, 'MATCHING_CONFIG', {})
        page_size = config.get('opportunity_page_size', 100)
        high_score = config.get('high_score_threshold', 80)
        default_min_score = config.get('notification_min_score', self.DEFAULT_MIN_SCORE)

        sort_by = request.GET.get('sort_by', 'score')
        if sort_by not in TargetMatchScoringService.SORT_KEYS:
            return JsonResponse(
                {"error": f"sort_by must be one of {', '.join(TargetMatchScoringService.SORT_KEYS)}"},
                status=400,
            )
        try:
            min_score = self._int_param(request, 'min_score', default_min_score, 0, 100)
            limit = self._int_param(request, 'limit', self.DEFAULT_LIMIT, 1, page_size)
        except ValueError as e:
            return JsonResponse({"error": str(e)}, status=400)

        seller = SupabaseProfile.objects.filter(pk=seller_id).first()
        if seller is None:
            return JsonResponse({"error": "Seller not found"}, status=404)

        service = TargetMatchScoringService()
        targets = list(SupabaseTarget.objects.recent_active(page_size))
        matches = service.find_matches_for_seller(
            seller, targets, min_score=min_score, limit=limit, sort_by=sort_by,
        )
        groups = service.group_matches_by_category(matches)

        logger.info(
            "Opportunities for seller %s: %d matches from %d targets",
            seller_id, len(matches), len(targets),
        )

        return JsonResponse({
            'seller_id': str(seller.id),
            'total_matches': len(matches),
            'high_score_matches': sum(1 for m in matches if m.score > high_score),
            'matches': [
                {
                    'target': serialize_target(m.target),
                    'score': m.score,
                    'reasons': m.reasons,
                }
                for m in matches
            ],
            'by_category': [
                {
                    'category': g.category,
                    'avg_score': round(g.avg_score, 2),
                    'count': g.count,
                }
                for g in groups
            ],
        })
