"""
Target Matching Service for the seller opportunity feed.

Scores how relevant a buyer target ("what I'm looking for") is to a seller and
turns the per-pair scores into the ranked and grouped views used by the
seller dashboard, the new-opportunity panel and notification emails.

Scoring (additive, fixed weights, 100 max):
- Category (50): target category compatible with the seller's sector
- Geography (30 or 20): same region, otherwise same locality
- Budget (20): the buyer stated a budget

The service is pure: it reads seller and target records (ORM rows, plain
objects or dicts) and never writes to them.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, time
from decimal import Decimal
from typing import Any, Iterable, Optional
import logging
import math

from django.utils.dateparse import parse_date, parse_datetime

from .geography import locations_overlap, regions_match
from .sectors import sector_matches

logger = logging.getLogger('matching.services')


@dataclass
class MatchResult:
    """A buyer target scored for one seller."""
    target: Any
    score: int  # 0-100
    reasons: list[str] = field(default_factory=list)


@dataclass
class SellerMatch:
    """A seller scored against one buyer target."""
    seller: Any
    score: int
    reasons: list[str] = field(default_factory=list)


@dataclass
class CategoryGroup:
    """Matches sharing a target category, with their mean score."""
    category: str
    matches: list[MatchResult]
    avg_score: float
    count: int


def record_value(record, name: str, default=None):
    """Read ``name`` from a mapping or an attribute-bearing record."""
    if isinstance(record, Mapping):
        return record.get(name, default)
    return getattr(record, name, default)


def format_amount(amount) -> str:
    """Thousands-grouped amount, without decimals for whole values."""
    if isinstance(amount, bool) or not isinstance(amount, (int, float, Decimal)):
        return str(amount)
    finite = amount.is_finite() if isinstance(amount, Decimal) else math.isfinite(amount)
    if not finite:
        return str(amount)
    if amount == int(amount):
        return f"{int(amount):,}"
    return f"{amount:,}"


def _created_timestamp(value) -> float:
    """Sortable timestamp for created_at; unparseable values sort last."""
    if isinstance(value, str):
        try:
            parsed = parse_datetime(value)
            if parsed is None:
                day = parse_date(value)
                parsed = datetime.combine(day, time.min) if day else None
        except ValueError:
            parsed = None
        value = parsed
    if isinstance(value, datetime):
        return value.timestamp()
    return float('-inf')


class TargetMatchScoringService:
    """
    Scores seller ↔ target pairs and ranks the results.

    Only profiles whose role is ``seller`` are ever scored as sellers; a buyer
    profile passed by mistake gets an empty result instead of bogus matches.
    """

    CATEGORY_POINTS = 50
    REGION_POINTS = 30
    LOCALITY_POINTS = 20
    BUDGET_POINTS = 20
    MAX_SCORE = 100

    SELLER_ROLE = 'seller'

    DEFAULT_MIN_SCORE = 20
    DEFAULT_LIMIT = 50
    SELLER_SEARCH_MIN_SCORE = 20

    SORT_KEYS = ('score', 'date', 'budget')

    def is_seller(self, profile) -> bool:
        """True when ``profile`` exists and carries the seller role."""
        return profile is not None and record_value(profile, 'role') == self.SELLER_ROLE

    def score_pair(self, seller, target) -> dict:
        """
        Score one target for one seller.

        Returns:
            dict with ``score`` (int, 0-100) and ``reasons`` (list of strings
            in category → geography → budget order).
        """
        score = 0
        reasons = []

        category = record_value(target, 'category')
        if sector_matches(category, record_value(seller, 'primary_sector')):
            score += self.CATEGORY_POINTS
            reasons.append(f"Category match: {category}")

        city = record_value(seller, 'city')
        location = record_value(target, 'location')
        if regions_match(city, location):
            score += self.REGION_POINTS
            reasons.append("Same geographic region")
        elif locations_overlap(city, location):
            score += self.LOCALITY_POINTS
            reasons.append("Same locality")

        # No seller price range exists yet, so any stated budget earns full points.
        budget = record_value(target, 'budget')
        if budget is not None:
            score += self.BUDGET_POINTS
            reasons.append(f"Budget available: €{format_amount(budget)}")

        return {
            'score': min(score, self.MAX_SCORE),
            'reasons': reasons,
        }

    def find_matches_for_seller(
        self,
        seller,
        targets: Iterable,
        min_score: int = DEFAULT_MIN_SCORE,
        limit: Optional[int] = DEFAULT_LIMIT,
        sort_by: str = 'score',
    ) -> list[MatchResult]:
        """
        Rank targets for a seller.

        Targets scoring below ``min_score`` are dropped, the rest are sorted by
        ``sort_by`` (score, date or budget, all descending; ties keep input
        order) and truncated to ``limit``.  ``limit=None`` keeps everything.

        The caller is expected to pass active targets only; status is not
        re-checked here.
        """
        if not self.is_seller(seller):
            if seller is not None:
                logger.debug(
                    "Refusing to match profile with role=%r as a seller",
                    record_value(seller, 'role'),
                )
            return []

        matches = []
        scanned = 0
        for target in targets:
            scanned += 1
            result = self.score_pair(seller, target)
            if result['score'] >= min_score:
                matches.append(MatchResult(target, result['score'], result['reasons']))

        matches.sort(key=self._sort_key(sort_by), reverse=True)
        if limit is not None:
            matches = matches[:limit]

        logger.debug(
            "Matched %d of %d targets (min_score=%s, sort_by=%s, limit=%s)",
            len(matches), scanned, min_score, sort_by, limit,
        )
        return matches

    def find_sellers_for_target(self, target, sellers: Iterable) -> list[SellerMatch]:
        """Every seller scoring at least 20 for ``target``, best first."""
        matches = []
        for seller in sellers:
            if not self.is_seller(seller):
                continue
            result = self.score_pair(seller, target)
            if result['score'] >= self.SELLER_SEARCH_MIN_SCORE:
                matches.append(SellerMatch(seller, result['score'], result['reasons']))

        matches.sort(key=lambda m: m.score, reverse=True)
        return matches

    @staticmethod
    def group_matches_by_category(matches: Iterable[MatchResult]) -> list[CategoryGroup]:
        """
        Partition matches by target category.

        Groups are ordered by descending average score; groups with equal
        averages keep the order in which their category first appeared.
        """
        by_category: dict[str, list[MatchResult]] = {}
        for match in matches:
            category = record_value(match.target, 'category')
            by_category.setdefault(category, []).append(match)

        groups = [
            CategoryGroup(
                category=category,
                matches=group,
                avg_score=sum(m.score for m in group) / len(group),
                count=len(group),
            )
            for category, group in by_category.items()
        ]
        groups.sort(key=lambda g: g.avg_score, reverse=True)
        return groups

    def _sort_key(self, sort_by: str):
        # list.sort is stable with reverse=True, so equal keys keep input order
        if sort_by == 'date':
            return lambda m: _created_timestamp(record_value(m.target, 'created_at'))
        if sort_by == 'budget':
            return lambda m: record_value(m.target, 'budget') or 0
        if sort_by != 'score':
            logger.warning("Unknown sort_by %r, falling back to score", sort_by)
        return lambda m: m.score
