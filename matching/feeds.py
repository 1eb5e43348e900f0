"""
Memoized seller opportunity feed.

Keeps the derived match views for one seller in sync with the target list the
caller holds.  The caller refreshes its target collection (for instance after
a realtime "new active target" event) and hands the new collection to
``SellerMatchFeed.update``; the views are recomputed only when the seller or
the collection actually changed.
"""

import logging

from .services import CategoryGroup, MatchResult, TargetMatchScoringService, record_value

logger = logging.getLogger(__name__)


class SellerMatchFeed:
    """
    Derived views over one seller's matching targets.

    - all_matches: score >= 30, best first, at most 100
    - top_matches: first 10 of all_matches
    - matches_by_category: all_matches grouped by target category
    """

    MIN_SCORE = 30
    LIMIT = 100
    TOP_N = 10

    # Seller attributes that feed into scoring; any change invalidates the cache.
    SELLER_KEY_FIELDS = ('id', 'role', 'city', 'primary_sector')

    def __init__(self, seller=None, targets=None, service: TargetMatchScoringService | None = None):
        self.service = service or TargetMatchScoringService()
        self._seller_key = None
        self._targets = None
        self._all_matches: list[MatchResult] = []
        self._matches_by_category: list[CategoryGroup] = []
        self._computed = False
        self.update(seller, targets if targets is not None else [])

    def _key_for(self, seller):
        if seller is None:
            return None
        return tuple(record_value(seller, name) for name in self.SELLER_KEY_FIELDS)

    def update(self, seller, targets) -> bool:
        """
        Point the feed at ``seller`` and ``targets``.

        Returns True when the views were recomputed, False when both the
        seller attributes and the target collection object are unchanged.
        """
        seller_key = self._key_for(seller)
        if self._computed and seller_key == self._seller_key and targets is self._targets:
            return False

        self._seller_key = seller_key
        # Holding the reference keeps the identity check meaningful.
        self._targets = targets

        if not self.service.is_seller(seller) or not targets:
            self._all_matches = []
        else:
            self._all_matches = self.service.find_matches_for_seller(
                seller,
                targets,
                min_score=self.MIN_SCORE,
                limit=self.LIMIT,
                sort_by='score',
            )
        self._matches_by_category = self.service.group_matches_by_category(self._all_matches)
        self._computed = True

        logger.debug("Seller feed recomputed: %d matches", len(self._all_matches))
        return True

    @property
    def all_matches(self) -> list[MatchResult]:
        return self._all_matches

    @property
    def top_matches(self) -> list[MatchResult]:
        return self._all_matches[:self.TOP_N]

    @property
    def matches_by_category(self) -> list[CategoryGroup]:
        return self._matches_by_category

    @property
    def total_matches(self) -> int:
        return len(self._all_matches)
