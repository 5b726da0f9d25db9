"""Best-match lookup of ingredients in FoodData Central."""

import logging
from dataclasses import dataclass

from recipe_nutrition.adapters.fdc_client import FdcApiError, FdcClient
from recipe_nutrition.domain.nutrition import FoodCandidate
from recipe_nutrition.services.cache import Cache
from recipe_nutrition.services.ranking import rank_candidates

DEFAULT_DATA_TYPES = ("Foundation", "SR Legacy", "Branded")

_logger = logging.getLogger(__name__)


@dataclass
class FoodMatcher:
    """Searches FDC for an ingredient and picks the best ranked candidate.

    A 404 from the API counts as no match. Every other FdcApiError reaches
    the caller unchanged.
    """

    client: FdcClient
    data_types: tuple[str, ...] = DEFAULT_DATA_TYPES
    page_size: int = 10
    debug: bool = False
    cache: Cache | None = None
    cache_ttl_seconds: int = 3600

    async def find_best_match(self, query: str) -> FoodCandidate | None:
        """Return the highest ranked candidate for query, or None."""
        cache_key = f"fdc:match:{query.lower()}"
        if self.cache is not None:
            cached = self.cache.get(cache_key)
            if isinstance(cached, FoodCandidate):
                return cached

        try:
            response = await self.client.search_foods(
                query, data_types=self.data_types, page_size=self.page_size
            )
        except FdcApiError as exc:
            if exc.is_not_found:
                if self.debug:
                    _logger.info("FDC search for %r: not found", query)
                return None
            raise

        if self.debug:
            _logger.info("FDC search for %r: %s results", query, response.total_hits)
            if response.foods:
                top = response.foods[0]
                _logger.info("Top result: %r (score: %s)", top.description, top.score)

        if not response.foods:
            return None

        ranked = rank_candidates(response.foods, query)
        best = ranked[0]
        if self.debug and best is not response.foods[0]:
            _logger.info(
                "After ranking: %r (was: %r)",
                best.description,
                response.foods[0].description,
            )
        if self.cache is not None:
            self.cache.set(cache_key, best, ttl_seconds=self.cache_ttl_seconds)
        return best
