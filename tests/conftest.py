"""Shared test fixtures."""

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field

import pytest

from recipe_nutrition.adapters.fdc_client import FdcApiError, FdcClient
from recipe_nutrition.config import Settings
from recipe_nutrition.domain.nutrition import (
    NUTRIENT_IDS,
    FoodCandidate,
    FoodNutrient,
    SearchResponse,
)


def make_candidate(
    description: str,
    score: float = 100,
    calories: float | None = None,
    protein: float | None = None,
    fat: float | None = None,
    carbs: float | None = None,
    fdc_id: int = 1,
) -> FoodCandidate:
    """Build a candidate carrying only the macros that are given."""
    amounts = {
        "calories": calories,
        "protein": protein,
        "fat": fat,
        "carbs": carbs,
    }
    nutrients = tuple(
        FoodNutrient(nutrient_id=NUTRIENT_IDS[key], amount=amount)
        for key, amount in amounts.items()
        if amount is not None
    )
    return FoodCandidate(
        fdc_id=fdc_id, description=description, score=score, nutrients=nutrients
    )


# Per-100g rows keyed by a substring of the searched ingredient name.
CHICKEN_SALAD_DATABASE: dict[str, FoodCandidate] = {
    "chicken breast": make_candidate(
        "CHICKEN BREAST", 1236, 165, 20.4, 8.1, 1.06, fdc_id=2187885
    ),
    "mixed greens": make_candidate(
        "MIXED GREENS", 1293, 29, 2.35, 0, 5.88, fdc_id=2097148
    ),
    "cucumber": make_candidate(
        "Cucumber, peeled, raw", 420, 10, 0.59, 0.16, 2.16, fdc_id=169225
    ),
    "avocado": make_candidate(
        "Avocados, raw, California", 441, 167, 1.96, 15.4, 8.64, fdc_id=171706
    ),
    "olive oil": make_candidate(
        "OLIVE OIL", 1051, 429, 0, 42.9, 7.14, fdc_id=2073857
    ),
    "lemon juice": make_candidate(
        "Lemon juice, raw", 509, 22, 0.35, 0.24, 6.9, fdc_id=167747
    ),
}


@dataclass
class FakeMatcher:
    """Matcher backed by a fixed substring-keyed table."""

    database: dict[str, FoodCandidate] = field(
        default_factory=lambda: dict(CHICKEN_SALAD_DATABASE)
    )
    failures: dict[str, Exception] = field(default_factory=dict)
    queries: list[str] = field(default_factory=list)

    async def find_best_match(self, query: str) -> FoodCandidate | None:
        self.queries.append(query)
        for key, error in self.failures.items():
            if key in query:
                raise error
        for key, candidate in self.database.items():
            if key in query:
                return candidate
        return None


@dataclass
class FakeFdcClient(FdcClient):
    """Fake FDC client returning a canned search response."""

    response: SearchResponse = field(
        default_factory=lambda: SearchResponse(total_hits=0, foods=[])
    )
    error: FdcApiError | None = None
    search_calls: list[dict[str, object]] = field(default_factory=list)

    async def search_foods(
        self,
        query: str,
        *,
        data_types: list[str] | tuple[str, ...] | None = None,
        brand_owner: str | None = None,
        page_size: int | None = None,
        page_number: int | None = None,
    ) -> SearchResponse:
        self.search_calls.append(
            {"query": query, "data_types": data_types, "page_size": page_size}
        )
        if self.error is not None:
            raise self.error
        return self.response

    async def get_food(self, fdc_id: int) -> dict[str, object]:
        return {"fdcId": fdc_id, "foodNutrients": []}

    async def get_foods(self, fdc_ids: list[int]) -> list[dict[str, object]]:
        return [{"fdcId": fdc_id, "foodNutrients": []} for fdc_id in fdc_ids]


@dataclass
class FakeClock:
    """Manually advanced clock whose sleep moves time forward."""

    now: float = 1000.0
    sleeps: list[float] = field(default_factory=list)

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def settings() -> Settings:
    return Settings(fdc_api_key="fdc-key")


@pytest.fixture
def fake_matcher() -> FakeMatcher:
    return FakeMatcher()


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture(autouse=True)
def package_logger_state() -> Iterator[logging.Logger]:
    """Restore the package logger after tests that configure it."""
    logger = logging.getLogger("recipe_nutrition")
    handlers = list(logger.handlers)
    level = logger.level
    propagate = logger.propagate
    yield logger
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate
