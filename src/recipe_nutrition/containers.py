"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from recipe_nutrition.adapters.fdc_client import HttpxFdcClient
from recipe_nutrition.adapters.throttle import RequestThrottle
from recipe_nutrition.app_logging import configure_logging
from recipe_nutrition.config import Settings, parse_data_types
from recipe_nutrition.services.cache import InMemoryCache
from recipe_nutrition.services.matching import DEFAULT_DATA_TYPES, FoodMatcher
from recipe_nutrition.services.nutrition import NutritionService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    fdc_client: HttpxFdcClient
    food_matcher: FoodMatcher
    nutrition_service: NutritionService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    configure_logging(debug=resolved_settings.debug_nutrition)
    throttle = RequestThrottle(
        min_interval_seconds=resolved_settings.fdc_min_interval_seconds
    )
    fdc_client = HttpxFdcClient.create(
        api_key=resolved_settings.fdc_api_key,
        base_url=resolved_settings.fdc_base_url,
        throttle=throttle,
        timeout_seconds=resolved_settings.fdc_timeout_seconds,
    )
    cache_ttl = resolved_settings.match_cache_ttl_seconds
    food_matcher = FoodMatcher(
        client=fdc_client,
        data_types=parse_data_types(resolved_settings.fdc_data_types)
        or DEFAULT_DATA_TYPES,
        page_size=resolved_settings.fdc_page_size,
        debug=resolved_settings.debug_nutrition,
        cache=InMemoryCache() if cache_ttl else None,
        cache_ttl_seconds=cache_ttl or 0,
    )
    nutrition_service = NutritionService(
        matcher=food_matcher,
        batch_size=resolved_settings.ingredient_batch_size,
        debug=resolved_settings.debug_nutrition,
    )

    async def close_resources() -> None:
        await fdc_client.close()

    return AppContainer(
        settings=resolved_settings,
        fdc_client=fdc_client,
        food_matcher=food_matcher,
        nutrition_service=nutrition_service,
        close_resources=close_resources,
    )
