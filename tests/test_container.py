"""Tests for container wiring and settings."""

import asyncio
import logging

import pytest

from recipe_nutrition.config import Settings, parse_data_types
from recipe_nutrition.containers import build_container


def test_build_container_creates_services(settings: Settings) -> None:
    container = build_container(settings)

    assert container.nutrition_service.matcher is container.food_matcher
    assert container.food_matcher.client is container.fdc_client
    assert container.nutrition_service.batch_size == 3
    assert container.food_matcher.data_types == ("Foundation", "SR Legacy", "Branded")
    assert container.food_matcher.cache is None
    assert container.fdc_client.throttle.min_interval_seconds == 0.1
    asyncio.run(container.close_resources())


def test_build_container_enables_match_cache() -> None:
    settings = Settings(
        fdc_api_key="fdc-key",
        match_cache_ttl_seconds=600,
        fdc_data_types="Foundation",
        debug_nutrition=True,
    )

    container = build_container(settings)

    assert container.food_matcher.cache is not None
    assert container.food_matcher.cache_ttl_seconds == 600
    assert container.food_matcher.data_types == ("Foundation",)
    assert container.nutrition_service.debug is True
    asyncio.run(container.close_resources())


def test_build_container_configures_package_logging(
    package_logger_state: logging.Logger,
) -> None:
    logger = package_logger_state
    logger.handlers.clear()

    container = build_container(Settings(fdc_api_key="fdc-key", debug_nutrition=True))

    assert len(logger.handlers) == 1
    assert logger.level == logging.DEBUG
    asyncio.run(container.close_resources())


def test_debug_toggle_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DEBUG_NUTRITION", "1")

    settings = Settings(fdc_api_key="fdc-key")

    assert settings.debug_nutrition is True


def test_parse_data_types() -> None:
    assert parse_data_types(" Foundation, ,Branded ") == ("Foundation", "Branded")
    assert parse_data_types(None) == ()
