"""Nutrition estimation for ingredient lists and meal plans."""

import asyncio
import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Protocol

from recipe_nutrition.domain.nutrition import (
    Confidence,
    FoodCandidate,
    IngredientNutrition,
    MealNutrition,
    NamedMealNutrition,
    NutritionalInfo,
    ParsedIngredient,
)
from recipe_nutrition.services.ingredients import parse_ingredient, quantity_to_grams
from recipe_nutrition.services.rules import KeywordRule, first_match

HIGH_CONFIDENCE_SCORE = 50
HIGH_MEAL_FRACTION = 0.7
MEDIUM_MEAL_FRACTION = 0.4
FALLBACK_SCALE_BOUNDS = (0.5, 5.0)

# Rough per-unit baselines used when the database gives no usable match.
FALLBACK_NUTRITION: tuple[KeywordRule[NutritionalInfo], ...] = (
    KeywordRule(("spinach", "lettuce", "greens"), NutritionalInfo(25, 3, 0, 4)),
    KeywordRule(("chicken", "beef", "pork"), NutritionalInfo(250, 25, 15, 0)),
    KeywordRule(("oil",), NutritionalInfo(120, 0, 14, 0)),
    KeywordRule(("egg",), NutritionalInfo(70, 6, 5, 0.5)),
    KeywordRule(("cheese",), NutritionalInfo(110, 7, 9, 1)),
    KeywordRule(("avocado",), NutritionalInfo(160, 2, 15, 9)),
)
DEFAULT_FALLBACK_NUTRITION = NutritionalInfo(50, 2, 2, 5)

_logger = logging.getLogger(__name__)


class IngredientMatcher(Protocol):
    """Interface for resolving an ingredient name to a database row."""

    async def find_best_match(self, query: str) -> FoodCandidate | None:
        """Return the best candidate for query, or None."""


@dataclass
class NutritionService:
    """Estimates macros per ingredient, meal and plan.

    Lookup failures never propagate: an ingredient that cannot be matched
    degrades to a low-confidence fallback estimate.
    """

    matcher: IngredientMatcher
    batch_size: int = 3
    debug: bool = False

    async def get_ingredient_nutrition(
        self, ingredient: ParsedIngredient
    ) -> IngredientNutrition:
        """Estimate nutrition for one parsed ingredient."""
        if self.debug:
            _logger.info(
                "Processing ingredient %r: %s %s %s",
                ingredient.original_text,
                ingredient.quantity,
                ingredient.unit,
                ingredient.ingredient_name,
            )
        if ingredient.quantity == 0:
            return IngredientNutrition(
                ingredient=ingredient,
                nutrition=NutritionalInfo(),
                confidence="low",
                source="fallback",
            )

        try:
            grams = quantity_to_grams(
                ingredient.quantity, ingredient.unit, ingredient.ingredient_name
            )
            if self.debug:
                _logger.info(
                    "Quantity to grams: %s %s = %sg",
                    ingredient.quantity,
                    ingredient.unit,
                    grams,
                )

            candidate = await self.matcher.find_best_match(ingredient.ingredient_name)
            if candidate is None:
                if self.debug:
                    _logger.info("No match for %r", ingredient.ingredient_name)
                return fallback_nutrition(ingredient)

            macros = candidate.macros()
            if self.debug:
                _logger.info(
                    "Matched %r (fdc_id=%s): per 100g %s",
                    candidate.description,
                    candidate.fdc_id,
                    macros,
                )
            if not macros.has_any:
                return fallback_nutrition(ingredient)

            scale = grams / 100
            nutrition = macros.per_100g().scaled(scale)
            if self.debug:
                _logger.info("Scale factor %s gives %s", scale, nutrition)

            confidence: Confidence = (
                "high"
                if macros.has_all and candidate.score > HIGH_CONFIDENCE_SCORE
                else "medium"
            )
            return IngredientNutrition(
                ingredient=ingredient,
                nutrition=nutrition,
                confidence=confidence,
                source="database",
            )
        except Exception as exc:
            _logger.warning(
                "Failed to get nutrition for %r: %s", ingredient.original_text, exc
            )
            return fallback_nutrition(ingredient)

    async def calculate_meal_nutrition(
        self, ingredient_lines: Sequence[str]
    ) -> MealNutrition:
        """Parse, resolve and total an ingredient list.

        At most batch_size lookups run at once. Results keep input order.
        """
        if self.debug:
            _logger.info(
                "Calculating nutrition for %s ingredients", len(ingredient_lines)
            )
        parsed = [parse_ingredient(line) for line in ingredient_lines]
        semaphore = asyncio.Semaphore(self.batch_size)

        async def resolve(ingredient: ParsedIngredient) -> IngredientNutrition:
            async with semaphore:
                return await self.get_ingredient_nutrition(ingredient)

        results = list(await asyncio.gather(*(resolve(item) for item in parsed)))

        total = NutritionalInfo()
        for result in results:
            total = total + result.nutrition

        if self.debug:
            _logger.info("Meal totals: %s", total)
            for result in results:
                _logger.info(
                    "- %s: %s (%s, %s)",
                    result.ingredient.original_text,
                    result.nutrition,
                    result.source,
                    result.confidence,
                )

        return MealNutrition(
            total=total, ingredients=results, confidence=meal_confidence(results)
        )

    async def calculate_meals_nutrition(
        self, meals: Sequence[Mapping[str, Any]]
    ) -> list[NamedMealNutrition]:
        """Calculate every meal of a plan concurrently, in input order."""

        async def calculate(meal: Mapping[str, Any]) -> NamedMealNutrition:
            name = str(meal.get("name", ""))
            ingredients = meal.get("ingredients")
            if not ingredients:
                return NamedMealNutrition(name=name, nutrition=MealNutrition.empty())
            nutrition = await self.calculate_meal_nutrition(list(ingredients))
            return NamedMealNutrition(name=name, nutrition=nutrition)

        return list(await asyncio.gather(*(calculate(meal) for meal in meals)))


def meal_confidence(results: Sequence[IngredientNutrition]) -> Confidence:
    """Grade a meal by the share of high-confidence ingredients."""
    if not results:
        return "low"
    high_fraction = sum(1 for r in results if r.confidence == "high") / len(results)
    if high_fraction > HIGH_MEAL_FRACTION:
        return "high"
    if high_fraction > MEDIUM_MEAL_FRACTION:
        return "medium"
    return "low"


def fallback_nutrition(ingredient: ParsedIngredient) -> IngredientNutrition:
    """Hand-set estimate scaled by the clamped ingredient quantity."""
    baseline = first_match(FALLBACK_NUTRITION, ingredient.ingredient_name)
    if baseline is None:
        baseline = DEFAULT_FALLBACK_NUTRITION
    low, high = FALLBACK_SCALE_BOUNDS
    scale = max(low, min(ingredient.quantity, high))
    return IngredientNutrition(
        ingredient=ingredient,
        nutrition=baseline.scaled(scale),
        confidence="low",
        source="fallback",
    )
