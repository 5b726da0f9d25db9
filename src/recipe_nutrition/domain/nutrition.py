"""Nutrition domain models."""

from dataclasses import dataclass, field
from typing import Literal

Confidence = Literal["high", "medium", "low"]
Source = Literal["database", "fallback"]

NUTRIENT_IDS = {
    "calories": 1008,
    "protein": 1003,
    "fat": 1004,
    "carbs": 1005,
}


@dataclass(frozen=True)
class NutritionalInfo:
    """Absolute macro amounts for a portion."""

    calories: float = 0.0
    protein: float = 0.0
    fat: float = 0.0
    carbs: float = 0.0

    def scaled(self, factor: float) -> "NutritionalInfo":
        """Return a copy with every macro multiplied by factor."""
        return NutritionalInfo(
            calories=self.calories * factor,
            protein=self.protein * factor,
            fat=self.fat * factor,
            carbs=self.carbs * factor,
        )

    def __add__(self, other: "NutritionalInfo") -> "NutritionalInfo":
        return NutritionalInfo(
            calories=self.calories + other.calories,
            protein=self.protein + other.protein,
            fat=self.fat + other.fat,
            carbs=self.carbs + other.carbs,
        )

    def to_dict(self) -> dict[str, float]:
        return {
            "calories": self.calories,
            "protein": self.protein,
            "fat": self.fat,
            "carbs": self.carbs,
        }


def _reported(value: float | None) -> bool:
    """Zero amounts are treated like missing nutrients."""
    return value is not None and value > 0


@dataclass(frozen=True)
class MacroValues:
    """Per-100g macros from a database row; None when the nutrient is missing."""

    calories: float | None
    protein: float | None
    fat: float | None
    carbs: float | None

    def _values(self) -> tuple[float | None, ...]:
        return (self.calories, self.protein, self.fat, self.carbs)

    @property
    def has_all(self) -> bool:
        return all(_reported(value) for value in self._values())

    @property
    def has_any(self) -> bool:
        return any(_reported(value) for value in self._values())

    def per_100g(self) -> NutritionalInfo:
        """Missing macros count as zero."""
        return NutritionalInfo(
            calories=self.calories or 0.0,
            protein=self.protein or 0.0,
            fat=self.fat or 0.0,
            carbs=self.carbs or 0.0,
        )


@dataclass(frozen=True)
class FoodNutrient:
    """Single nutrient amount per 100g."""

    nutrient_id: int
    amount: float


@dataclass(frozen=True)
class FoodCandidate:
    """Search result row from FoodData Central."""

    fdc_id: int
    description: str
    score: float
    nutrients: tuple[FoodNutrient, ...] = ()
    data_type: str | None = None
    brand_owner: str | None = None

    def nutrient_value(self, nutrient_id: int) -> float | None:
        """Return the amount for a nutrient code, or None if absent."""
        for nutrient in self.nutrients:
            if nutrient.nutrient_id == nutrient_id:
                return nutrient.amount
        return None

    def macros(self) -> MacroValues:
        """Return energy, protein, fat and carbohydrate per 100g."""
        return MacroValues(
            calories=self.nutrient_value(NUTRIENT_IDS["calories"]),
            protein=self.nutrient_value(NUTRIENT_IDS["protein"]),
            fat=self.nutrient_value(NUTRIENT_IDS["fat"]),
            carbs=self.nutrient_value(NUTRIENT_IDS["carbs"]),
        )


@dataclass(frozen=True)
class SearchResponse:
    """Page of food search results."""

    total_hits: int
    foods: list[FoodCandidate] = field(default_factory=list)
    current_page: int | None = None
    total_pages: int | None = None


@dataclass(frozen=True)
class ParsedIngredient:
    """Ingredient line split into quantity, unit and a searchable name."""

    quantity: float
    unit: str
    ingredient_name: str
    original_text: str


@dataclass(frozen=True)
class IngredientNutrition:
    """Nutrition estimate for one ingredient line."""

    ingredient: ParsedIngredient
    nutrition: NutritionalInfo
    confidence: Confidence
    source: Source


@dataclass(frozen=True)
class MealNutrition:
    """Totals and per-ingredient breakdown for a meal."""

    total: NutritionalInfo
    ingredients: list[IngredientNutrition]
    confidence: Confidence

    @classmethod
    def empty(cls) -> "MealNutrition":
        return cls(total=NutritionalInfo(), ingredients=[], confidence="low")

    def to_dict(self) -> dict[str, object]:
        return {
            "total": self.total.to_dict(),
            "confidence": self.confidence,
            "ingredients": [
                {
                    "original": item.ingredient.original_text,
                    "quantity": item.ingredient.quantity,
                    "unit": item.ingredient.unit,
                    "ingredient": item.ingredient.ingredient_name,
                    "nutrition": item.nutrition.to_dict(),
                    "confidence": item.confidence,
                    "source": item.source,
                }
                for item in self.ingredients
            ],
        }


@dataclass(frozen=True)
class NamedMealNutrition:
    """Meal nutrition labelled with the meal name."""

    name: str
    nutrition: MealNutrition
