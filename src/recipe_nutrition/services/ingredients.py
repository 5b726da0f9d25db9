"""Ingredient line parsing and gram conversion."""

import re
from dataclasses import dataclass
from typing import Literal

from recipe_nutrition.domain.nutrition import ParsedIngredient
from recipe_nutrition.services.rules import KeywordRule, first_match

COUNT_UNIT = "unit"
TO_TASTE_UNIT = "to taste"


@dataclass(frozen=True)
class UnitConversion:
    """Gram equivalent of one unit; volume units assume water density."""

    grams: float
    kind: Literal["weight", "volume"]


_GRAM = UnitConversion(1, "weight")
_KILOGRAM = UnitConversion(1000, "weight")
_OUNCE = UnitConversion(28.35, "weight")
_POUND = UnitConversion(453.59, "weight")
_CUP = UnitConversion(240, "volume")
_TABLESPOON = UnitConversion(15, "volume")
_TEASPOON = UnitConversion(5, "volume")
_MILLILITER = UnitConversion(1, "volume")
_LITER = UnitConversion(1000, "volume")

UNIT_CONVERSIONS: dict[str, UnitConversion] = {
    "g": _GRAM,
    "gram": _GRAM,
    "grams": _GRAM,
    "kg": _KILOGRAM,
    "kilogram": _KILOGRAM,
    "kilograms": _KILOGRAM,
    "oz": _OUNCE,
    "ounce": _OUNCE,
    "ounces": _OUNCE,
    "lb": _POUND,
    "lbs": _POUND,
    "pound": _POUND,
    "pounds": _POUND,
    "cup": _CUP,
    "cups": _CUP,
    "c": _CUP,
    "tbsp": _TABLESPOON,
    "tablespoon": _TABLESPOON,
    "tablespoons": _TABLESPOON,
    "tsp": _TEASPOON,
    "teaspoon": _TEASPOON,
    "teaspoons": _TEASPOON,
    "ml": _MILLILITER,
    "milliliter": _MILLILITER,
    "milliliters": _MILLILITER,
    "l": _LITER,
    "liter": _LITER,
    "liters": _LITER,
}

# Typical weight in grams of one item for ingredients counted without a unit.
UNITLESS_WEIGHTS: tuple[KeywordRule[float], ...] = (
    KeywordRule(("egg",), 50),
    KeywordRule(("apple", "orange"), 150),
    KeywordRule(("banana",), 120),
    KeywordRule(("avocado",), 150),
    KeywordRule(("cucumber",), 300),
    KeywordRule(("clove garlic", "garlic clove"), 3),
    KeywordRule(("lemon", "lime"), 100),
)

# Multipliers on the water-based volume conversion. Solids measured by volume
# (butter, flour, sugar, cheese) are deliberately absent.
DENSITY_ADJUSTMENTS: tuple[KeywordRule[float], ...] = (
    KeywordRule(("oil",), 0.92),
    KeywordRule(("honey", "syrup"), 1.42),
    KeywordRule(("milk", "cream", "yogurt"), 1.03),
    KeywordRule(("spinach", "lettuce", "greens"), 0.125),
    KeywordRule(("mushroom", "onion"), 0.625),
)

PREPARATION_DESCRIPTORS: tuple[str, ...] = (
    "sliced",
    "diced",
    "chopped",
    "minced",
    "grated",
    "shredded",
    "crushed",
    "ground",
    "powdered",
    "fresh",
    "frozen",
    "canned",
    "dried",
    "raw",
    "cooked",
    "roasted",
    "baked",
    "fried",
    "grilled",
    "steamed",
    "boneless",
    "skinless",
    "with skin",
    "peeled",
)

_TO_TASTE_MARKERS = ("to taste", "pinch", "dash")
_QUANTITY_PATTERN = re.compile(r"^(\d+\s+\d+/\d+|\d+/\d+|\d+(?:\.\d+)?)")
_PARENTHETICAL_PATTERN = re.compile(r"\s*\([^)]*\)")
_DESCRIPTOR_PATTERN = re.compile(
    r"\b(?:" + "|".join(re.escape(d) for d in PREPARATION_DESCRIPTORS) + r")\b"
)
_COMMA_PATTERN = re.compile(r"\s*,\s*")
_WHITESPACE_PATTERN = re.compile(r"\s+")


def parse_ingredient(text: str) -> ParsedIngredient:
    """Split a free-text ingredient line into quantity, unit and name.

    Qualitative amounts ("to taste", "pinch", "dash") get quantity 0. Lines
    without a leading number count as one item. A token after the number is
    taken as the unit only when it is a known unit key.
    """
    lowered = text.strip().lower()

    if any(marker in lowered for marker in _TO_TASTE_MARKERS):
        return ParsedIngredient(
            quantity=0,
            unit=TO_TASTE_UNIT,
            ingredient_name=_strip_parentheticals(lowered),
            original_text=text,
        )

    match = _QUANTITY_PATTERN.match(lowered)
    if match is None:
        return ParsedIngredient(
            quantity=1,
            unit=COUNT_UNIT,
            ingredient_name=clean_ingredient_name(_strip_parentheticals(lowered)),
            original_text=text,
        )

    quantity = parse_quantity(match.group(1))
    remaining = lowered[match.end() :].strip()
    unit = COUNT_UNIT
    words = remaining.split()
    if words and words[0] in UNIT_CONVERSIONS:
        unit = words[0]
        remaining = remaining[len(words[0]) :].strip()

    name = _strip_parentheticals(remaining).rstrip(", ").strip()
    return ParsedIngredient(
        quantity=quantity,
        unit=unit,
        ingredient_name=clean_ingredient_name(name),
        original_text=text,
    )


def parse_quantity(quantity_text: str) -> float:
    """Sum whole, decimal and fractional parts such as "1 1/2"."""
    total = 0.0
    for part in quantity_text.split():
        if "/" in part:
            numerator, denominator = part.split("/", 1)
            if float(denominator) != 0:
                total += float(numerator) / float(denominator)
        else:
            total += float(part)
    return total


def clean_ingredient_name(name: str) -> str:
    """Drop preparation descriptors that skew database search results.

    Descriptors are removed as whole words only. An empty result falls back to
    the uncleaned name.
    """
    lowered = name.lower().strip()
    cleaned = _DESCRIPTOR_PATTERN.sub("", lowered)
    cleaned = _COMMA_PATTERN.sub(" ", cleaned)
    cleaned = _WHITESPACE_PATTERN.sub(" ", cleaned).strip()
    return cleaned or lowered


def quantity_to_grams(quantity: float, unit: str, ingredient_name: str) -> float:
    """Convert a quantity in the given unit into grams."""
    conversion = UNIT_CONVERSIONS.get(unit.lower())
    if conversion is None:
        return unitless_grams(quantity, ingredient_name)

    grams_per_unit = conversion.grams
    if conversion.kind == "volume":
        grams_per_unit *= density_adjustment(ingredient_name)
    return quantity * grams_per_unit


def unitless_grams(quantity: float, ingredient_name: str) -> float:
    """Estimate grams for counted items; unknown items treat quantity as grams."""
    item_weight = first_match(UNITLESS_WEIGHTS, ingredient_name)
    if item_weight is None:
        return quantity
    return quantity * item_weight


def density_adjustment(ingredient_name: str) -> float:
    adjustment = first_match(DENSITY_ADJUSTMENTS, ingredient_name)
    return 1.0 if adjustment is None else adjustment


def _strip_parentheticals(text: str) -> str:
    return _PARENTHETICAL_PATTERN.sub("", text).strip()
