"""Models for FoodData Central search payloads."""

from pydantic import BaseModel, Field

from recipe_nutrition.domain.nutrition import (
    FoodCandidate,
    FoodNutrient,
    SearchResponse,
)


class FdcNutrientRef(BaseModel):
    """Nested nutrient reference used by detail payloads."""

    id: int | None = None


class FdcFoodNutrient(BaseModel):
    """Nutrient entry; search rows use nutrientId/value, details nutrient.id/amount."""

    nutrient_id: int | None = Field(default=None, alias="nutrientId")
    value: float | None = None
    amount: float | None = None
    nutrient: FdcNutrientRef | None = None

    def to_domain(self) -> FoodNutrient | None:
        nutrient_id = self.nutrient_id
        if nutrient_id is None and self.nutrient is not None:
            nutrient_id = self.nutrient.id
        amount = self.value if self.value is not None else self.amount
        if nutrient_id is None or amount is None:
            return None
        return FoodNutrient(nutrient_id=nutrient_id, amount=amount)


class FdcSearchFood(BaseModel):
    """Food row in a search payload."""

    fdc_id: int = Field(alias="fdcId")
    description: str = ""
    data_type: str | None = Field(default=None, alias="dataType")
    brand_owner: str | None = Field(default=None, alias="brandOwner")
    score: float | None = None
    food_nutrients: list[FdcFoodNutrient] = Field(
        default_factory=list, alias="foodNutrients"
    )

    def to_domain(self) -> FoodCandidate:
        nutrients = tuple(
            nutrient
            for nutrient in (entry.to_domain() for entry in self.food_nutrients)
            if nutrient is not None
        )
        return FoodCandidate(
            fdc_id=self.fdc_id,
            description=self.description,
            score=self.score or 0.0,
            nutrients=nutrients,
            data_type=self.data_type,
            brand_owner=self.brand_owner,
        )


class FdcSearchPayload(BaseModel):
    """Response body of /foods/search."""

    total_hits: int = Field(default=0, alias="totalHits")
    current_page: int | None = Field(default=None, alias="currentPage")
    total_pages: int | None = Field(default=None, alias="totalPages")
    foods: list[FdcSearchFood] = Field(default_factory=list)

    def to_domain(self) -> SearchResponse:
        return SearchResponse(
            total_hits=self.total_hits,
            foods=[food.to_domain() for food in self.foods],
            current_page=self.current_page,
            total_pages=self.total_pages,
        )
