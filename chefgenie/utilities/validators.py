"""
Input validation schemas using Pydantic for request bodies.
"""
from pydantic import BaseModel, Field, field_validator
from typing import List

from chefgenie.domain.Filters import FilterState
from chefgenie.domain.Recipe import MealType, Protein
from chefgenie.utilities.constants import DIFFICULTY_LABELS, SUPERMARKETS


def _one_of(values) -> str:
    return r'^(' + '|'.join(values) + r')$'


SUPERMARKET_PATTERN = _one_of(SUPERMARKETS)
_DIFFICULTY_PATTERN = _one_of(DIFFICULTY_LABELS)


class SearchFilters(BaseModel):
    """Schema for recipe search constraints."""
    meal_type: MealType = MealType.DINNER
    protein: List[Protein] = Field(default_factory=lambda: [Protein.ANY])
    max_time: int = Field(30, ge=1, le=600)
    supermarket: str = Field('Any', pattern=SUPERMARKET_PATTERN)
    difficulty: str = Field('Any', pattern=_DIFFICULTY_PATTERN)

    @field_validator('protein')
    @classmethod
    def default_to_any(cls, v):
        """An empty protein selection means Any."""
        return v or [Protein.ANY]

    def to_filter_state(self) -> FilterState:
        return FilterState(
            meal_type=self.meal_type,
            protein=[p.value for p in self.protein],
            max_time=self.max_time,
            supermarket=self.supermarket,
            difficulty=self.difficulty,
        )


class PlanRequest(BaseModel):
    """Schema for weekly plan generation."""
    protein: List[Protein] = Field(default_factory=lambda: [Protein.ANY])
    max_time: int = Field(45, ge=1, le=600)
    difficulty: str = Field('Any', pattern=_DIFFICULTY_PATTERN)
    supermarket: str = Field('Any', pattern=SUPERMARKET_PATTERN)

    @field_validator('protein')
    @classmethod
    def default_to_any(cls, v):
        return v or [Protein.ANY]

    def protein_values(self) -> List[str]:
        return [p.value for p in self.protein]


class RecipeRef(BaseModel):
    """Reference to a recipe the session already holds."""
    recipe_id: str = Field(..., min_length=1)

    @field_validator('recipe_id')
    @classmethod
    def strip_whitespace(cls, v):
        """Remove leading/trailing whitespace."""
        return v.strip()
