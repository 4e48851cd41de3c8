"""Recipe domain entity: title, meal type, protein, prep time, difficulty, ingredients, steps, image."""
from enum import Enum
from typing import List, Optional
from uuid import uuid4

from chefgenie.domain.Ingredient import Ingredient


class MealType(str, Enum):
    LUNCH = "Lunch"
    DINNER = "Dinner"


class Protein(str, Enum):
    ANY = "Any"
    CHICKEN = "Chicken"
    BEEF = "Beef"
    PORK = "Pork"
    LAMB = "Lamb"
    FISH = "Fish"
    VEGETARIAN = "Vegetarian"


def generate_id() -> str:
    """Short opaque id, unique within the process."""
    return uuid4().hex[:9]


def _protein_value(value) -> str:
    # Oracle output is loose; keep unknown proteins as raw text
    if isinstance(value, Protein):
        return value.value
    return str(value or "")


class Recipe:
    def __init__(self, id: str = "", title: str = "", description: str = "",
                 meal_type: MealType = MealType.DINNER, protein: str = Protein.ANY.value,
                 prep_time_minutes: int = 0, difficulty: int = 1,
                 ingredients: Optional[List[Ingredient]] = None,
                 instructions: Optional[List[str]] = None, image: Optional[str] = None):
        self.id = id or generate_id()
        self.title = title
        self.description = description
        self.meal_type = MealType(meal_type)
        self.protein = _protein_value(protein)
        self.prep_time_minutes = prep_time_minutes
        self.difficulty = difficulty
        self.ingredients = ingredients[:] if ingredients else []
        self.instructions = instructions[:] if instructions else []
        self.image = image

    def __str__(self) -> str:
        return (f"{self.title} - {self.meal_type.value} - {self.protein} - "
                f"{self.prep_time_minutes} min - difficulty {self.difficulty}")

    __repr__ = __str__

    def copy(self) -> "Recipe":
        return Recipe.from_dict(self.to_dict())

    def with_image(self, image: Optional[str]) -> "Recipe":
        clone = self.copy()
        clone.image = image
        return clone

    @staticmethod
    def from_dict(data):
        '''Creates a Recipe from its persisted (camelCase) form. Ignores unknown keys.'''
        d = dict(data) if isinstance(data, dict) else {}
        meal_type = MealType.DINNER if d.get("mealType") == MealType.DINNER.value else MealType.LUNCH
        try:
            prep = int(d.get("prepTimeMinutes") or 0)
        except (TypeError, ValueError):
            prep = 0
        try:
            difficulty = int(d.get("difficulty") or 1)
        except (TypeError, ValueError):
            difficulty = 1
        return Recipe(
            id=str(d.get("id") or ""),
            title=str(d.get("title") or ""),
            description=str(d.get("description") or ""),
            meal_type=meal_type,
            protein=d.get("protein") or Protein.ANY.value,
            prep_time_minutes=prep,
            difficulty=difficulty,
            ingredients=[Ingredient.from_dict(i) for i in d.get("ingredients") or []],
            instructions=[str(s) for s in d.get("instructions") or []],
            image=d.get("image") or None,
        )

    def to_dict(self):
        '''Converts the Recipe to a dictionary for JSON persistence.'''
        data = {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "mealType": self.meal_type.value,
            "protein": self.protein,
            "prepTimeMinutes": self.prep_time_minutes,
            "difficulty": self.difficulty,
            "ingredients": [ing.to_dict() for ing in self.ingredients],
            "instructions": list(self.instructions),
        }
        if self.image:
            data["image"] = self.image
        return data
