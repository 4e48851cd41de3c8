import pytest

from chefgenie.domain.Ingredient import Ingredient
from chefgenie.domain.Recipe import MealType, Recipe


class FakeOracle:
    """Stands in for RecipeOracle: hands out queued batches, records every call."""

    def __init__(self, batches=None, plan=None, image="data:image/png;base64,AAAA"):
        self.batches = list(batches or [])
        self.plan = plan
        self.image = image
        self.calls = []
        self.plan_calls = []
        self.image_calls = []

    async def fetch_recipes(self, meal_type, proteins, max_time, supermarket, difficulty, count=6):
        self.calls.append((meal_type, list(proteins), max_time, supermarket, difficulty, count))
        if self.batches:
            return self.batches.pop(0)
        return []

    async def fetch_weekly_plan(self, proteins, max_time, difficulty, supermarket):
        self.plan_calls.append((list(proteins), max_time, difficulty, supermarket))
        return self.plan

    async def generate_image(self, title):
        self.image_calls.append(title)
        return self.image


def build_recipe(title, meal_type=MealType.DINNER, protein="Chicken", prep=20, difficulty=2,
                 ingredients=None, image=None):
    return Recipe(
        title=title,
        meal_type=meal_type,
        protein=protein,
        prep_time_minutes=prep,
        difficulty=difficulty,
        ingredients=ingredients if ingredients is not None else [Ingredient("2 Tomatoes", "Aldi", "$3.50")],
        instructions=["Cook it"],
        image=image,
    )


@pytest.fixture
def oracle():
    return FakeOracle()


@pytest.fixture
def make_recipe():
    return build_recipe
