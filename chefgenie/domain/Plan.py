"""Weekly plan domain entity: one lunch and one dinner slot for each weekday."""
from typing import Dict, Iterator, List, Optional

from chefgenie.domain.Recipe import MealType, Recipe
from chefgenie.utilities.constants import DAYS_OF_WEEK

SLOTS = ("lunch", "dinner")


class DayPlan:
    def __init__(self, lunch: Optional[Recipe] = None, dinner: Optional[Recipe] = None):
        self.lunch = lunch
        self.dinner = dinner

    def recipes(self) -> List[Recipe]:
        return [r for r in (self.lunch, self.dinner) if r is not None]

    def to_dict(self):
        return {
            "lunch": self.lunch.to_dict() if self.lunch else None,
            "dinner": self.dinner.to_dict() if self.dinner else None,
        }

    @staticmethod
    def from_dict(data, assign_meal_types: bool = False):
        d = data if isinstance(data, dict) else {}
        slots = {}
        for slot, meal_type in zip(SLOTS, (MealType.LUNCH, MealType.DINNER)):
            raw = d.get(slot)
            if not raw:
                slots[slot] = None
                continue
            recipe = Recipe.from_dict(raw)
            if assign_meal_types:
                recipe.meal_type = meal_type
            slots[slot] = recipe
        return DayPlan(**slots)


class WeeklyPlan:
    def __init__(self, days: Optional[Dict[str, DayPlan]] = None):
        days = days or {}
        # Always the seven fixed weekdays, in calendar order
        self.days: Dict[str, DayPlan] = {day: days.get(day) or DayPlan() for day in DAYS_OF_WEEK}

    def __getitem__(self, day: str) -> DayPlan:
        return self.days[day]

    def __iter__(self) -> Iterator[str]:
        return iter(self.days)

    def items(self):
        return self.days.items()

    def recipes(self) -> List[Recipe]:
        '''All lunch and dinner recipes, Monday first, lunch before dinner.'''
        out: List[Recipe] = []
        for day in self.days.values():
            out.extend(day.recipes())
        return out

    def to_dict(self):
        return {day: plan.to_dict() for day, plan in self.days.items()}

    @staticmethod
    def from_dict(data, assign_meal_types: bool = False):
        d = data if isinstance(data, dict) else {}
        return WeeklyPlan({
            day: DayPlan.from_dict(d.get(day), assign_meal_types=assign_meal_types)
            for day in DAYS_OF_WEEK if d.get(day)
        })
