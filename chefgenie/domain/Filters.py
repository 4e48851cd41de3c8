"""Search constraints chosen by the user: meal type, proteins, time limit, supermarket, difficulty."""
from typing import List, Optional

from chefgenie.domain.Recipe import MealType, Protein
from chefgenie.utilities.constants import ANY


class FilterState:
    def __init__(self, meal_type: MealType = MealType.DINNER, protein: Optional[List[str]] = None,
                 max_time: int = 30, supermarket: str = ANY, difficulty: str = ANY):
        self.meal_type = MealType(meal_type)
        proteins = [p.value if isinstance(p, Protein) else str(p) for p in (protein or [])]
        self.protein = proteins or [Protein.ANY.value]
        self.max_time = max_time
        self.supermarket = supermarket
        self.difficulty = difficulty

    @property
    def any_protein(self) -> bool:
        return Protein.ANY.value in self.protein

    def __str__(self) -> str:
        return (f"{self.meal_type.value}, proteins={'/'.join(self.protein)}, <= {self.max_time} min, "
                f"{self.supermarket}, difficulty {self.difficulty}")

    __repr__ = __str__
