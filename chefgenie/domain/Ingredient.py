"""Ingredient domain entity: item phrase as written in the recipe, store, optional price."""
from typing import Optional

from chefgenie.utilities.constants import ANY


class Ingredient:
    def __init__(self, item: str = "", store: str = ANY, price: Optional[str] = None):
        self.item = item
        self.store = store or ANY
        self.price = price or None

    def __str__(self) -> str:
        parts = [self.item, self.store]
        if self.price:
            parts.append(self.price)
        return " - ".join(parts)

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        '''Creates an Ingredient object from a dictionary. Ignores unknown keys.'''
        d = dict(data) if isinstance(data, dict) else {}
        price = d.get("price")
        return Ingredient(
            item=str(d.get("item") or ""),
            store=str(d.get("store") or ANY),
            price=str(price) if price not in (None, "") else None,
        )

    def to_dict(self):
        '''Converts the Ingredient object to a dictionary for JSON persistence.'''
        data = {"item": self.item, "store": self.store}
        if self.price:
            data["price"] = self.price
        return data
