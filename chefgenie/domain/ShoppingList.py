"""ShoppingList aggregate: line items merged by (store, normalized name), each tracking the recipes that asked for it.

Every mutation builds a new item list and swaps it in; items handed out earlier
are never modified afterwards.
"""
from typing import Iterable, Iterator, List, Optional

from chefgenie.domain.Recipe import Recipe, generate_id
from chefgenie.logic.shopping.normalize import normalize
from chefgenie.utilities.constants import ANY


class IngredientContribution:
    def __init__(self, recipe_id: str, recipe_title: str, text: str, price: Optional[str] = None):
        self.recipe_id = recipe_id
        self.recipe_title = recipe_title
        self.text = text
        self.price = price or None

    def __str__(self) -> str:
        return f"{self.text} ({self.recipe_title})"

    __repr__ = __str__

    def to_dict(self):
        data = {"recipeId": self.recipe_id, "recipeTitle": self.recipe_title, "text": self.text}
        if self.price:
            data["price"] = self.price
        return data

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        return IngredientContribution(
            recipe_id=str(d.get("recipeId") or ""),
            recipe_title=str(d.get("recipeTitle") or ""),
            text=str(d.get("text") or ""),
            price=d.get("price") or None,
        )


class ShoppingListItem:
    def __init__(self, id: str, name: str, store: str = ANY, checked: bool = False,
                 contributions: Optional[List[IngredientContribution]] = None):
        self.id = id
        self.name = name
        self.store = store
        self.checked = checked
        self.contributions = contributions[:] if contributions else []

    @property
    def key(self):
        return (self.store, self.name)

    def replace(self, **changes) -> "ShoppingListItem":
        fields = {
            "id": self.id,
            "name": self.name,
            "store": self.store,
            "checked": self.checked,
            "contributions": self.contributions,
        }
        fields.update(changes)
        return ShoppingListItem(**fields)

    def __str__(self) -> str:
        mark = "x" if self.checked else " "
        return f"[{mark}] {self.name} @ {self.store} ({len(self.contributions)} contributions)"

    __repr__ = __str__

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "store": self.store,
            "checked": self.checked,
            "contributions": [c.to_dict() for c in self.contributions],
        }

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        return ShoppingListItem(
            id=str(d.get("id") or generate_id()),
            name=str(d.get("name") or ""),
            store=str(d.get("store") or ANY),
            checked=bool(d.get("checked", False)),
            contributions=[IngredientContribution.from_dict(c) for c in d.get("contributions") or []],
        )


class ShoppingList:
    def __init__(self, items: Optional[Iterable[ShoppingListItem]] = None):
        # Persisted data may predate the invariant; empty items are dropped
        self.items: List[ShoppingListItem] = [i for i in (items or []) if i.contributions]

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[ShoppingListItem]:
        return iter(self.items)

    def get_item(self, item_id: str) -> Optional[ShoppingListItem]:
        for item in self.items:
            if item.id == item_id:
                return item
        return None

    def is_recipe_in_list(self, title: str) -> bool:
        return any(c.recipe_title == title for item in self.items for c in item.contributions)

    def add_recipe(self, recipe: Recipe) -> None:
        '''
        Merges every ingredient of the recipe into the list.
        Not idempotent: callers check is_recipe_in_list first.
        '''
        new_items = list(self.items)
        for ing in recipe.ingredients:
            name = normalize(ing.item)
            store = ing.store or ANY
            contribution = IngredientContribution(recipe.id, recipe.title, ing.item, ing.price)
            index = next((i for i, item in enumerate(new_items) if item.key == (store, name)), -1)
            if index >= 0:
                existing = new_items[index]
                # Adding more to an item puts it back on the to-buy list
                new_items[index] = existing.replace(
                    checked=False,
                    contributions=existing.contributions + [contribution],
                )
            else:
                new_items.append(ShoppingListItem(generate_id(), name, store, False, [contribution]))
        self.items = new_items

    def remove_recipe(self, recipe_title: str) -> None:
        '''
        Retracts every contribution made by recipes with this title.
        Items left without contributions are dropped.
        '''
        new_items = []
        for item in self.items:
            kept = [c for c in item.contributions if c.recipe_title != recipe_title]
            if not kept:
                continue
            new_items.append(item if len(kept) == len(item.contributions) else item.replace(contributions=kept))
        self.items = new_items

    def toggle_recipe(self, recipe: Recipe) -> bool:
        '''Removes the recipe when it is already in the list, adds it otherwise. Returns True when added.'''
        if self.is_recipe_in_list(recipe.title):
            self.remove_recipe(recipe.title)
            return False
        self.add_recipe(recipe)
        return True

    def toggle_item(self, item_id: str) -> bool:
        found = False
        new_items = []
        for item in self.items:
            if item.id == item_id:
                item = item.replace(checked=not item.checked)
                found = True
            new_items.append(item)
        self.items = new_items
        return found

    def remove_item(self, item_id: str) -> bool:
        new_items = [item for item in self.items if item.id != item_id]
        found = len(new_items) != len(self.items)
        self.items = new_items
        return found

    def clear(self) -> None:
        self.items = []

    def to_list(self):
        return [item.to_dict() for item in self.items]

    @staticmethod
    def from_list(data):
        return ShoppingList(ShoppingListItem.from_dict(d) for d in (data or []) if isinstance(d, dict))

    def __str__(self) -> str:
        return f"Shopping List ({len(self.items)} items)"

    __repr__ = __str__
