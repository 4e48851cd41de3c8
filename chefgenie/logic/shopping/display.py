"""Shopping list presentation helpers.

Pure functions of items; nothing here is stored. Provides:
  item_display, item_price_display, item_recipes  - per-item labels
  group_by_store, estimated_total, progress       - whole-list views
  product_search_url, render_text                 - links and share text
"""
import re
from collections import OrderedDict
from typing import Dict, Iterable, List, Optional
from urllib.parse import quote

from chefgenie.domain.ShoppingList import ShoppingListItem
from chefgenie.logic.shopping.normalize import normalize
from chefgenie.utilities.constants import ANY, OTHER_STORE, STORE_ORDER

_PRICE_NUMBER = re.compile(r"(\d+(\.\d+)?)")

_SEARCH_URLS = {
    "woolworths": "https://www.woolworths.com.au/shop/search/products?searchTerm={q}",
    "coles": "https://www.coles.com.au/search?q={q}",
    "aldi": "https://www.google.com/search?q=aldi+australia+{q}",
}
_FALLBACK_SEARCH_URL = "https://www.google.com/search?tbm=shop&q={q}"


def _unique(values: Iterable[str]) -> List[str]:
    return list(OrderedDict.fromkeys(values))


def parse_price(price: Optional[str]) -> Optional[float]:
    """First number in a price string ("$3.50", "approx $3"), or None."""
    if not price:
        return None
    match = _PRICE_NUMBER.search(price)
    return float(match.group(0)) if match else None


def item_display(item: ShoppingListItem) -> str:
    return " + ".join(_unique(c.text for c in item.contributions))


def item_price_display(item: ShoppingListItem) -> Optional[str]:
    prices = [c.price for c in item.contributions if c.price]
    if not prices:
        return None
    if len(prices) == 1:
        return prices[0]
    parsed = [parse_price(p) for p in prices]
    total = sum(p for p in parsed if p is not None)
    if all(p is not None for p in parsed) and total > 0:
        return f"${total:.2f}"
    return " + ".join(prices)


def item_recipes(item: ShoppingListItem) -> str:
    titles = _unique(c.recipe_title for c in item.contributions)
    if not titles:
        return ""
    if len(titles) == 1:
        return f"from {titles[0]}"
    return f"from {titles[0]} + {len(titles) - 1} others"


def store_key(store: str, shop_at: str = ANY) -> str:
    if shop_at != ANY:
        return shop_at
    s = (store or OTHER_STORE).lower()
    for known in ("Aldi", "Coles", "Woolworths"):
        if known.lower() in s:
            return known
    return OTHER_STORE


def _store_sort_key(name: str):
    if name in STORE_ORDER:
        return (0, STORE_ORDER.index(name), "")
    return (1, 0, name)


def group_by_store(items: Iterable[ShoppingListItem], shop_at: str = ANY) -> Dict[str, List[ShoppingListItem]]:
    """Group items by supermarket; a specific ``shop_at`` puts everything under that store."""
    groups: Dict[str, List[ShoppingListItem]] = {}
    for item in items:
        groups.setdefault(store_key(item.store, shop_at), []).append(item)
    return {k: groups[k] for k in sorted(groups, key=_store_sort_key)}


def estimated_total(items: Iterable[ShoppingListItem]) -> float:
    total = 0.0
    for item in items:
        for c in item.contributions:
            value = parse_price(c.price)
            if value is not None:
                total += value
    return round(total, 2)


def progress(items: List[ShoppingListItem]) -> float:
    if not items:
        return 0.0
    checked = sum(1 for i in items if i.checked)
    return checked / len(items) * 100


def product_search_url(query: str, store: str, shop_at: str = ANY) -> str:
    q = quote(normalize(query))
    target = (shop_at if shop_at != ANY else store or "").lower()
    for name, template in _SEARCH_URLS.items():
        if name in target:
            return template.format(q=q)
    return _FALLBACK_SEARCH_URL.format(q=q)


def describe_item(item: ShoppingListItem, shop_at: str = ANY) -> dict:
    """Item as stored plus its derived labels, for API responses."""
    data = item.to_dict()
    data.update({
        "display": item_display(item),
        "price": item_price_display(item),
        "recipes": item_recipes(item),
        "search_url": product_search_url(item.contributions[0].text, item.store, shop_at),
    })
    return data


def render_text(items: List[ShoppingListItem], shop_at: str = ANY) -> str:
    """Plain-text shopping list for sharing, one section per store."""
    lines = ["Shopping List"]
    for store, group in group_by_store(items, shop_at).items():
        lines.append("")
        lines.append(f"{store}:")
        for item in group:
            mark = "x" if item.checked else " "
            price = item_price_display(item)
            suffix = f" ({price})" if price else ""
            lines.append(f"[{mark}] {item_display(item)}{suffix}")
    total = estimated_total(items)
    if total > 0 and shop_at == ANY:
        lines.append("")
        lines.append(f"Estimated total: ${total:.2f}")
    return "\n".join(lines)


__all__ = [
    'parse_price', 'item_display', 'item_price_display', 'item_recipes', 'store_key',
    'group_by_store', 'estimated_total', 'progress', 'product_search_url',
    'describe_item', 'render_text',
]
