import unittest

from chefgenie.domain.ShoppingList import IngredientContribution, ShoppingListItem
from chefgenie.logic.shopping.display import (
    estimated_total, group_by_store, item_display, item_price_display, item_recipes,
    parse_price, product_search_url, progress, render_text,
)


def _item(name, store="Aldi", checked=False, parts=()):
    contributions = [IngredientContribution(f"r{i}", title, text, price)
                     for i, (title, text, price) in enumerate(parts)]
    return ShoppingListItem(f"id-{name}-{store}", name, store, checked, contributions)


class TestItemLabels(unittest.TestCase):

    def test_prices_summed_when_all_numeric(self):
        item = _item("tomato", parts=[("Salad", "2 Tomatoes", "$3.50"), ("Pasta", "1 cup tomatoes", "$1.25")])
        self.assertEqual(item_price_display(item), "$4.75")

    def test_non_numeric_price_falls_back_to_joined_text(self):
        item = _item("tomato", parts=[("Salad", "2 Tomatoes", "$3.50"), ("Pasta", "Tomatoes", "market price")])
        self.assertEqual(item_price_display(item), "$3.50 + market price")

    def test_single_and_missing_price(self):
        self.assertEqual(item_price_display(_item("salt", parts=[("Soup", "Salt", "about $1")])), "about $1")
        self.assertIsNone(item_price_display(_item("salt", parts=[("Soup", "Salt", None)])))

    def test_display_joins_distinct_texts(self):
        item = _item("egg", parts=[("A", "2 Eggs", None), ("B", "2 Eggs", None), ("C", "1 egg", None)])
        self.assertEqual(item_display(item), "2 Eggs + 1 egg")

    def test_attribution(self):
        one = _item("egg", parts=[("Omelette", "Eggs", None)])
        many = _item("egg", parts=[("Omelette", "Eggs", None), ("Cake", "Eggs", None), ("Cake", "Egg", None)])
        self.assertEqual(item_recipes(one), "from Omelette")
        self.assertEqual(item_recipes(many), "from Omelette + 1 others")

    def test_parse_price(self):
        self.assertEqual(parse_price("$3.50"), 3.5)
        self.assertEqual(parse_price("approx 2"), 2.0)
        self.assertIsNone(parse_price("free"))
        self.assertIsNone(parse_price(None))


class TestListViews(unittest.TestCase):

    def setUp(self):
        self.items = [
            _item("bread", "Coles Local", parts=[("Toast", "Bread", "$2.00")]),
            _item("milk", "IGA", parts=[("Tea", "Milk", "$1.50")]),
            _item("egg", "Aldi", checked=True, parts=[("Omelette", "Eggs", "$4")]),
            _item("rice", "woolworths metro", parts=[("Curry", "Rice", None)]),
        ]

    def test_group_order_and_fallback(self):
        groups = group_by_store(self.items)
        self.assertEqual(list(groups), ["Aldi", "Woolworths", "Coles", "Other"])
        self.assertEqual([i.name for i in groups["Other"]], ["milk"])

    def test_single_store_puts_everything_together(self):
        groups = group_by_store(self.items, shop_at="Coles")
        self.assertEqual(list(groups), ["Coles"])
        self.assertEqual(len(groups["Coles"]), 4)

    def test_total_and_progress(self):
        self.assertAlmostEqual(estimated_total(self.items), 7.5)
        self.assertEqual(progress(self.items), 25.0)
        self.assertEqual(progress([]), 0.0)

    def test_search_url(self):
        self.assertIn("woolworths.com.au", product_search_url("2 cups Rice", "Woolworths"))
        self.assertIn("searchTerm=rice", product_search_url("2 cups Rice", "Woolworths"))
        self.assertIn("coles.com.au", product_search_url("Bread", "Aldi", shop_at="Coles"))
        self.assertIn("tbm=shop", product_search_url("Milk", "IGA"))

    def test_render_text(self):
        text = render_text(self.items)
        self.assertTrue(text.startswith("Shopping List"))
        self.assertIn("Aldi:", text)
        self.assertIn("[x] Eggs ($4)", text)
        self.assertIn("Estimated total: $7.50", text)


if __name__ == '__main__':
    unittest.main()
