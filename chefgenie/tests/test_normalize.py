import unittest
from chefgenie.logic.shopping.normalize import normalize


class TestNormalize(unittest.TestCase):

    def test_quantity_unit_and_parentheses_removed(self):
        self.assertEqual(normalize("2 cups (diced) Tomatoes"), "tomato")

    def test_unit_glued_to_number(self):
        self.assertEqual(normalize("500g Chicken Breasts"), "chicken breast")

    def test_of_after_unit(self):
        self.assertEqual(normalize("1 can of chickpeas"), "chickpea")

    def test_fraction_and_spoon_unit(self):
        self.assertEqual(normalize("1/2 tsp Salt"), "salt")

    def test_punctuation_removed(self):
        self.assertEqual(normalize("3 cloves garlic, crushed!"), "garlic crushed")

    def test_plain_plural(self):
        self.assertEqual(normalize("Eggs"), "egg")
        self.assertEqual(normalize("4 Lemons"), "lemon")

    def test_double_s_and_short_words_kept(self):
        self.assertEqual(normalize("Watercress"), "watercress")
        self.assertEqual(normalize("gas"), "gas")

    def test_degenerate_input(self):
        self.assertEqual(normalize("12345"), "")
        self.assertEqual(normalize(""), "")
        self.assertEqual(normalize("(optional)"), "")

    def test_idempotent(self):
        samples = [
            "2 cups (diced) Tomatoes", "500g Chicken Breasts", "1 can of chickpeas",
            "1/2 tsp Salt", "Eggs", "Watercress", "12345", "3 cloves garlic, crushed!",
            "200 ml coconut milk", "1 bunch Coriander (fresh)", "2 Potatoes",
        ]
        for text in samples:
            once = normalize(text)
            self.assertEqual(normalize(once), once, text)


if __name__ == '__main__':
    unittest.main()
