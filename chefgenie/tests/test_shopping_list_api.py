import unittest
import tempfile

from fastapi.testclient import TestClient

from chefgenie.api.api_run import create_app
from chefgenie.domain.Ingredient import Ingredient
from chefgenie.infra.State_Repository import StateRepository
from chefgenie.tests.conftest import FakeOracle, build_recipe


class TestShoppingListAPI(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.repo = StateRepository(self._tmp.name)
        batches = [
            [build_recipe("Greek Salad", ingredients=[
                Ingredient("2 Tomatoes", "Aldi", "$3.50"), Ingredient("Feta", "Coles", "$4.00")])],
            [build_recipe("Tomato Pasta", ingredients=[
                Ingredient("1 cup (chopped) tomatoes", "Aldi", "$1.25")])],
            [],
        ]
        self.client = TestClient(create_app(self.repo, oracle=FakeOracle(batches=batches), auto_images=False))
        recipes = self.client.post('/api/recipes/search', json={"meal_type": "Dinner"}).json()['recipes']
        self.ids = {r['title']: r['id'] for r in recipes}

    def tearDown(self):
        self._tmp.cleanup()

    def toggle(self, title):
        return self.client.post('/api/shopping-list/toggle-recipe', json={"recipe_id": self.ids[title]})

    def test_merge_and_labels(self):
        self.assertTrue(self.toggle("Greek Salad").json()['inShoppingList'])
        self.toggle("Tomato Pasta")
        data = self.client.get('/api/shopping-list').json()
        self.assertEqual(data['count'], 2)
        tomato = next(i for i in data['items'] if i['name'] == 'tomato')
        self.assertEqual(tomato['price'], '$4.75')
        self.assertEqual(tomato['display'], '2 Tomatoes + 1 cup (chopped) tomatoes')
        self.assertEqual(tomato['recipes'], 'from Greek Salad + 1 others')
        self.assertEqual([g['store'] for g in data['groups']], ['Aldi', 'Coles'])
        self.assertAlmostEqual(data['estimated_total'], 8.75)
        self.assertEqual(len(self.repo.load_shopping_list()), 2)

    def test_toggle_recipe_off_retracts(self):
        self.toggle("Greek Salad")
        self.toggle("Tomato Pasta")
        self.assertFalse(self.toggle("Greek Salad").json()['inShoppingList'])
        items = self.client.get('/api/shopping-list').json()['items']
        self.assertEqual([i['name'] for i in items], ['tomato'])
        self.assertEqual(len(items[0]['contributions']), 1)

    def test_check_remove_and_clear(self):
        self.toggle("Greek Salad")
        items = self.client.get('/api/shopping-list').json()['items']
        item_id = items[0]['id']
        resp = self.client.post(f'/api/shopping-list/items/{item_id}/toggle')
        self.assertTrue(resp.json()['checked'])
        self.assertEqual(self.client.get('/api/shopping-list').json()['progress'], 50.0)
        self.assertEqual(self.client.delete(f'/api/shopping-list/items/{item_id}').status_code, 200)
        self.assertEqual(self.client.delete(f'/api/shopping-list/items/{item_id}').status_code, 404)
        self.assertEqual(self.client.post('/api/shopping-list/items/missing/toggle').status_code, 404)
        self.assertEqual(self.client.delete('/api/shopping-list').json()['count'], 0)

    def test_single_store_view(self):
        self.toggle("Greek Salad")
        data = self.client.get('/api/shopping-list?shop_at=Woolworths').json()
        self.assertEqual([g['store'] for g in data['groups']], ['Woolworths'])
        self.assertIn('woolworths.com.au', data['items'][0]['search_url'])
        self.assertEqual(self.client.get('/api/shopping-list?shop_at=IGA').status_code, 422)

    def test_exports(self):
        self.toggle("Greek Salad")
        resp = self.client.get('/api/shopping-list/pdf')
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.headers['content-type'], 'application/pdf')
        self.assertTrue(resp.content.startswith(b'%PDF'))
        text = self.client.get('/api/shopping-list/text').text
        self.assertIn('Aldi:', text)
        self.assertIn('[ ] 2 Tomatoes ($3.50)', text)

    def test_empty_list_pdf(self):
        resp = self.client.get('/api/shopping-list/pdf')
        self.assertTrue(resp.content.startswith(b'%PDF'))


if __name__ == '__main__':
    unittest.main()
