from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase
from .models import Item, Ingredient


class ItemApiTestCase(APITestCase):

    def setUp(self):
        self.bread = Item.objects.create(name="Bread", price="30")
        self.cake = Item.objects.create(name="Cake")

    def test_list_items_newest_first(self):
        """
        Test that items are listed newest first with a missing price as "".
        """
        response = self.client.get(reverse('item-list'))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([i['name'] for i in response.data], ["Cake", "Bread"])
        self.assertEqual(response.data[0]['price'], "")

    def test_create_item(self):
        """
        Test that an item can be created and its id is returned.
        """
        response = self.client.post(reverse('item-list'), {'name': 'Bun', 'price': 10}, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        item = Item.objects.get(pk=response.data['insertedId'])
        self.assertEqual(item.price, "10")

    def test_create_requires_name(self):
        """
        Test that creating an item without a name is rejected.
        """
        response = self.client.post(reverse('item-list'), {'price': '5'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data, {"error": "Name required"})

    def test_duplicate_name_conflicts(self):
        """
        Test that a second item with the same name is a conflict.
        """
        response = self.client.post(reverse('item-list'), {'name': 'Bread'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(Item.objects.filter(name='Bread').count(), 1)

    def test_update_keeps_price_when_not_sent(self):
        """
        Test that renaming an item leaves its price alone.
        """
        url = reverse('item-detail', kwargs={'id': self.bread.id})
        response = self.client.put(url, {'name': 'Brown Bread'}, format='json')
        self.assertEqual(response.data, {"modifiedCount": 1})
        self.bread.refresh_from_db()
        self.assertEqual(self.bread.name, 'Brown Bread')
        self.assertEqual(self.bread.price, '30')

    def test_update_unknown_id(self):
        """
        Test that updating a missing item modifies nothing.
        """
        url = reverse('item-detail', kwargs={'id': 9999})
        response = self.client.put(url, {'name': 'Ghost'}, format='json')
        self.assertEqual(response.data, {"modifiedCount": 0})

    def test_delete_item(self):
        """
        Test that an item can be deleted.
        """
        url = reverse('item-detail', kwargs={'id': self.cake.id})
        response = self.client.delete(url)
        self.assertEqual(response.data, {"deletedCount": 1})
        self.assertFalse(Item.objects.filter(pk=self.cake.id).exists())


class IngredientApiTestCase(APITestCase):

    def test_create_and_manage_listing(self):
        """
        Test that the manage view lists items and ingredients together.
        """
        Item.objects.create(name="Bread", price="30")
        response = self.client.post(reverse('ingredient-list'), {'name': 'Flour', 'price': '55'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

        response = self.client.get(reverse('manage-catalog'))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([i['name'] for i in response.data['items']], ['Bread'])
        self.assertEqual([i['name'] for i in response.data['ingredients']], ['Flour'])

    def test_ingredient_names_are_independent_of_items(self):
        """
        Test that an ingredient may share a name with an item.
        """
        Item.objects.create(name="Sugar")
        response = self.client.post(reverse('ingredient-list'), {'name': 'Sugar'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(Ingredient.objects.count(), 1)
