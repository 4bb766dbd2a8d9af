from datetime import date
from decimal import Decimal

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from catalog.models import Item
from .models import Salesman, SalesmanOrder, HomeStock


class SalesmanApiTestCase(APITestCase):

    def setUp(self):
        self.rahim = Salesman.objects.create(name="Rahim", phone="01711000000")

    def test_list_oldest_first(self):
        """
        Test that salesmen are listed oldest first.
        """
        Salesman.objects.create(name="Karim")
        response = self.client.get(reverse('salesman-list'))
        self.assertEqual([s['name'] for s in response.data], ["Rahim", "Karim"])

    def test_create_without_phone(self):
        """
        Test that a salesman created without a phone gets an empty one.
        """
        response = self.client.post(reverse('salesman-list'), {'name': 'Karim'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(Salesman.objects.get(pk=response.data['insertedId']).phone, '')

    def test_duplicate_and_missing_name(self):
        """
        Test that duplicate and missing names are rejected.
        """
        response = self.client.post(reverse('salesman-list'), {'name': 'Rahim'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        response = self.client.post(reverse('salesman-list'), {'phone': '1'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_update_without_phone_clears_it(self):
        """
        Test that an update that leaves out the phone clears it.
        """
        url = reverse('salesman-detail', kwargs={'id': self.rahim.id})
        response = self.client.put(url, {'name': 'Rahim Mia'}, format='json')
        self.assertEqual(response.data, {"modifiedCount": 1})
        self.rahim.refresh_from_db()
        self.assertEqual(self.rahim.name, 'Rahim Mia')
        self.assertEqual(self.rahim.phone, '')

    def test_delete(self):
        """
        Test that a salesman can be deleted.
        """
        response = self.client.delete(reverse('salesman-detail', kwargs={'id': self.rahim.id}))
        self.assertEqual(response.data, {"deletedCount": 1})


class SalesmanOrderApiTestCase(APITestCase):

    def setUp(self):
        self.rahim = Salesman.objects.create(name="Rahim")
        self.bread = Item.objects.create(name="Bread", price="30")

    def order(self, qty, day='2024-01-05'):
        return self.client.post(reverse('salesman-order-list'), {
            'salesmanId': self.rahim.id, 'itemId': self.bread.id, 'qty': qty, 'date': day,
        }, format='json')

    def test_post_upserts_by_salesman_item_date(self):
        """
        Test that posting the same salesman, item and date updates the quantity.
        """
        response = self.order(10)
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertIsNotNone(response.data['upserted'])
        self.assertEqual(response.data['modified'], 0)

        response = self.order(12)
        self.assertIsNone(response.data['upserted'])
        self.assertEqual(response.data['modified'], 1)
        self.assertEqual(SalesmanOrder.objects.count(), 1)
        self.assertEqual(SalesmanOrder.objects.get().qty, Decimal('12'))

    def test_post_requires_keys(self):
        """
        Test that an order needs a salesman, an item and a date.
        """
        response = self.client.post(reverse('salesman-order-list'), {'qty': 3}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data, {"error": "salesmanId, itemId, date required"})

    def test_list_filters_by_date(self):
        """
        Test that orders can be listed for a single day.
        """
        self.order(10, '2024-01-05')
        self.order(4, '2024-01-06')
        response = self.client.get(reverse('salesman-order-list'), {'date': '2024-01-06'})
        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]['date'], '2024-01-06')
        self.assertEqual(response.data[0]['salesmanId'], self.rahim.id)

    def test_put_changes_quantity(self):
        """
        Test that PUT changes only the quantity and requires it.
        """
        self.order(10)
        order = SalesmanOrder.objects.get()
        url = reverse('salesman-order-detail', kwargs={'id': order.id})
        response = self.client.put(url, {'qty': 7}, format='json')
        self.assertEqual(response.data, {"modifiedCount": 1})
        order.refresh_from_db()
        self.assertEqual(order.qty, Decimal('7'))

        response = self.client.put(url, {}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_summary_combines_orders_and_ghorer_mal(self):
        """
        Test that the day summary returns orders and ghorer mal together.
        """
        self.order(10)
        response = self.client.post(reverse('ghorer-mal'), {
            'itemId': self.bread.id, 'qty': 3, 'date': '2024-01-05',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(HomeStock.objects.get().date, date(2024, 1, 5))

        response = self.client.get(reverse('salesman-summary', kwargs={'date': '2024-01-05'}))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data['orders']), 1)
        self.assertEqual(len(response.data['ghorerMal']), 1)
        self.assertEqual(response.data['ghorerMal'][0]['itemId'], self.bread.id)
