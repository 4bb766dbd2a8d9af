from datetime import date

from django.test import override_settings
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase
from .models import DailyUsage


@override_settings(TIME_ZONE='Asia/Dhaka')
class DailyUsageTestCase(APITestCase):

    def setUp(self):
        self.payload = {
            'date': '2024-01-05',
            'items': [{'name': 'Flour', 'totalKg': '12.5'}],
            'prices': [{'name': 'Flour', 'price': '55'}],
            'totalExpense': '687.50',
        }

    def test_save_defaults_optional_lists(self):
        """
        Test that retails and pieces default to empty lists.
        """
        response = self.client.post(reverse('usage-list'), self.payload, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        usage = DailyUsage.objects.get(pk=response.data['insertedId'])
        self.assertEqual(usage.date, date(2024, 1, 5))
        self.assertEqual(usage.retails, [])
        self.assertEqual(usage.pieces, [])

    def test_resubmitting_a_date_replaces_it(self):
        """
        Test that saving a date again replaces the earlier usage.
        """
        self.client.post(reverse('usage-list'), self.payload, format='json')
        self.payload['totalExpense'] = '700'
        self.client.post(reverse('usage-list'), self.payload, format='json')
        self.assertEqual(DailyUsage.objects.count(), 1)
        self.assertEqual(DailyUsage.objects.get().total_expense, '700')

    def test_timestamp_dates_are_stored_as_local_day(self):
        """
        Test that a UTC timestamp is saved under the local day.
        """
        self.payload['date'] = '2024-01-04T19:00:00.000Z'
        self.client.post(reverse('usage-list'), self.payload, format='json')
        self.assertTrue(DailyUsage.objects.filter(date=date(2024, 1, 5)).exists())

    def test_browser_date_strings_are_accepted(self):
        """
        Test that the date strings browsers produce are saved under the local day.
        """
        self.payload['date'] = 'Thu, 04 Jan 2024 18:30:00 GMT'
        response = self.client.post(reverse('usage-list'), self.payload, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertTrue(DailyUsage.objects.filter(date=date(2024, 1, 5)).exists())

        response = self.client.get(reverse('usage-by-date', kwargs={'date': 'Fri Jan 05 2024 10:00:00 GMT+0600'}))
        self.assertEqual(response.data['totalExpense'], '687.50')

    def test_invalid_date_is_rejected(self):
        """
        Test that a date that cannot be read is rejected.
        """
        self.payload['date'] = 'someday'
        response = self.client.post(reverse('usage-list'), self.payload, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_get_by_date(self):
        """
        Test that a saved day's usage can be fetched by date.
        """
        self.client.post(reverse('usage-list'), self.payload, format='json')
        response = self.client.get(reverse('usage-by-date', kwargs={'date': '2024-01-05'}))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['totalExpense'], '687.50')
        self.assertEqual(response.data['items'], self.payload['items'])

    def test_get_missing_date_returns_empty_shape(self):
        """
        Test that a day with no usage returns the empty shape, not 404.
        """
        response = self.client.get(reverse('usage-by-date', kwargs={'date': '2024-02-01'}))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, {
            'items': [], 'prices': [], 'retails': [], 'pieces': [], 'totalExpense': '0',
        })

    def test_list_day_filter_and_unsupported_grouping(self):
        """
        Test that the day listing works and other groupings are refused.
        """
        self.client.post(reverse('usage-list'), self.payload, format='json')
        response = self.client.get(reverse('usage-list'), {'filter': 'day'})
        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]['date'], '2024-01-05')

        response = self.client.get(reverse('usage-list'), {'filter': 'month'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
