from datetime import date, datetime, timezone as dt_timezone
from decimal import Decimal

from django.test import SimpleTestCase, override_settings

from core.utils import exceeds_money_range, parse_date_key, round_money, to_date_key, to_money


@override_settings(TIME_ZONE='Asia/Dhaka')
class DateKeyTests(SimpleTestCase):

    def test_plain_key_is_returned_unchanged(self):
        """
        Test that a YYYY-MM-DD key comes back unchanged.
        """
        self.assertEqual(to_date_key('2024-01-05'), '2024-01-05')

    def test_empty_input(self):
        """
        Test that empty or missing input gives no date.
        """
        self.assertEqual(to_date_key(''), '')
        self.assertEqual(to_date_key(None), '')
        self.assertIsNone(parse_date_key(''))

    def test_impossible_calendar_day_is_rejected(self):
        """
        Test that a well-formed key naming a day that does not exist is rejected.
        """
        self.assertEqual(to_date_key('2024-02-30'), '')

    def test_utc_timestamp_uses_local_day(self):
        """
        Test that an aware ISO timestamp is converted to the local day first.
        """
        # 18:30 UTC is 00:30 the next day in Dhaka (UTC+6)
        self.assertEqual(to_date_key('2024-01-04T18:30:00.000Z'), '2024-01-05')
        self.assertEqual(to_date_key('2024-01-04T10:00:00+00:00'), '2024-01-04')

    def test_naive_timestamp_is_local(self):
        """
        Test that a naive timestamp is taken as local time.
        """
        self.assertEqual(to_date_key('2024-01-04T23:59:00'), '2024-01-04')

    def test_date_and_datetime_objects(self):
        """
        Test that date and datetime objects are accepted directly.
        """
        self.assertEqual(to_date_key(date(2024, 3, 1)), '2024-03-01')
        aware = datetime(2024, 3, 1, 20, 0, tzinfo=dt_timezone.utc)
        self.assertEqual(parse_date_key(aware), date(2024, 3, 2))

    def test_garbage(self):
        """
        Test that text that is not a date gives an empty key.
        """
        self.assertEqual(to_date_key('not a date'), '')

    def test_http_date_uses_local_day(self):
        """
        Test that a toUTCString() date is converted to the local day.
        """
        self.assertEqual(to_date_key('Thu, 04 Jan 2024 18:30:00 GMT'), '2024-01-05')
        self.assertEqual(to_date_key('Thu, 04 Jan 2024 10:00:00 GMT'), '2024-01-04')

    def test_js_date_string_uses_local_day(self):
        """
        Test that a Date toString() value, zone name and all, gives the local day.
        """
        self.assertEqual(
            to_date_key('Fri Jan 05 2024 00:30:00 GMT+0600 (Bangladesh Standard Time)'), '2024-01-05',
        )
        self.assertEqual(to_date_key('Thu Jan 04 2024 20:00:00 GMT+0000'), '2024-01-05')
        self.assertEqual(to_date_key('Thu Jan 04 2024 20:00:00 GMT-0500 (Eastern Standard Time)'), '2024-01-05')

    def test_slash_separated_days(self):
        """
        Test that slash-separated calendar days are accepted as they are.
        """
        self.assertEqual(to_date_key('2024/01/05'), '2024-01-05')
        self.assertEqual(to_date_key('2024/1/5'), '2024-01-05')
        self.assertEqual(to_date_key('01/05/2024'), '2024-01-05')
        self.assertEqual(to_date_key('2024/02/30'), '')
        self.assertEqual(to_date_key('13/01/2024'), '')


class MoneyTests(SimpleTestCase):

    def test_numbers_and_numeric_strings(self):
        """
        Test that numbers and numeric strings become Decimals.
        """
        self.assertEqual(to_money(30), Decimal('30'))
        self.assertEqual(to_money('12.50'), Decimal('12.50'))
        self.assertEqual(to_money(120.555), Decimal('120.555'))

    def test_missing_and_bad_values_are_zero(self):
        """
        Test that missing, blank and non-numeric amounts count as 0.
        """
        for value in (None, '', '   ', 'abc', True, 'NaN', 'Infinity', [1]):
            with self.subTest(value=value):
                self.assertEqual(to_money(value), Decimal('0'))

    def test_round_half_up(self):
        """
        Test that rounding to cents is half up.
        """
        self.assertEqual(round_money(Decimal('150.555')), Decimal('150.56'))
        self.assertEqual(round_money('110.554'), Decimal('110.55'))
        self.assertEqual(round_money(None), Decimal('0.00'))

    def test_out_of_range_amounts_are_zero(self):
        """
        Test that a number too large for a money column counts as 0.
        """
        self.assertEqual(to_money('1e30'), Decimal('0'))
        self.assertEqual(to_money(-10_000_000_000), Decimal('0'))
        self.assertEqual(to_money('9999999999.99'), Decimal('9999999999.99'))
        self.assertEqual(round_money('1e30'), Decimal('0.00'))
        self.assertEqual(round_money(Decimal('1e30')), Decimal('0.00'))

    def test_exceeds_money_range(self):
        """
        Test that only real numbers past the column limit are flagged.
        """
        self.assertTrue(exceeds_money_range('1e30'))
        self.assertTrue(exceeds_money_range(Decimal('1e10')))
        self.assertFalse(exceeds_money_range('9999999999.99'))
        self.assertFalse(exceeds_money_range('abc'))
        self.assertFalse(exceeds_money_range(None))
