from datetime import date
from decimal import Decimal
from io import StringIO

from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import SimpleTestCase, TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from salesmen.models import Salesman
from .ledger import DueLedger, compute_dues
from .models import DailySale, DueRecalculation, RecalculationStatus
from .services import daily_summary, submit_daily_sales
from .store import DailySaleStore, StoreError, closing_due_of


def make_sale(salesman, day, totals=(), deposit='0', **dues):
    return DailySale.objects.create(
        salesman=salesman,
        date=day,
        categories=[{'name': f'line {i}', 'total': total} for i, total in enumerate(totals)],
        deposit=Decimal(deposit),
        **dues,
    )


def dues_of(sale):
    sale.refresh_from_db()
    return sale.prev_due, sale.total_amount, sale.total_due, sale.curr_due


class FlakyStore(DailySaleStore):
    """A store that fails on demand, to exercise the ledger's failure paths."""

    def __init__(self, fail_on_update=None, fail_cascade_fetch=False):
        super().__init__()
        self.fail_on_update = fail_on_update
        self.fail_cascade_fetch = fail_cascade_fetch
        self.updates = 0

    def entries_after(self, salesman_id, day):
        if self.fail_cascade_fetch:
            raise StoreError("connection reset")
        return super().entries_after(salesman_id, day)

    def update_dues(self, pk, dues):
        self.updates += 1
        if self.updates == self.fail_on_update:
            raise StoreError("write timed out")
        super().update_dues(pk, dues)


class CrashingStore(DailySaleStore):
    """A store that blows up unexpectedly for one salesman's later records."""

    def __init__(self, crash_for):
        super().__init__()
        self.crash_for = crash_for

    def entries_after(self, salesman_id, day):
        if salesman_id == self.crash_for:
            raise RuntimeError("unexpected store state")
        return super().entries_after(salesman_id, day)


class ComputeDuesTests(SimpleTestCase):

    def test_arithmetic_rounds_each_field(self):
        """
        Test that each due field is worked out and rounded half up.
        """
        dues = compute_dues(Decimal('10'), [{'total': 120.555}, {'total': 30}], Decimal('50'))
        self.assertEqual(dues.total_amount, Decimal('150.56'))
        self.assertEqual(dues.total_due, Decimal('160.56'))
        self.assertEqual(dues.curr_due, Decimal('110.56'))
        self.assertEqual(dues.prev_due, Decimal('10.00'))

    def test_bad_amounts_count_as_zero(self):
        """
        Test that unreadable totals and deposits count as 0.
        """
        dues = compute_dues(Decimal('5'), [{'total': 'abc'}, {'name': 'no total'}, 'junk', {'total': '20'}], 'n/a')
        self.assertEqual(dues.total_amount, Decimal('20.00'))
        self.assertEqual(dues.total_due, Decimal('25.00'))
        self.assertEqual(dues.curr_due, Decimal('25.00'))

    def test_out_of_range_amount_counts_as_zero(self):
        """
        Test that a total too large for a money column is ignored like bad data.
        """
        with self.assertLogs('core.utils', level='WARNING'):
            dues = compute_dues(Decimal('10'), [{'total': '1e30'}, {'total': 5}], '1e30')
        self.assertEqual(dues.total_amount, Decimal('5.00'))
        self.assertEqual(dues.curr_due, Decimal('15.00'))

    def test_no_categories(self):
        """
        Test that a day with no sale lines only carries the balance.
        """
        dues = compute_dues(Decimal('40'), None, Decimal('15'))
        self.assertEqual(dues.total_amount, Decimal('0.00'))
        self.assertEqual(dues.curr_due, Decimal('25.00'))

    def test_closing_due_alias_chain(self):
        """
        Test that the closing due falls back through the older column names.
        """
        self.assertEqual(closing_due_of(Decimal('3'), Decimal('4'), Decimal('5')), Decimal('3'))
        self.assertEqual(closing_due_of(None, Decimal('75'), Decimal('5')), Decimal('75'))
        self.assertEqual(closing_due_of(None, None, Decimal('5')), Decimal('5'))
        self.assertEqual(closing_due_of(Decimal('0'), Decimal('75')), Decimal('0'))
        self.assertEqual(closing_due_of(None, None, None), Decimal('0'))


class DueLedgerTests(TestCase):

    def setUp(self):
        self.rahim = Salesman.objects.create(name="Rahim")
        self.karim = Salesman.objects.create(name="Karim")
        self.ledger = DueLedger(DailySaleStore())

    def test_chain_continuity_after_anchor(self):
        """
        Test that every later record carries the previous record's closing due.
        """
        make_sale(self.rahim, date(2024, 1, 1), [100], '20', prev_due=Decimal('0'), curr_due=Decimal('80'))
        d2 = make_sale(self.rahim, date(2024, 1, 2), [50], '10', prev_due=Decimal('999'), curr_due=Decimal('999'))
        d3 = make_sale(self.rahim, date(2024, 1, 4), [25.5], '0')

        result = self.ledger.recalculate(self.rahim.pk, date(2024, 1, 1))

        self.assertEqual(result.status, RecalculationStatus.SUCCEEDED)
        self.assertEqual((result.updated, result.total), (2, 2))
        self.assertEqual(dues_of(d2), (Decimal('80.00'), Decimal('50.00'), Decimal('130.00'), Decimal('120.00')))
        self.assertEqual(dues_of(d3), (Decimal('120.00'), Decimal('25.50'), Decimal('145.50'), Decimal('145.50')))
        self.assertEqual(d3.prev_due, d2.curr_due)

    def test_arithmetic_of_a_cascaded_record(self):
        """
        Test that a rewritten record has the expected rounded dues.
        """
        make_sale(self.rahim, date(2024, 1, 1), curr_due=Decimal('10'))
        sale = make_sale(self.rahim, date(2024, 1, 2), [120.555, 30], '50')

        self.ledger.recalculate(self.rahim.pk, date(2024, 1, 1))

        self.assertEqual(dues_of(sale), (Decimal('10.00'), Decimal('150.56'), Decimal('160.56'), Decimal('110.56')))

    def test_calendar_gaps_use_nearest_earlier_record(self):
        """
        Test that a gap in days still carries the nearest earlier balance.
        """
        make_sale(self.rahim, date(2024, 1, 1), curr_due=Decimal('100'))
        later = make_sale(self.rahim, date(2024, 1, 5), [10], '0')

        self.ledger.recalculate(self.rahim.pk, '2024-01-01')

        later.refresh_from_db()
        self.assertEqual(later.prev_due, Decimal('100.00'))

    def test_anchor_without_record_seeds_from_nearest_earlier(self):
        """
        Test that an anchor day without a record seeds from the nearest earlier one.
        """
        make_sale(self.rahim, date(2024, 1, 1), curr_due=Decimal('60'))
        later = make_sale(self.rahim, date(2024, 1, 7), [10], '0')

        result = self.ledger.recalculate(self.rahim.pk, date(2024, 1, 3))

        self.assertEqual(result.seed, Decimal('60.00'))
        later.refresh_from_db()
        self.assertEqual(later.prev_due, Decimal('60.00'))

    def test_legacy_current_due_seeds_the_cascade(self):
        """
        Test that an old record's current_due seeds the walk.
        """
        make_sale(self.rahim, date(2024, 1, 1), curr_due=None, current_due=Decimal('75'))
        later = make_sale(self.rahim, date(2024, 1, 2), [0], '0')

        result = self.ledger.recalculate(self.rahim.pk, date(2024, 1, 1))

        self.assertEqual(result.seed, Decimal('75.00'))
        later.refresh_from_db()
        self.assertEqual(later.prev_due, Decimal('75.00'))

    def test_legacy_due_is_the_last_fallback(self):
        """
        Test that an old record's due is used when nothing newer is set.
        """
        make_sale(self.rahim, date(2024, 1, 1), curr_due=None, due=Decimal('12.5'))
        self.assertEqual(self.ledger.seed_for(self.rahim.pk, date(2024, 1, 1)), Decimal('12.5'))

    def test_no_seed_record_starts_at_zero(self):
        """
        Test that a salesman with no earlier record starts from 0.
        """
        first = make_sale(self.rahim, date(2024, 1, 3), [40], '10', prev_due=Decimal('55'))

        result = self.ledger.recalculate(self.rahim.pk, date(2024, 1, 1))

        self.assertEqual(result.seed, Decimal('0.00'))
        self.assertEqual(dues_of(first), (Decimal('0.00'), Decimal('40.00'), Decimal('40.00'), Decimal('30.00')))

    def test_running_twice_changes_nothing(self):
        """
        Test that recalculating twice leaves the same values.
        """
        make_sale(self.rahim, date(2024, 1, 1), [10], '0', curr_due=Decimal('10'))
        sales = [
            make_sale(self.rahim, date(2024, 1, d), [12.345, 'x'], '3.333')
            for d in (2, 3, 6)
        ]
        self.ledger.recalculate(self.rahim.pk, date(2024, 1, 1))
        first_run = [dues_of(s) for s in sales]

        result = self.ledger.recalculate(self.rahim.pk, date(2024, 1, 1))

        self.assertTrue(result.ok)
        self.assertEqual([dues_of(s) for s in sales], first_run)

    def test_other_salesmen_are_untouched(self):
        """
        Test that only the given salesman's records are rewritten.
        """
        make_sale(self.rahim, date(2024, 1, 1), curr_due=Decimal('10'))
        other = make_sale(self.karim, date(2024, 1, 2), [5], '0', prev_due=Decimal('7'), curr_due=Decimal('12'))

        self.ledger.recalculate(self.rahim.pk, date(2024, 1, 1))

        self.assertEqual(dues_of(other)[0], Decimal('7.00'))
        self.assertEqual(dues_of(other)[3], Decimal('12.00'))

    def test_empty_cascade_succeeds(self):
        """
        Test that a walk with nothing after the anchor succeeds.
        """
        make_sale(self.rahim, date(2024, 1, 1), curr_due=Decimal('10'))
        result = self.ledger.recalculate(self.rahim.pk, date(2024, 1, 1))
        self.assertEqual(result.status, RecalculationStatus.SUCCEEDED)
        self.assertEqual(result.total, 0)

    def test_out_of_range_total_does_not_stop_the_walk(self):
        """
        Test that a stored total too large to round counts as 0 and the walk continues.
        """
        make_sale(self.rahim, date(2024, 1, 1), curr_due=Decimal('10'))
        huge = make_sale(self.rahim, date(2024, 1, 2), ['1e30', 5], '0')
        after = make_sale(self.rahim, date(2024, 1, 3), [1], '0')

        with self.assertLogs('core.utils', level='WARNING'):
            result = self.ledger.recalculate(self.rahim.pk, date(2024, 1, 1))

        self.assertEqual(result.status, RecalculationStatus.SUCCEEDED)
        self.assertEqual(dues_of(huge), (Decimal('10.00'), Decimal('5.00'), Decimal('15.00'), Decimal('15.00')))
        self.assertEqual(dues_of(after)[0], Decimal('15.00'))

    def test_missing_input_is_rejected_before_store_access(self):
        """
        Test that a missing salesman or date is rejected without touching the store.
        """
        store = FlakyStore(fail_cascade_fetch=True)
        for salesman_id, day in ((None, date(2024, 1, 1)), (self.rahim.pk, ''), (self.rahim.pk, 'garbage')):
            with self.subTest(salesman_id=salesman_id, day=day):
                result = DueLedger(store).recalculate(salesman_id, day)
                self.assertEqual(result.status, RecalculationStatus.INVALID_INPUT)

    def test_fetch_failure_reports_store_error(self):
        """
        Test that a failed read reports a store error and changes nothing.
        """
        make_sale(self.rahim, date(2024, 1, 1), curr_due=Decimal('10'))
        later = make_sale(self.rahim, date(2024, 1, 2), [5], '0', prev_due=Decimal('1'))

        with self.assertLogs('sales.ledger', level='ERROR'):
            result = DueLedger(FlakyStore(fail_cascade_fetch=True)).recalculate(self.rahim.pk, date(2024, 1, 1))

        self.assertEqual(result.status, RecalculationStatus.STORE_ERROR)
        self.assertIn("connection reset", result.error)
        later.refresh_from_db()
        self.assertEqual(later.prev_due, Decimal('1.00'))

    def test_failure_mid_walk_keeps_completed_updates(self):
        """
        Test that a failed write part way keeps earlier updates and a re-run repairs the rest.
        """
        make_sale(self.rahim, date(2024, 1, 1), curr_due=Decimal('10'))
        d2 = make_sale(self.rahim, date(2024, 1, 2), [5], '0', prev_due=Decimal('1'))
        d3 = make_sale(self.rahim, date(2024, 1, 3), [5], '0', prev_due=Decimal('1'))
        d4 = make_sale(self.rahim, date(2024, 1, 4), [5], '0', prev_due=Decimal('1'))

        with self.assertLogs('sales.ledger', level='ERROR'):
            result = DueLedger(FlakyStore(fail_on_update=2)).recalculate(self.rahim.pk, date(2024, 1, 1))

        self.assertEqual(result.status, RecalculationStatus.PARTIAL)
        self.assertEqual((result.updated, result.total), (1, 3))
        self.assertEqual(dues_of(d2)[0], Decimal('10.00'))
        self.assertEqual(dues_of(d3)[0], Decimal('1.00'))

        # re-running from the same anchor repairs the rest of the chain
        self.assertTrue(self.ledger.recalculate(self.rahim.pk, date(2024, 1, 1)).ok)
        self.assertEqual(dues_of(d3)[0], Decimal('15.00'))
        self.assertEqual(dues_of(d4)[0], Decimal('20.00'))

    def test_failure_on_first_write_is_a_store_error(self):
        """
        Test that a failed first write is a store error, not partial.
        """
        make_sale(self.rahim, date(2024, 1, 2), [5], '0')
        with self.assertLogs('sales.ledger', level='ERROR'):
            result = DueLedger(FlakyStore(fail_on_update=1)).recalculate(self.rahim.pk, date(2024, 1, 1))
        self.assertEqual(result.status, RecalculationStatus.STORE_ERROR)
        self.assertEqual(result.updated, 0)


class SubmitDailySalesTests(TestCase):

    def setUp(self):
        self.rahim = Salesman.objects.create(name="Rahim")
        self.karim = Salesman.objects.create(name="Karim")

    def test_failed_recalculation_does_not_undo_submission(self):
        """
        Test that a failed cascade keeps the batch and can be retried from the command.
        """
        make_sale(self.rahim, date(2024, 1, 1), curr_due=Decimal('100'))
        later = make_sale(self.rahim, date(2024, 1, 10), [50], '20', prev_due=Decimal('100'))
        entries = [{'salesman': self.rahim, 'categories': [{'name': 'Bread', 'total': 200}], 'deposit': 50}]

        with self.assertLogs('sales', level='ERROR'):
            result = submit_daily_sales(
                date(2024, 1, 5), entries, ledger=DueLedger(FlakyStore(fail_cascade_fetch=True)),
            )

        self.assertEqual(result.inserted, 1)
        sale = DailySale.objects.get(salesman=self.rahim, date=date(2024, 1, 5))
        self.assertEqual(sale.curr_due, Decimal('250.00'))
        task = result.recalculations[0]
        self.assertEqual(task.status, RecalculationStatus.STORE_ERROR)
        later.refresh_from_db()
        self.assertEqual(later.prev_due, Decimal('100.00'))

        out = StringIO()
        call_command('recalculate_dues', '--retry-failed', stdout=out)

        task.refresh_from_db()
        self.assertEqual(task.status, RecalculationStatus.SUCCEEDED)
        self.assertEqual(task.attempts, 2)
        later.refresh_from_db()
        self.assertEqual(later.prev_due, Decimal('250.00'))
        self.assertEqual(later.curr_due, Decimal('280.00'))

    def test_unexpected_error_fails_only_that_salesman(self):
        """
        Test that a crashing cascade is recorded as failed and the rest of the batch still runs.
        """
        karim_later = make_sale(self.karim, date(2024, 1, 10), [10], '0', prev_due=Decimal('0'))
        entries = [
            {'salesman': self.rahim, 'categories': [{'name': 'Bread', 'total': 5}], 'deposit': 0},
            {'salesman': self.karim, 'categories': [{'name': 'Cake', 'total': 20}], 'deposit': 0},
        ]

        with self.assertLogs('sales.services', level='ERROR'):
            result = submit_daily_sales(date(2024, 1, 5), entries, ledger=DueLedger(CrashingStore(self.rahim.pk)))

        rahim_task, karim_task = result.recalculations
        rahim_task.refresh_from_db()
        karim_task.refresh_from_db()
        self.assertEqual(rahim_task.status, RecalculationStatus.FAILED)
        self.assertIn('RuntimeError', rahim_task.error_message)
        self.assertEqual(karim_task.status, RecalculationStatus.SUCCEEDED)
        karim_later.refresh_from_db()
        self.assertEqual(karim_later.prev_due, Decimal('20.00'))

        call_command('recalculate_dues', '--retry-failed', stdout=StringIO())
        rahim_task.refresh_from_db()
        self.assertEqual(rahim_task.status, RecalculationStatus.SUCCEEDED)

    def test_summary_for_salesman_without_record(self):
        """
        Test that a salesman with no record carries the opening balance through.
        """
        make_sale(self.karim, date(2024, 1, 1), curr_due=Decimal('33.3'))
        summary = daily_summary(date(2024, 1, 2), [self.karim])
        self.assertEqual(summary[0]['prevDue'], '33.30')
        self.assertEqual(summary[0]['totalDue'], '33.30')
        self.assertEqual(summary[0]['currDue'], '33.30')
        self.assertEqual(summary[0]['totalAmount'], '0.00')
        self.assertEqual(summary[0]['deposit'], '0.00')
        self.assertEqual(summary[0]['categories'], [])
        self.assertFalse(summary[0]['hasRecord'])


class DailySalesApiTestCase(APITestCase):

    def setUp(self):
        self.rahim = Salesman.objects.create(name="Rahim")
        self.karim = Salesman.objects.create(name="Karim")

    def submit(self, day, entries):
        return self.client.post(reverse('daily-sales-submit'), {'date': day, 'entries': entries}, format='json')

    def test_submission_computes_dues_and_cascades_forward(self):
        """
        Test that a submission works out the day's dues and rewrites later days.
        """
        make_sale(self.rahim, date(2024, 1, 1), curr_due=Decimal('100'))
        later = make_sale(self.rahim, date(2024, 1, 10), [50], '20', prev_due=Decimal('100'), curr_due=Decimal('130'))

        response = self.submit('2024-01-05', [
            {'salesmanId': self.rahim.pk, 'categories': [{'name': 'Bread', 'total': 200}], 'deposit': 50},
            {'salesmanId': self.karim.pk, 'categories': [{'name': 'Cake', 'total': '80'}], 'deposit': ''},
        ])

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['insertedCount'], 2)
        self.assertEqual(
            [r['status'] for r in response.data['recalculations']],
            [RecalculationStatus.SUCCEEDED, RecalculationStatus.SUCCEEDED],
        )

        sale = DailySale.objects.get(salesman=self.rahim, date=date(2024, 1, 5))
        self.assertEqual(dues_of(sale), (Decimal('100.00'), Decimal('200.00'), Decimal('300.00'), Decimal('250.00')))
        self.assertEqual(dues_of(later), (Decimal('250.00'), Decimal('50.00'), Decimal('300.00'), Decimal('280.00')))

        karim_sale = DailySale.objects.get(salesman=self.karim, date=date(2024, 1, 5))
        self.assertEqual(karim_sale.prev_due, Decimal('0.00'))
        self.assertEqual(karim_sale.curr_due, Decimal('80.00'))

    def test_resubmitting_a_date_replaces_the_batch(self):
        """
        Test that resubmitting a date replaces every record on it.
        """
        self.submit('2024-01-05', [
            {'salesmanId': self.rahim.pk, 'categories': [{'name': 'Bread', 'total': 10}], 'deposit': 0},
            {'salesmanId': self.karim.pk, 'categories': [{'name': 'Bread', 'total': 10}], 'deposit': 0},
        ])
        self.submit('2024-01-05', [
            {'salesmanId': self.rahim.pk, 'categories': [{'name': 'Bread', 'total': 15}], 'deposit': 0},
        ])

        self.assertEqual(DailySale.objects.filter(date=date(2024, 1, 5)).count(), 1)
        self.assertEqual(DailySale.objects.get(date=date(2024, 1, 5)).total_amount, Decimal('15.00'))

    def test_same_salesman_twice_keeps_last_entry(self):
        """
        Test that a salesman listed twice keeps the last entry.
        """
        response = self.submit('2024-01-05', [
            {'salesmanId': self.rahim.pk, 'categories': [{'name': 'Bread', 'total': 10}]},
            {'salesmanId': self.rahim.pk, 'categories': [{'name': 'Bread', 'total': 30}]},
        ])
        self.assertEqual(response.data['insertedCount'], 1)
        self.assertEqual(len(response.data['recalculations']), 1)
        self.assertEqual(DailySale.objects.get().total_amount, Decimal('30.00'))

    def test_rejects_unknown_salesman_and_bad_date(self):
        """
        Test that unknown salesmen and bad dates are rejected.
        """
        response = self.submit('2024-01-05', [{'salesmanId': 9999, 'categories': []}])
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        response = self.submit('not-a-date', [])
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(DailySale.objects.exists())

    def test_summary_repairs_zero_prev_due(self):
        """
        Test that a record with a zero prev due reports the nearest earlier closing due.
        """
        make_sale(self.rahim, date(2024, 1, 1), curr_due=Decimal('42'))
        make_sale(self.rahim, date(2024, 1, 2), [10], '0',
                  prev_due=Decimal('0'), total_amount=Decimal('10'), total_due=Decimal('10'), curr_due=Decimal('10'))

        response = self.client.get(reverse('daily-sales-summary', kwargs={'date': '2024-01-02'}))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        rahim_line = response.data[0]
        self.assertEqual(rahim_line['salesmanId'], self.rahim.pk)
        self.assertTrue(rahim_line['hasRecord'])
        self.assertEqual(rahim_line['prevDue'], '42.00')
        self.assertEqual(rahim_line['currDue'], '10.00')
        self.assertEqual(rahim_line['totalAmount'], '10.00')

    def test_summary_repairs_missing_prev_due(self):
        """
        Test that a record with no prev due reports the nearest earlier closing due.
        """
        make_sale(self.rahim, date(2024, 1, 1), curr_due=Decimal('42'))
        make_sale(self.rahim, date(2024, 1, 2), [10], '0',
                  prev_due=None, total_amount=Decimal('10'), total_due=Decimal('10'), curr_due=Decimal('10'))

        response = self.client.get(reverse('daily-sales-summary', kwargs={'date': '2024-01-02'}))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data[0]['hasRecord'])
        self.assertEqual(response.data[0]['prevDue'], '42.00')
        self.assertEqual(response.data[0]['currDue'], '10.00')

    def test_out_of_range_amounts_are_rejected(self):
        """
        Test that a submission with an amount too large to store is rejected and nothing is written.
        """
        response = self.submit('2024-01-05', [
            {'salesmanId': self.rahim.pk, 'categories': [{'name': 'Bread', 'total': '1e30'}]},
        ])
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('error', response.data)

        response = self.submit('2024-01-05', [
            {'salesmanId': self.karim.pk, 'categories': [
                {'name': 'Bread', 'total': '9000000000'}, {'name': 'Cake', 'total': '9000000000'},
            ]},
        ])
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

        self.assertFalse(DailySale.objects.exists())
        self.assertFalse(DueRecalculation.objects.exists())

    def test_bad_later_record_does_not_block_the_batch(self):
        """
        Test that a huge stored total on a later day still lets every cascade in the batch finish.
        """
        make_sale(self.rahim, date(2024, 1, 1), curr_due=Decimal('100'))
        rahim_later = make_sale(self.rahim, date(2024, 1, 10), ['1e30'], '0', prev_due=Decimal('100'))
        karim_later = make_sale(self.karim, date(2024, 1, 10), [10], '0', prev_due=Decimal('0'))

        with self.assertLogs('core.utils', level='WARNING'):
            response = self.submit('2024-01-05', [
                {'salesmanId': self.rahim.pk, 'categories': [{'name': 'Bread', 'total': 50}]},
                {'salesmanId': self.karim.pk, 'categories': [{'name': 'Cake', 'total': 20}]},
            ])

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(
            [r['status'] for r in response.data['recalculations']],
            [RecalculationStatus.SUCCEEDED, RecalculationStatus.SUCCEEDED],
        )
        self.assertEqual(dues_of(rahim_later), (Decimal('150.00'), Decimal('0.00'), Decimal('150.00'), Decimal('150.00')))
        karim_later.refresh_from_db()
        self.assertEqual(karim_later.prev_due, Decimal('20.00'))

    def test_summary_keeps_a_real_prev_due(self):
        """
        Test that a real stored prev due is reported as stored.
        """
        make_sale(self.rahim, date(2024, 1, 1), curr_due=Decimal('42'))
        make_sale(self.rahim, date(2024, 1, 2), [10], '0', prev_due=Decimal('5'), curr_due=Decimal('15'))
        response = self.client.get(reverse('daily-sales-summary', kwargs={'date': '2024-01-02'}))
        self.assertEqual(response.data[0]['prevDue'], '5.00')

    def test_summary_lists_every_salesman(self):
        """
        Test that the summary has a line for every salesman.
        """
        response = self.client.get(reverse('daily-sales-summary', kwargs={'date': '2024-01-02'}))
        self.assertEqual([line['salesmanName'] for line in response.data], ['Rahim', 'Karim'])
        self.assertEqual(response.data[1]['currDue'], '0.00')

    def test_manual_recalculation_and_listing(self):
        """
        Test that a manual recalculation runs and shows up in the status listing.
        """
        make_sale(self.rahim, date(2024, 1, 1), curr_due=Decimal('10'))
        later = make_sale(self.rahim, date(2024, 1, 2), [5], '0')
        url = reverse('due-recalculations')

        response = self.client.post(url, {'salesmanId': self.rahim.pk, 'date': '2024-01-01'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['status'], RecalculationStatus.SUCCEEDED)
        self.assertEqual(response.data['recordsUpdated'], 1)
        later.refresh_from_db()
        self.assertEqual(later.curr_due, Decimal('15.00'))

        response = self.client.get(url, {'status': 'succeeded'})
        self.assertEqual(len(response.data), 1)
        response = self.client.get(url, {'status': 'partial'})
        self.assertEqual(response.data, [])
        response = self.client.get(url, {'status': 'bogus'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)


class RecalculateDuesCommandTests(TestCase):

    def setUp(self):
        self.rahim = Salesman.objects.create(name="Rahim")

    def test_single_salesman(self):
        """
        Test that the command recalculates one salesman after a date.
        """
        make_sale(self.rahim, date(2024, 1, 1), curr_due=Decimal('10'))
        later = make_sale(self.rahim, date(2024, 1, 2), [5], '0')
        out = StringIO()

        call_command('recalculate_dues', '--salesman', str(self.rahim.pk), '--date', '2024-01-01', stdout=out)

        self.assertIn('succeeded', out.getvalue())
        later.refresh_from_db()
        self.assertEqual(later.prev_due, Decimal('10.00'))
        self.assertEqual(DueRecalculation.objects.count(), 1)

    def test_requires_arguments(self):
        """
        Test that the command refuses missing arguments and unknown salesmen.
        """
        with self.assertRaises(CommandError):
            call_command('recalculate_dues', stdout=StringIO())
        with self.assertRaises(CommandError):
            call_command('recalculate_dues', '--salesman', '9999', '--date', '2024-01-01', stdout=StringIO())

    def test_nothing_to_retry(self):
        """
        Test that retrying with nothing failed says so.
        """
        out = StringIO()
        call_command('recalculate_dues', '--retry-failed', stdout=out)
        self.assertIn('Nothing to retry', out.getvalue())
