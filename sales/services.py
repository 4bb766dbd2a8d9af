# sales/services.py
"""
Sales submission and the daily due summary, on top of the ledger.

Both take a ``DueLedger`` (and through it a store) from the caller; views
build one per request with ``default_ledger()``.
"""
import logging
from dataclasses import dataclass, field

from django.db import DatabaseError, transaction

from core.utils import MONEY_LIMIT, ZERO, exceeds_money_range, round_money, to_money
from .ledger import DueLedger, RecalculationResult, compute_dues
from .models import DailySale, DueRecalculation, RecalculationStatus
from .store import DailySaleStore

logger = logging.getLogger(__name__)


class SaleAmountError(ValueError):
    """A submitted amount, or a due worked out from it, does not fit a money column."""


def default_ledger():
    return DueLedger(DailySaleStore())


@dataclass
class SubmissionResult:
    date: object
    inserted: int
    recalculations: list = field(default_factory=list)


def latest_entry_per_salesman(entries):
    """Keep one entry per salesman (the last one listed), in first-seen order."""
    latest = {}
    for entry in entries:
        latest[entry['salesman'].pk] = entry
    return list(latest.values())


def check_amounts(salesman, categories, deposit):
    totals = [line.get('total') for line in categories if isinstance(line, dict)]
    for value in totals + [deposit]:
        if exceeds_money_range(value):
            raise SaleAmountError(f"Amount {value!r} for salesman {salesman.pk} is out of range")


def build_daily_sales(ledger, day, entries):
    """Unsaved DailySale rows for ``day`` with their dues worked out."""
    rows = []
    for entry in entries:
        salesman = entry['salesman']
        categories = entry.get('categories') or []
        check_amounts(salesman, categories, entry.get('deposit'))
        deposit = to_money(entry.get('deposit'))
        dues = compute_dues(ledger.opening_balance(salesman.pk, day), categories, deposit)
        if any(abs(value) >= MONEY_LIMIT for value in (dues.total_amount, dues.total_due, dues.curr_due)):
            raise SaleAmountError(f"Dues of salesman {salesman.pk} on {day} are out of range")
        rows.append(DailySale(
            salesman=salesman,
            date=day,
            categories=categories,
            deposit=round_money(deposit),
            prev_due=dues.prev_due,
            total_amount=dues.total_amount,
            total_due=dues.total_due,
            curr_due=dues.curr_due,
        ))
    return rows


def run_recalculation(task, ledger):
    """Run one queued recalculation and record its outcome on the task."""
    try:
        result = ledger.recalculate(task.salesman_id, task.anchor_date)
    except Exception as e:
        logger.exception(f"Recalculation {task.pk} for salesman {task.salesman_id} crashed")
        result = RecalculationResult(
            task.salesman_id, task.anchor_date, RecalculationStatus.FAILED, error=f"{type(e).__name__}: {e}",
        )
    try:
        task.record(result)
    except DatabaseError as e:
        logger.error(f"Could not record outcome {result.status} of recalculation {task.pk}: {e}")
    if not result.ok:
        logger.error(
            f"Recalculation {task.pk} for salesman {task.salesman_id} after {task.anchor_date} "
            f"ended {result.status}: {result.error}"
        )
    return task


def queue_recalculation(salesman, day):
    return DueRecalculation.objects.create(salesman=salesman, anchor_date=day)


def submit_daily_sales(day, entries, ledger=None):
    """
    Replace every sale record on ``day`` with ``entries`` and bring each
    affected salesman's later balances up to date.

    The batch and its queued recalculations commit together; the
    recalculations then run one salesman at a time. A recalculation that
    fails does not undo the batch: its task row says what happened.

    Store errors while writing the batch propagate to the caller, and so does
    SaleAmountError for an amount too large to store; either way nothing of
    the batch is written.
    """
    ledger = ledger or default_ledger()
    entries = latest_entry_per_salesman(entries)

    with transaction.atomic():
        rows = build_daily_sales(ledger, day, entries)
        inserted = ledger.store.replace_day(day, rows)
        tasks = [queue_recalculation(entry['salesman'], day) for entry in entries]

    logger.info(f"Saved {inserted} sale record(s) for {day}; running {len(tasks)} due recalculation(s)")
    for task in tasks:
        run_recalculation(task, ledger)
    return SubmissionResult(date=day, inserted=inserted, recalculations=tasks)


def request_recalculation(salesman, day, ledger=None):
    """Queue and immediately run a manual recalculation."""
    ledger = ledger or default_ledger()
    task = queue_recalculation(salesman, day)
    return run_recalculation(task, ledger)


def retry_failed_recalculations(ledger=None):
    """
    Re-run every task left pending, failed or partial, oldest first.
    Only the newest task per (salesman, anchor date) is retried; older ones
    for the same pair are superseded by it.
    """
    ledger = ledger or default_ledger()
    seen = set()
    retried = []
    for task in DueRecalculation.objects.order_by('-created_at', '-id'):
        key = (task.salesman_id, task.anchor_date)
        if key in seen:
            continue
        seen.add(key)
        if task.status in DueRecalculation.RETRYABLE:
            retried.append(task)
    retried.reverse()
    for task in retried:
        run_recalculation(task, ledger)
    return retried


def format_money(value):
    return str(round_money(value))


def daily_summary(day, salesmen, ledger=None):
    """
    One due line per salesman for ``day``.

    A salesman with no record that day carries the nearest earlier closing
    due as prev/total/curr due and zero sales. A record whose prev_due was
    never filled in (null or 0) reports the nearest earlier closing due
    instead, whatever the recalculator has or has not done since.
    """
    ledger = ledger or default_ledger()
    records = ledger.store.entries_on_day(day)
    summary = []
    for salesman in salesmen:
        record = records.get(salesman.pk)
        if record is None:
            opening = ledger.opening_balance(salesman.pk, day)
            line = {
                'categories': [],
                'deposit': ZERO,
                'prevDue': opening,
                'totalAmount': ZERO,
                'totalDue': opening,
                'currDue': opening,
            }
        else:
            prev_due = record.prev_due
            if prev_due is None or prev_due == 0:
                prev_due = ledger.opening_balance(salesman.pk, day)
            line = {
                'categories': list(record.categories),
                'deposit': record.deposit,
                'prevDue': prev_due,
                'totalAmount': record.total_amount,
                'totalDue': record.total_due,
                'currDue': record.closing_due,
            }
        for key in ('deposit', 'prevDue', 'totalAmount', 'totalDue', 'currDue'):
            line[key] = format_money(line[key])
        summary.append({
            'salesmanId': salesman.pk,
            'salesmanName': salesman.name,
            'date': day.isoformat(),
            'hasRecord': record is not None,
            **line,
        })
    return summary

