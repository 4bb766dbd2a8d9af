# sales/store.py
"""
Daily Sales Store: the only code that reads or writes DailySale rows for the
due ledger.

The store is constructed explicitly and handed to ``DueLedger`` and to the
submission service, so tests (and anything else) can pass a different one.
Reads come back as immutable ``LedgerEntry`` values; database failures come
back as ``StoreError``.
"""
import logging
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from django.db import DatabaseError

from core.utils import ZERO
from .models import DailySale

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """A read from or write to the Daily Sales Store failed."""


@dataclass(frozen=True)
class LedgerEntry:
    pk: int
    salesman_id: int
    date: date
    categories: tuple
    deposit: Decimal
    prev_due: Optional[Decimal]
    total_amount: Decimal
    total_due: Decimal
    closing_due: Decimal


def closing_due_of(curr_due, current_due=None, due=None):
    """
    The closing balance of a row, whichever schema version wrote it.

    ``curr_due`` wins, then the legacy ``current_due``, then ``due``; a row
    with none of them closes at 0. A stored 0 is a real balance and is kept.
    """
    for value in (curr_due, current_due, due):
        if value is not None:
            return value
    return ZERO


@contextmanager
def store_errors(action):
    try:
        yield
    except DatabaseError as e:
        raise StoreError(f"{action} failed: {e}") from e


class DailySaleStore:
    READ_FIELDS = (
        'pk', 'salesman_id', 'date', 'categories', 'deposit', 'prev_due',
        'total_amount', 'total_due', 'curr_due', 'current_due', 'due',
    )

    def __init__(self, queryset=None):
        self.queryset = queryset if queryset is not None else DailySale.objects.all()

    def to_entry(self, row):
        """Normalise one row (as a ``values()`` dict) into a LedgerEntry."""
        categories = row['categories'] if isinstance(row['categories'], list) else []
        return LedgerEntry(
            pk=row['pk'],
            salesman_id=row['salesman_id'],
            date=row['date'],
            categories=tuple(categories),
            deposit=row['deposit'] if row['deposit'] is not None else ZERO,
            prev_due=row['prev_due'],
            total_amount=row['total_amount'] if row['total_amount'] is not None else ZERO,
            total_due=row['total_due'] if row['total_due'] is not None else ZERO,
            closing_due=closing_due_of(row['curr_due'], row['current_due'], row['due']),
        )

    def entry_on(self, salesman_id, day):
        """The salesman's record for ``day``, or None."""
        with store_errors(f"Fetching sale of salesman {salesman_id} on {day}"):
            row = self.queryset.filter(salesman_id=salesman_id, date=day).values(*self.READ_FIELDS).first()
        return self.to_entry(row) if row else None

    def latest_before(self, salesman_id, day):
        """The salesman's nearest record strictly before ``day``, or None."""
        with store_errors(f"Fetching sale of salesman {salesman_id} before {day}"):
            row = (
                self.queryset.filter(salesman_id=salesman_id, date__lt=day)
                .order_by('-date')
                .values(*self.READ_FIELDS)
                .first()
            )
        return self.to_entry(row) if row else None

    def entries_after(self, salesman_id, day):
        """Every record of the salesman strictly after ``day``, oldest first."""
        with store_errors(f"Fetching sales of salesman {salesman_id} after {day}"):
            rows = list(
                self.queryset.filter(salesman_id=salesman_id, date__gt=day)
                .order_by('date')
                .values(*self.READ_FIELDS)
            )
        return [self.to_entry(row) for row in rows]

    def entries_on_day(self, day):
        """Every salesman's record for ``day``, keyed by salesman id."""
        with store_errors(f"Fetching sales on {day}"):
            rows = list(self.queryset.filter(date=day).values(*self.READ_FIELDS))
        return {row['salesman_id']: self.to_entry(row) for row in rows}

    def update_dues(self, pk, dues):
        """Write the four due fields of one record and nothing else."""
        with store_errors(f"Updating dues of sale {pk}"):
            updated = self.queryset.filter(pk=pk).update(
                prev_due=dues.prev_due,
                total_amount=dues.total_amount,
                total_due=dues.total_due,
                curr_due=dues.curr_due,
            )
        if not updated:
            raise StoreError(f"Sale {pk} no longer exists")

    def replace_day(self, day, rows):
        """
        Delete every record on ``day`` (all salesmen) and insert ``rows``.
        Callers wrap this in a transaction together with whatever else must
        commit with the batch.
        """
        with store_errors(f"Replacing sales on {day}"):
            deleted, _ = self.queryset.filter(date=day).delete()
            created = DailySale.objects.bulk_create(rows)
        if deleted:
            logger.info(f"Replaced {deleted} sale record(s) on {day} with {len(created)}")
        return len(created)
