# sales/ledger.py
"""
Due-balance ledger.

Every DailySale row carries its salesman's running balance:

    total_amount = sum(category totals)
    total_due    = total_amount + prev_due
    curr_due     = total_due - deposit

and a row's prev_due is the curr_due of the salesman's nearest earlier row
(not the calendar-previous day; gaps are normal). When a day is written or
rewritten, every later row of the same salesman is stale until
``DueLedger.recalculate`` walks forward from that day and rewrites them.
"""
import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from core.utils import ZERO, parse_date_key, round_money, to_money
from .models import RecalculationStatus
from .store import StoreError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Dues:
    prev_due: Decimal
    total_amount: Decimal
    total_due: Decimal
    curr_due: Decimal


def compute_dues(prev_due, categories, deposit):
    """
    Derive one day's due fields from the carried-over balance and the day's
    own sale lines and deposit. Lines without a numeric ``total`` and a
    non-numeric deposit count as 0. Every field is rounded to 2 places.
    """
    prev = round_money(prev_due)
    amount = sum(
        (to_money(line.get('total')) for line in (categories or ()) if isinstance(line, dict)),
        ZERO,
    )
    total_due = amount + prev
    curr_due = total_due - to_money(deposit)
    return Dues(
        prev_due=prev,
        total_amount=round_money(amount),
        total_due=round_money(total_due),
        curr_due=round_money(curr_due),
    )


@dataclass
class RecalculationResult:
    salesman_id: Optional[int]
    anchor_date: object
    status: str
    seed: Optional[Decimal] = None
    updated: int = 0
    total: int = 0
    error: str = ''

    @property
    def ok(self):
        return self.status == RecalculationStatus.SUCCEEDED


class DueLedger:
    """Recomputes a salesman's materialised due balances through a store."""

    def __init__(self, store):
        self.store = store

    def opening_balance(self, salesman_id, day):
        """Closing due of the salesman's nearest record before ``day``, else 0."""
        previous = self.store.latest_before(salesman_id, day)
        return previous.closing_due if previous is not None else ZERO

    def seed_for(self, salesman_id, day):
        """The prev_due the first record after ``day`` should carry."""
        anchor = self.store.entry_on(salesman_id, day)
        if anchor is not None:
            return anchor.closing_due
        return self.opening_balance(salesman_id, day)

    def recalculate(self, salesman_id, anchor_date):
        """
        Rewrite prev_due/total_amount/total_due/curr_due of every record of
        ``salesman_id`` dated after ``anchor_date``, in date order.

        Never raises for store failures. A failure before the first write
        reports STORE_ERROR; a failure after some writes reports PARTIAL and
        leaves those writes in place. Running it again from the same anchor
        is safe and converges to the same values.
        """
        day = parse_date_key(anchor_date)
        if not salesman_id or day is None:
            logger.warning(f"Due recalculation rejected: salesman={salesman_id!r} date={anchor_date!r}")
            return RecalculationResult(
                salesman_id, anchor_date, RecalculationStatus.INVALID_INPUT,
                error="salesmanId and date are required",
            )

        try:
            seed = round_money(self.seed_for(salesman_id, day))
            cascade = self.store.entries_after(salesman_id, day)
        except StoreError as e:
            logger.error(f"Due recalculation for salesman {salesman_id} after {day} aborted: {e}")
            return RecalculationResult(salesman_id, day, RecalculationStatus.STORE_ERROR, error=str(e))

        prev_due = seed
        updated = 0
        for entry in cascade:
            dues = compute_dues(prev_due, entry.categories, entry.deposit)
            try:
                self.store.update_dues(entry.pk, dues)
            except StoreError as e:
                status = RecalculationStatus.PARTIAL if updated else RecalculationStatus.STORE_ERROR
                logger.error(
                    f"Due recalculation for salesman {salesman_id} after {day} stopped at "
                    f"{entry.date} ({updated}/{len(cascade)} records updated): {e}"
                )
                return RecalculationResult(
                    salesman_id, day, status, seed=seed,
                    updated=updated, total=len(cascade), error=str(e),
                )
            updated += 1
            prev_due = dues.curr_due

        logger.info(f"Recalculated {updated} due record(s) for salesman {salesman_id} after {day} from {seed}")
        return RecalculationResult(
            salesman_id, day, RecalculationStatus.SUCCEEDED, seed=seed,
            updated=updated, total=len(cascade),
        )
