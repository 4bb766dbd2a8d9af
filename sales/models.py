# sales/models.py

from decimal import Decimal

from django.db import models
from django.utils import timezone


class DailySale(models.Model):
    """
    One salesman's sales for one calendar day, with the running due balance
    materialised on the row.

    - 'categories': the day's sale lines, ``[{"name": ..., "total": ...}]``.
    - 'deposit': cash the salesman handed in that day.
    - 'prev_due': closing due of the nearest earlier record for this salesman.
    - 'total_amount': sum of the category totals.
    - 'total_due': total_amount + prev_due.
    - 'curr_due': total_due - deposit; the next record's prev_due.

    Rows imported from older versions of the service may have no curr_due and
    carry the closing balance in 'current_due' or 'due' instead. The sales
    store resolves that once when it reads a row (see sales.store).
    """
    salesman = models.ForeignKey('salesmen.Salesman', related_name='daily_sales', on_delete=models.CASCADE)
    date = models.DateField()
    categories = models.JSONField(default=list, blank=True)
    deposit = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    prev_due = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    total_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    total_due = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    curr_due = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    current_due = models.DecimalField(
        max_digits=12, decimal_places=2, null=True, blank=True,
        help_text="Closing due as written by older schema versions"
    )
    due = models.DecimalField(
        max_digits=12, decimal_places=2, null=True, blank=True,
        help_text="Closing due as written by the oldest schema version"
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['date', 'salesman_id']
        constraints = [
            models.UniqueConstraint(fields=['salesman', 'date'], name='unique_daily_sale_per_salesman'),
        ]
        indexes = [
            models.Index(fields=['date'], name='sales_daily_date_idx'),
        ]

    def __str__(self):
        return f"{self.salesman} on {self.date}: due {self.curr_due}"


class RecalculationStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    SUCCEEDED = 'succeeded', 'Succeeded'
    INVALID_INPUT = 'invalid_input', 'Invalid input'
    STORE_ERROR = 'store_error', 'Store error'
    PARTIAL = 'partial', 'Partially applied'
    FAILED = 'failed', 'Failed'


class DueRecalculation(models.Model):
    """
    A queued forward recalculation of one salesman's dues after ``anchor_date``.

    Created in the same transaction as the sales batch that made it necessary,
    run after that batch commits, and left behind as a record of the outcome.
    Rows that ended in 'store_error', 'partial' or 'failed' are picked up again by
    ``manage.py recalculate_dues --retry-failed``.
    """
    RETRYABLE = (
        RecalculationStatus.PENDING,
        RecalculationStatus.STORE_ERROR,
        RecalculationStatus.PARTIAL,
        RecalculationStatus.FAILED,
    )

    salesman = models.ForeignKey('salesmen.Salesman', related_name='due_recalculations', on_delete=models.CASCADE)
    anchor_date = models.DateField()
    status = models.CharField(
        max_length=20,
        choices=RecalculationStatus.choices,
        default=RecalculationStatus.PENDING,
        db_index=True,
    )
    seed = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    records_updated = models.PositiveIntegerField(default=0)
    records_total = models.PositiveIntegerField(default=0)
    attempts = models.PositiveIntegerField(default=0)
    error_message = models.TextField(null=True, blank=True)
    created_at = models.DateTimeField(default=timezone.now)
    finished_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ['-created_at', '-id']

    def record(self, result):
        """Store the outcome of a ledger run on this task."""
        self.status = result.status
        self.seed = result.seed
        self.records_updated = result.updated
        self.records_total = result.total
        self.error_message = result.error or None
        self.attempts += 1
        self.finished_at = timezone.now()
        self.save(update_fields=[
            'status', 'seed', 'records_updated', 'records_total',
            'error_message', 'attempts', 'finished_at',
        ])

    def __str__(self):
        return f"Dues for {self.salesman} after {self.anchor_date}: {self.status}"
