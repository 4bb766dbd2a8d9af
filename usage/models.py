# usage/models.py
from django.db import models


class DailyUsage(models.Model):
    """
    One document per day describing what the kitchen used.

    - 'items': ingredient lines as entered (name, totalKg, ...).
    - 'prices': per-ingredient prices for the day.
    - 'retails': retail sales lines; always a list.
    - 'pieces': piece counts of finished goods; always a list.
    - 'total_expense': the day's expense as the operator entered it.
    """
    date = models.DateField(unique=True)
    items = models.JSONField(default=list, blank=True)
    prices = models.JSONField(default=list, blank=True)
    retails = models.JSONField(default=list, blank=True)
    pieces = models.JSONField(default=list, blank=True)
    total_expense = models.CharField(max_length=32, default='0', blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-id']
        verbose_name = 'daily usage'
        verbose_name_plural = 'daily usage'

    def __str__(self):
        return f"Usage for {self.date}: {self.total_expense}"
