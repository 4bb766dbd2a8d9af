# salesmen/models.py
from decimal import Decimal

from django.db import models


class Salesman(models.Model):
    name = models.CharField(max_length=120, unique=True)
    phone = models.CharField(max_length=32, blank=True, default='')

    class Meta:
        ordering = ['id']
        verbose_name_plural = 'salesmen'

    def __str__(self):
        return self.name


class SalesmanOrder(models.Model):
    """
    How much of an item a salesman takes out on a given day.
    There is at most one row per (salesman, item, date); saving again updates it.
    """
    salesman = models.ForeignKey(Salesman, related_name='orders', on_delete=models.CASCADE)
    item = models.ForeignKey('catalog.Item', related_name='salesman_orders', on_delete=models.CASCADE)
    qty = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal('0.00'))
    date = models.DateField(db_index=True)

    class Meta:
        ordering = ['date', 'salesman_id', 'item_id']
        constraints = [
            models.UniqueConstraint(fields=['salesman', 'item', 'date'], name='unique_salesman_item_date'),
        ]

    def __str__(self):
        return f"{self.salesman} x {self.qty} {self.item} on {self.date}"


class HomeStock(models.Model):
    """Goods of an item kept back at the shop on a day ("ghorer mal")."""
    item = models.ForeignKey('catalog.Item', related_name='home_stock', on_delete=models.CASCADE)
    qty = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal('0.00'))
    date = models.DateField(db_index=True)

    class Meta:
        ordering = ['date', 'item_id']
        verbose_name_plural = 'home stock'
        constraints = [
            models.UniqueConstraint(fields=['item', 'date'], name='unique_home_stock_item_date'),
        ]

    def __str__(self):
        return f"{self.qty} {self.item} kept on {self.date}"
