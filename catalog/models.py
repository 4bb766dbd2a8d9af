# catalog/models.py
from django.db import models


class CatalogEntry(models.Model):
    """
    A named thing the bakery sells (Item) or buys (Ingredient).

    ``price`` is kept as the text the operator typed; the front end shows it
    verbatim and it may legitimately be empty.
    """
    name = models.CharField(max_length=120, unique=True)
    price = models.CharField(max_length=32, blank=True, default='')

    class Meta:
        abstract = True
        ordering = ['-id']

    def __str__(self):
        return self.name


class Item(CatalogEntry):

    class Meta(CatalogEntry.Meta):
        verbose_name = 'item'
        verbose_name_plural = 'items'


class Ingredient(CatalogEntry):

    class Meta(CatalogEntry.Meta):
        verbose_name = 'ingredient'
        verbose_name_plural = 'ingredients'
