from django.contrib import admin
from .models import Item, Ingredient


class CatalogEntryAdmin(admin.ModelAdmin):
    list_display = ['name', 'price']
    search_fields = ['name']
    ordering = ['name']


admin.site.register(Item, CatalogEntryAdmin)
admin.site.register(Ingredient, CatalogEntryAdmin)
