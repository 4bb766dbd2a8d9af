from django.contrib import admin
from .models import Salesman, SalesmanOrder, HomeStock


@admin.register(Salesman)
class SalesmanAdmin(admin.ModelAdmin):
    list_display = ['id', 'name', 'phone']
    search_fields = ['name', 'phone']


@admin.register(SalesmanOrder)
class SalesmanOrderAdmin(admin.ModelAdmin):
    list_display = ['date', 'salesman', 'item', 'qty']
    list_filter = ['date', 'salesman']
    date_hierarchy = 'date'


@admin.register(HomeStock)
class HomeStockAdmin(admin.ModelAdmin):
    list_display = ['date', 'item', 'qty']
    list_filter = ['date']
