# sales/admin.py

import csv
from datetime import datetime

from django.contrib import admin, messages
from django.http import HttpResponse

from .models import DailySale, DueRecalculation, RecalculationStatus
from .services import request_recalculation


@admin.register(DailySale)
class DailySaleAdmin(admin.ModelAdmin):
    """
    Day-by-day sales per salesman. Due fields are read-only here: they are
    derived, and the "Recalculate" action is the way to repair them.
    """
    list_display = ('date', 'salesman', 'total_amount', 'deposit', 'prev_due', 'total_due', 'curr_due')
    list_filter = ('salesman', 'date')
    date_hierarchy = 'date'
    readonly_fields = ('prev_due', 'total_amount', 'total_due', 'curr_due', 'current_due', 'due', 'created_at')
    actions = ['recalculate_following_days', 'export_dues_csv']
    list_per_page = 50

    @admin.action(description='Recalculate dues of the days after the selected records')
    def recalculate_following_days(self, request, queryset):
        for sale in queryset.select_related('salesman').order_by('date'):
            task = request_recalculation(sale.salesman, sale.date)
            level = messages.SUCCESS if task.status == RecalculationStatus.SUCCEEDED else messages.ERROR
            self.message_user(
                request,
                f"{sale.salesman} after {sale.date}: {task.get_status_display()} "
                f"({task.records_updated}/{task.records_total} records)",
                level=level,
            )

    @admin.action(description='Export selected records as CSV')
    def export_dues_csv(self, request, queryset):
        timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
        response = HttpResponse(content_type='text/csv')
        response['Content-Disposition'] = f'attachment; filename="daily_dues_{timestamp}.csv"'
        writer = csv.writer(response)
        writer.writerow(['date', 'salesman', 'total_amount', 'deposit', 'prev_due', 'total_due', 'curr_due'])
        for sale in queryset.select_related('salesman').order_by('date', 'salesman_id'):
            writer.writerow([
                sale.date.isoformat(), sale.salesman.name, sale.total_amount,
                sale.deposit, sale.prev_due, sale.total_due, sale.curr_due,
            ])
        return response


@admin.register(DueRecalculation)
class DueRecalculationAdmin(admin.ModelAdmin):
    list_display = ('anchor_date', 'salesman', 'status', 'records_updated', 'records_total', 'attempts', 'finished_at')
    list_filter = ('status',)
    readonly_fields = [f.name for f in DueRecalculation._meta.fields]
