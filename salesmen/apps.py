from django.apps import AppConfig


class SalesmenConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'salesmen'
    verbose_name = 'Salesmen & orders'
