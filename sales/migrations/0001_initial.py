from decimal import Decimal

import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('salesmen', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='DailySale',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('date', models.DateField()),
                ('categories', models.JSONField(blank=True, default=list)),
                ('deposit', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=12)),
                ('prev_due', models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
                ('total_amount', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=12)),
                ('total_due', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=12)),
                ('curr_due', models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
                ('current_due', models.DecimalField(blank=True, decimal_places=2, help_text='Closing due as written by older schema versions', max_digits=12, null=True)),
                ('due', models.DecimalField(blank=True, decimal_places=2, help_text='Closing due as written by the oldest schema version', max_digits=12, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('salesman', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='daily_sales', to='salesmen.salesman')),
            ],
            options={
                'ordering': ['date', 'salesman_id'],
            },
        ),
        migrations.CreateModel(
            name='DueRecalculation',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('anchor_date', models.DateField()),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('succeeded', 'Succeeded'), ('invalid_input', 'Invalid input'), ('store_error', 'Store error'), ('partial', 'Partially applied'), ('failed', 'Failed')], db_index=True, default='pending', max_length=20)),
                ('seed', models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
                ('records_updated', models.PositiveIntegerField(default=0)),
                ('records_total', models.PositiveIntegerField(default=0)),
                ('attempts', models.PositiveIntegerField(default=0)),
                ('error_message', models.TextField(blank=True, null=True)),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('finished_at', models.DateTimeField(blank=True, null=True)),
                ('salesman', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='due_recalculations', to='salesmen.salesman')),
            ],
            options={
                'ordering': ['-created_at', '-id'],
            },
        ),
        migrations.AddIndex(
            model_name='dailysale',
            index=models.Index(fields=['date'], name='sales_daily_date_idx'),
        ),
        migrations.AddConstraint(
            model_name='dailysale',
            constraint=models.UniqueConstraint(fields=('salesman', 'date'), name='unique_daily_sale_per_salesman'),
        ),
    ]
