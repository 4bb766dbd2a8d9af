from decimal import Decimal

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('catalog', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Salesman',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=120, unique=True)),
                ('phone', models.CharField(blank=True, default='', max_length=32)),
            ],
            options={
                'verbose_name_plural': 'salesmen',
                'ordering': ['id'],
            },
        ),
        migrations.CreateModel(
            name='SalesmanOrder',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('qty', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=10)),
                ('date', models.DateField(db_index=True)),
                ('item', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='salesman_orders', to='catalog.item')),
                ('salesman', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='orders', to='salesmen.salesman')),
            ],
            options={
                'ordering': ['date', 'salesman_id', 'item_id'],
            },
        ),
        migrations.CreateModel(
            name='HomeStock',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('qty', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=10)),
                ('date', models.DateField(db_index=True)),
                ('item', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='home_stock', to='catalog.item')),
            ],
            options={
                'verbose_name_plural': 'home stock',
                'ordering': ['date', 'item_id'],
            },
        ),
        migrations.AddConstraint(
            model_name='salesmanorder',
            constraint=models.UniqueConstraint(fields=('salesman', 'item', 'date'), name='unique_salesman_item_date'),
        ),
        migrations.AddConstraint(
            model_name='homestock',
            constraint=models.UniqueConstraint(fields=('item', 'date'), name='unique_home_stock_item_date'),
        ),
    ]
