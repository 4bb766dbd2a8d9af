from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='DailyUsage',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('date', models.DateField(unique=True)),
                ('items', models.JSONField(blank=True, default=list)),
                ('prices', models.JSONField(blank=True, default=list)),
                ('retails', models.JSONField(blank=True, default=list)),
                ('pieces', models.JSONField(blank=True, default=list)),
                ('total_expense', models.CharField(blank=True, default='0', max_length=32)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'verbose_name': 'daily usage',
                'verbose_name_plural': 'daily usage',
                'ordering': ['-id'],
            },
        ),
    ]
