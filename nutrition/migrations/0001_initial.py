from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='CustomFood',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('source', models.CharField(choices=[('custom', 'Custom')], default='custom', help_text='Where this food record came from', max_length=20)),
                ('name', models.CharField(help_text='Food name as logged', max_length=255)),
                ('brand', models.CharField(blank=True, help_text='Brand or manufacturer', max_length=255, null=True)),
                ('barcode', models.CharField(blank=True, db_index=True, help_text='GTIN/UPC without leading zeros', max_length=32, null=True)),
                ('serving_size', models.DecimalField(decimal_places=2, help_text='Size of one serving in serving_unit', max_digits=9)),
                ('serving_unit', models.CharField(default='g', help_text="Unit of serving_size (e.g., 'g')", max_length=20)),
                ('calories', models.DecimalField(decimal_places=3, help_text='Calories per serving', max_digits=10)),
                ('protein', models.DecimalField(blank=True, decimal_places=3, help_text='Protein in grams per serving', max_digits=10, null=True)),
                ('fat', models.DecimalField(blank=True, decimal_places=3, help_text='Fat in grams per serving', max_digits=10, null=True)),
                ('carbs', models.DecimalField(blank=True, decimal_places=3, help_text='Carbohydrates in grams per serving', max_digits=10, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Custom Food',
                'verbose_name_plural': 'Custom Foods',
                'ordering': ['name'],
                'indexes': [models.Index(fields=['source', 'name'], name='nutrition_source_name_idx')],
            },
        ),
    ]
