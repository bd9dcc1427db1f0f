from django.db import migrations, models


def fill_name_keys(apps, schema_editor):
    CustomFood = apps.get_model('nutrition', 'CustomFood')
    for food in CustomFood.objects.all():
        food.name_key = (food.name or '').strip().lower()
        food.save(update_fields=['name_key'])


class Migration(migrations.Migration):

    dependencies = [
        ('nutrition', '0001_initial'),
    ]

    operations = [
        migrations.AddField(
            model_name='customfood',
            name='name_key',
            field=models.CharField(db_index=True, default='', editable=False, help_text='Trimmed lowercase name used to match foods across imports', max_length=255),
            preserve_default=False,
        ),
        migrations.RunPython(fill_name_keys, migrations.RunPython.noop),
    ]
