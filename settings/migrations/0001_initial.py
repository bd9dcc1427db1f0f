import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('profiles', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='ProgramSettings',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('start_date', models.DateField(help_text='Day 1 of the program')),
                ('total_days', models.PositiveIntegerField(default=84, help_text='Length of the program in days')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('profile', models.ForeignKey(help_text='Profile these settings belong to', on_delete=django.db.models.deletion.CASCADE, related_name='program_settings', to='profiles.profile')),
            ],
            options={
                'verbose_name': 'Program Settings',
                'verbose_name_plural': 'Program Settings',
                'ordering': ['-id'],
            },
        ),
    ]
