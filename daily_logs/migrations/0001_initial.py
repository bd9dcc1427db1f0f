import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('profiles', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='DailyLog',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('date', models.DateField(help_text='Calendar day of this log')),
                ('day_number', models.PositiveIntegerField(default=1, help_text="Day within the profile's program window")),
                ('weight', models.DecimalField(blank=True, decimal_places=2, help_text='Body weight', max_digits=6, null=True)),
                ('fat_percent', models.DecimalField(blank=True, decimal_places=2, help_text='Body fat percentage', max_digits=5, null=True)),
                ('workout', models.TextField(blank=True, help_text='Workout notes', null=True)),
                ('protein', models.DecimalField(blank=True, decimal_places=2, help_text='Protein eaten in grams', max_digits=8, null=True)),
                ('fat', models.DecimalField(blank=True, decimal_places=2, help_text='Fat eaten in grams', max_digits=8, null=True)),
                ('carbs', models.DecimalField(blank=True, decimal_places=2, help_text='Carbohydrates eaten in grams', max_digits=8, null=True)),
                ('foods', models.JSONField(blank=True, default=list, help_text='Ordered list of logged food entries, each with its own totals')),
                ('sleep_time', models.CharField(blank=True, help_text="Time slept (e.g., '7:30')", max_length=20, null=True)),
                ('sleep_score', models.PositiveSmallIntegerField(blank=True, help_text='Sleep score from the tracking device', null=True)),
                ('strava', models.URLField(blank=True, help_text='Link to the Strava activity for this day', max_length=500, null=True)),
                ('steps', models.PositiveIntegerField(blank=True, help_text='Step count', null=True)),
                ('photo', models.BinaryField(blank=True, help_text='Progress photo', null=True)),
                ('photo_mime_type', models.CharField(blank=True, help_text='MIME type of the progress photo', max_length=100, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('profile', models.ForeignKey(help_text='Profile this log belongs to', on_delete=django.db.models.deletion.CASCADE, related_name='daily_logs', to='profiles.profile')),
            ],
            options={
                'verbose_name': 'Daily Log',
                'verbose_name_plural': 'Daily Logs',
                'ordering': ['-date'],
                'indexes': [models.Index(fields=['profile', '-date'], name='daily_logs_profile_date_idx')],
                'constraints': [models.UniqueConstraint(fields=('profile', 'date'), name='unique_daily_log_per_profile_date')],
            },
        ),
    ]
