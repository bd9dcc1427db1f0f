from django.db import models


class DailyLogQuerySet(models.QuerySet):

    def for_profile(self, profile):
        return self.filter(profile=profile)

    def in_range(self, start_date, end_date):
        """Logs dated between start_date and end_date, inclusive, oldest first."""
        return self.filter(date__gte=start_date, date__lte=end_date).order_by('date')

    def used_foods(self, profile):
        """
        Distinct custom foods referenced by a profile's logged food entries,
        newest logs first. The first snapshot seen for a food wins.
        """
        used = {}
        for foods in self.for_profile(profile).order_by('-date').values_list('foods', flat=True):
            for food in foods or []:
                if not isinstance(food, dict) or food.get('customFoodId') is None:
                    continue
                food_id = food['customFoodId']
                if food_id in used:
                    continue
                used[food_id] = {
                    'customFoodId': food_id,
                    'description': food.get('name') or food.get('description') or '',
                    'brandOwner': food.get('brand'),
                    'dataType': 'Custom',
                }
        return list(used.values())


class DailyLog(models.Model):
    """
    One day of tracking for a profile: body weight, macros, logged foods,
    training, sleep and a progress photo.
    """
    profile = models.ForeignKey(
        'profiles.Profile',
        on_delete=models.CASCADE,
        related_name='daily_logs',
        help_text="Profile this log belongs to"
    )
    date = models.DateField(
        help_text="Calendar day of this log"
    )
    day_number = models.PositiveIntegerField(
        default=1,
        help_text="Day within the profile's program window"
    )
    weight = models.DecimalField(
        max_digits=6,
        decimal_places=2,
        null=True,
        blank=True,
        help_text="Body weight"
    )
    fat_percent = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        null=True,
        blank=True,
        help_text="Body fat percentage"
    )
    workout = models.TextField(
        null=True,
        blank=True,
        help_text="Workout notes"
    )
    protein = models.DecimalField(
        max_digits=8,
        decimal_places=2,
        null=True,
        blank=True,
        help_text="Protein eaten in grams"
    )
    fat = models.DecimalField(
        max_digits=8,
        decimal_places=2,
        null=True,
        blank=True,
        help_text="Fat eaten in grams"
    )
    carbs = models.DecimalField(
        max_digits=8,
        decimal_places=2,
        null=True,
        blank=True,
        help_text="Carbohydrates eaten in grams"
    )
    foods = models.JSONField(
        default=list,
        blank=True,
        help_text="Ordered list of logged food entries, each with its own totals"
    )
    sleep_time = models.CharField(
        max_length=20,
        null=True,
        blank=True,
        help_text="Time slept (e.g., '7:30')"
    )
    sleep_score = models.PositiveSmallIntegerField(
        null=True,
        blank=True,
        help_text="Sleep score from the tracking device"
    )
    strava = models.URLField(
        max_length=500,
        null=True,
        blank=True,
        help_text="Link to the Strava activity for this day"
    )
    steps = models.PositiveIntegerField(
        null=True,
        blank=True,
        help_text="Step count"
    )
    photo = models.BinaryField(
        null=True,
        blank=True,
        help_text="Progress photo"
    )
    photo_mime_type = models.CharField(
        max_length=100,
        null=True,
        blank=True,
        help_text="MIME type of the progress photo"
    )

    # Audit fields
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = DailyLogQuerySet.as_manager()

    class Meta:
        ordering = ['-date']
        constraints = [
            models.UniqueConstraint(fields=['profile', 'date'], name='unique_daily_log_per_profile_date'),
        ]
        indexes = [
            models.Index(fields=['profile', '-date'], name='daily_logs_profile_date_idx'),
        ]
        verbose_name = 'Daily Log'
        verbose_name_plural = 'Daily Logs'

    def __str__(self):
        return f"{self.profile} - Day {self.day_number} ({self.date})"

    def _sum_foods(self, field):
        total = 0.0
        for food in self.foods or []:
            if isinstance(food, dict):
                total += float(food.get(field) or 0)
        return total

    @property
    def total_calories(self):
        """Calories from logged foods"""
        return self._sum_foods('calories')

    @property
    def total_macros(self):
        return {
            'protein': self._sum_foods('protein'),
            'fat': self._sum_foods('fat'),
            'carbs': self._sum_foods('carbs'),
        }
