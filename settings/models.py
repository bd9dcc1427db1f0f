from django.conf import settings
from django.db import models
from django.utils import timezone

from .utils import calculate_day_number


class ProgramSettings(models.Model):
    """
    Fixed-length program window for a profile (e.g., a 12 week cut).
    The newest row for a profile is the one in effect.
    """
    profile = models.ForeignKey(
        'profiles.Profile',
        on_delete=models.CASCADE,
        related_name='program_settings',
        help_text="Profile these settings belong to"
    )
    start_date = models.DateField(
        help_text="Day 1 of the program"
    )
    total_days = models.PositiveIntegerField(
        default=84,
        help_text="Length of the program in days"
    )

    # Audit fields
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-id']
        verbose_name = 'Program Settings'
        verbose_name_plural = 'Program Settings'

    def __str__(self):
        return f"{self.profile}: {self.total_days} days from {self.start_date:%Y-%m-%d}"

    @classmethod
    def for_profile(cls, profile):
        """Return the settings in effect for a profile, or None."""
        return cls.objects.filter(profile=profile).order_by('-id').first()

    def day_number_for(self, log_date):
        return calculate_day_number(log_date, self.start_date, self.total_days)

    def current_day_number(self, today=None):
        """Day number for today in the active timezone."""
        return self.day_number_for(today or timezone.localdate())


_LOOKUP = object()


def day_number_for(profile, log_date, program_settings=_LOOKUP):
    """
    Day number and program length for a profile's log date.

    Falls back to day 1 of a DEFAULT_TOTAL_DAYS program when the profile
    has no settings yet. Pass program_settings (possibly None) to skip the
    lookup when it has already been done.

    Returns:
        tuple: (day_number, total_days)
    """
    if program_settings is _LOOKUP:
        program_settings = ProgramSettings.for_profile(profile)
    if program_settings is None:
        return 1, settings.DEFAULT_TOTAL_DAYS
    total_days = program_settings.total_days or settings.DEFAULT_TOTAL_DAYS
    return program_settings.day_number_for(log_date), total_days
