from django.db import models


class Profile(models.Model):
    """
    A person whose logs and program settings are tracked.
    All daily logs and program settings are scoped to a profile.
    """
    username = models.CharField(
        max_length=150,
        unique=True,
        help_text="Login name, stored trimmed and lowercase"
    )

    # Audit fields
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['username']
        verbose_name = 'Profile'
        verbose_name_plural = 'Profiles'

    def __str__(self):
        return self.username

    def save(self, *args, **kwargs):
        self.username = (self.username or '').strip().lower()
        super().save(*args, **kwargs)

    @classmethod
    def lookup(cls, identifier):
        """
        Find a profile by numeric id or by username (case-insensitive).

        Raises:
            Profile.DoesNotExist: If nothing matches.
        """
        value = str(identifier).strip()
        if value.isdigit():
            return cls.objects.get(pk=int(value))
        return cls.objects.get(username=value.lower())
