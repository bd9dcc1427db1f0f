from decimal import Decimal, ROUND_HALF_UP

from django.db import models
from django.db.models import Q


SERVING_SIZE_PLACES = Decimal('0.01')
MACRO_PLACES = Decimal('0.001')


def quantize(value, places):
    """Round a number to the precision of the column it is stored in."""
    if value is None:
        return None
    return Decimal(str(value)).quantize(places, rounding=ROUND_HALF_UP)


def normalize_food_name(name):
    return (name or '').strip().lower()


class CustomFoodQuerySet(models.QuerySet):

    def custom(self):
        return self.filter(source=CustomFood.SOURCE_CUSTOM)

    def matching(self, name, serving_size, serving_unit='g'):
        """
        Custom foods with the same trimmed, case-insensitive name and
        exactly the same serving size.
        """
        return (
            self.custom()
            .filter(
                name_key=normalize_food_name(name),
                serving_size=quantize(serving_size, SERVING_SIZE_PLACES),
                serving_unit=serving_unit,
            )
            .order_by('id')
        )

    def potential_duplicates(self, name=None, barcode=None):
        """
        Custom foods that may duplicate a new entry: name or brand containing
        `name` (at least 2 characters), or the same barcode (at least 8 digits,
        leading zeros ignored).
        """
        name = (name or '').strip()
        barcode = (barcode or '').strip().lstrip('0')

        conditions = Q()
        if len(name) >= 2:
            conditions |= Q(name_key__contains=normalize_food_name(name)) | Q(brand__icontains=name)
        if len(barcode) >= 8:
            conditions |= Q(barcode=barcode)
        if not conditions:
            return self.none()
        return self.custom().filter(conditions).order_by('name')


class CustomFood(models.Model):
    """
    A per-serving nutrition record entered by hand or created by an import.
    Imported calorie values are kept as reported by the source app.
    """
    SOURCE_CUSTOM = 'custom'
    SOURCE_CHOICES = [
        (SOURCE_CUSTOM, 'Custom'),
    ]

    source = models.CharField(
        max_length=20,
        choices=SOURCE_CHOICES,
        default=SOURCE_CUSTOM,
        help_text="Where this food record came from"
    )
    name = models.CharField(
        max_length=255,
        help_text="Food name as logged"
    )
    name_key = models.CharField(
        max_length=255,
        editable=False,
        db_index=True,
        help_text="Trimmed lowercase name used to match foods across imports"
    )
    brand = models.CharField(
        max_length=255,
        null=True,
        blank=True,
        help_text="Brand or manufacturer"
    )
    barcode = models.CharField(
        max_length=32,
        null=True,
        blank=True,
        db_index=True,
        help_text="GTIN/UPC without leading zeros"
    )
    serving_size = models.DecimalField(
        max_digits=9,
        decimal_places=2,
        help_text="Size of one serving in serving_unit"
    )
    serving_unit = models.CharField(
        max_length=20,
        default='g',
        help_text="Unit of serving_size (e.g., 'g')"
    )
    calories = models.DecimalField(
        max_digits=10,
        decimal_places=3,
        help_text="Calories per serving"
    )
    protein = models.DecimalField(
        max_digits=10,
        decimal_places=3,
        null=True,
        blank=True,
        help_text="Protein in grams per serving"
    )
    fat = models.DecimalField(
        max_digits=10,
        decimal_places=3,
        null=True,
        blank=True,
        help_text="Fat in grams per serving"
    )
    carbs = models.DecimalField(
        max_digits=10,
        decimal_places=3,
        null=True,
        blank=True,
        help_text="Carbohydrates in grams per serving"
    )

    # Audit fields
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = CustomFoodQuerySet.as_manager()

    class Meta:
        ordering = ['name']
        indexes = [
            models.Index(fields=['source', 'name'], name='nutrition_source_name_idx'),
        ]
        verbose_name = 'Custom Food'
        verbose_name_plural = 'Custom Foods'

    def __str__(self):
        return f"{self.name} ({float(self.serving_size):g}{self.serving_unit})"

    @property
    def dedup_key(self):
        return (normalize_food_name(self.name), quantize(self.serving_size, SERVING_SIZE_PLACES))

    def save(self, *args, **kwargs):
        self.name_key = normalize_food_name(self.name)
        if self.barcode:
            self.barcode = self.barcode.strip().lstrip('0') or None
        super().save(*args, **kwargs)
