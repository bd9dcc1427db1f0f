"""
Custom food deduplication for imports.

Foods are identified by lowercase trimmed name plus serving weight in grams.
Each import run keeps its own in-memory cache; the database is the source of
truth across runs, so importing the same food again reuses the stored record.
"""
import logging
from typing import Dict, Optional, Tuple

from nutrition.models import (
    MACRO_PLACES,
    SERVING_SIZE_PLACES,
    CustomFood,
    normalize_food_name,
    quantize,
)

logger = logging.getLogger(__name__)

MIN_SERVING_QTY = 1e-6
MIN_SERVING_WEIGHT_G = 0.1


def serving_qty_of(entry) -> float:
    return max(MIN_SERVING_QTY, float(entry.serving_qty or 1))


def serving_weight_of(entry) -> float:
    return max(MIN_SERVING_WEIGHT_G, float(entry.serving_weight_g or 100))


def per_serving_values(entry) -> Dict[str, float]:
    """
    Nutrition for one serving: the row totals divided by the serving quantity.

    Calories are taken as reported, never recomputed from macros.
    """
    qty = serving_qty_of(entry)
    return {
        'calories': (entry.calories or 0) / qty,
        'protein': (entry.protein or 0) / qty,
        'fat': (entry.fat or 0) / qty,
        'carbs': (entry.carbs or 0) / qty,
    }


def custom_food_key(name, serving_weight_g) -> Tuple[str, object]:
    return normalize_food_name(name), quantize(serving_weight_g, SERVING_SIZE_PLACES)


class CustomFoodCache:
    """Resolves food log entries to CustomFood records, creating them once per key."""

    def __init__(self):
        self._foods: Dict[Tuple[str, object], CustomFood] = {}
        self.created_count = 0

    def __len__(self):
        return len(self._foods)

    def resolve(self, entry) -> Optional[CustomFood]:
        """
        Return the CustomFood for an entry, looking it up in the database or
        creating it on first sight. Returns None for entries without a name.
        """
        name = (entry.name or '').strip()
        if not name:
            return None

        serving_weight = serving_weight_of(entry)
        key = custom_food_key(name, serving_weight)
        if key in self._foods:
            return self._foods[key]

        food = CustomFood.objects.matching(name, serving_weight).first()
        if food is not None:
            logger.debug("Reusing custom food %s for %r", food.pk, name)
        else:
            per_serving = per_serving_values(entry)
            food = CustomFood.objects.create(
                source=CustomFood.SOURCE_CUSTOM,
                name=name,
                serving_size=quantize(serving_weight, SERVING_SIZE_PLACES),
                serving_unit='g',
                calories=quantize(per_serving['calories'], MACRO_PLACES),
                protein=quantize(per_serving['protein'], MACRO_PLACES),
                fat=quantize(per_serving['fat'], MACRO_PLACES),
                carbs=quantize(per_serving['carbs'], MACRO_PLACES),
            )
            self.created_count += 1
            logger.info("Created custom food %s: %s", food.pk, food)

        self._foods[key] = food
        return food
