"""
MacroFactor import reconciliation

Merges a parsed MacroFactor export into a profile's daily logs:

- Quick Export values update weight (falling back to trend weight), protein,
  fat, carbs and steps for the day.
- Food Log rows replace the day's food list, but only for days that have at
  least one Food Log row. Days without rows keep their foods.
- Unknown foods become custom foods; known ones (same name and serving
  weight) are reused.
- Workout, Strava, sleep, body fat and photo fields are never touched.
"""
import logging
from decimal import Decimal
from typing import Dict, List, Mapping, Optional, Sequence

from daily_logs.models import DailyLog
from fittrack.import_utils import ImportResult
from nutrition.models import quantize
from nutrition.services.food_cache import CustomFoodCache, per_serving_values, serving_qty_of
from nutrition.services.macrofactor_xlsx import DailySummary, FoodLogEntry
from settings.models import ProgramSettings, day_number_for
from settings.utils import to_date

logger = logging.getLogger(__name__)

SOURCE_NAME = 'MacroFactor'

LOG_VALUE_PLACES = Decimal('0.01')

MAX_STEPS = 2147483647


def _decimal(field_name, value) -> Optional[Decimal]:
    """Quantized value for a DailyLog decimal column, or None when it does not fit."""
    if value is None:
        return None
    field = DailyLog._meta.get_field(field_name)
    limit = 10 ** (field.max_digits - field.decimal_places)
    if abs(value) < limit:
        quantized = quantize(value, LOG_VALUE_PLACES)
        if abs(quantized) < limit:
            return quantized
    logger.warning("Ignoring out of range %s value %s", field_name, value)
    return None


def _steps(value) -> Optional[int]:
    if value is None or value < 0:
        return None
    if value > MAX_STEPS:
        logger.warning("Ignoring out of range steps value %s", value)
        return None
    return int(round(value))


def summary_values(summary: DailySummary) -> Dict:
    """DailyLog fields taken from a Quick Export row."""
    weight = summary.weight if summary.weight is not None else summary.trend_weight
    return {
        'weight': _decimal('weight', weight),
        'protein': _decimal('protein', summary.protein),
        'fat': _decimal('fat', summary.fat),
        'carbs': _decimal('carbs', summary.carbs),
        'steps': _steps(summary.steps),
    }


def build_food_snapshot(entry: FoodLogEntry, food, log_date, index: int) -> Dict:
    """
    Food entry as stored on a DailyLog.

    Totals are the row's reported values. The embedded customFood block holds
    this row's per-serving values so the entry can be rescaled later.
    """
    per_serving = per_serving_values(entry)
    return {
        'id': f'custom-{food.pk}-{log_date}-{index}',
        'customFoodId': food.pk,
        'name': food.name,
        'brand': None,
        'amount': serving_qty_of(entry),
        'unit': 'serving',
        'customFood': {
            'serving_size': float(food.serving_size),
            'serving_unit': food.serving_unit,
            **per_serving,
        },
        'calories': entry.calories,
        'protein': entry.protein,
        'fat': entry.fat,
        'carbs': entry.carbs,
    }


def build_food_snapshots(entries: Sequence[FoodLogEntry], log_date, food_cache: CustomFoodCache) -> List[Dict]:
    foods = []
    for entry in entries:
        food = food_cache.resolve(entry)
        if food is None:
            continue
        foods.append(build_food_snapshot(entry, food, log_date, len(foods)))
    return foods


def reconcile(
    summaries: Mapping[str, DailySummary],
    food_log: Mapping[str, Sequence[FoodLogEntry]],
    profile,
    food_cache: Optional[CustomFoodCache] = None,
) -> ImportResult:
    """
    Create or update one DailyLog per imported date for a profile.

    Args:
        summaries: date -> Quick Export summary
        food_log: date -> Food Log entries in row order
        profile: Profile the logs belong to
        food_cache: Custom food cache for this run (a fresh one by default)

    Returns:
        ImportResult with created/updated log counts

    Database errors propagate to the caller.
    """
    if food_cache is None:
        food_cache = CustomFoodCache()

    dates = sorted(set(summaries) | set(food_log))
    result = ImportResult(source=SOURCE_NAME, dates=len(dates))
    if not dates:
        return result

    program_settings = ProgramSettings.for_profile(profile)
    existing = {
        log.date.isoformat(): log
        for log in DailyLog.objects.for_profile(profile).filter(date__in=[to_date(day) for day in dates])
    }

    for day in dates:
        log_date = to_date(day)
        day_number, _ = day_number_for(profile, log_date, program_settings)
        values = {'day_number': day_number}

        summary = summaries.get(day)
        if summary is not None:
            values.update(summary_values(summary))

        entries = food_log.get(day) or ()
        if entries:
            values['foods'] = build_food_snapshots(entries, day, food_cache)

        log = existing.get(day)
        if log is None:
            DailyLog.objects.create(profile=profile, date=log_date, **values)
            result.created += 1
            logger.debug("Created daily log %s for %s", day, profile)
        else:
            for field, value in values.items():
                setattr(log, field, value)
            log.save(update_fields=[*values, 'updated_at'])
            result.updated += 1
            logger.debug("Updated daily log %s for %s", day, profile)

    result.foods_created = food_cache.created_count
    return result
