"""
Tests for merging a parsed MacroFactor export into daily logs.
"""
from datetime import date
from decimal import Decimal

from django.test import TestCase

from daily_logs.models import DailyLog
from nutrition.models import CustomFood
from nutrition.services.food_cache import CustomFoodCache
from nutrition.services.macrofactor_import import reconcile, summary_values
from nutrition.services.macrofactor_xlsx import DailySummary, FoodLogEntry, parse_food_log
from nutrition.tests.workbooks import FOOD_LOG_HEADERS, food_log_row
from profiles.models import Profile
from settings.models import ProgramSettings


OATMEAL_ROWS = (
    FoodLogEntry(date='2024-03-02', name='Oatmeal', serving_qty=1, serving_weight_g=50,
                 calories=190, protein=7, fat=3, carbs=33),
    FoodLogEntry(date='2024-03-02', name='Oatmeal', serving_qty=2, serving_weight_g=50,
                 calories=380, protein=14, fat=6, carbs=66),
)


class SummaryValuesTests(TestCase):

    def test_weight_falls_back_to_trend_weight(self):
        values = summary_values(DailySummary(date='2024-03-01', trend_weight=181.26))
        self.assertEqual(values['weight'], Decimal('181.26'))

    def test_explicit_weight_wins_over_trend(self):
        values = summary_values(DailySummary(date='2024-03-01', trend_weight=181.0, weight=180.2))
        self.assertEqual(values['weight'], Decimal('180.20'))

    def test_out_of_range_values_are_dropped(self):
        values = summary_values(DailySummary(date='2024-03-01', weight=123456.0, protein=1e300,
                                             fat=70.0, steps=1e12))
        self.assertIsNone(values['weight'])
        self.assertIsNone(values['protein'])
        self.assertIsNone(values['steps'])
        self.assertEqual(values['fat'], Decimal('70.00'))

    def test_value_rounding_past_column_limit_is_dropped(self):
        self.assertIsNone(summary_values(DailySummary(date='2024-03-01', weight=9999.999))['weight'])
        self.assertEqual(
            summary_values(DailySummary(date='2024-03-01', weight=9999.99))['weight'],
            Decimal('9999.99'),
        )

    def test_steps_are_whole_numbers(self):
        self.assertEqual(summary_values(DailySummary(date='2024-03-01', steps=9321.0))['steps'], 9321)
        self.assertIsNone(summary_values(DailySummary(date='2024-03-01'))['steps'])


class ReconcileTests(TestCase):

    def setUp(self):
        self.profile = Profile.objects.create(username='alex')

    def _log(self, day):
        return DailyLog.objects.get(profile=self.profile, date=day)

    def test_creates_log_from_summary(self):
        summaries = {'2024-03-01': DailySummary(date='2024-03-01', weight=180.2, calories=2100,
                                                protein=180, fat=70, carbs=190, steps=9321)}
        result = reconcile(summaries, {}, self.profile)

        self.assertEqual((result.dates, result.created, result.updated), (1, 1, 0))
        log = self._log(date(2024, 3, 1))
        self.assertEqual(log.weight, Decimal('180.20'))
        self.assertEqual(log.protein, Decimal('180'))
        self.assertEqual(log.steps, 9321)
        self.assertEqual(log.foods, [])
        self.assertIsNone(log.workout)

    def test_food_snapshots_keep_row_totals(self):
        """Two oatmeal rows share one custom food but keep their own totals."""
        result = reconcile({}, {'2024-03-02': OATMEAL_ROWS}, self.profile)

        self.assertEqual(result.foods_created, 1)
        food = CustomFood.objects.get()
        self.assertEqual(food.calories, Decimal('190'))

        foods = self._log(date(2024, 3, 2)).foods
        self.assertEqual(len(foods), 2)
        self.assertEqual([f['customFoodId'] for f in foods], [food.pk, food.pk])
        self.assertEqual([f['calories'] for f in foods], [190, 380])
        self.assertEqual([f['protein'] for f in foods], [7, 14])
        self.assertEqual([f['amount'] for f in foods], [1, 2])
        self.assertEqual(foods[1]['customFood']['calories'], 190)
        self.assertEqual(foods[1]['customFood']['serving_size'], 50)
        self.assertEqual(foods[0]['unit'], 'serving')
        self.assertEqual(foods[0]['id'], f'custom-{food.pk}-2024-03-02-0')
        self.assertEqual(foods[1]['id'], f'custom-{food.pk}-2024-03-02-1')

    def test_summary_only_date_keeps_existing_foods(self):
        existing_foods = [{'id': 'manual-1', 'name': 'Apple', 'calories': 95}]
        DailyLog.objects.create(profile=self.profile, date=date(2024, 3, 1), foods=existing_foods,
                                workout='Legs', strava='https://www.strava.com/activities/1',
                                sleep_time='7:30', sleep_score=88, fat_percent=Decimal('18.5'),
                                photo=b'jpeg', photo_mime_type='image/jpeg')

        summaries = {'2024-03-01': DailySummary(date='2024-03-01', weight=180.2, steps=9321)}
        result = reconcile(summaries, {}, self.profile)

        self.assertEqual((result.created, result.updated), (0, 1))
        log = self._log(date(2024, 3, 1))
        self.assertEqual(log.weight, Decimal('180.20'))
        self.assertEqual(log.steps, 9321)
        self.assertEqual(log.foods, existing_foods)
        self.assertEqual(log.workout, 'Legs')
        self.assertEqual(log.strava, 'https://www.strava.com/activities/1')
        self.assertEqual(log.sleep_time, '7:30')
        self.assertEqual(log.sleep_score, 88)
        self.assertEqual(log.fat_percent, Decimal('18.5'))
        self.assertEqual(bytes(log.photo), b'jpeg')

    def test_food_log_date_replaces_foods(self):
        DailyLog.objects.create(profile=self.profile, date=date(2024, 3, 2),
                                foods=[{'id': 'manual-1', 'name': 'Apple', 'calories': 95}])

        reconcile({}, {'2024-03-02': OATMEAL_ROWS}, self.profile)

        foods = self._log(date(2024, 3, 2)).foods
        self.assertEqual([f['name'] for f in foods], ['Oatmeal', 'Oatmeal'])

    def test_food_only_date_keeps_existing_summary_fields(self):
        DailyLog.objects.create(profile=self.profile, date=date(2024, 3, 2),
                                weight=Decimal('181.00'), steps=5000)

        reconcile({}, {'2024-03-02': OATMEAL_ROWS}, self.profile)

        log = self._log(date(2024, 3, 2))
        self.assertEqual(log.weight, Decimal('181.00'))
        self.assertEqual(log.steps, 5000)

    def test_day_number_uses_program_settings(self):
        ProgramSettings.objects.create(profile=self.profile, start_date=date(2024, 3, 1), total_days=84)
        summaries = {
            '2024-02-20': DailySummary(date='2024-02-20', weight=182.0),
            '2024-03-10': DailySummary(date='2024-03-10', weight=179.0),
        }
        reconcile(summaries, {}, self.profile)
        self.assertEqual(self._log(date(2024, 2, 20)).day_number, 1)
        self.assertEqual(self._log(date(2024, 3, 10)).day_number, 10)

    def test_day_number_defaults_to_one_without_settings(self):
        reconcile({'2024-03-10': DailySummary(date='2024-03-10')}, {}, self.profile)
        self.assertEqual(self._log(date(2024, 3, 10)).day_number, 1)

    def test_logs_are_scoped_to_profile(self):
        other = Profile.objects.create(username='sam')
        DailyLog.objects.create(profile=other, date=date(2024, 3, 1), workout='Run')

        result = reconcile({'2024-03-01': DailySummary(date='2024-03-01', weight=180.2)}, {}, self.profile)

        self.assertEqual(result.created, 1)
        self.assertEqual(DailyLog.objects.filter(date=date(2024, 3, 1)).count(), 2)
        self.assertIsNone(DailyLog.objects.get(profile=other).weight)

    def test_running_twice_is_idempotent(self):
        summaries = {'2024-03-02': DailySummary(date='2024-03-02', weight=180.2, steps=9321)}
        food_log = {'2024-03-02': OATMEAL_ROWS}

        first = reconcile(summaries, food_log, self.profile)
        snapshot = self._log(date(2024, 3, 2)).foods
        second = reconcile(summaries, food_log, self.profile)

        self.assertEqual((first.created, first.updated), (1, 0))
        self.assertEqual((second.created, second.updated), (0, 1))
        self.assertEqual(second.foods_created, 0)
        self.assertEqual(CustomFood.objects.count(), 1)
        self.assertEqual(DailyLog.objects.count(), 1)
        self.assertEqual(self._log(date(2024, 3, 2)).foods, snapshot)

    def test_shared_cache_spans_dates(self):
        cache = CustomFoodCache()
        food_log = {
            '2024-03-02': OATMEAL_ROWS[:1],
            '2024-03-03': (FoodLogEntry(date='2024-03-03', name='oatmeal', serving_weight_g=50,
                                        calories=190),),
        }
        result = reconcile({}, food_log, self.profile, cache)
        self.assertEqual(result.foods_created, 1)
        self.assertEqual(len(cache), 1)

    def test_empty_export_does_nothing(self):
        result = reconcile({}, {}, self.profile)
        self.assertEqual((result.dates, result.created, result.updated), (0, 0, 0))
        self.assertEqual(DailyLog.objects.count(), 0)

    def test_impossible_date_row_does_not_abort_import(self):
        food_log, skipped = parse_food_log([
            FOOD_LOG_HEADERS,
            food_log_row('2024-02-30', 'Oatmeal', weight_g=50, calories=190),
            food_log_row('2024-03-02', 'Eggs', weight_g=50, calories=150),
        ])

        result = reconcile({}, food_log, self.profile)

        self.assertEqual(skipped, 1)
        self.assertEqual((result.dates, result.created), (1, 1))
        self.assertEqual([f['name'] for f in self._log(date(2024, 3, 2)).foods], ['Eggs'])

    def test_non_ascii_name_is_reused_across_runs(self):
        entry = FoodLogEntry(date='2024-03-02', name='Éclair', serving_weight_g=50, calories=260)

        reconcile({}, {'2024-03-02': (entry,)}, self.profile)
        second = reconcile({}, {'2024-03-02': (entry,)}, self.profile)

        self.assertEqual(second.foods_created, 0)
        self.assertEqual(CustomFood.objects.count(), 1)

    def test_snapshot_name_comes_from_custom_food(self):
        CustomFood.objects.create(name='Oatmeal', serving_size=Decimal('50'), calories=Decimal('190'))
        entry = FoodLogEntry(date='2024-03-02', name='  OATMEAL ', serving_weight_g=50, calories=190)

        reconcile({}, {'2024-03-02': (entry,)}, self.profile)

        self.assertEqual(self._log(date(2024, 3, 2)).foods[0]['name'], 'Oatmeal')
