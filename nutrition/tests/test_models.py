from decimal import Decimal

from django.test import TestCase

from nutrition.models import CustomFood


class CustomFoodModelTests(TestCase):
    """Tests for the CustomFood model and its queryset helpers"""

    def _food(self, **kwargs):
        defaults = {
            'name': 'Oatmeal',
            'serving_size': Decimal('50'),
            'calories': Decimal('190'),
        }
        defaults.update(kwargs)
        return CustomFood.objects.create(**defaults)

    def test_defaults(self):
        food = self._food()
        self.assertEqual(food.source, 'custom')
        self.assertEqual(food.serving_unit, 'g')
        self.assertEqual(str(food), 'Oatmeal (50g)')

    def test_barcode_is_stored_without_leading_zeros(self):
        food = self._food(barcode=' 0012345678905 ')
        food.refresh_from_db()
        self.assertEqual(food.barcode, '12345678905')

    def test_matching_ignores_case_and_surrounding_whitespace(self):
        food = self._food(name='  Greek Yogurt ')
        self.assertEqual(list(CustomFood.objects.matching('greek yogurt', 50)), [food])

    def test_matching_folds_non_ascii_capitals(self):
        food = self._food(name='Éclair')
        self.assertEqual(food.name_key, 'éclair')
        self.assertEqual(list(CustomFood.objects.matching('ÉCLAIR ', 50)), [food])
        self.assertEqual(list(CustomFood.objects.potential_duplicates(name='éCL')), [food])

    def test_matching_requires_exact_serving_size(self):
        self._food(serving_size=Decimal('50'))
        self.assertFalse(CustomFood.objects.matching('Oatmeal', 50.5).exists())
        self.assertFalse(CustomFood.objects.matching('Oatmeal', 50, serving_unit='ml').exists())

    def test_matching_returns_oldest_first(self):
        first = self._food()
        self._food(name='OATMEAL')
        self.assertEqual(CustomFood.objects.matching('oatmeal', 50).first(), first)

    def test_potential_duplicates_by_name_or_brand(self):
        oats = self._food(name='Rolled Oats')
        bar = self._food(name='Protein Bar', brand='Oat Co')
        self._food(name='Banana')
        self.assertEqual(list(CustomFood.objects.potential_duplicates(name='oat')), [bar, oats])

    def test_potential_duplicates_by_barcode(self):
        food = self._food(barcode='012345678905')
        self.assertEqual(list(CustomFood.objects.potential_duplicates(barcode='0012345678905')), [food])

    def test_potential_duplicates_needs_enough_input(self):
        self._food(name='Oatmeal', barcode='12345678905')
        self.assertFalse(CustomFood.objects.potential_duplicates(name='o').exists())
        self.assertFalse(CustomFood.objects.potential_duplicates(barcode='123').exists())
        self.assertFalse(CustomFood.objects.potential_duplicates().exists())
