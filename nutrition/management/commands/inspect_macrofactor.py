"""
Django management command to inspect a MacroFactor xlsx export before importing.

Lists sheet names, headers, which header each imported field resolves to, and
sample rows as they will be parsed.

Usage:
    python manage.py inspect_macrofactor <path_to_export.xlsx> [--rows=5]
"""
import os

from django.core.management.base import BaseCommand, CommandError
from openpyxl import load_workbook

from nutrition.services.macrofactor_xlsx import (
    FOOD_LOG_COLUMNS,
    FOOD_LOG_SHEET,
    QUICK_EXPORT_COLUMNS,
    QUICK_EXPORT_SHEET,
    parse_food_log,
    parse_quick_export,
    read_sheet_rows,
    resolve_columns,
)


class Command(BaseCommand):
    help = 'Show sheets, headers and sample rows of a MacroFactor xlsx export'

    def add_arguments(self, parser):
        parser.add_argument(
            'xlsx_file',
            type=str,
            help='Path to the MacroFactor export (.xlsx)'
        )
        parser.add_argument(
            '--rows',
            type=int,
            default=5,
            help='Number of sample rows to show per sheet (default: 5)'
        )

    def handle(self, *args, **options):
        xlsx_file = options['xlsx_file']
        sample_size = options['rows']

        if not os.path.exists(xlsx_file):
            raise CommandError(f'File not found: {xlsx_file}')

        workbook = load_workbook(xlsx_file, read_only=True, data_only=True)
        try:
            self.stdout.write(f'Sheet names: {", ".join(workbook.sheetnames)}')
            quick_export_rows = read_sheet_rows(workbook, QUICK_EXPORT_SHEET)
            food_log_rows = read_sheet_rows(workbook, FOOD_LOG_SHEET)
        finally:
            workbook.close()

        self._show_columns(QUICK_EXPORT_SHEET, quick_export_rows, QUICK_EXPORT_COLUMNS)
        summaries = parse_quick_export(quick_export_rows)
        for summary in list(summaries.values())[:sample_size]:
            self.stdout.write(
                f'  {summary.date}: trend={summary.trend_weight} weight={summary.weight} '
                f'cal={summary.calories} p={summary.protein} f={summary.fat} '
                f'c={summary.carbs} steps={summary.steps}'
            )

        self._show_columns(FOOD_LOG_SHEET, food_log_rows, FOOD_LOG_COLUMNS)
        food_log, skipped = parse_food_log(food_log_rows)
        self.stdout.write(f'Dates in Food Log: {", ".join(sorted(food_log)) or "none"}')
        if skipped:
            self.stdout.write(self.style.WARNING(f'  {skipped} rows without a date or food name'))
        for day in sorted(food_log)[:3]:
            entries = food_log[day]
            self.stdout.write(f'\nDate {day}: {len(entries)} entries')
            for number, entry in enumerate(entries[:sample_size], start=1):
                self.stdout.write(
                    f'  {number}. {entry.name} | serving={entry.serving_size} '
                    f'qty={entry.serving_qty:g} weight={entry.serving_weight_g:g}g | '
                    f'cal={entry.calories:g} p={entry.protein:g} f={entry.fat:g} c={entry.carbs:g}'
                )

    def _show_columns(self, sheet_name, rows, matchers):
        self.stdout.write(self.style.HTTP_INFO(f'\n--- {sheet_name} ---'))
        if not rows:
            self.stdout.write(self.style.WARNING('  Sheet missing or empty'))
            return

        headers = rows[0]
        self.stdout.write(f'Headers: {[h for h in headers if h is not None]}')
        for field, index in resolve_columns(headers, matchers).items():
            if index is None:
                self.stdout.write(self.style.WARNING(f'  {field}: not found'))
            else:
                self.stdout.write(f'  {field}: {headers[index]!r} (column {index + 1})')
        self.stdout.write(f'Data rows: {len(rows) - 1}')
