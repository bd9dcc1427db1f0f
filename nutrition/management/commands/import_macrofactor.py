"""
Django management command to import a MacroFactor xlsx export.

Matches dates from the Quick Export and Food Log sheets to a profile's daily
logs, creating logs that don't exist yet and updating the rest. Unknown foods
become custom foods; existing custom foods with the same name and serving
weight are reused.

Usage:
    python manage.py import_macrofactor <path_to_export.xlsx>
    python manage.py import_macrofactor MacroFactor-20260129141432.xlsx --profile alex --dry-run
"""
import os

from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from nutrition.services.food_cache import CustomFoodCache
from nutrition.services.macrofactor_import import reconcile
from nutrition.services.macrofactor_xlsx import parse_macrofactor_xlsx
from profiles.models import Profile


class DryRunRollback(Exception):
    """Raised inside the import transaction to discard a dry run."""


class Command(BaseCommand):
    help = 'Import daily logs and foods from a MacroFactor xlsx export'

    def add_arguments(self, parser):
        parser.add_argument(
            'xlsx_file',
            type=str,
            help='Path to the MacroFactor export (.xlsx)'
        )
        parser.add_argument(
            '--profile',
            type=str,
            default=None,
            help='Profile id or username to import into (default: the only profile)'
        )
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Run the whole import, then roll it back'
        )

    def handle(self, *args, **options):
        xlsx_file = options['xlsx_file']
        dry_run = options['dry_run']

        if not os.path.exists(xlsx_file):
            raise CommandError(f'File not found: {xlsx_file}')

        profile = self._get_profile(options['profile'])

        if dry_run:
            self.stdout.write(self.style.WARNING('DRY RUN MODE - No data will be saved'))

        self.stdout.write(f'Reading file: {xlsx_file}')
        try:
            export = parse_macrofactor_xlsx(xlsx_file)
        except Exception as e:
            self.stdout.write(self.style.ERROR(f'Could not read MacroFactor export: {e}'))
            raise

        dates = export.dates
        if not dates:
            self.stdout.write('No dates found in xlsx.')
            return

        self.stdout.write(
            f'Found {len(export.summaries)} Quick Export days and '
            f'{len(export.food_log)} Food Log days ({dates[0]} to {dates[-1]})'
        )

        try:
            result = self._run_import(export, profile, dry_run)
        except Exception as e:
            self.stdout.write(self.style.ERROR(f'Error importing MacroFactor data: {e}'))
            raise

        result.skipped_rows = export.skipped_rows

        self.stdout.write(self.style.SUCCESS(
            f'{"DRY RUN " if dry_run else ""}{result.summary}'
        ))
        self.stdout.write(f'  {result.details}')
        self.import_result = result

    def _get_profile(self, identifier):
        if identifier:
            try:
                return Profile.lookup(identifier)
            except Profile.DoesNotExist:
                raise CommandError(f'Profile not found: {identifier}')

        profiles = list(Profile.objects.all()[:2])
        if len(profiles) != 1:
            raise CommandError(
                'Use --profile to choose which profile to import into '
                f'({"no profiles exist" if not profiles else "more than one profile exists"}).'
            )
        return profiles[0]

    def _run_import(self, export, profile, dry_run):
        """
        Reconcile the export inside one transaction. A dry run raises at the
        end of the block so every write is rolled back.
        """
        result = None
        try:
            with transaction.atomic():
                result = reconcile(export.summaries, export.food_log, profile, CustomFoodCache())
                if dry_run:
                    raise DryRunRollback()
        except DryRunRollback:
            pass
        return result
