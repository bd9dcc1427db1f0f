"""
MacroFactor xlsx export parser

Reads the two sheets of a MacroFactor export with openpyxl:

- Quick Export: one row per day (Date, Trend Weight, Weight, Calories, Protein,
  Fat, Carbs, Steps, ...). Only logged values are used; "Target" columns are
  ignored.
- Food Log: one row per logged food (Date, Food Name, Serving Size, Serving Qty,
  Serving Weight (g), Calories, Fat, Carbs, Protein). Values are totals for the
  row, i.e. what was actually eaten.

Columns are located by header name, not position, so reordered or extra
columns in newer exports still parse.
"""
import logging
import math
import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from openpyxl import load_workbook

logger = logging.getLogger(__name__)

QUICK_EXPORT_SHEET = 'Quick Export'
FOOD_LOG_SHEET = 'Food Log'

# Spreadsheet serial day 25569 is 1970-01-01
UNIX_EPOCH = datetime(1970, 1, 1)
SERIAL_DAY_OFFSET = 25569

ISO_DATE_RE = re.compile(r'^\d{4}-\d{2}-\d{2}')

DEFAULT_SERVING_SIZE = 'serving'
DEFAULT_SERVING_QTY = 1.0
DEFAULT_SERVING_WEIGHT_G = 100.0


@dataclass(frozen=True)
class ColumnMatcher:
    """Header matcher for one field: first header matching `pattern` and not `exclude`."""

    field: str
    pattern: str
    exclude: Optional[str] = None

    def matches(self, header) -> bool:
        text = '' if header is None else str(header)
        if not re.search(self.pattern, text, re.IGNORECASE):
            return False
        return not (self.exclude and re.search(self.exclude, text, re.IGNORECASE))


QUICK_EXPORT_COLUMNS = (
    ColumnMatcher('date', r'date'),
    ColumnMatcher('trend_weight', r'trend\s*weight'),
    ColumnMatcher('weight', r'^weight\s*\(', exclude=r'trend'),
    ColumnMatcher('calories', r'calories', exclude=r'target'),
    ColumnMatcher('protein', r'^protein\s*\(', exclude=r'target'),
    ColumnMatcher('fat', r'^fat\s*\(', exclude=r'target'),
    ColumnMatcher('carbs', r'^carbs\s*\(', exclude=r'target'),
    ColumnMatcher('steps', r'steps'),
)

FOOD_LOG_COLUMNS = (
    ColumnMatcher('date', r'date'),
    ColumnMatcher('name', r'food\s*name'),
    ColumnMatcher('serving_size', r'serving\s*size'),
    ColumnMatcher('serving_qty', r'serving\s*qty'),
    ColumnMatcher('serving_weight', r'serving\s*weight'),
    ColumnMatcher('calories', r'calories'),
    ColumnMatcher('fat', r'^fat\s*\('),
    ColumnMatcher('carbs', r'^carbs\s*\('),
    ColumnMatcher('protein', r'^protein\s*\('),
)


@dataclass(frozen=True)
class DailySummary:
    """One Quick Export row: logged totals for a day."""

    date: str
    trend_weight: Optional[float] = None
    weight: Optional[float] = None
    calories: Optional[float] = None
    protein: Optional[float] = None
    fat: Optional[float] = None
    carbs: Optional[float] = None
    steps: Optional[float] = None


@dataclass(frozen=True)
class FoodLogEntry:
    """One Food Log row. Nutrition values are totals for the whole row."""

    date: str
    name: str
    serving_size: str = DEFAULT_SERVING_SIZE
    serving_qty: float = DEFAULT_SERVING_QTY
    serving_weight_g: float = DEFAULT_SERVING_WEIGHT_G
    calories: float = 0.0
    fat: float = 0.0
    carbs: float = 0.0
    protein: float = 0.0


@dataclass(frozen=True)
class MacroFactorExport:
    """Parsed export: date -> summary, and date -> food log entries in row order."""

    summaries: Mapping[str, DailySummary]
    food_log: Mapping[str, Tuple[FoodLogEntry, ...]]
    skipped_rows: int = 0

    @property
    def dates(self) -> List[str]:
        return sorted(set(self.summaries) | set(self.food_log))


def excel_date_to_iso(value) -> Optional[str]:
    """
    Normalize a date cell to 'YYYY-MM-DD'.

    Accepts date/datetime cells, ISO strings, and spreadsheet serial day
    numbers (as numbers or numeric strings). Returns None for anything else,
    including ISO strings naming a day that does not exist.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, str):
        text = value.strip()
        if ISO_DATE_RE.match(text):
            try:
                return date.fromisoformat(text[:10]).isoformat()
            except ValueError:
                return None
        value = text

    serial = to_number(value)
    if serial is None:
        return None
    try:
        return (UNIX_EPOCH + timedelta(days=serial - SERIAL_DAY_OFFSET)).date().isoformat()
    except OverflowError:
        return None


def to_number(value) -> Optional[float]:
    """Parse a numeric cell. Blank, unparseable and non-finite values give None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = str(value).strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    return number if math.isfinite(number) else None


def resolve_columns(headers: Sequence, matchers: Sequence[ColumnMatcher]) -> Dict[str, Optional[int]]:
    """
    Map each field to the index of its first matching header, or None when
    no header matches.
    """
    columns = {}
    for matcher in matchers:
        columns[matcher.field] = next(
            (index for index, header in enumerate(headers) if matcher.matches(header)),
            None,
        )
    return columns


def _cell(row: Sequence, index: Optional[int]):
    if index is None or index >= len(row):
        return None
    return row[index]


def _text(value) -> str:
    return '' if value is None else str(value).strip()


def _positive(value: Optional[float], default: float) -> float:
    return value if value is not None and value > 0 else default


def read_sheet_rows(workbook, sheet_name: str) -> List[tuple]:
    """All rows of a sheet as value tuples, or [] when the sheet is missing."""
    if sheet_name not in workbook.sheetnames:
        logger.info("Sheet %r not found in workbook", sheet_name)
        return []
    sheet = workbook[sheet_name]
    # Exported files do not always carry a correct dimension record
    sheet.reset_dimensions()
    return list(sheet.iter_rows(values_only=True))


def parse_quick_export(rows: Sequence[Sequence]) -> Dict[str, DailySummary]:
    """Parse Quick Export rows. A later row for the same date replaces an earlier one."""
    summaries: Dict[str, DailySummary] = {}
    if not rows:
        return summaries

    columns = resolve_columns(rows[0], QUICK_EXPORT_COLUMNS)
    for row in rows[1:]:
        day = excel_date_to_iso(_cell(row, columns['date']))
        if not day:
            continue
        summaries[day] = DailySummary(
            date=day,
            trend_weight=to_number(_cell(row, columns['trend_weight'])),
            weight=to_number(_cell(row, columns['weight'])),
            calories=to_number(_cell(row, columns['calories'])),
            protein=to_number(_cell(row, columns['protein'])),
            fat=to_number(_cell(row, columns['fat'])),
            carbs=to_number(_cell(row, columns['carbs'])),
            steps=to_number(_cell(row, columns['steps'])),
        )
    return summaries


def parse_food_log(rows: Sequence[Sequence]) -> Tuple[Dict[str, List[FoodLogEntry]], int]:
    """
    Parse Food Log rows grouped by date.

    Rows without a usable date or food name are dropped.

    Returns:
        Tuple of (date -> entries in row order, number of dropped rows)
    """
    food_log: Dict[str, List[FoodLogEntry]] = {}
    skipped = 0
    if not rows:
        return food_log, skipped

    columns = resolve_columns(rows[0], FOOD_LOG_COLUMNS)
    for line_no, row in enumerate(rows[1:], start=2):
        if not any(_text(cell) for cell in row):
            continue

        day = excel_date_to_iso(_cell(row, columns['date']))
        name = _text(_cell(row, columns['name']))
        if not day or not name:
            logger.debug("Skipping Food Log row %d: missing date or food name", line_no)
            skipped += 1
            continue

        food_log.setdefault(day, []).append(FoodLogEntry(
            date=day,
            name=name,
            serving_size=_text(_cell(row, columns['serving_size'])) or DEFAULT_SERVING_SIZE,
            serving_qty=_positive(to_number(_cell(row, columns['serving_qty'])), DEFAULT_SERVING_QTY),
            serving_weight_g=_positive(
                to_number(_cell(row, columns['serving_weight'])), DEFAULT_SERVING_WEIGHT_G
            ),
            calories=to_number(_cell(row, columns['calories'])) or 0.0,
            fat=to_number(_cell(row, columns['fat'])) or 0.0,
            carbs=to_number(_cell(row, columns['carbs'])) or 0.0,
            protein=to_number(_cell(row, columns['protein'])) or 0.0,
        ))
    return food_log, skipped


def parse_macrofactor_xlsx(source) -> MacroFactorExport:
    """
    Parse a MacroFactor xlsx export.

    Args:
        source: Path to the .xlsx file, or a binary file object

    Returns:
        MacroFactorExport with read-only date-keyed mappings. A missing sheet
        gives an empty mapping for that part.
    """
    workbook = load_workbook(source, read_only=True, data_only=True)
    try:
        summaries = parse_quick_export(read_sheet_rows(workbook, QUICK_EXPORT_SHEET))
        food_log, skipped = parse_food_log(read_sheet_rows(workbook, FOOD_LOG_SHEET))
    finally:
        workbook.close()

    logger.info(
        "Parsed MacroFactor export: %d summary days, %d food log days, %d rows skipped",
        len(summaries), len(food_log), skipped,
    )
    return MacroFactorExport(
        summaries=MappingProxyType(summaries),
        food_log=MappingProxyType({day: tuple(entries) for day, entries in food_log.items()}),
        skipped_rows=skipped,
    )
