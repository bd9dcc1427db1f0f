"""
Shared import infrastructure for management commands.

ImportResult — structured return type for spreadsheet imports.
"""

from dataclasses import dataclass


@dataclass
class ImportResult:
    """Structured result from an import run."""

    source: str
    success: bool = True
    dates: int = 0
    created: int = 0
    updated: int = 0
    foods_created: int = 0
    skipped_rows: int = 0
    error_message: str = ""

    @property
    def total(self):
        return self.created + self.updated

    @property
    def summary(self):
        if not self.success:
            return f"Failed: {self.error_message}"
        return (
            f"Import done. Dates: {self.dates}. "
            f"Created {self.created} new logs, updated {self.updated} existing."
        )

    @property
    def details(self):
        parts = []
        if self.foods_created:
            parts.append(f"{self.foods_created} custom foods created")
        if self.skipped_rows:
            parts.append(f"{self.skipped_rows} rows skipped")
        return ", ".join(parts) if parts else "No custom foods created"
