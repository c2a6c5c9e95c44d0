from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ReportData:
    """Spreadsheet-ready export: one header row, one row per user."""

    headers: list[str]
    rows: list[list[str]]
    filename: str
