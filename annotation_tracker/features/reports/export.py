"""
Report Export Module

Builds the downloadable performance report from user/day summaries and
serializes it as an HTML table (opened by spreadsheet software as .xls)
or as CSV.

Features:
- Structured table with per-cell threshold status
- "No data" sentinel for empty slots
- HTML table rendering with red/green cells
- CSV rendering via pandas
- Report file naming

Dependencies:
- Pydantic for the table model
- pandas for CSV output
- html for escaping

Author: Annotation Tracker Team
"""

from pydantic import BaseModel
from enum import Enum
from datetime import date
from typing import Any, List, Mapping, Optional, Sequence
import html
import pandas as pd

from annotation_tracker.shared.config import HOURLY_THRESHOLD, DAILY_THRESHOLD
from .aggregation import UserDaySummary, belongs_to

NO_DATA = "-"

LEADING_COLUMNS = ["S. No.", "User Name", "Location", "Date", "QA Name"]
TRAILING_COLUMNS = ["Total Annotations", "Anticipated Count", "Met 30/hr (%)", "Met 500/day"]

MET_COLOR = "#4ade80"
NOT_MET_COLOR = "#f87171"

EXPORT_MEDIA_TYPES = {
    "xls": "application/vnd.ms-excel",
    "csv": "text/csv",
}

class CellStatus(str, Enum):
    """Threshold classification of a report cell."""
    MET = "met"
    NOT_MET = "not_met"
    NONE = "none"

class ReportCell(BaseModel):
    value: Any
    status: CellStatus = CellStatus.NONE

    @property
    def text(self) -> str:
        if isinstance(self.value, bool):
            return "YES" if self.value else "NO"
        return str(self.value)

class ReportTable(BaseModel):
    """Header plus one row of cells per summary."""
    columns: List[str]
    rows: List[List[ReportCell]]

def threshold_cell(value: int, threshold: int) -> ReportCell:
    status = CellStatus.MET if value >= threshold else CellStatus.NOT_MET
    return ReportCell(value=value, status=status)

def anticipated_total_for(summary: UserDaySummary, entries: Sequence[Mapping[str, Any]]) -> int:
    return sum(entry.get("anticipatedCount") or 0 for entry in entries if belongs_to(entry, summary))

def export_table(
    summaries: Sequence[UserDaySummary],
    entries: Sequence[Mapping[str, Any]],
    time_slots: Sequence[str]
) -> ReportTable:
    """
    Build the report table.

    Args:
        summaries: Output of summarize()
        entries: The entries the summaries were built from
        time_slots: Ordered slot labels, one column each

    Returns:
        ReportTable: One row per summary

    Notes:
        - Slots without a recorded count hold NO_DATA, never 0
        - Anticipated count is re-summed from entries and compared
          against the hourly threshold, not the daily one
    """
    columns = LEADING_COLUMNS + list(time_slots) + TRAILING_COLUMNS
    rows = []
    for index, summary in enumerate(summaries, start=1):
        row = [
            ReportCell(value=index),
            ReportCell(value=summary.user_name),
            ReportCell(value=summary.location),
            ReportCell(value=summary.date),
            ReportCell(value=summary.qa_name),
        ]
        for slot in time_slots:
            count = summary.slot_counts.get(slot)
            if count is None:
                row.append(ReportCell(value=NO_DATA))
            else:
                row.append(threshold_cell(count, HOURLY_THRESHOLD))

        anticipated = anticipated_total_for(summary, entries)
        row.extend([
            threshold_cell(summary.total_annotations, DAILY_THRESHOLD),
            threshold_cell(anticipated, HOURLY_THRESHOLD),
            ReportCell(value=f"{summary.met_percent:.2f}%"),
            ReportCell(value=not summary.low_total),
        ])
        rows.append(row)
    return ReportTable(columns=columns, rows=rows)

def render_csv(table: ReportTable) -> str:
    frame = pd.DataFrame(
        [[cell.text for cell in row] for row in table.rows],
        columns=table.columns
    )
    return frame.to_csv(index=False)

def render_html(table: ReportTable) -> str:
    """
    Render the table as a styled HTML table.

    The payload starts with a BOM so spreadsheet software reads it as UTF-8.
    """
    cell_style = "padding: 6px; text-align: center;"
    header = "".join(
        f'<th style="padding: 8px; text-align: center;">{html.escape(column)}</th>'
        for column in table.columns
    )
    body = []
    for row in table.rows:
        cells = []
        for cell in row:
            if cell.status == CellStatus.NONE:
                style = cell_style
            else:
                color = MET_COLOR if cell.status == CellStatus.MET else NOT_MET_COLOR
                style = f"background-color:{color}; color:#fff; {cell_style}"
            cells.append(f'<td style="{style}">{html.escape(cell.text)}</td>')
        body.append(f"<tr>{''.join(cells)}</tr>")

    return (
        '\ufeff<table border="1" style="border-collapse: collapse; font-family: Arial, sans-serif;">'
        f'<thead><tr style="background-color: #f3f4f6; font-weight: bold;">{header}</tr></thead>'
        f"<tbody>{''.join(body)}</tbody></table>"
    )

def export_filename(fmt: str, day: Optional[date] = None) -> str:
    day = day or date.today()
    return f"annotation_report_{day.isoformat()}.{fmt}"
