"""
PDF Export Service
Renders a WeeklyReport to a PDF file with reportlab.

The export boundary is the only place RexOS reports an error to the user:
rendering or writing failures are logged and raised as ExportError, and the
aggregate is never touched. Only one export may run at a time; a second
request while one is in flight raises ExportInProgressError, and
`is_exporting` lets the caller disable its trigger meanwhile.

Usage:
    exporter = ReportExporter("reports")
    path = asyncio.run(exporter.export(build_weekly_report(state, today())))
"""

import asyncio
import logging
from pathlib import Path
from typing import List, Optional, Union
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import mm
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer

from rexos.core.config import settings
from rexos.core.exceptions import ExportError, ExportInProgressError
from rexos.core.formatting import format_number
from rexos.services.error_logging import error_logger
from rexos.services.report_service import WeeklyReport, report_filename


logger = logging.getLogger(__name__)

# Shared look of every table in the report
TABLE_STYLE = TableStyle([
    ('BACKGROUND', (0, 0), (-1, 0), colors.grey),
    ('TEXTCOLOR', (0, 0), (-1, 0), colors.whitesmoke),
    ('ALIGN', (0, 0), (-1, -1), 'CENTER'),
    ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
    ('FONTSIZE', (0, 0), (-1, -1), 9),
    ('BOTTOMPADDING', (0, 0), (-1, 0), 8),
    ('BACKGROUND', (0, 1), (-1, -1), colors.beige),
    ('GRID', (0, 0), (-1, -1), 0.5, colors.black)
])

TIER_COLORS = {
    "excellent": colors.darkgreen,
    "good": colors.green,
    "warning": colors.orange,
    "danger": colors.red,
}


def _pct(value: float) -> str:
    return f"{round(value)}%"


def _table(rows: List[List[str]]) -> Table:
    table = Table(rows)
    table.setStyle(TABLE_STYLE)
    return table


def build_report_elements(report: WeeklyReport) -> list:
    """
    Flowables of the weekly report, in page order.

    Sections: header, weekly score, daily ratings, habits, workouts,
    nutrition, notes.
    """
    styles = getSampleStyleSheet()
    title_style = ParagraphStyle(
        'ReportTitle',
        parent=styles['Heading1'],
        fontSize=22,
        spaceAfter=12,
        textColor=colors.darkblue
    )

    elements = []

    # Header
    title = "Weekly Report"
    if report.profile_name:
        title += f" - {escape(report.profile_name)}"
    elements.append(Paragraph(title, title_style))
    elements.append(Paragraph(f"{report.week_start} to {report.week_end}", styles['Normal']))
    elements.append(Spacer(1, 12))

    # Weekly score
    elements.append(Paragraph("Weekly Consistency", styles['Heading2']))
    elements.append(Paragraph(f"<b>{_pct(report.consistency)}</b> - {escape(report.verdict)}", styles['Normal']))
    elements.append(Spacer(1, 12))

    # Daily ratings
    elements.append(Paragraph("Daily Ratings", styles['Heading2']))
    rows = [['Day', 'Date', 'Overall', 'Habits', 'Workout', 'Diet']]
    for day in report.days:
        rows.append([
            day.day_name,
            day.date,
            _pct(day.overall.score),
            _pct(day.habit.score),
            _pct(day.workout.score),
            _pct(day.diet.score),
        ])
    ratings_table = _table(rows)
    for row_index, day in enumerate(report.days, start=1):
        ratings_table.setStyle(TableStyle([
            ('TEXTCOLOR', (2, row_index), (2, row_index), TIER_COLORS.get(day.overall.tier, colors.black)),
        ]))
    elements.append(ratings_table)
    elements.append(Spacer(1, 12))

    # Habits
    elements.append(Paragraph("Habits", styles['Heading2']))
    if report.habit_overview:
        rows = [['Habit', 'Days completed']]
        for habit in report.habit_overview:
            rows.append([habit.name, f"{habit.days_completed}/7 days"])
        elements.append(_table(rows))
    else:
        elements.append(Paragraph("No habits configured.", styles['Normal']))
    elements.append(Spacer(1, 12))

    # Workouts
    elements.append(Paragraph("Workouts", styles['Heading2']))
    elements.append(Paragraph(f"Total volume: {format_number(report.total_volume)}kg", styles['Normal']))
    rows = [['Day', 'Workout', 'Done', 'Volume (kg)']]
    for day in report.days:
        rows.append([
            day.day_name,
            day.workout_name or "Rest",
            "Yes" if day.workout_completed else "No",
            format_number(day.workout_volume),
        ])
    elements.append(_table(rows))
    elements.append(Spacer(1, 12))

    # Nutrition
    elements.append(Paragraph("Nutrition", styles['Heading2']))
    rows = [['Day', 'Calories', 'Protein (g)', 'Carbs (g)', 'Fat (g)']]
    for day in report.days:
        totals = day.diet_totals
        rows.append([
            day.day_name,
            format_number(totals.calories),
            format_number(totals.protein),
            format_number(totals.carbs),
            format_number(totals.fat),
        ])
    averages = report.average_macros
    rows.append([
        'Daily average',
        str(round(averages.calories)),
        str(round(averages.protein)),
        str(round(averages.carbs)),
        str(round(averages.fat)),
    ])
    elements.append(_table(rows))
    elements.append(Spacer(1, 12))

    # Notes
    notes = [day for day in report.days if day.note]
    if notes:
        elements.append(Paragraph("Notes", styles['Heading2']))
        for day in notes:
            elements.append(Paragraph(f"<b>{day.day_name}</b>: {escape(day.note)}", styles['Normal']))
            elements.append(Spacer(1, 6))

    return elements


def render_weekly_report_pdf(report: WeeklyReport, path: Union[str, Path]) -> Path:
    """
    Write the report as an A4 PDF.

    Returns:
        Path of the written file
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    doc = SimpleDocTemplate(
        str(path),
        pagesize=A4,
        leftMargin=10 * mm,
        rightMargin=10 * mm,
        topMargin=10 * mm,
        bottomMargin=10 * mm,
        title=f"RexOS Weekly Report {report.week_start}",
    )
    doc.build(build_report_elements(report))
    return path


class ReportExporter:
    """
    Exports weekly reports to `output_dir`, one at a time.

    Args:
        output_dir: Destination directory (defaults to settings.REPORT_DIR)
    """

    def __init__(self, output_dir: Optional[Union[str, Path]] = None):
        self.output_dir = Path(output_dir or settings.REPORT_DIR)
        self._exporting = False

    @property
    def is_exporting(self) -> bool:
        return self._exporting

    async def export(self, report: WeeklyReport, filename: Optional[str] = None) -> Path:
        """
        Render `report` to a PDF file.

        Args:
            report: Weekly report data
            filename: File name inside output_dir (".pdf" is appended if missing)

        Returns:
            Path of the written PDF

        Raises:
            ExportInProgressError: If another export has not finished yet
            ExportError: If rendering or writing fails
        """
        if self._exporting:
            raise ExportInProgressError("An export is already running")

        filename = filename or report_filename(report.week_start)
        if not filename.endswith(".pdf"):
            filename = f"{filename}.pdf"
        path = self.output_dir / filename

        self._exporting = True
        try:
            # Rendering is blocking; run it off the event loop
            written = await asyncio.to_thread(render_weekly_report_pdf, report, path)
        except Exception as e:
            error_logger.log_error(
                e,
                severity="error",
                context={"operation": "export", "filename": filename},
            )
            raise ExportError(f"Failed to generate PDF: {e}") from e
        finally:
            self._exporting = False

        logger.info(f"Exported weekly report to {written}")
        return written
