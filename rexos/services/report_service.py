"""
Report Service
Assembles the data shown on the dashboard and in the weekly report.

This service provides:
    - `build_daily_summary`: ratings and headline numbers for one date
    - `build_weekly_report`: everything the exportable weekly report renders
    - `report_filename`: file name of an exported weekly report

Nothing here renders anything; see rexos.services.pdf_export for the PDF.
"""

from typing import Optional, Tuple

from pydantic import Field

from rexos.core.calendar import DateLike, get_day_name, get_week_dates
from rexos.core.constants import REPORT_FILENAME_PREFIX
from rexos.schemas.base import RexModel
from rexos.schemas.diet import MacroTotals
from rexos.schemas.rating import Rating
from rexos.schemas.state import RexState
from rexos.services.meal_service import calculate_diet_totals
from rexos.services.ratings import (
    calculate_diet_rating,
    calculate_habit_rating,
    calculate_workout_rating,
    get_daily_overall_rating,
    get_weekly_consistency,
    get_weekly_verdict,
)
from rexos.services.workout_service import planned_day, resolve_plan_variant


class DailySummary(RexModel):
    """Ratings and headline numbers of one date."""
    date: str
    day_name: str
    overall: Rating
    habit: Rating
    workout: Rating
    diet: Rating
    habits_completed: int
    habits_total: int
    diet_totals: MacroTotals
    workout_completed: bool = Field(..., description="A workout log with at least one exercise exists")
    workout_name: str = ""
    workout_volume: float = Field(0, description="Plan plus additional volume (kg)")
    note: Optional[str] = None


class HabitWeekSummary(RexModel):
    """How many days of the week a habit was completed."""
    habit_id: str
    name: str
    icon: str
    days_completed: int


class WeeklyReport(RexModel):
    """
    Data of the weekly report, Monday to Sunday.

    Example:
        report = build_weekly_report(state, "2024-01-17")
        report.week_start  # "2024-01-15"
        report.days[0].overall.tier  # "good"
    """
    week_dates: Tuple[str, ...]
    week_start: str
    week_end: str
    profile_name: Optional[str] = None
    consistency: float = Field(..., description="Weekly consistency %")
    verdict: str
    days: Tuple[DailySummary, ...]
    habit_overview: Tuple[HabitWeekSummary, ...]
    total_volume: float
    average_macros: MacroTotals = Field(..., description="Weekly totals divided by 7")


def _workout_name(state: RexState, date: str) -> str:
    plan = state.workout_plan
    if plan is None:
        return ""
    day = planned_day(plan, date, resolve_plan_variant(plan, state.workout_log_for(date)))
    return day.workout_name if day is not None else ""


def build_daily_summary(state: RexState, date: str) -> DailySummary:
    """
    Everything the dashboard shows for one date.

    Workout volume here includes additional exercises, unlike the workout
    rating which only counts plan-derived sets.
    """
    record = state.habit_record_for(date)
    workout_log = state.workout_log_for(date)
    note = state.note_for(date)

    return DailySummary(
        date=date,
        day_name=get_day_name(date),
        overall=get_daily_overall_rating(state, date),
        habit=calculate_habit_rating(state, date),
        workout=calculate_workout_rating(state, date),
        diet=calculate_diet_rating(state, date),
        habits_completed=len(record.completed_habit_ids()) if record is not None else 0,
        habits_total=len(state.habits),
        diet_totals=calculate_diet_totals(state.diet_log_for(date)),
        workout_completed=workout_log is not None and len(workout_log.exercises) > 0,
        workout_name=_workout_name(state, date),
        workout_volume=workout_log.total_volume if workout_log is not None else 0.0,
        note=note.content if note is not None and note.content.strip() else None,
    )


def build_weekly_report(state: RexState, reference_date: DateLike) -> WeeklyReport:
    """
    Build the weekly report of the week containing `reference_date`.

    Weekly macro averages divide by 7, days without meals included.
    """
    week_dates = get_week_dates(reference_date)
    days = tuple(build_daily_summary(state, date) for date in week_dates)
    consistency = get_weekly_consistency(state, week_dates)

    habit_overview = []
    for habit in state.habits:
        days_completed = 0
        for date in week_dates:
            record = state.habit_record_for(date)
            if record is not None and habit.id in record.completed_habit_ids():
                days_completed += 1
        habit_overview.append(HabitWeekSummary(
            habit_id=habit.id,
            name=habit.name,
            icon=habit.icon,
            days_completed=days_completed,
        ))

    week_totals = MacroTotals()
    for day in days:
        week_totals = week_totals + day.diet_totals

    return WeeklyReport(
        week_dates=tuple(week_dates),
        week_start=week_dates[0],
        week_end=week_dates[-1],
        profile_name=state.profile.name if state.profile is not None else None,
        consistency=consistency,
        verdict=get_weekly_verdict(consistency),
        days=days,
        habit_overview=tuple(habit_overview),
        total_volume=sum(day.workout_volume for day in days),
        average_macros=MacroTotals(
            calories=week_totals.calories / 7,
            protein=week_totals.protein / 7,
            carbs=week_totals.carbs / 7,
            fat=week_totals.fat / 7,
        ),
    )


def report_filename(week_start: str) -> str:
    """e.g. "RexOS_Weekly_Report_2024-01-15.pdf"."""
    return f"{REPORT_FILENAME_PREFIX}{week_start}.pdf"
