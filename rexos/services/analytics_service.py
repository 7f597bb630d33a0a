"""
Analytics Service
Per-date series and summary figures for the progress charts.

Series are aligned with the list of date keys they were computed for, so a
chart can zip labels and values directly. Days without data contribute 0.
"""

from typing import Dict, List, Optional, Sequence

from pydantic import Field

from rexos.core.calendar import DateLike, get_date_range
from rexos.core.constants import TIME_FILTER_DAYS
from rexos.schemas.base import RexModel
from rexos.schemas.state import RexState
from rexos.services.meal_service import calculate_diet_totals


class AnalyticsSummary(RexModel):
    """Headline figures of an analytics period."""
    average_habit_completion: int = Field(..., description="Rounded mean habit completion %")
    total_volume: float = Field(..., description="Plan-derived volume over the period (kg)")
    average_calories: int = Field(..., description="Rounded mean calories over days with calories logged")


def get_filter_dates(time_filter: str, end: Optional[DateLike] = None) -> List[str]:
    """
    Date keys covered by a time filter, oldest first, ending at `end` (today by default).

    Args:
        time_filter: "day", "week", "month", "6months" or "year"

    Raises:
        ValueError: If the filter name is unknown
    """
    if time_filter not in TIME_FILTER_DAYS:
        raise ValueError(f"Time filter must be one of: {', '.join(TIME_FILTER_DAYS)}")
    return get_date_range(TIME_FILTER_DAYS[time_filter], end)


def habit_completion_series(state: RexState, dates: Sequence[str]) -> List[float]:
    """Completed habits as % of configured habits, per date (0 when no habits)."""
    total_habits = len(state.habits)
    series = []
    for date in dates:
        record = state.habit_record_for(date)
        completed = len(record.completed_habit_ids()) if record is not None else 0
        series.append(min(completed / total_habits * 100, 100.0) if total_habits > 0 else 0.0)
    return series


def workout_volume_series(state: RexState, dates: Sequence[str]) -> List[float]:
    """Plan-derived training volume per date."""
    series = []
    for date in dates:
        log = state.workout_log_for(date)
        series.append(log.plan_volume if log is not None else 0.0)
    return series


def diet_series(state: RexState, dates: Sequence[str]) -> Dict[str, List[float]]:
    """
    Calories and protein per date.

    Returns:
        {"calories": [...], "protein": [...]}
    """
    calories = []
    protein = []
    for date in dates:
        totals = calculate_diet_totals(state.diet_log_for(date))
        calories.append(totals.calories)
        protein.append(totals.protein)
    return {"calories": calories, "protein": protein}


def summarize(state: RexState, dates: Sequence[str]) -> AnalyticsSummary:
    """
    Headline figures for a period.

    Average calories only count days where calories were logged, so empty
    days do not drag the average down.
    """
    habit_data = habit_completion_series(state, dates)
    workout_data = workout_volume_series(state, dates)
    calories = diet_series(state, dates)["calories"]

    average_habit_completion = round(sum(habit_data) / len(habit_data)) if habit_data else 0

    logged_calories = [c for c in calories if c > 0]
    average_calories = round(sum(logged_calories) / len(logged_calories)) if logged_calories else 0

    return AnalyticsSummary(
        average_habit_completion=average_habit_completion,
        total_volume=sum(workout_data),
        average_calories=average_calories,
    )
