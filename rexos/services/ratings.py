"""
Ratings Service
Rule-based rating engine for habits, workouts and diet.

Every function here is pure and total: it reads the aggregate (and a date
or list of dates) and returns a Rating. Missing configuration or missing
logs map to a defined low rating with an explanatory message, never to an
exception. Divisions are guarded by short-circuiting to the "not
configured" branch first.

Tier rules:
    Habits / workout:  100 -> excellent, >=80 -> good, >=50 -> warning, else danger
    Diet:              compound conditions on protein % and calorie deviation
                       (first match wins: excellent, good, warning, danger)
    Daily overall:     mean of the three scores; >=90 / >=75 / >=50
    Weekly verdict:    consistency %; >=90 / >=75 / >=50

The daily thresholds (90/75/50) differ from the per-domain ones.
"""

from typing import Sequence

from rexos.core.constants import (
    DIET_EXCELLENT_MAX_CALORIE_DEVIATION,
    DIET_EXCELLENT_PROTEIN_PCT,
    DIET_GOOD_PROTEIN_PCT,
    DIET_WARNING_PROTEIN_PCT,
    DOMAIN_GOOD_THRESHOLD,
    DOMAIN_WARNING_THRESHOLD,
    OVERALL_EXCELLENT_THRESHOLD,
    OVERALL_GOOD_THRESHOLD,
    OVERALL_WARNING_THRESHOLD,
    TIER_DANGER,
    TIER_EXCELLENT,
    TIER_GOOD,
    TIER_WARNING,
    WEEKLY_AVERAGE_THRESHOLD,
    WEEKLY_EXCEPTIONAL_THRESHOLD,
    WEEKLY_STRONG_THRESHOLD,
)
from rexos.core.formatting import format_number
from rexos.schemas.rating import Rating
from rexos.schemas.state import RexState
from rexos.services.meal_service import calculate_diet_totals
from rexos.services.workout_service import planned_exercises, resolve_plan_variant


# ============================================================================
# HABITS
# ============================================================================

def calculate_habit_rating(state: RexState, date: str) -> Rating:
    """
    Share of configured habits completed on `date`.

    The denominator is the current habit list, so a habit added later also
    counts against earlier days.

    Example:
        # 4 of 5 habits completed
        calculate_habit_rating(state, "2024-01-15")
        # Rating(score=80.0, tier="good", message="Doing great. Push for 100% tomorrow.")
    """
    record = state.habit_record_for(date)
    total_habits = len(state.habits)

    if record is None or total_habits == 0:
        return Rating(score=0, tier=TIER_WARNING, message="No habits tracked yet.")

    completed = len(record.completed_habit_ids())
    percentage = min(completed / total_habits * 100, 100.0)

    if percentage == 100:
        return Rating(score=100, tier=TIER_EXCELLENT, message="PERFECT! All habits crushed. Stay aggressive.")
    elif percentage >= DOMAIN_GOOD_THRESHOLD:
        return Rating(score=percentage, tier=TIER_GOOD, message="Doing great. Push for 100% tomorrow.")
    elif percentage >= DOMAIN_WARNING_THRESHOLD:
        return Rating(score=percentage, tier=TIER_WARNING, message="Needs improvement. Discipline requires consistency.")
    else:
        return Rating(score=percentage, tier=TIER_DANGER, message="Unacceptable. Reset. Execute harder tomorrow.")


# ============================================================================
# WORKOUT
# ============================================================================

def calculate_workout_rating(state: RexState, date: str) -> Rating:
    """
    Share of the day's planned exercises with at least one logged set.

    The schedule is picked from the plan type; plans of type "both" use the
    variant recorded on the day's log. A weekday without planned exercises
    is a rest day and always rates 100 / good, whether or not anything was
    logged. An untracked rest day therefore still contributes a full workout
    score to the daily overall rating.

    Volume (sum of reps x weight) only counts plan-derived sets; additional
    exercises are left out here.
    """
    plan = state.workout_plan
    if plan is None:
        return Rating(score=0, tier=TIER_WARNING, message="No workout logged.")

    log = state.workout_log_for(date)
    exercises = planned_exercises(plan, date, resolve_plan_variant(plan, log))
    if not exercises:
        return Rating(score=100, tier=TIER_GOOD, message="Rest day. Recovery is part of the process.")

    if log is None:
        return Rating(score=0, tier=TIER_WARNING, message="No workout logged.")

    completed = sum(1 for e in log.exercises if e.sets)
    percentage = min(completed / len(exercises) * 100, 100.0)
    volume = format_number(log.plan_volume)

    if percentage == 100:
        return Rating(score=100, tier=TIER_EXCELLENT, message=f"EXECUTED! Total volume: {volume}kg. Beast mode.")
    elif percentage >= DOMAIN_GOOD_THRESHOLD:
        return Rating(score=percentage, tier=TIER_GOOD, message=f"Solid session. Volume: {volume}kg. Finish stronger next time.")
    elif percentage >= DOMAIN_WARNING_THRESHOLD:
        return Rating(score=percentage, tier=TIER_WARNING, message=f"Half-effort gets half-results. Volume: {volume}kg. Complete the workout.")
    else:
        return Rating(score=percentage, tier=TIER_DANGER, message=f"Workout incomplete. Volume: {volume}kg. No excuses. Execute fully.")


# ============================================================================
# DIET
# ============================================================================

def calculate_diet_rating(state: RexState, date: str) -> Rating:
    """
    Protein adherence and calorie accuracy of `date`.

    Formula:
        protein_pct         = min(protein / target_protein * 100, 100)
        calorie_deviation   = |calories - target_calories| / target_calories * 100
        score               = 0.5 * protein_pct + 0.5 * max(0, 100 - calorie_deviation)

    The tier is NOT a split of the score. Conditions, first match wins:
        excellent: protein_pct >= 90 and calorie_deviation <= 10
        good:      protein_pct >= 80
        warning:   protein_pct >= 60
        danger:    otherwise

    Example:
        # targets 2000 kcal / 150 g protein, eaten 2050 kcal / 140 g
        # protein_pct = 93.3, deviation = 2.5 -> excellent
    """
    targets = state.diet_targets

    # Zero targets would divide by zero: treat them as not configured
    if targets is None or targets.protein <= 0 or targets.calories <= 0:
        return Rating(score=0, tier=TIER_WARNING, message="Set your diet targets first.")

    log = state.diet_log_for(date)
    if log is None or not log.meals:
        return Rating(score=0, tier=TIER_DANGER, message="No meals logged. Track your nutrition.")

    totals = calculate_diet_totals(log)

    protein_pct = min(totals.protein / targets.protein * 100, 100.0)
    calorie_deviation = abs(totals.calories - targets.calories) / targets.calories * 100

    score = protein_pct * 0.5 + max(0.0, 100 - calorie_deviation) * 0.5
    protein = format_number(totals.protein)

    if protein_pct >= DIET_EXCELLENT_PROTEIN_PCT and calorie_deviation <= DIET_EXCELLENT_MAX_CALORIE_DEVIATION:
        return Rating(score=score, tier=TIER_EXCELLENT, message=f"Nutrition on point. {protein}g protein. Excellent execution.")
    elif protein_pct >= DIET_GOOD_PROTEIN_PCT:
        return Rating(score=score, tier=TIER_GOOD, message=f"{protein}g protein. Close to target. Stay consistent.")
    elif protein_pct >= DIET_WARNING_PROTEIN_PCT:
        return Rating(score=score, tier=TIER_WARNING, message="Diet needs work. Prioritize protein intake.")
    else:
        return Rating(score=score, tier=TIER_DANGER, message="Nutrition failure. Fuel your body properly.")


# ============================================================================
# COMBINED VERDICTS
# ============================================================================

def get_daily_overall_rating(state: RexState, date: str) -> Rating:
    """Unweighted mean of the habit, workout and diet scores."""
    habit_rating = calculate_habit_rating(state, date)
    workout_rating = calculate_workout_rating(state, date)
    diet_rating = calculate_diet_rating(state, date)

    avg_score = (habit_rating.score + workout_rating.score + diet_rating.score) / 3

    if avg_score >= OVERALL_EXCELLENT_THRESHOLD:
        return Rating(score=avg_score, tier=TIER_EXCELLENT, message="DOMINANT DAY. This is who you are. Stay aggressive.")
    elif avg_score >= OVERALL_GOOD_THRESHOLD:
        return Rating(score=avg_score, tier=TIER_GOOD, message="Solid execution. Room for improvement. Push harder.")
    elif avg_score >= OVERALL_WARNING_THRESHOLD:
        return Rating(score=avg_score, tier=TIER_WARNING, message="Mediocre performance. You are capable of more.")
    else:
        return Rating(score=avg_score, tier=TIER_DANGER, message="Unacceptable. Tomorrow is a new battle. Win it.")


def get_weekly_consistency(state: RexState, dates: Sequence[str]) -> float:
    """
    Coarse "did something" percentage over a list of dates.

    Each date earns 0.5 for any completed habit and 0.5 for a workout log
    with at least one exercise entry. Quality does not matter here.

    Returns:
        Percentage 0-100 (0 for an empty list)

    Example:
        # 7 dates, habits on 4 of them, workouts on 3 others
        get_weekly_consistency(state, week)  # (4 * 0.5 + 3 * 0.5) / 7 * 100 = 50.0
    """
    if not dates:
        return 0.0

    completed_days = 0.0
    for date in dates:
        habit_record = state.habit_record_for(date)
        workout_log = state.workout_log_for(date)

        if habit_record is not None and any(l.completed for l in habit_record.logs):
            completed_days += 0.5
        if workout_log is not None and len(workout_log.exercises) > 0:
            completed_days += 0.5

    return completed_days / len(dates) * 100


def get_weekly_verdict(consistency: float) -> str:
    """Banner text for a week's consistency percentage."""
    if consistency >= WEEKLY_EXCEPTIONAL_THRESHOLD:
        return "EXCEPTIONAL WEEK. You executed at an elite level. Maintain this dominance."
    if consistency >= WEEKLY_STRONG_THRESHOLD:
        return "STRONG WEEK. Solid execution across the board. Push for perfection next week."
    if consistency >= WEEKLY_AVERAGE_THRESHOLD:
        return "AVERAGE WEEK. Room for significant improvement. Recommit to the process."
    return "BELOW STANDARD. This is not who you are. Reset and dominate next week."
