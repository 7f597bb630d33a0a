"""
Application Constants
Defines constant values used throughout the application.

This module contains all application-wide constants including:
- Rating tiers and score thresholds
- Weekday names
- Registration wizard steps
- Analytics time filters
- Registration presets
"""

# Rating Tiers
TIER_EXCELLENT = "excellent"  # Everything done
TIER_GOOD = "good"  # Close to target
TIER_WARNING = "warning"  # Needs improvement, or nothing tracked yet
TIER_DANGER = "danger"  # Well below target

# Per-domain rating thresholds (habits, workout)
DOMAIN_GOOD_THRESHOLD = 80.0
DOMAIN_WARNING_THRESHOLD = 50.0

# Diet tier conditions (evaluated in order, first match wins)
DIET_EXCELLENT_PROTEIN_PCT = 90.0
DIET_EXCELLENT_MAX_CALORIE_DEVIATION = 10.0
DIET_GOOD_PROTEIN_PCT = 80.0
DIET_WARNING_PROTEIN_PCT = 60.0

# Daily overall rating thresholds (on the mean of the three domain scores)
OVERALL_EXCELLENT_THRESHOLD = 90.0
OVERALL_GOOD_THRESHOLD = 75.0
OVERALL_WARNING_THRESHOLD = 50.0

# Weekly verdict thresholds (on the consistency percentage)
WEEKLY_EXCEPTIONAL_THRESHOLD = 90.0
WEEKLY_STRONG_THRESHOLD = 75.0
WEEKLY_AVERAGE_THRESHOLD = 50.0

# Weekdays, indexed like date.weekday() (Monday == 0)
WEEKDAYS = [
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
]

# Registration Wizard Steps
STEP_PROFILE = 1
STEP_HABITS = 2
STEP_WORKOUT = 3
STEP_DIET = 4

REGISTRATION_STEPS = {
    STEP_PROFILE: "Profile",
    STEP_HABITS: "Habits",
    STEP_WORKOUT: "Workout",
    STEP_DIET: "Diet",
}

# Analytics Time Filters (number of days, ending today)
TIME_FILTER_DAYS = {
    "day": 1,
    "week": 7,
    "month": 30,
    "6months": 180,
    "year": 365,
}

# BMI Categories (upper bound exclusive, label)
BMI_CATEGORIES = [
    (18.5, "Underweight"),
    (25.0, "Normal"),
    (30.0, "Overweight"),
]
BMI_TOP_CATEGORY = "Obese"

# Preset Habits offered at registration (name, icon, description)
PRESET_HABITS = [
    ("Sleep 7-8 Hours", "🌙", "Quality sleep for recovery and mental clarity"),
    ("Drink Water", "💧", "Stay hydrated - minimum 2-3 liters daily"),
    ("Reading", "📖", "Read for at least 30 minutes daily"),
    ("Meditation", "🧘", "Practice mindfulness for 10-20 minutes"),
    ("Workout", "💪", "Complete your daily training session"),
    ("Journaling", "📝", "Reflect on your day and set intentions"),
    ("Cold Shower", "🥶", "Start or end your day with cold exposure"),
    ("No Social Media", "📵", "Limit mindless scrolling"),
    ("Walk 10k Steps", "🚶", "Stay active throughout the day"),
    ("Healthy Eating", "🥗", "Follow your nutrition plan strictly"),
]

# Report Export
REPORT_FILENAME_PREFIX = "RexOS_Weekly_Report_"
