"""
RexOS
Personal discipline tracker: daily habits, workouts, meals and notes,
rated per day and summarized per week.

Usage:
    from rexos.main import create_app

    app = create_app()
    app.dispatch(...)
"""

__version__ = "1.0.0"
