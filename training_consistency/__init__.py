"""
Training Consistency - Exercise Consistency Scoring

Turns a user's exercise-session records into a bounded, explainable
consistency score (0-100) over a rolling 28-day UTC window, together with
human-readable explanations and a dense daily series for charting.
"""

__version__ = "0.1.0"
