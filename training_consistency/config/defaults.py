"""
Default Configuration

Centralized defaults for the consistency scoring engine.
"""

from pathlib import Path

# Storage
DEFAULT_DB_DIR = Path.home() / ".training_consistency"
DEFAULT_DB_PATH = DEFAULT_DB_DIR / "consistency.db"

# Scoring window
WINDOW_DAYS = 28
DAYS_PER_WEEK = 7

# Component point budgets (sum = 100)
FREQUENCY_POINTS = 50
GAP_POINTS = 25
DISTRIBUTION_POINTS = 15
INTENSITY_POINTS = 10

# Gap component: full credit up to this many idle days, none from the next
GAP_FULL_CREDIT_DAYS = 3
GAP_ZERO_CREDIT_DAYS = 14

# Intensity component: sessions per active day
INTENSITY_FLOOR_RATIO = 1.0
INTENSITY_CEILING_RATIO = 2.0

# Explanations
HIGH_INTENSITY_RATIO = 1.4
GREAT_VARIETY_WEEKDAYS = 6
GOOD_SPREAD_WEEKDAYS = 4

# Request validation
MAX_FUTURE_DAYS = 7
MAX_PAST_YEARS = 1

# Store maintenance: covers a year of reference dates plus one window
RETENTION_DAYS = 400

# Output
DEFAULT_FORMAT = "text"
