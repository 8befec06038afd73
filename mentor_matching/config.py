# mentor_matching/config.py
import os

# Capacity heuristic: each Active connection is assumed to cost this many
# hours per week of the mentor's budget.
HOURS_PER_ACTIVE_CONNECTION = 1.5

# Match scores are whole percentages
MAX_MATCH_SCORE = 100

# Connection ratings (startup_rating / mentor_rating)
RATING_MIN = 1
RATING_MAX = 5

# Defaults for new records
DEFAULT_HOURS_PER_WEEK = 2
DEFAULT_STAGE_PREF = "Any"

# Separator accepted in CSV tag columns when the value is not a JSON array
TAG_SEPARATOR = ";"

# Cohort assignment knobs
MAX_MENTORS_PER_STARTUP_DEFAULT = 1
MIN_COHORT_SCORE_DEFAULT = 1

# Diagnostics
TOP_MENTORS_DEFAULT = 5

# Sample snapshot CSVs (if any); the runner falls back to the built-in
# sample dataset when these don't exist.
MENTORS_CSV_PATH = "data/mentors.csv"
STARTUPS_CSV_PATH = "data/startups.csv"
CONNECTIONS_CSV_PATH = "data/connections.csv"
INTERACTIONS_CSV_PATH = "data/interactions.csv"

# Logging
LOG_LEVEL = os.environ.get("MENTOR_MATCHING_LOG_LEVEL", "INFO")
LOG_FILE = os.environ.get("MENTOR_MATCHING_LOG_FILE") or None
