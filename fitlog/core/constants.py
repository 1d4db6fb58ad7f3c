"""Static constants and defaults for fitlog."""

from __future__ import annotations

APP_NAME = "fitlog"

STORE_FILENAME = "workouts.data"

DATA_DIR_ENV = "FITLOG_DATA_DIR"
CONFIG_FILE_ENV = "FITLOG_CONFIG_FILE"

DEFAULT_DATA_DIR = "~/.local/share/fitlog"
DEFAULT_CONFIG_FILE = "~/.config/fitlog/config.toml"

DEFAULT_WORKOUT_NAME = "New Workout"
DEFAULT_EXERCISE_NAME = "New Exercise"
DEFAULT_LENGTH_IN_MINUTES = 60

# Bounds of the duration picker used when editing a workout.
MIN_LENGTH_IN_MINUTES = 0
MAX_LENGTH_IN_MINUTES = 181

DEFAULT_SET_WEIGHT_IN_KG = 60.0
DEFAULT_SET_REPS = 8
DEFAULT_SET_REST_IN_SECONDS = 120

DATE_FORMAT = "%Y-%m-%d %H:%M"
