"""
Application-wide constants.
"""
from pathlib import Path

# Application name, used for the default log file
DEFAULT_APP_NAME = "fitness"

# File paths
DEFAULT_PRESET_FILE = Path("fitness.yml")
DEFAULT_STATE_FILE = Path("fitness_state.yml")
DEFAULT_LOG_DIR = Path("logs")

# Environment variables
PRESET_PATH_ENV = "FITNESS_PRESET"

# Log rotation
LOG_MAX_BYTES = 10 * 1024 * 1024
LOG_BACKUP_COUNT = 5

# Display formats
DATE_FORMAT = "%Y/%m/%d %H:%M"
TIME_FORMAT = "%H:%M"

# Version used when pyproject.toml can't be read
FALLBACK_VERSION = "0.1.0"
