from typing import Final

# Persisted key holding the ISO-8601 time of the last successful display
STORAGE_KEY: Final = "spn_last_shown"

# Timestamp shown under generated messages
JUST_NOW: Final = "Just now"

# Placeholder inside timeframe phrases replaced by a random number
NUMBER_PLACEHOLDER: Final = "X"
NUMBER_RANGE: Final = (2, 9)

SAMPLE_ACTIONS: Final = (
    "bought this",
    "joined the program",
    "enrolled",
    "got access",
    "completed their purchase",
    "signed up",
    "started their journey",
    "secured their spot",
)

SAMPLE_TIMEFRAMES: Final = (
    "in the last hour",
    "recently",
    "X minutes ago",
    "in the last X hours",
)

SAMPLE_COUNTS: Final = ("Two", "Three", "Four", "Five", "Six", "Seven", "Eight")

DEFAULT_MESSAGE_FORMAT: Final = "{count} people {action} {timeframe}!"

# Preview output
PREVIEW_DIR: Final = "preview"
PREVIEW_HTML_NAME: Final = "notification-preview.html"
