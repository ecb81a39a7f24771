"""UI configuration constants.

Centralizes magic numbers, log levels and log styling for the UI module.
"""

from enum import IntEnum


class LogLevel(IntEnum):
    """Log panel threshold, ordered from most to least verbose.

    Debug callbacks pass levels as lowercase strings ("debug", "info",
    "warning", "error"); from_string() maps them onto this scale.
    """

    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40

    @classmethod
    def from_string(cls, value: str) -> "LogLevel":
        """Parse a level name. Unknown names fall back to DEBUG."""
        key = value.strip().upper()
        if key == "WARN":
            key = "WARNING"
        return cls.__members__.get(key, cls.DEBUG)


# Rich styles per log level and per emitting component
LOG_LEVEL_STYLES = {
    LogLevel.DEBUG: "dim white",
    LogLevel.INFO: "cyan",
    LogLevel.WARNING: "yellow",
    LogLevel.ERROR: "red",
}
LOG_COMPONENT_STYLES = {
    "TUI": "cyan",
    "CORE": "green",   # Turn controller and transcript
    "LLM": "magenta",  # Completion client and HTTP exchange
}

# Input history configuration
INPUT_HISTORY_MAX_SIZE = 100  # Maximum entries in input history

# Log panel configuration
LOG_TIMESTAMP_FORMAT = "%H:%M:%S"
LOG_MAX_MESSAGE_LENGTH = 500  # Raw provider responses are cut here

# Chat display configuration
MESSAGE_TIMESTAMP_FORMAT = "%H:%M:%S"
SEND_LABEL = "Send"
SENDING_LABEL = "Sending..."
