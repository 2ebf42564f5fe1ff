"""Exceptions raised by the SPL log analyzer."""


class SplAnalyzerError(Exception):
    """Base class for all analyzer errors."""


class NoValidDataError(SplAnalyzerError, ValueError):
    """No line of the input produced a usable (timestamp, level) pair."""

    DEFAULT_MESSAGE = (
        "No valid SPL data found. Please ensure the file is a text log "
        "containing timestamps (HH:MM:SS) and valid dB values."
    )

    def __init__(self, message: str = DEFAULT_MESSAGE):
        super().__init__(message)


class ConfigError(SplAnalyzerError):
    """Configuration file is missing, malformed, or inconsistent."""


class InvalidTransitionError(SplAnalyzerError):
    """An analysis session was asked for a state change it does not allow."""

    def __init__(self, current: str, event: str):
        super().__init__(f"Cannot handle '{event}' while session is {current}")
        self.current = current
        self.event = event
