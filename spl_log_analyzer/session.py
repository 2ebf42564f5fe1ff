"""
Analysis session state machine.

Front ends (dashboard, CLI, notebook) drive one log at a time through four
states:

    IDLE --select--> ANALYZING --success--> COMPLETE
                         |
                         +----failure--> ERROR

COMPLETE and ERROR accept a new selection; reset returns to IDLE from
anywhere. Any other event raises InvalidTransitionError.
"""

from enum import Enum
from typing import Dict, Optional, Tuple

from .analyzer import analyze_content
from .config import DEFAULT_CONFIG, AnalyzerConfig
from .exceptions import InvalidTransitionError, NoValidDataError
from .filename_meta import extract_file_metadata
from .models import LoadedLog


class SessionState(str, Enum):
    IDLE = "idle"
    ANALYZING = "analyzing"
    COMPLETE = "complete"
    ERROR = "error"


class SessionEvent(str, Enum):
    SELECT = "select"
    SUCCESS = "success"
    FAILURE = "failure"
    RESET = "reset"


_TRANSITIONS: Dict[Tuple[SessionState, SessionEvent], SessionState] = {
    (SessionState.IDLE, SessionEvent.SELECT): SessionState.ANALYZING,
    (SessionState.COMPLETE, SessionEvent.SELECT): SessionState.ANALYZING,
    (SessionState.ERROR, SessionEvent.SELECT): SessionState.ANALYZING,
    (SessionState.ANALYZING, SessionEvent.SUCCESS): SessionState.COMPLETE,
    (SessionState.ANALYZING, SessionEvent.FAILURE): SessionState.ERROR,
}


class AnalysisSession:
    """Holds the state, result and error message for one analysis at a time."""

    def __init__(self, config: AnalyzerConfig = DEFAULT_CONFIG):
        self.config = config
        self.state = SessionState.IDLE
        self.result: Optional[LoadedLog] = None
        self.error: Optional[str] = None

    def _fire(self, event: SessionEvent) -> SessionState:
        if event is SessionEvent.RESET:
            self.state = SessionState.IDLE
            return self.state
        nxt = _TRANSITIONS.get((self.state, event))
        if nxt is None:
            raise InvalidTransitionError(self.state.value, event.value)
        self.state = nxt
        return self.state

    def begin(self) -> None:
        """A file was selected; clears any previous result or error."""
        self._fire(SessionEvent.SELECT)
        self.result = None
        self.error = None

    def complete(self, result: LoadedLog) -> None:
        self._fire(SessionEvent.SUCCESS)
        self.result = result

    def fail(self, message: str) -> None:
        self._fire(SessionEvent.FAILURE)
        self.error = message

    def reset(self) -> None:
        self._fire(SessionEvent.RESET)
        self.result = None
        self.error = None

    def select_file(self, file_name: str, content: str) -> SessionState:
        """
        Analyze ``content`` as the log named ``file_name``.

        A log with no usable data moves the session to ERROR with the
        message kept in ``self.error``; it is not re-raised.
        """
        self.begin()
        try:
            parsed = analyze_content(content, self.config)
        except NoValidDataError as e:
            self.fail(str(e))
            return self.state

        self.complete(LoadedLog(
            file_name=file_name,
            metadata=extract_file_metadata(file_name),
            parsed=parsed,
        ))
        return self.state
