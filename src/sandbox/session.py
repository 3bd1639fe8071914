"""Preview session lifecycle on the host side."""

import threading
import time
from dataclasses import dataclass
from enum import Enum

from core import get_logger
from .compiler import PreviewCompiler

logger = get_logger(__name__)


class PreviewState(str, Enum):
    IDLE = "idle"
    COMPILING = "compiling"
    MOUNTED = "mounted"
    COMPILE_ERROR = "compile_error"
    RUNTIME_ERROR = "runtime_error"


_REPORTABLE = {PreviewState.MOUNTED, PreviewState.COMPILE_ERROR, PreviewState.RUNTIME_ERROR}

# Transitions accepted from document status reports
_TRANSITIONS: dict[PreviewState, set[PreviewState]] = {
    PreviewState.IDLE: set(),
    PreviewState.COMPILING: _REPORTABLE,
    PreviewState.MOUNTED: {PreviewState.RUNTIME_ERROR},
    PreviewState.COMPILE_ERROR: set(),
    PreviewState.RUNTIME_ERROR: set(),
}


@dataclass(frozen=True)
class PreviewLoad:
    """A document handed to the host for one render generation."""

    generation: int
    document: str


class PreviewSession:
    """
    Tracks one preview surface.

    Each ``load`` fully replaces the document and bumps the generation;
    status reports carrying an older generation are ignored.
    """

    def __init__(
        self,
        compiler: PreviewCompiler | None = None,
        watchdog_seconds: float | None = None,
        clock=time.monotonic,
    ):
        self.compiler = compiler or PreviewCompiler()
        self.watchdog_seconds = watchdog_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self.state = PreviewState.IDLE
        self.generation = 0
        self.message = ""
        self._started_at: float | None = None

    def load(self, source: str) -> PreviewLoad:
        """Compile ``source`` into a new document and enter COMPILING."""
        with self._lock:
            self.generation += 1
            generation = self.generation
            self.state = PreviewState.COMPILING
            self.message = ""
            self._started_at = self._clock()

        document = self.compiler.compile(source, generation)
        logger.debug("preview_loaded", generation=generation)
        return PreviewLoad(generation=generation, document=document)

    def report(self, generation: int, state: PreviewState | str, message: str = "") -> bool:
        """
        Apply a status report posted by a document.

        Returns:
            True when the report changed the session state
        """
        try:
            new_state = PreviewState(state)
        except ValueError:
            logger.warning("preview_report_unknown_state", state=state)
            return False

        with self._lock:
            if generation != self.generation:
                logger.debug("preview_report_stale", generation=generation, current=self.generation)
                return False
            if new_state not in _TRANSITIONS[self.state]:
                return False
            self.state = new_state
            self.message = message

        if new_state is not PreviewState.MOUNTED:
            logger.info("preview_failed", state=new_state.value, message=message, generation=generation)
        return True

    def check_watchdog(self, now: float | None = None) -> bool:
        """
        Fail a render stuck in COMPILING for longer than the watchdog allows.

        Returns:
            True when the host should tear the document down
        """
        if not self.watchdog_seconds:
            return False
        now = self._clock() if now is None else now
        with self._lock:
            if self.state is not PreviewState.COMPILING or self._started_at is None:
                return False
            if now - self._started_at < self.watchdog_seconds:
                return False
            self.state = PreviewState.RUNTIME_ERROR
            self.message = f"Preview timed out after {self.watchdog_seconds:g}s"
            generation = self.generation

        logger.warning("preview_watchdog_fired", generation=generation)
        return True

    def reset(self) -> None:
        """Drop the current document and return to IDLE."""
        with self._lock:
            self.state = PreviewState.IDLE
            self.message = ""
            self._started_at = None
