"""
Recording lifecycle state machine.

States: idle -> recording -> (paused <-> recording) -> stopped -> idle

Kept free of Streamlit so it can live in ``st.session_state`` and be
unit-tested directly. Time comes from an injectable monotonic clock.
"""

import time
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import StrEnum


class RecorderStatus(StrEnum):
    """Possible states for the client-side recorder."""

    idle = "idle"
    recording = "recording"
    paused = "paused"
    stopped = "stopped"


class InvalidTransitionError(Exception):
    """Raised when an action is not allowed in the current state."""

    def __init__(self, action: str, status: RecorderStatus) -> None:
        self.action = action
        self.status = status
        super().__init__(f"Cannot {action} while {status.value}")


@dataclass
class Recorder:
    """Client recorder: lifecycle, elapsed time and the finalized blob.

    Elapsed time only accrues while recording; it is reported in whole
    seconds so the UI ticks once per second.
    """

    clock: Callable[[], float] = time.monotonic
    status: RecorderStatus = RecorderStatus.idle
    blob: bytes | None = None
    _accumulated: float = field(default=0.0, repr=False)
    _segment_start: float | None = field(default=None, repr=False)

    def _require(self, action: str, *allowed: RecorderStatus) -> None:
        if self.status not in allowed:
            raise InvalidTransitionError(action, self.status)

    def start(self) -> None:
        self._require("start", RecorderStatus.idle)
        self.blob = None
        self._accumulated = 0.0
        self._segment_start = self.clock()
        self.status = RecorderStatus.recording

    def pause(self) -> None:
        self._require("pause", RecorderStatus.recording)
        self._accumulated += self.clock() - self._segment_start
        self._segment_start = None
        self.status = RecorderStatus.paused

    def resume(self) -> None:
        self._require("resume", RecorderStatus.paused)
        self._segment_start = self.clock()
        self.status = RecorderStatus.recording

    def toggle_pause(self) -> None:
        if self.status == RecorderStatus.paused:
            self.resume()
        else:
            self.pause()

    def stop(self, blob: bytes) -> None:
        """Finalize the recording with the captured audio."""
        self._require("stop", RecorderStatus.recording, RecorderStatus.paused)
        if self._segment_start is not None:
            self._accumulated += self.clock() - self._segment_start
            self._segment_start = None
        self.blob = blob
        self.status = RecorderStatus.stopped

    def reset(self) -> None:
        self.status = RecorderStatus.idle
        self.blob = None
        self._accumulated = 0.0
        self._segment_start = None

    @property
    def is_active(self) -> bool:
        return self.status in (RecorderStatus.recording, RecorderStatus.paused)

    def elapsed_seconds(self) -> int:
        running = 0.0
        if self._segment_start is not None:
            running = self.clock() - self._segment_start
        return int(self._accumulated + running)


def format_elapsed(seconds: int) -> str:
    """Render seconds as ``MM:SS``."""
    minutes, secs = divmod(max(seconds, 0), 60)
    return f"{minutes:02d}:{secs:02d}"


class UploadGuard:
    """Non-reentrant "loading" flag around an upload.

    ``begin()`` returns False when an upload is already in flight so the
    caller can ignore the duplicate action.
    """

    def __init__(self) -> None:
        self.loading = False

    def begin(self) -> bool:
        if self.loading:
            return False
        self.loading = True
        return True

    def end(self) -> None:
        self.loading = False
