from __future__ import annotations

from typing import List, Optional

from .models import Process, TimeSlice


class TimelineRecorder:
    """
    Accumulates the ordered execution slices of a single policy run.

    Tick-driven policies keep one slice "open" for the currently selected
    process and close it whenever the selection changes or the CPU idles.
    Quantum-driven policies append finished slices directly via ``record``.
    """

    def __init__(self) -> None:
        self.slices: List[TimeSlice] = []
        self._open: Optional[Process] = None
        self._open_start = 0

    @property
    def open_process(self) -> Optional[Process]:
        return self._open

    def switch(self, process: Process, tick: int) -> None:
        """Make ``process`` the running one as of ``tick``."""
        # Identity, not equality: two input rows may carry identical fields.
        if self._open is process:
            return
        self.close(tick)
        self._open = process
        self._open_start = tick

    def close(self, tick: int) -> None:
        """Close the open slice (if any) at ``tick``."""
        if self._open is None:
            return
        if tick > self._open_start:
            self.record(self._open, self._open_start, tick)
        self._open = None

    def record(self, process: Process, start_time: int, end_time: int) -> None:
        self.slices.append(TimeSlice(pid=process.pid, start_time=start_time, end_time=end_time))
