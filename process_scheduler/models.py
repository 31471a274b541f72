from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class Process:
    pid: int
    burst_time: int
    arrival_time: int
    priority: int = 0


@dataclass(frozen=True)
class TimeSlice:
    """
    One contiguous slice of execution for a process in the Gantt chart.
    """

    pid: int
    start_time: int
    end_time: int

    @property
    def duration(self) -> int:
        return self.end_time - self.start_time


@dataclass
class ProcessResult:
    pid: int
    arrival_time: int
    burst_time: int
    priority: int
    waiting_time: int
    turnaround_time: int
    completion_time: int


@dataclass
class ScenarioMetrics:
    average_wait: float
    average_turnaround: float
    last_completion: int
    # None when the last completion time is zero (throughput undefined).
    throughput: Optional[float] = None


@dataclass
class ScheduleResult:
    algorithm: str
    quantum: Optional[int]
    processes: List[ProcessResult] = field(default_factory=list)
    timeline: List[TimeSlice] = field(default_factory=list)
    metrics: Optional[ScenarioMetrics] = None
