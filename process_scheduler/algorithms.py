from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence

from .metrics import aggregate_metrics, build_results, clamp_wait
from .models import Process, ScheduleResult
from .timeline import TimelineRecorder

logger = logging.getLogger(__name__)

# Round Robin time slice. Fixed; not exposed as an option.
QUANTUM = 1


@dataclass
class SimulationState:
    """
    Working state owned by a single policy invocation.

    Every run allocates its own remaining/waiting/completion arrays so the
    shared input list is never mutated and runs never observe each other.
    """

    processes: Sequence[Process]
    tick: int = 0
    completed: int = 0
    # Index of the process that ran on the previous tick; cleared on completion.
    running: Optional[int] = None
    remaining: List[int] = field(init=False)
    waiting: List[int] = field(init=False)
    completion: List[int] = field(init=False)
    recorder: TimelineRecorder = field(default_factory=TimelineRecorder)

    def __post_init__(self) -> None:
        for p in self.processes:
            if p.burst_time <= 0:
                raise ValueError(f"Process {p.pid} has non-positive burst time {p.burst_time}")
        n = len(self.processes)
        self.remaining = [p.burst_time for p in self.processes]
        self.waiting = [0] * n
        self.completion = [0] * n

    @property
    def done(self) -> bool:
        return self.completed == len(self.processes)

    def eligible(self, index: int) -> bool:
        return self.processes[index].arrival_time <= self.tick and self.remaining[index] > 0

    def finish(self, index: int, completion_time: int) -> None:
        self.completion[index] = completion_time
        self.waiting[index] = clamp_wait(completion_time, self.processes[index])
        self.completed += 1
        if self.running == index:
            self.running = None


def _finalize(title: str, state: SimulationState, quantum: Optional[int] = None) -> ScheduleResult:
    processes = build_results(state.processes, state.waiting, state.completion)
    result = ScheduleResult(
        algorithm=title,
        quantum=quantum,
        processes=processes,
        timeline=list(state.recorder.slices),
        metrics=aggregate_metrics(processes),
    )
    logger.debug(
        "%s finished at t=%d with %d slices",
        title,
        result.metrics.last_completion,
        len(result.timeline),
    )
    return result


def schedule_fcfs(processes: List[Process]) -> ScheduleResult:
    """
    First-Come First-Serve (non-preemptive), strictly in input order.

    The clock starts at 0, so the first process never waits: if it arrives
    later the CPU idles until its arrival and it starts then. Later processes
    wait for whatever is left of the running service time, and the CPU idles
    over any gap before a later arrival.
    """
    state = SimulationState(list(processes))

    for i, p in enumerate(state.processes):
        waiting_time = max(0, state.tick - p.arrival_time)
        start_time = p.arrival_time + waiting_time
        end_time = start_time + p.burst_time

        state.recorder.record(p, start_time, end_time)
        state.remaining[i] = 0
        state.tick = end_time
        state.finish(i, end_time)

    return _finalize("First-come, first-serve", state)


def _run_preemptive(
    title: str,
    processes: List[Process],
    key: Callable[[SimulationState, int], int],
) -> ScheduleResult:
    """
    Tick-by-tick preemptive simulation shared by SJF and Priority.

    Each tick the eligible process with the smallest ``key`` runs for one
    time unit. The search starts from the running process and only moves on
    a strictly smaller key, so an equal key never preempts it; among
    challengers the earliest in input order wins. The search resets when the
    running process completes.
    """
    state = SimulationState(list(processes))
    recorder = state.recorder

    while not state.done:
        selected = state.running
        for i in range(len(state.processes)):
            if not state.eligible(i):
                continue
            if selected is None or key(state, i) < key(state, selected):
                selected = i

        if selected is None:
            # Nothing has arrived yet: idle tick, no slice.
            recorder.close(state.tick)
            state.tick += 1
            continue

        state.running = selected
        recorder.switch(state.processes[selected], state.tick)

        state.remaining[selected] -= 1
        if state.remaining[selected] == 0:
            state.finish(selected, state.tick + 1)

        state.tick += 1

    recorder.close(state.tick)
    return _finalize(title, state)


def schedule_sjf(processes: List[Process]) -> ScheduleResult:
    """
    Shortest Job First (preemptive, shortest remaining time).
    """
    return _run_preemptive(
        "Shortest-job-first",
        processes,
        key=lambda state, i: state.remaining[i],
    )


def schedule_sjf_priority(processes: List[Process]) -> ScheduleResult:
    """
    Preemptive priority scheduling. Lower numeric priority value means higher
    priority. With no priorities given every process ties: the running process is
    never preempted, and the next pick is the earliest arrived in input order.
    """
    return _run_preemptive(
        "Priority",
        processes,
        key=lambda state, i: state.processes[i].priority,
    )


def schedule_rr(processes: List[Process]) -> ScheduleResult:
    """
    Round Robin with a fixed quantum of one time unit.

    A pointer cycles through the processes in input order, skipping those
    that have not arrived or are already done. After a full cycle of skips
    the CPU idles for one tick and scanning restarts from the first process.
    Each quantum becomes its own slice in the timeline.
    """
    state = SimulationState(list(processes))
    count = len(state.processes)

    turn = 0
    skipped = 0
    while not state.done:
        if not state.eligible(turn):
            turn = (turn + 1) % count
            skipped += 1
            if skipped == count:
                state.tick += 1
                skipped = 0
                turn = 0
            continue

        skipped = 0
        p = state.processes[turn]
        run_time = min(QUANTUM, state.remaining[turn])
        slice_start = state.tick

        state.tick += run_time
        state.remaining[turn] -= run_time
        state.recorder.record(p, slice_start, state.tick)

        if state.remaining[turn] == 0:
            state.finish(turn, state.tick)

        turn = (turn + 1) % count

    return _finalize("Round-robin", state, quantum=QUANTUM)


ALGORITHMS: Dict[str, Callable[[List[Process]], ScheduleResult]] = {
    "fcfs": schedule_fcfs,
    "sjf": schedule_sjf,
    "priority": schedule_sjf_priority,
    "rr": schedule_rr,
}


def run_algorithm(name: str, processes: List[Process]) -> ScheduleResult:
    """
    Dispatch to the requested algorithm by short name.
    """
    name = name.lower()
    if name not in ALGORITHMS:
        raise ValueError(f"Unknown algorithm '{name}'")

    func = ALGORITHMS[name]
    return func(processes)


def run_all(processes: List[Process]) -> List[ScheduleResult]:
    """
    Run every policy independently against the same process list, in
    FCFS, SJF, Priority, Round Robin order.
    """
    return [run_algorithm(name, processes) for name in ALGORITHMS]
