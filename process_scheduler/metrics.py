from __future__ import annotations

from typing import List, Sequence

from .models import Process, ProcessResult, ScenarioMetrics


def clamp_wait(completion_time: int, process: Process) -> int:
    """
    Waiting time derived from completion, burst and arrival.

    A negative value can only come from ordering edge cases and is clamped to
    zero rather than reported.
    """
    return max(0, completion_time - process.burst_time - process.arrival_time)


def build_results(
    processes: Sequence[Process],
    waiting: Sequence[int],
    completion: Sequence[int],
) -> List[ProcessResult]:
    """
    Assemble per-process rows (in input order) from a policy's working arrays.
    """
    return [
        ProcessResult(
            pid=p.pid,
            arrival_time=p.arrival_time,
            burst_time=p.burst_time,
            priority=p.priority,
            waiting_time=waiting[i],
            turnaround_time=p.burst_time + waiting[i],
            completion_time=completion[i],
        )
        for i, p in enumerate(processes)
    ]


def aggregate_metrics(results: Sequence[ProcessResult]) -> ScenarioMetrics:
    """
    Compute average wait, average turnaround and throughput for one run.

    Throughput is ``count / last_completion`` where ``last_completion`` is the
    latest completion time observed, not the completion of the last process
    in input order. It is reported as ``None`` when that denominator is zero.
    """
    if not results:
        return ScenarioMetrics(average_wait=0.0, average_turnaround=0.0, last_completion=0, throughput=None)

    n = len(results)
    last_completion = max(r.completion_time for r in results)
    throughput = n / last_completion if last_completion > 0 else None

    return ScenarioMetrics(
        average_wait=sum(r.waiting_time for r in results) / n,
        average_turnaround=sum(r.turnaround_time for r in results) / n,
        last_completion=last_completion,
        throughput=throughput,
    )


def summarize(metrics: ScenarioMetrics) -> dict:
    """
    Return the scenario averages as display-ready strings.
    """
    throughput = "n/a" if metrics.throughput is None else f"{metrics.throughput:.2f}/t"
    return {
        "avg_waiting": f"{metrics.average_wait:.2f}",
        "avg_turnaround": f"{metrics.average_turnaround:.2f}",
        "throughput": throughput,
    }
