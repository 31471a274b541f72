import pytest

from process_scheduler.metrics import aggregate_metrics, build_results, clamp_wait, summarize
from process_scheduler.models import Process, ProcessResult, ScenarioMetrics


def _row(pid, burst, wait, completion):
    return ProcessResult(
        pid=pid,
        arrival_time=0,
        burst_time=burst,
        priority=0,
        waiting_time=wait,
        turnaround_time=burst + wait,
        completion_time=completion,
    )


def test_clamp_wait_never_negative():
    p = Process(1, burst_time=5, arrival_time=4)
    assert clamp_wait(12, p) == 3
    assert clamp_wait(6, p) == 0


def test_build_results_turnaround_is_burst_plus_wait():
    procs = [Process(1, burst_time=3, arrival_time=0), Process(2, burst_time=2, arrival_time=1)]
    rows = build_results(procs, waiting=[0, 2], completion=[3, 5])
    assert [r.turnaround_time for r in rows] == [3, 4]
    assert [r.pid for r in rows] == [1, 2]


def test_throughput_uses_latest_completion_not_last_row():
    rows = [_row(1, 10, 0, 10), _row(2, 2, 0, 2)]
    metrics = aggregate_metrics(rows)
    assert metrics.last_completion == 10
    assert metrics.throughput == pytest.approx(0.2)
    assert metrics.average_turnaround == 6.0


def test_zero_last_completion_reports_no_throughput():
    metrics = aggregate_metrics([_row(1, 0, 0, 0)])
    assert metrics.throughput is None


def test_empty_results():
    metrics = aggregate_metrics([])
    assert metrics.average_wait == 0.0
    assert metrics.throughput is None


def test_summarize_formats_values():
    summary = summarize(ScenarioMetrics(average_wait=17.0, average_turnaround=27.0, last_completion=30, throughput=0.1))
    assert summary == {"avg_waiting": "17.00", "avg_turnaround": "27.00", "throughput": "0.10/t"}
    assert summarize(ScenarioMetrics(0.0, 0.0, 0))["throughput"] == "n/a"
